"""响应状态分类模块

在解码响应体之前根据状态码判断本次请求是否失败：4xx 和 5xx 视为失败，其余状态码放行
"""

from __future__ import annotations

from dataclasses import dataclass

from reactive_http.constants import (
    CLIENT_ERROR_STATUS_RANGE,
    ERROR_STATUS_MESSAGE_TEMPLATE,
    SERVER_ERROR_STATUS_RANGE,
)


@dataclass(frozen=True)
class StatusOutcome:
    """
    状态码分类结果

    属性:
        passed: True 表示继续解码响应体，False 表示请求失败
        message: 失败时的错误描述，放行时为 None
    """

    passed: bool
    message: str | None = None


PASS = StatusOutcome(passed=True)


def is_error_status(status_code: int) -> bool:
    return status_code in CLIENT_ERROR_STATUS_RANGE or status_code in SERVER_ERROR_STATUS_RANGE


def classify(status_code: int) -> StatusOutcome:
    """
    对响应状态码进行分类

    参数:
        status_code: HTTP 状态码

    返回:
        StatusOutcome，4xx/5xx 返回带错误信息的失败结果，其余返回 PASS

    示例:
        >>> classify(404)
        StatusOutcome(passed=False, message='Client returned 404 status code')
        >>> classify(302).passed
        True
    """
    if is_error_status(status_code):
        return StatusOutcome(passed=False, message=ERROR_STATUS_MESSAGE_TEMPLATE % status_code)
    return PASS
