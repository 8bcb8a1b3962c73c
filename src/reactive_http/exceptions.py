"""
HTTP 客户端异常模块

定义客户端相关的异常类。传输层异常（httpx）和解码异常（pydantic）保持原样向上传播，
这里只定义客户端自身产生的错误
"""

from __future__ import annotations

import httpx


class ReactiveHttpClientError(Exception):
    """
    客户端异常基类

    所有自定义异常的基类，用于统一捕获客户端自身产生的错误
    """


class HttpRequestFailedException(ReactiveHttpClientError):
    """
    HTTP 错误状态异常

    当服务器返回 4xx 或 5xx 状态码时抛出此异常，响应体不会被解码

    参数:
        message: 错误描述信息
        status_code: HTTP 状态码
        response: 原始的 httpx.Response 对象（可选，响应体未读取）

    属性:
        status_code: HTTP 状态码
        response: 保存原始响应对象，便于获取状态行和响应头
    """

    def __init__(self, message: str, status_code: int, response: httpx.Response | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class ClientConfigurationError(ReactiveHttpClientError):
    """
    配置异常

    当客户端构造参数或配置项无效时抛出此异常，属于编程错误，在构造阶段立即失败
    """


class ResponseTimeoutError(ReactiveHttpClientError, httpx.TimeoutException):
    """
    响应超时异常

    当整个请求/响应交换超过 response_timeout_in_millis 时抛出。
    同时继承 httpx.TimeoutException，调用方可以统一捕获四类超时

    参数:
        message: 错误描述信息
        request: 超时的 httpx.Request 对象
    """

    def __init__(self, message: str, *, request: httpx.Request):
        httpx.TimeoutException.__init__(self, message, request=request)
