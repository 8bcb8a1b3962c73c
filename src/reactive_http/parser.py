"""
响应解析器模块

提供多种响应解析器，把已读取的 httpx.Response 解码为调用方指定的目标类型
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any

import httpx
from pydantic import TypeAdapter

logger = logging.getLogger(__name__)

NO_CONTENT_TYPES = (None, type(None))


@lru_cache(maxsize=256)
def _type_adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def get_type_adapter(response_type: Any) -> TypeAdapter:
    """
    获取目标类型的 TypeAdapter，可哈希的类型会被缓存

    异常:
        pydantic.PydanticSchemaGenerationError: 目标类型无法绑定时抛出，按解码错误处理
    """
    try:
        hash(response_type)
    except TypeError:
        # 不可哈希的类型描述无法缓存
        return TypeAdapter(response_type)
    return _type_adapter(response_type)


class BaseResponseParser(ABC):
    """响应解析器基类，定义把 httpx.Response 解码为目标类型的接口。"""

    @abstractmethod
    def parse(self, response: httpx.Response, response_type: Any) -> Any:
        """
        解析响应

        参数:
            response: 响应体已读取完毕的 httpx.Response
            response_type: 目标类型描述，None 表示不期望响应内容

        返回:
            目标类型的值
        """


class JSONResponseParser(BaseResponseParser):
    """
    使用 pydantic 把 JSON 响应体解码为目标类型

    支持 pydantic 模型、dataclass、TypedDict、内置容器及其泛型（如 list[int]）。
    目标类型为 None 或响应体为空（如 204）时不解码，直接返回 None
    """

    def parse(self, response: httpx.Response, response_type: Any) -> Any:
        if response_type in NO_CONTENT_TYPES:
            logger.debug("No content expected, skipping body decoding")
            return None
        if not response.content:
            logger.debug("Empty response body, skipping body decoding")
            return None
        logger.debug(f"Parsing response as JSON into {response_type!r}")
        return get_type_adapter(response_type).validate_json(response.content)


class ContentResponseParser(BaseResponseParser):
    """忽略目标类型，返回响应体字节"""

    def parse(self, response: httpx.Response, response_type: Any) -> bytes:
        logger.debug("Parsing response as content bytes")
        return response.content


class RawResponseParser(BaseResponseParser):
    """返回原始响应对象（响应体已读取，连接已释放）"""

    def parse(self, response: httpx.Response, response_type: Any) -> httpx.Response:
        logger.debug("Returning raw response object")
        return response
