"""
请求体编码器模块

负责把表单、multipart 和任意可序列化对象编码为请求体字节，编码器可替换
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from urllib3.fields import RequestField
from urllib3.filepost import encode_multipart_formdata

from reactive_http.constants import (
    CONTENT_TYPE_FORM_URLENCODED,
    CONTENT_TYPE_JSON,
    HEADER_CONTENT_TYPE,
)
from reactive_http.parser import get_type_adapter
from reactive_http.utils import MultiValueMapping, iter_multi_value_items

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MultipartPart:
    """
    multipart 请求中的单个部分

    属性:
        content: 部分内容，str/bytes 原样发送，其他对象编码为 JSON
        filename: 文件名（可选），设置后写入 Content-Disposition
        content_type: 该部分的 Content-Type（可选）
        headers: 该部分的额外请求头
    """

    content: Any
    filename: str | None = None
    content_type: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EncodedBody:
    """编码结果：请求体字节和对应的完整 Content-Type"""

    content: bytes
    content_type: str


class BaseRequestEncoder(ABC):
    """请求体编码器基类，定义三种请求体的编码接口"""

    @abstractmethod
    def encode_form(self, form_params: MultiValueMapping | None) -> EncodedBody:
        """编码 application/x-www-form-urlencoded 表单"""

    @abstractmethod
    def encode_multipart(self, parts: MultiValueMapping | None) -> EncodedBody:
        """编码 multipart/form-data 请求体"""

    @abstractmethod
    def encode_json(self, body: Any) -> EncodedBody:
        """编码 application/json 请求体"""


class DefaultRequestEncoder(BaseRequestEncoder):
    """
    默认请求体编码器

    - 表单: urlencode，同名键的多个值按插入顺序展开
    - multipart: urllib3 的 RequestField，每个部分保留自己的请求头
    - JSON: pydantic TypeAdapter.dump_json，支持 dict/list、pydantic 模型和 dataclass
    """

    def encode_form(self, form_params: MultiValueMapping | None) -> EncodedBody:
        # bytes 和其他值交给 urlencode 处理，值为 None 的字段已被跳过
        pairs = list(iter_multi_value_items(form_params))
        logger.debug(f"Encoding {len(pairs)} form fields")
        return EncodedBody(content=urlencode(pairs).encode("ascii"), content_type=CONTENT_TYPE_FORM_URLENCODED)

    def encode_multipart(self, parts: MultiValueMapping | None) -> EncodedBody:
        fields_ = [self._build_field(name, part) for name, part in iter_multi_value_items(parts)]
        logger.debug(f"Encoding {len(fields_)} multipart parts")
        content, content_type = encode_multipart_formdata(fields_)
        return EncodedBody(content=content, content_type=content_type)

    def encode_json(self, body: Any) -> EncodedBody:
        return EncodedBody(content=to_json(body), content_type=CONTENT_TYPE_JSON)

    def _build_field(self, name: str, part: Any) -> RequestField:
        """
        将单个部分转换为 urllib3 RequestField

        参数:
            name: 表单字段名
            part: MultipartPart 或直接给出的内容（str/bytes/可 JSON 序列化对象）

        返回:
            已生成 Content-Disposition 的 RequestField
        """
        if not isinstance(part, MultipartPart):
            part = MultipartPart(content=part)

        # 部分自带的 Content-Type 头与 content_type 参数合并，避免重复输出
        extra_headers = {k: v for k, v in part.headers.items() if k.lower() != HEADER_CONTENT_TYPE.lower()}
        content_type = part.content_type or next(
            (v for k, v in part.headers.items() if k.lower() == HEADER_CONTENT_TYPE.lower()), None
        )

        data = part.content
        if not isinstance(data, (str, bytes)):
            data = to_json(data)
            content_type = content_type or CONTENT_TYPE_JSON

        request_field = RequestField(name=name, data=data, filename=part.filename, headers=extra_headers)
        request_field.make_multipart(content_type=content_type)
        return request_field


def to_json(value: Any) -> bytes:
    """按值的运行时类型序列化为 JSON 字节"""
    return get_type_adapter(type(value)).dump_json(value)
