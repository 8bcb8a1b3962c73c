"""
客户端配置模块

ClientConfig 是不可变的超时配置值对象，通过链式 Builder 构建：

    >>> config = (
    ...     ClientConfig.builder()
    ...     .connection_timeout_in_millis(5000)
    ...     .response_timeout_in_millis(8000)
    ...     .build()
    ... )
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from reactive_http.constants import (
    CONFIG_OPTION_NAMES,
    DEFAULT_CONNECTION_TIMEOUT_MS,
    DEFAULT_READ_TIMEOUT_MS,
    DEFAULT_RESPONSE_TIMEOUT_MS,
    DEFAULT_WRITE_TIMEOUT_MS,
    MILLIS_PER_SECOND,
)
from reactive_http.exceptions import ClientConfigurationError


@dataclass(frozen=True)
class ClientConfig:
    """
    HTTP 客户端超时配置

    属性:
        connection_timeout_in_millis: 建立连接的超时时间
        response_timeout_in_millis: 从发出请求到读完响应的总超时时间
        read_timeout_in_millis: 读空闲超时，超过该时间未收到任何字节则中断连接
        write_timeout_in_millis: 写空闲超时，超过该时间未能发出任何字节则中断连接

    不做取值校验，零或负数会原样传递给传输层
    """

    connection_timeout_in_millis: int = DEFAULT_CONNECTION_TIMEOUT_MS
    response_timeout_in_millis: int = DEFAULT_RESPONSE_TIMEOUT_MS
    read_timeout_in_millis: int = DEFAULT_READ_TIMEOUT_MS
    write_timeout_in_millis: int = DEFAULT_WRITE_TIMEOUT_MS

    @classmethod
    def builder(cls) -> ClientConfigBuilder:
        return ClientConfigBuilder()

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> ClientConfig:
        """
        从字典形式的配置构建 ClientConfig

        参数:
            options: 配置字典，键可以是外部配置名（如 connectionTimeoutInMillis）
                或字段名（如 connection_timeout_in_millis），缺省项使用默认值

        返回:
            ClientConfig 实例

        异常:
            ClientConfigurationError: 存在无法识别的配置项时抛出
        """
        field_names = {f.name for f in fields(cls)}
        builder = cls.builder()
        for key, value in options.items():
            field_name = CONFIG_OPTION_NAMES.get(key, key)
            if field_name not in field_names:
                raise ClientConfigurationError(f"Unknown client config option: {key}")
            getattr(builder, field_name)(value)
        return builder.build()

    @property
    def connect_timeout_seconds(self) -> float:
        return self.connection_timeout_in_millis / MILLIS_PER_SECOND

    @property
    def response_timeout_seconds(self) -> float:
        return self.response_timeout_in_millis / MILLIS_PER_SECOND

    @property
    def read_timeout_seconds(self) -> float:
        return self.read_timeout_in_millis / MILLIS_PER_SECOND

    @property
    def write_timeout_seconds(self) -> float:
        return self.write_timeout_in_millis / MILLIS_PER_SECOND


class ClientConfigBuilder:
    """ClientConfig 的链式构建器，每个 setter 返回构建器自身"""

    def __init__(self):
        self._options: dict[str, int] = {}

    def connection_timeout_in_millis(self, value: int) -> ClientConfigBuilder:
        self._options["connection_timeout_in_millis"] = value
        return self

    def response_timeout_in_millis(self, value: int) -> ClientConfigBuilder:
        self._options["response_timeout_in_millis"] = value
        return self

    def read_timeout_in_millis(self, value: int) -> ClientConfigBuilder:
        self._options["read_timeout_in_millis"] = value
        return self

    def write_timeout_in_millis(self, value: int) -> ClientConfigBuilder:
        self._options["write_timeout_in_millis"] = value
        return self

    def build(self) -> ClientConfig:
        # 每次 build 都生成独立的快照，之后对构建器的修改不影响已构建的配置
        return ClientConfig(**self._options)
