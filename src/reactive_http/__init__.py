"""
reactive-http 异步 HTTP 客户端模块

提供统一请求/响应约定的异步 HTTP 客户端

主要组件:
    - ClientConfig: 超时配置（链式 Builder 构建）
    - ReactiveHttpClient: 异步客户端，支持 GET / 表单 POST / multipart POST / JSON POST
    - 异常类: ReactiveHttpClientError 及其子类
    - 编码器: DefaultRequestEncoder, MultipartPart
    - 解析器: JSONResponseParser, ContentResponseParser, RawResponseParser

使用示例:
    >>> from reactive_http import ClientConfig, ReactiveHttpClient
    >>>
    >>> config = ClientConfig.builder().connection_timeout_in_millis(5000).build()
    >>> async with ReactiveHttpClient(config) as client:
    ...     ack = await client.do_post_with_request_body("https://api.example.com/ack", {}, {"name": "x"}, Ack)
"""

# 核心客户端
from reactive_http.client import ReactiveHttpClient

# 配置
from reactive_http.config import ClientConfig, ClientConfigBuilder

# 状态分类
from reactive_http.classifier import StatusOutcome, classify

# 异常类
from reactive_http.exceptions import (
    ClientConfigurationError,
    HttpRequestFailedException,
    ReactiveHttpClientError,
    ResponseTimeoutError,
)

# 请求体编码器
from reactive_http.encoder import (
    BaseRequestEncoder,
    DefaultRequestEncoder,
    EncodedBody,
    MultipartPart,
)

# 响应解析器
from reactive_http.parser import (
    BaseResponseParser,
    ContentResponseParser,
    JSONResponseParser,
    RawResponseParser,
)

# 工具函数
from reactive_http.utils import (
    sanitize_fields,
    sanitize_headers,
    sanitize_url,
)

# 常量配置
from reactive_http.constants import (
    CONTENT_TYPE_FORM_URLENCODED,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_MULTIPART_FORM_DATA,
    DEFAULT_CONNECTION_TIMEOUT_MS,
    DEFAULT_READ_TIMEOUT_MS,
    DEFAULT_RESPONSE_TIMEOUT_MS,
    DEFAULT_WRITE_TIMEOUT_MS,
    HTTP_METHOD_GET,
    HTTP_METHOD_POST,
)

__all__ = [
    # 核心类
    "ReactiveHttpClient",
    "ClientConfig",
    "ClientConfigBuilder",
    # 状态分类
    "StatusOutcome",
    "classify",
    # 异常
    "ReactiveHttpClientError",
    "HttpRequestFailedException",
    "ClientConfigurationError",
    "ResponseTimeoutError",
    # 编码器
    "BaseRequestEncoder",
    "DefaultRequestEncoder",
    "EncodedBody",
    "MultipartPart",
    # 解析器
    "BaseResponseParser",
    "JSONResponseParser",
    "ContentResponseParser",
    "RawResponseParser",
    # 工具函数
    "sanitize_headers",
    "sanitize_url",
    "sanitize_fields",
    # 常量
    "DEFAULT_CONNECTION_TIMEOUT_MS",
    "DEFAULT_RESPONSE_TIMEOUT_MS",
    "DEFAULT_READ_TIMEOUT_MS",
    "DEFAULT_WRITE_TIMEOUT_MS",
    "CONTENT_TYPE_JSON",
    "CONTENT_TYPE_FORM_URLENCODED",
    "CONTENT_TYPE_MULTIPART_FORM_DATA",
    "HTTP_METHOD_GET",
    "HTTP_METHOD_POST",
]

__version__ = "1.0.0"
