"""HTTP 客户端核心模块

提供基于 httpx 的异步 HTTP 客户端，支持：
- 连接 / 响应 / 读 / 写 四类超时配置
- GET、表单 POST、multipart POST、JSON POST 四种请求方式
- 4xx / 5xx 状态码的统一分类（不解码响应体）
- 可替换的请求体编码器和响应解析器
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from numbers import Real
from typing import Any, TypeVar

import httpx

from reactive_http.classifier import classify
from reactive_http.config import ClientConfig
from reactive_http.constants import (
    CONTENT_TYPE_JSON,
    HEADER_ACCEPT,
    HEADER_CONTENT_TYPE,
    HTTP_METHOD_GET,
    HTTP_METHOD_POST,
)
from reactive_http.encoder import BaseRequestEncoder, DefaultRequestEncoder, EncodedBody
from reactive_http.exceptions import (
    ClientConfigurationError,
    HttpRequestFailedException,
    ResponseTimeoutError,
)
from reactive_http.parser import BaseResponseParser, JSONResponseParser
from reactive_http.utils import (
    MultiValueMapping,
    iter_multi_value_items,
    sanitize_fields,
    sanitize_headers,
    sanitize_url,
)

ResponseT = TypeVar("ResponseT")

logger = logging.getLogger(__name__)


class ReactiveHttpClient:
    """
    异步 HTTP 客户端

    每个实例在整个生命周期内只持有一个 httpx.AsyncClient，客户端自身不保存任何请求级别的
    可变状态，可以被多个协程并发使用

    类属性:
        sensitive_headers: 日志中需要脱敏的请求头名称
        sensitive_params: 日志中需要脱敏的 URL 参数和表单字段名称
        enable_sanitization: 是否启用日志脱敏
        transport_class: 传输层类或实例，None 表示使用 httpx 默认传输层
        response_parser_class: 响应解析器类或实例
        request_encoder_class: 请求体编码器类或实例

    使用示例:
        config = ClientConfig.builder().connection_timeout_in_millis(5000).build()
        async with ReactiveHttpClient(config) as client:
            user = await client.do_get("https://api.example.com/users/1", {}, User)
    """

    # ========== 安全性配置 ==========
    sensitive_headers: set[str] = {
        "Authorization",
        "Proxy-Authorization",
        "Cookie",
        "X-API-Key",
        "X-Auth-Token",
        "X-Access-Token",
    }

    sensitive_params: set[str] = {
        "token",
        "password",
        "secret",
        "key",
        "api_key",
        "access_token",
    }

    enable_sanitization: bool = True

    # ========== 可插拔组件配置 ==========
    transport_class: type[httpx.AsyncBaseTransport] | httpx.AsyncBaseTransport | None = None

    response_parser_class: type[BaseResponseParser] | BaseResponseParser = JSONResponseParser

    request_encoder_class: type[BaseRequestEncoder] | BaseRequestEncoder = DefaultRequestEncoder

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | type[httpx.AsyncBaseTransport] | None = None,
        response_parser: BaseResponseParser | type[BaseResponseParser] | None = None,
        request_encoder: BaseRequestEncoder | type[BaseRequestEncoder] | None = None,
    ):
        """
        初始化客户端实例

        参数:
            config: 超时配置
            transport: 传输层类或实例（可选，测试时可传入 httpx.MockTransport）
            response_parser: 响应解析器类或实例
            request_encoder: 请求体编码器类或实例

        执行步骤:
            1. 校验配置中的超时值类型
            2. 解析传输层、解析器、编码器组件
            3. 创建唯一的 httpx.AsyncClient，绑定连接 / 读 / 写超时

        异常:
            ClientConfigurationError: 配置或组件无效时抛出
        """
        # ========== 步骤1: 校验配置 ==========
        if not isinstance(config, ClientConfig):
            raise ClientConfigurationError(f"config must be a ClientConfig, got {type(config).__name__}")
        self._validate_timeouts(config)
        self.config = config

        # ========== 步骤2: 解析组件 ==========
        self.transport_instance = self._resolve_component(
            transport, "transport_class", httpx.AsyncBaseTransport, allow_none=True
        )
        self.response_parser_instance = self._resolve_component(
            response_parser, "response_parser_class", BaseResponseParser
        )
        self.request_encoder_instance = self._resolve_component(
            request_encoder, "request_encoder_class", BaseRequestEncoder
        )

        # ========== 步骤3: 创建传输客户端 ==========
        self._client = self._create_transport_client()

    @staticmethod
    def _validate_timeouts(config: ClientConfig) -> None:
        # 只拒绝无法换算成秒的值，零和负数交给传输层处理
        for name in (
            "connection_timeout_in_millis",
            "response_timeout_in_millis",
            "read_timeout_in_millis",
            "write_timeout_in_millis",
        ):
            value = getattr(config, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise ClientConfigurationError(f"{name} must be a number of milliseconds, got {value!r}")

    def _resolve_component(self, component, class_attr_name, base_class, allow_none=False):
        """
        统一的组件解析方法

        参数:
            component: 传入的组件配置（类或实例），None 时使用类属性
            class_attr_name: 类属性名称
            base_class: 基类类型
            allow_none: 是否允许组件为空

        返回:
            组件实例
        """
        source = component if component is not None else getattr(self, class_attr_name)

        if source is None and allow_none:
            return None

        if isinstance(source, type) and issubclass(source, base_class):
            try:
                return source()
            except Exception as e:
                logger.error(f"Failed to instantiate {source.__name__}: {e}")
                raise ClientConfigurationError(f"{class_attr_name} instantiation failed: {e}") from e

        if isinstance(source, base_class):
            return source

        raise ClientConfigurationError(f"{class_attr_name} must be a {base_class.__name__} subclass or instance")

    def _create_transport_client(self) -> httpx.AsyncClient:
        """
        创建并配置 httpx.AsyncClient

        连接、读、写超时由传输层在对应阶段执行；连接池等待不单独限时，
        由响应总超时兜底。不跟随重定向，3xx 响应交给状态分类处理
        """
        timeout = httpx.Timeout(
            connect=self.config.connect_timeout_seconds,
            read=self.config.read_timeout_seconds,
            write=self.config.write_timeout_seconds,
            pool=None,
        )
        logger.debug(
            f"Creating transport client (connect={self.config.connection_timeout_in_millis}ms, "
            f"response={self.config.response_timeout_in_millis}ms, "
            f"read={self.config.read_timeout_in_millis}ms, "
            f"write={self.config.write_timeout_in_millis}ms)"
        )
        return httpx.AsyncClient(timeout=timeout, transport=self.transport_instance, follow_redirects=False)

    # ========== 公共请求接口 ==========

    async def do_get(
        self, url: str, headers: MultiValueMapping | None, response_type: type[ResponseT]
    ) -> ResponseT:
        """
        发送 GET 请求

        参数:
            url: 请求地址
            headers: 请求头，同名请求头可用列表给出多个值
            response_type: 响应体解码目标类型，None 表示不期望响应内容

        返回:
            解码后的响应值

        异常:
            HttpRequestFailedException: 响应状态码为 4xx / 5xx
            httpx.TransportError: 连接失败或超时（含 ResponseTimeoutError）
            pydantic.ValidationError: 响应体无法解码为目标类型
        """
        return await self._execute(HTTP_METHOD_GET, url, headers, None, response_type)

    async def do_post_with_form_param(
        self,
        url: str,
        headers: MultiValueMapping | None,
        form_params: MultiValueMapping | None,
        response_type: type[ResponseT],
    ) -> ResponseT:
        """
        发送 application/x-www-form-urlencoded 表单 POST 请求

        参数:
            form_params: 表单字段，同名字段可用列表给出多个值，按插入顺序编码
        """
        if logger.isEnabledFor(logging.DEBUG):
            if self.enable_sanitization:
                fields = sanitize_fields(form_params, self.sensitive_params)
            else:
                fields = list(iter_multi_value_items(form_params))
            logger.debug(f"Form fields: {fields}")
        body = self.request_encoder_instance.encode_form(form_params)
        return await self._execute(HTTP_METHOD_POST, url, headers, body, response_type)

    async def do_post_with_multipart(
        self,
        url: str,
        headers: MultiValueMapping | None,
        parts: MultiValueMapping | None,
        response_type: type[ResponseT],
    ) -> ResponseT:
        """
        发送 multipart/form-data POST 请求

        参数:
            parts: 字段名 -> MultipartPart（或部分列表），也可以直接给出 str/bytes 内容
        """
        body = self.request_encoder_instance.encode_multipart(parts)
        return await self._execute(HTTP_METHOD_POST, url, headers, body, response_type)

    async def do_post_with_request_body(
        self,
        url: str,
        headers: MultiValueMapping | None,
        body: Any,
        response_type: type[ResponseT],
    ) -> ResponseT:
        """
        发送 application/json POST 请求

        参数:
            body: 请求对象，序列化为 JSON（支持 dict、list、pydantic 模型、dataclass）
        """
        encoded = self.request_encoder_instance.encode_json(body)
        return await self._execute(HTTP_METHOD_POST, url, headers, encoded, response_type)

    # ========== 请求构建与响应处理 ==========

    def _build_headers(self, headers: MultiValueMapping | None, content_type: str | None) -> httpx.Headers:
        """
        构建请求头

        逐条追加调用方请求头，同名请求头的每个值各占一行；随后设置 Accept 和
        Content-Type，覆盖调用方提供的同名请求头
        """
        header_lines = [
            (name, value if isinstance(value, (str, bytes)) else str(value))
            for name, value in iter_multi_value_items(headers)
        ]
        request_headers = httpx.Headers(header_lines)
        request_headers[HEADER_ACCEPT] = CONTENT_TYPE_JSON
        if content_type is not None:
            request_headers[HEADER_CONTENT_TYPE] = content_type
        return request_headers

    def _build_request(
        self, method: str, url: str, headers: MultiValueMapping | None, body: EncodedBody | None
    ) -> httpx.Request:
        """
        构建请求信封

        参数:
            method: HTTP 方法
            url: 请求地址
            headers: 调用方请求头
            body: 已编码的请求体，None 表示无请求体

        返回:
            httpx.Request 对象
        """
        request_headers = self._build_headers(headers, body.content_type if body is not None else None)
        return self._client.build_request(
            method,
            url,
            headers=request_headers,
            content=body.content if body is not None else None,
        )

    async def _execute(
        self,
        method: str,
        url: str,
        headers: MultiValueMapping | None,
        body: EncodedBody | None,
        response_type: Any,
    ) -> Any:
        """
        执行单个请求，返回解码后的响应值

        执行步骤:
            1. 生成请求 ID，构建请求信封
            2. 记录请求日志（按配置脱敏）
            3. 在响应总超时内完成整个交换：发送、状态分类、读取并解码响应体
            4. 记录失败日志并原样抛出异常

        异常:
            ResponseTimeoutError: 整个交换超过 response_timeout_in_millis
            HttpRequestFailedException: 响应状态码为 4xx / 5xx
            httpx.HTTPError: 其他传输层异常
        """
        request_id = self.generate_request_id()
        request = self._build_request(method, url, headers, body)

        safe_url = sanitize_url(url, self.sensitive_params) if self.enable_sanitization else url
        logger.info(f"[{request_id}] Starting {method} request to {safe_url}")
        if logger.isEnabledFor(logging.DEBUG):
            request_headers = request.headers.multi_items()
            if self.enable_sanitization:
                request_headers = sanitize_headers(request_headers, self.sensitive_headers)
            logger.debug(f"[{request_id}] Request headers: {request_headers}")

        try:
            async with asyncio.timeout(self.config.response_timeout_seconds) as deadline:
                return await self._exchange(request_id, request, response_type)
        except TimeoutError:
            # 解析器或传输层自身抛出的 TimeoutError 原样传播
            if not deadline.expired():
                raise
            error = ResponseTimeoutError(
                f"Request to {safe_url} timed out after {self.config.response_timeout_in_millis}ms",
                request=request,
            )
            logger.error(f"[{request_id}] Request failed: {error}")
            raise error from None
        except HttpRequestFailedException as e:
            logger.error(f"[{request_id}] Request failed: {e}")
            raise
        except httpx.HTTPError as e:
            logger.error(f"[{request_id}] Request to {safe_url} failed: {type(e).__name__}: {e}")
            raise

    async def _exchange(self, request_id: str, request: httpx.Request, response_type: Any) -> Any:
        """
        发送请求并处理响应

        先根据状态码分类，4xx / 5xx 直接失败且不读取响应体；其余状态码读取响应体并解码。
        无论成功、失败还是被取消，都会关闭响应并释放连接
        """
        response = await self._client.send(request, stream=True)
        try:
            logger.info(f"[{request_id}] Received {response.status_code} response")
            logger.debug(f"[{request_id}] Response headers: {response.headers}")

            outcome = classify(response.status_code)
            if not outcome.passed:
                raise HttpRequestFailedException(outcome.message, status_code=response.status_code, response=response)

            await response.aread()
            return self._parse_response(request_id, response, response_type)
        finally:
            await response.aclose()

    def _parse_response(self, request_id: str, response: httpx.Response, response_type: Any) -> Any:
        """
        使用响应解析器解码响应体

        解码失败时记录日志并原样抛出解析器的异常
        """
        try:
            logger.debug(f"[{request_id}] Parsing response data")
            parsed_data = self.response_parser_instance.parse(response, response_type)
            logger.debug(f"[{request_id}] Response data parsed successfully")
            return parsed_data
        except Exception as e:
            logger.error(f"[{request_id}] Response parsing failed: {e}")
            raise

    def generate_request_id(self) -> str:
        """生成全局唯一的请求 ID"""
        timestamp = int(time.time() * 1000)  # 毫秒级时间戳
        short_uuid = uuid.uuid4().hex[:8]
        return f"REQ-{timestamp}-{short_uuid}"

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        """关闭底层 httpx.AsyncClient，释放连接池资源"""
        await self._client.aclose()
        logger.info("Client closed")

    async def __aenter__(self) -> ReactiveHttpClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
