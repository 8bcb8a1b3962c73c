"""
通用测试 Fixture 定义

提供测试所需的配置、内存传输层、本地 HTTP 服务器等 Fixture
"""

import asyncio
import contextlib
import json

import httpx
import pytest
import pytest_asyncio
from pydantic import BaseModel

from reactive_http import ClientConfig, ReactiveHttpClient


class Ack(BaseModel):
    """测试用响应模型"""

    ok: bool


class Resource(BaseModel):
    """测试用响应模型"""

    id: int
    name: str


class TrackingStream(httpx.AsyncByteStream):
    """记录响应体是否被读取的字节流"""

    def __init__(self, body: bytes):
        self.body = body
        self.consumed = False

    async def __aiter__(self):
        self.consumed = True
        yield self.body


class RecordingHandler:
    """
    MockTransport 处理函数，记录收到的请求并返回预设响应

    参数:
        status_code: 响应状态码
        json_body: 响应 JSON 内容
    """

    def __init__(self, status_code: int = 200, json_body=None):
        self.status_code = status_code
        self.json_body = {"ok": True} if json_body is None else json_body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def config():
    """默认超时配置"""
    return ClientConfig.builder().build()


@pytest.fixture
def recording_handler():
    """返回 200 {"ok": true} 的记录型处理函数"""
    return RecordingHandler()


@pytest_asyncio.fixture
async def mock_client(config, recording_handler):
    """使用内存传输层的客户端实例"""
    client = ReactiveHttpClient(config, transport=httpx.MockTransport(recording_handler))
    yield client
    await client.aclose()


@pytest.fixture
def make_mock_client(config):
    """根据处理函数创建使用内存传输层的客户端"""

    def factory(handler, **kwargs) -> ReactiveHttpClient:
        return ReactiveHttpClient(kwargs.pop("config", config), transport=httpx.MockTransport(handler), **kwargs)

    return factory


def build_http_response(status_code: int, body: bytes = b"", content_type: str = "application/json") -> bytes:
    """构建完整的 HTTP/1.1 响应报文"""
    head = (
        f"HTTP/1.1 {status_code} Status\r\n"
        f"Content-Type: {content_type}\r\n"
        f"Content-Length: {len(body)}\r\n"
        "Connection: close\r\n"
        "\r\n"
    )
    return head.encode("ascii") + body


class LocalHTTPServer:
    """
    基于 asyncio 的本地 HTTP 服务器

    每个连接读取一个请求后交给 behaviour 协程处理，behaviour 签名为
    (reader, writer, head: bytes, body: bytes)
    """

    def __init__(self):
        self.behaviour = None
        self.received: list[tuple[bytes, bytes]] = []
        self.request_received = asyncio.Event()
        self.client_disconnected = asyncio.Event()
        self.stopped = asyncio.Event()
        self.read_request_body = True
        self._writers: set[asyncio.StreamWriter] = set()
        self._server = None
        self.base_url = ""

    async def start(self):
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        port = self._server.sockets[0].getsockname()[1]
        self.base_url = f"http://127.0.0.1:{port}"

    async def stop(self):
        self.stopped.set()
        for writer in list(self._writers):
            writer.close()
        self._server.close()
        await self._server.wait_closed()

    async def _handle(self, reader, writer):
        self._writers.add(writer)
        try:
            head = await reader.readuntil(b"\r\n\r\n")
            length = 0
            for line in head.split(b"\r\n"):
                name, _, value = line.partition(b":")
                if name.strip().lower() == b"content-length":
                    length = int(value.strip())
            body = await reader.readexactly(length) if length and self.read_request_body else b""
            self.received.append((head, body))
            self.request_received.set()
            await self.behaviour(reader, writer, head, body)
        except (asyncio.IncompleteReadError, ConnectionError):
            pass
        finally:
            self._writers.discard(writer)
            writer.close()

    # ========== 预置行为 ==========

    def respond(self, status_code: int, body: bytes = b"", content_type: str = "application/json"):
        """立即返回完整响应"""

        async def behaviour(reader, writer, head, request_body):
            writer.write(build_http_response(status_code, body, content_type))
            await writer.drain()

        self.behaviour = behaviour

    def echo_json(self):
        """把请求体原样作为 JSON 响应返回"""

        async def behaviour(reader, writer, head, request_body):
            writer.write(build_http_response(200, request_body))
            await writer.drain()

        self.behaviour = behaviour

    def stall(self, partial: bytes | None = None):
        """
        挂起连接直到客户端断开

        参数:
            partial: 挂起前先发送的部分响应报文，None 表示不发送任何字节
        """

        async def behaviour(reader, writer, head, request_body):
            if partial is not None:
                writer.write(partial)
                await writer.drain()
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(reader.read(), timeout=10)
            self.client_disconnected.set()

        self.behaviour = behaviour

    def hold_request_body(self):
        """只读取请求头，不再读取任何请求体字节，直到服务器停止"""

        async def behaviour(reader, writer, head, request_body):
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(self.stopped.wait(), timeout=10)

        self.read_request_body = False
        self.behaviour = behaviour


@pytest_asyncio.fixture
async def http_server():
    """本地 HTTP 服务器（函数级）"""
    server = LocalHTTPServer()
    await server.start()
    yield server
    await server.stop()


def json_bytes(data) -> bytes:
    return json.dumps(data).encode("utf-8")
