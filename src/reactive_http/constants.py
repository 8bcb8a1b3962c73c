"""
HTTP 客户端常量配置模块

定义客户端使用的常量、默认超时配置等
"""

# HTTP 方法常量
HTTP_METHOD_GET = "GET"
HTTP_METHOD_POST = "POST"

# 内容类型常量
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM_URLENCODED = "application/x-www-form-urlencoded"
CONTENT_TYPE_MULTIPART_FORM_DATA = "multipart/form-data"

# 请求头名称
HEADER_ACCEPT = "Accept"
HEADER_CONTENT_TYPE = "Content-Type"

# 默认超时配置（毫秒）
DEFAULT_CONNECTION_TIMEOUT_MS = 10000  # 建立连接超时
DEFAULT_RESPONSE_TIMEOUT_MS = 10000  # 整个请求/响应交换超时
DEFAULT_READ_TIMEOUT_MS = 10000  # 读空闲超时
DEFAULT_WRITE_TIMEOUT_MS = 2000  # 写空闲超时

MILLIS_PER_SECOND = 1000

# 配置项名称：外部配置键 -> ClientConfig 字段名
CONFIG_OPTION_NAMES = {
    "connectionTimeoutInMillis": "connection_timeout_in_millis",
    "responseTimeoutInMillis": "response_timeout_in_millis",
    "readTimeOutInMillis": "read_timeout_in_millis",
    "writeTimeoutInMillis": "write_timeout_in_millis",
}

# 错误状态码范围（左闭右开）
CLIENT_ERROR_STATUS_RANGE = range(400, 500)
SERVER_ERROR_STATUS_RANGE = range(500, 600)

# 状态码错误信息模板
ERROR_STATUS_MESSAGE_TEMPLATE = "Client returned %d status code"
