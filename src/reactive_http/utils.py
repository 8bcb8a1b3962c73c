"""工具函数模块

提供多值映射展开、敏感信息脱敏等实用功能
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, TypeAlias
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

# 多值映射：键可以对应单个值或值列表，也可以直接传入 (key, value) 序列
MultiValueMapping: TypeAlias = Mapping[str, Any] | Iterable[tuple[str, Any]]


# 默认敏感请求头名称集合
DEFAULT_SENSITIVE_HEADERS = {
    "Authorization",
    "Proxy-Authorization",
    "Cookie",
    "X-API-Key",
    "X-Auth-Token",
    "X-Access-Token",
    "API-Key",
    "Auth-Token",
    "Session-ID",
}

# 默认敏感URL参数名称集合
DEFAULT_SENSITIVE_PARAMS = {
    "token",
    "password",
    "secret",
    "key",
    "api_key",
    "apikey",
    "access_token",
    "auth_token",
    "session",
    "pwd",
}


def _items(values: Any) -> Iterable[tuple[str, Any]]:
    # 多值容器（httpx.Headers、multidict 等）的 items() 会合并同名项
    if hasattr(values, "multi_items"):
        return values.multi_items()
    if isinstance(values, Mapping):
        return values.items()
    return values


def iter_multi_value_items(values: MultiValueMapping | None) -> Iterator[tuple[str, Any]]:
    """
    将多值映射展开为 (key, value) 序列，保持插入顺序和重复项

    参数:
        values: 字典（值可以是 list/tuple 表示多个值）、带 multi_items() 的多值容器
            或 (key, value) 序列，None 视为空

    返回:
        (key, value) 迭代器，值为 None 的项被跳过

    示例:
        >>> list(iter_multi_value_items({"X-A": ["1", "2"], "X-B": "3", "X-C": None}))
        [('X-A', '1'), ('X-A', '2'), ('X-B', '3')]
    """
    if not values:
        return
    for key, value in _items(values):
        for item in value if isinstance(value, (list, tuple)) else (value,):
            if item is not None:
                yield key, item


def mask_pairs(
    pairs: Mapping[str, Any] | Iterable[tuple[str, Any]],
    sensitive_keys: Iterable[str],
    mask: str = "***",
) -> list[tuple[str, Any]]:
    """
    按键名（不区分大小写）替换敏感值，保留顺序和重复键

    返回:
        新的 (key, value) 列表
    """
    hidden = {k.lower() for k in sensitive_keys}
    return [(key, mask if key.lower() in hidden else value) for key, value in _items(pairs)]


def sanitize_headers(
    headers: Mapping[str, str] | Iterable[tuple[str, str]],
    sensitive_keys: set[str] | None = None,
    mask: str = "***",
) -> list[tuple[str, str]]:
    """
    脱敏请求头中的敏感信息

    参数:
        headers: 原始请求头，字典或 (name, value) 序列（同名请求头可重复出现）
        sensitive_keys: 敏感键名集合，不区分大小写。None 时使用默认集合
        mask: 脱敏后的替换字符串

    返回:
        脱敏后的 (name, value) 列表（新列表，不修改原数据）

    示例:
        >>> sanitize_headers({"Authorization": "Bearer token123", "Accept": "application/json"})
        [('Authorization', '***'), ('Accept', 'application/json')]
    """
    return mask_pairs(headers, DEFAULT_SENSITIVE_HEADERS if sensitive_keys is None else sensitive_keys, mask)


def sanitize_fields(
    fields: MultiValueMapping | None,
    sensitive_keys: set[str] | None = None,
    mask: str = "***",
) -> list[tuple[str, Any]]:
    """脱敏表单字段，同名字段的每个值单独保留"""
    if sensitive_keys is None:
        sensitive_keys = DEFAULT_SENSITIVE_PARAMS
    return mask_pairs(list(iter_multi_value_items(fields)), sensitive_keys, mask)


def sanitize_url(url: str, sensitive_params: set[str] | None = None, mask: str = "***") -> str:
    """
    脱敏 URL 查询串中的敏感参数，参数顺序和重复参数保持不变

    示例:
        >>> sanitize_url("https://api.example.com/user?token=abc123&page=1")
        'https://api.example.com/user?token=***&page=1'
    """
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = parse_qsl(parts.query, keep_blank_values=True)
    masked = mask_pairs(query, DEFAULT_SENSITIVE_PARAMS if sensitive_params is None else sensitive_params, mask)
    return urlunsplit(parts._replace(query=urlencode(masked, safe=mask)))
