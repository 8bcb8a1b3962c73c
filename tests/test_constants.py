"""
测试 reactive_http.constants 模块

验证默认配置和内容类型常量
"""

import pytest

from reactive_http import constants


class TestDefaultTimeouts:
    """测试默认超时常量"""

    @pytest.mark.unit
    def test_default_timeouts(self):
        assert constants.DEFAULT_CONNECTION_TIMEOUT_MS == 10000
        assert constants.DEFAULT_RESPONSE_TIMEOUT_MS == 10000
        assert constants.DEFAULT_READ_TIMEOUT_MS == 10000
        assert constants.DEFAULT_WRITE_TIMEOUT_MS == 2000

    @pytest.mark.unit
    def test_config_option_names_map_to_fields(self):
        """外部配置名与字段名一一对应"""
        assert constants.CONFIG_OPTION_NAMES["readTimeOutInMillis"] == "read_timeout_in_millis"
        assert len(set(constants.CONFIG_OPTION_NAMES.values())) == 4


class TestStatusRanges:
    """测试错误状态码范围"""

    @pytest.mark.unit
    def test_ranges(self):
        assert 400 in constants.CLIENT_ERROR_STATUS_RANGE
        assert 499 in constants.CLIENT_ERROR_STATUS_RANGE
        assert 500 not in constants.CLIENT_ERROR_STATUS_RANGE
        assert 599 in constants.SERVER_ERROR_STATUS_RANGE
        assert 600 not in constants.SERVER_ERROR_STATUS_RANGE

    @pytest.mark.unit
    def test_error_message_template(self):
        assert constants.ERROR_STATUS_MESSAGE_TEMPLATE % 404 == "Client returned 404 status code"


class TestContentTypes:
    """测试内容类型常量"""

    @pytest.mark.unit
    def test_content_types(self):
        assert constants.CONTENT_TYPE_JSON == "application/json"
        assert constants.CONTENT_TYPE_FORM_URLENCODED == "application/x-www-form-urlencoded"
        assert constants.CONTENT_TYPE_MULTIPART_FORM_DATA == "multipart/form-data"
