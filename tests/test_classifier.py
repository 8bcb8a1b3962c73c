"""
测试 reactive_http.classifier 模块

测试状态码分类：4xx / 5xx 失败，其余放行
"""

import pytest

from reactive_http.classifier import PASS, StatusOutcome, classify, is_error_status


class TestClassify:
    """测试 classify 函数"""

    @pytest.mark.unit
    @pytest.mark.parametrize("status_code", [400, 401, 404, 418, 499, 500, 502, 503, 599])
    def test_error_statuses_fail(self, status_code):
        """UT-CLS-001: 4xx / 5xx 返回失败结果"""
        outcome = classify(status_code)

        assert outcome.passed is False
        assert outcome.message == f"Client returned {status_code} status code"

    @pytest.mark.unit
    @pytest.mark.parametrize("status_code", [100, 101, 199, 200, 201, 204, 299, 300, 302, 304, 399])
    def test_other_statuses_pass(self, status_code):
        """UT-CLS-002: 1xx / 2xx / 3xx 放行"""
        assert classify(status_code) is PASS

    @pytest.mark.unit
    @pytest.mark.parametrize("status_code", [399, 600, 0])
    def test_range_boundaries(self, status_code):
        """边界测试：范围外的状态码不算错误"""
        assert is_error_status(status_code) is False

    @pytest.mark.unit
    def test_pass_outcome_has_no_message(self):
        """UT-CLS-003: 放行结果不带错误信息"""
        assert PASS == StatusOutcome(passed=True)
        assert PASS.message is None
