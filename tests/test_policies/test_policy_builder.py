"""保留策略编译与校验单元测试."""

import logging
from datetime import UTC, datetime

import pytest

from elasticurator.period import InvalidDurationError, Period
from elasticurator.policies import (
    IncompletePolicyError,
    PolicyNotFoundError,
    PolicySet,
    RawPolicyEntry,
    build_policy_set,
    compile_policy,
    find_smallest_period,
)
from elasticurator.template import MissingPlaceholderError

REFERENCE = datetime(2024, 1, 10, tzinfo=UTC)


def _entry(
    name: str = "logs",
    pattern: str = "logs-%{YYYY.MM.dd}",
    close: str = "3 days",
    delete: str = "7 days",
) -> RawPolicyEntry:
    return RawPolicyEntry(name=name, pattern=pattern, close=close, delete=delete)


class TestCompilePolicy:
    """compile_policy 测试."""

    def test_compile(self) -> None:
        """测试编译单个策略."""
        policy = compile_policy(_entry())
        assert policy.name == "logs"
        assert policy.template == "logs-%{YYYY.MM.dd}"
        assert policy.close_after == "3 days"
        assert policy.delete_after == "7 days"
        assert policy.close_period == Period(days=3)
        assert policy.delete_period == Period(days=7)
        assert policy.date_format.pattern == "YYYY.MM.dd"
        assert policy.name_pattern.fullmatch("logs-2024.01.09")

    def test_policy_is_immutable(self) -> None:
        """测试策略不可修改."""
        policy = compile_policy(_entry())
        with pytest.raises(AttributeError):
            policy.name = "other"  # type: ignore

    def test_invalid_close(self) -> None:
        """测试关闭阈值无法解析."""
        with pytest.raises(InvalidDurationError):
            compile_policy(_entry(close="3 dayz"))

    def test_invalid_delete(self) -> None:
        """测试删除阈值无法解析."""
        with pytest.raises(InvalidDurationError):
            compile_policy(_entry(delete="7 dayz"))

    def test_missing_fields(self) -> None:
        """测试缺少必需字段."""
        with pytest.raises(IncompletePolicyError, match="delete"):
            compile_policy(_entry(delete=""))

    @pytest.mark.parametrize(
        ("close", "delete"),
        [("3 days", "10000 years"), ("999999999 days", "1000000000 days")],
    )
    def test_period_out_of_range(self, close: str, delete: str) -> None:
        """测试无法在锚点时刻上投影的时长."""
        with pytest.raises(InvalidDurationError, match="超出可计算范围"):
            compile_policy(_entry(close=close, delete=delete), reference_instant=REFERENCE)

    def test_missing_placeholder(self) -> None:
        """测试模板缺少占位符."""
        with pytest.raises(MissingPlaceholderError):
            compile_policy(_entry(pattern="logs-static"))


class TestBuildPolicySet:
    """build_policy_set 测试."""

    def test_all_valid(self) -> None:
        """测试全部有效."""
        policy_set = build_policy_set(
            [_entry("a", "a-%{YYYY.MM.dd}"), _entry("b", "b-%{YYYY.MM}")],
            reference_instant=REFERENCE,
        )
        assert policy_set.names() == ["a", "b"]
        assert len(policy_set) == 2
        assert policy_set.rejected == ()
        assert policy_set.reference_instant == REFERENCE

    def test_invalid_duration_is_dropped(self) -> None:
        """测试时长无法解析的条目被丢弃，其余条目保留."""
        policy_set = build_policy_set(
            [_entry("bad", close="soon"), _entry("good")],
            reference_instant=REFERENCE,
        )
        assert policy_set.names() == ["good"]
        assert [r.name for r in policy_set.rejected] == ["bad"]
        assert policy_set.rejected[0].error_type == "InvalidDurationError"

    def test_missing_placeholder_is_dropped(self) -> None:
        """测试缺少占位符的条目被丢弃."""
        policy_set = build_policy_set(
            [_entry("static", pattern="logs-static"), _entry("good")],
            reference_instant=REFERENCE,
        )
        assert policy_set.names() == ["good"]
        assert policy_set.rejected[0].name == "static"
        assert policy_set.rejected[0].error_type == "MissingPlaceholderError"
        assert "logs-static" in policy_set.rejected[0].reason

    def test_out_of_range_period_is_dropped(self) -> None:
        """测试超出可计算范围的时长只丢弃该条目."""
        policy_set = build_policy_set(
            [_entry("huge", delete="10000 years"), _entry("good")],
            reference_instant=REFERENCE,
        )
        assert policy_set.names() == ["good"]
        assert policy_set.rejected[0].name == "huge"
        assert policy_set.rejected[0].error_type == "InvalidDurationError"
        assert policy_set.smallest_period == Period(days=3)

    def test_incomplete_entry_is_dropped(self) -> None:
        """测试缺少字段的条目只丢弃该条目."""
        policy_set = build_policy_set(
            [_entry("partial", delete=""), _entry("good")],
            reference_instant=REFERENCE,
        )
        assert policy_set.names() == ["good"]
        assert policy_set.rejected[0].error_type == "IncompletePolicyError"

    def test_rejection_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """测试被拒绝的策略记录错误日志."""
        with caplog.at_level(logging.ERROR, logger="elasticurator.policies.builder"):
            build_policy_set([_entry("static", pattern="logs-static")], reference_instant=REFERENCE)
        assert any("[static]" in record.getMessage() for record in caplog.records)

    def test_duplicate_name_is_dropped(self) -> None:
        """测试重复名称的条目被丢弃，保留第一个."""
        policy_set = build_policy_set(
            [_entry("logs", "logs-%{YYYY.MM.dd}"), _entry("logs", "other-%{YYYY.MM.dd}")],
            reference_instant=REFERENCE,
        )
        assert len(policy_set) == 1
        assert policy_set.get("logs").template == "logs-%{YYYY.MM.dd}"
        assert policy_set.rejected[0].error_type == "DuplicatePolicyError"

    def test_empty(self) -> None:
        """测试没有有效策略."""
        policy_set = build_policy_set([_entry("bad", pattern="nope")], reference_instant=REFERENCE)
        assert policy_set.is_empty
        assert policy_set.smallest_period is None

    def test_no_entries(self) -> None:
        """测试空配置."""
        policy_set = build_policy_set([])
        assert policy_set.is_empty
        assert policy_set.reference_instant is not None

    def test_delete_shorter_than_close_is_accepted(self) -> None:
        """测试删除阈值短于关闭阈值时仍然接受."""
        policy_set = build_policy_set(
            [_entry(close="7 days", delete="3 days")], reference_instant=REFERENCE
        )
        assert policy_set.names() == ["logs"]

    def test_get_missing(self) -> None:
        """测试获取不存在的策略."""
        with pytest.raises(PolicyNotFoundError, match="策略 'missing' 不存在"):
            PolicySet().get("missing")

    def test_iteration(self) -> None:
        """测试迭代策略集合."""
        policy_set = build_policy_set([_entry("a"), _entry("b")], reference_instant=REFERENCE)
        assert [policy.name for policy in policy_set] == ["a", "b"]


class TestSmallestPeriod:
    """smallest_period 计算测试."""

    def test_smallest_across_policies(self) -> None:
        """测试跨策略取最短周期."""
        policy_set = build_policy_set(
            [
                _entry("a", close="3 days", delete="7 days"),
                _entry("b", close="12 hours", delete="2 days"),
            ],
            reference_instant=REFERENCE,
        )
        assert policy_set.smallest_period == Period(hours=12)

    def test_delete_can_be_smallest(self) -> None:
        """测试删除阈值也参与比较."""
        policy_set = build_policy_set(
            [_entry(close="7 days", delete="1 day")], reference_instant=REFERENCE
        )
        assert policy_set.smallest_period == Period(days=1)

    def test_tie_keeps_first_seen(self) -> None:
        """测试长度相同时保留先出现的."""
        policy_set = build_policy_set(
            [
                _entry("a", close="1 week", delete="2 weeks"),
                _entry("b", close="7 days", delete="14 days"),
            ],
            reference_instant=REFERENCE,
        )
        assert policy_set.smallest_period.expression == "1 week"

    def test_calendar_aware_comparison(self) -> None:
        """测试按锚点投影比较：二月的 1 个月短于 30 天."""
        policies = [
            compile_policy(_entry("a", close="30 days", delete="60 days")),
            compile_policy(_entry("b", close="1 month", delete="2 months")),
        ]
        february = datetime(2023, 2, 1, tzinfo=UTC)
        january = datetime(2023, 1, 1, tzinfo=UTC)
        assert find_smallest_period(policies, february) == Period(months=1)
        assert find_smallest_period(policies, january) == Period(days=30)

    def test_no_policies(self) -> None:
        """测试没有策略."""
        assert find_smallest_period([], REFERENCE) is None
