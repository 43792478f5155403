"""保留策略编译与校验模块.

将原始配置条目逐条编译为 Policy，单条失败只会丢弃该条目，
不会影响其他索引族的清理。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from ..exceptions import CuratorError
from ..period.exceptions import InvalidDurationError
from ..period.models import Period, ensure_utc
from ..period.tool import PeriodParser
from ..template.tool import TemplateCompiler
from .exceptions import DuplicatePolicyError, IncompletePolicyError
from .models import Policy, PolicySet, RawPolicyEntry, RejectedPolicy

logger = logging.getLogger(__name__)

_DEFAULT_PARSER = PeriodParser()
_DEFAULT_COMPILER = TemplateCompiler()


# 策略条目必需的非空字段
_REQUIRED_FIELDS: tuple[str, ...] = ("pattern", "close", "delete")


def _check_projectable(period: Period, label: str, reference_instant: datetime) -> None:
    """确认时长可以在锚点时刻上投影，超出 datetime 可表示范围时拒绝."""
    try:
        period.duration_from(reference_instant)
    except (OverflowError, ValueError) as e:
        raise InvalidDurationError(
            f"{label} 时长 {period.expression!r} 超出可计算范围: {e}"
        ) from e


def compile_policy(
    entry: RawPolicyEntry,
    parser: PeriodParser | None = None,
    compiler: TemplateCompiler | None = None,
    reference_instant: datetime | None = None,
) -> Policy:
    """编译单个策略配置条目.

    Args:
        entry: 原始配置条目
        parser: 时长解析器，默认使用内置解析器
        compiler: 模板编译器，默认使用内置编译器
        reference_instant: 校验时长可投影时使用的锚点时刻，默认为当前 UTC 时间

    Returns:
        编译后的 Policy

    Raises:
        IncompletePolicyError: pattern/close/delete 缺失时抛出
        InvalidDurationError: close/delete 时长无法解析或超出可计算范围时抛出
        TemplateError: 模板缺少占位符或日期格式无法识别时抛出
    """
    parser = parser or _DEFAULT_PARSER
    compiler = compiler or _DEFAULT_COMPILER
    reference_instant = ensure_utc(reference_instant or datetime.now(tz=UTC))

    missing = [name for name in _REQUIRED_FIELDS if not getattr(entry, name)]
    if missing:
        raise IncompletePolicyError(f"策略配置缺少必需字段: {', '.join(missing)}")

    close_period = parser.parse(entry.close)
    delete_period = parser.parse(entry.delete)
    _check_projectable(close_period, "close", reference_instant)
    _check_projectable(delete_period, "delete", reference_instant)
    compiled = compiler.compile(entry.pattern, policy_name=entry.name)

    return Policy(
        name=entry.name,
        template=entry.pattern,
        close_after=entry.close,
        delete_after=entry.delete,
        close_period=close_period,
        delete_period=delete_period,
        compiled=compiled,
    )


def find_smallest_period(
    policies: Iterable[Policy], reference_instant: datetime
) -> Period | None:
    """找出所有策略关闭/删除阈值中最短的一个.

    Period 长度不固定，因此以 reference_instant 为锚点投影后再比较。
    长度相同时保留先出现的（同一策略中 close 先于 delete）。

    Returns:
        最短的 Period，没有策略时返回 None
    """
    smallest: Period | None = None
    smallest_duration = None
    for policy in policies:
        for period in (policy.close_period, policy.delete_period):
            duration = period.duration_from(reference_instant)
            if smallest_duration is None or duration < smallest_duration:
                smallest, smallest_duration = period, duration
    return smallest


def build_policy_set(
    entries: Sequence[RawPolicyEntry],
    reference_instant: datetime | None = None,
) -> PolicySet:
    """编译并校验一组策略配置条目.

    任一条目编译失败（时长无法解析、模板缺少占位符等）时记录错误日志并跳过，
    继续处理后续条目。名称重复的条目同样会被跳过。

    Args:
        entries: 原始配置条目，按配置顺序
        reference_instant: 计算 smallest_period 的锚点时刻，默认为当前 UTC 时间

    Returns:
        不可变的 PolicySet
    """
    reference_instant = ensure_utc(reference_instant or datetime.now(tz=UTC))
    policies: list[Policy] = []
    rejected: list[RejectedPolicy] = []
    seen: set[str] = set()

    for entry in entries:
        logger.info(f"编译策略配置: {entry.name}")
        try:
            if entry.name in seen:
                raise DuplicatePolicyError(f"[{entry.name}] 策略名称重复")
            policy = compile_policy(entry, reference_instant=reference_instant)
        except CuratorError as e:
            logger.error(f"[{entry.name}] {e}")
            logger.error(f"[{entry.name}] 该索引族将被忽略")
            rejected.append(
                RejectedPolicy(name=entry.name, reason=str(e), error_type=type(e).__name__)
            )
            continue

        seen.add(entry.name)
        policies.append(policy)
        logger.info(
            f"[{policy.name}] 匹配索引 {policy.template}，"
            f"超过 {policy.close_period} 的索引将被关闭，"
            f"超过 {policy.delete_period} 的索引将被删除"
        )
        logger.info(
            f"[{policy.name}] 时间戳格式为 {policy.date_format.pattern}，"
            f"索引名正则为 {policy.name_pattern.pattern}"
        )
        if policy.delete_period.duration_from(
            reference_instant
        ) < policy.close_period.duration_from(reference_instant):
            logger.warning(
                f"[{policy.name}] 删除阈值 ({policy.delete_period}) 短于关闭阈值 "
                f"({policy.close_period})，索引将直接被删除而不会先关闭"
            )

    smallest_period = find_smallest_period(policies, reference_instant)
    if smallest_period is None:
        logger.warning("没有任何有效的保留策略")
    else:
        logger.info(f"最短的策略周期为 {smallest_period}")

    return PolicySet(
        policies=tuple(policies),
        smallest_period=smallest_period,
        reference_instant=reference_instant,
        rejected=tuple(rejected),
    )
