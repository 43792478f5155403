"""索引分类模块.

根据索引名中嵌入的时间戳与当前时刻的差值，判断索引应保留、关闭还是删除。
所有函数都是纯函数，可在多个线程中对同一 PolicySet 并发调用。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from ..period.models import Period, ensure_utc
from ..template.exceptions import UnparsableTimestampError
from .models import Classification, IndexAction, Policy, PolicySet

logger = logging.getLogger(__name__)


def extract_timestamp(policy: Policy, index_name: str) -> datetime | None:
    """从索引名中提取时间戳.

    索引名与模板不匹配，或时间戳片段无法解析时返回 None。
    """
    captured = policy.compiled.match(index_name)
    if captured is None:
        return None
    try:
        return policy.date_format.parse(captured)
    except UnparsableTimestampError as e:
        logger.debug(f"[{policy.name}] 忽略索引 {index_name}: {e}")
        return None


def decide_action(policy: Policy, timestamp: datetime, now: datetime) -> IndexAction:
    """根据时间戳判断索引的处理方式.

    阈值以索引时间戳为锚点计算，先判断删除再判断关闭，
    同时满足两者时只删除。阈值时刻超出可表示范围时视为未到达。
    """
    now = ensure_utc(now)
    if _threshold_reached(policy.delete_period, timestamp, now):
        return IndexAction.DELETE
    if _threshold_reached(policy.close_period, timestamp, now):
        return IndexAction.CLOSE
    return IndexAction.KEEP


def _threshold_reached(period: Period, timestamp: datetime, now: datetime) -> bool:
    try:
        return period.add_to(timestamp) <= now
    except (OverflowError, ValueError):
        # 阈值时刻超出 datetime 可表示范围，视为永远不会到达
        return False


def classify(policy: Policy, index_name: str, now: datetime) -> IndexAction | None:
    """对单个索引分类.

    Args:
        policy: 保留策略
        index_name: 索引名称
        now: 当前时刻，naive datetime 视为 UTC

    Returns:
        分类结果；索引不属于该策略时返回 None

    Examples:
        >>> classify(policy, "logs-2024.01.05", datetime(2024, 1, 10))
        <IndexAction.CLOSE: 'close'>
    """
    timestamp = extract_timestamp(policy, index_name)
    if timestamp is None:
        return None
    return decide_action(policy, timestamp, now)


def classify_indices(
    policy_set: PolicySet,
    index_names: Iterable[str],
    now: datetime | None = None,
) -> list[Classification]:
    """对一批索引分类.

    每个索引按配置顺序尝试各策略，由第一个匹配的策略决定分类结果；
    不属于任何策略的索引不出现在结果中。

    Args:
        policy_set: 策略集合
        index_names: 索引名称列表
        now: 当前时刻，默认为当前 UTC 时间

    Returns:
        分类记录列表，顺序与 index_names 一致
    """
    now = ensure_utc(now or datetime.now(tz=UTC))
    results: list[Classification] = []
    for index_name in index_names:
        for policy in policy_set.policies:
            timestamp = extract_timestamp(policy, index_name)
            if timestamp is None:
                continue
            results.append(
                Classification(
                    index_name=index_name,
                    policy_name=policy.name,
                    action=decide_action(policy, timestamp, now),
                    timestamp=timestamp,
                )
            )
            break
    return results
