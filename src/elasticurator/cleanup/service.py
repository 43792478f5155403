"""清理服务模块.

单个清理周期：取一次索引列表快照 → 按 PolicySet 分类 → 执行关闭/删除。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from ..exceptions import CuratorError
from ..index_manager.tool import IndexManager
from ..period.models import ensure_utc
from ..policies.classifier import classify_indices
from ..policies.models import IndexAction, PolicySet
from .models import CleanupResult

logger = logging.getLogger(__name__)

_ACTION_LABELS: dict[IndexAction, str] = {
    IndexAction.CLOSE: "关闭",
    IndexAction.DELETE: "删除",
}


class CuratorService:
    """保留策略清理服务.

    持有当前 PolicySet 的引用；重新加载配置时通过 reload() 整体替换引用，
    正在执行的清理周期继续使用开始时取到的快照。

    Args:
        index_manager: IndexManager 实例
        policy_set: 当前生效的策略集合
        dry_run: 试运行模式，为 True 时只返回分类结果不实际关闭/删除（默认 False）
        now_func: 自定义获取当前时间的函数，主要用于测试

    Examples:
        >>> service = CuratorService(IndexManager(es_client), build_policy_set(entries))
        >>> result = service.do_cleanup()
        >>> result.deleted
        ['logs-2023.12.31']
    """

    def __init__(
        self,
        index_manager: IndexManager,
        policy_set: PolicySet,
        dry_run: bool = False,
        now_func: Callable[[], datetime] | None = None,
    ) -> None:
        self._index_manager = index_manager
        self._policy_set = policy_set
        self.dry_run = dry_run
        self._now_func = now_func

    @property
    def policy_set(self) -> PolicySet:
        """当前生效的策略集合."""
        return self._policy_set

    def reload(self, policy_set: PolicySet) -> None:
        """发布新的策略集合."""
        self._policy_set = policy_set
        logger.info(f"策略集合已更新，共 {len(policy_set)} 条有效策略")

    def _now(self) -> datetime:
        if self._now_func is not None:
            return ensure_utc(self._now_func())
        return datetime.now(tz=UTC)

    def do_cleanup(self, now: datetime | None = None) -> CleanupResult:
        """执行一次清理.

        单个索引的关闭/删除失败会记录到结果的 errors 中，不会中断本周期。

        Args:
            now: 参考时刻，默认为当前时间

        Returns:
            CleanupResult 对象

        Raises:
            IndexManagerError: 获取索引列表失败时抛出
        """
        policy_set = self._policy_set
        now = ensure_utc(now) if now is not None else self._now()
        result = CleanupResult(started_at=now, dry_run=self.dry_run)

        if policy_set.is_empty:
            logger.warning("没有有效的保留策略，跳过本次清理")
            return result

        states = self._index_manager.list_index_states()
        index_names = sorted(states)
        result.classifications = classify_indices(policy_set, index_names, now)
        matched = {item.index_name for item in result.classifications}
        result.unmatched = [name for name in index_names if name not in matched]

        for item in result.classifications:
            if item.action == IndexAction.KEEP:
                result.kept.append(item.index_name)
            elif item.action == IndexAction.DELETE:
                self._execute(result, item.index_name, item.policy_name, IndexAction.DELETE)
            elif states.get(item.index_name) == "close":
                logger.debug(f"[{item.policy_name}] 索引 '{item.index_name}' 已处于关闭状态")
            else:
                self._execute(result, item.index_name, item.policy_name, IndexAction.CLOSE)

        logger.info(
            f"清理完成: 关闭 {len(result.closed)} 个，删除 {len(result.deleted)} 个，"
            f"保留 {len(result.kept)} 个，失败 {len(result.errors)} 个"
            + ("（试运行）" if self.dry_run else "")
        )
        return result

    def _execute(
        self,
        result: CleanupResult,
        index_name: str,
        policy_name: str,
        action: IndexAction,
    ) -> None:
        """执行单个索引的关闭或删除操作."""
        done = result.deleted if action == IndexAction.DELETE else result.closed
        if self.dry_run:
            logger.info(f"[{policy_name}] 试运行: 将{_ACTION_LABELS[action]}索引 '{index_name}'")
            done.append(index_name)
            return

        operation = (
            self._index_manager.delete_index
            if action == IndexAction.DELETE
            else self._index_manager.close_index
        )
        try:
            if operation(index_name):
                done.append(index_name)
            else:
                result.errors.append(
                    {
                        "index": index_name,
                        "action": action.value,
                        "error": f"{_ACTION_LABELS[action]}返回 False",
                    }
                )
        except (CuratorError, ValueError) as e:
            logger.error(f"[{policy_name}] {_ACTION_LABELS[action]}索引 '{index_name}' 失败: {e}")
            result.errors.append(
                {"index": index_name, "action": action.value, "error": str(e)}
            )

