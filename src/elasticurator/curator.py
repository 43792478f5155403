"""保留策略引擎启动模块.

将配置、ES 客户端、策略集合、清理服务与调度器组装在一起。
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from elasticsearch import Elasticsearch

from .cleanup.models import CleanupResult
from .cleanup.scheduler import CleanupScheduler
from .cleanup.service import CuratorService
from .config.models import CuratorConfig
from .connection.tool import create_client
from .index_manager.tool import IndexManager
from .policies.builder import build_policy_set
from .policies.models import PolicySet

logger = logging.getLogger(__name__)


class Curator:
    """保留策略引擎.

    Args:
        config: 引擎配置
        es_client: Elasticsearch 客户端，默认根据 config.cluster 创建

    Examples:
        >>> with Curator(load_config("curator.yml")) as curator:
        ...     curator.scheduler.wait()
    """

    def __init__(self, config: CuratorConfig, es_client: Elasticsearch | None = None) -> None:
        self._config = config
        self._es_client = es_client or create_client(config.cluster)
        self.index_manager = IndexManager(self._es_client)

        policy_set = build_policy_set(config.policies)
        self.service = CuratorService(self.index_manager, policy_set, dry_run=config.dry_run)
        self.scheduler = CleanupScheduler(
            self.service.do_cleanup,
            initial_delay=config.initial_delay_seconds(),
            repeat_delay=config.repeat_delay_seconds(),
        )
        self._log_interval_hint(policy_set)

    @property
    def config(self) -> CuratorConfig:
        return self._config

    @property
    def policy_set(self) -> PolicySet:
        return self.service.policy_set

    def _log_interval_hint(self, policy_set: PolicySet) -> None:
        """最短策略周期短于清理间隔时给出提示，不修改调度间隔."""
        if policy_set.smallest_period is None:
            return
        now = datetime.now(tz=UTC)
        smallest = policy_set.smallest_period.duration_from(now).total_seconds()
        if smallest < self._config.repeat_delay_seconds(now):
            logger.warning(
                f"最短的策略周期 ({policy_set.smallest_period}) 短于清理间隔 "
                f"({self._config.repeat_delay_period})，索引的关闭/删除可能会延后"
            )

    def reload(self, config: CuratorConfig) -> PolicySet:
        """重新加载策略配置.

        构建新的 PolicySet 并替换服务持有的引用；调度间隔与集群连接不会改变。

        Returns:
            新的 PolicySet
        """
        if (
            config.initial_delay_period != self._config.initial_delay_period
            or config.repeat_delay_period != self._config.repeat_delay_period
        ):
            logger.warning("调度间隔的修改需要重启后生效")
        policy_set = build_policy_set(config.policies)
        self.service.reload(policy_set)
        self.service.dry_run = config.dry_run
        self._config = config
        self._log_interval_hint(policy_set)
        return policy_set

    def run_once(self) -> CleanupResult:
        """立即执行一次清理."""
        return self.scheduler.run_now()

    def start(self) -> None:
        self.scheduler.start()

    def stop(self, timeout: float = 10.0) -> None:
        self.scheduler.stop(timeout=timeout)

    def __enter__(self) -> Curator:
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
