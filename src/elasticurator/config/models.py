"""配置数据模型定义模块."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from ..connection.models import ClusterConfig
from ..period.exceptions import InvalidDurationError
from ..period.models import Period
from ..period.tool import parse_period
from ..policies.models import RawPolicyEntry
from .exceptions import ConfigurationError

DEFAULT_INITIAL_DELAY = "1 minute"
DEFAULT_REPEAT_DELAY = "1 hour"


@dataclass
class CuratorConfig:
    """保留策略引擎配置.

    Attributes:
        policies: 原始策略配置条目，按配置顺序
        initial_delay: 首次清理前的等待时长表达式
        repeat_delay: 两次清理之间的等待时长表达式
        cluster: 集群连接配置
        dry_run: 试运行模式，只输出分类结果不执行关闭/删除

    Raises:
        ConfigurationError: initial_delay 或 repeat_delay 无法解析时抛出
    """

    policies: list[RawPolicyEntry] = field(default_factory=list)
    initial_delay: str = DEFAULT_INITIAL_DELAY
    repeat_delay: str = DEFAULT_REPEAT_DELAY
    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    dry_run: bool = False
    initial_delay_period: Period = field(init=False, repr=False)
    repeat_delay_period: Period = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """校验全局时长配置."""
        try:
            self.initial_delay_period = parse_period(self.initial_delay)
            self.repeat_delay_period = parse_period(self.repeat_delay)
            now = datetime.now(tz=UTC)
            self.initial_delay_period.duration_from(now)
            self.repeat_delay_period.duration_from(now)
        except (InvalidDurationError, OverflowError, ValueError) as e:
            raise ConfigurationError(f"调度时长配置不合法: {e}") from e

    def initial_delay_seconds(self, now: datetime | None = None) -> float:
        """首次清理前的等待秒数."""
        return _to_seconds(self.initial_delay_period, now)

    def repeat_delay_seconds(self, now: datetime | None = None) -> float:
        """两次清理之间的等待秒数."""
        return _to_seconds(self.repeat_delay_period, now)


def _to_seconds(period: Period, now: datetime | None) -> float:
    return period.duration_from(now or datetime.now(tz=UTC)).total_seconds()
