"""清理调度异常定义模块."""

from ..exceptions import CuratorError


class SchedulerError(CuratorError):
    """调度器配置或状态异常."""

    pass
