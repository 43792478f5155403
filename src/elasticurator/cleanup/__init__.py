"""清理执行子模块.

- CuratorService: 单个清理周期（列出索引 → 分类 → 关闭/删除）
- CleanupScheduler: 固定延迟的后台调度器，清理周期之间不会重叠
- CleanupResult: 单个清理周期的执行结果
"""

from .exceptions import SchedulerError
from .models import CleanupResult
from .scheduler import CleanupScheduler
from .service import CuratorService

__all__ = [
    "CuratorService",
    "CleanupScheduler",
    "CleanupResult",
    "SchedulerError",
]
