"""索引管理器模块.

封装保留策略执行所需的集群操作：
- 列出当前存在的索引（每个清理周期取一次快照）
- 关闭索引
- 删除索引

示例用法:
    >>> from elasticurator.index_manager import IndexManager
    >>> manager = IndexManager(es_client)
    >>> manager.list_index_names("logs-*")
    ['logs-2024.01.09', 'logs-2024.01.10']
    >>> manager.close_index("logs-2024.01.09")
    True
"""

from .exceptions import IndexManagerError
from .tool import IndexManager

__all__ = [
    "IndexManager",
    "IndexManagerError",
]
