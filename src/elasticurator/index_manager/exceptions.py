"""索引管理器异常定义模块."""

from ..exceptions import CuratorError


class IndexManagerError(CuratorError):
    """索引管理器基础异常类.

    当 ES 请求因索引不存在以外的原因失败时抛出。
    """

    pass
