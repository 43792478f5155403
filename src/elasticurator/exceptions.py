"""elasticurator 异常定义模块."""


class CuratorError(Exception):
    """elasticurator 基础异常类."""

    pass
