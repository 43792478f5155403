"""配置加载异常定义模块."""

from ..exceptions import CuratorError


class ConfigurationError(CuratorError):
    """配置文件异常.

    配置文件不存在、无法解析或结构不合法时抛出。
    单条策略的语义错误（时长、模板）不在此处处理，由策略校验阶段跳过该条目。
    """

    pass
