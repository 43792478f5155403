"""保留策略异常定义模块."""

from ..exceptions import CuratorError


class PolicyError(CuratorError):
    """保留策略基础异常类."""

    pass


class DuplicatePolicyError(PolicyError):
    """策略名称重复异常.

    同一份配置中策略名称必须唯一，重复出现的策略会被拒绝。
    """

    pass


class PolicyNotFoundError(PolicyError):
    """策略未找到异常."""

    pass


class IncompletePolicyError(PolicyError):
    """策略配置缺少必需字段异常.

    pattern、close、delete 任一为空时抛出，只拒绝该条策略。
    """

    pass
