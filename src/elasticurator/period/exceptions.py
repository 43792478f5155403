"""时长解析异常定义模块."""

from ..exceptions import CuratorError


class PeriodError(CuratorError):
    """时长相关基础异常类."""

    pass


class InvalidDurationError(PeriodError):
    """时长表达式解析异常.

    当时长表达式为空、格式错误或使用了无法识别的单位时抛出，
    例如 "3 dayz"、"three days"、"-1 day"。
    """

    pass
