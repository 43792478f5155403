"""索引名模板编译异常定义模块."""

from ..exceptions import CuratorError


class TemplateError(CuratorError):
    """索引名模板基础异常类."""

    pass


class MissingPlaceholderError(TemplateError):
    """模板中缺少时间戳占位符异常.

    当模板中找不到 %{date-format} 形式的占位符时抛出，例如 "logs-static"。
    """

    pass


class MalformedTemplateError(MissingPlaceholderError):
    """模板占位符格式错误异常.

    占位符未闭合、内容为空或出现多个占位符时抛出。
    格式错误的占位符同样意味着模板中没有可识别的占位符。
    """

    pass


class InvalidDateFormatError(TemplateError):
    """占位符中的日期格式无法识别异常."""

    pass


class UnparsableTimestampError(TemplateError):
    """时间戳解析异常.

    索引名与模板字面结构匹配，但时间戳片段无法按日期格式解析。
    仅在内部使用，匹配阶段会将其视为"不属于该索引族"。
    """

    pass
