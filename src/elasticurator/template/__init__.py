"""索引名模板编译子模块.

将形如 "logs-%{YYYY.MM.dd}" 的索引名模板编译为：
- DateFormat: 用于解析/渲染时间戳片段的日期格式
- name_pattern: 仅含一个捕获组的正则，用于识别同一索引族的索引名并提取时间戳片段

示例用法:
    >>> from elasticurator.template import compile_template
    >>> compiled = compile_template("logs-%{YYYY.MM.dd}")
    >>> compiled.match("logs-2024.01.09")
    '2024.01.09'
    >>> compiled.date_format.parse("2024.01.09")
    datetime.datetime(2024, 1, 9, 0, 0, tzinfo=datetime.timezone.utc)
"""

from .exceptions import (
    InvalidDateFormatError,
    MalformedTemplateError,
    MissingPlaceholderError,
    TemplateError,
    UnparsableTimestampError,
)
from .models import CompiledTemplate, DateFormat
from .tool import TemplateCompiler, compile_template
from .utils import fraction_digits, joda_to_strftime

__all__ = [
    # 编译器
    "TemplateCompiler",
    "compile_template",
    # 数据模型
    "CompiledTemplate",
    "DateFormat",
    # 工具函数
    "joda_to_strftime",
    "fraction_digits",
    # 异常
    "TemplateError",
    "MissingPlaceholderError",
    "MalformedTemplateError",
    "InvalidDateFormatError",
    "UnparsableTimestampError",
]
