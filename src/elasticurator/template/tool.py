"""索引名模板编译器实现模块."""

from __future__ import annotations

import logging
import re

from .exceptions import MalformedTemplateError, MissingPlaceholderError
from .models import CompiledTemplate, DateFormat

logger = logging.getLogger(__name__)


class TemplateCompiler:
    """索引名模板编译器.

    模板中必须包含且只包含一个 %{date-format} 占位符。编译过程：

    1. 定位占位符，取出其中的日期格式
    2. 去除日期格式中所有的 "+"（历史写法遗留，无实际含义）
    3. 以转义后的前缀 + "(.+)" + 转义后的后缀构建索引名正则

    Examples:
        >>> compiler = TemplateCompiler()
        >>> compiled = compiler.compile("logs-%{+YYYY.MM.dd}")
        >>> compiled.date_format.pattern
        'YYYY.MM.dd'
        >>> compiled.name_pattern.pattern
        'logs\\\\-(.+)'
    """

    _PLACEHOLDER_OPEN = "%{"

    # 匹配完整的占位符，内容中不允许出现 "}"
    _PLACEHOLDER_PATTERN = re.compile(r"%\{([^}]*)\}")

    def compile(self, template: str, policy_name: str = "") -> CompiledTemplate:
        """编译索引名模板.

        Args:
            template: 索引名模板，如 "logs-%{YYYY.MM.dd}"
            policy_name: 所属策略名称，仅用于错误信息

        Returns:
            CompiledTemplate 对象

        Raises:
            MissingPlaceholderError: 模板中没有占位符时抛出
            MalformedTemplateError: 占位符未闭合、为空或不止一个时抛出
            InvalidDateFormatError: 占位符中的日期格式无法识别时抛出
        """
        label = f"[{policy_name}] " if policy_name else ""

        if not isinstance(template, str) or self._PLACEHOLDER_OPEN not in template:
            raise MissingPlaceholderError(
                f"{label}模板 {template!r} 中没有时间戳占位符，"
                "请使用 %{date-pattern} 指定时间戳格式"
            )

        opened = template.count(self._PLACEHOLDER_OPEN)
        matches = list(self._PLACEHOLDER_PATTERN.finditer(template))
        if opened > 1 or len(matches) > 1:
            raise MalformedTemplateError(
                f"{label}模板 {template!r} 中包含多个占位符，只允许一个时间戳占位符"
            )
        if not matches:
            raise MalformedTemplateError(f"{label}模板 {template!r} 中的占位符未闭合")

        placeholder = matches[0]
        date_pattern = placeholder.group(1).replace("+", "")
        if not date_pattern:
            raise MalformedTemplateError(f"{label}模板 {template!r} 中的占位符没有日期格式")

        date_format = DateFormat.from_pattern(date_pattern)
        prefix = template[: placeholder.start()]
        suffix = template[placeholder.end() :]
        name_pattern = re.compile(f"{re.escape(prefix)}(.+){re.escape(suffix)}")

        logger.debug(
            f"{label}时间戳格式为 {date_pattern}，索引名正则为 {name_pattern.pattern}"
        )
        return CompiledTemplate(
            template=template,
            prefix=prefix,
            suffix=suffix,
            date_format=date_format,
            name_pattern=name_pattern,
        )


_DEFAULT_COMPILER = TemplateCompiler()


def compile_template(template: str, policy_name: str = "") -> CompiledTemplate:
    """使用默认编译器编译索引名模板."""
    return _DEFAULT_COMPILER.compile(template, policy_name=policy_name)
