"""索引名模板数据模型定义模块."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from ..period.models import ensure_utc
from .exceptions import InvalidDateFormatError, UnparsableTimestampError
from .utils import fraction_digits, joda_to_strftime, needs_weekday, render_fraction

# 用于编译期自检的样例时刻
_SAMPLE_INSTANT = datetime(2001, 2, 3, 4, 5, 6, 789000)


@dataclass(frozen=True)
class DateFormat:
    """时间戳片段的日期格式.

    Attributes:
        pattern: 占位符中声明的日期格式（已去除 "+"），如 "YYYY.MM.dd"
        strftime_format: 转换后的 strftime 格式，如 "%Y.%m.%d"
        fraction_digits: 渲染时秒的小数部分保留的位数，如 "SSS" 为 3
    """

    pattern: str
    strftime_format: str
    fraction_digits: int = 6

    @classmethod
    def from_pattern(cls, pattern: str) -> DateFormat:
        """根据占位符中的日期格式构建 DateFormat.

        含 "%" 的格式视为 strftime 格式直接使用，否则按 Joda 风格转换。
        构建完成后会用样例时刻做一次渲染-解析自检，确保该格式既能渲染也能解析。

        Raises:
            InvalidDateFormatError: 格式无法识别或无法往返解析时抛出
        """
        if "%" in pattern:
            strftime_format, digits = pattern, 6
        else:
            strftime_format, digits = joda_to_strftime(pattern), fraction_digits(pattern)

        if "%" not in strftime_format.replace("%%", ""):
            raise InvalidDateFormatError(f"日期格式 {pattern!r} 中没有任何时间字段")

        date_format = cls(
            pattern=pattern, strftime_format=strftime_format, fraction_digits=digits
        )
        try:
            date_format.parse(date_format.render(_SAMPLE_INSTANT))
        except (UnparsableTimestampError, ValueError) as e:
            raise InvalidDateFormatError(
                f"日期格式 {pattern!r} 无法用于解析时间戳: {e}"
            ) from e
        return date_format

    def parse(self, text: str) -> datetime:
        """将时间戳片段解析为 UTC 时刻.

        不含时区的时间戳视为 UTC。

        Raises:
            UnparsableTimestampError: 时间戳不符合日期格式时抛出
        """
        value, fmt = text, self.strftime_format
        if needs_weekday(fmt):
            # ISO 周格式解析时必须带星期，按周一处理
            value, fmt = f"{text} 1", f"{fmt} %u"
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError as e:
            raise UnparsableTimestampError(
                f"时间戳 {text!r} 不符合日期格式 {self.pattern!r}"
            ) from e
        return ensure_utc(parsed)

    def render(self, instant: datetime) -> str:
        """按日期格式渲染时刻（先转换为 UTC）."""
        instant = ensure_utc(instant)
        fmt = render_fraction(self.strftime_format, instant.microsecond, self.fraction_digits)
        return instant.strftime(fmt)


@dataclass(frozen=True)
class CompiledTemplate:
    """编译后的索引名模板.

    date_format 与 name_pattern 由同一次占位符提取得到，二者不会单独变化。

    Attributes:
        template: 原始模板，如 "logs-%{YYYY.MM.dd}"
        prefix: 占位符之前的字面量
        suffix: 占位符之后的字面量
        date_format: 时间戳日期格式
        name_pattern: 索引名正则，仅含一个捕获时间戳片段的分组
    """

    template: str
    prefix: str
    suffix: str
    date_format: DateFormat
    name_pattern: re.Pattern[str]

    def match(self, index_name: str) -> str | None:
        """匹配索引名并返回时间戳片段，不匹配时返回 None."""
        if not isinstance(index_name, str):
            return None
        m = self.name_pattern.fullmatch(index_name)
        if m is None:
            return None
        return m.group(1)

    def render(self, instant: datetime) -> str:
        """渲染指定时刻对应的索引名."""
        return f"{self.prefix}{self.date_format.render(instant)}{self.suffix}"

    @property
    def wildcard(self) -> str:
        """该索引族的 ES 通配符表达式，如 "logs-*"."""
        return f"{self.prefix}*{self.suffix}"
