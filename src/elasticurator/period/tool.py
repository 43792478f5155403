"""时长表达式解析器实现模块."""

from __future__ import annotations

import re
from datetime import datetime, timedelta

from .exceptions import InvalidDurationError
from .models import Period

# 单位词（单复数）到 Period 字段的映射
_UNIT_WORDS: dict[str, str] = {
    "millisecond": "milliseconds",
    "milliseconds": "milliseconds",
    "second": "seconds",
    "seconds": "seconds",
    "minute": "minutes",
    "minutes": "minutes",
    "hour": "hours",
    "hours": "hours",
    "day": "days",
    "days": "days",
    "week": "weeks",
    "weeks": "weeks",
    "month": "months",
    "months": "months",
    "year": "years",
    "years": "years",
}


class PeriodParser:
    """英文单词格式的时长表达式解析器.

    语法为若干 "<整数> <单位>" 对，之间以空白、逗号或 "and" 分隔：

        3 days
        2 months 3 days
        1 day, 2 hours and 30 minutes

    单位支持 millisecond、second、minute、hour、day、week、month、year
    的单复数形式，不区分大小写。同一单位只能出现一次。

    Examples:
        >>> parser = PeriodParser()
        >>> str(parser.parse("1 day, 2 hours and 30 minutes"))
        '1 day, 2 hours and 30 minutes'
    """

    # 匹配 "<数量><可选空白><单位词>"
    _TERM_PATTERN = re.compile(r"(\d+)\s*([A-Za-z]+)")

    # 匹配两个数量单位对之间的分隔符
    _SEPARATOR_PATTERN = re.compile(r"^(?:\s*,\s*|\s+)(?:and\s+)?$", re.IGNORECASE)

    def parse(self, text: str) -> Period:
        """解析时长表达式.

        Args:
            text: 时长表达式，如 "3 days"

        Returns:
            Period 对象

        Raises:
            InvalidDurationError: 表达式为空、格式错误、单位无法识别、单位重复或时长为 0
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidDurationError(f"时长表达式不能为空: {text!r}")

        expression = text.strip()
        amounts: dict[str, int] = {}
        position = 0

        for match in self._TERM_PATTERN.finditer(expression):
            gap = expression[position : match.start()]
            if position == 0:
                if gap:
                    raise InvalidDurationError(
                        f"时长表达式格式错误: {text!r}，无法识别 {gap!r}"
                    )
            elif not self._SEPARATOR_PATTERN.match(gap):
                raise InvalidDurationError(
                    f"时长表达式格式错误: {text!r}，无法识别的分隔符 {gap!r}"
                )

            amount, word = int(match.group(1)), match.group(2).lower()
            unit = _UNIT_WORDS.get(word)
            if unit is None:
                raise InvalidDurationError(
                    f"时长表达式 {text!r} 中包含无法识别的单位: {match.group(2)!r}"
                )
            if unit in amounts:
                raise InvalidDurationError(
                    f"时长表达式 {text!r} 中单位 {unit!r} 重复出现"
                )
            amounts[unit] = amount
            position = match.end()

        if not amounts or position != len(expression):
            raise InvalidDurationError(
                f"时长表达式格式错误: {text!r}，应为 '<数量> <单位>' 形式（如 '3 days'）"
            )

        period = Period(expression=expression, **amounts)
        if period.is_zero:
            raise InvalidDurationError(f"时长必须大于 0: {text!r}")
        return period


_DEFAULT_PARSER = PeriodParser()


def parse_period(text: str) -> Period:
    """使用默认解析器解析时长表达式.

    Raises:
        InvalidDurationError: 表达式无法解析时抛出
    """
    return _DEFAULT_PARSER.parse(text)


def project_from(period: Period, reference_instant: datetime) -> timedelta:
    """以 reference_instant 为锚点将 Period 投影为绝对时长."""
    return period.duration_from(reference_instant)
