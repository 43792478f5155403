"""时长解析子模块.

将人类可读的时长表达式（如 "3 days"、"2 months and 3 days"）解析为
按日历计算的 Period 对象，并可在指定锚点时刻上投影为绝对时长。

示例用法:
    >>> from elasticurator.period import parse_period, project_from
    >>> period = parse_period("1 month")
    >>> project_from(period, datetime(2024, 2, 1, tzinfo=UTC))
    datetime.timedelta(days=29)
"""

from .exceptions import InvalidDurationError, PeriodError
from .models import PERIOD_FIELDS, Period, ensure_utc
from .tool import PeriodParser, parse_period, project_from

__all__ = [
    # 解析器
    "PeriodParser",
    "parse_period",
    "project_from",
    # 数据模型
    "Period",
    "PERIOD_FIELDS",
    "ensure_utc",
    # 异常
    "PeriodError",
    "InvalidDurationError",
]
