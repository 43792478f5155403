"""时长数据模型定义模块."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from dateutil.relativedelta import relativedelta

# Period 字段顺序，同时决定渲染顺序
PERIOD_FIELDS: tuple[str, ...] = (
    "years",
    "months",
    "weeks",
    "days",
    "hours",
    "minutes",
    "seconds",
    "milliseconds",
)


def ensure_utc(instant: datetime) -> datetime:
    """将 datetime 规范化为 UTC tz-aware.

    naive datetime 视为 UTC，tz-aware datetime 转换为 UTC。
    """
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


@dataclass(frozen=True)
class Period:
    """按日历计算的时长.

    与固定秒数的 timedelta 不同，"1 month" 在不同锚点时刻上对应的
    绝对时长不同（28 ~ 31 天），因此解析后保持各单位的原始数量，
    只有在 duration_from() 时才结合锚点时刻计算绝对时长。

    Attributes:
        years: 年
        months: 月
        weeks: 周
        days: 天
        hours: 小时
        minutes: 分钟
        seconds: 秒
        milliseconds: 毫秒
        expression: 原始时长表达式，仅用于日志与诊断，不参与比较

    Examples:
        >>> period = Period(months=1, expression="1 month")
        >>> period.duration_from(datetime(2024, 2, 1))
        datetime.timedelta(days=29)
    """

    years: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0
    expression: str = field(default="", compare=False)

    @property
    def is_zero(self) -> bool:
        """是否所有单位数量均为 0."""
        return all(getattr(self, name) == 0 for name in PERIOD_FIELDS)

    def to_relativedelta(self) -> relativedelta:
        """转换为 dateutil 的 relativedelta."""
        return relativedelta(
            years=self.years,
            months=self.months,
            weeks=self.weeks,
            days=self.days,
            hours=self.hours,
            minutes=self.minutes,
            seconds=self.seconds,
            microseconds=self.milliseconds * 1000,
        )

    def add_to(self, instant: datetime) -> datetime:
        """以 instant 为锚点加上该时长.

        年、月先于其他单位相加，月末日期会被截断（如 1 月 31 日加 1 个月为 2 月 29 日）。

        Args:
            instant: 锚点时刻，naive datetime 视为 UTC

        Returns:
            UTC tz-aware 的结果时刻
        """
        return ensure_utc(instant) + self.to_relativedelta()

    def duration_from(self, instant: datetime) -> timedelta:
        """以 instant 为锚点，将该时长投影为绝对时长.

        Args:
            instant: 锚点时刻，naive datetime 视为 UTC

        Returns:
            绝对时长
        """
        start = ensure_utc(instant)
        return self.add_to(start) - start

    def __str__(self) -> str:
        parts = []
        for name in PERIOD_FIELDS:
            amount = getattr(self, name)
            if amount:
                unit = name if amount != 1 else name[:-1]
                parts.append(f"{amount} {unit}")
        if not parts:
            return "0 milliseconds"
        if len(parts) == 1:
            return parts[0]
        return ", ".join(parts[:-1]) + " and " + parts[-1]
