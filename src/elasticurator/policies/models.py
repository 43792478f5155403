"""保留策略数据模型定义模块.

- RawPolicyEntry: 原始配置条目
- Policy: 编译后的保留策略
- PolicySet: 一次配置加载得到的不可变策略集合
- IndexAction: 索引分类结果
- Classification: 单个索引的分类记录
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..period.models import Period
from ..template.models import CompiledTemplate, DateFormat
from .exceptions import PolicyNotFoundError


class IndexAction(str, Enum):
    """索引分类结果."""

    KEEP = "keep"
    CLOSE = "close"
    DELETE = "delete"


@dataclass(frozen=True)
class RawPolicyEntry:
    """原始策略配置条目.

    Attributes:
        name: 策略名称，配置内唯一，仅用于诊断
        pattern: 索引名模板，如 "logs-%{YYYY.MM.dd}"
        close: 关闭阈值时长表达式，如 "3 days"
        delete: 删除阈值时长表达式，如 "7 days"
    """

    name: str
    pattern: str
    close: str
    delete: str


@dataclass(frozen=True)
class Policy:
    """编译后的保留策略.

    只能由 compile_policy() 构建，所有字段在编译时一次性生成。

    Attributes:
        name: 策略名称
        template: 原始索引名模板
        close_after: 原始关闭阈值表达式
        delete_after: 原始删除阈值表达式
        close_period: 关闭阈值
        delete_period: 删除阈值
        compiled: 编译后的模板（日期格式与索引名正则）
    """

    name: str
    template: str
    close_after: str
    delete_after: str
    close_period: Period
    delete_period: Period
    compiled: CompiledTemplate

    @property
    def date_format(self) -> DateFormat:
        return self.compiled.date_format

    @property
    def name_pattern(self) -> re.Pattern[str]:
        return self.compiled.name_pattern


@dataclass(frozen=True)
class RejectedPolicy:
    """被拒绝的策略记录.

    Attributes:
        name: 策略名称
        reason: 拒绝原因
        error_type: 异常类型名称，如 "InvalidDurationError"
    """

    name: str
    reason: str
    error_type: str = ""


@dataclass(frozen=True)
class PolicySet:
    """一次配置加载得到的不可变策略集合.

    重新加载配置时应构建新的 PolicySet 并整体替换引用，而不是修改已有对象。

    Attributes:
        policies: 有效策略，保持配置中的顺序
        smallest_period: 所有有效策略关闭/删除阈值中最短的一个，无有效策略时为 None
        reference_instant: 计算 smallest_period 时使用的锚点时刻
        rejected: 被拒绝的策略记录
    """

    policies: tuple[Policy, ...] = ()
    smallest_period: Period | None = None
    reference_instant: datetime | None = None
    rejected: tuple[RejectedPolicy, ...] = ()

    @property
    def is_empty(self) -> bool:
        """是否没有任何有效策略."""
        return not self.policies

    def names(self) -> list[str]:
        """返回所有有效策略的名称."""
        return [policy.name for policy in self.policies]

    def get(self, name: str) -> Policy:
        """按名称获取策略.

        Raises:
            PolicyNotFoundError: 策略不存在时抛出
        """
        for policy in self.policies:
            if policy.name == name:
                return policy
        raise PolicyNotFoundError(f"策略 '{name}' 不存在")

    def __len__(self) -> int:
        return len(self.policies)

    def __iter__(self) -> Iterator[Policy]:
        return iter(self.policies)


@dataclass(frozen=True)
class Classification:
    """单个索引的分类记录.

    Attributes:
        index_name: 索引名称
        policy_name: 匹配到的策略名称
        action: 分类结果
        timestamp: 从索引名中解析出的时间戳（UTC）
    """

    index_name: str
    policy_name: str
    action: IndexAction
    timestamp: datetime
