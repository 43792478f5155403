"""保留策略子模块.

提供保留策略的编译、校验与索引分类功能：
- compile_policy / build_policy_set: 将原始配置条目编译为不可变的 PolicySet
- classify / classify_indices: 根据索引名中的时间戳判断 keep / close / delete

示例用法:
    >>> from elasticurator.policies import RawPolicyEntry, build_policy_set, classify_indices
    >>> policy_set = build_policy_set(
    ...     [RawPolicyEntry(name="logs", pattern="logs-%{YYYY.MM.dd}", close="3 days", delete="7 days")]
    ... )
    >>> classify_indices(policy_set, ["logs-2024.01.05"], now=datetime(2024, 1, 10))
"""

from .builder import build_policy_set, compile_policy, find_smallest_period
from .classifier import classify, classify_indices, decide_action, extract_timestamp
from .exceptions import (
    DuplicatePolicyError,
    IncompletePolicyError,
    PolicyError,
    PolicyNotFoundError,
)
from .models import (
    Classification,
    IndexAction,
    Policy,
    PolicySet,
    RawPolicyEntry,
    RejectedPolicy,
)

__all__ = [
    # 编译与校验
    "compile_policy",
    "build_policy_set",
    "find_smallest_period",
    # 分类
    "classify",
    "classify_indices",
    "decide_action",
    "extract_timestamp",
    # 数据模型
    "RawPolicyEntry",
    "Policy",
    "PolicySet",
    "RejectedPolicy",
    "IndexAction",
    "Classification",
    # 异常
    "PolicyError",
    "DuplicatePolicyError",
    "IncompletePolicyError",
    "PolicyNotFoundError",
]
