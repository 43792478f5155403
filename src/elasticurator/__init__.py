"""elasticurator - 按时间分区的 Elasticsearch 索引保留策略引擎.

为每个索引族声明一个带日期占位符的索引名模板以及关闭、删除两个时长阈值，
引擎从索引名中解析时间戳，计算索引年龄，并将索引分类为保留、关闭或删除。

主要功能:
    - parse_period: 解析 "3 days"、"2 months" 等时长表达式
    - compile_template: 将 "logs-%{YYYY.MM.dd}" 编译为索引名正则与日期格式
    - build_policy_set: 编译并校验一组策略，丢弃无效策略
    - classify / classify_indices: 对索引进行 keep / close / delete 分类
    - Curator: 按固定间隔执行清理

使用示例:
    from elasticurator import RawPolicyEntry, build_policy_set, classify_indices

    policy_set = build_policy_set(
        [RawPolicyEntry(name="logs", pattern="logs-%{YYYY.MM.dd}", close="3 days", delete="7 days")]
    )
    for item in classify_indices(policy_set, ["logs-2024.01.05", "logs-2023.12.31"]):
        print(item.index_name, item.action)
"""

__version__ = "0.1.0"

# 导出时长解析
from elasticurator.period import Period, PeriodParser, parse_period, project_from

# 导出模板编译
from elasticurator.template import CompiledTemplate, DateFormat, TemplateCompiler, compile_template

# 导出策略
from elasticurator.policies import (
    Classification,
    IndexAction,
    Policy,
    PolicySet,
    RawPolicyEntry,
    RejectedPolicy,
    build_policy_set,
    classify,
    classify_indices,
    compile_policy,
)

# 导出配置与运行
from elasticurator.config import CuratorConfig, load_config
from elasticurator.curator import Curator

# 导出异常
from elasticurator.exceptions import CuratorError
from elasticurator.period import InvalidDurationError
from elasticurator.template import (
    MalformedTemplateError,
    MissingPlaceholderError,
    TemplateError,
    UnparsableTimestampError,
)

__all__ = [
    # 版本
    "__version__",
    # 时长
    "Period",
    "PeriodParser",
    "parse_period",
    "project_from",
    # 模板
    "TemplateCompiler",
    "CompiledTemplate",
    "DateFormat",
    "compile_template",
    # 策略
    "RawPolicyEntry",
    "Policy",
    "PolicySet",
    "RejectedPolicy",
    "IndexAction",
    "Classification",
    "compile_policy",
    "build_policy_set",
    "classify",
    "classify_indices",
    # 配置与运行
    "CuratorConfig",
    "load_config",
    "Curator",
    # 异常
    "CuratorError",
    "InvalidDurationError",
    "TemplateError",
    "MissingPlaceholderError",
    "MalformedTemplateError",
    "UnparsableTimestampError",
]
