"""清理结果数据模型定义模块."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..policies.models import Classification


@dataclass
class CleanupResult:
    """单个清理周期的执行结果.

    Attributes:
        started_at: 本周期使用的参考时刻
        dry_run: 是否为试运行
        classifications: 所有匹配到策略的索引分类记录
        closed: 已关闭（试运行时为待关闭）的索引
        deleted: 已删除（试运行时为待删除）的索引
        kept: 保留的索引
        unmatched: 不属于任何策略的索引
        errors: 执行失败的索引及错误信息
    """

    started_at: datetime
    dry_run: bool = False
    classifications: list[Classification] = field(default_factory=list)
    closed: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    kept: list[str] = field(default_factory=list)
    unmatched: list[str] = field(default_factory=list)
    errors: list[dict[str, str]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """是否没有任何执行失败的索引."""
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """转换为字典，便于日志输出与序列化."""
        return {
            "success": self.success,
            "started_at": self.started_at.isoformat(),
            "dry_run": self.dry_run,
            "closed": list(self.closed),
            "deleted": list(self.deleted),
            "kept": list(self.kept),
            "unmatched_count": len(self.unmatched),
            "errors": list(self.errors),
        }
