"""配置文件加载模块.

配置加载只有这一条路径：读取 YAML → 校验结构 → 构建 CuratorConfig。
每次调用都会重新读取文件，不做进程级缓存；重新加载配置即再次调用 load_config()。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..connection.exceptions import ConnectionConfigError
from ..connection.models import ClusterConfig
from ..policies.models import RawPolicyEntry
from .exceptions import ConfigurationError
from .models import DEFAULT_INITIAL_DELAY, DEFAULT_REPEAT_DELAY, CuratorConfig

logger = logging.getLogger(__name__)

# 策略条目字段
_ENTRY_FIELDS: tuple[str, ...] = ("name", "pattern", "close", "delete")

# elasticsearch 配置段支持的字段
_CLUSTER_FIELDS: tuple[str, ...] = (
    "hosts",
    "username",
    "password",
    "api_key",
    "bearer_token",
    "ca_certs",
    "verify_certs",
)


def _parse_entry(position: int, raw: Any) -> RawPolicyEntry:
    """构建单个策略条目.

    缺失的字段以空字符串保留，由策略编译阶段拒绝该条策略，不影响其他条目。
    """
    if not isinstance(raw, dict):
        logger.error(f"curator 第 {position} 项必须是映射，当前为 {type(raw).__name__}")
        raw = {}
    values = {name: "" if raw.get(name) is None else str(raw[name]) for name in _ENTRY_FIELDS}
    if not values["name"]:
        values["name"] = f"curator[{position}]"
    return RawPolicyEntry(**values)


def _parse_cluster(raw: Any) -> ClusterConfig:
    """校验并构建集群连接配置."""
    if raw is None:
        return ClusterConfig()
    if not isinstance(raw, dict):
        raise ConfigurationError("elasticsearch 配置必须是映射")

    unknown = sorted(set(raw) - set(_CLUSTER_FIELDS))
    if unknown:
        logger.warning(f"忽略未知的 elasticsearch 配置项: {', '.join(unknown)}")
    kwargs = {name: raw[name] for name in _CLUSTER_FIELDS if name in raw}
    if isinstance(kwargs.get("hosts"), str):
        kwargs["hosts"] = [host.strip() for host in kwargs["hosts"].split(",")]
    try:
        return ClusterConfig(**kwargs)
    except ConnectionConfigError as e:
        raise ConfigurationError(f"elasticsearch 配置不合法: {e}") from e


def config_from_dict(data: Any) -> CuratorConfig:
    """从已解析的配置字典构建 CuratorConfig.

    Args:
        data: 配置字典，键名与 YAML 文件一致

    Returns:
        CuratorConfig 对象

    Raises:
        ConfigurationError: 配置结构不合法时抛出
    """
    if not isinstance(data, dict):
        raise ConfigurationError("配置文件顶层必须是映射")

    raw_entries = data.get("curator") or []
    if not isinstance(raw_entries, list):
        raise ConfigurationError("curator 配置必须是列表")

    policies = [_parse_entry(position, raw) for position, raw in enumerate(raw_entries, 1)]
    return CuratorConfig(
        policies=policies,
        initial_delay=str(data.get("initialDelay") or DEFAULT_INITIAL_DELAY),
        repeat_delay=str(data.get("repeatDelay") or DEFAULT_REPEAT_DELAY),
        cluster=_parse_cluster(data.get("elasticsearch")),
        dry_run=bool(data.get("dryRun", False)),
    )


def load_config(path: str | Path) -> CuratorConfig:
    """读取并校验 YAML 配置文件.

    Args:
        path: 配置文件路径

    Returns:
        CuratorConfig 对象

    Raises:
        ConfigurationError: 文件不存在、无法解析或结构不合法时抛出
    """
    path = Path(path)
    logger.info(f"读取配置文件 {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"读取配置文件 {path} 失败: {e}") from e

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"配置文件 {path} 不是合法的 YAML: {e}") from e

    config = config_from_dict(data)
    logger.debug(f"配置文件 {path} 读取成功，共 {len(config.policies)} 条策略")
    return config
