"""保留策略引擎使用示例.

本文件展示了如何编译保留策略、对索引分类以及运行定时清理。
"""

from datetime import UTC, datetime

from elasticsearch import Elasticsearch

from elasticurator import (
    Curator,
    RawPolicyEntry,
    build_policy_set,
    classify_indices,
    load_config,
)
from elasticurator.cleanup import CuratorService
from elasticurator.index_manager import IndexManager

entries = [
    RawPolicyEntry(name="logs", pattern="logs-%{YYYY.MM.dd}", close="3 days", delete="7 days"),
    RawPolicyEntry(name="broken", pattern="logs-static", close="3 days", delete="7 days"),
]


# ==================== 示例1：离线分类 ====================
def example_classify():
    """不连接集群，直接对索引名分类."""
    # "broken" 没有时间戳占位符，会被丢弃
    policy_set = build_policy_set(entries)
    print(f"有效策略: {policy_set.names()}")
    print(f"被拒绝的策略: {[rejected.name for rejected in policy_set.rejected]}")

    now = datetime(2024, 1, 10, tzinfo=UTC)
    names = ["logs-2024.01.09", "logs-2024.01.05", "logs-2023.12.31", "metrics-2024.01.01"]
    for item in classify_indices(policy_set, names, now):
        print(f"  {item.index_name}: {item.action.value}")


# ==================== 示例2：试运行一次清理 ====================
def example_dry_run():
    """连接集群并试运行一次清理，不实际关闭/删除."""
    es_client = Elasticsearch(["http://localhost:9200"])
    service = CuratorService(IndexManager(es_client), build_policy_set(entries), dry_run=True)
    result = service.do_cleanup()
    print(f"待关闭: {result.closed}")
    print(f"待删除: {result.deleted}")


# ==================== 示例3：按配置文件定时清理 ====================
def example_scheduled():
    """读取配置文件并启动定时清理."""
    with Curator(load_config("examples/curator.yml")) as curator:
        curator.scheduler.wait()


if __name__ == "__main__":
    example_classify()
