"""ES 客户端连接模块 - 根据配置创建 Elasticsearch 客户端.

主要组件:
    - ClusterConfig: 集群地址与认证配置
    - ConnectionConfig: 重试与超时配置
    - create_client: 创建 Elasticsearch 客户端

使用示例:
    from elasticurator.connection import ClusterConfig, create_client

    client = create_client(ClusterConfig(hosts=["es1:9200", "es2"]))
"""

from .exceptions import ConnectionConfigError
from .models import ClusterConfig, ConnectionConfig
from .tool import DEFAULT_PORT, create_client, normalize_host

__all__ = [
    "create_client",
    "normalize_host",
    "DEFAULT_PORT",
    "ClusterConfig",
    "ConnectionConfig",
    "ConnectionConfigError",
]
