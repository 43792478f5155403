"""ES 客户端创建模块."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlsplit

from elasticsearch import Elasticsearch

from .models import ClusterConfig, ConnectionConfig

logger = logging.getLogger(__name__)

DEFAULT_PORT = 9200


def normalize_host(host: str) -> str:
    """将节点地址规范化为完整 URL.

    - 没有 scheme 的地址补全为 http://
    - 没有端口的地址使用默认端口 9200
    - 端口不是合法数字时记录警告并使用默认端口

    Examples:
        >>> normalize_host("es1")
        'http://es1:9200'
        >>> normalize_host("https://es1:9243")
        'https://es1:9243'
    """
    url = host.strip()
    if "://" not in url:
        url = f"http://{url}"

    parts = urlsplit(url)
    hostname = parts.hostname or ""
    if ":" in hostname:
        # IPv6 地址需要重新加上方括号
        hostname = f"[{hostname}]"
    try:
        port = parts.port
    except ValueError:
        logger.warning(f"节点地址 {host!r} 中的端口不合法，使用默认端口 {DEFAULT_PORT}")
        port = None
    return f"{parts.scheme}://{hostname}:{port or DEFAULT_PORT}{parts.path.rstrip('/')}"


def create_client(
    cluster_config: ClusterConfig,
    connection_config: ConnectionConfig | None = None,
) -> Elasticsearch:
    """根据集群配置创建 Elasticsearch 客户端实例.

    根据认证方式（Basic Auth / API Key / Bearer Token / 无认证）
    和 SSL 配置构建客户端。

    Args:
        cluster_config: 集群配置
        connection_config: 重试与超时配置，默认使用 ConnectionConfig 的默认值

    Returns:
        Elasticsearch 客户端实例
    """
    connection_config = connection_config or ConnectionConfig()
    hosts = [normalize_host(host) for host in cluster_config.hosts]
    kwargs: dict[str, Any] = {
        "hosts": hosts,
        "max_retries": connection_config.max_retries,
        "retry_on_timeout": connection_config.retry_on_timeout,
        "request_timeout": connection_config.request_timeout,
        "verify_certs": cluster_config.verify_certs,
    }

    if cluster_config.username and cluster_config.password:
        kwargs["basic_auth"] = (cluster_config.username, cluster_config.password)
    if cluster_config.api_key:
        kwargs["api_key"] = cluster_config.api_key
    if cluster_config.bearer_token:
        kwargs["bearer_auth"] = cluster_config.bearer_token
    if cluster_config.ca_certs:
        kwargs["ca_certs"] = cluster_config.ca_certs

    logger.info(f"创建 Elasticsearch 客户端，节点: {', '.join(hosts)}")
    return Elasticsearch(**kwargs)
