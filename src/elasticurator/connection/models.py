"""ES 客户端连接数据模型定义模块."""

from dataclasses import dataclass, field

from .exceptions import ConnectionConfigError


@dataclass
class ClusterConfig:
    """集群配置模型.

    Attributes:
        hosts: ES 节点地址列表，支持 "host"、"host:port" 与完整 URL 三种写法
        username: Basic Auth 用户名
        password: Basic Auth 密码
        api_key: API Key 认证（字符串或元组）
        bearer_token: Bearer Token 认证
        ca_certs: CA 证书文件路径
        verify_certs: 是否验证 SSL 证书，默认 True

    Raises:
        ConnectionConfigError: 当 hosts 为空或认证信息不完整时抛出

    Examples:
        >>> config = ClusterConfig(
        ...     hosts=["es1:9200", "es2"],
        ...     username="elastic",
        ...     password="changeme",
        ... )
    """

    hosts: list[str] = field(default_factory=lambda: ["http://localhost:9200"])
    username: str | None = None
    password: str | None = None
    api_key: str | tuple[str, str] | None = None
    bearer_token: str | None = None
    ca_certs: str | None = None
    verify_certs: bool = True

    def __post_init__(self) -> None:
        """校验集群配置参数合法性."""
        if not self.hosts:
            raise ConnectionConfigError("hosts 不能为空，请提供至少一个 ES 节点地址")
        if bool(self.username) != bool(self.password):
            raise ConnectionConfigError("username 与 password 必须同时提供")


@dataclass
class ConnectionConfig:
    """重试与超时配置模型.

    Attributes:
        max_retries: 最大重试次数，默认 3
        retry_on_timeout: 超时是否重试，默认 True
        request_timeout: 请求超时时间（秒），默认 30，必须 >= 0
    """

    max_retries: int = 3
    retry_on_timeout: bool = True
    request_timeout: int = 30

    def __post_init__(self) -> None:
        """校验连接配置参数合法性."""
        if self.max_retries < 0:
            raise ConnectionConfigError(
                f"max_retries 必须 >= 0，当前值: {self.max_retries}"
            )
        if self.request_timeout < 0:
            raise ConnectionConfigError(
                f"request_timeout 必须 >= 0，当前值: {self.request_timeout}"
            )
