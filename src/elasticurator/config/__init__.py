"""配置加载子模块.

从 YAML 文件读取保留策略配置：

    initialDelay: 1 minute
    repeatDelay: 1 hour
    dryRun: false
    elasticsearch:
      hosts: ["es1:9200", "es2:9200"]
    curator:
      - name: logs
        pattern: logs-%{YYYY.MM.dd}
        close: 3 days
        delete: 7 days

示例用法:
    >>> from elasticurator.config import load_config
    >>> config = load_config("curator.yml")
    >>> config.repeat_delay_seconds()
    3600.0
"""

from .exceptions import ConfigurationError
from .models import DEFAULT_INITIAL_DELAY, DEFAULT_REPEAT_DELAY, CuratorConfig
from .tool import config_from_dict, load_config

__all__ = [
    "load_config",
    "config_from_dict",
    "CuratorConfig",
    "DEFAULT_INITIAL_DELAY",
    "DEFAULT_REPEAT_DELAY",
    "ConfigurationError",
]
