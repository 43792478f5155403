"""配置文件加载单元测试."""

from datetime import UTC, datetime

import pytest

from elasticurator.config import (
    DEFAULT_INITIAL_DELAY,
    DEFAULT_REPEAT_DELAY,
    ConfigurationError,
    CuratorConfig,
    config_from_dict,
    load_config,
)
from elasticurator.period import Period
from elasticurator.policies import RawPolicyEntry, build_policy_set

CONFIG_YAML = """\
initialDelay: 30 seconds
repeatDelay: 2 hours
dryRun: true
elasticsearch:
  hosts: ["es1:9200", "es2"]
  username: elastic
  password: changeme
curator:
  - name: logstash
    pattern: "logstash-%{+YYYY.MM.dd}"
    close: 3 days
    delete: 7 days
  - name: metrics
    pattern: "metrics-%{xxxx.ww}"
    close: 2 weeks
    delete: 2 months
"""


@pytest.fixture
def config_file(tmp_path):
    """写入示例配置文件."""
    path = tmp_path / "curator.yml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path


class TestLoadConfig:
    """load_config 测试."""

    def test_load(self, config_file) -> None:
        """测试读取完整配置."""
        config = load_config(config_file)
        assert config.policies == [
            RawPolicyEntry(
                name="logstash", pattern="logstash-%{+YYYY.MM.dd}", close="3 days", delete="7 days"
            ),
            RawPolicyEntry(
                name="metrics", pattern="metrics-%{xxxx.ww}", close="2 weeks", delete="2 months"
            ),
        ]
        assert config.initial_delay == "30 seconds"
        assert config.repeat_delay == "2 hours"
        assert config.dry_run is True
        assert config.cluster.hosts == ["es1:9200", "es2"]
        assert config.cluster.username == "elastic"

    def test_load_str_path(self, config_file) -> None:
        """测试使用字符串路径."""
        assert len(load_config(str(config_file)).policies) == 2

    def test_missing_file(self, tmp_path) -> None:
        """测试文件不存在."""
        with pytest.raises(ConfigurationError, match="读取配置文件"):
            load_config(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path) -> None:
        """测试非法 YAML."""
        path = tmp_path / "broken.yml"
        path.write_text("curator: [\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="不是合法的 YAML"):
            load_config(path)

    def test_empty_file(self, tmp_path) -> None:
        """测试空文件得到默认配置."""
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        config = load_config(path)
        assert config.policies == []
        assert config.initial_delay == DEFAULT_INITIAL_DELAY
        assert config.repeat_delay == DEFAULT_REPEAT_DELAY

    def test_invalid_entry_durations_are_kept_raw(self, tmp_path) -> None:
        """测试策略条目的时长在加载阶段不解析，留给策略编译阶段处理."""
        path = tmp_path / "curator.yml"
        path.write_text(
            "curator:\n  - name: bad\n    pattern: logs-%{YYYY}\n    close: soon\n    delete: later\n",
            encoding="utf-8",
        )
        assert load_config(path).policies[0].close == "soon"


class TestConfigFromDict:
    """config_from_dict 测试."""

    def test_top_level_not_mapping(self) -> None:
        """测试顶层不是映射."""
        with pytest.raises(ConfigurationError, match="顶层必须是映射"):
            config_from_dict(["curator"])

    def test_curator_not_list(self) -> None:
        """测试 curator 不是列表."""
        with pytest.raises(ConfigurationError, match="必须是列表"):
            config_from_dict({"curator": {"name": "logs"}})

    def test_entry_not_mapping(self, caplog: pytest.LogCaptureFixture) -> None:
        """测试策略条目不是映射时保留为空条目."""
        with caplog.at_level("ERROR"):
            config = config_from_dict({"curator": ["logs"]})
        entry = config.policies[0]
        assert entry.name == "curator[1]"
        assert (entry.pattern, entry.close, entry.delete) == ("", "", "")
        assert "第 1 项必须是映射" in caplog.text

    def test_entry_missing_fields(self) -> None:
        """测试缺少字段的条目只在策略编译时被拒绝."""
        config = config_from_dict(
            {
                "curator": [
                    {"name": "bad", "pattern": "logs-%{YYYY}", "close": "1 day"},
                    {"name": "logs", "pattern": "logs-%{YYYY}", "close": "1 day", "delete": "2 days"},
                ]
            }
        )
        assert len(config.policies) == 2
        assert config.policies[0].delete == ""

        policy_set = build_policy_set(config.policies)
        assert policy_set.names() == ["logs"]
        assert policy_set.rejected[0].name == "bad"
        assert policy_set.rejected[0].error_type == "IncompletePolicyError"

    def test_values_are_stringified(self) -> None:
        """测试非字符串值转换为字符串."""
        config = config_from_dict(
            {"curator": [{"name": 1, "pattern": "x-%{YYYY}", "close": "1 day", "delete": "2 days"}]}
        )
        assert config.policies[0].name == "1"

    def test_hosts_string_is_split(self) -> None:
        """测试逗号分隔的 hosts 字符串."""
        config = config_from_dict({"elasticsearch": {"hosts": "es1, es2:9201"}})
        assert config.cluster.hosts == ["es1", "es2:9201"]

    def test_unknown_cluster_key(self, caplog: pytest.LogCaptureFixture) -> None:
        """测试未知 elasticsearch 配置项被忽略并记录警告."""
        with caplog.at_level("WARNING"):
            config = config_from_dict({"elasticsearch": {"hosts": ["es1"], "sniff": True}})
        assert config.cluster.hosts == ["es1"]
        assert "sniff" in caplog.text

    def test_invalid_cluster(self) -> None:
        """测试 elasticsearch 配置不合法."""
        with pytest.raises(ConfigurationError, match="elasticsearch 配置不合法"):
            config_from_dict({"elasticsearch": {"username": "elastic"}})

    def test_cluster_not_mapping(self) -> None:
        """测试 elasticsearch 配置不是映射."""
        with pytest.raises(ConfigurationError, match="elasticsearch 配置必须是映射"):
            config_from_dict({"elasticsearch": "es1"})

    def test_invalid_repeat_delay(self) -> None:
        """测试调度时长不合法."""
        with pytest.raises(ConfigurationError, match="调度时长配置不合法"):
            config_from_dict({"repeatDelay": "often"})


class TestCuratorConfig:
    """CuratorConfig 测试."""

    def test_defaults(self) -> None:
        """测试默认调度时长."""
        config = CuratorConfig()
        assert config.initial_delay_period == Period(minutes=1)
        assert config.repeat_delay_period == Period(hours=1)
        assert config.initial_delay_seconds() == 60.0
        assert config.repeat_delay_seconds() == 3600.0

    def test_calendar_delay_seconds(self) -> None:
        """测试按日历计算的调度时长."""
        config = CuratorConfig(repeat_delay="1 month")
        february = datetime(2024, 2, 1, tzinfo=UTC)
        assert config.repeat_delay_seconds(february) == 29 * 86400.0

    def test_zero_delay_rejected(self) -> None:
        """测试零时长调度配置."""
        with pytest.raises(ConfigurationError):
            CuratorConfig(initial_delay="0 seconds")

    def test_out_of_range_delay_rejected(self) -> None:
        """测试超出可计算范围的调度时长."""
        with pytest.raises(ConfigurationError, match="调度时长配置不合法"):
            CuratorConfig(repeat_delay="10000 years")
