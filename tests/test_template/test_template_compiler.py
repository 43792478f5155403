"""索引名模板编译器单元测试."""

import pytest

from elasticurator.template import (
    InvalidDateFormatError,
    MalformedTemplateError,
    MissingPlaceholderError,
    TemplateCompiler,
    TemplateError,
    compile_template,
)


@pytest.fixture
def compiler() -> TemplateCompiler:
    """创建 TemplateCompiler 实例."""
    return TemplateCompiler()


class TestCompile:
    """模板编译测试."""

    def test_basic(self, compiler: TemplateCompiler) -> None:
        """测试基本模板."""
        compiled = compiler.compile("logs-%{YYYY.MM.dd}")
        assert compiled.prefix == "logs-"
        assert compiled.suffix == ""
        assert compiled.date_format.pattern == "YYYY.MM.dd"
        assert compiled.date_format.strftime_format == "%Y.%m.%d"

    def test_plus_is_stripped(self, compiler: TemplateCompiler) -> None:
        """测试去除日期格式中的 "+"."""
        compiled = compiler.compile("logstash-%{+YYYY.MM.dd}")
        assert compiled.date_format.pattern == "YYYY.MM.dd"

    def test_every_plus_is_stripped(self, compiler: TemplateCompiler) -> None:
        """测试去除所有 "+"，不只是开头的."""
        compiled = compiler.compile("logs-%{+YYYY+.MM.dd}")
        assert compiled.date_format.pattern == "YYYY.MM.dd"

    def test_prefix_and_suffix(self, compiler: TemplateCompiler) -> None:
        """测试占位符前后都有字面量."""
        compiled = compiler.compile("audit-%{yyyy.MM}-archive")
        assert compiled.prefix == "audit-"
        assert compiled.suffix == "-archive"
        assert compiled.match("audit-2024.01-archive") == "2024.01"
        assert compiled.match("audit-2024.01") is None

    def test_literal_regex_characters_are_escaped(self, compiler: TemplateCompiler) -> None:
        """测试前后缀中的正则特殊字符按字面量处理."""
        compiled = compiler.compile("app.v1+logs-%{YYYY.MM.dd}")
        assert compiled.match("app.v1+logs-2024.01.09") == "2024.01.09"
        assert compiled.match("appXv1+logs-2024.01.09") is None
        assert compiled.match("app.v11logs-2024.01.09") is None

    def test_name_pattern_single_group(self, compiler: TemplateCompiler) -> None:
        """测试索引名正则只有一个捕获组."""
        compiled = compiler.compile("logs-%{YYYY.MM.dd}")
        assert compiled.name_pattern.groups == 1

    def test_match_requires_whole_name(self, compiler: TemplateCompiler) -> None:
        """测试必须完整匹配索引名."""
        compiled = compiler.compile("logs-%{YYYY.MM.dd}")
        assert compiled.match("metrics-2024.01.01") is None
        assert compiled.match("old-logs-2024.01.01") is None
        assert compiled.match("logs-") is None

    def test_match_non_string(self, compiler: TemplateCompiler) -> None:
        """测试非字符串索引名不匹配."""
        compiled = compiler.compile("logs-%{YYYY.MM.dd}")
        assert compiled.match(None) is None  # type: ignore

    @pytest.mark.parametrize("literal", ["x", "2024.01.09", "anything-goes.here", "}{%"])
    def test_capture_equals_substituted_literal(
        self, compiler: TemplateCompiler, literal: str
    ) -> None:
        """测试捕获组恰好等于替换进占位符位置的字面量."""
        compiled = compiler.compile("pre[fix]-%{YYYY.MM.dd}-suf(fix)")
        assert compiled.match(f"pre[fix]-{literal}-suf(fix)") == literal

    def test_render(self, compiler: TemplateCompiler) -> None:
        """测试渲染索引名."""
        from datetime import datetime

        compiled = compiler.compile("logs-%{YYYY.MM.dd}-v1")
        assert compiled.render(datetime(2024, 1, 9)) == "logs-2024.01.09-v1"

    def test_wildcard(self, compiler: TemplateCompiler) -> None:
        """测试通配符表达式."""
        assert compiler.compile("logs-%{YYYY.MM.dd}-v1").wildcard == "logs-*-v1"

    def test_module_level_compile(self) -> None:
        """测试模块级 compile_template."""
        assert compile_template("logs-%{YYYY}").date_format.strftime_format == "%Y"


class TestCompileErrors:
    """模板编译错误测试."""

    def test_missing_placeholder(self, compiler: TemplateCompiler) -> None:
        """测试缺少占位符."""
        with pytest.raises(MissingPlaceholderError, match="logs-static"):
            compiler.compile("logs-static")

    def test_missing_placeholder_names_policy(self, compiler: TemplateCompiler) -> None:
        """测试错误信息包含策略名称."""
        with pytest.raises(MissingPlaceholderError, match=r"\[static\]"):
            compiler.compile("logs-static", policy_name="static")

    def test_non_string_template(self, compiler: TemplateCompiler) -> None:
        """测试非字符串模板."""
        with pytest.raises(MissingPlaceholderError):
            compiler.compile(None)  # type: ignore

    @pytest.mark.parametrize(
        "template",
        [
            "logs-%{YYYY.MM.dd",
            "logs-%{}",
            "logs-%{+}",
            "logs-%{YYYY}-%{MM}",
            "logs-%{YYYY-%{MM}}",
        ],
    )
    def test_malformed(self, compiler: TemplateCompiler, template: str) -> None:
        """测试格式错误的占位符."""
        with pytest.raises(MalformedTemplateError):
            compiler.compile(template)

    def test_malformed_is_missing_placeholder(self) -> None:
        """测试格式错误同样属于缺少占位符."""
        assert issubclass(MalformedTemplateError, MissingPlaceholderError)

    def test_braces_without_percent(self, compiler: TemplateCompiler) -> None:
        """测试没有 "%" 的花括号不是占位符."""
        with pytest.raises(MissingPlaceholderError):
            compiler.compile("logs-{YYYY.MM.dd}")

    @pytest.mark.parametrize("template", ["logs-%{foo}", "logs-%{YYYY.qq}", "logs-%{...}"])
    def test_invalid_date_format(self, compiler: TemplateCompiler, template: str) -> None:
        """测试无法识别的日期格式."""
        with pytest.raises(InvalidDateFormatError):
            compiler.compile(template)
        assert issubclass(InvalidDateFormatError, TemplateError)
