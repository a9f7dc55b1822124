# tests/core/test_parser.py
"""
容错解析测试

优先级：partial_json -> yaml -> 原文兜底
"""
import pytest

from typedprompt.core.structure import parser
from typedprompt.core.structure.parser import (
    ParseStrategy,
    parse_any,
    parse_with_attempts,
    register_parse_strategy,
    unregister_parse_strategy,
)


class TestPartialJson:
    """不完整 JSON 在截断处被自动闭合"""

    def test_complete_array(self):
        assert parse_any("[1,2,3]") == [1, 2, 3]

    def test_dangling_trailing_element(self):
        assert parse_any("[1,") == [1]

    def test_object_missing_closing_brace(self):
        assert parse_any('{"name": "Alice", "age": 30') == {"name": "Alice", "age": 30}

    def test_unterminated_string(self):
        assert parse_any('["alpha", "bet') == ["alpha", "bet"]

    def test_surrounding_whitespace(self):
        assert parse_any("\n  [1, 2]\n") == [1, 2]


class TestYamlFallback:

    def test_yaml_mapping(self):
        assert parse_any("name: Alice\nage: 30\n") == {"name": "Alice", "age": 30}

    def test_empty_window_becomes_none(self):
        # 空窗口：JSON 拒绝，YAML 解析为空文档
        assert parse_any("") is None


class TestRawFallback:

    def test_unparsable_text_returned_verbatim(self):
        text = "{ this is : [ not valid"
        value, attempts = parse_with_attempts(text)
        assert value == text
        assert [a["strategy"] for a in attempts] == ["partial_json", "yaml"]

    def test_fallback_is_stable(self):
        text = "{ this is : [ not valid"
        assert parse_any(parse_any(text)) == parse_any(text) == text


class TestStrategyPlugins:

    def test_registered_strategy_runs_before_raw_fallback(self):
        register_parse_strategy(ParseStrategy(name="shout", func=lambda t: t.upper()))
        try:
            assert parse_any("{ this is : [ not valid") == "{ THIS IS : [ NOT VALID"
            # 内置策略成功时不会走到插件
            assert parse_any("[1]") == [1]
        finally:
            unregister_parse_strategy("shout")

        assert all(s.name != "shout" for s in parser.iter_strategies())

    def test_builtin_order(self):
        names = [s.name for s in parser.iter_strategies()]
        assert names[:2] == ["partial_json", "yaml"]
