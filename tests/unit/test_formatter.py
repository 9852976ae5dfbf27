from __future__ import annotations

import pytest

from simpleprint.arguments import build_arguments
from simpleprint.formatter import Formatter, ParseContext, render
from simpleprint.policy import RenderPolicy, render_policy


@pytest.mark.unit
def test_positional_placeholders():
    assert render("x={}, y={}", 1, 2) == "x=1, y=2"


@pytest.mark.unit
def test_escaped_braces():
    assert render("{{a}}") == "{a}"
    assert render("{{}}") == "{}"
    assert render("{{{}}}", 7) == "{7}"


@pytest.mark.unit
def test_missing_argument_renders_sentinel():
    assert render("{}") == "<INVALID>"
    assert render("{} and {}", "a") == "a and <INVALID>"


@pytest.mark.unit
def test_sentinel_comes_from_policy():
    assert render("{}", policy=RenderPolicy(invalid_sentinel="?")) == "?"
    with render_policy(invalid_sentinel="<none>"):
        assert render("[{}]") == "[<none>]"


@pytest.mark.unit
def test_extra_arguments_are_ignored():
    assert render("only {}", 1, 2, 3) == "only 1"


@pytest.mark.unit
def test_inline_specifier_characters_are_swallowed():
    # '{' followed by anything but '{' or '}' drops both; the '}' that follows
    # is then a lone right brace and drops the next character too
    assert render("a{x}b", 1) == "a"
    assert render("a{xb", 1) == "ab"
    assert render("{:d}", 5) == "d"


@pytest.mark.unit
def test_lone_right_brace_drops_following_character():
    assert render("a}bc") == "ac"


@pytest.mark.unit
@pytest.mark.parametrize("template, expected", [("abc{", "abc"), ("abc}", "abc"), ("{", ""), ("}", "")])
def test_trailing_unmatched_brace_is_dropped(template, expected):
    assert render(template, 1) == expected


@pytest.mark.unit
@pytest.mark.parametrize("count", [0, 1, 5])
def test_template_without_braces_is_unchanged(count):
    template = "plain text: 100% literal, no braces"
    assert render(template, *range(count)) == template


@pytest.mark.unit
def test_formatter_is_reusable():
    formatter = Formatter("{}-{}", "a", 2)
    assert formatter.format() == "a-2"
    assert formatter.format() == "a-2"
    assert str(formatter) == "a-2"


@pytest.mark.unit
def test_formatter_from_prebuilt_arguments():
    args = build_arguments([1.5, "x"])
    assert Formatter.from_arguments("{} {}", args).format() == "1.500000 x"


@pytest.mark.unit
def test_template_is_not_mutated_and_counter_restarts():
    formatter = Formatter("{}{}", 1)
    first = formatter.format()
    second = formatter.format()
    assert first == second == "1<INVALID>"
    assert formatter.template == "{}{}"


@pytest.mark.unit
def test_parse_context_defaults():
    ctx = ParseContext()
    assert ctx.current_idx == 0
    assert not ctx.in_left_escape
    assert not ctx.in_right_escape


@pytest.mark.unit
def test_containers_in_templates():
    assert render("v={}", [1, 2, 3]) == "v=vector( 1, 2, 3)"
    assert render("m={}", {"b": 2, "a": 1}) == "m=map( {a, 1}, {b, 2} )"


@pytest.mark.unit
def test_container_changes_after_construction_are_rendered():
    items = [1, 2]
    formatter = Formatter("{}", items)
    items.append(3)
    assert formatter.format() == "vector( 1, 2, 3)"
