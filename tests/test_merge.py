"""Tests for scopedsass.merge."""

from __future__ import annotations

import pytest

from scopedsass.errors import StructuralMismatchError
from scopedsass.merge import ScopeMerger
from scopedsass.models import CompiledScopeResult, ScopeSpec


def _result(name: str, css: str, path="", **kwargs) -> CompiledScopeResult:
    return CompiledScopeResult(scope=ScopeSpec(scope_name=name, path=path), css=css, **kwargs)


def test_empty_results_give_neutral_output() -> None:
    merged = ScopeMerger().merge([])

    assert merged.css == ""
    assert merged.dependency_paths == []
    assert merged.errors == []
    assert merged.source_map is None


def test_each_rule_appears_once_per_scope_in_original_order() -> None:
    results = [
        _result("light", ".a {\n  color: #fff;\n}\n\n.b {\n  top: 1px;\n}\n"),
        _result("dark", ".a {\n  color: #000;\n}\n\n.b {\n  top: 2px;\n}\n"),
        _result("blue", ".a {\n  color: #00f;\n}\n\n.b {\n  top: 3px;\n}\n"),
    ]

    merged = ScopeMerger().merge(results)

    assert merged.css == (
        ".light .a {\n  color: #fff;\n}\n"
        ".dark .a {\n  color: #000;\n}\n"
        ".blue .a {\n  color: #00f;\n}"
        "\n\n.light .b {\n  top: 1px;\n}\n"
        "\n\n.dark .b {\n  top: 2px;\n}\n"
        "\n\n.blue .b {\n  top: 3px;\n}\n"
    )


def test_html_selectors_are_copied_unprefixed_for_every_scope() -> None:
    results = [
        _result("a", "html{font-size:12px}.x,html .y{color:red}"),
        _result("b", "html{font-size:16px}.x,html .y{color:blue}"),
    ]

    merged = ScopeMerger().merge(results)

    assert merged.css == (
        "html{font-size:12px}\nhtml{font-size:16px}"
        ".a .x,html .y{color:red}\n.b .x,html .y{color:blue}"
    )


def test_identical_fragments_are_consumed_in_source_order() -> None:
    css_a = "html{margin:0}.p{color:red}html{margin:0}"
    css_b = "html{margin:0}.p{color:blue}html{margin:0}"

    merged = ScopeMerger().merge([_result("a", css_a), _result("b", css_b)])

    assert merged.css == (
        "html{margin:0}\nhtml{margin:0}"
        ".a .p{color:red}\n.b .p{color:blue}"
        "html{margin:0}\nhtml{margin:0}"
    )


def test_unscoped_single_result_passes_through() -> None:
    css = "/* banner */\n.a {\n  color: red;\n}\n"

    merged = ScopeMerger().merge([_result("", css)])

    assert merged.css == css


def test_output_without_rules_passes_through_base_text() -> None:
    results = [_result("a", "/* nothing */\n"), _result("b", "/* nothing */\n")]

    assert ScopeMerger().merge(results).css == "/* nothing */\n"


def test_dependencies_list_scope_files_then_base_includes() -> None:
    results = [
        _result("a", ".x{top:0}", path="/themes/a.scss", dependency_paths=["/src/_vars.scss"]),
        _result("b", ".x{top:1}", path=("/themes/base.scss", "/themes/b.scss"), dependency_paths=["/other"]),
        _result("c", ".x{top:2}", path="/themes/a.scss"),
    ]

    merged = ScopeMerger().merge(results)

    assert merged.dependency_paths == [
        "/themes/a.scss",
        "/themes/base.scss",
        "/themes/b.scss",
        "/themes/a.scss",
        "/src/_vars.scss",
    ]


def test_source_map_comes_from_first_scope_and_errors_are_concatenated() -> None:
    results = [
        _result("a", ".x{top:0}", source_map='{"version": 3}', errors=["warn a"]),
        _result("b", ".x{top:1}", source_map='{"version": 3, "b": 1}', errors=["warn b1", "warn b2"]),
    ]

    merged = ScopeMerger().merge(results)

    assert merged.source_map == '{"version": 3}'
    assert merged.errors == ["warn a", "warn b1", "warn b2"]


def test_fragment_count_mismatch_is_detected() -> None:
    results = [
        _result("a", ".x{top:0}.y{top:0}"),
        _result("b", ".x{top:1}"),
    ]

    with pytest.raises(StructuralMismatchError) as excinfo:
        ScopeMerger().merge(results)

    assert excinfo.value.scope_name == "b"
    assert excinfo.value.position == 1


def test_selector_mismatch_is_detected() -> None:
    results = [
        _result("a", ".x{top:0}.y{top:0}"),
        _result("b", ".x{top:1}.z{top:1}"),
    ]

    with pytest.raises(StructuralMismatchError) as excinfo:
        ScopeMerger().merge(results)

    assert excinfo.value.position == 1
    assert ".z" in excinfo.value.detail


def test_unverified_merge_skips_missing_positions() -> None:
    results = [
        _result("a", ".x{top:0}.y{top:0}"),
        _result("b", ".x{top:1}"),
    ]

    merged = ScopeMerger(verify_structure=False).merge(results)

    assert merged.css == ".a .x{top:0}\n.b .x{top:1}.a .y{top:0}"


def test_scope_list_length_must_match_results() -> None:
    with pytest.raises(ValueError):
        ScopeMerger().merge([_result("a", ".x{}")], [ScopeSpec("a"), ScopeSpec("b")])
