"""Tests for scopedsass.compiler.libsass against the real libsass."""

from __future__ import annotations

import json
import os

import pytest

from scopedsass.compiler.base import CompileOptions
from scopedsass.compiler.libsass import LibsassCompiler, candidate_paths
from scopedsass.errors import CompileError


def _squash(css: str) -> str:
    return " ".join(css.split())


def test_compiles_variables_to_css() -> None:
    output = LibsassCompiler().compile("$c: red;\n.btn { color: $c; }", CompileOptions())

    assert _squash(output.css) == ".btn { color: red; }"
    assert output.source_map is None
    assert output.included_files == []


def test_compressed_style_is_forwarded() -> None:
    output = LibsassCompiler().compile(
        ".a { color: red; }\n.b { color: blue; }",
        CompileOptions(output_style="compressed"),
    )

    assert output.css.strip() == ".a{color:red}.b{color:blue}"


def test_compile_error_is_translated() -> None:
    with pytest.raises(CompileError) as excinfo:
        LibsassCompiler().compile(".btn { color: $nope; }", CompileOptions())

    error = excinfo.value
    assert "Undefined variable" in error.message
    assert error.line == 1
    assert error.file is None


def test_imported_partials_are_reported(write_file, tmp_path) -> None:
    write_file("partials/_colors.scss", "$c: teal;\n")
    entry = write_file("main.scss", "@import 'partials/colors';\n.a { color: $c; }\n")

    output = LibsassCompiler().compile(
        "@import 'partials/colors';\n.a { color: $c; }\n",
        CompileOptions(source_path=entry),
    )

    assert _squash(output.css) == ".a { color: teal; }"
    assert output.included_files == [str(tmp_path / "partials" / "_colors.scss")]


def test_source_map_is_returned_with_absolute_sources(write_file) -> None:
    entry = write_file("app.scss", ".a { color: red; }\n")

    output = LibsassCompiler().compile(
        ".a { color: red; }\n",
        CompileOptions(source_map=True, source_path=entry),
    )

    assert _squash(output.css) == ".a { color: red; }"
    data = json.loads(output.source_map)
    assert data["version"] == 3
    assert os.path.abspath(entry) in data["sources"]


def test_candidate_paths_follow_partial_conventions() -> None:
    assert candidate_paths("theme/colors") == [
        os.path.join("theme", "_colors.scss"),
        os.path.join("theme", "colors.scss"),
        os.path.join("theme", "_colors.sass"),
        os.path.join("theme", "colors.sass"),
        os.path.join("theme", "_colors.css"),
        os.path.join("theme", "colors.css"),
        os.path.join("theme", "colors", "_index.scss"),
        os.path.join("theme", "colors", "_index.sass"),
        os.path.join("theme", "colors", "index.scss"),
        os.path.join("theme", "colors", "index.sass"),
    ]
    assert candidate_paths("vars.scss") == ["_vars.scss", "vars.scss"]
    assert candidate_paths("reset.css") == []
    assert candidate_paths("https://fonts.example/css") == []


def test_error_inside_mixin_keeps_stdin_location() -> None:
    source = "@mixin m {\n  color: $nope;\n}\n.a {\n  @include m;\n}\n"

    with pytest.raises(CompileError) as excinfo:
        LibsassCompiler().compile(source, CompileOptions())

    error = excinfo.value
    assert error.file is None
    assert error.line == 2
