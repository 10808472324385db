from __future__ import annotations

import logging
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from tests._fixtures.fake_compiler import FakeSassCompiler


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], str]:
    """Write a dedented file under tmp_path and return its absolute path."""

    def _write(relative: str, content: str) -> str:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def fake_compiler() -> FakeSassCompiler:
    return FakeSassCompiler()


@pytest.fixture(autouse=True)
def _reset_scopedsass_logger():
    """Undo configure_logging() side effects so caplog keeps seeing records."""
    yield
    logger = logging.getLogger("scopedsass")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
