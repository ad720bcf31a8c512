"""Shared fixtures for strata_fs tests."""

from pathlib import Path

import pytest

MANAGED_CONTENT = """---
title: Sample
doc-type: strata
---

- [ ] first item
"""


@pytest.fixture
def workspace(tmp_path) -> Path:
    """Create an empty workspace root."""
    root = tmp_path / "ws"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def write_doc():
    """Return a helper writing a file, creating parent directories."""

    def _write(path: Path, content: str = MANAGED_CONTENT) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
