import os
import tempfile
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Point the config loader at a throwaway file BEFORE anything reads settings
_tmp_dir = tempfile.TemporaryDirectory(prefix="pytest_config_")
_config_file = Path(_tmp_dir.name) / "config.yaml"
_config_file.write_text(
    """
auth:
  token: test-token-123

logging:
  level: DEBUG
  json: false
"""
)
os.environ["CONFIG_PATH"] = str(_config_file)

WriteFile = Callable[..., Path]


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create an empty content directory."""
    root = tmp_path / "notes"
    root.mkdir()
    return root


@pytest.fixture
def write_file(content_dir: Path) -> WriteFile:
    """Write a file under content_dir, optionally pinning its modification time."""

    def _write(relative: str, text: str, modified: datetime | None = None) -> Path:
        path = content_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        if modified is not None:
            timestamp = modified.replace(tzinfo=modified.tzinfo or UTC).timestamp()
            os.utime(path, (timestamp, timestamp))
        return path

    return _write


@pytest.fixture
def test_settings():
    """Settings built directly, independent of the config file."""
    from content_manager.config import Settings

    return Settings(auth_token="test-token-123", log_json=False)


@pytest.fixture
def client(test_settings):
    """Test client running the full app lifespan."""
    from content_manager.main import create_app

    app = create_app(test_settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Valid authorization headers."""
    return {"Authorization": "Bearer test-token-123"}


@pytest.fixture
def sample_note() -> str:
    """Markdown note with frontmatter and headings."""
    return """---
title: TypeScript Notes
tags: tutorial
draft: false
rating: 4.5
---
# Getting Started

Install the compiler first.

## Configuring tsconfig

Strict mode catches more bugs.
"""


@pytest.fixture
def notes(content_dir: Path, write_file: WriteFile) -> Path:
    """Small note collection with pinned modification times."""
    write_file(
        "typescript-notes.md",
        "---\ntitle: Notes\ntags: tutorial\n---\nGenerics and interfaces.\n",
        modified=datetime(2024, 1, 15, tzinfo=UTC),
    )
    write_file(
        "cooking/pasta.md",
        "---\ntitle: Pasta\ntags: recipe\n---\nBoil water and add pasta.\n",
        modified=datetime(2024, 2, 1, tzinfo=UTC),
    )
    write_file(
        "journal.txt",
        "Started learning TypeScript today.\n",
        modified=datetime(2024, 1, 20, tzinfo=UTC),
    )
    return content_dir


@pytest.fixture
def undecodable_note(content_dir: Path) -> bytes:
    """Markdown file whose name is Latin-1 bytes, not valid UTF-8."""
    raw_path = os.path.join(os.fsencode(content_dir), b"caf\xe9.md")
    with open(raw_path, "wb") as handle:
        handle.write(b"typescript notes in a badly named file\n")
    return raw_path
