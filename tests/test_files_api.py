"""API tests for file listing, stats and document endpoints."""

from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient


def test_files_require_auth(client: TestClient, notes: Path) -> None:
    response = client.post("/api/v1/files", json={"directory": str(notes)})
    assert response.status_code == 401


def test_list_files(client: TestClient, notes: Path, auth_headers: dict[str, str]) -> None:
    response = client.post(
        "/api/v1/files",
        json={"directory": str(notes)},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["files"] == sorted(data["files"])
    assert {Path(path).name for path in data["files"]} == {
        "typescript-notes.md",
        "pasta.md",
        "journal.txt",
    }


def test_list_files_skips_non_utf8_filenames(
    client: TestClient,
    notes: Path,
    undecodable_note: bytes,
    auth_headers: dict[str, str],
) -> None:
    response = client.post(
        "/api/v1/files",
        json={"directory": str(notes)},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert all(not Path(path).name.startswith("caf") for path in data["files"])


def test_list_files_with_extensions(
    client: TestClient,
    notes: Path,
    auth_headers: dict[str, str],
) -> None:
    response = client.post(
        "/api/v1/files",
        json={"directory": str(notes), "extensions": ["txt"]},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert [Path(path).name for path in response.json()["files"]] == ["journal.txt"]


def test_list_files_missing_directory(
    client: TestClient,
    tmp_path: Path,
    auth_headers: dict[str, str],
) -> None:
    response = client.post(
        "/api/v1/files",
        json={"directory": str(tmp_path / "nope")},
        headers=auth_headers,
    )

    assert response.status_code == 404


def test_directory_stats(client: TestClient, notes: Path, auth_headers: dict[str, str]) -> None:
    response = client.post(
        "/api/v1/files/stats",
        json={"directory": str(notes)},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["totalFiles"] == 3
    assert data["totalSize"] > 0
    assert data["fileTypes"] == {".md": 2, ".txt": 1}


def test_read_document(client: TestClient, notes: Path, auth_headers: dict[str, str]) -> None:
    path = notes / "typescript-notes.md"
    response = client.post(
        "/api/v1/documents/read",
        json={"filePath": str(path)},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["path"] == str(path)
    assert data["frontmatter"] == {"title": "Notes", "tags": "tutorial"}
    assert data["body"] == "Generics and interfaces.\n"
    assert data["size"] == path.stat().st_size


def test_read_missing_document(
    client: TestClient,
    notes: Path,
    auth_headers: dict[str, str],
) -> None:
    missing = str(notes / "gone.md")
    response = client.post(
        "/api/v1/documents/read",
        json={"filePath": missing},
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert response.json()["detail"] == f"Not found: {missing}"


def test_read_directory_as_document(
    client: TestClient,
    notes: Path,
    auth_headers: dict[str, str],
) -> None:
    response = client.post(
        "/api/v1/documents/read",
        json={"filePath": str(notes)},
        headers=auth_headers,
    )

    assert response.status_code == 500
    assert response.json()["detail"]["error"] == "ReadError"


def test_health_without_auth(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "version" in response.json()
