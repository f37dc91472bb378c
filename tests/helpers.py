"""Payload builders for faked GitHub API responses."""

from __future__ import annotations

import base64

import httpx

BASE_URL = "https://api.github.com"


def repo_json(owner: str = "octo", name: str = "hello", **overrides: object) -> dict:
    """Minimal GitHub repo API payload."""
    full_name = f"{owner}/{name}"
    base = {
        "id": 1296269,
        "name": name,
        "full_name": full_name,
        "description": "A test repo",
        "private": False,
        "html_url": f"https://github.com/{full_name}",
        "clone_url": f"https://github.com/{full_name}.git",
        "default_branch": "main",
        "language": "Python",
        "stargazers_count": 42,
        "forks_count": 5,
        "size": 108,
        "created_at": "2025-06-01T00:00:00Z",
        "updated_at": "2026-01-15T00:00:00Z",
        "owner": {"login": owner},
    }
    base.update(overrides)
    return base


def file_json(path: str, text: str = "", **overrides: object) -> dict:
    """Single-file contents payload with base64 content."""
    name = path.rsplit("/", 1)[-1]
    base = {
        "type": "file",
        "name": name,
        "path": path,
        "sha": f"sha-{path}",
        "size": len(text.encode()),
        "url": f"{BASE_URL}/repos/octo/hello/contents/{path}",
        "html_url": f"https://github.com/octo/hello/blob/main/{path}",
        "download_url": f"https://raw.githubusercontent.com/octo/hello/main/{path}",
        "encoding": "base64",
        "content": base64.encodebytes(text.encode()).decode(),
    }
    base.update(overrides)
    return base


def entry_json(path: str, type: str = "file") -> dict:
    """Directory listing entry payload."""
    name = path.rsplit("/", 1)[-1]
    return {
        "type": type,
        "name": name,
        "path": path,
        "sha": f"sha-{path}",
        "size": 0 if type == "dir" else 10,
        "url": f"{BASE_URL}/repos/octo/hello/contents/{path}",
        "html_url": f"https://github.com/octo/hello/tree/main/{path}",
        "download_url": None if type != "file" else f"https://raw.githubusercontent.com/octo/hello/main/{path}",
    }


def contents_path(request: httpx.Request) -> str:
    """Path below /contents/ of a contents request."""
    return request.url.path.split("/contents", 1)[1].lstrip("/")
