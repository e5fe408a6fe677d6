"""Payload helpers for GitHub API responses in tests."""

from typing import Any


def repository(
    *,
    owner: str = "test-owner",
    name: str = "test-repo",
    visibility: str | None = "public",
    private: bool = False,
    parent: str | None = None,
) -> dict[str, Any]:
    """Create a repository payload.

    A parent full name turns the repository into a fork of it.
    """
    payload: dict[str, Any] = {
        "id": 1296269,
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": {"login": owner, "id": 1, "type": "Organization"},
        "private": private,
        "html_url": f"https://github.com/{owner}/{name}",
        "fork": parent is not None,
        "default_branch": "main",
    }
    if visibility is not None:
        payload["visibility"] = visibility
    if parent is not None:
        payload["parent"] = {"full_name": parent, "name": parent.split("/")[-1]}
    return payload


def content_file(
    *,
    owner: str = "test-owner",
    repo: str = "test-repo",
    path: str = "action.yml",
    download_url: str | None = "",
) -> dict[str, Any]:
    """Create a contents API payload for a file.

    An empty download_url is replaced by the raw URL of the file, None keeps
    the field null.
    """
    if download_url == "":
        download_url = raw_url(owner=owner, repo=repo, path=path)
    return {
        "type": "file",
        "encoding": "base64",
        "size": 512,
        "name": path.rsplit("/", 1)[-1],
        "path": path,
        "sha": "3d21ec53a331a6f037a91c368710b99387d012c1",
        "url": f"https://api.github.com/repos/{owner}/{repo}/contents/{path}",
        "html_url": f"https://github.com/{owner}/{repo}/blob/main/{path}",
        "download_url": download_url,
    }


def raw_url(
    *, owner: str = "test-owner", repo: str = "test-repo", path: str = "action.yml"
) -> str:
    """Raw download URL of a file on the default branch."""
    return f"https://raw.githubusercontent.com/{owner}/{repo}/main/{path}"


def code_search_response(
    *paths: str, repo: str = "test-owner/test-repo"
) -> dict[str, Any]:
    """Create a code search response with one item per path."""
    return {
        "total_count": len(paths),
        "incomplete_results": False,
        "items": [
            {
                "name": path.rsplit("/", 1)[-1],
                "path": path,
                "sha": "bbcd538c8e72b8c175046e27cc8f907076331401",
                "repository": {"full_name": repo},
            }
            for path in paths
        ],
    }


def rate_limit_response(
    *, remaining: int = 30, reset: int = 1372700873
) -> dict[str, Any]:
    """Create a rate limit response with the given search quota."""
    return {
        "resources": {
            "core": {"limit": 5000, "remaining": 4999, "reset": reset, "used": 1},
            "search": {
                "limit": 30,
                "remaining": remaining,
                "reset": reset,
                "used": 30 - remaining,
            },
        },
        "rate": {"limit": 5000, "remaining": 4999, "reset": reset, "used": 1},
    }


def workflow_access(access_level: str = "organization") -> dict[str, Any]:
    """Create a workflow access response for an internal repository."""
    return {"access_level": access_level}
