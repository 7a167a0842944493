"""GitHub API wrapper for pull request metadata and diffs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from review_assistant.config import ReviewConfig

logger = logging.getLogger(__name__)

GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_JSON_MEDIA_TYPE = "application/vnd.github+json"
GITHUB_DIFF_MEDIA_TYPE = "application/vnd.github.diff"


class GitHubInputError(ValueError):
    """Raised when repository or PR input values are invalid."""


class GitHubApiError(RuntimeError):
    """Raised when a GitHub API request fails."""

    def __init__(self, message: str, *, status_code: int, endpoint: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint


class GitHubRateLimitError(GitHubApiError):
    """Raised when GitHub API rate limiting prevents request completion."""


@dataclass(frozen=True, slots=True)
class PullRequestMeta:
    """Flat PR metadata shown above the review."""

    number: int
    title: str
    author_login: str
    html_url: str
    changed_files: int


def parse_repo_full_name(repo_full_name: str) -> tuple[str, str]:
    """Parse and validate repository input in owner/repo format."""
    owner, separator, repo = repo_full_name.strip().partition("/")
    if not separator or not owner or not repo or "/" in repo:
        raise GitHubInputError(
            f"Invalid repo '{repo_full_name}'. Expected format is owner/repo."
        )
    return owner, repo


def validate_pr_number(pr_number: int) -> int:
    """Validate and normalize pull request number input."""
    if pr_number <= 0:
        raise GitHubInputError(f"Invalid PR number '{pr_number}'. Expected a positive integer.")
    return pr_number


def _require_str(payload: dict[str, Any], *, key: str, endpoint: str) -> str:
    """Read a required string field from payload."""
    value = payload.get(key)
    if not isinstance(value, str):
        raise GitHubApiError(
            f"Expected string field '{key}' in GitHub response.",
            status_code=500,
            endpoint=endpoint,
        )
    return value


def _require_int(payload: dict[str, Any], *, key: str, endpoint: str) -> int:
    """Read a required integer field from payload."""
    value = payload.get(key)
    if not isinstance(value, int) or isinstance(value, bool):
        raise GitHubApiError(
            f"Expected integer field '{key}' in GitHub response.",
            status_code=500,
            endpoint=endpoint,
        )
    return value


def _require_object(payload: dict[str, Any], *, key: str, endpoint: str) -> dict[str, Any]:
    """Read a required object field from payload."""
    value = payload.get(key)
    if not isinstance(value, dict):
        raise GitHubApiError(
            f"Expected object field '{key}' in GitHub response.",
            status_code=500,
            endpoint=endpoint,
        )
    return value


def _raise_http_error(response: httpx.Response, endpoint: str) -> None:
    """Raise a typed error for a non-success GitHub API response."""
    message = f"GitHub API request failed with status {response.status_code} for '{endpoint}'."
    rate_limited = response.status_code == 429 or (
        response.status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0"
    )
    if rate_limited:
        raise GitHubRateLimitError(
            message,
            status_code=response.status_code,
            endpoint=endpoint,
        )
    raise GitHubApiError(
        message,
        status_code=response.status_code,
        endpoint=endpoint,
    )


def _get(client: httpx.Client, endpoint: str, *, accept_header: str) -> httpx.Response:
    """Perform a single GET request and raise on non-success status."""
    logger.debug("GET %s (Accept: %s)", endpoint, accept_header)
    response = client.get(endpoint, headers={"Accept": accept_header})
    if response.status_code >= 400:
        _raise_http_error(response, endpoint)
    return response


def _request_json(client: httpx.Client, endpoint: str) -> dict[str, Any]:
    """Perform a JSON request that returns one object."""
    payload = _get(client, endpoint, accept_header=GITHUB_JSON_MEDIA_TYPE).json()
    if not isinstance(payload, dict):
        raise GitHubApiError(
            "Expected JSON object in GitHub response.",
            status_code=500,
            endpoint=endpoint,
        )
    return payload


def fetch_pull_request_metadata(
    *,
    client: httpx.Client,
    repo_full_name: str,
    pr_number: int,
) -> PullRequestMeta:
    """Fetch pull request title, author and changed-file count in one request."""
    owner, repo = parse_repo_full_name(repo_full_name)
    normalized_pr_number = validate_pr_number(pr_number)
    endpoint = f"/repos/{owner}/{repo}/pulls/{normalized_pr_number}"

    payload = _request_json(client, endpoint)
    user_payload = _require_object(payload, key="user", endpoint=endpoint)

    return PullRequestMeta(
        number=_require_int(payload, key="number", endpoint=endpoint),
        title=_require_str(payload, key="title", endpoint=endpoint),
        author_login=_require_str(user_payload, key="login", endpoint=endpoint),
        html_url=_require_str(payload, key="html_url", endpoint=endpoint),
        changed_files=_require_int(payload, key="changed_files", endpoint=endpoint),
    )


def fetch_pull_request_diff(
    *,
    client: httpx.Client,
    repo_full_name: str,
    pr_number: int,
) -> str:
    """Fetch full raw unified diff for a pull request."""
    owner, repo = parse_repo_full_name(repo_full_name)
    normalized_pr_number = validate_pr_number(pr_number)
    endpoint = f"/repos/{owner}/{repo}/pulls/{normalized_pr_number}"
    return _get(client, endpoint, accept_header=GITHUB_DIFF_MEDIA_TYPE).text


def build_github_client(config: ReviewConfig) -> httpx.Client:
    """Build an authenticated GitHub HTTP client."""
    headers = {
        "Accept": GITHUB_JSON_MEDIA_TYPE,
        "Authorization": f"Bearer {config.github_token.get_secret_value()}",
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
    }
    return httpx.Client(
        base_url=GITHUB_API_BASE_URL,
        headers=headers,
        timeout=config.timeout_seconds,
        trust_env=config.trust_env,
    )
