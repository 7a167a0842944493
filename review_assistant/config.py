"""Run configuration and credential resolution."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr

DEFAULT_OPENAI_MODEL = "gpt-4"
DEFAULT_TIMEOUT_SECONDS = 60.0
GITHUB_TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")
OPENAI_KEY_ENV_VARS = ("OPENAI_API_KEY",)


class MissingCredentialError(RuntimeError):
    """Raised when a required API credential cannot be resolved."""


class ReviewConfig(BaseModel):
    """Explicit configuration passed to every review operation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    github_token: SecretStr
    openai_key: SecretStr
    openai_model: str = Field(default=DEFAULT_OPENAI_MODEL, min_length=1)
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    trust_env: bool = True


def _resolve_credential(
    explicit_value: str | None,
    *,
    env_vars: tuple[str, ...],
    flag_name: str,
) -> tuple[str, str]:
    """Return a credential and the place it was read from."""
    if explicit_value:
        return explicit_value, flag_name

    for env_var in env_vars:
        value = os.getenv(env_var)
        if value:
            return value, env_var

    message = f"Missing credential. Pass {flag_name} or set {' or '.join(env_vars)}."
    raise MissingCredentialError(message)


def resolve_config(
    *,
    github_token: str | None = None,
    openai_key: str | None = None,
    openai_model: str = DEFAULT_OPENAI_MODEL,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    trust_env: bool = True,
) -> ReviewConfig:
    """Build a config from explicit flags, falling back to env and `.env`."""
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    resolved_github_token, _source = _resolve_credential(
        github_token,
        env_vars=GITHUB_TOKEN_ENV_VARS,
        flag_name="--github-token",
    )
    resolved_openai_key, _source = _resolve_credential(
        openai_key,
        env_vars=OPENAI_KEY_ENV_VARS,
        flag_name="--openai-key",
    )
    return ReviewConfig(
        github_token=SecretStr(resolved_github_token),
        openai_key=SecretStr(resolved_openai_key),
        openai_model=openai_model,
        timeout_seconds=timeout_seconds,
        trust_env=trust_env,
    )
