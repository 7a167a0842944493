"""Tests for config and credential resolution."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError
from review_assistant.config import MissingCredentialError, ReviewConfig, resolve_config

CREDENTIAL_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN", "OPENAI_API_KEY")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run in an empty directory with no credential env vars."""
    for env_var in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.mark.unit
def test_resolve_config_prefers_explicit_flags(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "env-gh")
    monkeypatch.setenv("OPENAI_API_KEY", "env-sk")

    config = resolve_config(github_token="flag-gh", openai_key="flag-sk")

    assert config.github_token.get_secret_value() == "flag-gh"
    assert config.openai_key.get_secret_value() == "flag-sk"


@pytest.mark.unit
def test_resolve_config_falls_back_to_gh_token(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("GH_TOKEN", "gh-cli-token")
    monkeypatch.setenv("OPENAI_API_KEY", "env-sk")

    config = resolve_config()

    assert config.github_token.get_secret_value() == "gh-cli-token"
    assert config.openai_model == "gpt-4"


@pytest.mark.unit
def test_resolve_config_reads_dotenv_file(clean_env: Path) -> None:
    (clean_env / ".env").write_text(
        "GITHUB_TOKEN=dotenv-gh\nOPENAI_API_KEY=dotenv-sk\n", encoding="utf-8"
    )

    config = resolve_config()

    assert config.github_token.get_secret_value() == "dotenv-gh"
    assert config.openai_key.get_secret_value() == "dotenv-sk"


@pytest.mark.unit
def test_resolve_config_fails_when_openai_key_missing(clean_env: Path) -> None:
    with pytest.raises(MissingCredentialError, match="--openai-key"):
        resolve_config(github_token="flag-gh")


@pytest.mark.unit
def test_config_hides_secrets_in_repr() -> None:
    config = ReviewConfig(github_token="gh-secret", openai_key="sk-secret")

    assert "gh-secret" not in repr(config)
    assert "sk-secret" not in repr(config)


@pytest.mark.unit
def test_config_is_immutable_and_validated() -> None:
    config = ReviewConfig(github_token="gh", openai_key="sk")

    with pytest.raises(ValidationError):
        config.openai_model = "other"  # type: ignore[misc]
    with pytest.raises(ValidationError):
        ReviewConfig(github_token="gh", openai_key="sk", timeout_seconds=0)
