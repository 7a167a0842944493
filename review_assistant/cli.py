"""Typer CLI for the pull request review assistant."""

from __future__ import annotations

import logging
from typing import Annotated, NoReturn

import httpx
import typer
from pydantic import ValidationError

from review_assistant.config import (
    DEFAULT_OPENAI_MODEL,
    DEFAULT_TIMEOUT_SECONDS,
    MissingCredentialError,
    resolve_config,
)
from review_assistant.github_client import (
    GitHubApiError,
    GitHubInputError,
    build_github_client,
    parse_repo_full_name,
    validate_pr_number,
)
from review_assistant.llm_client import LLMError, build_openai_client
from review_assistant.observability import configure_logging
from review_assistant.output import JsonRenderer, ReviewRenderer, TerminalRenderer
from review_assistant.reviewer import review_pull_request
from review_assistant.schema import OutputFormat
from review_assistant.spinner import Spinner

logger = logging.getLogger(__name__)

SPINNER_MESSAGE = "Fetching PR data and generating insights..."

app = typer.Typer(
    help="Review a GitHub pull request with an LLM and print highlighted insights.",
    add_completion=False,
)


def _repo_callback(value: str) -> str:
    try:
        parse_repo_full_name(value)
    except GitHubInputError as error:
        raise typer.BadParameter(str(error)) from error
    return value.strip()


def _pr_number_callback(value: int) -> int:
    try:
        return validate_pr_number(value)
    except GitHubInputError as error:
        raise typer.BadParameter(str(error)) from error


def _model_callback(value: str) -> str:
    model = value.strip()
    if not model:
        raise typer.BadParameter("Model name must not be blank.")
    return model


def _fail(message: str, error: BaseException) -> NoReturn:
    logger.debug("Review run failed", exc_info=error)
    typer.echo(message, err=True)
    raise typer.Exit(code=1) from error


@app.command()
def review(
    repo: Annotated[
        str,
        typer.Argument(help="Repository in owner/repo format.", callback=_repo_callback),
    ],
    pr_number: Annotated[
        int,
        typer.Argument(help="Pull request number.", callback=_pr_number_callback),
    ],
    github_token: Annotated[
        str | None,
        typer.Option("--github-token", help="GitHub API token (default: GITHUB_TOKEN/GH_TOKEN)."),
    ] = None,
    openai_key: Annotated[
        str | None,
        typer.Option("--openai-key", help="OpenAI API key (default: OPENAI_API_KEY)."),
    ] = None,
    model: Annotated[
        str,
        typer.Option(help="OpenAI model used for the review.", callback=_model_callback),
    ] = DEFAULT_OPENAI_MODEL,
    timeout_seconds: Annotated[
        float, typer.Option(min=1.0, help="Timeout in seconds for each API call.")
    ] = DEFAULT_TIMEOUT_SECONDS,
    trust_env: Annotated[
        bool,
        typer.Option(
            "--trust-env/--no-trust-env",
            help="Use proxy/SSL environment variables from the current shell.",
        ),
    ] = True,
    output_format: Annotated[
        OutputFormat, typer.Option(help="Output format: text|json.")
    ] = OutputFormat.TEXT,
    color: Annotated[
        bool | None,
        typer.Option("--color/--no-color", help="Force or disable ANSI colors."),
    ] = None,
    verbose: Annotated[bool, typer.Option(help="Enable debug logging on stderr.")] = False,
) -> None:
    """Fetch a pull request, ask the model for review insights, and print them."""
    configure_logging(verbose=verbose)

    try:
        config = resolve_config(
            github_token=github_token,
            openai_key=openai_key,
            openai_model=model,
            timeout_seconds=timeout_seconds,
            trust_env=trust_env,
        )
    except (MissingCredentialError, ValidationError) as error:
        _fail(f"Error: {error}", error)

    try:
        with Spinner(SPINNER_MESSAGE, color=color), build_github_client(config) as github_client:
            outcome = review_pull_request(
                config=config,
                repo_full_name=repo,
                pr_number=pr_number,
                github_client=github_client,
                llm_client=build_openai_client(config),
            )
    except GitHubApiError as error:
        _fail(f"Error fetching PR data: {error}", error)
    except LLMError as error:
        _fail(f"Error generating review insights: {error}", error)
    except httpx.HTTPError as error:
        _fail(f"Error fetching PR data: network error ({error}).", error)

    renderer: ReviewRenderer
    if output_format is OutputFormat.JSON:
        renderer = JsonRenderer()
    else:
        renderer = TerminalRenderer(color=color)
    renderer.render(outcome)
