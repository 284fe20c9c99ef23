"""Typer CLI entrypoint for the evaluation pipelines."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import pendulum
import typer
import yaml
from pydantic import ValidationError

from . import __version__
from .container import create_container
from .llm import ModelCallError
from .logging import configure_logging
from .pipeline import EvaluationOptions, OutputWriter, new_request_id
from .schemas.base import RecordModel
from .schemas.config import load_config

app = typer.Typer(help="Structured interview evaluation CLI.")


def _config_option() -> Any:
    return typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path.")


def _log_level_option() -> Any:
    return typer.Option("INFO", help="Log level for structured logging.")


def _env_option(envvar: str, help_text: str) -> Any:
    return typer.Option(None, envvar=envvar, help=help_text)


def _input_option(help_text: str) -> Any:
    return typer.Option(..., exists=True, readable=True, dir_okay=False, help=help_text)


def _output_option() -> Any:
    return typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    )


def _load_settings(
    config: Optional[Path],
    *,
    provider: Optional[str],
    model: Optional[str],
    api_key: Optional[str],
    base_url: Optional[str],
) -> dict[str, Any]:
    raw: Any = {}
    if config:
        with config.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
    try:
        settings = load_config(raw).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc

    overrides = {
        "provider": provider,
        "model": model,
        "api_key": api_key,
        "base_url": base_url,
    }
    gateway = {key: value for key, value in overrides.items() if value is not None}
    if gateway:
        settings["gateway"] = {**settings.get("gateway", {}), **gateway}
    return settings


def _write_result(output: Path, *, task: str, request_id: str, result: RecordModel) -> None:
    OutputWriter().write(
        output,
        {
            "metadata": {
                "task": task,
                "request_id": request_id,
                "timestamp": pendulum.now().to_iso8601_string(),
                "app_version": __version__,
            },
            "result": result.to_payload(),
        },
    )


@app.command()
def evaluate(
    resume: Path = _input_option("Candidate resume (plain text)."),
    job: Path = _input_option("Job description (plain text)."),
    transcript: Path = _input_option("Interview transcript (plain text)."),
    output: Path = _output_option(),
    cheating: bool = typer.Option(False, "--cheating/--no-cheating", help="Also run cheating detection."),
    instructions: Optional[str] = typer.Option(None, help="Extra instructions from the hiring manager."),
    config: Optional[Path] = _config_option(),
    log_level: str = _log_level_option(),
    llm_provider: Optional[str] = _env_option("LLM_PROVIDER", "openai, openrouter or kimi."),
    llm_model: Optional[str] = _env_option("LLM_MODEL", "Model identifier."),
    llm_api_key: Optional[str] = _env_option("LLM_API_KEY", "Provider API key."),
    llm_base_url: Optional[str] = _env_option("LLM_BASE_URL", "Override provider base URL."),
) -> None:
    """Evaluate an interview transcript against a resume and job description."""
    settings = _load_settings(
        config, provider=llm_provider, model=llm_model, api_key=llm_api_key, base_url=llm_base_url
    )
    configure_logging(log_level)

    pipeline = create_container(settings=settings).evaluation_pipeline()
    request_id = new_request_id()
    options = EvaluationOptions(include_cheating_detection=cheating, user_instructions=instructions)
    try:
        result = asyncio.run(
            pipeline.evaluate(
                resume.read_text(encoding="utf-8"),
                job.read_text(encoding="utf-8"),
                transcript.read_text(encoding="utf-8"),
                options,
                request_id=request_id,
            )
        )
    except ModelCallError as exc:
        typer.echo(f"Model call failed: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    _write_result(output, task="interview_evaluation", request_id=request_id, result=result)
    typer.echo(f"{result.hiring_decision} ({result.score}) -> {output}")


@app.command("cheating")
def analyze_cheating(
    transcript: Path = _input_option("Interview transcript (plain text)."),
    output: Path = _output_option(),
    job: Optional[Path] = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="Optional job description."
    ),
    config: Optional[Path] = _config_option(),
    log_level: str = _log_level_option(),
    llm_provider: Optional[str] = _env_option("LLM_PROVIDER", "openai, openrouter or kimi."),
    llm_model: Optional[str] = _env_option("LLM_MODEL", "Model identifier."),
    llm_api_key: Optional[str] = _env_option("LLM_API_KEY", "Provider API key."),
    llm_base_url: Optional[str] = _env_option("LLM_BASE_URL", "Override provider base URL."),
) -> None:
    """Analyze an interview transcript for AI-assisted answers."""
    settings = _load_settings(
        config, provider=llm_provider, model=llm_model, api_key=llm_api_key, base_url=llm_base_url
    )
    configure_logging(log_level)

    pipeline = create_container(settings=settings).cheating_pipeline()
    request_id = new_request_id()
    try:
        result = asyncio.run(
            pipeline.analyze(
                transcript.read_text(encoding="utf-8"),
                job.read_text(encoding="utf-8") if job else None,
                request_id=request_id,
            )
        )
    except ModelCallError as exc:
        typer.echo(f"Model call failed: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    _write_result(output, task="cheating_analysis", request_id=request_id, result=result)
    typer.echo(f"{result.risk_level} ({result.suspicion_score}) -> {output}")


if __name__ == "__main__":  # pragma: no cover
    app()
