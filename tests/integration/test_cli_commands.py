from __future__ import annotations

import json
from pathlib import Path

from dependency_injector import providers
from typer.testing import CliRunner

import hreval.cli as cli
from hreval.container import create_container
from hreval.llm import ModelCallError

EVALUATION_RESPONSE = json.dumps(
    {
        "score": 91,
        "hiringDecision": "Strong Hire",
        "summary": "Solid candidate.",
        "recommendation": "Hire.",
        "mustHaveAnalysis": {
            "interviewVerification": {
                "failed": [
                    {
                        "requirement": "PostgreSQL",
                        "failedAt": "Q2",
                        "reason": "Wrong isolation levels",
                        "severity": "Critical",
                    }
                ]
            }
        },
        "technicalAnalysis": {"summary": "ok"},
        "jdMatch": {"summary": "ok"},
        "behavioralAnalysis": {"summary": "ok"},
    }
)

CHEATING_RESPONSE = json.dumps(
    {"suspicionScore": 12, "riskLevel": "Low", "summary": "Natural answers.", "recommendation": "None."}
)


class StubGateway:
    def __init__(self, *, error: Exception | None = None) -> None:
        self.error = error

    async def chat(self, messages, config):
        if self.error is not None:
            raise self.error
        if "integrity analyst" in messages[0].content:
            return CHEATING_RESPONSE
        return EVALUATION_RESPONSE


def patch_container(monkeypatch, gateway):
    for name in ("LLM_PROVIDER", "LLM_MODEL", "LLM_API_KEY", "LLM_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    captured = {}

    def factory(*, settings=None):
        captured["settings"] = settings
        container = create_container(settings=settings)
        container.gateway.override(providers.Object(gateway))
        return container

    monkeypatch.setattr(cli, "create_container", factory)
    return captured


def write_inputs(tmp_path: Path) -> dict[str, Path]:
    paths = {
        "resume": tmp_path / "resume.txt",
        "job": tmp_path / "job.txt",
        "transcript": tmp_path / "transcript.txt",
    }
    paths["resume"].write_text("Backend engineer, 6 years Go.", encoding="utf-8")
    paths["job"].write_text("Senior Go engineer. Must have PostgreSQL.", encoding="utf-8")
    paths["transcript"].write_text("Q: Explain isolation levels.\nA: Not sure.", encoding="utf-8")
    return paths


def test_cli_evaluate_writes_policy_checked_result(tmp_path, monkeypatch):
    patch_container(monkeypatch, StubGateway())
    paths = write_inputs(tmp_path)
    output = tmp_path / "out" / "evaluation.json"

    result = CliRunner().invoke(
        cli.app,
        [
            "evaluate",
            "--resume", str(paths["resume"]),
            "--job", str(paths["job"]),
            "--transcript", str(paths["transcript"]),
            "--output", str(output),
            "--cheating",
        ],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["metadata"]["task"] == "interview_evaluation"
    assert data["metadata"]["request_id"]
    assert data["result"]["score"] == 45
    assert data["result"]["hiringDecision"] == "No Hire"
    assert data["result"]["cheatingAnalysis"]["riskLevel"] == "Low"
    assert data["result"]["mustHaveAnalysis"]["interviewVerification"]["failed"][0]["severity"] == "Critical"


def test_cli_cheating_command(tmp_path, monkeypatch):
    patch_container(monkeypatch, StubGateway())
    paths = write_inputs(tmp_path)
    output = tmp_path / "cheating.json"

    result = CliRunner().invoke(
        cli.app,
        ["cheating", "--transcript", str(paths["transcript"]), "--output", str(output)],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["metadata"]["task"] == "cheating_analysis"
    assert data["result"]["suspicionScore"] == 12


def test_cli_config_and_flags_reach_container(tmp_path, monkeypatch):
    captured = patch_container(monkeypatch, StubGateway())
    paths = write_inputs(tmp_path)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "gateway:\n  provider: openai\n  model: gpt-4o-mini\nfallback:\n  excerpt_max_chars: 200\n",
        encoding="utf-8",
    )

    result = CliRunner().invoke(
        cli.app,
        [
            "cheating",
            "--transcript", str(paths["transcript"]),
            "--output", str(tmp_path / "c.json"),
            "--config", str(config_path),
            "--llm-model", "gpt-4.1",
        ],
    )

    assert result.exit_code == 0, result.output
    assert captured["settings"]["gateway"] == {"provider": "openai", "model": "gpt-4.1"}
    assert captured["settings"]["fallback"] == {"excerpt_max_chars": 200}


def test_cli_invalid_config_is_rejected(tmp_path, monkeypatch):
    patch_container(monkeypatch, StubGateway())
    paths = write_inputs(tmp_path)
    config_path = tmp_path / "config.yaml"
    config_path.write_text("gateway:\n  retries: 3\n", encoding="utf-8")

    result = CliRunner().invoke(
        cli.app,
        [
            "cheating",
            "--transcript", str(paths["transcript"]),
            "--output", str(tmp_path / "c.json"),
            "--config", str(config_path),
        ],
    )

    assert result.exit_code == 2


def test_cli_reports_model_failure(tmp_path, monkeypatch):
    patch_container(monkeypatch, StubGateway(error=ModelCallError("quota exceeded", status_code=429)))
    paths = write_inputs(tmp_path)
    output = tmp_path / "evaluation.json"

    result = CliRunner().invoke(
        cli.app,
        [
            "evaluate",
            "--resume", str(paths["resume"]),
            "--job", str(paths["job"]),
            "--transcript", str(paths["transcript"]),
            "--output", str(output),
        ],
    )

    assert result.exit_code == 2
    assert not output.exists()
