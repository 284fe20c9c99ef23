"""Evaluation pipelines: prompt, model call, extraction, normalization, policy."""

from __future__ import annotations

import asyncio
import json
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

import structlog

from .core import (
    CheatingAnalysisNormalizer,
    EvaluationNormalizer,
    FallbackBuilder,
    MustHavePolicyEnforcer,
    ResponseExtractor,
)
from .llm import ChatConfig, ChatMessage, ModelCallError, ModelGateway
from .logging import request_context
from .prompts import (
    CHEATING_SYSTEM_PROMPT,
    EVALUATION_SYSTEM_PROMPT,
    format_cheating_input,
    format_evaluation_input,
)
from .schemas import CheatingAnalysis, EvaluationResult

ResultT = TypeVar("ResultT")


@dataclass
class PipelineConfig:
    """Model call options shared by the pipelines."""

    temperature: float = 0.2
    max_tokens: int | None = None
    concurrent_cheating: bool = True


@dataclass(frozen=True, slots=True)
class EvaluationOptions:
    include_cheating_detection: bool = False
    user_instructions: str | None = None


def new_request_id() -> str:
    return uuid.uuid4().hex


class JsonTaskPipeline(ABC, Generic[ResultT]):
    """Run one JSON-producing model task end to end.

    Subclasses provide the system prompt, the normalizer and the fallback.
    Gateway failures propagate as ``ModelCallError``; undecodable responses
    yield the fallback record instead of raising.
    """

    name = "json_task"
    system_prompt = ""

    def __init__(
        self,
        *,
        gateway: ModelGateway,
        extractor: ResponseExtractor | None = None,
        fallback: FallbackBuilder | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self._gateway = gateway
        self._extractor = extractor or ResponseExtractor()
        self._fallback = fallback or FallbackBuilder()
        self._config = config or PipelineConfig()
        self._logger = structlog.get_logger(__name__)

    def build_messages(self, user_content: str) -> list[ChatMessage]:
        return [
            ChatMessage(role="system", content=self.system_prompt.strip()),
            ChatMessage(role="user", content=user_content),
        ]

    @abstractmethod
    def normalize(self, payload: Any) -> ResultT:
        """Coerce a decoded payload into the task record."""

    @abstractmethod
    def fallback(self, raw_text: str) -> ResultT:
        """Record returned when no JSON could be decoded."""

    def finalize(self, result: ResultT) -> ResultT:
        return result

    async def execute(self, user_content: str, *, request_id: str) -> ResultT:
        with request_context(self.name, request_id):
            messages = self.build_messages(user_content)
            self._logger.info(
                "pipeline.start",
                prompt_chars=sum(len(message.content) for message in messages),
            )
            raw_text = await self._call_model(messages, request_id=request_id)

            parsed = self._extractor.parse(raw_text)
            if parsed is None:
                self._logger.warning("pipeline.parse_failed", response_chars=len(raw_text))
                return self.fallback(raw_text)

            self._logger.debug("pipeline.parsed", strategy=parsed.strategy)
            return self.finalize(self.normalize(parsed.payload))

    async def _call_model(self, messages: list[ChatMessage], *, request_id: str) -> str:
        chat_config = ChatConfig(
            temperature=self._config.temperature,
            request_id=request_id,
            max_tokens=self._config.max_tokens,
        )
        try:
            raw_text = await self._gateway.chat(messages, chat_config)
        except ModelCallError as exc:
            self._logger.error("pipeline.model_call_failed", error=str(exc))
            raise
        except Exception as exc:  # noqa: BLE001
            self._logger.error("pipeline.model_call_failed", error=str(exc))
            raise ModelCallError(f"Model gateway call failed: {exc}") from exc
        return raw_text if isinstance(raw_text, str) else ""


class CheatingDetectionPipeline(JsonTaskPipeline[CheatingAnalysis]):
    """Score a transcript for signs of AI-assisted answering."""

    name = "cheating_detector"
    system_prompt = CHEATING_SYSTEM_PROMPT

    def __init__(
        self,
        *,
        gateway: ModelGateway,
        normalizer: CheatingAnalysisNormalizer | None = None,
        extractor: ResponseExtractor | None = None,
        fallback: FallbackBuilder | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        super().__init__(gateway=gateway, extractor=extractor, fallback=fallback, config=config)
        self._normalizer = normalizer or CheatingAnalysisNormalizer()

    def normalize(self, payload: Any) -> CheatingAnalysis:
        return self._normalizer.normalize(payload)

    def fallback(self, raw_text: str) -> CheatingAnalysis:
        return self._fallback.cheating()

    async def analyze(
        self,
        transcript: str,
        job_description: str | None = None,
        *,
        request_id: str | None = None,
    ) -> CheatingAnalysis:
        content = format_cheating_input(transcript=transcript, job_description=job_description)
        return await self.execute(content, request_id=request_id or new_request_id())


class InterviewEvaluationPipeline(JsonTaskPipeline[EvaluationResult]):
    """Evaluate an interview and enforce the must-have hiring policy."""

    name = "interview_evaluator"
    system_prompt = EVALUATION_SYSTEM_PROMPT

    def __init__(
        self,
        *,
        gateway: ModelGateway,
        normalizer: EvaluationNormalizer | None = None,
        policy: MustHavePolicyEnforcer | None = None,
        cheating_detector: CheatingDetectionPipeline | None = None,
        extractor: ResponseExtractor | None = None,
        fallback: FallbackBuilder | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        super().__init__(gateway=gateway, extractor=extractor, fallback=fallback, config=config)
        self._normalizer = normalizer or EvaluationNormalizer()
        self._policy = policy or MustHavePolicyEnforcer()
        self._cheating = cheating_detector or CheatingDetectionPipeline(
            gateway=gateway, extractor=extractor, fallback=fallback, config=config
        )

    def normalize(self, payload: Any) -> EvaluationResult:
        return self._normalizer.normalize(payload)

    def fallback(self, raw_text: str) -> EvaluationResult:
        return self._fallback.evaluation(raw_text)

    def finalize(self, result: EvaluationResult) -> EvaluationResult:
        outcome = self._policy.apply(result)
        if outcome.gate is not None:
            self._logger.info(
                "policy.gate_applied",
                gate=outcome.gate,
                proposed_score=result.score,
                proposed_decision=result.hiring_decision,
                score=outcome.result.score,
                decision=outcome.result.hiring_decision,
            )
        return outcome.result

    async def evaluate(
        self,
        resume: str,
        job_description: str,
        transcript: str,
        options: EvaluationOptions | None = None,
        *,
        request_id: str | None = None,
    ) -> EvaluationResult:
        options = options or EvaluationOptions()
        request_id = request_id or new_request_id()
        content = format_evaluation_input(
            resume=resume,
            job_description=job_description,
            transcript=transcript,
            user_instructions=options.user_instructions,
        )

        with request_context(self.name, request_id):
            secondary: asyncio.Task[CheatingAnalysis] | None = None
            if options.include_cheating_detection and self._config.concurrent_cheating:
                secondary = asyncio.create_task(
                    self._cheating.analyze(transcript, job_description, request_id=request_id)
                )

            try:
                result = await self.execute(content, request_id=request_id)
            except BaseException:
                if secondary is not None:
                    secondary.cancel()
                raise

            if options.include_cheating_detection:
                analysis = await self._run_cheating_detection(
                    secondary, transcript, job_description, request_id=request_id
                )
                if analysis is not None:
                    result = result.model_copy(update={"cheating_analysis": analysis})
            return result

    async def _run_cheating_detection(
        self,
        task: asyncio.Task[CheatingAnalysis] | None,
        transcript: str,
        job_description: str,
        *,
        request_id: str,
    ) -> CheatingAnalysis | None:
        self._logger.info("cheating.start", concurrent=task is not None)
        try:
            if task is not None:
                analysis = await task
            else:
                analysis = await self._cheating.analyze(
                    transcript, job_description, request_id=request_id
                )
        except Exception as exc:  # noqa: BLE001
            self._logger.error("cheating.failed", error=str(exc))
            return None
        self._logger.info(
            "cheating.completed",
            risk_level=analysis.risk_level,
            suspicion_score=analysis.suspicion_score,
        )
        return analysis


class OutputWriter:
    """Persist pipeline results as JSON."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
