"""Dependency injection container for the evaluation services."""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import (
    CheatingAnalysisNormalizer,
    EvaluationNormalizer,
    FallbackBuilder,
    FallbackConfig,
    MustHavePolicyEnforcer,
    ResponseExtractor,
)
from .llm import GatewayConfig, HTTPChatGateway
from .pipeline import CheatingDetectionPipeline, InterviewEvaluationPipeline, PipelineConfig


class EvaluationContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition.

    Every service is a stateless singleton shared by concurrent requests.
    """

    gateway = providers.Singleton(HTTPChatGateway)

    pipeline_config = providers.Singleton(PipelineConfig)

    response_extractor = providers.Singleton(ResponseExtractor)
    cheating_normalizer = providers.Singleton(CheatingAnalysisNormalizer)
    evaluation_normalizer = providers.Singleton(
        EvaluationNormalizer,
        cheating_normalizer=cheating_normalizer,
    )
    policy_enforcer = providers.Singleton(MustHavePolicyEnforcer)

    fallback_builder = providers.Singleton(
        FallbackBuilder,
        evaluation_normalizer=evaluation_normalizer,
        cheating_normalizer=cheating_normalizer,
    )

    cheating_pipeline = providers.Singleton(
        CheatingDetectionPipeline,
        gateway=gateway,
        normalizer=cheating_normalizer,
        extractor=response_extractor,
        fallback=fallback_builder,
        config=pipeline_config,
    )

    evaluation_pipeline = providers.Singleton(
        InterviewEvaluationPipeline,
        gateway=gateway,
        normalizer=evaluation_normalizer,
        policy=policy_enforcer,
        cheating_detector=cheating_pipeline,
        extractor=response_extractor,
        fallback=fallback_builder,
        config=pipeline_config,
    )


def create_container(*, settings: dict | None = None) -> EvaluationContainer:
    """Instantiate container with optional overrides."""

    container = EvaluationContainer()

    if not settings:
        return container

    gateway_settings = settings.get("gateway", {}) if isinstance(settings, dict) else {}
    if gateway_settings:
        gateway_config = GatewayConfig(**gateway_settings)
        container.gateway.override(providers.Singleton(HTTPChatGateway, config=gateway_config))

    fallback_settings = settings.get("fallback", {}) if isinstance(settings, dict) else {}
    if fallback_settings:
        fallback_config = FallbackConfig(**fallback_settings)
        container.fallback_builder.override(
            providers.Singleton(
                FallbackBuilder,
                config=fallback_config,
                evaluation_normalizer=container.evaluation_normalizer,
                cheating_normalizer=container.cheating_normalizer,
            )
        )

    pipeline_settings = settings.get("pipeline", {}) if isinstance(settings, dict) else {}
    if pipeline_settings:
        container.pipeline_config.override(
            providers.Singleton(PipelineConfig, **pipeline_settings)
        )

    return container
