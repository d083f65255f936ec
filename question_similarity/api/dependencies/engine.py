"""
Similarity engine dependency.

The config is read once during lifespan startup; an invalid environment
aborts startup instead of failing every request. Each request binds the
process-wide question registry and that config to a SimilarityEngine.
Tests replace get_engine through app.dependency_overrides.
"""

from typing import Optional

from fastapi import HTTPException, status

from question_similarity.dedup import SimilarityEngine
from question_similarity.infra.settings import SimilarityConfig
from question_similarity.registry import get_registry

_engine_config: Optional[SimilarityConfig] = None


def init_engine_config(config: Optional[SimilarityConfig] = None) -> SimilarityConfig:
    """
    Set the config used for every request.

    Args:
        config: Explicit config; read from the environment if None

    Raises:
        ConfigurationError: If the environment holds out-of-range values
    """
    global _engine_config
    _engine_config = config or SimilarityConfig.from_env()
    return _engine_config


def get_engine_config() -> Optional[SimilarityConfig]:
    return _engine_config


def reset_engine_config() -> None:
    global _engine_config
    _engine_config = None


def get_engine() -> SimilarityEngine:
    registry = get_registry()
    if registry is None or _engine_config is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Question registry is not initialized",
        )
    return SimilarityEngine(registry, _engine_config)
