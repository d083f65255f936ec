"""
Infrastructure helpers - configuration and logging.
"""

from .logging_config import DailyRotatingFileHandler, setup_logging
from .settings import DEFAULT_CONFIG, SimilarityConfig

__all__ = [
    "DailyRotatingFileHandler",
    "setup_logging",
    "DEFAULT_CONFIG",
    "SimilarityConfig",
]
