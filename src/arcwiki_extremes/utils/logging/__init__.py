# ABOUTME: Logging configuration, progress tracking, and structured logger helpers
# ABOUTME: Provides loguru sinks, structlog loggers and the enrichment progress bar

from .config import LoggingMode, configure_logging, detect_logging_mode, get_logging_status
from .progress import PoolProgressTracker, create_pool_progress
from .utils import get_logger, log_api_call, with_pipeline_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "detect_logging_mode",
    "get_logging_status",
    # Progress
    "PoolProgressTracker",
    "create_pool_progress",
    # Utilities
    "get_logger",
    "log_api_call",
    "with_pipeline_context",
]
