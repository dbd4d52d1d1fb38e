# ABOUTME: Logger utilities with run-scoped context and outbound call tracking
# ABOUTME: Provides get_logger, the log_api_call decorator and with_pipeline_context

import functools
import inspect
import time
import uuid
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any, TypeVar

import structlog

F = TypeVar("F", bound=Callable[..., Any])


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger, named after the calling module when no name is given."""
    if name is None:
        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get("__name__")

    return structlog.get_logger(name or "arcwiki_extremes")


def generate_operation_id() -> str:
    """Short random id tying together the log lines of one operation."""
    return uuid.uuid4().hex[:8]


def _request_context(args: tuple, kwargs: dict) -> dict[str, Any]:
    # First http(s) string is the endpoint; first mapping holds the query or form fields
    url = None
    title = None
    for arg in (*args, *kwargs.values()):
        if url is None and isinstance(arg, str) and arg.startswith(("http://", "https://")):
            url = arg
        elif title is None and isinstance(arg, Mapping):
            title = arg.get("title")
    return {"url": url, "title": title}


def log_api_call(api_name: str, **context) -> Callable[[F], F]:
    """Decorator timing an async outbound call.

    Success is logged at debug level. Failures are logged at warning and
    re-raised.

    Args:
        api_name: Name of the API being called
        **context: Additional context for the API call

    Returns:
        Decorated coroutine function
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            bound_logger = get_logger(func.__module__).bind(
                api_name=api_name,
                call_id=generate_operation_id(),
                **_request_context(args, kwargs),
                **context,
            )
            start = time.perf_counter()

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                bound_logger.warning(
                    f"API call to {api_name} failed",
                    duration_seconds=round(time.perf_counter() - start, 3),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

            bound_logger.debug(
                f"API call to {api_name} succeeded", duration_seconds=round(time.perf_counter() - start, 3)
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


@contextmanager
def with_pipeline_context(pipeline_name: str, **context) -> Iterator[structlog.stdlib.BoundLogger]:
    """Bind pipeline context for every log line emitted inside the block.

    The context is held in structlog's contextvars, so tasks spawned inside
    the block (pool workers included) inherit it.

    Args:
        pipeline_name: Name of the pipeline
        **context: Additional context to bind

    Yields:
        Logger for the pipeline's own phase messages
    """
    operation_id = generate_operation_id()
    with structlog.contextvars.bound_contextvars(pipeline=pipeline_name, operation_id=operation_id, **context):
        logger = get_logger("arcwiki_extremes.pipeline")
        try:
            yield logger
        except Exception as e:
            logger.error("Pipeline failed", error=str(e), error_type=type(e).__name__)
            raise
