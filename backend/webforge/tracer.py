"""
Follow-Through Tracer

Step-by-step execution tracing for the project, file and version handlers.
Enabled with FOLLOW_THROUGH=true; silent otherwise.
"""
import functools
import logging
from typing import Any, Callable
from datetime import datetime

from .config import settings

# Dedicated logger for follow-through tracing
tracer = logging.getLogger("followthrough")


def _preview(data: Any, max_len: int = 60) -> str:
    """Create a short preview of data."""
    if data is None:
        return "<None>"
    text = str(data)
    if len(text) > max_len:
        return f"{text[:max_len]}..."
    return text


def _format_step(icon: str, step: str, module: str, detail: str = "") -> str:
    """Format a trace step with consistent styling."""
    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    base = f"[{timestamp}] {icon} [{module}] {step}"
    if detail:
        return f"{base}: {detail}"
    return base


def trace_input(module: str, input_name: str, value: Any):
    """Log an input value entering a handler."""
    if not settings.follow_through:
        return
    tracer.info(_format_step("→", f"INPUT {input_name}", module, _preview(value)))


def trace_step(module: str, description: str):
    """Log a general step in processing."""
    if not settings.follow_through:
        return
    tracer.info(_format_step("•", "STEP", module, description))


def trace_change(module: str, file_id: str, action: str, outcome: str):
    """Log how a single recorded file change was handled."""
    if not settings.follow_through:
        return
    tracer.info(_format_step("Δ", "CHANGE", module, f"{action} {file_id} -> {outcome}"))


def trace_result(module: str, function: str, success: bool, result_preview: Any = None):
    """Log the result of a handler call."""
    if not settings.follow_through:
        return
    status = "✓ SUCCESS" if success else "✗ FAILED"
    detail = f"{function}() {status}"
    if result_preview is not None:
        detail += f" => {_preview(result_preview)}"
    tracer.info(_format_step("◀", "RESULT", module, detail))


def trace_output(module: str, output_name: str, value: Any):
    """Log an output value leaving a handler."""
    if not settings.follow_through:
        return
    tracer.info(_format_step("←", f"OUTPUT {output_name}", module, _preview(value)))


def trace_section(title: str):
    """Log a section divider for a top-level operation."""
    if not settings.follow_through:
        return
    bar = "─" * 40
    tracer.info(bar)
    tracer.info(f"  {title.upper()}")
    tracer.info(bar)


def traced(module: str):
    """
    Decorator to trace entry and exit of an async service method.

    Usage:
        @traced("versioning.log")
        async def create_version(...):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            if not settings.follow_through:
                return await func(*args, **kwargs)

            tracer.info(_format_step("▶", "CALL", module, f"calling {func.__name__}()"))
            try:
                result = await func(*args, **kwargs)
                trace_result(module, func.__name__, True, result)
                return result
            except Exception as e:
                trace_result(module, func.__name__, False, str(e))
                raise

        return wrapper

    return decorator


def setup_follow_through_logging():
    """Configure the follow-through logger."""
    if not settings.follow_through:
        return

    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("%(message)s"))

    tracer.addHandler(handler)
    tracer.setLevel(logging.INFO)
    tracer.propagate = False  # Don't propagate to root logger

    tracer.info("=" * 50)
    tracer.info("  FOLLOW-THROUGH MODE ENABLED")
    tracer.info("=" * 50)
