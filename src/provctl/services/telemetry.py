"""Timing spans for provisioning steps — Span, @traced, trace_span.

Every step is timed and logged at DEBUG, mirroring the "Expanding Tomcat
(1.2s)" style of buildpack output. With --verbose the spans also form a
tree that is injected into ``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from provctl.services.result import ServiceResult

log = structlog.get_logger("provctl.telemetry")

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


@dataclass
class Span:
    """A timed step, possibly with child steps."""

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.duration_ms, 2),
        }
        if self.annotations:
            result["annotations"] = self.annotations
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


@contextmanager
def trace_span(name: str) -> Generator[Span]:
    """Time a step.

    The span is attached to the current span when telemetry is enabled,
    otherwise it stands alone and is only logged.
    """
    parent = _current_span.get() if _verbose_enabled.get() else None
    span = Span(name=name, parent=parent)
    if parent is not None:
        parent.children.append(span)

    token = _current_span.set(span) if parent is not None else None
    ok = False
    try:
        yield span
        ok = True
    finally:
        span.end()
        if token is not None:
            _current_span.reset(token)
        log.debug("step.complete", step=name, duration_ms=round(span.duration_ms, 2), ok=ok)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Decorator: root span for a service method, injected into ``meta``.

    No-op unless telemetry is enabled.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        token = _current_span.set(span)
        try:
            result = func(*args, **kwargs)
        finally:
            span.end()
            _current_span.reset(token)

        if isinstance(result, ServiceResult):
            merged = {**(result.meta or {}), "telemetry": span.to_dict()}
            result = result.model_copy(update={"meta": merged})  # type: ignore[assignment]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Enable span trees (called by AppContext when --verbose)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)

