"""Per-call timing for studyctl services.

Recording is off until ``--verbose`` switches it on for the invocation.
Each ``@traced`` service method then opens a root span (tagged with the
subject code when the method takes one), ``trace_span`` hangs children
off whichever span is active, and the finished tree comes back to the
caller as ``result.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import inspect
import time
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

import structlog

from studyctl.services.result import ServiceResult

log = structlog.get_logger("studyctl.telemetry")

_recording: ContextVar[bool] = ContextVar("studyctl_recording", default=False)
_active: ContextVar[Span | None] = ContextVar("studyctl_active_span", default=None)


@dataclass
class Span:
    """A timed region; ``children`` were opened while it was active."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def close(self) -> None:
        if self.finished is None:
            self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        """Nested dict; empty annotations and children are left out."""
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    token = _active.set(span)
    try:
        yield span
    finally:
        span.close()
        _active.reset(token)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Child of the active span; yields None outside a recorded call."""
    parent = get_current_span()
    if parent is None:
        yield None
        return
    child = Span(name)
    parent.children.append(child)
    with _activate(child):
        yield child


def _subject_of(
    signature: inspect.Signature, args: tuple[Any, ...], kwargs: dict[str, Any]
) -> Any:
    try:
        return signature.bind_partial(*args, **kwargs).arguments.get("code")
    except TypeError:
        return None


def traced[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Record a span for each call of a service method."""
    signature = inspect.signature(func)
    takes_code = "code" in signature.parameters

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        if not _recording.get():
            return func(*args, **kwargs)

        span = Span(func.__qualname__)
        if takes_code and (code := _subject_of(signature, args, kwargs)) is not None:
            span.annotate("subject", code)
        with _activate(span):
            result = func(*args, **kwargs)

        if not isinstance(result, ServiceResult):
            return result
        log.debug(
            "service.timed",
            op=result.op,
            ok=result.ok,
            subject=span.annotations.get("subject"),
            duration_ms=round(span.duration_ms, 2),
        )
        meta = {**(result.meta or {}), "telemetry": span.to_dict()}
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    """Start recording spans in the current context (``--verbose``)."""
    _recording.set(True)


def disable_telemetry() -> None:
    _recording.set(False)
    _active.set(None)


def get_current_span() -> Span | None:
    """The active span, for annotating from inside a traced call."""
    if not _recording.get():
        return None
    return _active.get()
