"""Logging setup for the studyctl CLI.

Every record goes to stderr so stdout only ever carries command output
(and stays parseable under ``--json``). The store logs through stdlib
``logging``; services, the workspace and telemetry log through structlog.
Both pass through one ProcessorFormatter and render the same way.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, TextIO

import structlog
from structlog.types import EventDict, Processor

# Loggers that touch the state file. Their records carry ``state_file``.
STATE_LOGGERS = (
    "studyctl.infrastructure.store",
    "studyctl.infrastructure.workspace",
)
TELEMETRY_LOGGER = "studyctl.telemetry"


def logger_levels(*, verbose: bool) -> dict[str, int]:
    """Level for each studyctl logger this module routes."""
    # Without -v, recovered defaults and failed writes still show up.
    level = logging.DEBUG if verbose else logging.WARNING
    return dict.fromkeys(("studyctl", *STATE_LOGGERS, TELEMETRY_LOGGER), level)


def tag_state_file(state_file: Path | None) -> Processor:
    """Processor adding ``state_file`` to records from the state loggers."""

    def processor(_logger: Any, _method: str, event_dict: EventDict) -> EventDict:
        if state_file is not None and str(event_dict.get("logger", "")).startswith(STATE_LOGGERS):
            event_dict.setdefault("state_file", str(state_file))
        return event_dict

    return processor


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    state_file: Path | None = None,
    stream: TextIO | None = None,
) -> None:
    """Install the stderr handler and set studyctl logger levels.

    Args:
        verbose: DEBUG for studyctl loggers; WARNING otherwise.
        log_json: One JSON object per line instead of console output.
        state_file: The JSON state file in use, attached to store and
            workspace records.
        stream: Output stream, ``sys.stderr`` when omitted.
    """
    out = stream if stream is not None else sys.stderr

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        tag_state_file(state_file),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.UnicodeDecoder(),
    ]
    renderer: Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=out.isatty())

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    for name, level in logger_levels(verbose=verbose).items():
        logging.getLogger(name).setLevel(level)
