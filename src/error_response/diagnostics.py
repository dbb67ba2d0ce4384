"""Diagnostic records for server faults.

When a response hides the error's message (5xx), the full context goes here
instead: the message, every cause in order, and the variant that was raised.
Operators see it in the logs; clients never do.
"""

import contextlib
import sys
import traceback
from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from error_response.chain import Cause, render_report
from error_response.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class DiagnosticSink(Protocol):
    """Anything with a structlog-style ``error`` method."""

    def error(self, event: str, **fields: Any) -> Any: ...


def _note_failure(what: str) -> None:
    with contextlib.suppress(Exception):
        sys.stderr.write(f"error_response: {what}\n")
        traceback.print_exc(file=sys.stderr)


class DiagnosticEmitter:
    """Writes one ``internal_server_error`` record per server fault.

    Usage:
        emitter = DiagnosticEmitter()
        emitter.record(exc, str(exc), causal_chain(exc))

    Logs through structlog, so request context bound by RequestIDMiddleware
    (request_id, method, path) is included once logging is configured.
    """

    def __init__(self, sink: DiagnosticSink | None = None) -> None:
        self.sink: DiagnosticSink = sink if sink is not None else logger

    def record(self, error: BaseException, message: str, chain: Iterable[Cause]) -> None:
        """Log ``error`` with its causal chain. Never raises.

        A chain that fails partway is recorded up to the failing link.
        """
        causes: list[Cause] = []
        try:
            for cause in chain:
                causes.append(cause)
        except Exception:  # noqa: BLE001
            _note_failure("causal chain cut short")

        error_chain = [Cause(kind=type(error).__qualname__, message=message), *causes]
        try:
            self.sink.error(
                "internal_server_error",
                error_message=message,
                variant=type(error).__qualname__,
                error_type=f"{type(error).__module__}.{type(error).__qualname__}",
                error_chain=[cause._asdict() for cause in error_chain],
                error_details=render_report(message, causes),
            )
        except Exception:  # noqa: BLE001
            # A failing sink degrades observability only; the response still goes out
            _note_failure("failed to record internal_server_error")
