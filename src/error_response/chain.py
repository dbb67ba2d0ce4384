"""Causal chain traversal.

Python records the cause of an exception in ``__cause__`` (``raise ... from``)
or, implicitly, in ``__context__`` (raised while handling another exception).
The chain is walked the way ``traceback`` walks it, from the immediate cause
outward to the root.
"""

from collections.abc import Iterable, Iterator
from typing import NamedTuple

DEFAULT_MAX_DEPTH = 32

UNPRINTABLE = "<exception str() failed>"


class Cause(NamedTuple):
    """One link in a causal chain."""

    kind: str
    message: str


def render_message(error: BaseException) -> str:
    """``str(error)``, or a fixed marker when the exception cannot render itself."""
    try:
        return str(error)
    except Exception:  # noqa: BLE001
        return UNPRINTABLE


def _source(error: BaseException) -> BaseException | None:
    if error.__cause__ is not None:
        return error.__cause__
    if error.__suppress_context__:
        return None
    return error.__context__


def causal_chain(error: BaseException, max_depth: int = DEFAULT_MAX_DEPTH) -> Iterator[Cause]:
    """Lazily yield the causes of ``error``, immediate cause first.

    ``error`` itself is not included. Stops at the first exception already
    seen (a cycle) or after ``max_depth`` causes.
    """
    seen = {id(error)}
    current = _source(error)
    depth = 0
    while current is not None and id(current) not in seen and depth < max_depth:
        yield Cause(kind=type(current).__qualname__, message=render_message(current))
        seen.add(id(current))
        depth += 1
        current = _source(current)


def render_report(message: str, causes: Iterable[Cause]) -> str:
    """Render a message and its causes as a multi-line operator report.

    The message, a blank line, then a ``Caused by:`` line per cause followed
    by the cause's message indented with a tab.
    """
    lines = [message, ""]
    for cause in causes:
        lines.append("Caused by:")
        lines.append(f"\t{cause.message}")
    return "\n".join(lines) + "\n"


def format_error_report(error: BaseException, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """``render_report`` for an exception and its own chain."""
    return render_report(render_message(error), causal_chain(error, max_depth))
