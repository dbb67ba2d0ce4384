"""Response composition.

Turns one error value into a status and a body:

1. find the variant the error is an instance of
2. resolve its status (declared, or 500)
3. decide whether its message may be shown (status < 500)
4. show the message, or hide it behind a fixed placeholder and record the
   full error for operators
"""

from dataclasses import dataclass

from error_response.chain import causal_chain, render_message
from error_response.config import ErrorResponseSettings
from error_response.config import settings as default_settings
from error_response.descriptor import ErrorTypeDescriptor
from error_response.diagnostics import DiagnosticEmitter
from error_response.policy import is_client_visible, resolve_status


@dataclass(frozen=True)
class ResolvedOutcome:
    """Result of composing one error occurrence.

    ``visible_message`` is None whenever the status is 5xx; ``body`` is then
    the placeholder. ``logged`` tells whether a diagnostic record was emitted.
    """

    status: int
    body: str
    visible_message: str | None
    logged: bool


class ResponseComposer:
    """Composes responses for the variants of one error type."""

    def __init__(
        self,
        descriptor: ErrorTypeDescriptor,
        emitter: DiagnosticEmitter | None = None,
        settings: ErrorResponseSettings | None = None,
    ) -> None:
        self.descriptor = descriptor
        self.emitter = emitter if emitter is not None else DiagnosticEmitter()
        self.settings = settings if settings is not None else default_settings

    def compose(self, error: BaseException) -> ResolvedOutcome:
        variant = self.descriptor.variant_of(error)
        status = resolve_status(variant)
        message = render_message(error)

        if is_client_visible(status):
            return ResolvedOutcome(status=status, body=message, visible_message=message, logged=False)

        self.emitter.record(error, message, causal_chain(error, self.settings.max_cause_depth))
        return ResolvedOutcome(
            status=status,
            body=self.settings.internal_error_message,
            visible_message=None,
            logged=True,
        )
