"""Derive HTTP error responses from closed sets of exception variants.

Each variant declares at most an HTTP status; its message is its ``str()``.
Variants without a status respond with 500. Messages of 5xx responses are
never sent to the client: the body carries a fixed placeholder and the real
message, with its causal chain, is logged for operators instead.
"""

from error_response.chain import Cause, causal_chain, format_error_report, render_message
from error_response.composer import ResolvedOutcome, ResponseComposer
from error_response.config import ErrorResponseSettings
from error_response.descriptor import ErrorTypeDescriptor, VariantDescriptor, describe, status
from error_response.derive import (
    ErrorResponder,
    derive_error_response,
    into_response,
    responder_for,
    status_code,
)
from error_response.diagnostics import DiagnosticEmitter, DiagnosticSink
from error_response.exceptions import (
    ConflictingStatusError,
    DefinitionError,
    InvalidStatusError,
    MisplacedStatusError,
    NoVariantsError,
    SealedErrorTypeError,
)
from error_response.handlers import register_error_responses
from error_response.policy import DEFAULT_STATUS, is_client_visible, resolve_status

__all__ = [
    "DEFAULT_STATUS",
    "Cause",
    "ConflictingStatusError",
    "DefinitionError",
    "DiagnosticEmitter",
    "DiagnosticSink",
    "ErrorResponder",
    "ErrorResponseSettings",
    "ErrorTypeDescriptor",
    "InvalidStatusError",
    "MisplacedStatusError",
    "NoVariantsError",
    "ResolvedOutcome",
    "ResponseComposer",
    "SealedErrorTypeError",
    "VariantDescriptor",
    "causal_chain",
    "derive_error_response",
    "describe",
    "format_error_report",
    "into_response",
    "is_client_visible",
    "register_error_responses",
    "render_message",
    "resolve_status",
    "responder_for",
    "status",
    "status_code",
]
