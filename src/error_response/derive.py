"""Deriving HTTP responses for an error type.

``derive_error_response`` is called once, after every variant is defined::

    class CreateUserError(Exception):
        pass

    class InsertUserToDb(CreateUserError):
        ...

    @status(422)
    class InvalidBody(CreateUserError):
        ...

    responder = derive_error_response(CreateUserError)
    responder.register(app)

From then on the error type is sealed: its variant set cannot grow, and only
variants can be instantiated. Any definition problem is raised right here as
a DefinitionError, never while answering a request.
"""

from collections.abc import Mapping

from fastapi.responses import JSONResponse
from starlette.applications import Starlette
from starlette.requests import Request

from error_response.composer import ResolvedOutcome, ResponseComposer
from error_response.config import ErrorResponseSettings
from error_response.config import settings as default_settings
from error_response.descriptor import RESPONDER_ATTR, ErrorTypeDescriptor, describe
from error_response.diagnostics import DiagnosticEmitter
from error_response.exceptions import SealedErrorTypeError
from error_response.policy import resolve_status
from error_response.schemas.error import ErrorBody


class ErrorResponder:
    """The response logic generated for one error type."""

    def __init__(self, descriptor: ErrorTypeDescriptor, composer: ResponseComposer) -> None:
        self.descriptor = descriptor
        self.composer = composer

    def status_code(self, error: BaseException) -> int:
        """Status ``error`` responds with. No side effects."""
        return resolve_status(self.descriptor.variant_of(error))

    def compose(self, error: BaseException) -> ResolvedOutcome:
        return self.composer.compose(error)

    def into_response(self, error: BaseException) -> JSONResponse:
        outcome = self.compose(error)
        body = ErrorBody(code=outcome.status, error=outcome.body)
        return JSONResponse(status_code=outcome.status, content=body.model_dump())

    async def handle(self, request: Request, exc: Exception) -> JSONResponse:
        """Exception handler for Starlette/FastAPI."""
        return self.into_response(exc)

    def register(self, app: Starlette) -> None:
        app.add_exception_handler(self.descriptor.error_type, self.handle)  # type: ignore[arg-type]


def _seal(descriptor: ErrorTypeDescriptor) -> None:
    error_type = descriptor.error_type
    name = error_type.__qualname__
    variants = frozenset(variant.cls for variant in descriptor)
    # A __new__ the error type defines itself; otherwise defer along the variant's MRO
    own_new = vars(error_type).get("__new__")
    if isinstance(own_new, staticmethod):
        own_new = own_new.__func__

    def __init_subclass__(cls: type, **kwargs: object) -> None:
        raise SealedErrorTypeError(
            f"{name} is sealed; {cls.__qualname__} cannot be added after derive_error_response()"
        )

    def __new__(cls: type[BaseException], *args: object, **kwargs: object) -> BaseException:
        if cls not in variants:
            raise TypeError(f"cannot instantiate {cls.__qualname__}: not a variant of {name}")
        if own_new is not None:
            return own_new(cls, *args, **kwargs)  # type: ignore[no-any-return]
        # Variants mixing in OSError and friends need that class's __new__
        return super(error_type, cls).__new__(cls, *args, **kwargs)  # type: ignore[misc]

    error_type.__init_subclass__ = classmethod(__init_subclass__)  # type: ignore[assignment,method-assign]
    error_type.__new__ = staticmethod(__new__)  # type: ignore[assignment,method-assign]


def derive_error_response(
    error_type: type[BaseException],
    *,
    overrides: Mapping[type[BaseException], int] | None = None,
    emitter: DiagnosticEmitter | None = None,
    settings: ErrorResponseSettings | None = None,
) -> ErrorResponder:
    """Describe ``error_type``, seal it, and return its ErrorResponder.

    Args:
        error_type: Base exception class; its leaf subclasses are the variants.
        overrides: Extra status overrides keyed by variant class.
        emitter: Where 5xx diagnostics go (default: structlog).
        settings: Placeholder text and chain depth (default: env settings).
    """
    descriptor = describe(error_type, overrides)

    for variant in descriptor:
        for cls in variant.cls.__mro__:
            if RESPONDER_ATTR in vars(cls):
                raise SealedErrorTypeError(f"{cls.__qualname__} has already been derived")

    composer = ResponseComposer(
        descriptor,
        emitter=emitter,
        settings=settings if settings is not None else default_settings,
    )
    responder = ErrorResponder(descriptor, composer)

    _seal(descriptor)
    setattr(error_type, RESPONDER_ATTR, responder)
    return responder


def responder_for(error: BaseException) -> ErrorResponder:
    """Return the responder derived for the error type ``error`` belongs to."""
    responder = getattr(type(error), RESPONDER_ATTR, None)
    if responder is None:
        raise TypeError(f"{type(error).__qualname__} has no derived error response")
    return responder  # type: ignore[no-any-return]


def status_code(error: BaseException) -> int:
    return responder_for(error).status_code(error)


def into_response(error: BaseException) -> JSONResponse:
    return responder_for(error).into_response(error)
