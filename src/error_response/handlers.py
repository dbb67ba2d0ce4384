"""Registering derived error responses on a FastAPI/Starlette app."""

from starlette.applications import Starlette

from error_response.descriptor import RESPONDER_ATTR
from error_response.exceptions import DefinitionError
from error_response.logging import get_logger

logger = get_logger(__name__)


def register_error_responses(app: Starlette, *error_types: type[BaseException]) -> None:
    """Install the exception handler of each derived error type on ``app``.

    Args:
        app: The FastAPI (or Starlette) application instance.
        error_types: Error types already passed to derive_error_response().
    """
    for error_type in error_types:
        responder = vars(error_type).get(RESPONDER_ATTR)
        if responder is None:
            raise DefinitionError(
                f"{error_type.__qualname__} has no derived error response; "
                "call derive_error_response() first"
            )
        responder.register(app)
        logger.debug(
            "error_response_registered",
            error_type=error_type.__qualname__,
            variants=[variant.name for variant in responder.descriptor],
        )
