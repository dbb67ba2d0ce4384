"""Status resolution and message visibility.

Both are pure functions of immutable input and safe to call from any number
of concurrent requests.
"""

from error_response.descriptor import VariantDescriptor

DEFAULT_STATUS = 500

# First status whose message is withheld from the client
SERVER_ERROR_THRESHOLD = 500


def resolve_status(variant: VariantDescriptor) -> int:
    """Return the variant's declared status, or 500 if it declares none."""
    if variant.explicit_status is not None:
        return variant.explicit_status
    return DEFAULT_STATUS


def is_client_visible(status: int) -> bool:
    """Whether a response with ``status`` may show the error's own message.

    Class-based on purpose: every 5xx hides its message, everything below
    shows it.
    """
    return status < SERVER_ERROR_THRESHOLD
