"""Definition-time errors raised while deriving an error response.

These signal a malformed error type: a bad status override, an error type
without variants, or an attempt to extend a sealed error type. They are raised
once, when ``derive_error_response`` runs, never while composing a response.
"""


class DefinitionError(Exception):
    """Base class for all definition-time errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidStatusError(DefinitionError):
    """Raised when a status override is not a valid HTTP status code."""

    def __init__(self, target: str, value: object) -> None:
        self.target = target
        self.value = value
        super().__init__(f"{target}: {value!r} is not an HTTP status code in [100, 599]")


class ConflictingStatusError(DefinitionError):
    """Raised when one variant declares more than one status override."""

    def __init__(self, variant: str, first: int, second: int) -> None:
        self.variant = variant
        self.first = first
        self.second = second
        super().__init__(f"{variant} declares status more than once ({first} and {second})")


class MisplacedStatusError(DefinitionError):
    """Raised when a status override targets a class that is not a variant."""


class NoVariantsError(DefinitionError):
    """Raised when an error type has no variants to derive a response for."""

    def __init__(self, error_type: str) -> None:
        self.error_type = error_type
        super().__init__(f"{error_type} has no variants; define at least one subclass")


class SealedErrorTypeError(DefinitionError):
    """Raised when a derived error type is extended or derived again."""
