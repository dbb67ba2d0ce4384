"""Error type descriptors.

An error type is an ``Exception`` subclass; its leaf subclasses are its
variants. ``describe()`` reads what each variant declares (currently just an
optional status override) and freezes it into an ``ErrorTypeDescriptor``::

    class CreateUserError(Exception):
        pass

    class InsertUserToDb(CreateUserError):
        def __str__(self) -> str:
            return "failed to insert user into the database"

    @status(HTTPStatus.UNPROCESSABLE_ENTITY)
    class InvalidBody(CreateUserError):
        pass

    descriptor = describe(CreateUserError)

Overrides may also be passed as a mapping (``describe(E, overrides={V: 409})``);
both spellings feed the same lookup and may not be combined for one variant.
"""

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeVar

from error_response.exceptions import (
    ConflictingStatusError,
    DefinitionError,
    InvalidStatusError,
    MisplacedStatusError,
    NoVariantsError,
    SealedErrorTypeError,
)

STATUS_ATTR = "__error_status__"
RESPONDER_ATTR = "__error_responder__"

MIN_STATUS = 100
MAX_STATUS = 599

E = TypeVar("E", bound=type[BaseException])


def validate_status(target: str, value: object) -> int:
    """Return ``value`` as a plain int, or raise InvalidStatusError.

    ``HTTPStatus`` members and ``fastapi.status`` constants are ints and pass.
    ``bool`` is an int subclass but never a status.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidStatusError(target, value)
    if not MIN_STATUS <= value <= MAX_STATUS:
        raise InvalidStatusError(target, value)
    return int(value)


def status(code: int) -> Callable[[E], E]:
    """Class decorator declaring the HTTP status a variant responds with.

    Variants without it respond with 500.
    """

    def decorate(cls: E) -> E:
        name = cls.__qualname__
        if getattr(cls, RESPONDER_ATTR, None) is not None:
            raise SealedErrorTypeError(f"{name} belongs to an error type that is already derived")
        value = validate_status(name, code)
        declared = cls.__dict__.get(STATUS_ATTR)
        if declared is not None:
            raise ConflictingStatusError(name, declared, value)
        setattr(cls, STATUS_ATTR, value)
        return cls

    return decorate


@dataclass(frozen=True)
class VariantDescriptor:
    """One case of an error type."""

    cls: type[BaseException]
    explicit_status: int | None = None

    @property
    def name(self) -> str:
        return self.cls.__qualname__


@dataclass(frozen=True)
class ErrorTypeDescriptor:
    """The closed set of variants of one error type."""

    error_type: type[BaseException]
    variants: tuple[VariantDescriptor, ...]
    _by_class: Mapping[type[BaseException], VariantDescriptor] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        by_class = MappingProxyType({variant.cls: variant for variant in self.variants})
        object.__setattr__(self, "_by_class", by_class)

    @property
    def name(self) -> str:
        return self.error_type.__qualname__

    def __iter__(self) -> Iterator[VariantDescriptor]:
        return iter(self.variants)

    def __len__(self) -> int:
        return len(self.variants)

    def variant_of(self, error: BaseException) -> VariantDescriptor:
        """Return the variant ``error`` is an instance of.

        Matches the exact class. There is no fallback: anything outside the
        closed set is a TypeError.
        """
        try:
            return self._by_class[type(error)]
        except KeyError:
            raise TypeError(f"{type(error).__qualname__} is not a variant of {self.name}") from None


def _walk(error_type: type[BaseException]) -> Iterator[type[BaseException]]:
    """Yield every subclass of ``error_type`` once, parents before children."""
    seen: set[type[BaseException]] = set()
    pending = list(error_type.__subclasses__())
    while pending:
        cls = pending.pop(0)
        if cls in seen:
            continue
        seen.add(cls)
        yield cls
        pending.extend(cls.__subclasses__())


def describe(
    error_type: type[BaseException],
    overrides: Mapping[type[BaseException], int] | None = None,
) -> ErrorTypeDescriptor:
    """Build the descriptor for ``error_type``.

    Raises a DefinitionError subclass for anything that would make the
    status mapping ambiguous or incomplete.
    """
    if not (isinstance(error_type, type) and issubclass(error_type, BaseException)):
        raise DefinitionError(f"{error_type!r} is not an exception class")

    classes = list(_walk(error_type))
    leaves = [cls for cls in classes if not cls.__subclasses__()]
    if not leaves:
        raise NoVariantsError(error_type.__qualname__)

    for cls in (error_type, *classes):
        if cls not in leaves and STATUS_ATTR in cls.__dict__:
            raise MisplacedStatusError(
                f"{cls.__qualname__} declares a status but is not a variant of "
                f"{error_type.__qualname__}; declare it on each variant instead"
            )

    overrides = dict(overrides or {})
    for cls in overrides:
        if cls not in leaves:
            raise MisplacedStatusError(
                f"override for {getattr(cls, '__qualname__', cls)!s} does not name a variant "
                f"of {error_type.__qualname__}"
            )

    variants = []
    for cls in leaves:
        explicit = cls.__dict__.get(STATUS_ATTR)
        if cls in overrides:
            value = validate_status(cls.__qualname__, overrides[cls])
            if explicit is not None:
                raise ConflictingStatusError(cls.__qualname__, explicit, value)
            explicit = value
        variants.append(VariantDescriptor(cls=cls, explicit_status=explicit))

    return ErrorTypeDescriptor(error_type=error_type, variants=tuple(variants))
