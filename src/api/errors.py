"""Translation of component failures into API errors."""

from collections.abc import Sequence

from src.components.pages import PageError
from src.domain.errors import AuthorizationError, CmsError, NotFoundError, ValidationError

_ERROR_TYPES: dict[str, type[CmsError]] = {
    "validation": ValidationError,
    "unauthorized": AuthorizationError,
    "not_found": NotFoundError,
}


def raise_page_errors(errors: Sequence[PageError]) -> None:
    """
    Raise the CmsError matching the first error's kind.

    A component reports failures of a single kind at a time, so the messages
    are grouped under that kind.
    """
    if not errors:
        return
    kind = errors[0].kind
    messages = [e.message for e in errors if e.kind == kind]
    raise _ERROR_TYPES[kind](messages)
