"""Identifier codec.

Primary keys are signed 64-bit integers in the store. JSON consumers can only
represent integers safely up to 2**53 - 1, so identifiers always cross the
wire as decimal strings. Identifier values loaded from the database are
``Int64`` instances (see ``books_service.models.database.types``), which lets
``to_wire`` encode them in one recursive pass while leaving counts and
paragraph numbers as native numbers.
"""

import re
from typing import Any, Union

from books_service.core.errors import InvalidIdentifier

INT64_MAX = 2**63 - 1

_DIGITS = re.compile(r"[0-9]+")


class Int64(int):
    """An ``int`` that is known to be a 64-bit identifier."""

    __slots__ = ()

    __str__ = int.__repr__

    def __repr__(self) -> str:
        return f"Int64({int(self)})"


def encode(internal: int) -> str:
    """Encode an internal identifier as its decimal wire form."""
    if isinstance(internal, bool) or not isinstance(internal, int):
        raise InvalidIdentifier(f"Cannot encode identifier {internal!r}")
    if internal < 0 or internal > INT64_MAX:
        raise InvalidIdentifier(f"Identifier out of range: {internal}")
    return str(int(internal))


def decode(wire: Union[str, int]) -> Int64:
    """Parse a wire identifier (decimal string or integer).

    Raises:
        InvalidIdentifier: if the input is not a non-negative integer literal
            within the signed 64-bit range
    """
    if isinstance(wire, bool):
        raise InvalidIdentifier(f"Invalid identifier: {wire!r}")
    if isinstance(wire, int):
        value = int(wire)
    elif isinstance(wire, str):
        text = wire.strip()
        if not _DIGITS.fullmatch(text):
            raise InvalidIdentifier(f"Invalid identifier: {wire!r}")
        value = int(text)
    else:
        raise InvalidIdentifier(f"Invalid identifier: {wire!r}")

    if value < 0 or value > INT64_MAX:
        raise InvalidIdentifier(f"Identifier out of range: {wire!r}")
    return Int64(value)


def to_wire(payload: Any) -> Any:
    """Recursively replace every ``Int64`` in ``payload`` with its wire form."""
    if isinstance(payload, Int64):
        return encode(payload)
    if isinstance(payload, dict):
        return {key: to_wire(value) for key, value in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [to_wire(item) for item in payload]
    return payload
