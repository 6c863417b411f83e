"""Parsing of identifiers embedded in URL paths."""

from __future__ import annotations

from serverconf.domain.value_objects import ClientId, MemberId, SubsystemId


def parse_client_id(value: str) -> ClientId:
    """Parse a client id in URL form ``INSTANCE:CLASS:CODE[:SUBSYSTEM]``.

    Raises:
        ValueError: If the value does not have three or four parts
    """
    parts = value.split(":")
    match parts:
        case [instance, member_class, member_code]:
            return MemberId(instance, member_class, member_code)
        case [instance, member_class, member_code, subsystem_code]:
            return SubsystemId(instance, member_class, member_code, subsystem_code)
        case _:
            raise ValueError(f"Invalid client id: {value!r}")


_MAX_ROW_ID = 2**63 - 1


def parse_numeric_id(value: str) -> int | None:
    """Parse a numeric path id.

    Returns None for anything that is not an ASCII decimal number fitting a
    BIGINT row id, so such ids resolve like any other unknown id.
    """
    if not (value.isascii() and value.isdigit()):
        return None
    number = int(value)
    if number > _MAX_ROW_ID:
        return None
    return number
