"""
Referee line protocol for the hexfleet naval skirmish bot.

Each turn the referee sends:

    <myShipCount>
    <entityCount>
    <id> <kind> <x> <y> <arg1> <arg2> <arg3> <arg4>   (entityCount lines)

and expects one ``MOVE x y`` or ``FIRE x y`` line per owned ship.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, TextIO

from .captain import Command, TurnInput
from .perception import EntityRecord

ENTITY_FIELD_COUNT = 8


class ProtocolError(ValueError):
    """Malformed or truncated referee input."""


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise ProtocolError(f"Input ended while reading {what}") from None


def _parse_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ProtocolError(f"Expected integer for {what}, got {token!r}") from None


def parse_entity_line(line: str) -> EntityRecord:
    """
    Parse one entity line.

    Args:
        line: ``id kind x y arg1 arg2 arg3 arg4``.

    Returns:
        The raw EntityRecord.

    Raises:
        ProtocolError: On a wrong field count or non-integer field.
    """
    fields = line.split()
    if len(fields) != ENTITY_FIELD_COUNT:
        raise ProtocolError(
            f"Entity line needs {ENTITY_FIELD_COUNT} fields, got {len(fields)}: {line!r}"
        )

    entity_id, kind, *numbers = fields
    x, y, arg1, arg2, arg3, arg4 = (_parse_int(n, "entity field") for n in numbers)
    return EntityRecord(
        entity_id=_parse_int(entity_id, "entity id"),
        kind=kind,
        x=x,
        y=y,
        arg1=arg1,
        arg2=arg2,
        arg3=arg3,
        arg4=arg4,
    )


def read_turn(lines: Iterator[str]) -> Optional[TurnInput]:
    """
    Read one turn from an iterator of text lines.

    Blank lines before the ship count are skipped.

    Returns:
        The TurnInput, or None if input ended cleanly before a new turn.

    Raises:
        ProtocolError: On malformed or truncated input.
    """
    for line in lines:
        if line.strip():
            ship_count_line = line
            break
    else:
        return None

    my_ship_count = _parse_int(ship_count_line.strip(), "ship count")
    entity_count = _parse_int(_next_line(lines, "entity count").strip(), "entity count")
    if entity_count < 0:
        raise ProtocolError(f"Negative entity count {entity_count}")

    entities: List[EntityRecord] = []
    for index in range(entity_count):
        entities.append(parse_entity_line(_next_line(lines, f"entity {index}")))

    return TurnInput(my_ship_count=my_ship_count, entities=entities)


def iter_turns(lines: Iterable[str]) -> Iterator[TurnInput]:
    """Yield turns until the input ends."""
    source = iter(lines)
    while True:
        turn_input = read_turn(source)
        if turn_input is None:
            return
        yield turn_input


def write_commands(commands: Iterable[Command], stream: TextIO) -> None:
    """Write commands one per line and flush so the referee sees them now."""
    for command in commands:
        stream.write(command.to_line() + "\n")
    stream.flush()
