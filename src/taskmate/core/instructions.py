# src/taskmate/core/instructions.py

from __future__ import annotations

import re
from enum import StrEnum


class Instruction(StrEnum):
    LIST = "list"
    MARK = "mark"
    UNMARK = "unmark"
    TODO = "todo"
    DEADLINE = "deadline"
    EVENT = "event"
    DELETE = "delete"
    FIND = "find"
    BYE = "bye"
    UNRECOGNIZED = "unrecognized"


# Checked in this order. A keyword only matches as a whole leading token,
# so "unmark 2" never falls into MARK and "listing" is not LIST.
DISPATCH_ORDER: tuple[Instruction, ...] = (
    Instruction.LIST,
    Instruction.MARK,
    Instruction.UNMARK,
    Instruction.TODO,
    Instruction.DEADLINE,
    Instruction.EVENT,
    Instruction.DELETE,
    Instruction.FIND,
    Instruction.BYE,
)

_PATTERNS: tuple[tuple[re.Pattern[str], Instruction], ...] = tuple(
    (re.compile(rf"{kind.value}(?:\s|$)", re.IGNORECASE), kind) for kind in DISPATCH_ORDER
)


def classify(line: str) -> Instruction:
    """Map a raw input line to its instruction kind. Never raises."""
    text = line.lstrip()
    for pattern, kind in _PATTERNS:
        if pattern.match(text):
            return kind
    return Instruction.UNRECOGNIZED
