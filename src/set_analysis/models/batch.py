"""Batch-edit instruction lines attached to a requested set.

Lines follow the batch editor syntax:

    =Generation=8     filter: property equals value
    !Version=SW       filter: property differs from value
    >LevelMin=10      filter: property greater than value (also <, ≥, ≤)
    .Ball=4           instruction: set property to value

Filters select encounters (or game versions); instructions are carried along
for whoever applies the final record and are never evaluated here.
"""

from __future__ import annotations

from dataclasses import dataclass


FILTER_PREFIXES: dict[str, str] = {
    "=": "==",
    "!": "!=",
    ">": ">",
    "<": "<",
    "≥": ">=",
    "≤": "<=",
}
INSTRUCTION_PREFIX = "."


@dataclass(frozen=True, slots=True)
class StringInstruction:
    """A single parsed batch line."""

    property_name: str
    value: str
    operator: str = "=="        # comparison symbol; "=" for instructions
    is_filter: bool = True

    def __str__(self) -> str:
        if not self.is_filter:
            return f"{INSTRUCTION_PREFIX}{self.property_name}={self.value}"
        prefix = next(p for p, op in FILTER_PREFIXES.items() if op == self.operator)
        return f"{prefix}{self.property_name}={self.value}"


def parse_instruction(line: str) -> StringInstruction:
    """Parse one batch line. Raises ValueError on malformed input."""
    text = line.strip()
    if len(text) < 4:
        raise ValueError(f"Batch line too short: {line!r}")
    prefix, body = text[0], text[1:]
    if "=" not in body:
        raise ValueError(f"Batch line missing '=': {line!r}")
    prop, value = body.split("=", 1)
    prop = prop.strip()
    if not prop:
        raise ValueError(f"Batch line missing property name: {line!r}")
    if prefix == INSTRUCTION_PREFIX:
        return StringInstruction(prop, value.strip(), operator="=", is_filter=False)
    operator = FILTER_PREFIXES.get(prefix)
    if operator is None:
        raise ValueError(f"Unknown batch prefix {prefix!r} in {line!r}")
    return StringInstruction(prop, value.strip(), operator=operator)


def parse_filters(lines: list[str]) -> list[StringInstruction]:
    """Parse filter lines, rejecting instructions."""
    filters: list[StringInstruction] = []
    for line in lines:
        if not line.strip():
            continue
        instruction = parse_instruction(line)
        if not instruction.is_filter:
            raise ValueError(f"Expected a filter line, got instruction {line!r}")
        filters.append(instruction)
    return filters


@dataclass(frozen=True, slots=True)
class BatchSettings:
    """Batch filters and instructions carried by a requested set."""

    filters: tuple[StringInstruction, ...] = ()
    instructions: tuple[StringInstruction, ...] = ()

    @property
    def has_batch_settings(self) -> bool:
        return bool(self.filters or self.instructions)

    @classmethod
    def from_lines(cls, lines: list[str]) -> BatchSettings:
        """Split raw batch lines into filters and instructions."""
        filters: list[StringInstruction] = []
        instructions: list[StringInstruction] = []
        for line in lines:
            if not line.strip():
                continue
            parsed = parse_instruction(line)
            if parsed.is_filter:
                filters.append(parsed)
            else:
                instructions.append(parsed)
        return cls(filters=tuple(filters), instructions=tuple(instructions))

