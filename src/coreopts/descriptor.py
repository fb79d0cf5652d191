"""descriptor.py – Parse raw core option descriptors.

A core announces each option as a ``(key, descriptor)`` pair where the
descriptor reads::

    "Graphics API; gl|vulkan|d3d11"

The text before the first ``"; "`` is the human-readable description and
the rest is the ``|``-separated list of choices.  The first choice is the
default.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import NamedTuple

from coreopts.errors import DescriptorError
from coreopts.store import ConfigStore

log = logging.getLogger(__name__)

SEPARATOR = "; "
VALUE_DELIMITER = "|"


class Variable(NamedTuple):
    """One raw ``(key, descriptor)`` pair as supplied by a core."""

    key: str | None
    value: str | None


@dataclass(frozen=True)
class ParsedDescriptor:
    description: str
    values: tuple[str, ...]


@dataclass
class CoreOption:
    """A single multiple-choice option and its current selection."""

    key: str
    description: str
    values: tuple[str, ...]
    index: int = 0

    @property
    def value(self) -> str:
        return self.values[self.index]

    def select(self, value_index: int) -> None:
        """Select *value_index*, wrapping it into range."""
        self.index = value_index % len(self.values)

    def step(self, delta: int) -> None:
        self.select(self.index + delta)

    def find(self, value: str) -> int | None:
        """Return the position of the first choice equal to *value*."""
        for i, candidate in enumerate(self.values):
            if candidate == value:
                return i
        return None


def parse_descriptor(key: str, descriptor: str) -> ParsedDescriptor:
    """Split *descriptor* into its description and list of choices.

    The description is kept verbatim.  Empty and duplicate choices are
    preserved; only an entirely empty choice list is rejected.
    """
    desc, sep, rest = descriptor.partition(SEPARATOR)
    if not sep:
        raise DescriptorError(
            f"Option '{key}' has no '{SEPARATOR}' between description and values",
            key,
            descriptor,
        )
    if not rest:
        raise DescriptorError(f"Option '{key}' declares no values", key, descriptor)
    return ParsedDescriptor(description=desc, values=tuple(rest.split(VALUE_DELIMITER)))


def parse_variable(key: str, descriptor: str, store: ConfigStore) -> CoreOption:
    """Parse one variable and seed its selection from *store*."""
    parsed = parse_descriptor(key, descriptor)
    option = CoreOption(key=key, description=parsed.description, values=parsed.values)

    stored = store.get_string(key)
    if stored is not None:
        found = option.find(stored)
        if found is None:
            log.debug("Stored value %r for %s is not a valid choice, using default", stored, key)
        else:
            option.index = found
    return option


def iter_variables(variables: Iterable[tuple[str | None, str | None]]) -> Iterator[Variable]:
    """Yield pairs up to the terminating entry.

    A pair whose key or descriptor is ``None`` ends the list, mirroring the
    sentinel-terminated arrays cores hand over.
    """
    for key, value in variables:
        if key is None or value is None:
            return
        yield Variable(key, value)
