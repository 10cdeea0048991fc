"""Immutable key -> labels lookup tables loaded from delimited text resources."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..datahub.io import resolve_resource
from ..errors import ResourceLoadError
from .inventory import SenseLabel


class MappingTable:
    """Read-only mapping from a source label to an ordered tuple of target labels.

    Rows sharing a key accumulate in file order, so ``lookup(key)[0]`` is the
    value of the first row carrying that key.
    """

    def __init__(self, entries: Mapping[SenseLabel, Tuple[SenseLabel, ...]], name: str = "<memory>") -> None:
        self._entries: Mapping[SenseLabel, Tuple[SenseLabel, ...]] = MappingProxyType(dict(entries))
        self.name = name

    @classmethod
    def from_entries(cls, entries: Iterable[Tuple[SenseLabel, SenseLabel]], name: str = "<memory>") -> "MappingTable":
        return cls(_accumulate(entries), name=name)

    @classmethod
    def load(
        cls,
        source: str | Path,
        key_column: int,
        value_column: int,
        *,
        delimiter: str = "\t",
        encoding: str = "utf-8",
    ) -> "MappingTable":
        """Load a delimited table, taking keys and values from 1-indexed columns.

        Parameters
        ----------
        source:
            Resource locator: local path, ``file:`` URL, ``classpath:/...``
            bundled resource or ``http(s)://`` URL.
        key_column, value_column:
            1-indexed column positions.
        delimiter:
            Column separator (tab by default).

        Raises
        ------
        ResourceLoadError
            If the resource cannot be read, or no row reaches a configured column.
        """
        locator = str(source)
        if key_column < 1 or value_column < 1:
            raise ResourceLoadError(locator, f"columns are 1-indexed, got key={key_column} value={value_column}")

        path = resolve_resource(locator)
        try:
            lines = path.read_text(encoding=encoding).splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            raise ResourceLoadError(locator, str(exc)) from exc

        needed = max(key_column, value_column)
        pairs: List[Tuple[SenseLabel, SenseLabel]] = []
        malformed = 0
        widest = 0
        for columns in _split_rows(lines, delimiter):
            widest = max(widest, len(columns))
            if len(columns) < needed:
                malformed += 1
                continue
            key, value = columns[key_column - 1].strip(), columns[value_column - 1].strip()
            if not key or not value:
                malformed += 1
                continue
            pairs.append((key, value))

        if malformed and widest < needed:
            raise ResourceLoadError(locator, f"column {needed} out of range; the widest row has {widest} column(s)")
        if malformed:
            print(
                f"[senses] Skipped {malformed} malformed row(s) in {locator} "
                f"(fewer than {needed} columns or empty key/value)."
            )
        return cls.from_entries(pairs, name=locator)

    def lookup(self, key: SenseLabel) -> Optional[Tuple[SenseLabel, ...]]:
        """Return every label mapped from ``key`` in row order, or None if the key is absent."""
        return self._entries.get(key)

    def first(self, key: SenseLabel) -> Optional[SenseLabel]:
        values = self._entries.get(key)
        return values[0] if values else None

    def keys(self) -> Iterator[SenseLabel]:
        return iter(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"MappingTable(name={self.name!r}, keys={len(self)})"


# ---------------------------------------------------------------------------
# Internal helpers


def _split_rows(lines: Iterable[str], delimiter: str) -> Iterator[List[str]]:
    for line in lines:
        if not line.strip():
            continue
        yield line.rstrip("\r\n").split(delimiter)


def _accumulate(entries: Iterable[Tuple[SenseLabel, SenseLabel]]) -> Dict[SenseLabel, Tuple[SenseLabel, ...]]:
    grouped: Dict[SenseLabel, List[SenseLabel]] = {}
    for key, value in entries:
        values = grouped.setdefault(key, [])
        if value not in values:
            values.append(value)
    return {key: tuple(values) for key, values in grouped.items()}


__all__ = ["MappingTable"]
