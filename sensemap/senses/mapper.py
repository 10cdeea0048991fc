"""Pipeline stage translating item labels from one sense inventory into another."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ..errors import PipelineConfigurationError, UnknownSenseError
from .inventory import SenseInventoryName, SenseLabel
from .items import Document, WSDItem
from .mapping_table import MappingTable


@dataclass(frozen=True)
class SenseMapperConfig:
    """Configuration for `SenseMapperStage`."""

    source_inventory: SenseInventoryName
    target_inventory: SenseInventoryName
    ignore_unknown_senses: bool = False

    def validate(self) -> None:
        if not self.source_inventory or not self.target_inventory:
            raise PipelineConfigurationError("Sense mapper needs both a source and a target inventory.")
        if self.source_inventory == self.target_inventory:
            raise PipelineConfigurationError(
                f"Sense mapper source and target inventory are both '{self.source_inventory}'."
            )


@dataclass
class MapperStats:
    """Per-run counters reported after a stage finishes."""

    mapped: int = 0
    unresolved: int = 0
    skipped: int = 0

    def reset(self) -> None:
        self.mapped = self.unresolved = self.skipped = 0


class SenseMapperStage:
    """Replace labels under ``source_inventory`` with their ``target_inventory`` counterparts.

    Items labeled under any other inventory pass through untouched, so the
    stage can sit in a pipeline carrying assignments from several schemes and
    applying it twice is harmless.
    """

    def __init__(self, table: MappingTable, config: SenseMapperConfig, name: Optional[str] = None) -> None:
        config.validate()
        self.table = table
        self.config = config
        self.name = name or f"{config.source_inventory}->{config.target_inventory}"
        self.stats = MapperStats()

    @classmethod
    def from_file(
        cls,
        locator: str | Path,
        key_column: int,
        value_column: int,
        config: SenseMapperConfig,
        *,
        delimiter: str = "\t",
        name: Optional[str] = None,
    ) -> "SenseMapperStage":
        table = MappingTable.load(locator, key_column, value_column, delimiter=delimiter)
        return cls(table, config, name=name)

    @property
    def source_inventory(self) -> SenseInventoryName:
        return self.config.source_inventory

    @property
    def target_inventory(self) -> SenseInventoryName:
        return self.config.target_inventory

    def apply(self, item: WSDItem) -> WSDItem:
        if item.inventory != self.config.source_inventory:
            self.stats.skipped += 1
            return item

        mapped = self.table.lookup(item.label)
        if not mapped:
            if not self.config.ignore_unknown_senses:
                raise UnknownSenseError(item.item_id, item.label, self.config.source_inventory)
            item.mark_unresolved()
            self.stats.unresolved += 1
            return item

        item.relabel(self.config.target_inventory, mapped[0], self._map_alternatives(item.alternatives))
        self.stats.mapped += 1
        return item

    def process(self, document: Document) -> None:
        for item in document.items:
            self.apply(item)

    def _map_alternatives(self, alternatives: Sequence[SenseLabel]) -> List[SenseLabel]:
        result: List[SenseLabel] = []
        for label in alternatives:
            value = self.table.first(label)
            if value is not None and value not in result:
                result.append(value)
        return result

    def __repr__(self) -> str:
        return f"SenseMapperStage(name={self.name!r}, table={self.table!r})"


__all__ = ["MapperStats", "SenseMapperConfig", "SenseMapperStage"]
