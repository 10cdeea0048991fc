from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .inventory import SenseInventoryName, SenseLabel

Span = Tuple[int, int]


@dataclass(frozen=True)
class SenseAssignment:
    """A label together with the inventory it belongs to."""

    inventory: SenseInventoryName
    label: SenseLabel

    def __str__(self) -> str:
        return f"{self.inventory}:{self.label}"


@dataclass(frozen=True)
class WSDTarget:
    """A disambiguation target as read from a corpus, before any sense is assigned."""

    item_id: str
    lemma: str
    span: Optional[Span] = None
    covered_text: Optional[str] = None


@dataclass
class WSDItem:
    """One sense assignment for a target, produced by a single algorithm (or the gold key)."""

    item_id: str
    inventory: SenseInventoryName
    label: SenseLabel
    algorithm: str = "gold"
    lemma: Optional[str] = None
    span: Optional[Span] = None
    covered_text: Optional[str] = None
    alternatives: Tuple[SenseLabel, ...] = ()
    unresolved: bool = False
    history: List[SenseAssignment] = field(default_factory=list)

    @classmethod
    def from_target(
        cls,
        target: WSDTarget,
        inventory: SenseInventoryName,
        label: SenseLabel,
        algorithm: str = "gold",
        alternatives: Sequence[SenseLabel] = (),
    ) -> "WSDItem":
        return cls(
            item_id=target.item_id,
            inventory=inventory,
            label=label,
            algorithm=algorithm,
            lemma=target.lemma,
            span=target.span,
            covered_text=target.covered_text,
            alternatives=tuple(alternatives),
        )

    @property
    def assignment(self) -> SenseAssignment:
        return SenseAssignment(self.inventory, self.label)

    def relabel(
        self,
        inventory: SenseInventoryName,
        label: SenseLabel,
        alternatives: Optional[Sequence[SenseLabel]] = None,
    ) -> None:
        """Install a new (inventory, label) pair, keeping the previous one in ``history``.

        A relabeled item carries a target-inventory sense, so it is no longer unresolved.
        """
        self.history.append(self.assignment)
        self.inventory = inventory
        self.label = label
        self.alternatives = tuple(alternatives) if alternatives is not None else ()
        self.unresolved = False

    def mark_unresolved(self) -> None:
        self.unresolved = True


@dataclass
class Document:
    """A unit of text holding its targets and the sense assignments made so far."""

    document_id: str
    text: str
    targets: List[WSDTarget] = field(default_factory=list)
    items: List[WSDItem] = field(default_factory=list)

    def items_for(self, algorithm: str) -> List[WSDItem]:
        return [item for item in self.items if item.algorithm == algorithm]


__all__ = ["Document", "SenseAssignment", "Span", "WSDItem", "WSDTarget"]
