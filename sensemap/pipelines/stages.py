"""Stage protocol and the non-mapping stages shipped with the package."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from ..datahub.senseval import read_answer_key
from ..senses.inventory import SenseInventoryName
from ..senses.items import Document, WSDItem


@runtime_checkable
class Stage(Protocol):
    """Anything that can process a document in place."""

    name: str

    def process(self, document: Document) -> None:
        """Annotate or rewrite ``document`` in place."""
        ...


class AnswerKeyStage:
    """Attach senses from an answer key to the targets they name.

    The key format does not say which inventory its labels come from, so the
    inventory is part of the stage configuration.  The same stage reads gold
    keys and system answer files; ``algorithm`` tells them apart.
    """

    def __init__(
        self,
        answers: Mapping[str, Sequence[str]],
        inventory: SenseInventoryName,
        algorithm: str = "gold",
        name: Optional[str] = None,
    ) -> None:
        if not inventory:
            raise ValueError("AnswerKeyStage needs the inventory its labels belong to.")
        self.answers: Dict[str, List[str]] = {key: list(senses) for key, senses in answers.items() if senses}
        self.inventory = inventory
        self.algorithm = algorithm
        self.name = name or f"answers:{algorithm}"
        self.attached = 0

    @classmethod
    def from_file(
        cls,
        path: Path,
        inventory: SenseInventoryName,
        algorithm: str = "gold",
        name: Optional[str] = None,
    ) -> "AnswerKeyStage":
        return cls(read_answer_key(path), inventory, algorithm=algorithm, name=name)

    def process(self, document: Document) -> None:
        existing = {item.item_id for item in document.items_for(self.algorithm)}
        for target in document.targets:
            senses = self.answers.get(target.item_id)
            if not senses or target.item_id in existing:
                continue
            document.items.append(
                WSDItem.from_target(
                    target,
                    inventory=self.inventory,
                    label=senses[0],
                    algorithm=self.algorithm,
                    alternatives=senses[1:],
                )
            )
            existing.add(target.item_id)
            self.attached += 1


__all__ = ["AnswerKeyStage", "Stage"]
