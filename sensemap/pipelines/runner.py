"""Ordered, batch-style execution of pipeline stages over a document collection."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from tqdm import tqdm

from ..errors import PipelineConfigurationError
from ..senses.items import Document, WSDItem
from ..senses.mapper import SenseMapperStage
from .stages import Stage


class Pipeline:
    """Run a fixed sequence of stages; every document passes stage k before any sees stage k+1.

    Adjacent mapper stages must agree on inventories (the target of one is the
    source of the next).  A mismatch would turn the second stage into a silent
    no-op, so it is rejected when the pipeline is built.
    """

    def __init__(self, stages: Sequence[Stage], *, show_progress: bool = False) -> None:
        if not stages:
            raise PipelineConfigurationError("A pipeline needs at least one stage.")
        for stage in stages:
            if not isinstance(stage, Stage):
                raise PipelineConfigurationError(f"{stage!r} does not implement process(document).")
        validate_chain(stages)
        self.stages: List[Stage] = list(stages)
        self.show_progress = show_progress

    def run(self, documents: Iterable[Document]) -> List[Document]:
        batch = list(documents)
        print(f"[pipeline] Running {len(self.stages)} stage(s) over {len(batch)} document(s).")
        for stage in self.stages:
            if isinstance(stage, SenseMapperStage):
                stage.stats.reset()
            iterator = tqdm(batch, desc=stage.name, leave=False) if self.show_progress else batch
            for document in iterator:
                stage.process(document)
            print(f"[pipeline] {stage.name}: {_stage_summary(stage)}")
        return batch


def validate_chain(stages: Sequence[Stage]) -> None:
    """Raise PipelineConfigurationError if directly chained mapper stages disagree on inventories."""
    for stage in stages:
        if isinstance(stage, SenseMapperStage):
            stage.config.validate()
    for current, following in zip(stages, stages[1:]):
        if not (isinstance(current, SenseMapperStage) and isinstance(following, SenseMapperStage)):
            continue
        if current.target_inventory != following.source_inventory:
            raise PipelineConfigurationError(
                f"Stage '{current.name}' produces '{current.target_inventory}' but the next stage "
                f"'{following.name}' expects '{following.source_inventory}'."
            )


def collect_assignments(documents: Iterable[Document], algorithm: Optional[str] = None) -> List[WSDItem]:
    """Flatten document items into a list ordered by (item id, algorithm)."""
    items = [
        item
        for document in documents
        for item in document.items
        if algorithm is None or item.algorithm == algorithm
    ]
    return sorted(items, key=lambda item: (item.item_id, item.algorithm))


def _stage_summary(stage: Stage) -> str:
    if isinstance(stage, SenseMapperStage):
        stats = stage.stats
        return f"mapped={stats.mapped} unresolved={stats.unresolved} out-of-scope={stats.skipped}"
    attached = getattr(stage, "attached", None)
    if attached is not None:
        return f"attached={attached}"
    return "done"


__all__ = ["Pipeline", "collect_assignments", "validate_chain"]
