"""Persist final sense assignments as Hugging Face datasets on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Dict, Any

import datasets as hf_datasets

from ..senses.items import WSDItem
from .helpers import item_to_record, record_to_item


def save_assignments(items: Iterable[WSDItem], path: Path) -> int:
    """Write items to ``path`` in the given order and return how many were saved."""
    records: List[Dict[str, Any]] = [item_to_record(item) for item in items]
    path.parent.mkdir(parents=True, exist_ok=True)
    hf_datasets.Dataset.from_list(records).save_to_disk(str(path))
    print(f"[datahub] Saved {len(records)} assignments → {path}")
    return len(records)


def load_assignments(path: Path) -> Iterator[WSDItem]:
    """Yield WSDItem records from a store written by `save_assignments`."""
    stored = hf_datasets.load_from_disk(str(path))
    for row in stored:
        yield record_to_item(row)


__all__ = ["load_assignments", "save_assignments"]
