from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, cast

from ..senses.items import SenseAssignment, WSDItem


def item_to_record(item: WSDItem) -> Dict[str, Any]:
    """Convert a WSDItem to a plain dict with list spans and flattened history."""
    return {
        "item_id": item.item_id,
        "algorithm": item.algorithm,
        "inventory": item.inventory,
        "label": item.label,
        "lemma": item.lemma,
        "span": list(item.span) if item.span is not None else None,
        "covered_text": item.covered_text,
        "alternatives": list(item.alternatives),
        "unresolved": bool(item.unresolved),
        "history": [f"{step.inventory}\t{step.label}" for step in item.history],
    }


def record_to_item(row: Any) -> WSDItem:
    """Rebuild a WSDItem from a stored record."""
    data = ensure_mapping(row)
    raw_span = data.get("span")
    span: Optional[Tuple[int, int]] = None
    if raw_span is not None:
        span_seq = cast(Sequence[int], raw_span)
        span = (to_int(span_seq[0]), to_int(span_seq[1]))

    history: List[SenseAssignment] = []
    for step in safe_sequence(data.get("history")):
        inventory, _, label = step.partition("\t")
        history.append(SenseAssignment(inventory, label))

    lemma = data.get("lemma")
    covered = data.get("covered_text")
    return WSDItem(
        item_id=str(data.get("item_id")),
        inventory=str(data.get("inventory")),
        label=str(data.get("label")),
        algorithm=str(data.get("algorithm")),
        lemma=str(lemma) if lemma is not None else None,
        span=span,
        covered_text=str(covered) if covered is not None else None,
        alternatives=tuple(safe_sequence(data.get("alternatives"))),
        unresolved=bool(data.get("unresolved")),
        history=history,
    )


def ensure_mapping(row: Any) -> Mapping[str, Any]:
    """Guarantee dataset rows behave like mappings."""
    if isinstance(row, Mapping):
        return row
    raise TypeError(f"Unexpected row type: {type(row)}")


def safe_sequence(value: Any) -> Sequence[str]:
    """Return a sequence of strings even when the source is None or scalar."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def to_int(value: Any) -> int:
    """Robustly convert stored fields to ints."""
    if value is None:
        raise ValueError("Expected integer-like value, received None")
    if isinstance(value, bool):
        return int(value)
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Cannot convert {value!r} to int") from exc


__all__ = ["ensure_mapping", "item_to_record", "record_to_item", "safe_sequence", "to_int"]
