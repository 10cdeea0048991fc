"""
Readers and writers for Senseval-style corpora and answer keys.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ..senses.items import Document, Span, WSDItem, WSDTarget

COMMENT_MARKER = "!!"
_LEXELT_POS = {"n", "v", "a", "r", "s"}


def read_answer_key(path: Path) -> Dict[str, List[str]]:
    """
    Parse a Senseval/SemEval answer key into ``instance id -> senses``.

    Two line shapes are accepted: ``lexelt instance_id sense [sense ...]``
    (lexical sample keys, and SemEval keys whose first column is the document
    id) and the all-words form ``instance_id sense [sense ...]``.  Anything
    after ``!!`` is a comment.
    """
    if not path.exists():
        raise FileNotFoundError(f"Missing answer key at {path}")

    answers: Dict[str, List[str]] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        tokens = line.split(COMMENT_MARKER, 1)[0].split()
        if len(tokens) < 2:
            continue
        if len(tokens) >= 3 and _is_lexelt_line(tokens):
            instance_id, senses = tokens[1], tokens[2:]
        else:
            instance_id, senses = tokens[0], tokens[1:]
        bucket = answers.setdefault(instance_id, [])
        bucket.extend(sense for sense in senses if sense not in bucket)
    return answers


def write_answer_key(items: Iterable[WSDItem], path: Path) -> None:
    """Write items as an answer key, sorted by item id."""
    lines: List[str] = []
    for item in sorted(items, key=lambda it: it.item_id):
        senses = " ".join((item.label,) + tuple(alt for alt in item.alternatives if alt != item.label))
        if item.lemma:
            lines.append(f"{item.lemma} {item.item_id} {senses}")
        else:
            lines.append(f"{item.item_id} {senses}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")


def read_lexical_sample(path: Path, *, max_items: Optional[int] = None) -> List[Document]:
    """
    Parse a Senseval-2 lexical sample corpus into one document per instance.

    Parameters
    ----------
    path:
        The ``*.xml`` corpus file.
    max_items:
        Stop after this many instances; ``None`` or a negative value reads everything.
    """
    if not path.exists():
        raise FileNotFoundError(f"Missing Senseval corpus at {path}")

    documents: List[Document] = []
    root = ET.parse(str(path)).getroot()
    for lexelt in root.iterfind(".//lexelt"):
        lemma = lemma_from_lexelt(lexelt.get("item", ""))
        for instance in lexelt.iterfind("instance"):
            if max_items is not None and 0 <= max_items <= len(documents):
                return documents
            instance_id = instance.get("id")
            context = instance.find("context")
            if not instance_id or context is None:
                continue
            text, head_span = _flatten_context(context)
            targets: List[WSDTarget] = []
            if head_span is not None:
                targets.append(
                    WSDTarget(
                        item_id=instance_id,
                        lemma=lemma,
                        span=head_span,
                        covered_text=text[head_span[0]:head_span[1]],
                    )
                )
            documents.append(Document(document_id=instance_id, text=text, targets=targets))
    return documents


def lemma_from_lexelt(item: str) -> str:
    """Strip the part-of-speech suffix from a lexelt name (``art.n`` -> ``art``)."""
    base, sep, suffix = item.rpartition(".")
    if sep and len(suffix) == 1:
        return base
    return item


# ---------------------------------------------------------------------------
# Internal helpers


def _is_lexelt_line(tokens: List[str]) -> bool:
    """True when the second token is an instance id under the lexelt (or document) in the first."""
    prefixes = {tokens[0]}
    base, sep, suffix = tokens[0].rpartition(".")
    if sep and suffix in _LEXELT_POS:
        prefixes.add(base)
    return any(tokens[1].startswith(prefix + ".") and len(tokens[1]) > len(prefix) + 1 for prefix in prefixes)


def _flatten_context(context: ET.Element) -> Tuple[str, Optional[Span]]:
    segments: List[Tuple[str, bool]] = []
    _collect_segments(context, segments)

    parts: List[str] = []
    offset = 0
    head_span: Optional[Span] = None
    for text, is_head in segments:
        if parts:
            parts.append(" ")
            offset += 1
        start = offset
        parts.append(text)
        offset += len(text)
        if is_head and head_span is None:
            head_span = (start, offset)
    return "".join(parts), head_span


def _collect_segments(element: ET.Element, segments: List[Tuple[str, bool]]) -> None:
    _append_text(element.text, segments)
    for child in element:
        if child.tag == "head":
            head = " ".join("".join(child.itertext()).split())
            if head:
                segments.append((head, True))
        else:
            _collect_segments(child, segments)
        _append_text(child.tail, segments)


def _append_text(raw: Optional[str], segments: List[Tuple[str, bool]]) -> None:
    normalized = " ".join((raw or "").split())
    if normalized:
        segments.append((normalized, False))


__all__ = ["lemma_from_lexelt", "read_answer_key", "read_lexical_sample", "write_answer_key"]
