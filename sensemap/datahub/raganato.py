"""
Reader for all-words corpora in the unified ``corpus/text/sentence`` XML layout.

Tokens come either from ``<wf>`` elements (unified evaluation framework) or
as bare text between ``<instance>`` elements (SemEval-2007 task 7).
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ..senses.items import Document, WSDTarget

_NO_SPACE_BEFORE = {
    ".",
    ",",
    ";",
    ":",
    "!",
    "?",
    "'",
    '"',
    ")",
    "]",
    "}",
    "''",
    "'s",
    "'re",
    "'ve",
    "'m",
    "'ll",
    "'d",
    "n't",
}
_NO_SPACE_AFTER = {"(", "[", "{", "``"}


@dataclass
class _Token:
    text: str
    identifier: Optional[str]
    lemma: Optional[str]
    is_instance: bool


def read_all_words(path: Path, *, max_items: Optional[int] = None) -> List[Document]:
    """
    Parse an all-words corpus into one document per ``<text>`` element.

    ``max_items`` limits the number of instances read (``None`` or negative: all).
    """
    if not path.exists():
        raise FileNotFoundError(f"Missing all-words corpus at {path}")

    root = ET.parse(str(path)).getroot()
    documents: List[Document] = []
    remaining = max_items if max_items is not None and max_items >= 0 else None

    for index, text_el in enumerate(root.iterfind(".//text")):
        if remaining == 0:
            break
        tokens: List[_Token] = []
        for sentence in text_el.iterfind("sentence"):
            tokens.extend(_collect_tokens(sentence))
        if not tokens:
            continue
        if remaining is not None:
            tokens = _truncate(tokens, remaining)
            remaining -= sum(1 for tok in tokens if tok.is_instance and tok.identifier)

        document_id = text_el.get("id") or f"d{index:03d}"
        documents.append(_build_document(document_id, tokens))
    return documents


# ---------------------------------------------------------------------------
# Internal helpers


def _collect_tokens(sentence: ET.Element) -> List[_Token]:
    tokens: List[_Token] = []
    _split_bare(sentence.text, tokens)
    for child in sentence:
        if child.tag in {"wf", "instance"}:
            text = " ".join((child.text or "").split())
            if text:
                tokens.append(
                    _Token(
                        text=text,
                        identifier=child.get("id"),
                        lemma=child.get("lemma"),
                        is_instance=child.tag == "instance",
                    )
                )
        _split_bare(child.tail, tokens)
    return tokens


def _split_bare(raw: Optional[str], tokens: List[_Token]) -> None:
    for piece in (raw or "").split():
        tokens.append(_Token(text=piece, identifier=None, lemma=None, is_instance=False))


def _truncate(tokens: Sequence[_Token], limit: int) -> List[_Token]:
    kept: List[_Token] = []
    seen = 0
    for token in tokens:
        if token.is_instance and token.identifier:
            if seen == limit:
                break
            seen += 1
        kept.append(token)
    return kept


def _build_document(document_id: str, tokens: Sequence[_Token]) -> Document:
    parts: List[str] = []
    targets: List[WSDTarget] = []
    offset = 0
    previous: Optional[str] = None

    for token in tokens:
        needs_space = bool(parts)
        if token.text in _NO_SPACE_BEFORE:
            needs_space = False
        if previous in _NO_SPACE_AFTER:
            needs_space = False
        if needs_space:
            parts.append(" ")
            offset += 1

        start = offset
        parts.append(token.text)
        offset += len(token.text)

        if token.is_instance and token.identifier:
            targets.append(
                WSDTarget(
                    item_id=token.identifier,
                    lemma=token.lemma or token.text.lower(),
                    span=(start, offset),
                    covered_text=token.text,
                )
            )
        previous = token.text

    return Document(document_id=document_id, text="".join(parts), targets=targets)


__all__ = ["read_all_words"]
