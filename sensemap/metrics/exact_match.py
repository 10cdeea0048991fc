"""Exact-match scoring of system sense assignments against a gold standard."""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Pattern

import numpy as np

from ..senses.items import WSDItem


@dataclass
class LemmaScore:
    """Counts for the gold items of a single lemma."""

    lemma: str
    total: int = 0
    attempted: int = 0
    correct: int = 0

    @property
    def precision(self) -> float:
        return _ratio(self.correct, self.attempted)

    @property
    def recall(self) -> float:
        return _ratio(self.correct, self.total)


@dataclass(frozen=True)
class ExactMatchResult:
    """Corpus-level scores plus the per-lemma breakdown."""

    test_algorithm: str
    total: int
    attempted: int
    correct: int
    backoff_used: int
    ignored: int
    gold_unresolved: int
    per_lemma: Dict[str, LemmaScore]

    @property
    def precision(self) -> float:
        return _ratio(self.correct, self.attempted)

    @property
    def recall(self) -> float:
        return _ratio(self.correct, self.total)

    @property
    def coverage(self) -> float:
        return _ratio(self.attempted, self.total)

    @property
    def f1(self) -> float:
        p, r = self.precision, self.recall
        return 2 * p * r / (p + r) if p + r else 0.0

    @property
    def macro_precision(self) -> float:
        """Mean precision over lemmas with at least one attempted item."""
        values = [score.precision for score in self.per_lemma.values() if score.attempted]
        if not values:
            return 0.0
        return float(np.mean(values))


@dataclass
class ExactMatchConfig:
    """Configuration for `score_exact_match`."""

    test_algorithm: str
    gold_algorithm: str = "gold"
    backoff_algorithm: Optional[str] = None
    ignore_gold_pattern: Optional[str] = None
    _compiled: Optional[Pattern[str]] = field(default=None, init=False, repr=False)

    def validate(self) -> None:
        if self.test_algorithm == self.gold_algorithm:
            raise ValueError("test_algorithm must differ from gold_algorithm.")
        if self.backoff_algorithm in (self.gold_algorithm, self.test_algorithm):
            raise ValueError("backoff_algorithm must differ from the gold and test algorithms.")
        if self.ignore_gold_pattern:
            try:
                self._compiled = re.compile(self.ignore_gold_pattern)
            except re.error as exc:
                raise ValueError(f"Invalid ignore_gold_pattern: {exc}") from exc

    def ignores(self, labels: Iterable[str]) -> bool:
        """True when every gold sense fully matches the ignore pattern."""
        if self._compiled is None:
            return False
        pattern = self._compiled
        return all(pattern.fullmatch(label) is not None for label in labels)


def score_exact_match(items: Iterable[WSDItem], config: ExactMatchConfig) -> ExactMatchResult:
    """Score ``config.test_algorithm`` against the gold items.

    Args:
        items: Assignments from every algorithm, gold included.
        config: Which algorithms to compare and which gold labels to skip.

    Returns:
        ExactMatchResult. A test answer flagged unresolved counts as not
        attempted, in which case the backoff answer (if configured) is used.
    """
    config.validate()

    by_algorithm: Dict[str, Dict[str, WSDItem]] = defaultdict(dict)
    for item in items:
        by_algorithm[item.algorithm].setdefault(item.item_id, item)

    gold = by_algorithm.get(config.gold_algorithm, {})
    test = by_algorithm.get(config.test_algorithm, {})
    backoff = by_algorithm.get(config.backoff_algorithm, {}) if config.backoff_algorithm else {}

    per_lemma: Dict[str, LemmaScore] = {}
    total = attempted = correct = backoff_used = ignored = gold_unresolved = 0

    for item_id in sorted(gold):
        gold_item = gold[item_id]
        if config.ignores((gold_item.label,) + gold_item.alternatives):
            ignored += 1
            continue
        if gold_item.unresolved:
            gold_unresolved += 1

        lemma = gold_item.lemma or ""
        lemma_score = per_lemma.setdefault(lemma, LemmaScore(lemma=lemma))
        total += 1
        lemma_score.total += 1

        answer = _usable(test.get(item_id))
        if answer is None:
            answer = _usable(backoff.get(item_id))
            if answer is not None:
                backoff_used += 1
        if answer is None:
            continue

        attempted += 1
        lemma_score.attempted += 1
        if matches(answer, gold_item):
            correct += 1
            lemma_score.correct += 1

    return ExactMatchResult(
        test_algorithm=config.test_algorithm,
        total=total,
        attempted=attempted,
        correct=correct,
        backoff_used=backoff_used,
        ignored=ignored,
        gold_unresolved=gold_unresolved,
        per_lemma=dict(sorted(per_lemma.items())),
    )


def matches(answer: WSDItem, gold: WSDItem) -> bool:
    """Labels only compare equal within the same inventory."""
    if answer.inventory != gold.inventory:
        return False
    return answer.label == gold.label or answer.label in gold.alternatives


def _usable(item: Optional[WSDItem]) -> Optional[WSDItem]:
    if item is None or item.unresolved:
        return None
    return item


def _ratio(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator else 0.0


__all__ = ["ExactMatchConfig", "ExactMatchResult", "LemmaScore", "matches", "score_exact_match"]
