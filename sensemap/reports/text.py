"""Plain-text rendering of exact-match results."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..metrics.exact_match import ExactMatchResult


def format_summary(result: ExactMatchResult, per_lemma: bool = True) -> str:
    lines: List[str] = [
        f"Algorithm:  {result.test_algorithm}",
        f"Items:      {result.total} scored, {result.ignored} ignored, {result.gold_unresolved} gold unresolved",
        f"Attempted:  {result.attempted} ({result.backoff_used} via backoff)",
        f"Correct:    {result.correct}",
        f"Precision:  {result.precision:.4f}",
        f"Recall:     {result.recall:.4f}",
        f"Coverage:   {result.coverage:.4f}",
        f"F1:         {result.f1:.4f}",
        f"Macro P:    {result.macro_precision:.4f}",
    ]
    if per_lemma and result.per_lemma:
        width = max(len("lemma"), *(len(lemma) for lemma in result.per_lemma))
        lines.append("")
        lines.append(f"{'lemma':<{width}}  {'total':>6}  {'att':>6}  {'corr':>6}  {'P':>6}  {'R':>6}")
        for lemma, score in result.per_lemma.items():
            lines.append(
                f"{lemma:<{width}}  {score.total:>6}  {score.attempted:>6}  {score.correct:>6}"
                f"  {score.precision:>6.3f}  {score.recall:>6.3f}"
            )
    return "\n".join(lines) + "\n"


def write_summary(result: ExactMatchResult, path: Path, per_lemma: bool = True) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_summary(result, per_lemma=per_lemma), encoding="utf-8")
    print(f"[report] Wrote text summary → {path}")
    return path


__all__ = ["format_summary", "write_summary"]
