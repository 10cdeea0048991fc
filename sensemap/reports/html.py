"""HTML renderings: the per-item assignment table and the evaluation summary."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pandas as pd
import plotly.express as px
import typer

from ..metrics.exact_match import ExactMatchResult, matches
from ..senses.items import WSDItem

_PAGE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{title}</title></head>
<body>
<h1>{title}</h1>
{body}
</body>
</html>
"""


def assignments_table(items: Iterable[WSDItem], gold_algorithm: str = "gold") -> pd.DataFrame:
    """One row per item id, one column per algorithm, plus a match column per non-gold algorithm."""
    by_id: Dict[str, Dict[str, WSDItem]] = {}
    algorithms: List[str] = []
    for item in items:
        by_id.setdefault(item.item_id, {}).setdefault(item.algorithm, item)
        if item.algorithm not in algorithms:
            algorithms.append(item.algorithm)

    ordered = [gold_algorithm] if gold_algorithm in algorithms else []
    ordered += sorted(alg for alg in algorithms if alg != gold_algorithm)

    rows: List[Dict[str, object]] = []
    for item_id in sorted(by_id):
        assigned = by_id[item_id]
        first = next(iter(assigned.values()))
        row: Dict[str, object] = {
            "item": item_id,
            "lemma": first.lemma or "",
            "text": first.covered_text or "",
        }
        gold = assigned.get(gold_algorithm)
        for algorithm in ordered:
            item = assigned.get(algorithm)
            row[algorithm] = _cell(item)
            if algorithm != gold_algorithm:
                row[f"{algorithm} correct"] = (
                    bool(item is not None and gold is not None and not item.unresolved and matches(item, gold))
                )
        rows.append(row)

    columns = ["item", "lemma", "text"]
    for algorithm in ordered:
        columns.append(algorithm)
        if algorithm != gold_algorithm:
            columns.append(f"{algorithm} correct")
    return pd.DataFrame(rows, columns=columns)


def write_assignment_table(
    items: Iterable[WSDItem],
    path: Path,
    gold_algorithm: str = "gold",
    open_in_browser: bool = False,
) -> Path:
    df = assignments_table(items, gold_algorithm=gold_algorithm)
    body = df.to_html(index=False, escape=True, border=0)
    _write_page(path, "Sense assignments", body)
    print(f"[report] Wrote assignment table ({len(df)} items) → {path}")
    if open_in_browser:
        typer.launch(path.resolve().as_uri())
    return path


def evaluation_frame(result: ExactMatchResult) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "lemma": [score.lemma for score in result.per_lemma.values()],
            "total": [score.total for score in result.per_lemma.values()],
            "attempted": [score.attempted for score in result.per_lemma.values()],
            "correct": [score.correct for score in result.per_lemma.values()],
            "precision": [score.precision for score in result.per_lemma.values()],
            "recall": [score.recall for score in result.per_lemma.values()],
        },
        columns=["lemma", "total", "attempted", "correct", "precision", "recall"],
    )


def write_evaluation_html(
    result: ExactMatchResult,
    path: Path,
    open_in_browser: bool = False,
    title: Optional[str] = None,
) -> Path:
    """Write summary scores, a per-lemma precision chart and the per-lemma table."""
    summary = pd.DataFrame(
        [
            {
                "algorithm": result.test_algorithm,
                "total": result.total,
                "attempted": result.attempted,
                "correct": result.correct,
                "backoff used": result.backoff_used,
                "ignored": result.ignored,
                "precision": round(result.precision, 4),
                "recall": round(result.recall, 4),
                "coverage": round(result.coverage, 4),
                "F1": round(result.f1, 4),
            }
        ]
    )
    per_lemma = evaluation_frame(result)

    sections = [summary.to_html(index=False, border=0)]
    if not per_lemma.empty:
        fig = px.bar(
            per_lemma.sort_values("precision"),
            x="precision",
            y="lemma",
            orientation="h",
            hover_data=["total", "attempted", "correct"],
            title=f"{result.test_algorithm}: precision per lemma",
        )
        fig.update_layout(xaxis=dict(range=[0, 1]))
        sections.append(fig.to_html(full_html=False, include_plotlyjs="cdn"))
        sections.append(per_lemma.to_html(index=False, border=0, float_format=lambda v: f"{v:.3f}"))

    _write_page(path, title or f"Exact-match evaluation: {result.test_algorithm}", "\n".join(sections))
    print(f"[report] Wrote evaluation report → {path}")
    if open_in_browser:
        typer.launch(path.resolve().as_uri())
    return path


def _cell(item: Optional[WSDItem]) -> str:
    if item is None:
        return ""
    label = f"{item.inventory}:{item.label}"
    return f"{label} (unresolved)" if item.unresolved else label


def _write_page(path: Path, title: str, body: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_PAGE.format(title=title, body=body), encoding="utf-8")


__all__ = ["assignments_table", "evaluation_frame", "write_assignment_table", "write_evaluation_html"]
