"""SemEval-2007 coarse-grained all-words: map gold and system answers to WordNet 2.1 sense keys and score them."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from sensemap.datahub.config import SEMEVAL1_AW
from sensemap.datahub.raganato import read_all_words
from sensemap.metrics import ExactMatchResult
from sensemap.reports import ReportDestinations

from .wsd_eval import SystemRun, run_preset_evaluation


def run_semeval1_aw(
    data_root: Path,
    systems: Sequence[SystemRun],
    *,
    backoff: Optional[str] = None,
    max_items: Optional[int] = 50,
    destinations: Optional[ReportDestinations] = None,
    store_path: Optional[Path] = None,
    open_in_browser: bool = False,
) -> List[ExactMatchResult]:
    return run_preset_evaluation(
        SEMEVAL1_AW,
        read_all_words,
        data_root,
        systems,
        backoff=backoff,
        max_items=max_items,
        destinations=destinations,
        store_path=store_path,
        open_in_browser=open_in_browser,
        show_progress=True,
    )
