"""Senseval-2 English lexical sample: map gold and system answers to WordNet 1.7pre synsets and score them."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from sensemap.datahub.config import SENSEVAL2_LS
from sensemap.datahub.senseval import read_lexical_sample
from sensemap.metrics import ExactMatchResult
from sensemap.reports import ReportDestinations

from .wsd_eval import SystemRun, run_preset_evaluation


def run_senseval2_ls(
    data_root: Path,
    systems: Sequence[SystemRun],
    *,
    backoff: Optional[str] = None,
    max_items: Optional[int] = None,
    destinations: Optional[ReportDestinations] = None,
    store_path: Optional[Path] = None,
    open_in_browser: bool = False,
) -> List[ExactMatchResult]:
    return run_preset_evaluation(
        SENSEVAL2_LS,
        read_lexical_sample,
        data_root,
        systems,
        backoff=backoff,
        max_items=max_items,
        destinations=destinations,
        store_path=store_path,
        open_in_browser=open_in_browser,
        show_progress=True,
    )
