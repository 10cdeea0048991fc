from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from sensemap.datahub.config import ExperimentPreset
from sensemap.datahub.io import CLASSPATH_PREFIX
from sensemap.datahub.store import save_assignments
from sensemap.metrics import ExactMatchConfig, ExactMatchResult, score_exact_match
from sensemap.pipelines import AnswerKeyStage, Pipeline, Stage, collect_assignments
from sensemap.reports import ReportDestinations, write_assignment_table, write_evaluation_html, write_summary
from sensemap.senses import Document, SenseMapperConfig, SenseMapperStage, WSDItem, synset_mapper

CorpusReader = Callable[..., List[Document]]


@dataclass(frozen=True)
class SystemRun:
    """An external system's answers, given as a Senseval-format key file."""

    key_path: Path
    inventory: str
    algorithm: str = "system"


def locate(locator: str, data_root: Path) -> str:
    """Resolve preset locators against ``data_root`` unless they are URLs or bundled resources."""
    if locator.startswith(CLASSPATH_PREFIX) or "://" in locator:
        return locator
    return str(data_root / locator)


def build_mapping_stages(preset: ExperimentPreset, data_root: Path) -> List[Stage]:
    """Load every mapping table the preset names and wrap each in a mapper stage."""
    stages: List[Stage] = []
    for mapping in preset["mappings"]:
        config = SenseMapperConfig(
            source_inventory=mapping["source_inventory"],
            target_inventory=mapping["target_inventory"],
            ignore_unknown_senses=mapping["ignore_unknown_senses"],
        )
        stages.append(
            SenseMapperStage.from_file(
                locate(mapping["locator"], data_root),
                mapping["key_column"],
                mapping["value_column"],
                config,
            )
        )
    for synsets in preset["synsets"]:
        config = SenseMapperConfig(
            source_inventory=synsets["source_inventory"],
            target_inventory=synsets["target_inventory"],
            ignore_unknown_senses=synsets["ignore_unknown_senses"],
        )
        stages.append(synset_mapper(locate(synsets["index_sense"], data_root), config))
    return stages


def run_preset_evaluation(
    preset: ExperimentPreset,
    reader: CorpusReader,
    data_root: Path,
    systems: Sequence[SystemRun],
    *,
    backoff: Optional[str] = None,
    max_items: Optional[int] = None,
    destinations: Optional[ReportDestinations] = None,
    store_path: Optional[Path] = None,
    open_in_browser: bool = False,
    show_progress: bool = False,
) -> List[ExactMatchResult]:
    """Read the preset corpus, attach and map every answer set, then score each system."""
    print(f"[experiment] Reading corpus {preset['corpus']} from {data_root}")
    documents = reader(data_root / preset["corpus"], max_items=max_items)

    # Answer stages go first so every mapper sees gold and system labels alike.
    stages: List[Stage] = [
        AnswerKeyStage.from_file(data_root / preset["answer_key"], preset["answer_inventory"]),
    ]
    for system in systems:
        stages.append(AnswerKeyStage.from_file(system.key_path, system.inventory, algorithm=system.algorithm))
    stages.extend(build_mapping_stages(preset, data_root))

    pipeline = Pipeline(stages, show_progress=show_progress)
    processed = pipeline.run(documents)
    items: List[WSDItem] = collect_assignments(processed)

    if store_path is not None:
        save_assignments(items, store_path)

    results: List[ExactMatchResult] = []
    for system in systems:
        if system.algorithm == backoff:
            continue
        config = ExactMatchConfig(
            test_algorithm=system.algorithm,
            backoff_algorithm=backoff,
            ignore_gold_pattern=preset["ignore_gold_pattern"] or None,
        )
        result = score_exact_match(items, config)
        print(
            f"[experiment] {system.algorithm}: P={result.precision:.4f} R={result.recall:.4f} "
            f"C={result.coverage:.4f}"
        )
        results.append(result)

    if destinations is not None:
        destinations.ensure_dir()
        if destinations.save_html:
            write_assignment_table(items, destinations.table_path, open_in_browser=open_in_browser)
        for result in results:
            suffix = f"_{result.test_algorithm}" if len(results) > 1 else ""
            if destinations.save_text:
                write_summary(result, destinations.directory / f"{destinations.slug}{suffix}.txt")
            if destinations.save_html:
                write_evaluation_html(
                    result,
                    destinations.directory / f"{destinations.slug}{suffix}.html",
                    open_in_browser=open_in_browser,
                )
    return results


__all__ = ["SystemRun", "build_mapping_stages", "locate", "run_preset_evaluation"]
