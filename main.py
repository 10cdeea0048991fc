from datetime import datetime
from pathlib import Path
from typing import Dict, List, NoReturn, Optional, Tuple

import typer

from experiments import SystemRun, run_semeval1_aw, run_senseval2_ls
from sensemap.datahub import read_answer_key, save_assignments, write_answer_key
from sensemap.datahub.config import DEFAULT_REPORT_ROOT
from sensemap.errors import SenseMappingError
from sensemap.metrics import ExactMatchConfig, score_exact_match
from sensemap.pipelines import AnswerKeyStage, Pipeline, Stage, collect_assignments
from sensemap.reports import ReportSaveConfig, format_summary, write_assignment_table, write_evaluation_html
from sensemap.senses import Document, SenseMapperConfig, SenseMapperStage, WSDTarget, synset_mapper

app = typer.Typer()

TableSpec = Tuple[str, int, int, str, str]
SynsetSpec = Tuple[str, str, str]


def parse_table_spec(spec: str) -> TableSpec:
    """Split ``LOCATOR:KEYCOL:VALCOL:SOURCE:TARGET``; the locator itself may contain colons."""
    parts = spec.rsplit(":", 4)
    if len(parts) != 5 or not all(parts):
        raise typer.BadParameter(f"Expected LOCATOR:KEYCOL:VALCOL:SOURCE:TARGET, got '{spec}'.")
    locator, key_col, value_col, source, target = parts
    try:
        return locator, int(key_col), int(value_col), source, target
    except ValueError as exc:
        raise typer.BadParameter(f"Column numbers must be integers in '{spec}'.") from exc


def parse_synset_spec(spec: str) -> SynsetSpec:
    """Split ``INDEX_SENSE:SOURCE:TARGET``."""
    parts = spec.rsplit(":", 2)
    if len(parts) != 3 or not all(parts):
        raise typer.BadParameter(f"Expected INDEX_SENSE:SOURCE:TARGET, got '{spec}'.")
    return parts[0], parts[1], parts[2]


def build_stages(tables: List[str], synsets: List[str], ignore_unknown: bool) -> List[Stage]:
    stages: List[Stage] = []
    for spec in tables:
        locator, key_col, value_col, source, target = parse_table_spec(spec)
        config = SenseMapperConfig(source, target, ignore_unknown_senses=ignore_unknown)
        stages.append(SenseMapperStage.from_file(locator, key_col, value_col, config))
    for spec in synsets:
        locator, source, target = parse_synset_spec(spec)
        stages.append(synset_mapper(locator, SenseMapperConfig(source, target, ignore_unknown_senses=ignore_unknown)))
    return stages


def key_documents(*keys: Path) -> List[Document]:
    """Build one document whose targets are every instance named in the given keys."""
    seen: Dict[str, None] = {}
    for key in keys:
        for instance_id in read_answer_key(key):
            seen.setdefault(instance_id, None)
    targets = [WSDTarget(item_id=instance_id, lemma="") for instance_id in sorted(seen)]
    return [Document(document_id="answer-key", text="", targets=targets)]


def fail(exc: Exception) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command("map")
def map_key(
    key: Path = typer.Option(..., "--key", exists=True, dir_okay=False, help="Answer key to translate."),
    inventory: str = typer.Option(..., "--inventory", help="Inventory the key's labels belong to."),
    table: List[str] = typer.Option(
        [],
        "--table",
        help="Mapping table as LOCATOR:KEYCOL:VALCOL:SOURCE:TARGET (1-indexed columns). Repeatable, applied in order.",
    ),
    synsets: List[str] = typer.Option(
        [],
        "--synsets",
        help="WordNet index.sense as INDEX_SENSE:SOURCE:TARGET, applied after the tables.",
    ),
    ignore_unknown: bool = typer.Option(
        False,
        "--ignore-unknown/--strict",
        help="Keep unmapped labels (flagged unresolved) instead of aborting.",
    ),
    output: Path = typer.Option(..., "--output", dir_okay=False, help="Where to write the translated key."),
) -> None:
    """
    Translate the labels of an answer key through a chain of mapping tables.
    """
    try:
        stages: List[Stage] = [AnswerKeyStage.from_file(key, inventory)]
        stages.extend(build_stages(table, synsets, ignore_unknown))
        documents = Pipeline(stages).run(key_documents(key))
        items = collect_assignments(documents, algorithm="gold")
    except SenseMappingError as exc:
        fail(exc)

    write_answer_key(items, output)
    unresolved = sum(1 for item in items if item.unresolved)
    typer.echo(f"Wrote {len(items)} items to {output} ({unresolved} unresolved).")


@app.command()
def score(
    gold: Path = typer.Option(..., "--gold", exists=True, dir_okay=False, help="Gold answer key."),
    gold_inventory: str = typer.Option(..., "--gold-inventory"),
    system: Path = typer.Option(..., "--system", exists=True, dir_okay=False, help="System answer file."),
    system_inventory: str = typer.Option(..., "--system-inventory"),
    backoff: Optional[Path] = typer.Option(None, "--backoff", exists=True, dir_okay=False, help="Backoff answers."),
    backoff_inventory: Optional[str] = typer.Option(None, "--backoff-inventory"),
    table: List[str] = typer.Option([], "--table", help="LOCATOR:KEYCOL:VALCOL:SOURCE:TARGET. Repeatable."),
    synsets: List[str] = typer.Option([], "--synsets", help="INDEX_SENSE:SOURCE:TARGET. Repeatable."),
    ignore_unknown: bool = typer.Option(True, "--ignore-unknown/--strict"),
    ignore_gold_pattern: Optional[str] = typer.Option(
        None, "--ignore-gold-pattern", help="Regex; gold labels matching it are not scored (e.g. '^[PU]$')."
    ),
    html: Optional[Path] = typer.Option(None, "--html", dir_okay=False, help="Write the evaluation report here."),
    table_html: Optional[Path] = typer.Option(None, "--table-html", dir_okay=False, help="Write assignments here."),
    store: Optional[Path] = typer.Option(None, "--store", help="Save mapped assignments as a dataset on disk."),
    open_in_browser: bool = typer.Option(False, "--open", help="Open written HTML reports in a browser."),
) -> None:
    """
    Map gold and system answers into a common inventory and compute precision, recall and coverage.
    """
    try:
        stages: List[Stage] = [
            AnswerKeyStage.from_file(gold, gold_inventory),
            AnswerKeyStage.from_file(system, system_inventory, algorithm="system"),
        ]
        keys = [gold, system]
        if backoff is not None:
            stages.append(AnswerKeyStage.from_file(backoff, backoff_inventory or system_inventory, algorithm="backoff"))
            keys.append(backoff)
        stages.extend(build_stages(table, synsets, ignore_unknown))
        documents = Pipeline(stages).run(key_documents(*keys))
    except SenseMappingError as exc:
        fail(exc)

    items = collect_assignments(documents)
    try:
        config = ExactMatchConfig(
            test_algorithm="system",
            backoff_algorithm="backoff" if backoff is not None else None,
            ignore_gold_pattern=ignore_gold_pattern,
        )
        result = score_exact_match(items, config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    typer.echo(format_summary(result))
    if store is not None:
        save_assignments(items, store)
    if html is not None:
        write_evaluation_html(result, html, open_in_browser=open_in_browser)
    if table_html is not None:
        write_assignment_table(items, table_html, open_in_browser=open_in_browser)


def _systems(system: List[str]) -> List[SystemRun]:
    runs: List[SystemRun] = []
    for spec in system:
        parts = spec.rsplit(":", 2)
        if len(parts) != 3 or not all(parts):
            raise typer.BadParameter(f"Expected KEY_FILE:INVENTORY:NAME, got '{spec}'.")
        runs.append(SystemRun(key_path=Path(parts[0]), inventory=parts[1], algorithm=parts[2]))
    return runs


def _report_config(report_root: Path, report_tag: Optional[str]) -> ReportSaveConfig:
    tag = report_tag or datetime.now().strftime("%Y%m%d-%H%M%S")
    return ReportSaveConfig(base_dir=report_root, run_tag=tag)


@app.command()
def senseval2(
    data_root: Path = typer.Option(..., "--data-root", exists=True, file_okay=False, help="Directory with the corpora."),
    system: List[str] = typer.Option(..., "--system", help="KEY_FILE:INVENTORY:NAME for each system. Repeatable."),
    backoff: Optional[str] = typer.Option(None, "--backoff", help="NAME of the system used as backoff."),
    max_items: int = typer.Option(-1, "--max-items", help="Instances to read; negative reads all."),
    report_root: Path = typer.Option(DEFAULT_REPORT_ROOT, "--report-root"),
    report_tag: Optional[str] = typer.Option(None, "--report-tag", help="Folder suffix (defaults to timestamp)."),
    open_in_browser: bool = typer.Option(False, "--open"),
) -> None:
    """
    Score systems on the Senseval-2 English lexical sample after mapping everything to WordNet 1.7pre synsets.
    """
    save_config = _report_config(report_root, report_tag)
    try:
        run_senseval2_ls(
            data_root,
            _systems(system),
            backoff=backoff,
            max_items=max_items,
            destinations=save_config.for_report("senseval2_ls"),
            open_in_browser=open_in_browser,
        )
    except (SenseMappingError, FileNotFoundError) as exc:
        fail(exc)


@app.command()
def semeval1(
    data_root: Path = typer.Option(..., "--data-root", exists=True, file_okay=False, help="Directory with the corpora."),
    system: List[str] = typer.Option(..., "--system", help="KEY_FILE:INVENTORY:NAME for each system. Repeatable."),
    backoff: Optional[str] = typer.Option(None, "--backoff", help="NAME of the system used as backoff."),
    max_items: int = typer.Option(50, "--max-items", help="Instances to read; negative reads all."),
    report_root: Path = typer.Option(DEFAULT_REPORT_ROOT, "--report-root"),
    report_tag: Optional[str] = typer.Option(None, "--report-tag", help="Folder suffix (defaults to timestamp)."),
    open_in_browser: bool = typer.Option(False, "--open"),
) -> None:
    """
    Score systems on the SemEval-2007 coarse-grained all-words task after mapping keys to WordNet 2.1.
    """
    save_config = _report_config(report_root, report_tag)
    try:
        run_semeval1_aw(
            data_root,
            _systems(system),
            backoff=backoff,
            max_items=max_items,
            destinations=save_config.for_report("semeval1_aw"),
            open_in_browser=open_in_browser,
        )
    except (SenseMappingError, FileNotFoundError) as exc:
        fail(exc)


if __name__ == "__main__":
    app()
