"""Tests for the preset-driven evaluation runs."""

from __future__ import annotations

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from experiments import SystemRun, run_preset_evaluation
from experiments.wsd_eval import locate
from sensemap.datahub.config import ExperimentPreset
from sensemap.datahub.senseval import read_lexical_sample
from sensemap.reports import ReportSaveConfig

CORPUS = """<corpus lang="english">
<lexelt item="art.n">
<instance id="art.40001"><context>Modern <head>art</head> .</context></instance>
<instance id="art.40002"><context>The <head>art</head> of war .</context></instance>
<instance id="art.40003"><context>Fine <head>arts</head> .</context></instance>
</lexelt>
</corpus>
"""

PRESET: ExperimentPreset = {
    "corpus": "corpus.xml",
    "answer_key": "corpus.key",
    "answer_inventory": "Senseval2_sensekey",
    "mappings": [
        {
            "locator": "wordnet_senseval.tsv",
            "key_column": 2,
            "value_column": 1,
            "source_inventory": "Senseval2_sensekey",
            "target_inventory": "WordNet_1.7pre_sensekey",
            "ignore_unknown_senses": True,
        }
    ],
    "synsets": [
        {
            "index_sense": "index.sense",
            "source_inventory": "WordNet_1.7pre_sensekey",
            "target_inventory": "WordNet_1.7pre_synset",
            "ignore_unknown_senses": True,
        }
    ],
    "ignore_gold_pattern": "^[PU]$",
    "report_slug": "toy",
}


def _data_root(tmp_path: Path) -> Path:
    root = tmp_path / "data"
    root.mkdir()
    (root / "corpus.xml").write_text(CORPUS, encoding="utf-8")
    (root / "corpus.key").write_text(
        "art art.40001 1x05x00xx\nart art.40002 1x06x00xx\nart art.40003 U\n", encoding="utf-8"
    )
    (root / "wordnet_senseval.tsv").write_text(
        "art%1:06:00::\t1x05x00xx\nart%1:04:00::\t1x06x00xx\n", encoding="utf-8"
    )
    (root / "index.sense").write_text(
        "art%1:06:00:: 02743547 1 12\nart%1:04:00:: 00935235 2 3\nart%1:09:00:: 05638987 3 2\n",
        encoding="utf-8",
    )
    (root / "system.ans").write_text(
        "art art.40001 art%1:09:00::\nart art.40002 art%1:04:00::\n", encoding="utf-8"
    )
    (root / "mfs.ans").write_text(
        "art art.40001 art%1:06:00::\nart art.40002 art%1:06:00::\nart art.40003 art%1:06:00::\n",
        encoding="utf-8",
    )
    return root


def test_locate_keeps_urls_and_bundled_resources(tmp_path: Path) -> None:
    assert locate("classpath:/WordNet/map.tsv", tmp_path) == "classpath:/WordNet/map.tsv"
    assert locate("https://example.org/map.tsv", tmp_path) == "https://example.org/map.tsv"
    assert locate("map.tsv", tmp_path) == str(tmp_path / "map.tsv")


def test_run_preset_evaluation_scores_systems_and_writes_reports(tmp_path: Path) -> None:
    root = _data_root(tmp_path)
    systems = [
        SystemRun(root / "system.ans", "WordNet_1.7pre_sensekey", algorithm="system"),
        SystemRun(root / "mfs.ans", "WordNet_1.7pre_sensekey", algorithm="mfs"),
    ]
    destinations = ReportSaveConfig(base_dir=tmp_path / "reports", run_tag="t").for_report("toy")

    results = run_preset_evaluation(
        PRESET,
        read_lexical_sample,
        root,
        systems,
        backoff="mfs",
        destinations=destinations,
        store_path=tmp_path / "store",
    )

    (result,) = results
    assert result.test_algorithm == "system"
    assert (result.total, result.attempted, result.correct, result.ignored) == (2, 2, 1, 1)
    assert destinations.text_path.exists()
    assert destinations.html_path.exists()
    assert destinations.table_path.exists()
    assert (tmp_path / "store").exists()
