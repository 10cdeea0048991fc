"""Static configuration for resource locations and the bundled experiment presets."""

from __future__ import annotations

from pathlib import Path
from typing import List, TypedDict


class MappingTableConfig(TypedDict):
    locator: str
    key_column: int
    value_column: int
    source_inventory: str
    target_inventory: str
    ignore_unknown_senses: bool


class SynsetTableConfig(TypedDict):
    index_sense: str
    source_inventory: str
    target_inventory: str
    ignore_unknown_senses: bool


class ExperimentPreset(TypedDict):
    corpus: str
    answer_key: str
    answer_inventory: str
    mappings: List[MappingTableConfig]
    synsets: List[SynsetTableConfig]
    ignore_gold_pattern: str
    report_slug: str


# Default directories used by the Typer CLI; callers may override these.
DEFAULT_CACHE_ROOT = Path("data/cache")
DEFAULT_REPORT_ROOT = Path("data/reports")
BUNDLED_RESOURCE_ROOT = Path(__file__).resolve().parents[1] / "resources"

# ---------------------------------------------------------------------------
# Experiment presets. Locators are relative to a data directory chosen at run time
# unless they use the classpath: prefix.

SENSEVAL2_LS: ExperimentPreset = {
    "corpus": "senseval-2/english-lex-sample/train/eng-lex-sample.train.xml",
    "answer_key": "senseval-2/english-lex-sample/train/eng-lex-sample.train.fixed.key",
    "answer_inventory": "Senseval2_sensekey",
    "mappings": [
        {
            "locator": "WordNet/wordnet_senseval.tsv",
            "key_column": 2,
            "value_column": 1,
            "source_inventory": "Senseval2_sensekey",
            "target_inventory": "WordNet_1.7pre_sensekey",
            "ignore_unknown_senses": True,
        }
    ],
    "synsets": [
        {
            "index_sense": "WordNet/WordNet_1.7pre/dict/index.sense",
            "source_inventory": "WordNet_1.7pre_sensekey",
            "target_inventory": "WordNet_1.7pre_synset",
            "ignore_unknown_senses": True,
        }
    ],
    "ignore_gold_pattern": "^[PU]$",
    "report_slug": "senseval2_ls",
}

SEMEVAL1_AW: ExperimentPreset = {
    "corpus": "semeval-1/task07/test/eng-coarse-all-words.xml",
    "answer_key": "semeval-1/task07/key/dataset21.test.key",
    "answer_inventory": "SemEval1_sensekey",
    "mappings": [
        {
            "locator": "wordnet_senseval.tsv",
            "key_column": 2,
            "value_column": 1,
            "source_inventory": "SemEval1_sensekey",
            "target_inventory": "WordNet_2.1_sensekey",
            "ignore_unknown_senses": True,
        }
    ],
    "synsets": [],
    "ignore_gold_pattern": "",
    "report_slug": "semeval1_aw",
}


__all__ = [
    "BUNDLED_RESOURCE_ROOT",
    "DEFAULT_CACHE_ROOT",
    "DEFAULT_REPORT_ROOT",
    "ExperimentPreset",
    "MappingTableConfig",
    "SEMEVAL1_AW",
    "SENSEVAL2_LS",
    "SynsetTableConfig",
]
