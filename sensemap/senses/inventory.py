"""Registry of the sense inventories used by the bundled experiments.

An inventory name scopes a label: ``"1x05x00xx"`` under ``Senseval2_sensekey``
and the same string under any other inventory are unrelated.  The registry
below only documents the naming schemes the experiments rely on; items may
carry any inventory name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

SenseInventoryName = str
SenseLabel = str

SENSEVAL2_SENSEKEY: SenseInventoryName = "Senseval2_sensekey"
SEMEVAL1_SENSEKEY: SenseInventoryName = "SemEval1_sensekey"
WORDNET_17PRE_SENSEKEY: SenseInventoryName = "WordNet_1.7pre_sensekey"
WORDNET_17PRE_SYNSET: SenseInventoryName = "WordNet_1.7pre_synset"
WORDNET_21_SENSEKEY: SenseInventoryName = "WordNet_2.1_sensekey"
WORDNET_21_SYNSET: SenseInventoryName = "WordNet_2.1_synset"


@dataclass(frozen=True)
class InventorySpec:
    """Metadata describing a sense identifier scheme."""

    name: SenseInventoryName
    description: str
    example: Optional[SenseLabel] = None


REGISTRY: Dict[SenseInventoryName, InventorySpec] = {
    SENSEVAL2_SENSEKEY: InventorySpec(
        name=SENSEVAL2_SENSEKEY,
        description="Task-specific sense identifiers of the Senseval-2 answer keys.",
        example="1x05x00xx",
    ),
    SEMEVAL1_SENSEKEY: InventorySpec(
        name=SEMEVAL1_SENSEKEY,
        description="SemEval-2007 coarse-grained all-words answer key identifiers.",
        example="man%1:18:00::",
    ),
    WORDNET_17PRE_SENSEKEY: InventorySpec(
        name=WORDNET_17PRE_SENSEKEY,
        description="WordNet 1.7 prerelease sense keys.",
        example="art%1:06:00::",
    ),
    WORDNET_17PRE_SYNSET: InventorySpec(
        name=WORDNET_17PRE_SYNSET,
        description="WordNet 1.7 prerelease synset offset plus part of speech.",
        example="02121620-n",
    ),
    WORDNET_21_SENSEKEY: InventorySpec(
        name=WORDNET_21_SENSEKEY,
        description="WordNet 2.1 sense keys.",
        example="man%1:18:00::",
    ),
    WORDNET_21_SYNSET: InventorySpec(
        name=WORDNET_21_SYNSET,
        description="WordNet 2.1 synset offset plus part of speech.",
        example="10287213-n",
    ),
}


def get_inventory(name: SenseInventoryName) -> InventorySpec:
    """Return the InventorySpec registered under ``name``."""
    try:
        return REGISTRY[name]
    except KeyError as exc:
        raise ValueError(f"Unknown sense inventory '{name}'. Available: {list(REGISTRY)}") from exc


__all__ = [
    "InventorySpec",
    "REGISTRY",
    "SEMEVAL1_SENSEKEY",
    "SENSEVAL2_SENSEKEY",
    "SenseInventoryName",
    "SenseLabel",
    "WORDNET_17PRE_SENSEKEY",
    "WORDNET_17PRE_SYNSET",
    "WORDNET_21_SENSEKEY",
    "WORDNET_21_SYNSET",
    "get_inventory",
]
