"""Sense-key to synset conversion backed by a WordNet ``index.sense`` file.

WordNet sense keys are not unique synset identifiers (several keys share a
synset), so the experiments normalize them to ``<offset>-<pos>`` strings,
e.g. ``art%1:06:00::`` -> ``02743547-n``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Tuple

from ..datahub.io import resolve_resource
from ..errors import ResourceLoadError
from .mapper import SenseMapperConfig, SenseMapperStage
from .mapping_table import MappingTable

SS_TYPES: Dict[str, str] = {"1": "n", "2": "v", "3": "a", "4": "r", "5": "s"}


def sense_key_pos(sense_key: str, normalize_satellites: bool = True) -> str:
    """Return the part-of-speech letter encoded in a WordNet sense key."""
    lemma, sep, lex_sense = sense_key.partition("%")
    if not sep or not lemma or not lex_sense:
        raise ValueError(f"Malformed sense key '{sense_key}'")
    try:
        pos = SS_TYPES[lex_sense[0]]
    except KeyError as exc:
        raise ValueError(f"Unknown synset type in sense key '{sense_key}'") from exc
    if pos == "s" and normalize_satellites:
        return "a"
    return pos


def synset_id(offset: str, pos: str) -> str:
    return f"{int(offset):08d}-{pos}"


def load_index_sense(source: str | Path, normalize_satellites: bool = True) -> MappingTable:
    """Build a sense key -> synset id table from an ``index.sense`` file.

    Each line reads ``sense_key synset_offset sense_number tag_cnt``; lines that
    do not fit that shape are skipped.
    """
    locator = str(source)
    path = resolve_resource(locator)
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise ResourceLoadError(locator, str(exc)) from exc

    pairs: List[Tuple[str, str]] = []
    malformed = 0
    for line in lines:
        tokens = line.split()
        if not tokens:
            continue
        if len(tokens) != 4 or not tokens[1].isdigit():
            malformed += 1
            continue
        try:
            pos = sense_key_pos(tokens[0], normalize_satellites=normalize_satellites)
        except ValueError:
            malformed += 1
            continue
        pairs.append((tokens[0], synset_id(tokens[1], pos)))

    if malformed:
        print(f"[senses] Skipped {malformed} malformed row(s) in {locator}.")
    return MappingTable.from_entries(pairs, name=locator)


def synset_mapper(source: str | Path, config: SenseMapperConfig, normalize_satellites: bool = True) -> SenseMapperStage:
    """Create a mapper stage converting sense keys to synset ids."""
    table = load_index_sense(source, normalize_satellites=normalize_satellites)
    return SenseMapperStage(table, config, name=f"synsets:{config.source_inventory}->{config.target_inventory}")


__all__ = ["SS_TYPES", "load_index_sense", "sense_key_pos", "synset_id", "synset_mapper"]
