"""Tests for mapping tables, mapper stages and the WordNet synset helpers."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest
import requests

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import sensemap.datahub.io as datahub_io
from sensemap.datahub.io import resolve_resource
from sensemap.senses import (
    Document,
    MappingTable,
    PipelineConfigurationError,
    ResourceLoadError,
    SenseMapperConfig,
    SenseMapperStage,
    UnknownSenseError,
    WSDItem,
    WSDTarget,
    get_inventory,
    load_index_sense,
    synset_mapper,
)
from sensemap.senses.wordnet import sense_key_pos, synset_id


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _item(label: str, inventory: str = "Senseval2_sensekey", item_id: str = "art.40001") -> WSDItem:
    return WSDItem(item_id=item_id, inventory=inventory, label=label, lemma="art")


S2_TO_WN = SenseMapperConfig("Senseval2_sensekey", "WordNet_1.7pre_sensekey", ignore_unknown_senses=True)


# ---------------------------------------------------------------------------
# MappingTable


def test_mapping_table_load_uses_one_indexed_columns(tmp_path: Path) -> None:
    table_path = _write(tmp_path / "table.tsv", "1x05x00xx\tw1\n2x42x03xx\tw2\n")

    table = MappingTable.load(table_path, 1, 2)

    assert table.lookup("1x05x00xx") == ("w1",)
    assert table.lookup("2x42x03xx") == ("w2",)
    assert table.lookup("missing") is None
    assert len(table) == 2


def test_mapping_table_swapped_columns(tmp_path: Path) -> None:
    table_path = _write(tmp_path / "wordnet_senseval.tsv", "art%1:06:00::\t1x05x00xx\n")

    table = MappingTable.load(table_path, 2, 1)

    assert table.first("1x05x00xx") == "art%1:06:00::"
    assert "art%1:06:00::" not in table


def test_mapping_table_duplicate_keys_accumulate_first_wins(tmp_path: Path) -> None:
    table_path = _write(tmp_path / "table.tsv", "k\tfirst\nk\tsecond\nk\tfirst\n")

    table = MappingTable.load(table_path, 1, 2)

    assert table.lookup("k") == ("first", "second")
    assert table.first("k") == "first"


def test_mapping_table_skips_malformed_rows(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    table_path = _write(tmp_path / "table.tsv", "a\t1\tx\n\nb\t2\nc\t\tz\nd\t4\tw\n")

    table = MappingTable.load(table_path, 1, 2)

    assert sorted(table.keys()) == ["a", "b", "d"]
    assert "Skipped 1 malformed row(s)" in capsys.readouterr().out


def test_mapping_table_wide_first_row_does_not_fix_width(tmp_path: Path) -> None:
    table_path = _write(tmp_path / "table.tsv", "a\tb\tnote\nk1\tv1\nk2\tv2\nk3\tv3\n")

    table = MappingTable.load(table_path, 1, 2)

    assert sorted(table.keys()) == ["a", "k1", "k2", "k3"]
    assert table.lookup("k1") == ("v1",)


def test_mapping_table_short_header_row_is_skipped(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    table_path = _write(tmp_path / "table.tsv", "header\nk1\tv1\nk2\tv2\n")

    table = MappingTable.load(table_path, 1, 2)

    assert sorted(table.keys()) == ["k1", "k2"]
    assert "Skipped 1 malformed row(s)" in capsys.readouterr().out


def test_mapping_table_column_out_of_range(tmp_path: Path) -> None:
    table_path = _write(tmp_path / "table.tsv", "a\tb\n")

    with pytest.raises(ResourceLoadError) as excinfo:
        MappingTable.load(table_path, 1, 3)
    assert excinfo.value.locator == str(table_path)


def test_mapping_table_rejects_zero_column(tmp_path: Path) -> None:
    table_path = _write(tmp_path / "table.tsv", "a\tb\n")
    with pytest.raises(ResourceLoadError):
        MappingTable.load(table_path, 0, 1)


def test_mapping_table_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ResourceLoadError):
        MappingTable.load(tmp_path / "absent.tsv", 1, 2)


def test_mapping_table_is_read_only() -> None:
    table = MappingTable.from_entries([("a", "b")])
    with pytest.raises(TypeError):
        table._entries["c"] = ("d",)  # type: ignore[index]


def test_mapping_table_empty_file(tmp_path: Path) -> None:
    table_path = _write(tmp_path / "empty.tsv", "\n\n")
    assert len(MappingTable.load(table_path, 1, 2)) == 0


# ---------------------------------------------------------------------------
# Resource resolution


def test_resolve_classpath_resource(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _write(tmp_path / "WordNet" / "wordnet_senseval.tsv", "k\tv\n")
    monkeypatch.setattr(datahub_io, "BUNDLED_RESOURCE_ROOT", tmp_path)

    table = MappingTable.load("classpath:/WordNet/wordnet_senseval.tsv", 1, 2)

    assert table.lookup("k") == ("v",)
    assert table.name == "classpath:/WordNet/wordnet_senseval.tsv"


def test_resolve_explicit_resource_root(tmp_path: Path) -> None:
    target = _write(tmp_path / "tables" / "map.tsv", "k\tv\n")
    assert resolve_resource("classpath:tables/map.tsv", resource_root=tmp_path) == target


def test_resolve_file_url(tmp_path: Path) -> None:
    target = _write(tmp_path / "map.tsv", "k\tv\n")
    assert resolve_resource(target.as_uri()) == target


def test_resolve_remote_resource_is_cached(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls: list[str] = []

    def fake_download(url: str, dest: Path) -> None:
        calls.append(url)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text("k\tv\n", encoding="utf-8")

    monkeypatch.setattr(datahub_io, "download_stream", fake_download)
    url = "https://example.org/tables/map.tsv"

    first = resolve_resource(url, cache_root=tmp_path)
    second = resolve_resource(url, cache_root=tmp_path)

    assert first == second
    assert first.name.endswith("-map.tsv")
    assert calls == [url]
    assert first.with_name(first.name + ".meta.json").exists()


def test_resolve_remote_failure_raises(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def failing_download(url: str, dest: Path) -> None:
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(datahub_io, "download_stream", failing_download)

    with pytest.raises(ResourceLoadError) as excinfo:
        resolve_resource("https://example.org/map.tsv", cache_root=tmp_path)
    assert "offline" in str(excinfo.value)


# ---------------------------------------------------------------------------
# SenseMapperStage


def test_mapper_relabels_known_sense() -> None:
    table = MappingTable.from_entries([("1x05x00xx", "art%1:06:00::")])
    stage = SenseMapperStage(table, S2_TO_WN)
    item = _item("1x05x00xx")

    stage.apply(item)

    assert item.inventory == "WordNet_1.7pre_sensekey"
    assert item.label == "art%1:06:00::"
    assert not item.unresolved
    assert [str(step) for step in item.history] == ["Senseval2_sensekey:1x05x00xx"]
    assert stage.stats.mapped == 1


def test_mapper_unknown_sense_is_flagged_when_ignored() -> None:
    stage = SenseMapperStage(MappingTable.from_entries([]), S2_TO_WN)
    item = _item("2x42x03xx")

    stage.apply(item)

    assert item.label == "2x42x03xx"
    assert item.inventory == "Senseval2_sensekey"
    assert item.unresolved
    assert stage.stats.unresolved == 1


def test_mapper_unknown_sense_raises_when_strict() -> None:
    config = SenseMapperConfig("Senseval2_sensekey", "WordNet_1.7pre_sensekey", ignore_unknown_senses=False)
    stage = SenseMapperStage(MappingTable.from_entries([]), config)

    with pytest.raises(UnknownSenseError) as excinfo:
        stage.apply(_item("2x42x03xx"))
    assert excinfo.value.label == "2x42x03xx"
    assert "2x42x03xx" in str(excinfo.value)


def test_mapper_clears_unresolved_flag_when_mapping_later() -> None:
    item = _item("k")
    SenseMapperStage(MappingTable.from_entries([]), S2_TO_WN).apply(item)
    assert item.unresolved

    SenseMapperStage(MappingTable.from_entries([("k", "w")]), S2_TO_WN, name="fallback").apply(item)

    assert (item.inventory, item.label) == ("WordNet_1.7pre_sensekey", "w")
    assert not item.unresolved


def test_mapper_leaves_other_inventories_alone() -> None:
    stage = SenseMapperStage(MappingTable.from_entries([("k", "v")]), S2_TO_WN)
    item = _item("k", inventory="WordNet_2.1_sensekey")

    stage.apply(item)

    assert item.label == "k"
    assert item.history == []
    assert stage.stats.skipped == 1


def test_mapper_is_idempotent() -> None:
    table = MappingTable.from_entries([("1x05x00xx", "art%1:06:00::"), ("art%1:06:00::", "loop")])
    stage = SenseMapperStage(table, S2_TO_WN)
    document = Document("d1", "", items=[_item("1x05x00xx")])

    stage.process(document)
    stage.process(document)

    assert document.items[0].label == "art%1:06:00::"
    assert len(document.items[0].history) == 1


def test_mapper_maps_alternatives() -> None:
    table = MappingTable.from_entries([("a", "A"), ("b", "B"), ("c", "A")])
    stage = SenseMapperStage(table, S2_TO_WN)
    target = WSDTarget(item_id="art.40002", lemma="art")
    item = WSDItem.from_target(target, "Senseval2_sensekey", "a", alternatives=["b", "c", "unknown"])

    stage.apply(item)

    assert item.label == "A"
    assert item.alternatives == ("B", "A")


def test_mapper_rejects_identical_inventories() -> None:
    with pytest.raises(PipelineConfigurationError):
        SenseMapperStage(MappingTable.from_entries([]), SenseMapperConfig("x", "x"))


def test_mapper_from_file(tmp_path: Path) -> None:
    table_path = _write(tmp_path / "wordnet_senseval.tsv", "art%1:06:00::\t1x05x00xx\n")

    stage = SenseMapperStage.from_file(table_path, 2, 1, S2_TO_WN)

    assert stage.name == "Senseval2_sensekey->WordNet_1.7pre_sensekey"
    assert stage.table.first("1x05x00xx") == "art%1:06:00::"


# ---------------------------------------------------------------------------
# WordNet synsets


def test_sense_key_pos() -> None:
    assert sense_key_pos("art%1:06:00::") == "n"
    assert sense_key_pos("run%2:38:00::") == "v"
    assert sense_key_pos("able%5:00:00:capable:00") == "a"
    assert sense_key_pos("able%5:00:00:capable:00", normalize_satellites=False) == "s"
    with pytest.raises(ValueError):
        sense_key_pos("art")
    with pytest.raises(ValueError):
        sense_key_pos("art%9:06:00::")


def test_synset_id_pads_offset() -> None:
    assert synset_id("2743547", "n") == "02743547-n"


def test_load_index_sense(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    index_path = _write(
        tmp_path / "index.sense",
        "art%1:06:00:: 02743547 1 12\n"
        "able%5:00:00:capable:00 01234567 1 0\n"
        "broken line\n",
    )

    table = load_index_sense(index_path)

    assert table.first("art%1:06:00::") == "02743547-n"
    assert table.first("able%5:00:00:capable:00") == "01234567-a"
    assert len(table) == 2
    assert "Skipped 1 malformed row(s)" in capsys.readouterr().out


def test_synset_mapper_stage(tmp_path: Path) -> None:
    index_path = _write(tmp_path / "index.sense", "art%1:06:00:: 02743547 1 12\n")
    config = SenseMapperConfig("WordNet_1.7pre_sensekey", "WordNet_1.7pre_synset")
    stage = synset_mapper(index_path, config)
    item = _item("art%1:06:00::", inventory="WordNet_1.7pre_sensekey")

    stage.apply(item)

    assert stage.name == "synsets:WordNet_1.7pre_sensekey->WordNet_1.7pre_synset"
    assert (item.inventory, item.label) == ("WordNet_1.7pre_synset", "02743547-n")


def test_get_inventory() -> None:
    assert get_inventory("Senseval2_sensekey").example == "1x05x00xx"
    with pytest.raises(ValueError):
        get_inventory("Unknown")
