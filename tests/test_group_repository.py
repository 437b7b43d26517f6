"""Tests for reading player groups from text files."""

from __future__ import annotations

from pathlib import Path

import pytest

from repositories.group_repository import (
    build_player_record,
    is_valid_player_row,
    parse_players_from_text,
    read_group_file,
    read_group_files,
    split_player_lines,
)

GROUP_TEXT = "Alice, 1500 ,20,W2,D3,2.5\r\nBob,abc,20,1,2,1\n\nCarol,1600,15,L1\n   \nDan,1400\n"


@pytest.mark.parametrize(
    ("fields", "valid"),
    [
        (["Alice", "1500", "20", "W2"], True),
        (["Alice", "1500x", "20", "W2"], True),
        (["Alice", "1500", "20"], False),
        (["Alice", "abc", "20", "1"], False),
        (["Alice", "1500", "", "1"], False),
        (["", "1500", "20", "1"], False),
        ([" ", "1500", "20", "1"], False),
        (["Alice", "１５００", "20", "1"], False),
        ([], False),
    ],
)
def test_is_valid_player_row(fields: list[str], valid: bool) -> None:
    assert is_valid_player_row(fields) is valid


def test_split_player_lines_trims_fields_and_skips_blank_lines() -> None:
    rows = split_player_lines(GROUP_TEXT)
    assert rows[0] == ["Alice", "1500", "20", "W2", "D3", "2.5"]
    assert len(rows) == 4


def test_parse_players_drops_malformed_rows() -> None:
    group = parse_players_from_text(GROUP_TEXT, round_count=2, name="Open")

    assert group.name == "Open"
    assert group.dropped_rows == 2
    assert [player.name for player in group.players] == ["Alice", "Carol"]

    alice, carol = group.players
    assert alice.rating == 1500
    assert alice.k_factor == 20
    assert alice.round_tokens == ("W2", "D3")
    assert alice.total_score == pytest.approx(2.5)

    assert carol.round_tokens == ("L1", "")
    assert carol.total_score == pytest.approx(0.0)


def test_unparseable_score_defaults_to_zero() -> None:
    record = build_player_record(["Eve", "1500", "20", "1", "n/a"], round_count=1)
    assert record.total_score == pytest.approx(0.0)


def test_build_player_record_rejects_unvalidated_rows() -> None:
    with pytest.raises(ValueError, match="integer rating"):
        build_player_record(["Eve", "x", "20", "1", "1"], round_count=1)


def test_read_group_file_uses_file_stem_as_name(tmp_path: Path) -> None:
    file_path = tmp_path / "Group A.txt"
    file_path.write_text("Alice,1500,20,2,1\nBob,1500,20,1,0\n", encoding="utf-8")

    group = read_group_file(file_path, round_count=1)
    assert group.name == "Group A"
    assert group.source == file_path
    assert len(group.players) == 2


def test_read_group_files_preserves_order(tmp_path: Path) -> None:
    paths = []
    for name in ("b", "a", "c"):
        path = tmp_path / f"{name}.txt"
        path.write_text(f"{name},1500,20,1,0\n", encoding="utf-8")
        paths.append(path)

    groups = read_group_files(paths, round_count=1)
    assert [group.name for group in groups] == ["b", "a", "c"]


def test_read_group_file_strips_byte_order_mark(tmp_path: Path) -> None:
    file_path = tmp_path / "bom.txt"
    file_path.write_text("\ufeffAlice,1500,20,1,0\n", encoding="utf-8")

    group = read_group_file(file_path, round_count=1)
    assert group.players[0].name == "Alice"
