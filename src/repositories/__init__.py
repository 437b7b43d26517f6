"""File-backed input and roster repositories."""

from repositories.group_repository import (
    is_valid_player_row,
    parse_players_from_text,
    read_group_file,
    read_group_files,
)

__all__ = [
    "is_valid_player_row",
    "parse_players_from_text",
    "read_group_file",
    "read_group_files",
]
