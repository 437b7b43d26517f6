"""Round-robin rating domain modules."""

from domain.common import ComputedRow, GroupResult, PlayerGroup, PlayerRecord

__all__ = ["ComputedRow", "GroupResult", "PlayerGroup", "PlayerRecord"]
