"""Tests for coordinate move codes."""

import pytest

from gambit.core.enums import PieceType
from gambit.core.notation import move_code, parse_move_code, parse_uci_move, uci_move
from gambit.core.types import ALL_SQUARES, Square


class TestMoveCode:
    def test_encode(self) -> None:
        assert move_code(Square(6, 4), Square(4, 4)) == "e2e4"
        assert move_code((0, 6), (2, 5)) == "g8f6"

    def test_decode(self) -> None:
        assert parse_move_code("e2e4") == (Square(6, 4), Square(4, 4))

    def test_round_trip_all_squares(self) -> None:
        for start in ALL_SQUARES:
            end = ALL_SQUARES[63 - (start.row * 8 + start.col)]
            assert parse_move_code(move_code(start, end)) == (start, end)

    @pytest.mark.parametrize("code", ["", "e2", "e2e", "e2e4q", "z2e4", "e2e9"])
    def test_invalid(self, code: str) -> None:
        with pytest.raises(ValueError):
            parse_move_code(code)


class TestUciMove:
    def test_plain(self) -> None:
        assert uci_move(Square(6, 4), Square(4, 4)) == "e2e4"
        assert parse_uci_move("g1f3") == (Square(7, 6), Square(5, 5), None)

    def test_promotion_suffix(self) -> None:
        assert uci_move(Square(1, 0), Square(0, 0), PieceType.QUEEN) == "a7a8q"
        assert parse_uci_move("a2a1n") == (Square(6, 0), Square(7, 0), PieceType.KNIGHT)

    @pytest.mark.parametrize("text", ["a7a8k", "a7a8x", "a7a8qq", "0000"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_uci_move(text)
