"""Tests for ValueTable."""

import pytest

from td_tictactoe.board import Board, Cell
from td_tictactoe.exceptions import UninitializedStateError
from td_tictactoe.value_table import ValueTable


class CountingInitializer:
    """Initializer that returns a fixed value and counts calls."""

    def __init__(self, value: float = 0.5) -> None:
        self.value = value
        self.calls = 0

    def __call__(self, board: Board) -> float:
        self.calls += 1
        return self.value


class TestValueTable:
    """Test lazy initialization and updates."""

    def test_starts_empty(self) -> None:
        """Test that a new table has no entries."""
        table = ValueTable(CountingInitializer())
        assert len(table) == 0
        assert list(table.iterate()) == []

    def test_get_or_init_inserts_default(self) -> None:
        """Test that reading an unseen board stores its default."""
        init = CountingInitializer(0.25)
        table = ValueTable(init)
        board = Board()

        assert table.get_or_init(board) == 0.25
        assert board in table
        assert len(table) == 1
        assert init.calls == 1

    def test_get_or_init_uses_stored_value(self) -> None:
        """Test that the initializer runs only once per board."""
        init = CountingInitializer()
        table = ValueTable(init)
        board = Board()

        table.get_or_init(board)
        table.set(board, 0.9)

        assert table.get_or_init(board) == 0.9
        assert table.get_or_init(Board()) == 0.9
        assert init.calls == 1

    def test_stored_key_is_a_copy(self) -> None:
        """Test that mutating a board after lookup does not corrupt the key."""
        table = ValueTable(CountingInitializer())
        board = Board()
        table.get_or_init(board)

        board.set(0, 0, Cell.MARK_A)

        assert Board() in table
        assert board not in table

    def test_set_before_init_raises(self) -> None:
        """Test that updating an absent board is a logic error."""
        table = ValueTable(CountingInitializer())
        with pytest.raises(UninitializedStateError, match="update called before initialization"):
            table.set(Board(), 0.7)
        assert len(table) == 0

    def test_strict_lookup(self) -> None:
        """Test that indexing does not insert."""
        table = ValueTable(CountingInitializer())
        with pytest.raises(UninitializedStateError):
            table[Board()]
        with pytest.raises(LookupError):
            table[Board()]
        assert len(table) == 0

        table.get_or_init(Board())
        assert table[Board()] == 0.5

    def test_insert(self) -> None:
        """Test unconditional insertion of loaded values."""
        table = ValueTable(CountingInitializer())
        table.insert(Board.decode("A________"), 0.75)
        assert table[Board.decode("A________")] == 0.75

    @pytest.mark.parametrize("value", [-0.1, 1.1, float("nan")])
    def test_insert_rejects_out_of_range(self, value: float) -> None:
        """Test that loaded values must lie in [0, 1]."""
        table = ValueTable(CountingInitializer())
        with pytest.raises(ValueError):
            table.insert(Board(), value)

    def test_iterate_is_a_snapshot(self) -> None:
        """Test that iteration is unaffected by later inserts."""
        table = ValueTable(CountingInitializer())
        table.get_or_init(Board())
        pairs = table.iterate()

        table.get_or_init(Board.decode("A________"))

        assert list(pairs) == [(Board(), 0.5)]
        assert len(table.items()) == 2

    def test_iterate_yields_every_entry(self) -> None:
        """Test that every evaluated board is iterated."""
        table = ValueTable(CountingInitializer())
        boards = [Board.decode(text) for text in ["_________", "A________", "A___B____"]]
        for board in boards:
            table.get_or_init(board)

        assert {board for board, _ in table.iterate()} == set(boards)
