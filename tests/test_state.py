"""Tests for the immutable State model and its win/draw detection."""

import random

import pytest

from c4term.errors import InvalidArgument, InvalidOperation
from c4term.game.state import State
from c4term.utils import Piece, check_win_at_position

ONE, TWO = Piece.ONE, Piece.TWO

PARTIAL = '244444666666777777333555555'
DRAW = '123456723456776543271165432112345676725431'


def board_of(*columns):
    """Build an expected board from columns of 1/2 ints."""
    return tuple(tuple(Piece(value) for value in column) for column in columns)


def assert_state(state, moves, board, gameover, winner, last_move=None):
    assert state.moves == tuple(moves)
    assert state.board == board
    assert state.gameover is gameover
    assert state.winner == winner
    if last_move is not None:
        assert state.last_move == last_move


class TestConstruction:
    def test_initial_state_is_empty(self):
        state = State.initial()
        assert_state(state, [], board_of([], [], [], [], [], [], []), False, None)
        assert state.last_move is None
        assert state.notation == ''

    def test_initial_is_canonical(self):
        assert State.initial() == State()
        assert State.initial() is State.initial()

    def test_child_states(self):
        state1 = State.initial()
        state2 = State(4, state1)
        assert state2 is not state1
        assert_state(state2, [4], board_of([], [], [], [1], [], [], []), False, None, (3, 0))

        state3 = state2.play(4)
        assert_state(state3, [4, 4], board_of([], [], [], [1, 2], [], [], []), False, None, (3, 1))

        state4 = state3.play(1)
        assert_state(state4, [4, 4, 1], board_of([1], [], [], [1, 2], [], [], []), False, None, (0, 0))

    def test_play_matches_constructor(self):
        assert State(4, State.initial()) == State.initial().play(4)

    @pytest.mark.parametrize("column", ['Oops', None, 0, -1, State.width + 1, 4.0, True])
    def test_play_rejects_bad_columns(self, column):
        with pytest.raises(InvalidOperation):
            State.initial().play(column)

    def test_previous_must_be_a_state(self):
        with pytest.raises(InvalidArgument):
            State(4, {})
        with pytest.raises(InvalidArgument):
            State(4)

    def test_dimensions(self):
        assert (State.width, State.height, State.win_length) == (7, 6, 4)


class TestImmutability:
    def test_attributes_cannot_be_assigned(self):
        state = State.from_moves('44')
        with pytest.raises(AttributeError):
            state.moves = (1,)
        with pytest.raises(AttributeError):
            state._winner = ONE
        with pytest.raises(AttributeError):
            state.anything = 1

    def test_grid_is_read_only(self):
        state = State.from_moves('44')
        with pytest.raises(ValueError):
            state.grid[0, 0] = 1

    def test_parent_untouched_by_play(self):
        parent = State.from_moves('123')
        before = (parent.moves, parent.board, parent.grid.copy())
        parent.play(4)
        parent.play(4)
        assert parent.moves == before[0]
        assert parent.board == before[1]
        assert (parent.grid == before[2]).all()

    def test_states_are_hashable_values(self):
        assert hash(State.from_moves('4455')) == hash(State.from_moves([4, 4, 5, 5]))
        assert len({State.from_moves('45'), State.from_moves('45'), State.from_moves('54')}) == 2


class TestFromMoves:
    def test_empty_sequences(self):
        assert State.from_moves('') == State.initial()
        assert State.from_moves([]) == State.initial()

    def test_string_and_list_are_equivalent(self):
        state = State.from_moves([1, 2, 3, 4, 5, 6, 7])
        assert state == State.from_moves('1234567')
        assert_state(state, [1, 2, 3, 4, 5, 6, 7],
                     board_of([1], [2], [1], [2], [1], [2], [1]), False, None, (6, 0))

    def test_two_pieces_per_column(self):
        state = State.from_moves('12345677654321')
        assert_state(state, [1, 2, 3, 4, 5, 6, 7, 7, 6, 5, 4, 3, 2, 1],
                     board_of([1, 2], [2, 1], [1, 2], [2, 1], [1, 2], [2, 1], [1, 2]),
                     False, None, (0, 1))

    def test_partial_board_with_full_columns(self):
        state = State.from_moves(PARTIAL)
        assert_state(state, [int(m) for m in PARTIAL],
                     board_of([], [1], [1, 2, 1], [2, 1, 2, 1, 2], [2, 1, 2, 1, 2, 1],
                              [1, 2, 1, 2, 1, 2], [1, 2, 1, 2, 1, 2]),
                     False, None, (4, 5))

    def test_matches_step_by_step_construction(self):
        state = State.initial()
        for move in PARTIAL:
            state = state.play(int(move))
        assert state == State.from_moves(PARTIAL)

    def test_reports_failing_index(self):
        with pytest.raises(InvalidOperation) as excinfo:
            State.from_moves('1111111')
        assert excinfo.value.index == 6
        assert excinfo.value.column == '1'

    def test_rejects_play_after_game_over(self):
        with pytest.raises(InvalidOperation) as excinfo:
            State.from_moves('41526371')
        assert excinfo.value.index == 7

    @pytest.mark.parametrize("moves", ['12a', '120', '128', '12 '])
    def test_rejects_non_column_characters(self, moves):
        with pytest.raises(InvalidOperation) as excinfo:
            State.from_moves(moves)
        assert excinfo.value.index == 2

    def test_notation_round_trip(self):
        state = State.from_moves(PARTIAL)
        assert state.notation == PARTIAL
        assert State.from_moves(state.notation) == state


class TestValidPlays:
    @pytest.mark.parametrize("column", [None, 'foo', 0, State.width + 1, 2.5, False])
    def test_valid_play_requires_column(self, column):
        with pytest.raises(InvalidArgument):
            State.initial().valid_play(column)

    def test_valid_play_checks_for_full_columns(self):
        assert all(State.initial().valid_play(p) for p in range(1, 8))

        state = State.from_moves(PARTIAL)
        assert [state.valid_play(p) for p in range(1, 8)] == [True, True, True, True, False, False, False]

    def test_valid_plays(self):
        assert State.initial().valid_plays() == [1, 2, 3, 4, 5, 6, 7]
        assert State.from_moves(PARTIAL).valid_plays() == [1, 2, 3, 4]

    def test_no_valid_plays_once_won(self):
        state = State.from_moves('4152637')
        assert state.valid_plays() == []
        assert state.valid_play(1) is False


class TestNextPiece:
    def test_alternates_from_player_one(self):
        state = State.initial()
        while not state.gameover:
            expected = ONE if len(state.moves) % 2 == 0 else TWO
            assert state.next_piece() == expected
            state = state.play(state.valid_plays()[0])
            assert state.piece_at(state.col, state.row) == expected

    def test_move_count_after_random_games(self):
        rng = random.Random(1234)
        for _ in range(25):
            state = State.initial()
            while not state.gameover:
                assert state.next_piece() == (ONE if len(state.moves) % 2 == 0 else TWO)
                state = state.play(rng.choice(state.valid_plays()))
            assert sum(len(column) for column in state.board) == len(state.moves)
            assert all(len(column) <= State.height for column in state.board)
            assert State.from_moves(state.notation) == state


class TestOutcome:
    @pytest.mark.parametrize("moves, winner, last_move", [
        ('436767656', ONE, (5, 3)),       # vertical
        ('4152637', ONE, (6, 0)),         # horizontal
        ('466653557674', TWO, (3, 1)),    # forward diagonal
        ('345436344365', TWO, (4, 1)),    # backward diagonal
    ])
    def test_wins(self, moves, winner, last_move):
        state = State.from_moves(moves)
        assert state.gameover is True
        assert state.winner == winner
        assert state.last_move == last_move

    def test_no_winner_on_partial_board(self):
        state = State.from_moves(PARTIAL)
        assert state.gameover is False
        assert state.winner is None
        assert not state.full()

    @pytest.mark.parametrize("moves", [PARTIAL, DRAW])
    def test_no_cell_is_part_of_a_win(self, moves):
        state = State.from_moves(moves)
        for col, column in enumerate(state.board):
            for row in range(len(column)):
                assert not check_win_at_position(state.grid, State.height - 1 - row, col)

    def test_draw_on_full_board(self):
        state = State.from_moves(DRAW)
        assert state.full()
        assert state.gameover is True
        assert state.winner is None

    def test_one_move_from_draw(self):
        state = State.from_moves(DRAW[:-1])
        assert state.gameover is False
        assert state.valid_plays() == [1]


class TestText:
    def test_empty_state(self):
        assert State.initial().to_text() == "\n" + "\n".join(["......."] * 6)

    def test_busy_state(self):
        assert str(State.from_moves(PARTIAL)) == (
            "244444666666777777333555555\n"
            "....122\n"
            "...2211\n"
            "...1122\n"
            "..12211\n"
            "..21122\n"
            ".112211"
        )

    def test_repr(self):
        assert repr(State.from_moves('44')) == "State('44')"
