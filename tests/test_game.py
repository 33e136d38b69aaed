"""Tests for the Game turn orchestrator."""

import pytest

from c4term.errors import InvalidOperation, Precondition
from c4term.game.match import Game
from c4term.game.state import State
from c4term.players import HughPlayer, Player, RandoPlayer
from c4term.utils import Piece

LAST_MOVE_LEFT = '12345672345677654327116543211234567672543'


class ScriptedPlayer(Player):
    """Plays a fixed list of columns, announcing each one."""

    name = "Scripted"
    description = "Plays from a script"

    def __init__(self, columns):
        super().__init__(think_delay=0)
        self.columns = list(columns)

    async def get_play(self, state):
        self.assert_valid_state(state)
        column = self.columns.pop(0)
        self.highlight([column])
        self.think(f"Playing {column}")
        return column


def record(game):
    events = []
    game.on('state', lambda state: events.append(('state', state.notation)))
    game.on('highlight', lambda columns: events.append(('highlight', columns)))
    game.on('thinking', lambda message: events.append(('thinking', message)))
    return events


class TestConstruction:
    def test_rejects_finished_state(self):
        with pytest.raises(Precondition):
            Game(State.from_moves('4152637'), RandoPlayer(), RandoPlayer())

    def test_rejects_non_players(self):
        with pytest.raises(Precondition):
            Game(State.initial(), RandoPlayer(), object())
        with pytest.raises(Precondition):
            Game('1234', RandoPlayer(), RandoPlayer())

    def test_current_player_follows_state(self):
        one, two = RandoPlayer(), RandoPlayer()
        assert Game(State.initial(), one, two).current_player() is one
        assert Game(State.from_moves('4'), one, two).current_player() is two
        assert Game(State.from_moves('45'), one, two).current_player() is one


class TestPlayTurn:
    @pytest.mark.asyncio
    async def test_applies_move_and_notifies(self):
        one, two = ScriptedPlayer([4]), ScriptedPlayer([5])
        game = Game(State.initial(), one, two)
        events = record(game)

        state = await game.play_turn()

        assert state is game.state
        assert state.moves == (4,)
        assert game.current_player() is two
        assert events == [('highlight', [4]), ('thinking', 'Playing 4'), ('state', '4')]
        assert game.highlight == [] and game.thoughts == []

    @pytest.mark.asyncio
    async def test_collects_thoughts_during_turn(self):
        seen = []
        one = ScriptedPlayer([3])
        game = Game(State.initial(), one, ScriptedPlayer([3]))
        game.on('thinking', lambda message: seen.append((list(game.thoughts), list(game.highlight))))

        await game.play_turn()
        assert seen == [(['Playing 3'], [3])]

    @pytest.mark.asyncio
    async def test_drops_notifications_from_waiting_player(self):
        one, two = ScriptedPlayer([4]), ScriptedPlayer([4])
        game = Game(State.initial(), one, two)
        events = record(game)
        await game.play_turn()
        events.clear()

        # Player one's turn is over; anything it says now is stale
        one.think("late thought")
        one.highlight([1, 2])
        assert events == []
        assert game.thoughts == [] and game.highlight == []

        two.think("my turn")
        assert events == [('thinking', 'my turn')]

    @pytest.mark.asyncio
    async def test_refuses_when_game_over(self):
        game = Game(State.from_moves(LAST_MOVE_LEFT), RandoPlayer(think_delay=0), RandoPlayer(think_delay=0))
        state = await game.play_turn()
        assert state.gameover and state.winner is None
        with pytest.raises(InvalidOperation):
            await game.play_turn()

    @pytest.mark.asyncio
    async def test_illegal_answer_is_an_invalid_operation(self):
        game = Game(State.from_moves('111111'), ScriptedPlayer([1]), ScriptedPlayer([]))
        with pytest.raises(InvalidOperation):
            await game.play_turn()
        assert game.state == State.from_moves('111111')


class TestRun:
    @pytest.mark.asyncio
    async def test_scripted_win(self):
        one, two = ScriptedPlayer([4, 4, 4, 4]), ScriptedPlayer([5, 5, 5])
        game = Game(State.initial(), one, two)
        states = []
        game.on('state', states.append)

        final = await game.run()

        assert final.notation == '4545454'
        assert final.winner == Piece.ONE
        assert game.winning_player() is one
        assert [s.notation for s in states] == ['4', '45', '454', '4545', '45454', '454545', '4545454']

    @pytest.mark.asyncio
    async def test_computer_players_finish(self):
        for _ in range(5):
            game = Game(State.initial(), HughPlayer(think_delay=0), RandoPlayer(think_delay=0))
            final = await game.run()
            assert final.gameover
            assert State.from_moves(final.notation) == final
            if final.winner is None:
                assert game.winning_player() is None
            else:
                expected = game.player1 if final.winner == Piece.ONE else game.player2
                assert game.winning_player() is expected

    @pytest.mark.asyncio
    async def test_same_player_on_both_sides(self):
        player = RandoPlayer(think_delay=0)
        game = Game(State.initial(), player, player)
        thoughts = []
        game.on('thinking', thoughts.append)
        await game.play_turn()
        assert thoughts.count('Considering options...') == 1
        assert (await game.run()).gameover


class TestClose:
    def test_detaches_from_players(self):
        one, two = RandoPlayer(), RandoPlayer()
        game = Game(State.initial(), one, two)
        assert one.listener_count('thinking') == 1
        game.close()
        assert one.listener_count('thinking') == 0
        assert two.listener_count('highlight') == 0
