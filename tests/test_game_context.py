"""
Tests for the rule queries the game answers for tiles and actions.
"""

import pytest

from hare_hedgehog.actions import preview_costs

START, END = 0, 64
FIRST_HARE, PENULTIMATE_HARE = 1, 61
FIRST_CARROT, SECOND_CARROT = 2, 5
FIRST_SALAD = 7
FIRST_HEDGEHOG = 8


@pytest.mark.parametrize(
    "carrots, expected",
    [(0, 0), (1, 1), (2, 1), (3, 2), (5, 2), (6, 3), (68, 11), (98, 13), (2016, 63), (2015, 62)],
)
def test_max_reachable_position(game, carrots, expected):
    assert game.max_reachable_position(carrots) == expected


def test_max_reachable_position_is_monotonic(game):
    reach = [game.max_reachable_position(c) for c in range(0, 2100)]
    assert reach == sorted(reach)


def test_max_reachable_position_negative_carrots(game):
    assert game.max_reachable_position(-5) == 0


def test_movement_cost(game):
    assert game.movement_cost(0, 63) == 2016
    assert game.movement_cost(5, 6) == 1
    assert game.movement_cost(10, 13) == 6


def test_movement_cost_backwards_is_free(game):
    assert game.movement_cost(10, 10) == 0
    assert game.movement_cost(15, 8) == 0


def test_movement_cost_inverts_max_reach(game):
    for n in range(0, 64):
        cost = game.movement_cost(0, n)
        assert game.max_reachable_position(cost) == n
        if n > 0:
            assert game.max_reachable_position(cost - 1) == n - 1


def test_rank_of_two_unfinished_players(two_player_game):
    first, second = two_player_game.players
    first.field = 3
    second.field = 9

    assert two_player_game.rank(second) == 1
    assert two_player_game.rank(first) == 2


def test_rank_ties_share_the_rank(game):
    for player in game.players:
        assert game.rank(player) == 1


def test_finished_players_rank_first(make_game):
    game = make_game(finished_players=[2, 0])
    game.players[2].field = END
    game.players[0].field = END
    game.players[1].field = 30
    game.players[3].field = 40

    assert game.rank(game.players[2]) == 1
    assert game.rank(game.players[0]) == 2
    assert game.rank(game.players[3]) == 3
    assert game.rank(game.players[1]) == 4
    assert game.rank(game.players[4]) == 5


def test_can_finish(game):
    assert game.can_finish(10, 0)
    assert game.can_finish(0, 0)
    assert not game.can_finish(11, 0)
    assert not game.can_finish(5, 1)


def test_can_finish_ceiling_rises(make_game):
    game = make_game(finished_players=[1, 2])

    assert game.can_finish(30, 0)
    assert not game.can_finish(31, 0)


def test_starting_carrots_by_player_count(game, two_player_game, make_game):
    assert game.starting_carrots == 98
    assert two_player_game.starting_carrots == 68
    assert make_game(player_names=["A", "B", "C", "D"]).starting_carrots == 68
    assert make_game(player_names=["A", "B", "C", "D", "E"]).starting_carrots == 98


def test_available_fields_sorted_and_reachable(game):
    player = game.players[0]
    fields = game.available_fields(player)

    assert fields == sorted(fields)
    assert fields[0] == 1
    assert max(fields) == 13
    assert all(game.board.is_accessible(f, game, player) for f in fields)


def test_is_occupied(game):
    game.players[3].field = 20

    assert game.is_occupied(20)
    assert game.is_occupied(START)
    assert not game.is_occupied(21)


def test_preview_costs_show_hedgehog_bonus(game):
    player = game.players[0]
    player.field = FIRST_HEDGEHOG + 3

    costs = preview_costs(game, player, [FIRST_HEDGEHOG, FIRST_HEDGEHOG + 5])

    assert costs == [-30, 3]


# Rank positions


def test_fall_back_position_when_last(game):
    player = game.players[0]

    assert game.get_fallback_rank_position(player) == player.field


def test_fall_back_position_skips_to_start(game):
    game.players[1].field = START + 1
    player = game.players[0]
    player.field = PENULTIMATE_HARE

    assert game.get_fallback_rank_position(player) == START


def test_fall_back_position_skips_salad_without_salads(game):
    game.players[1].field = FIRST_HEDGEHOG
    player = game.players[0]
    player.consume_all_salads()
    player.field = PENULTIMATE_HARE

    assert game.get_fallback_rank_position(player) == FIRST_SALAD - 1


def test_fall_back_position_allows_salad_with_salads(game):
    game.players[1].field = FIRST_HEDGEHOG
    player = game.players[0]
    player.field = PENULTIMATE_HARE

    assert game.get_fallback_rank_position(player) == FIRST_SALAD


def test_move_up_position_when_first(game):
    player = game.players[0]
    player.field = 30

    assert game.get_move_up_rank_position(player) == 30


def test_move_up_position_over_several_players(game):
    game.players[1].field = FIRST_HARE + 1
    game.players[2].field = FIRST_HARE + 2
    player = game.players[0]
    player.field = FIRST_HARE

    assert game.get_move_up_rank_position(player) == FIRST_HARE + 3


def test_move_up_position_skips_salad_and_hedgehog(game):
    game.players[1].field = FIRST_SALAD - 1
    player = game.players[0]
    player.consume_all_salads()
    player.field = FIRST_HARE

    assert game.get_move_up_rank_position(player) == FIRST_SALAD + 2


def test_move_up_position_reaches_end(game):
    game.players[1].field = END - 1
    player = game.players[0]
    player.field = PENULTIMATE_HARE

    assert game.get_move_up_rank_position(player) == END


def test_next_carrot_field(game):
    player = game.players[0]
    player.field = FIRST_HARE

    assert game.get_next_carrot_field(player) == FIRST_CARROT

    game.players[1].field = FIRST_CARROT
    assert game.get_next_carrot_field(player) == SECOND_CARROT


def test_next_carrot_field_none_left(game):
    player = game.players[0]
    player.field = 63

    assert game.get_next_carrot_field(player) == 63


def test_last_carrot_field(game):
    player = game.players[0]
    player.field = FIRST_SALAD

    assert game.get_last_carrot_field(player) == SECOND_CARROT

    game.players[1].field = SECOND_CARROT
    assert game.get_last_carrot_field(player) == FIRST_CARROT


def test_last_carrot_field_none_behind(game):
    player = game.players[0]
    player.field = FIRST_HARE

    assert game.get_last_carrot_field(player) == FIRST_HARE
