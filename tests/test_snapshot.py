"""
Tests for save game snapshots.
"""

import json

import pytest

from hare_hedgehog import GameConfig, GameSnapshot, load_snapshot
from hare_hedgehog.events import EventType
from hare_hedgehog.exceptions import InvalidSnapshotError
from hare_hedgehog.game import Game
from hare_hedgehog.snapshot import dump_snapshot, parse_snapshot


def _record(name, position=0, carrots=68, salads=3, suspended=False, eats_salad=False):
    return {
        "name": name,
        "suspended": suspended,
        "eatsSalad": eats_salad,
        "position": position,
        "carrots": carrots,
        "salads": salads,
    }


def _snapshot_data(*records, current=0, finished=()):
    if not records:
        records = (_record("A"), _record("B"))
    return {"currPlayer": current, "onTarget": list(finished), "players": list(records)}


def test_dump_uses_save_file_keys(game):
    game.players[1].field = 7
    game.players[1].eats_salad = True

    data = json.loads(dump_snapshot(game.to_snapshot()))

    assert list(data) == ["currPlayer", "onTarget", "players"]
    assert list(data["players"][0]) == ["name", "suspended", "eatsSalad", "position", "carrots", "salads"]
    assert data["players"][1] == _record("Player 2", position=7, carrots=98, eats_salad=True)


def test_parse_valid_snapshot():
    data = _snapshot_data(
        _record("A", position=1, suspended=True),
        _record("B", position=7, eats_salad=True),
        _record("C", position=64, carrots=5, salads=0),
        _record("D", position=64, carrots=9, salads=0),
        current=1,
        finished=[3, 2],
    )

    snapshot = parse_snapshot(json.dumps(data))

    assert snapshot.current_player == 1
    assert snapshot.finished_players == [3, 2]
    assert snapshot.players[0].suspended
    assert snapshot.players[1].field == 7


def test_players_may_share_start_field():
    snapshot = parse_snapshot(json.dumps(_snapshot_data(_record("A"), _record("B"), _record("C"))))

    assert [p.field for p in snapshot.players] == [0, 0, 0]


def test_eating_on_hare_tile_is_valid():
    snapshot = parse_snapshot(json.dumps(_snapshot_data(_record("A", position=1, eats_salad=True), _record("B"))))

    assert snapshot.players[0].eats_salad


@pytest.mark.parametrize(
    "data",
    [
        _snapshot_data(current=2),
        _snapshot_data(current=-1),
        _snapshot_data(finished=[0, 0]),
        _snapshot_data(finished=[2]),
        _snapshot_data(finished=[0, 1, 1]),
        _snapshot_data(_record("A", position=65), _record("B")),
        _snapshot_data(_record("A", position=-1), _record("B")),
        _snapshot_data(_record("A", position=10), _record("B", position=10)),
        _snapshot_data(_record("A", position=2, eats_salad=True), _record("B")),
        _snapshot_data(_record("A", position=7, suspended=True), _record("B")),
        _snapshot_data(_record("A", carrots=-1), _record("B")),
        _snapshot_data(_record("A", salads=-1), _record("B")),
        _snapshot_data(_record("A")),
        _snapshot_data(*[_record(str(i)) for i in range(7)]),
        _snapshot_data(_record("A"), _record("A")),
    ],
    ids=[
        "current-too-large",
        "current-negative",
        "finished-twice",
        "finished-out-of-range",
        "too-many-finished",
        "field-past-end",
        "field-before-start",
        "shared-field",
        "eating-on-carrot-tile",
        "suspended-on-salad-tile",
        "negative-carrots",
        "negative-salads",
        "one-player",
        "seven-players",
        "duplicate-names",
    ],
)
def test_invalid_snapshot_rejected(data):
    with pytest.raises(InvalidSnapshotError):
        parse_snapshot(json.dumps(data))


def test_missing_key_rejected():
    data = _snapshot_data()
    del data["players"][0]["position"]

    with pytest.raises(InvalidSnapshotError):
        parse_snapshot(json.dumps(data))


def test_load_missing_file(tmp_path):
    with pytest.raises(InvalidSnapshotError):
        load_snapshot(tmp_path / "missing.json")


def test_load_malformed_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(InvalidSnapshotError):
        load_snapshot(path)


def test_load_file_that_is_not_utf8(tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b'{"currPlayer": 0, "onTarget": [\xff\xfe], "players": []}')

    with pytest.raises(InvalidSnapshotError):
        load_snapshot(path)


def test_save_and_load(game, tmp_path):
    game.players[0].field = 5
    game.players[0].remove_carrots(15)
    path = tmp_path / "game.json"

    assert game.save(path)

    snapshot = load_snapshot(path)
    assert isinstance(snapshot, GameSnapshot)
    assert game.represents(snapshot)
    assert snapshot.players[0].carrots == 83


def test_save_failure_is_reported(game, fake_gui, tmp_path):
    # A directory cannot be written as a file.
    assert not game.save(tmp_path)

    assert fake_gui.saving_failed == 1
    assert game.event_log.of_type(EventType.ERROR)


def test_represents(game):
    snapshot = game.to_snapshot()

    assert game.represents(snapshot)
    assert not game.represents(None)

    game.players[2].add_carrots(1)
    assert not game.represents(snapshot)


def test_restore_game(make_game, fake_gui):
    saved = make_game(player_names=["A", "B", "C"], finished_players=[2])
    saved.players[2].field = 64
    saved.players[0].field = 1
    saved.players[0].suspended = True
    saved.current_player = 1

    restored = Game.from_snapshot(saved.to_snapshot(), fake_gui)

    assert restored.represents(saved.to_snapshot())
    assert restored.finished_players == [restored.players[2]]
    assert restored.get_current_player().name == "B"
    assert restored.players[0].suspended


def test_restored_game_ignores_configured_seed(game, fake_gui):
    restored = Game.from_snapshot(game.to_snapshot(), fake_gui, GameConfig(seed=7, max_turns=50))

    assert restored.config.seed is None
    assert restored.config.max_turns == 50
    assert len(restored.cards) == 12
