import pytest

from realm import CharacterClass, DiceRoller, SessionStatus
from realm.exceptions import ValidationError
from services.session_service import AI_NAMES, SessionService
from settings import EngineSettings


@pytest.fixture
def service():
    return SessionService(EngineSettings(board_size=100, max_players=4))


def test_create_session(service):
    session, engine = service.create_session(name="Night Run", seed=3, board_size=50, session_id="s1")

    assert session.session_id == "s1"
    assert session.name == "Night Run"
    assert session.status == SessionStatus.WAITING
    assert session.board.size == 50
    assert session.config.seed == 3
    assert engine.dice is not None


def test_seeded_sessions_roll_alike(service):
    _, first = service.create_session(seed=8)
    _, second = service.create_session(seed=8)
    assert [first.dice.roll_action() for _ in range(10)] == [second.dice.roll_action() for _ in range(10)]


def test_bad_session_config(service):
    with pytest.raises(ValidationError):
        service.create_session(board_size=1)


def test_build_player_with_stats(service):
    player = service.build_player(
        name="  Aria ",
        character_class="Wizard",
        stats={"intelligence": 18, "wisdom": 14},
        user_id="u-1",
    )
    assert player.name == "Aria"
    assert player.character_class == CharacterClass.WIZARD
    assert player.stats.intelligence == 18
    assert player.stats.strength == 10
    assert player.user_id == "u-1"


def test_build_player_rolls_missing_stats(service, scripted):
    scripted.push(*([6, 6, 6, 1] * 6))
    player = service.build_player(name="Borin", dice=DiceRoller(scripted))
    assert player.stats.to_dict() == {k: 18 for k in player.stats.to_dict()}


def test_ai_seat_gets_a_name(service):
    player = service.build_player(name=None, is_ai=True, seat=2)
    assert player.name == AI_NAMES[2]
    assert player.is_ai


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": ""},
        {"name": "Aria", "character_class": "Bard"},
        {"name": "Aria", "stats": {"luck": 12}},
        {"name": "Aria", "stats": {"strength": 19}},
        {"name": "Aria", "stats": {"strength": "high"}},
    ],
)
def test_build_player_rejects_bad_input(service, kwargs):
    with pytest.raises(ValidationError):
        service.build_player(**kwargs)


def test_join(service):
    session, _ = service.create_session()
    state = service.join(session, service.build_player(name="Aria"))
    assert state.player_number == 1
    assert session.players[1].name == "Aria"
