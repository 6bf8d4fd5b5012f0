import pytest

from conftest import BrokenCues, BrokenStore, RecordingCues, blocking_obstacle
from dino_runner.data_models import Command, DinoMode, Phase
from dino_runner.engine_loop import GameEngine
from dino_runner.game_state import GameStateMachine
from dino_runner.high_score_db import MemoryHighScoreStore


def crash(machine):
    machine.session.obstacles = [blocking_obstacle(machine)]
    machine.tick(16)
    assert machine.session.phase is Phase.GAME_OVER


def test_new_session_starts_in_menu(machine):
    session = machine.session
    assert session.phase is Phase.MENU
    assert session.score == 0
    assert session.speed == 3.0
    assert len(session.clouds) == 5


def test_tick_outside_playing_changes_nothing(machine):
    before = machine.snapshot()
    machine.tick(16)
    assert machine.snapshot() == before


def test_duck_in_menu_is_ignored(machine):
    machine.dispatch(Command.DUCK_HOLD)
    assert machine.session.phase is Phase.MENU
    assert machine.session.dino.mode is DinoMode.RUNNING


@pytest.mark.parametrize("command", [Command.START, Command.JUMP])
def test_start_commands_begin_a_run(machine, command):
    machine.dispatch(command)
    session = machine.session
    assert session.phase is Phase.PLAYING
    assert session.obstacles == []
    assert machine.spawner.distance_to_next_spawn == 400
    assert session.dino.mode is DinoMode.RUNNING


def test_jump_applies_before_next_tick(machine, cues):
    machine.dispatch(Command.START)
    machine.dispatch(Command.JUMP)
    dino = machine.session.dino
    assert dino.mode is DinoMode.JUMPING
    assert dino.velocity_y == -12.0
    assert cues.names() == ["jump"]


def test_jumps_do_not_stack_while_airborne(machine, cues):
    machine.dispatch(Command.START)
    machine.dispatch(Command.START)
    machine.tick(16)
    velocity = machine.session.dino.velocity_y

    machine.dispatch(Command.START)
    assert machine.session.dino.velocity_y == velocity
    assert cues.names() == ["jump"]


def test_duck_hold_and_release(machine):
    machine.dispatch(Command.START)
    machine.dispatch(Command.DUCK_HOLD)
    machine.dispatch(Command.DUCK_HOLD)
    assert machine.session.dino.mode is DinoMode.DUCKING

    machine.tick(16)
    assert machine.session.dino.mode is DinoMode.DUCKING

    machine.dispatch(Command.DUCK_RELEASE)
    machine.tick(16)
    assert machine.session.dino.mode is DinoMode.RUNNING


def test_collision_ends_the_run(machine, cues):
    machine.dispatch(Command.START)
    for _ in range(5):
        machine.tick(16)
    crash(machine)

    assert machine.session.dino.mode is DinoMode.DEAD
    assert cues.names()[-1] == "hit"

    frozen = machine.session.score
    machine.tick(16)
    assert machine.session.score == frozen


def test_restart_after_game_over_resets_run(machine):
    machine.dispatch(Command.START)
    for _ in range(300):
        machine.tick(16)
    crash(machine)

    machine.dispatch(Command.START)
    session = machine.session
    assert session.phase is Phase.PLAYING
    assert session.score == 0
    assert session.obstacles == []
    assert session.speed == 3.0
    assert session.ground_offset == 0
    assert session.dino.mode is DinoMode.RUNNING
    assert session.dino.velocity_y == 0


def test_duck_ignored_after_game_over(machine):
    machine.dispatch(Command.START)
    crash(machine)
    machine.dispatch(Command.DUCK_HOLD)
    assert machine.session.dino.mode is DinoMode.DEAD


def test_high_score_written_only_when_improved():
    store = MemoryHighScoreStore(500)
    machine = GameStateMachine(store=store, seed=1)
    assert machine.high_score == 500

    machine.dispatch(Command.START)
    machine.session.score = 742.3
    crash(machine)
    assert store.score == 742
    assert machine.high_score == 742

    machine.dispatch(Command.START)
    machine.session.score = 300.0
    crash(machine)
    assert store.score == 742
    assert machine.high_score == 742


def test_invariants_hold_over_a_long_seeded_run():
    machine = GameStateMachine(seed=99)
    machine.dispatch(Command.START)
    previous = machine.session.score
    for i in range(5000):
        if i % 37 == 0:
            machine.dispatch(Command.JUMP)
        machine.tick(16)
        session = machine.session
        if session.phase is Phase.GAME_OVER:
            machine.dispatch(Command.START)
            previous = machine.session.score
            continue
        assert session.score >= previous
        assert session.dino.y <= 150
        assert session.dino.velocity_y <= 12.0
        previous = session.score


def test_same_seed_gives_same_world():
    def run(seed):
        machine = GameStateMachine(seed=seed)
        machine.dispatch(Command.START)
        kinds = []
        for _ in range(3000):
            machine.tick(16)
            if machine.session.phase is Phase.GAME_OVER:
                machine.dispatch(Command.START)
            kinds.extend(o.kind for o in machine.session.obstacles if o.x == 800)
        return kinds, machine.snapshot()

    assert run(11) == run(11)


def test_snapshot_is_detached_from_session(machine):
    machine.dispatch(Command.START)
    snap = machine.snapshot()
    snap.dino.y = 0
    assert machine.session.dino.y == 150
    assert snap.phase is Phase.PLAYING


def test_return_to_menu_clears_run(machine):
    machine.dispatch(Command.START)
    machine.dispatch(Command.DUCK_HOLD)
    machine.tick(16)
    machine.return_to_menu()
    assert machine.session.phase is Phase.MENU
    assert machine.session.score == 0
    assert machine.session.duck_held is False


def test_collaborator_failures_do_not_stop_the_game(capsys):
    machine = GameStateMachine(store=BrokenStore(), cues=BrokenCues(), seed=3)
    assert machine.high_score == 0

    machine.dispatch(Command.START)
    machine.dispatch(Command.JUMP)
    machine.session.score = 12.0
    crash(machine)

    assert machine.high_score == 12
    out = capsys.readouterr().out
    assert "Could not read high score" in out
    assert "Could not save high score 12" in out
    assert "Audio cue 'jump' failed" in out


def test_game_over_with_recorded_cues():
    cues = RecordingCues()
    machine = GameStateMachine(cues=cues, seed=3)
    machine.dispatch(Command.START)
    crash(machine)
    assert ("hit", 0.5) in cues.played


def test_second_jump_before_a_tick_is_ignored(machine, cues):
    machine.dispatch(Command.START)
    machine.dispatch(Command.JUMP)
    machine.dispatch(Command.JUMP)
    machine.dispatch(Command.START)

    assert machine.session.dino.velocity_y == -12.0
    assert cues.names() == ["jump"]


def test_queued_double_press_jumps_once(scheduler, cues):
    engine = GameEngine(scheduler, machine=GameStateMachine(cues=cues, seed=8))
    engine.machine.dispatch(Command.START)
    engine.start()
    engine.post(Command.JUMP)
    engine.post(Command.JUMP)
    scheduler.advance(16)

    assert cues.names() == ["jump"]
    assert engine.machine.session.dino.velocity_y == pytest.approx(-11.4)
