import time

import pytest

from conftest import TestConfig
from humanbench import create_app, db
from humanbench.services.benchmarks import BackgroundScheduler, ChimpPhase, ReactionPhase
from humanbench.services.benchmarks.events import ReactionResult


class LiveTimerConfig(TestConfig):
    ENABLE_SCHEDULER_IN_TESTS = True
    REACTION_MIN_DELAY_MS = 50
    REACTION_MAX_DELAY_MS = 60
    CHIMP_REVEAL_MS = 50
    CHIMP_NEXT_ROUND_MS = 50


@pytest.fixture()
def live_session():
    application = create_app(LiveTimerConfig)
    with application.app_context():
        import humanbench.models  # noqa: F401
        db.create_all()
        yield application.extensions['humanbench']
        db.session.remove()
        db.drop_all()


def _wait_for(predicate, timeout=2.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_background_scheduler_is_used(live_session):
    assert isinstance(live_session.scheduler, BackgroundScheduler)


def test_reaction_arms_and_scores(live_session):
    live_session.set_view('reaction')
    assert live_session.reaction.phase == ReactionPhase.WAITING
    assert _wait_for(lambda: live_session.reaction.phase == ReactionPhase.READY)
    result = live_session.reaction_click()
    assert isinstance(result, ReactionResult)
    assert result.elapsed_ms >= 0
    assert live_session.store.get_best('reaction') == result.elapsed_ms


def test_chimp_reveal_opens_input(live_session):
    live_session.set_view('chimp')
    assert live_session.chimp.phase == ChimpPhase.DISPLAYING
    assert _wait_for(lambda: live_session.chimp.phase == ChimpPhase.AWAITING_INPUT)
    live_session.chimp_click(live_session.chimp.sequence[0])
    assert live_session.chimp.level == 2
    # next round starts on its own after the pause
    assert _wait_for(lambda: len(live_session.chimp.sequence) == 2)


def test_leaving_reaction_cancels_stimulus(live_session):
    live_session.set_view('reaction')
    live_session.set_view('home')
    time.sleep(0.2)
    assert live_session.reaction.phase == ReactionPhase.IDLE
    assert live_session.reaction.armed_at is None


def test_leaving_chimp_cancels_reveal(live_session):
    live_session.set_view('chimp')
    live_session.set_view('home')
    time.sleep(0.2)
    assert live_session.chimp.phase == ChimpPhase.IDLE
    assert live_session.chimp.level == 1
