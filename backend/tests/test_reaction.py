from humanbench.services.benchmarks import Category, ReactionGame, ReactionPhase
from humanbench.services.benchmarks.events import ReactionArmed, ReactionResult, ReactionTooSoon


def make_game(store, scheduler, events, rng, **kwargs):
    return ReactionGame(store, scheduler, on_event=events.append, rng=rng, **kwargs)


def test_start_waits_between_two_and_five_seconds(store, scheduler, events, rng):
    game = make_game(store, scheduler, events, rng)
    for _ in range(20):
        game.start()
        (task,) = scheduler.pending_tasks
        assert 2000 <= task.delay_ms <= 5000
    assert game.phase == ReactionPhase.WAITING


def test_stimulus_arms_ready(store, scheduler, events, rng):
    game = make_game(store, scheduler, events, rng)
    game.start()
    scheduler.advance(1999)
    assert game.phase == ReactionPhase.WAITING
    scheduler.advance(3001)
    assert game.phase == ReactionPhase.READY
    assert game.armed_at is not None
    assert isinstance(events[-1], ReactionArmed)


def test_click_after_250ms_records_250(store, scheduler, events, rng):
    # fixed delay keeps the virtual clock on whole milliseconds
    game = make_game(store, scheduler, events, rng, min_delay_ms=3000, max_delay_ms=3000)
    game.start()
    scheduler.run_next()
    assert game.armed_at == 4000
    scheduler.advance(250)
    result = game.on_input()
    assert isinstance(result, ReactionResult)
    assert result.elapsed_ms == 250
    assert store.get_best(Category.REACTION) == 250
    assert game.phase == ReactionPhase.IDLE


def test_elapsed_is_rounded(store, scheduler, events, rng):
    game = make_game(store, scheduler, events, rng, min_delay_ms=3000, max_delay_ms=3000)
    game.start()
    scheduler.run_next()
    scheduler.advance(199.5)
    assert game.on_input().elapsed_ms == 200


def test_false_start_records_nothing(store, scheduler, events, rng):
    game = make_game(store, scheduler, events, rng)
    game.start()
    scheduler.advance(500)
    result = game.on_input()
    assert isinstance(result, ReactionTooSoon)
    assert game.phase == ReactionPhase.IDLE
    assert store.get_best(Category.REACTION) is None
    # the cancelled stimulus never fires
    scheduler.advance(10000)
    assert game.phase == ReactionPhase.IDLE
    assert not any(isinstance(e, ReactionArmed) for e in events)


def test_click_when_idle_starts_round(store, scheduler, events, rng):
    game = make_game(store, scheduler, events, rng)
    assert game.on_input() is None
    assert game.phase == ReactionPhase.WAITING
    assert len(scheduler.pending_tasks) == 1


def test_worse_time_keeps_best(store, scheduler, events, rng):
    game = make_game(store, scheduler, events, rng)
    for wait in (300, 450):
        game.start()
        scheduler.run_next()
        scheduler.advance(wait)
        result = game.on_input()
    assert result.elapsed_ms == 450
    assert result.best == 300
    assert store.get_best(Category.REACTION) == 300


def test_stop_is_idempotent_and_cancels(store, scheduler, events, rng):
    game = make_game(store, scheduler, events, rng)
    game.stop()
    game.start()
    game.stop()
    game.stop()
    assert game.phase == ReactionPhase.IDLE
    assert scheduler.pending_tasks == []
    scheduler.advance(10000)
    assert game.phase == ReactionPhase.IDLE


def test_restart_cancels_stale_stimulus(store, scheduler, events, rng):
    game = make_game(store, scheduler, events, rng)
    game.start()
    first = scheduler.pending_tasks[0]
    game.stop()
    game.start()
    assert first.cancelled
    assert len(scheduler.pending_tasks) == 1
    scheduler.run_next()
    assert sum(isinstance(e, ReactionArmed) for e in events) == 1
