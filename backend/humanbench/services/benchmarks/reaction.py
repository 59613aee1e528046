import logging
import random
from enum import Enum
from typing import Callable, Optional

from .events import Event, ReactionArmed, ReactionResult, ReactionTooSoon
from .scores import Category, round_half_up

logger = logging.getLogger(__name__)

MIN_DELAY_MS = 2000
MAX_DELAY_MS = 5000


class ReactionPhase(str, Enum):
    IDLE = 'idle'
    WAITING = 'waiting'
    READY = 'ready'


class ReactionGame:
    """Measures the latency between a stimulus and the next click.

    The stimulus arrives after a random delay so the player cannot anticipate
    it. A click before the stimulus is a false start and scores nothing.
    """

    def __init__(self, store, scheduler, on_event: Optional[Callable[[Event], None]] = None,
                 rng: Optional[random.Random] = None,
                 min_delay_ms: float = MIN_DELAY_MS, max_delay_ms: float = MAX_DELAY_MS):
        self.store = store
        self.scheduler = scheduler
        self.on_event = on_event
        self.rng = rng or random.Random()
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms
        self.phase = ReactionPhase.IDLE
        self.armed_at: Optional[float] = None
        self.last_result: Optional[int] = None
        self._task = None

    def _emit(self, event: Event) -> Event:
        if self.on_event is not None:
            self.on_event(event)
        return event

    def _cancel_timer(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def start(self) -> None:
        self._cancel_timer()
        self.phase = ReactionPhase.WAITING
        self.armed_at = None
        delay = self.rng.uniform(self.min_delay_ms, self.max_delay_ms)
        self._task = self.scheduler.call_later(delay, self._arm, name='reaction-stimulus')
        logger.debug(f"[reaction-wait] delay={delay:.0f}ms")

    def _arm(self) -> None:
        self._task = None
        if self.phase != ReactionPhase.WAITING:
            return
        self.phase = ReactionPhase.READY
        self.armed_at = self.scheduler.now()
        self._emit(ReactionArmed())

    def on_input(self) -> Optional[Event]:
        if self.phase == ReactionPhase.WAITING:
            self._cancel_timer()
            self.phase = ReactionPhase.IDLE
            logger.debug("[reaction-too-soon]")
            return self._emit(ReactionTooSoon())

        if self.phase == ReactionPhase.READY:
            elapsed = max(0, round_half_up(self.scheduler.now() - self.armed_at))
            self.phase = ReactionPhase.IDLE
            self.last_result = elapsed
            self.store.record_score(Category.REACTION, elapsed)
            return self._emit(ReactionResult(elapsed_ms=elapsed, best=self.store.get_best(Category.REACTION)))

        # idle: a click begins the next round
        self.start()
        return None

    def stop(self) -> None:
        self._cancel_timer()
        self.phase = ReactionPhase.IDLE
        self.armed_at = None

    def to_dict(self) -> dict:
        return {
            'phase': self.phase.value,
            'last_result': self.last_result,
            'best': self.store.get_best(Category.REACTION),
        }
