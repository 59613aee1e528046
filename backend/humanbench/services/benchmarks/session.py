import logging
import random
from typing import Callable, Optional

from .chimp import NEXT_ROUND_MS, REVEAL_MS, ChimpGame
from .events import Event
from .reaction import MAX_DELAY_MS, MIN_DELAY_MS, ReactionGame
from .typing_speed import TypingGame

logger = logging.getLogger(__name__)

VIEWS = ('home', 'dashboard', 'reaction', 'chimp', 'typing')


class BenchmarkSession:
    """Owns the score store, the scheduler and one instance of each game.

    All entry points run under the scheduler lock so that presentation
    callbacks and timer callbacks are serialised.
    """

    def __init__(self, store, scheduler, on_event: Optional[Callable[[Event], None]] = None,
                 rng: Optional[random.Random] = None,
                 reaction_min_delay_ms: float = MIN_DELAY_MS, reaction_max_delay_ms: float = MAX_DELAY_MS,
                 chimp_reveal_ms: float = REVEAL_MS, chimp_next_round_ms: float = NEXT_ROUND_MS):
        self.store = store
        self.scheduler = scheduler
        self.on_event = on_event
        rng = rng or random.Random()
        self.reaction = ReactionGame(
            store, scheduler, on_event=self._dispatch, rng=rng,
            min_delay_ms=reaction_min_delay_ms, max_delay_ms=reaction_max_delay_ms,
        )
        self.chimp = ChimpGame(
            store, scheduler, on_event=self._dispatch, rng=rng,
            reveal_ms=chimp_reveal_ms, next_round_ms=chimp_next_round_ms,
        )
        self.typing = TypingGame(store, scheduler.now, on_event=self._dispatch)
        self.active_view: Optional[str] = None

    @property
    def lock(self):
        return self.scheduler.lock

    def _dispatch(self, event: Event) -> None:
        if self.on_event is None:
            return
        try:
            self.on_event(event)
        except Exception as exc:
            # a broken listener must not leave a game half-transitioned
            logger.warning(f"[event-listener-failed] event={event.name} error={exc}")

    def notify_view_activated(self, view: str) -> bool:
        if view not in VIEWS:
            logger.debug(f"[view-ignored] view={view!r}")
            return False
        with self.lock:
            if view == 'reaction':
                self.reaction.start()
            elif view == 'chimp':
                self.chimp.start_game()
            elif view == 'typing':
                self.typing.restart()
        logger.info(f"[view-activated] view={view}")
        return True

    def notify_view_deactivated(self, view: str) -> bool:
        if view not in VIEWS:
            logger.debug(f"[view-ignored] view={view!r}")
            return False
        with self.lock:
            if view == 'reaction':
                self.reaction.stop()
            elif view == 'chimp':
                self.chimp.pause()
            elif view == 'typing':
                self.typing.restart()
            if self.active_view == view:
                self.active_view = None
        logger.info(f"[view-deactivated] view={view}")
        return True

    def set_view(self, view: str) -> bool:
        if view not in VIEWS:
            logger.debug(f"[view-ignored] view={view!r}")
            return False
        with self.lock:
            if self.active_view is not None:
                self.notify_view_deactivated(self.active_view)
            self.notify_view_activated(view)
            self.active_view = view
        return True

    def reaction_click(self) -> Optional[Event]:
        with self.lock:
            return self.reaction.on_input()

    def chimp_click(self, position) -> Optional[Event]:
        with self.lock:
            return self.chimp.on_cell_click(position)

    def typing_keystroke(self, text: Optional[str] = None) -> None:
        with self.lock:
            self.typing.on_keystroke(text)

    def typing_conclude(self, typed_text: Optional[str] = None) -> Optional[Event]:
        with self.lock:
            return self.typing.conclude(typed_text)

    def clear_scores(self) -> None:
        with self.lock:
            self.store.clear_all()

    def snapshot(self) -> dict:
        with self.lock:
            return {
                'active_view': self.active_view,
                'bests': self.store.bests(),
                'reaction': self.reaction.to_dict(),
                'chimp': self.chimp.to_dict(),
                'typing': self.typing.to_dict(),
            }
