import logging
import random
from enum import Enum
from typing import Callable, Dict, List, Optional

from .events import (
    ChimpCellRevealed,
    ChimpGameOver,
    ChimpInputOpened,
    ChimpRoundCleared,
    ChimpSequenceShown,
    Event,
)
from .scores import Category

logger = logging.getLogger(__name__)

GRID_SIZE = 9
REVEAL_MS = 1000
NEXT_ROUND_MS = 600


def generate_sequence(n: int, rng=None, grid_size: int = GRID_SIZE) -> List[int]:
    """Pick ``n`` distinct cells, each uniformly from the cells still unused."""
    if not 1 <= n <= grid_size:
        raise ValueError(f"sequence length must be between 1 and {grid_size}, got {n}")
    rng = rng or random
    pool = list(range(grid_size))
    return [pool.pop(rng.randrange(len(pool))) for _ in range(n)]


class ChimpPhase(str, Enum):
    IDLE = 'idle'
    DISPLAYING = 'displaying'
    AWAITING_INPUT = 'awaiting_input'
    ADVANCING = 'advancing'
    ROUND_OVER = 'round_over'


class ChimpGame:
    """Sequence-memory test on a 3x3 grid.

    Each round flashes ``level`` numbered cells, hides them, then expects the
    cells to be clicked back in order. A cleared round grows the sequence by
    one; the first wrong click ends the game.
    """

    def __init__(self, store, scheduler, on_event: Optional[Callable[[Event], None]] = None,
                 rng: Optional[random.Random] = None,
                 reveal_ms: float = REVEAL_MS, next_round_ms: float = NEXT_ROUND_MS):
        self.store = store
        self.scheduler = scheduler
        self.on_event = on_event
        self.rng = rng or random.Random()
        self.reveal_ms = reveal_ms
        self.next_round_ms = next_round_ms
        self.level = 1
        self.phase = ChimpPhase.IDLE
        self.sequence: List[int] = []
        self.next_expected_index = 0
        self.final_score: Optional[int] = None
        # position -> 1-based label currently visible
        self.labels: Dict[int, int] = {}
        self.hidden = False
        self._task = None

    @property
    def accepting_input(self) -> bool:
        return self.phase == ChimpPhase.AWAITING_INPUT

    def _emit(self, event: Event) -> Event:
        if self.on_event is not None:
            self.on_event(event)
        return event

    def _cancel_timer(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def start_game(self) -> None:
        self._cancel_timer()
        self.level = 1
        self.final_score = None
        self.start_round(1)

    def start_round(self, level: int) -> None:
        self._cancel_timer()
        self.level = level
        self.sequence = generate_sequence(level, self.rng)
        self.next_expected_index = 0
        self.labels = {pos: i + 1 for i, pos in enumerate(self.sequence)}
        self.hidden = False
        self.phase = ChimpPhase.DISPLAYING
        logger.debug(f"[chimp-round] level={level} sequence={self.sequence}")
        self._emit(ChimpSequenceShown(level=level, sequence=list(self.sequence)))
        self._task = self.scheduler.call_later(self.reveal_ms, self._hide_sequence, name='chimp-reveal')

    def _hide_sequence(self) -> None:
        self._task = None
        if self.phase != ChimpPhase.DISPLAYING:
            return
        self.labels = {}
        self.hidden = True
        self.next_expected_index = 0
        self.phase = ChimpPhase.AWAITING_INPUT
        self._emit(ChimpInputOpened(level=self.level))

    def _next_round(self) -> None:
        self._task = None
        if self.phase != ChimpPhase.ADVANCING:
            return
        self.start_round(self.level)

    def on_cell_click(self, position) -> Optional[Event]:
        if not self.accepting_input:
            return None
        if isinstance(position, bool) or not isinstance(position, int) or not 0 <= position < GRID_SIZE:
            logger.debug(f"[chimp-ignored] position={position!r}")
            return None

        if position != self.sequence[self.next_expected_index]:
            score = self.level - 1
            self.phase = ChimpPhase.ROUND_OVER
            self.final_score = score
            self.store.record_score(Category.CHIMP, score)
            logger.debug(f"[chimp-over] level={self.level} score={score}")
            return self._emit(ChimpGameOver(score=score, best=self.store.get_best(Category.CHIMP)))

        label = self.next_expected_index + 1
        self.labels[position] = label
        self.next_expected_index += 1
        event = self._emit(ChimpCellRevealed(position=position, label=label))
        if self.next_expected_index < len(self.sequence):
            return event

        completed = self.level
        self.store.record_score(Category.CHIMP, completed)
        best = self.store.get_best(Category.CHIMP)
        self.level += 1
        self.phase = ChimpPhase.ADVANCING
        event = self._emit(ChimpRoundCleared(level=completed, best=best))
        if completed >= GRID_SIZE:
            # every cell used; nothing longer to play
            self.phase = ChimpPhase.ROUND_OVER
            self.final_score = completed
            return self._emit(ChimpGameOver(score=completed, best=best, completed=True))
        self._task = self.scheduler.call_later(self.next_round_ms, self._next_round, name='chimp-next-round')
        return event

    def pause(self) -> None:
        """Suspend input and clear the board; level and scores are kept."""
        self._cancel_timer()
        self.phase = ChimpPhase.IDLE
        self.sequence = []
        self.next_expected_index = 0
        self.labels = {}
        self.hidden = False

    def board(self) -> List[dict]:
        return [
            {'index': i, 'label': self.labels.get(i), 'hidden': self.hidden and i not in self.labels}
            for i in range(GRID_SIZE)
        ]

    def to_dict(self) -> dict:
        return {
            'phase': self.phase.value,
            'level': self.level,
            'accepting_input': self.accepting_input,
            'next_expected_index': self.next_expected_index,
            'final_score': self.final_score,
            'board': self.board(),
            'best': self.store.get_best(Category.CHIMP),
        }
