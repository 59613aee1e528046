import logging
from typing import Callable, List, Optional

from .events import Event, TypingResult
from .scores import Category, round_half_up

logger = logging.getLogger(__name__)

SAMPLES = [
    "The quick brown fox jumps over the lazy dog.",
    "Typing quickly requires practice and a focus on accuracy.",
    "Human Benchmark provides simple tests to measure cognitive skills.",
    "Practice a little every day to improve speed and confidence.",
]


def count_words(text: str) -> int:
    return len(text.split())


def words_per_minute(words: int, elapsed_seconds: float) -> int:
    if elapsed_seconds <= 0:
        return 0
    return round_half_up(words / (elapsed_seconds / 60.0))


def accuracy_percent(reference: str, typed: str) -> int:
    """Share of positions where the typed character equals the reference one.

    Positions past the end of either string never match.
    """
    length = max(len(reference), len(typed))
    if length == 0:
        return 0
    matches = sum(1 for a, b in zip(reference, typed) if a == b)
    return round_half_up(matches / length * 100)


class TypingGame:
    def __init__(self, store, clock: Callable[[], float], on_event: Optional[Callable[[Event], None]] = None,
                 samples: Optional[List[str]] = None):
        self.store = store
        self.clock = clock
        self.on_event = on_event
        self.samples = list(samples or SAMPLES)
        self.sample_index = 0
        self.reference_text = ''
        self.typed = ''
        self.start_time: Optional[float] = None
        self.ended = False
        self.result: Optional[TypingResult] = None
        if self.samples:
            self.load_sample(self.samples[0])

    def load_sample(self, text: str) -> None:
        self.reference_text = text
        self.typed = ''
        self.start_time = None
        self.ended = False
        self.result = None

    def select_sample(self, index) -> bool:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self.samples):
            logger.debug(f"[typing-ignored] sample index={index!r}")
            return False
        self.sample_index = index
        self.load_sample(self.samples[index])
        return True

    def restart(self) -> None:
        self.load_sample(self.reference_text)

    def on_keystroke(self, text: Optional[str] = None) -> None:
        if self.ended:
            return
        if self.start_time is None:
            self.start_time = self.clock()
        if text is not None:
            self.typed = text

    def conclude(self, typed_text: Optional[str] = None) -> Optional[TypingResult]:
        """Score the session once; later calls return None and change nothing."""
        if self.ended:
            return None
        self.ended = True
        typed = self.typed if typed_text is None else typed_text
        self.typed = typed

        elapsed_seconds = (self.clock() - self.start_time) / 1000.0 if self.start_time is not None else 0.0
        wpm = words_per_minute(count_words(typed.strip()), elapsed_seconds)
        accuracy = accuracy_percent(self.reference_text, typed)

        self.store.record_score(Category.TYPING, wpm)
        logger.debug(f"[typing-result] wpm={wpm} accuracy={accuracy} time={elapsed_seconds:.2f}s")
        self.result = TypingResult(
            wpm=wpm,
            accuracy=accuracy,
            elapsed_seconds=elapsed_seconds,
            best=self.store.get_best(Category.TYPING),
        )
        if self.on_event is not None:
            self.on_event(self.result)
        return self.result

    def to_dict(self) -> dict:
        return {
            'sample_index': self.sample_index,
            'reference_text': self.reference_text,
            'started': self.start_time is not None,
            'ended': self.ended,
            'result': self.result.to_dict() if self.result else None,
            'best': self.store.get_best(Category.TYPING),
        }
