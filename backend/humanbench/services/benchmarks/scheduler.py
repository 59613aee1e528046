import heapq
import itertools
import logging
import threading
import time
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class ScheduledTask:
    """A single-shot delayed callback that can be cancelled until it fires."""

    def __init__(self, name: str, delay_ms: float, callback: Callable[[], None]):
        self.name = name
        self.delay_ms = delay_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        self.cancelled = True

    def run(self) -> bool:
        if not self.pending:
            return False
        self.fired = True
        self.callback()
        return True


class Scheduler:
    """Clock plus delayed-callback primitive shared by the games.

    Callbacks run while holding ``lock``; callers entering the games from the
    outside take the same lock so a timer never interleaves with input.
    """

    def __init__(self):
        self.lock = threading.RLock()

    def now(self) -> float:
        raise NotImplementedError

    def call_later(self, delay_ms: float, callback: Callable[[], None], name: str = 'task') -> ScheduledTask:
        raise NotImplementedError

    def _fire(self, task: ScheduledTask) -> None:
        with self.lock:
            if not task.pending:
                logger.debug(f"[timer-abort] task={task.name} cancelled before firing")
                return
            logger.debug(f"[timer-fire] task={task.name}")
            task.run()


class BackgroundScheduler(Scheduler):
    """Runs each task in a Socket.IO background task after sleeping."""

    def __init__(self, socketio):
        super().__init__()
        self.socketio = socketio

    def now(self) -> float:
        return time.perf_counter() * 1000.0

    def call_later(self, delay_ms, callback, name='task'):
        task = ScheduledTask(name, delay_ms, callback)
        logger.debug(f"[timer-set] task={name} delay={delay_ms:.0f}ms")
        self.socketio.start_background_task(self._worker, task)
        return task

    def _worker(self, task: ScheduledTask) -> None:
        self.socketio.sleep(task.delay_ms / 1000.0)
        self._fire(task)


class ManualScheduler(Scheduler):
    """Deterministic scheduler with a virtual millisecond clock.

    Nothing fires until ``advance`` or ``run_next`` moves the clock forward.
    """

    def __init__(self, start_ms: float = 0.0):
        super().__init__()
        self._now = float(start_ms)
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int, ScheduledTask]] = []

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms, callback, name='task'):
        task = ScheduledTask(name, delay_ms, callback)
        heapq.heappush(self._queue, (self._now + max(0.0, delay_ms), next(self._seq), task))
        return task

    @property
    def pending_tasks(self) -> List[ScheduledTask]:
        return [t for _, _, t in sorted(self._queue) if t.pending]

    def _pop_pending(self, until: Optional[float] = None) -> Optional[Tuple[float, ScheduledTask]]:
        while self._queue:
            due, _, task = self._queue[0]
            if not task.pending:
                heapq.heappop(self._queue)
                continue
            if until is not None and due > until:
                return None
            heapq.heappop(self._queue)
            return due, task
        return None

    def run_next(self) -> Optional[ScheduledTask]:
        """Jump the clock to the next pending task and fire it."""
        nxt = self._pop_pending()
        if nxt is None:
            return None
        due, task = nxt
        self._now = max(self._now, due)
        self._fire(task)
        return task

    def advance(self, ms: float) -> int:
        """Move the clock forward, firing every task that falls due on the way."""
        target = self._now + ms
        fired = 0
        while True:
            nxt = self._pop_pending(until=target)
            if nxt is None:
                break
            due, task = nxt
            self._now = max(self._now, due)
            self._fire(task)
            fired += 1
        self._now = target
        return fired
