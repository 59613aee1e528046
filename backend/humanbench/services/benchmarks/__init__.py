"""Benchmark domain services: score store, timers and the three games.

Nothing in this package imports Flask; the HTTP routes and socket handlers
drive it through ``BenchmarkSession``.
"""

from .chimp import ChimpGame, ChimpPhase, generate_sequence
from .reaction import ReactionGame, ReactionPhase
from .scheduler import BackgroundScheduler, ManualScheduler, ScheduledTask, Scheduler
from .scores import Category, MemoryBackend, PersistenceUnavailable, ScoreStore
from .session import VIEWS, BenchmarkSession
from .typing_speed import SAMPLES, TypingGame

__all__ = [
    'BackgroundScheduler',
    'BenchmarkSession',
    'Category',
    'ChimpGame',
    'ChimpPhase',
    'ManualScheduler',
    'MemoryBackend',
    'PersistenceUnavailable',
    'ReactionGame',
    'ReactionPhase',
    'SAMPLES',
    'ScheduledTask',
    'Scheduler',
    'ScoreStore',
    'TypingGame',
    'VIEWS',
    'generate_sequence',
]
