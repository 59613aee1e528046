"""Signals and round results emitted by the games.

Each event carries a ``name`` used as the Socket.IO event name when the
presentation adapter broadcasts it.
"""
from dataclasses import asdict, dataclass, field
from typing import ClassVar, List, Optional, Union

Number = Union[int, float]


@dataclass
class Event:
    name: ClassVar[str] = 'event'

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload['event'] = self.name
        return payload


@dataclass
class ReactionArmed(Event):
    name: ClassVar[str] = 'reaction.armed'


@dataclass
class ReactionTooSoon(Event):
    name: ClassVar[str] = 'reaction.too_soon'


@dataclass
class ReactionResult(Event):
    name: ClassVar[str] = 'reaction.result'
    elapsed_ms: int
    best: Optional[Number] = None


@dataclass
class ChimpSequenceShown(Event):
    name: ClassVar[str] = 'chimp.sequence'
    level: int
    sequence: List[int] = field(default_factory=list)


@dataclass
class ChimpInputOpened(Event):
    name: ClassVar[str] = 'chimp.input_open'
    level: int


@dataclass
class ChimpCellRevealed(Event):
    name: ClassVar[str] = 'chimp.cell'
    position: int
    label: int


@dataclass
class ChimpRoundCleared(Event):
    name: ClassVar[str] = 'chimp.cleared'
    level: int
    best: Optional[Number] = None


@dataclass
class ChimpGameOver(Event):
    name: ClassVar[str] = 'chimp.over'
    score: int
    best: Optional[Number] = None
    completed: bool = False


@dataclass
class TypingResult(Event):
    name: ClassVar[str] = 'typing.result'
    wpm: int
    accuracy: int
    elapsed_seconds: float
    best: Optional[Number] = None
