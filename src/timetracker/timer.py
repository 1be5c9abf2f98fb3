from __future__ import annotations

from dataclasses import dataclass
from abc import ABC, abstractmethod

class TimerState:
    '''
    Each variant carries only the field that is authoritative in that
    state, so a stopped timer has no deadline and a running timer has
    no stored remainder.
    '''
    class Base(ABC):
        @abstractmethod
        def remainingAt(self, now: int) -> int:
            raise NotImplementedError()

    @dataclass(frozen=True)
    class Stopped(Base):
        remaining_seconds: int

        def __post_init__(self) -> None:
            if self.remaining_seconds < 0:
                raise ValueError(
                    f'remaining_seconds must be non-negative, got {self.remaining_seconds}'
                )

        def remainingAt(self, now: int) -> int:
            return self.remaining_seconds

    @dataclass(frozen=True)
    class Running(Base):
        finish_at: int

        def remainingAt(self, now: int) -> int:
            return max(0, self.finish_at - now)

class Timer:
    def __init__(self, /, name: str, seconds: int) -> None:
        self.name = name
        self.state: TimerState.Base = TimerState.Stopped(seconds)

    def __repr__(self) -> str:
        return f'Timer({self.name!r}, {self.state})'

    def isRunning(self) -> bool:
        return isinstance(self.state, TimerState.Running)

    def start(self, now: int) -> None:
        match self.state:
            case TimerState.Stopped(remaining_seconds=r):
                self.state = TimerState.Running(finish_at=now + r)
            case TimerState.Running():
                pass

    def stop(self, now: int) -> None:
        match self.state:
            case TimerState.Running(finish_at=f):
                self.state = TimerState.Stopped(max(0, f - now))
            case TimerState.Stopped():
                pass

    def toggle(self, now: int) -> None:
        if self.isRunning():
            self.stop(now)
        else:
            self.start(now)

    def zero(self) -> None:
        self.state = TimerState.Stopped(0)

    def peek(self, now: int) -> int:
        '''
        Seconds left at `now`. Never negative. Does not mutate.
        '''
        return self.state.remainingAt(now)

    def tick(self, now: int) -> bool:
        '''
        `peek` plus passive expiry: a running timer whose deadline has
        passed is flipped to `Stopped(0)`.
        Returns whether this call performed that flip.
        '''
        match self.state:
            case TimerState.Running(finish_at=f) if f <= now:
                self.state = TimerState.Stopped(0)
                return True
            case _:
                return False

def formatRemaining(seconds: int) -> str:
    minutes, seconds = divmod(max(0, seconds), 60)
    return f'{minutes:3d}:{seconds:02d}'
