from .UI import UI as TimetrackerUI
from .clock import ClockInterface, WallClock, ManualClock
from .config import ConfigError, CountUnit, Settings, TimerEntry, loadTimers
from .registry import Registry
from .timer import Timer, TimerState

__all__ = [
    "TimetrackerUI", "ClockInterface", "WallClock", "ManualClock",
    "ConfigError", "CountUnit", "Settings", "TimerEntry", "loadTimers",
    "Registry", "Timer", "TimerState",
]
