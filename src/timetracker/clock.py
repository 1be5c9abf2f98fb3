import time
from abc import ABC, abstractmethod

class ClockInterface(ABC):
    @abstractmethod
    def now(self) -> int:
        '''
        Whole seconds since the epoch.
        '''
        raise NotImplementedError

class WallClock(ClockInterface):
    def now(self) -> int:
        return int(time.time())

class ManualClock(ClockInterface):
    '''
    Only moves when told to.
    `advance()` accepts negative values, to mimic a system clock
    being turned back.
    '''
    def __init__(self, start: int = 0) -> None:
        self.t = start

    def now(self) -> int:
        return self.t

    def advance(self, seconds: int) -> int:
        self.t += seconds
        return self.t
