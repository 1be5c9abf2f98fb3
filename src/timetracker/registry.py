from __future__ import annotations

import logging
import typing as tp

from .timer import Timer

log = logging.getLogger(__name__)

# Capacity 9 keeps the single-digit keys; capacity 20 continues with
# `0` for the 10th timer and letters for the rest.
# `q` and `z` are reserved and must never appear here.
TIMER_KEYS = '1234567890abcdefghij'
CAPACITIES = (9, 20)
DEFAULT_CAPACITY = 20

class Registry:
    def __init__(
        self, timers: tp.Iterable[Timer], capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        if capacity not in CAPACITIES:
            raise ValueError(f'Unsupported capacity: {capacity}')
        self.capacity = capacity
        self.__timers: tuple[Timer, ...] = tuple(timers)
        if len(self.__timers) > capacity:
            raise ValueError(
                f'{len(self.__timers)} timers exceed the capacity of {capacity}'
            )

    @classmethod
    def fromEntries(
        cls, entries: tp.Iterable[tp.Any], capacity: int = DEFAULT_CAPACITY,
    ) -> Registry:
        '''
        `entries` need `.name` and `.seconds`, e.g. `config.TimerEntry`.
        '''
        return cls(
            (Timer(e.name, e.seconds) for e in entries), capacity,
        )

    def __len__(self) -> int:
        return len(self.__timers)

    def __getitem__(self, index: int) -> Timer:
        return self.__timers[index]

    def __iter__(self) -> tp.Iterator[Timer]:
        return iter(self.__timers)

    def keys(self) -> str:
        return TIMER_KEYS[:self.capacity]

    def keyForIndex(self, index: int) -> str:
        return self.keys()[index]

    def indexForKey(self, key: str) -> int | None:
        if len(key) != 1:
            return None
        index = self.keys().find(key)
        if index == -1 or index >= len(self.__timers):
            return None
        return index

    def dispatch(self, key: str, now: int) -> bool:
        index = self.indexForKey(key)
        if index is None:
            return False
        timer = self.__timers[index]
        timer.toggle(now)
        log.info(
            'toggled %r to %s', timer.name,
            'running' if timer.isRunning() else 'stopped',
        )
        return True

    def tickAll(self, now: int) -> list[int]:
        '''
        One pass at a single instant `now`.
        Returns the indices that expired during this pass.
        '''
        expired = [i for i, timer in enumerate(self.__timers) if timer.tick(now)]
        for i in expired:
            log.info('%r reached zero', self.__timers[i].name)
        return expired

    def zeroAll(self) -> None:
        for timer in self.__timers:
            timer.zero()
        log.info('zeroed all %d timers', len(self.__timers))
