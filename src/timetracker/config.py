'''
Timer file format, one timer per line:

    # comment
    Work=25M
    Break=5M

`CountUnit.MINUTES` requires the `M` suffix and reads the count as
minutes. `CountUnit.SECONDS` is the legacy format: the suffix is
optional and the count is read as seconds.
Counts are at most nine ASCII digits.
'''

from __future__ import annotations

import os
import re
import logging
import typing as tp
from enum import Enum

import dotenv
from pydantic import (
    BaseModel, ConfigDict, Field, ValidationError, field_validator,
)

from .registry import CAPACITIES, DEFAULT_CAPACITY

log = logging.getLogger(__name__)

NAME_MAX_LEN = 79

class CountUnit(Enum):
    MINUTES = 'minutes'
    SECONDS = 'seconds'

_LINE_PATTERNS = {
    CountUnit.MINUTES: re.compile(r'(?P<name>[^=]+)=(?P<count>[0-9]{1,9})M'),
    CountUnit.SECONDS: re.compile(r'(?P<name>[^=]+)=(?P<count>[0-9]{1,9})M?'),
}

class ConfigError(Exception):
    def __init__(self, message: str, line_no: int | None = None) -> None:
        if line_no is not None:
            message = f'line {line_no}: {message}'
        super().__init__(message)
        self.line_no = line_no

class TimerEntry(BaseModel):
    name: str = Field(min_length=1, max_length=NAME_MAX_LEN)
    seconds: int = Field(ge=0)

    model_config = ConfigDict(
        frozen=True,
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if '=' in v:
            raise ValueError('name must not contain "="')
        return v

def parseLine(
    line: str, unit: CountUnit = CountUnit.MINUTES, line_no: int | None = None,
) -> TimerEntry | None:
    '''
    Returns `None` for comments and blank lines.
    '''
    if line.startswith('#'):
        return None
    line = line.removesuffix('\n')
    if not line:
        return None
    m = _LINE_PATTERNS[unit].fullmatch(line)
    if m is None:
        raise ConfigError(f'malformed timer line: {line!r}', line_no)
    count = int(m['count'])
    try:
        return TimerEntry(
            name=m['name'],
            seconds=count * 60 if unit is CountUnit.MINUTES else count,
        )
    except ValidationError as e:
        raise ConfigError(
            f'invalid timer line {line!r}: {e.errors()[0]["msg"]}', line_no,
        ) from e

def loadTimers(
    path: str,
    unit: CountUnit = CountUnit.MINUTES,
    capacity: int = DEFAULT_CAPACITY,
) -> list[TimerEntry]:
    entries: list[TimerEntry] = []
    try:
        with open(path, 'rb') as f:
            for line_no, raw in enumerate(f, start=1):
                try:
                    line = raw.decode('utf-8').replace('\r\n', '\n')
                except UnicodeDecodeError as e:
                    raise ConfigError(
                        f'failed to decode {path}: {e.reason}', line_no,
                    ) from e
                entry = parseLine(line, unit, line_no)
                if entry is None:
                    continue
                if len(entries) >= capacity:
                    raise ConfigError(
                        f'too many timers, at most {capacity} are allowed',
                        line_no,
                    )
                entries.append(entry)
    except OSError as e:
        raise ConfigError(f'failed to read {path}: {e.strerror or e}') from e
    if not entries:
        raise ConfigError(f'no timers found in {path}')
    log.info('loaded %d timers from %s', len(entries), path)
    return entries

class Settings(BaseModel):
    conf_file: str
    color: bool = True
    unit: CountUnit = CountUnit.MINUTES
    capacity: int = DEFAULT_CAPACITY
    log_file: str | None = None

    model_config = ConfigDict(
        frozen=True,
    )

    @field_validator('capacity')
    @classmethod
    def validate_capacity(cls, v: int) -> int:
        if v not in CAPACITIES:
            raise ValueError(f'capacity must be one of {CAPACITIES}')
        return v

    @classmethod
    def fromEnv(
        cls, /, environ: tp.Mapping[str, str] | None = None, **overrides: tp.Any,
    ) -> Settings:
        '''
        Defaults from the environment (after loading `.env`), then
        `overrides`, typically parsed flags, win.
        `TIMETRACKER_UNIT`: `minutes` or `seconds`.
        `NO_COLOR`: any non-empty value disables color.
        '''
        if environ is None:
            dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))
            environ = os.environ
        fields: dict[str, tp.Any] = {}
        unit = environ.get('TIMETRACKER_UNIT')
        if unit:
            fields['unit'] = unit.strip().lower()
        if environ.get('NO_COLOR'):
            fields['color'] = False
        fields.update(
            (k, v) for k, v in overrides.items() if v is not None
        )
        return cls.model_validate(fields)
