import os
import sys
import logging
import argparse
import typing as tp

from pydantic import ValidationError
from textual.logging import TextualHandler

from .config import ConfigError, CountUnit, Settings, loadTimers
from .registry import CAPACITIES, Registry
from .UI import UI

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

DESCRIPTION = '''\
timetracker: a program to track time.
This program maintains multiple countdown timers to track time.
The timers are defined in a configuration file, one NAME=COUNTM per line.
Press a timer's key to start or stop it, z to zero all, q to quit.'''

class UsageError(Exception):
    pass

class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> tp.NoReturn:
        raise UsageError(message)

def buildParser() -> argparse.ArgumentParser:
    p = _Parser(
        prog='timetracker', description=DESCRIPTION, add_help=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument('-f', dest='conf_file', metavar='CONF_FILE',
                   help='the configuration file to use')
    p.add_argument('-h', dest='help', action='store_true',
                   help='print this help message and quit')
    p.add_argument('-N', dest='no_color', action='store_true',
                   help='disable color')
    p.add_argument('-S', dest='seconds', action='store_true',
                   help='legacy format: counts are seconds, M suffix optional')
    p.add_argument('-c', dest='capacity', type=int, choices=CAPACITIES,
                   help='maximum number of timers (default: 20)')
    p.add_argument('-l', dest='log_file', metavar='LOG_FILE',
                   help='write the log to LOG_FILE')
    return p

def parseSettings(
    argv: tp.Sequence[str] | None = None,
    environ: tp.Mapping[str, str] | None = None,
) -> Settings:
    parser = buildParser()
    args = parser.parse_args(argv)
    if args.help:
        raise UsageError('')
    if args.conf_file is None:
        raise UsageError('You must specify a configuration file.')
    try:
        return Settings.fromEnv(
            environ,
            conf_file=args.conf_file,
            color=False if args.no_color else None,
            unit=CountUnit.SECONDS if args.seconds else None,
            capacity=args.capacity,
            log_file=args.log_file,
        )
    except ValidationError as e:
        raise UsageError(f"invalid settings: {e.errors()[0]['msg']}") from e

def setupLogging(settings: Settings) -> None:
    if settings.log_file is not None:
        logging.basicConfig(
            level=logging.INFO, format=LOG_FORMAT,
            filename=settings.log_file, force=True,
        )
    else:
        # Never print onto the surface being painted.
        logging.basicConfig(
            level=logging.WARNING, handlers=[TextualHandler()], force=True,
        )

def main(argv: tp.Sequence[str] | None = None) -> int:
    try:
        settings = parseSettings(argv)
    except UsageError as e:
        if str(e):
            print(e, file=sys.stderr)
        buildParser().print_help(sys.stderr)
        return 1
    setupLogging(settings)

    try:
        entries = loadTimers(
            settings.conf_file, settings.unit, settings.capacity,
        )
    except ConfigError as e:
        log.info('load failed: %s', e)
        print(f'error initializing timetrackers: {e}', file=sys.stderr)
        return 1
    registry = Registry.fromEntries(entries, settings.capacity)

    app = UI(
        registry,
        color=settings.color,
        source_name=os.path.basename(settings.conf_file),
    )
    try:
        app.run()
    except Exception:
        log.exception('display loop failed')
        print('error running the terminal display.', file=sys.stderr)
        return 1
    return app.return_code or 0
