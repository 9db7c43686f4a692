"""
alia command-line entry point.

    alia VERB [-FLAGS] [ARGS...] [VERB [-FLAGS] [ARGS...] ...]

Pipeline
- resolve settings from the environment and configure logging.
  an unknown ALIA_PROFILE is reported and the run stops there.
- load the alias table; a missing config file is created and reported, and the
  run continues with an empty table.
- interpret the full argv (the program path is skipped as the leading token).
- write the table back, even when a chained command failed: commands that ran
  before the failure keep their effect.

Exit status is 0 on full success and 1 on any settings, config, argument or write fault.
"""
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from . import config
from .faults import ConfigError, ConfigNotFoundError, ArgumentError, trigger
from .helper import HelpPrinter
from .interpreter import Interpreter
from .settings import Settings

logger = logging.getLogger("alia")


def _configure_logging(debug):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main(argv=None, environ=None):
    try:
        settings = Settings.from_environ(environ)
    except ConfigError as fault:
        trigger(fault, shell=True, deferred=True)
        return 1
    _configure_logging(settings.debug)
    options = {"shell": True, "deferred": True, "fancy": settings.fancy, "colorful": settings.colorful}

    try:
        table = config.load(settings.path)
    except ConfigNotFoundError as fault:
        trigger(fault, **options)
        table = {}
    except ConfigError as fault:
        trigger(fault, **options)
        return 1

    interpreter = Interpreter(
        table,
        profile=settings.profile,
        helper=HelpPrinter(colorful=settings.colorful, fancy=settings.fancy),
        **options,
    )
    status = 0
    try:
        interpreter.run(sys.argv if argv is None else argv)
    except ArgumentError as fault:
        trigger(fault, **options)
        status = 1

    try:
        config.dump(table, settings.path, settings.profile)
    except ConfigError as fault:
        trigger(fault, **options)
        return 1

    logger.debug("done with status %d", status)
    return status


if __name__ == "__main__":
    sys.exit(main())
