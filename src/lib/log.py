"""
Loguru setup for mdbook-kcl

mdBook reads the transformed book from stdout, so the only sink is
stderr. LOG() prints run details depending on the -v count of the
ProgramState connected with state_connectToLogger(); problems found in
the book (malformed directives, missing names) go straight through
logger.warning and are shown at any verbosity.

    LOG("Found 3 3D images", level=1)            # default
    LOG("Chapter 'Intro': 1 KCL render(s)", level=2)  # -v
    LOG("Tokenized chapter into 42 tokens", level=3)  # -vv
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# ProgramState of the running pipeline
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """Make state.verbosity the threshold for LOG() in this context"""
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log a run detail if the connected state's verbosity is at least level.

    Nothing is logged when no state is connected (library use, tests).
    The record is attributed to the caller, not to LOG itself.
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)
