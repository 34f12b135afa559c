"""
Verbosity-gated logging for notedocx

LOG() writes through a single loguru sink on stderr. Whether a message is
shown depends on the verbosity of the ProgramState bound to the current
context, so the lexer, assembler and compiler can log without being handed
the state.

    from notedocx.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)                        # once, in main()
    LOG("Processing file: notes/a.md", level=1)        # shown by default
    LOG("Lexed 42 tokens from a.md", level=2)          # -v
    LOG("[Type: text, Value: hello]", level=3)         # -vv
"""

import sys
from contextvars import ContextVar
from typing import Any, Optional

from loguru import logger

# State whose verbosity gates LOG(); unset means silent
_bound_state: ContextVar[Optional[Any]] = ContextVar('notedocx_state', default=None)

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan>:<cyan>{function: <20}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=LOG_FORMAT, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Bind a ProgramState to the current context.

    Args:
        state: Anything with a ``verbosity`` attribute
    """
    _bound_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the bound state, 0 if none is bound"""
    state = _bound_state.get()
    return getattr(state, 'verbosity', 0) if state is not None else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit message when the bound verbosity is at least level.

    Args:
        message: Text to log
        level: 1 progress per note file, 2 paths and counts, 3 token trace
        **kwargs: Passed on to loguru for message formatting
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
