# Logging utilities - delegates to rich console.
#
# Evaluators import from here rather than from console directly so that
# the environment debug switches apply everywhere.

import os

from .console import (
    debug as _debug,
)
from .console import (
    info as _info,
)
from .console import (
    set_verbosity as _set_verbosity,
)
from .console import (
    warn as _warn,
)

_VERBOSE = False
_DEBUG = False

DEBUG_ENV_VARS = ("DEBUG", "LDAPSTANDING_DEBUG")


def set_verbosity(verbose: bool, debug_flag: bool):
    """Set verbosity levels for the wrappers and the console."""
    global _VERBOSE, _DEBUG
    _VERBOSE = verbose
    _DEBUG = debug_flag
    _set_verbosity(verbose, debug_flag)


def is_debug_enabled() -> bool:
    """True if set_verbosity enabled debug or a debug environment switch is set."""
    return _DEBUG or any(os.getenv(name) for name in DEBUG_ENV_VARS)


def warn(msg: str, verbose_only: bool = False):
    """Print warning message.

    Args:
        msg: Message to print
        verbose_only: If True, only print in verbose mode
    """
    _warn(msg, verbose_only=verbose_only)


def info(msg: str):
    """Print info message (verbose/debug only)."""
    if _VERBOSE or is_debug_enabled():
        _info(msg)


def debug(msg: str, exc_info: bool = False):
    """Debug logging - only prints if debugging is enabled."""
    if is_debug_enabled():
        _debug(msg, exc_info=exc_info, force=True)
