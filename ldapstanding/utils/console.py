# Rich-based console for thread-safe, colored terminal output.
#
# This module provides a centralized console for all LDAPStanding output.
# Evaluators may run concurrently on independent attribute bags, so every
# write goes through a shared lock to avoid interleaved lines.

import threading

from rich.console import Console
from rich.markup import escape

# Global console instance - writes to stderr so callers keep stdout
console = Console(highlight=False, stderr=True)

# Lock for multi-line output
_output_lock = threading.RLock()


# =============================================================================
# Status Messages (thread-safe)
# =============================================================================

def warn(msg: str, verbose_only: bool = False):
    """Print a warning message in yellow. Thread-safe.

    Args:
        msg: Message to print (markup in it is escaped)
        verbose_only: If True, only print in verbose mode
    """
    if verbose_only and not _is_verbose():
        return
    with _output_lock:
        console.print(f"[yellow][!][/] {escape(msg)}")


def info(msg: str, verbose_only: bool = False):
    """Print an info message in blue. Thread-safe."""
    if verbose_only and not _is_verbose():
        return
    with _output_lock:
        console.print(f"[blue][*][/] {escape(msg)}")


def debug(msg: str, exc_info: bool = False, force: bool = False):
    """Print a debug message in dim text. Thread-safe.

    Args:
        msg: Message to print
        exc_info: Also print the current exception
        force: Print even if debug mode is off (caller already checked)
    """
    if not force and not _is_debug():
        return
    with _output_lock:
        console.print(f"[dim][DEBUG][/] {escape(msg)}")
        if exc_info:
            console.print_exception()


# =============================================================================
# Verbosity Control
# =============================================================================

_VERBOSE = False
_DEBUG = False


def set_verbosity(verbose: bool, debug: bool):
    """Set verbosity levels."""
    global _VERBOSE, _DEBUG
    _VERBOSE = verbose
    _DEBUG = debug


def _is_verbose() -> bool:
    return _VERBOSE or _DEBUG


def _is_debug() -> bool:
    return _DEBUG
