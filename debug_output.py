"""
debug_output.py
Verbose [DEBUG] output shared by the parser and the model conversion.
"""
import os
import sys

VERBOSE_ENV = 'LUDWIEG_VERBOSE'


def resolve_verbose(verbose: bool = False) -> bool:
    """
    An explicit verbose=True always wins; otherwise the LUDWIEG_VERBOSE
    environment variable decides.
    """
    if verbose:
        return True
    return os.environ.get(VERBOSE_ENV, '').strip().lower() in ('1', 'true', 'yes', 'on')


def debug_print(message: str, verbose: bool) -> None:
    """
    Print a debug message if verbose mode is enabled.

    Args:
        message: The message to print
        verbose: Whether verbose mode is on
    """
    if verbose:
        print(f"[DEBUG] {message}", file=sys.stderr)
