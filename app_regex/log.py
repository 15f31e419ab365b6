"""
Diagnostic output shared by the extractors, the reducer and the CLI.

Messages are written as ``[HH:MM:SS] LEVEL: message`` lines to stderr.
INFO and DEBUG lines only appear in verbose mode; WARNING and ERROR always do.
"""

import sys
from datetime import datetime

_verbose = False


def set_verbose(verbose):
    """Enable or disable INFO/DEBUG diagnostics"""
    global _verbose
    _verbose = bool(verbose)


def log(message, level="INFO"):
    """Log messages with timestamp"""
    if _verbose or level in ["ERROR", "WARNING"]:
        timestamp = datetime.now().strftime("%H:%M:%S")
        print(f"[{timestamp}] {level}: {message}", file=sys.stderr)


def safe_print(*args, **kwargs):
    """Safe print function that handles unicode encoding issues."""
    try:
        print(*args, **kwargs)
    except UnicodeEncodeError:
        # If unicode fails, convert all args to ASCII with replacement
        safe_args = []
        for arg in args:
            if isinstance(arg, str):
                safe_args.append(arg.encode('ascii', errors='replace').decode('ascii'))
            else:
                safe_args.append(str(arg).encode('ascii', errors='replace').decode('ascii'))
        print(*safe_args, **kwargs)
