"""
Reduction of raw package patterns into the smallest covering set.

Exact patterns are kept as they are. Prefix patterns are sorted by text; every
key that has another key as its literal prefix is covered by that shorter key
and dropped, so only the most general prefix of each nested chain survives.
"""

from .log import log
from .patterns import WILDCARD_SUFFIX


def _subsumption_text(key, boundary_aware):
    # With a trailing separator, com.foo. is a prefix of com.foo.bar. but not of com.foobar.
    return key + "." if boundary_aware else key


def covered_keys(prefix_keys, boundary_aware=False):
    """
    Mark each distinct prefix key as covered or surviving.

    Keys sharing a prefix are contiguous in sorted order and sort after that
    prefix, so one pass that remembers the last surviving key finds every
    covered one.

    Args:
        prefix_keys: Distinct prefix texts, in any order
        boundary_aware: Only let a key cover keys that continue with a ``.``

    Returns:
        Dict mapping every key to True when a shorter key covers it
    """
    ordered = sorted(prefix_keys, key=lambda k: _subsumption_text(k, boundary_aware))
    covered = {}
    root = None
    for key in ordered:
        text = _subsumption_text(key, boundary_aware)
        if root is not None and text.startswith(root):
            covered[key] = True
        else:
            covered[key] = False
            root = text
    return covered


def reduce_packages(patterns, boundary_aware=False):
    """
    Collapse a collection of patterns into the minimal set of pattern strings.

    Args:
        patterns: Iterable of Pattern objects, duplicates allowed
        boundary_aware: Treat ``com.foo`` as covering ``com.foo.bar`` but not
            ``com.foobar``. Off by default, which keeps the plain string-prefix
            behaviour downstream consumers rely on.

    Returns:
        Set of strings: exact names as-is, surviving prefixes as ``text.*``
    """
    patterns = list(patterns)
    result = set()
    prefix_keys = set()

    # Exact patterns go straight to the result, prefixes are reduced below
    for pattern in patterns:
        if pattern.is_prefix:
            prefix_keys.add(pattern.text)
        else:
            result.add(str(pattern))

    for key, is_covered in covered_keys(prefix_keys, boundary_aware).items():
        if not is_covered:
            result.add(key + WILDCARD_SUFFIX)

    log(f"APP_REGEX: reduced {len(patterns)} -> {len(result)} entries", "DEBUG")
    return result
