"""
Computes the app-regex for JAR/ZIP/APK/AAR/class inputs.

get_packages() picks an extractor by file extension and reduces the raw
patterns it returns. get_app_regex() combines several inputs into the
separator-joined string that downstream analyses use to tell application
classes from library classes.
"""

import os

from .config import DEFAULT_CONFIG
from .extractors import (
    packages_for_aar,
    packages_for_apk,
    packages_for_class,
    packages_for_jar,
)
from .log import log
from .patterns import WILDCARD_SUFFIX, Pattern
from .reducer import reduce_packages


def _extract(archive_path, config):
    name = os.path.basename(archive_path).lower()
    if name.endswith('.jar') or name.endswith('.zip'):
        return packages_for_jar(archive_path)
    if name.endswith('.apk'):
        return packages_for_apk(archive_path)
    if name.endswith('.aar'):
        return packages_for_aar(archive_path, config.recursive_aar)
    if name.endswith('.class'):
        return packages_for_class(archive_path)
    log(f"Cannot compute packages, unknown file format: {archive_path}", "WARNING")
    return []


def get_packages(archive_path, config=None):
    """
    Returns the set of package patterns for the classes in an archive.

    Classes that are not in a package are returned by their exact name.

    Args:
        archive_path: Path to a .jar, .zip, .apk, .aar or .class file
        config: AnalyzerConfig; defaults apply when omitted

    Returns:
        Set of pattern strings such as ``com.foo.*`` or ``Top``

    Raises:
        OSError: If the archive cannot be opened or read
    """
    config = config or DEFAULT_CONFIG
    archive_path = os.fspath(archive_path)
    log(f"Computing packages for {archive_path}")
    packages = _extract(archive_path, config)
    return reduce_packages(packages, config.boundary_aware)


def parse_pattern(text):
    """Turn a rendered pattern string back into a Pattern"""
    if text.endswith(WILDCARD_SUFFIX):
        return Pattern.prefix(text[:-len(WILDCARD_SUFFIX)])
    return Pattern.exact(text)


def combine_packages(package_sets, config=None):
    """
    Join several get_packages() results into a single app-regex string.

    The sets are reduced once more so that a prefix found in one input also
    covers narrower prefixes found in another.
    """
    config = config or DEFAULT_CONFIG
    combined = [parse_pattern(p) for packages in package_sets for p in packages]
    reduced = reduce_packages(combined, config.boundary_aware)
    return config.separator.join(sorted(reduced))


def get_app_regex(archive_paths, config=None):
    """Compute the combined app-regex string of several inputs"""
    config = config or DEFAULT_CONFIG
    return combine_packages((get_packages(p, config) for p in archive_paths), config)


def is_application_class(class_name, patterns):
    """
    Check if a fully qualified class name belongs to the application.

    Args:
        class_name: Dotted class name, e.g. ``com.foo.Bar``
        patterns: Pattern strings as returned by get_packages()
    """
    return any(parse_pattern(p).matches(class_name) for p in patterns)
