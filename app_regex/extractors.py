"""
Format extractors: one raw package pattern per class found in an input.

Each extractor returns a list of Pattern objects without removing
duplicates; reduce_packages() takes care of that.
"""

import os
import zipfile

from .archive import expanded_aar
from .bytecode import get_class_name
from .dex import load_dex_container
from .errors import ZIP_READ_ERRORS, ArchiveError
from .log import log
from .patterns import (
    CLASS_SUFFIX,
    package_from_class_entry,
    package_from_descriptor,
    package_from_dots,
)


def packages_for_jar(jar_path):
    """Return a pattern for every ``.class`` entry of a JAR or ZIP"""
    packages = []
    try:
        with zipfile.ZipFile(jar_path, 'r') as jar:
            for entry_name in jar.namelist():
                if entry_name.endswith(CLASS_SUFFIX):
                    packages.append(package_from_class_entry(entry_name))
    except ZIP_READ_ERRORS as e:
        raise ArchiveError(f"Cannot read JAR {jar_path}: {e}") from e

    log(f"Found {len(packages)} classes in {os.path.basename(jar_path)}")
    return packages


def packages_for_apk(apk_path, loader=None):
    """
    Return a pattern for every class defined in the dex files of an APK.

    Args:
        apk_path: Path to the APK (or a bare ``.dex`` file)
        loader: Callable turning the file bytes into dex units; defaults to
            load_dex_container

    Malformed class descriptors are reported and skipped.
    """
    if loader is None:
        loader = load_dex_container

    with open(apk_path, 'rb') as f:
        data = f.read()

    packages = []
    for dex_unit in loader(data):
        count = 0
        for descriptor in dex_unit.class_descriptors():
            pattern = package_from_descriptor(descriptor)
            if pattern is not None:
                packages.append(pattern)
                count += 1
        log(f"Found {count} classes in {dex_unit.name} of {os.path.basename(apk_path)}")
    return packages


def packages_for_aar(aar_path, recursive=True, expander=None):
    """
    Return the patterns of every JAR embedded in an AAR.

    Args:
        aar_path: Path to the ``.aar`` file
        recursive: Also read the JARs under ``libs/``
        expander: Callable ``(aar_path, recursive)`` returning a context
            manager that yields the extracted JAR paths and removes them on
            exit; defaults to expanded_aar

    The temporary JARs are removed again even if reading one of them fails.
    """
    if expander is None:
        expander = expanded_aar

    packages = []
    with expander(aar_path, recursive) as jars:
        for jar_path in jars:
            packages.extend(packages_for_jar(jar_path))
    return packages


def packages_for_class(class_path):
    """Return the single pattern of a compiled ``.class`` file"""
    return [package_from_dots(get_class_name(class_path))]
