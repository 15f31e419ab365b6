"""
AAR expansion into the JAR files it carries.

An AAR is a ZIP holding ``classes.jar`` plus optional ``libs/*.jar``. The
JARs are extracted into temporary directories that the caller owns and must
remove with cleanup(); expanded_aar() does both.
"""

import os
import shutil
import tempfile
import zipfile
from contextlib import contextmanager

from .errors import ZIP_READ_ERRORS, ArchiveError
from .log import log

MAIN_JAR = "classes.jar"


def expand_aar(aar_path, recursive, temp_dirs):
    """
    Extract the JARs embedded in an AAR.

    Args:
        aar_path: Path to the ``.aar`` file
        recursive: Also extract the other embedded JARs (``libs/*.jar``)
        temp_dirs: Set that receives every temporary directory created

    Returns:
        List of paths to the extracted JAR files
    """
    jars = []
    try:
        with zipfile.ZipFile(aar_path, 'r') as aar:
            jar_entries = [name for name in aar.namelist()
                           if name.endswith('.jar') and (recursive or name == MAIN_JAR)]
            if not jar_entries:
                log(f"No JAR files found in {os.path.basename(aar_path)}", "WARNING")
                return jars

            temp_dir = tempfile.mkdtemp(prefix='aar-')
            temp_dirs.add(temp_dir)

            for i, entry in enumerate(jar_entries):
                # Embedded JARs may share a base name (libs/a/x.jar, libs/b/x.jar)
                jar_path = os.path.join(temp_dir, f"{i}-{os.path.basename(entry)}")
                with open(jar_path, 'wb') as jar_file:
                    jar_file.write(aar.read(entry))
                jars.append(jar_path)
                log(f"Extracted {entry} from {os.path.basename(aar_path)}")
    except ZIP_READ_ERRORS as e:
        raise ArchiveError(f"Cannot read AAR {aar_path}: {e}") from e
    return jars


def cleanup(temp_dirs):
    """Remove every directory recorded by expand_aar and empty the registry"""
    for temp_dir in sorted(temp_dirs):
        shutil.rmtree(temp_dir, ignore_errors=True)
        log(f"Removed temporary directory {temp_dir}", "DEBUG")
    temp_dirs.clear()


@contextmanager
def expanded_aar(aar_path, recursive=True):
    """
    Expand an AAR for the duration of a ``with`` block.

    Temporary directories are removed when the block exits, whether it
    finishes normally or raises.
    """
    temp_dirs = set()
    try:
        yield expand_aar(aar_path, recursive, temp_dirs)
    finally:
        cleanup(temp_dirs)
