"""
Error types raised while reading class-carrying archives
"""

import zipfile
import zlib


class ArchiveError(OSError):
    """An archive or compiled class could not be opened or decoded"""


# zipfile raises these for damaged archives and for entries it cannot decode
ZIP_READ_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError)
