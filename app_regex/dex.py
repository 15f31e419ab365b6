"""
Dex container loading.

An APK (or any ZIP) may carry several dex files: ``classes.dex``,
``classes2.dex``, ... Each one becomes a DexUnit whose class definitions are
parsed with androguard.
"""

import io
import re
import zipfile

from androguard.core.dex import DEX

from .errors import ZIP_READ_ERRORS, ArchiveError
from .log import log

DEX_MAGIC = b"dex\n"

_DEX_ENTRY = re.compile(r'^classes(\d*)\.dex$')


class DexUnit:
    """One dex file of a (possibly multi-dex) container"""

    def __init__(self, name, data):
        self.name = name
        self.data = data
        self._dex = None

    def _parsed(self):
        if self._dex is None:
            try:
                self._dex = DEX(self.data)
            except Exception as e:
                raise ArchiveError(f"Cannot parse {self.name}: {e}") from e
        return self._dex

    def class_descriptors(self):
        """Yield the internal descriptor (``Lcom/foo/Bar;``) of every class defined here"""
        for class_def in self._parsed().get_classes():
            yield class_def.get_name()

    def __repr__(self):
        return f"DexUnit({self.name!r}, {len(self.data)} bytes)"


def _multidex_order(entry_name):
    number = _DEX_ENTRY.match(entry_name).group(1)
    return int(number) if number else 1


def load_dex_container(data):
    """
    Split raw container bytes into dex units.

    Args:
        data: Either a single dex file or a ZIP archive (APK) carrying
            ``classes*.dex`` entries at its root

    Returns:
        List of DexUnit objects in multidex order

    Raises:
        ArchiveError: If the data is neither a dex file nor a readable ZIP
    """
    if data[:4] == DEX_MAGIC:
        return [DexUnit("classes.dex", data)]

    try:
        with zipfile.ZipFile(io.BytesIO(data), 'r') as container:
            dex_names = [name for name in container.namelist() if _DEX_ENTRY.match(name)]
            dex_names.sort(key=_multidex_order)
            units = [DexUnit(name, container.read(name)) for name in dex_names]
    except ZIP_READ_ERRORS as e:
        raise ArchiveError(f"Not a dex file or ZIP container: {e}") from e

    if not units:
        log("No DEX files found in container", "WARNING")
    else:
        log(f"Found {len(units)} DEX files: {', '.join(u.name for u in units)}")
    return units
