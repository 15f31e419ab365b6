"""
Class name resolution for compiled ``.class`` files.

Only the header and constant pool are read: the ``this_class`` index after
the pool points at a CONSTANT_Class entry whose name is the internal
``com/foo/Bar`` form of the class.
"""

import struct

from .errors import ArchiveError

CLASS_MAGIC = 0xCAFEBABE

CONSTANT_UTF8 = 1
CONSTANT_CLASS = 7
CONSTANT_LONG = 5
CONSTANT_DOUBLE = 6

# Payload sizes of the fixed-width constant pool entries
_FIXED_SIZES = {
    3: 4,   # Integer
    4: 4,   # Float
    5: 8,   # Long
    6: 8,   # Double
    7: 2,   # Class
    8: 2,   # String
    9: 4,   # Fieldref
    10: 4,  # Methodref
    11: 4,  # InterfaceMethodref
    12: 4,  # NameAndType
    15: 3,  # MethodHandle
    16: 2,  # MethodType
    17: 4,  # Dynamic
    18: 4,  # InvokeDynamic
    19: 2,  # Module
    20: 2,  # Package
}


def _read(stream, size):
    data = stream.read(size)
    if len(data) != size:
        raise ArchiveError("Truncated class file")
    return data


def _read_constant_pool(stream):
    count = struct.unpack('>H', _read(stream, 2))[0]
    pool = [None] * count
    index = 1
    while index < count:
        tag = _read(stream, 1)[0]
        if tag == CONSTANT_UTF8:
            length = struct.unpack('>H', _read(stream, 2))[0]
            pool[index] = (tag, _read(stream, length))
        elif tag in _FIXED_SIZES:
            pool[index] = (tag, _read(stream, _FIXED_SIZES[tag]))
        else:
            raise ArchiveError(f"Unknown constant pool tag {tag} at index {index}")
        # Long and Double entries take up two slots
        index += 2 if tag in (CONSTANT_LONG, CONSTANT_DOUBLE) else 1
    return pool


def _entry(pool, index, expected_tag):
    if index <= 0 or index >= len(pool) or pool[index] is None:
        raise ArchiveError(f"Invalid constant pool index {index}")
    tag, payload = pool[index]
    if tag != expected_tag:
        raise ArchiveError(f"Constant pool entry {index} has tag {tag}, expected {expected_tag}")
    return payload


def resolve_class_name(stream):
    """
    Resolve the fully qualified name of a compiled class.

    Args:
        stream: Binary file-like object positioned at the start of the class

    Returns:
        Dotted class name, e.g. ``com.foo.Bar``

    Raises:
        ArchiveError: If the data is not a readable class file
    """
    magic = struct.unpack('>I', _read(stream, 4))[0]
    if magic != CLASS_MAGIC:
        raise ArchiveError(f"Bad class file magic 0x{magic:08X}")
    _read(stream, 4)  # minor and major version

    pool = _read_constant_pool(stream)
    _access_flags, this_class = struct.unpack('>HH', _read(stream, 4))

    name_index = struct.unpack('>H', _entry(pool, this_class, CONSTANT_CLASS))[0]
    name = _entry(pool, name_index, CONSTANT_UTF8).decode('utf-8', errors='replace')
    return name.replace('/', '.')


def get_class_name(path):
    """Resolve the class name of a ``.class`` file on disk"""
    with open(path, 'rb') as f:
        return resolve_class_name(f)
