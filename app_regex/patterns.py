"""
Package patterns derived from class names.

A pattern is either an exact class name (classes in the default package) or
a package prefix that stands for every name starting with that text. Prefix
patterns are rendered with a trailing ``.*``.
"""

from dataclasses import dataclass

from .log import log

CLASS_SUFFIX = ".class"
WILDCARD_SUFFIX = ".*"


@dataclass(frozen=True)
class Pattern:
    """An exact name or a wildcard-ending package prefix"""

    text: str
    is_prefix: bool = False

    @classmethod
    def exact(cls, text):
        """Create a pattern matching exactly ``text``"""
        return cls(text, False)

    @classmethod
    def prefix(cls, text):
        """Create a pattern matching every name that starts with ``text``"""
        return cls(text, True)

    def matches(self, name):
        """Check if a fully qualified class name falls under this pattern"""
        if self.is_prefix:
            return name.startswith(self.text)
        return name == self.text

    def __str__(self):
        return self.text + WILDCARD_SUFFIX if self.is_prefix else self.text


def package_from_dots(name):
    """
    Split a dotted class name at its last dot.

    Args:
        name: Fully qualified class name, e.g. ``com.foo.Bar``

    Returns:
        Prefix pattern over the package (``com.foo``), or an exact pattern
        over the whole name when the class has no package
    """
    idx = name.rfind(".")
    if idx == -1:
        return Pattern.exact(name)
    return Pattern.prefix(name[:idx])


def package_from_slashes(name):
    """Same as package_from_dots for an internal ``com/foo/Bar`` name"""
    return package_from_dots(name.replace("/", "."))


def package_from_class_entry(entry_name):
    """
    Derive the pattern of a ``.class`` entry inside a JAR.

    ``com/foo/A.class`` gives the prefix ``com.foo``; a default-package entry
    such as ``Top.class`` gives the exact name ``Top``.
    """
    directory, sep, base = entry_name.rpartition("/")
    if sep and directory:
        return Pattern.prefix(directory.replace("/", "."))
    if base.endswith(CLASS_SUFFIX):
        base = base[:-len(CLASS_SUFFIX)]
    return Pattern.exact(base)


def package_from_descriptor(descriptor):
    """
    Derive the pattern of a dex class descriptor such as ``Lcom/x/Y;``.

    Returns:
        The pattern, or None when the descriptor is not of the ``L...;`` form
    """
    if not descriptor.startswith("L") or not descriptor.endswith(";"):
        log(f"Skipping malformed class descriptor: {descriptor!r}", "WARNING")
        return None
    return package_from_slashes(descriptor[1:-1])
