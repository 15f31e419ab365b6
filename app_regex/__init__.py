"""
app-regex: package patterns for the application code in Java/Android archives

Reads JAR, ZIP, APK, AAR and .class inputs, derives one package pattern per
class and reduces them to the smallest set of ``pkg.*`` / exact-name entries
that still covers every class.
"""

__version__ = "1.0.0"

from .config import AnalyzerConfig, load_config
from .errors import ArchiveError
from .package_util import combine_packages, get_app_regex, get_packages, is_application_class
from .patterns import Pattern
from .reducer import reduce_packages

__all__ = [
    "AnalyzerConfig",
    "ArchiveError",
    "Pattern",
    "combine_packages",
    "get_app_regex",
    "get_packages",
    "is_application_class",
    "load_config",
    "reduce_packages",
]
