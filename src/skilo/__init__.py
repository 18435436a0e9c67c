"""
Skilo - Agent Skills CLI Tool

Scaffold, lint, format and install Agent Skills: directories containing a
SKILL.md manifest plus optional scripts/, references/ and assets/.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("skilo")
except PackageNotFoundError:
    __version__ = "0.4.0"

__all__ = [
    "__version__",
]
