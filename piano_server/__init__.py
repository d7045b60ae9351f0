"""Static file server for the browser piano.

Exposes the installed distribution version as ``__version__``.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("piano-server")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
