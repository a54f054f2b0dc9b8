"""javastream - Java object serialization stream field descriptor codec."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("javastream")
except PackageNotFoundError:
    __version__ = "(local)"
