"""
plog is a small pluggable logging facility.

Modules:
- plog.logs: loggers (sync/async), writers (console, file, stream), rotation and config
"""

from plog.__version__ import __version__

__all__ = ["__version__"]
