"""
Filestore: byte storage addressed by arbitrary string IDs.

Maps each ID onto a file in a chunked directory tree so that
per-directory fan-out stays bounded for large ID spaces.
"""

__version__ = "0.1.0"
