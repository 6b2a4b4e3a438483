"""Interactive release helper: bump, rewrite version markers, build, tag, publish."""

__version__ = "0.1.0"
