"""gigboard: task listings with owner-guarded lifecycle, stored in SQLite."""

__version__ = "0.1.0"
