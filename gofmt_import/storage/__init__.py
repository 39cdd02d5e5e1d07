"""File writing helpers."""

from .backup import backup_file, write_with_backup

__all__ = ["backup_file", "write_with_backup"]
