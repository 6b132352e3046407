"""
Storage Package

JSON file persistence for year records and templates, and backup files.
"""

from .backup import backup_filename, create_backup, parse_backup, read_backup_file, write_backup_file
from .json_store import JsonLedgerStore

__all__ = [
    "JsonLedgerStore",
    "backup_filename",
    "create_backup",
    "parse_backup",
    "read_backup_file",
    "write_backup_file",
]
