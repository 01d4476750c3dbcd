"""
Repositories package
"""

from .base import CodeFileRepository
from .sql_repository import SqlCodeFileRepository
from .kv_repository import KeyValueCodeFileRepository, encode_records, decode_records

__all__ = [
    "CodeFileRepository",
    "SqlCodeFileRepository",
    "KeyValueCodeFileRepository",
    "encode_records",
    "decode_records",
]
