"""
Services package
"""

from .file_service import FileService
from .codeify_service import CodeifyService

__all__ = ["FileService", "CodeifyService"]
