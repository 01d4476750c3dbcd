"""
Models package
"""

from .code_file import Base, CodeFile, CodeFileRecord

__all__ = ["Base", "CodeFile", "CodeFileRecord"]
