"""File operations that cooperate with the write guard."""

from strata_fs.files.operations import FileOperations

__all__ = ["FileOperations"]
