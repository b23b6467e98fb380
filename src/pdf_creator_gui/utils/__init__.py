"""
GUI-specific utilities for PDF Creator.
"""

from .fs import containing_folder, open_in_file_manager

__all__ = ["containing_folder", "open_in_file_manager"]
