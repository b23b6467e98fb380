"""
PySide6 user interface for PDF Creator.
"""
