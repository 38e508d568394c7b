# -*- coding: utf-8 -*-
"""
UI模块
"""

from .main_window import StoryboardManager
from .dialogs import ImportDialog, LibraryDialog, SettingsDialog
from .widgets import (
    ImageDropLabel, LibraryFileDelegate, LibraryFileListWidget, SearchLineEdit
)

__all__ = [
    'StoryboardManager',
    'ImportDialog', 'LibraryDialog', 'SettingsDialog',
    'ImageDropLabel', 'LibraryFileDelegate', 'LibraryFileListWidget', 'SearchLineEdit'
]
