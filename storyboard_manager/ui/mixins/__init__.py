# -*- coding: utf-8 -*-
"""
UI Mixins 模块
"""

from .export_mixin import ExportMixin
from .import_mixin import ImportMixin
from .library_mixin import LibraryMixin
from .menu_mixin import MenuMixin
from .scene_mixin import SceneMixin

__all__ = [
    'ExportMixin',
    'ImportMixin',
    'LibraryMixin',
    'MenuMixin',
    'SceneMixin',
]
