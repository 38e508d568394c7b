# -*- coding: utf-8 -*-
"""
核心模块
"""

from .scene_codes import normalize_code, compare_codes, code_matches, sort_scenes
from .importer import parse_rows, convert_import_rows, build_markdown
from .link_tracker import check_links
from .exporter import build_export_bundle, write_export, export_scenes
from .store import SceneStore

__all__ = [
    'normalize_code', 'compare_codes', 'code_matches', 'sort_scenes',
    'parse_rows', 'convert_import_rows', 'build_markdown',
    'check_links',
    'build_export_bundle', 'write_export', 'export_scenes',
    'SceneStore',
]
