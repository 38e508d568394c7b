# -*- coding: utf-8 -*-
"""
后台线程模块
"""

from pathlib import Path
from typing import List

from PySide6.QtCore import QThread, Signal

from ..utils.errors import ExportError
from ..utils.models import Scene
from .exporter import build_export_bundle, write_export
from .link_tracker import check_links


class ExportWorker(QThread):
    """导出线程，启动后一直运行到完成或失败"""
    export_finished = Signal(str, list)  # 文件路径, 缺失图片列表
    export_failed = Signal(str)

    def __init__(self, scenes: List[Scene], directory: Path, is_auto: bool = False, parent=None):
        super().__init__(parent)
        self.scenes = scenes
        self.directory = directory
        self.is_auto = is_auto

    def run(self):
        """生成压缩包并写入目标目录"""
        bundle = build_export_bundle(self.scenes)
        try:
            target = write_export(self.directory, bundle)
        except ExportError as e:
            self.export_failed.emit(str(e))
            return
        self.export_finished.emit(str(target), bundle.missing)


class LinkCheckWorker(QThread):
    """图片链接检查线程"""
    links_checked = Signal(dict)  # 场景 ID -> 是否断链

    def __init__(self, scenes: List[Scene], parent=None):
        super().__init__(parent)
        self.scenes = scenes

    def run(self):
        self.links_checked.emit(check_links(self.scenes))
