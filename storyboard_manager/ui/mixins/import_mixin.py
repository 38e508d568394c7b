# -*- coding: utf-8 -*-
"""场景导入功能混入类"""

import logging
from typing import Any, List

from PySide6.QtWidgets import QDialog, QMessageBox

from storyboard_manager.core.importer import import_text
from storyboard_manager.core.store import SceneStore
from storyboard_manager.utils.models import Scene
from ..dialogs import ImportDialog

logger = logging.getLogger(__name__)


class ImportMixin:
    """场景导入相关功能"""

    # 需要在主类中定义的属性
    store: SceneStore
    scenes: List[Scene]
    statusbar: Any

    def show_import_dialog(self):
        """打开导入对话框，确认后替换全部场景"""
        dialog = ImportDialog(self)
        if dialog.exec() != QDialog.Accepted:
            return

        scenes = import_text(dialog.import_text())
        if not scenes:
            QMessageBox.warning(self, "Nhập dữ liệu", "Không tìm thấy cảnh hợp lệ nào trong dữ liệu đã dán.")
            return

        if self.scenes:
            reply = QMessageBox.question(
                self, "Xác nhận",
                f"Thay thế {len(self.scenes)} cảnh hiện có bằng {len(scenes)} cảnh mới?",
                QMessageBox.Yes | QMessageBox.No, QMessageBox.No
            )
            if reply != QMessageBox.Yes:
                return

        try:
            saved = self.store.replace_scenes(scenes)
        except OSError as e:
            logger.error("保存导入的场景失败: %s", e)
            QMessageBox.critical(self, "Lỗi", f"Không lưu được dữ liệu:\n{e}")
            return

        logger.info("已导入 %d 个场景", len(saved))
        self._set_scenes(saved)
        self.statusbar.showMessage(f"Đã nhập {len(saved)} cảnh", 5000)
        self.trigger_autosave()
