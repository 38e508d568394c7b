# -*- coding: utf-8 -*-
"""素材库功能混入类"""

import logging
from typing import Any, List, Optional

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QMessageBox

from storyboard_manager.core.store import SceneStore
from storyboard_manager.utils.errors import SceneNotFoundError
from storyboard_manager.utils.models import AppSettings, Scene
from ..dialogs import LibraryDialog

logger = logging.getLogger(__name__)


class LibraryMixin:
    """素材库浏览和图片关联"""

    # 需要在主类中定义的属性
    store: SceneStore
    settings: AppSettings
    scenes: List[Scene]
    selected_scene_id: Optional[str]
    app_settings: QSettings
    statusbar: Any

    def _check_library_roots(self) -> bool:
        if self.settings.library_roots:
            return True
        QMessageBox.information(
            self, "Kho Footage",
            "Chưa có thư mục kho nào. Hãy thêm thư mục trong Cài đặt."
        )
        self.show_settings()
        return bool(self.settings.library_roots)

    def _open_library(self, scene_id: Optional[str], add_mode: bool):
        if not self._check_library_roots():
            return

        target_label = ""
        if scene_id:
            scene = next((s for s in self.scenes if s.id == scene_id), None)
            target_label = f"Cảnh {scene.code}" if scene else ""

        dialog = LibraryDialog(
            self.settings.library_roots,
            target_scene_id=scene_id,
            target_label=target_label,
            add_mode=add_mode,
            initial_folder=self.app_settings.value("last_library_folder", None, type=str),
            parent=self,
        )
        dialog.file_attached.connect(self._on_library_file_attached)
        dialog.exec()

        # 记住最后浏览的目录
        if dialog.selected_folder:
            self.app_settings.setValue("last_library_folder", dialog.selected_folder)

    def open_library_for_scene(self, scene_id: Optional[str] = None):
        """打开素材库并把选中的图片关联到场景"""
        self._open_library(scene_id or self.selected_scene_id, add_mode=False)

    def open_library_for_add(self):
        """打开素材库，只用于往目录里添加图片"""
        self._open_library(None, add_mode=True)

    def _on_library_file_attached(self, scene_id: str, file_path: str):
        try:
            updated = self.store.assign_image_path(scene_id, file_path)
        except SceneNotFoundError as e:
            self._report_missing_scene(e)
            return
        except OSError as e:
            self._report_store_error(e)
            return
        logger.info("场景 %s 已关联图片 %s", updated.code, file_path)
        self._apply_updated_scene(updated)
        self.statusbar.showMessage(f"Đã gán ảnh cho cảnh {updated.code}", 3000)
        self.trigger_autosave()
