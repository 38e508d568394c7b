# -*- coding: utf-8 -*-
"""导出与自动保存功能混入类"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

from PySide6.QtWidgets import QDialog, QFileDialog, QLabel, QMessageBox

from storyboard_manager.core.autosave import AutosaveScheduler
from storyboard_manager.core.store import SceneStore
from storyboard_manager.core.workers import ExportWorker
from storyboard_manager.utils.constants import ExportState
from storyboard_manager.utils.models import AppSettings, ExportStatus, Scene
from storyboard_manager.utils.qss import BROKEN_LINK_COLOR, OK_LINK_COLOR
from storyboard_manager.utils.utils import now_ms
from ..dialogs import SettingsDialog

logger = logging.getLogger(__name__)

# 缺失图片提示最多显示的条数
MISSING_PREVIEW_COUNT = 5

_STATE_COLORS = {
    ExportState.IDLE: "#94A3B8",
    ExportState.SAVING: "#FBBF24",
    ExportState.SAVED: OK_LINK_COLOR,
    ExportState.ERROR: BROKEN_LINK_COLOR,
}


def _missing_preview(missing: List[str]) -> str:
    preview = "\n".join(missing[:MISSING_PREVIEW_COUNT])
    if len(missing) > MISSING_PREVIEW_COUNT:
        preview += f"\n... (+{len(missing) - MISSING_PREVIEW_COUNT})"
    return preview


class ExportMixin:
    """导出压缩包、自动保存和设置"""

    # 需要在主类中定义的属性
    store: SceneStore
    settings: AppSettings
    scenes: List[Scene]
    autosave: AutosaveScheduler
    export_status: ExportStatus
    export_warnings: List[str]
    lbl_export_status: QLabel
    statusbar: Any
    _export_worker: Optional[ExportWorker]

    def _setup_autosave(self):
        self.autosave = AutosaveScheduler(self._on_autosave_fired, parent=self)
        self.autosave.set_enabled(self.settings.autosave_enabled)

    def trigger_autosave(self):
        """编辑后安排自动保存（未开启时不做任何事）"""
        self.autosave.schedule()

    def _on_autosave_fired(self):
        if not self.settings.save_directory:
            logger.info("未设置保存目录，跳过自动保存")
            self.statusbar.showMessage("Chưa chọn thư mục lưu, bỏ qua tự động lưu", 5000)
            return
        self._start_export(is_auto=True)

    def export_now(self):
        """手动导出"""
        self._start_export(is_auto=False)

    def _resolve_save_directory(self) -> Optional[Path]:
        """返回保存目录；未设置时让用户选择并记住"""
        if self.settings.save_directory:
            return Path(self.settings.save_directory)

        folder = QFileDialog.getExistingDirectory(self, "Chọn thư mục lưu", "")
        if not folder:
            return None
        self.settings.save_directory = folder
        self._save_settings(self.settings)
        return Path(folder)

    def _start_export(self, is_auto: bool):
        if self._export_worker is not None and self._export_worker.isRunning():
            # 正在导出时收到的自动保存请求重新计时
            if is_auto:
                self.trigger_autosave()
            else:
                self.statusbar.showMessage("Đang lưu, vui lòng đợi...", 3000)
            return

        directory = self._resolve_save_directory()
        if directory is None:
            return

        self.autosave.cancel()
        self._set_export_status(ExportState.SAVING, "Đang lưu...")

        worker = ExportWorker(list(self.scenes), directory, is_auto, self)
        worker.export_finished.connect(lambda path, missing: self._on_export_finished(path, missing, is_auto))
        worker.export_failed.connect(self._on_export_failed)
        worker.finished.connect(worker.deleteLater)
        self._export_worker = worker
        worker.start()

    def _on_export_finished(self, path: str, missing: list, is_auto: bool):
        self._export_worker = None
        saved_at = now_ms()
        time_text = datetime.fromtimestamp(saved_at / 1000).strftime("%H:%M:%S")
        self._set_export_status(ExportState.SAVED, f"Đã lưu lúc {time_text}")
        logger.info("已导出: %s", path)

        if not is_auto:
            self.settings.last_saved_at = saved_at
            self._save_settings(self.settings)

        self.export_warnings = list(missing)
        if missing:
            logger.warning("导出时有 %d 张图片缺失", len(missing))
            self.lbl_export_status.setText(f"Đã lưu lúc {time_text} · thiếu {len(missing)} ảnh")
            self.lbl_export_status.setToolTip(_missing_preview(missing))
            if is_auto:
                self.statusbar.showMessage(f"Thiếu {len(missing)} ảnh khi xuất bản", 5000)
            else:
                QMessageBox.warning(self, "Thiếu ảnh",
                                    f"Không tìm thấy {len(missing)} ảnh:\n{_missing_preview(missing)}")

    def show_export_warnings(self):
        """显示最近一次导出时缺失的图片"""
        if not self.export_warnings:
            QMessageBox.information(self, "Ảnh bị thiếu", "Lần xuất bản gần nhất không thiếu ảnh nào.")
            return
        missing = self.export_warnings
        QMessageBox.warning(self, "Ảnh bị thiếu",
                            f"Không tìm thấy {len(missing)} ảnh:\n" + "\n".join(missing))

    def _on_export_failed(self, message: str):
        self._export_worker = None
        logger.error("导出失败: %s", message)
        self._set_export_status(ExportState.ERROR, f"Lỗi lưu: {message}")

    def _set_export_status(self, state: str, message: str):
        self.export_status = ExportStatus(state=state, message=message)
        self.lbl_export_status.setText(message)
        self.lbl_export_status.setToolTip("")
        self.lbl_export_status.setStyleSheet(f"color: {_STATE_COLORS.get(state, '#94A3B8')};")

    # ==================== 设置 ====================

    def _save_settings(self, settings: AppSettings):
        try:
            self.store.save_settings(settings)
        except OSError as e:
            logger.error("保存设置失败: %s", e)
            self.settings = self.store.read_settings()
            self.statusbar.showMessage(f"Lỗi lưu cài đặt: {e}", 5000)
            QMessageBox.critical(self, "Lỗi", f"Không lưu được cài đặt:\n{e}")
            return
        self.settings = self.store.read_settings()
        self.autosave.set_enabled(self.settings.autosave_enabled)

    def show_settings(self):
        """显示设置对话框"""
        dialog = SettingsDialog(self.store.read_settings(), self)
        if dialog.exec() == QDialog.Accepted:
            self._save_settings(dialog.get_settings())
            self.statusbar.showMessage("Đã lưu cài đặt", 3000)
