# -*- coding: utf-8 -*-
"""场景列表功能混入类"""

import logging
from functools import partial
from typing import Any, Dict, List, Optional, Set

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import (
    QFileDialog, QHBoxLayout, QLabel, QMessageBox, QPushButton, QTableWidget,
    QTableWidgetItem, QVBoxLayout, QWidget
)

from storyboard_manager.core.store import SceneStore
from storyboard_manager.core.workers import LinkCheckWorker
from storyboard_manager.utils.errors import SceneNotFoundError
from storyboard_manager.utils.models import Scene
from storyboard_manager.utils.qss import BROKEN_LINK_COLOR, OK_LINK_COLOR
from storyboard_manager.utils.utils import get_image_extension, read_file_bytes
from ..widgets import ImageDropLabel, clipboard_image_bytes

logger = logging.getLogger(__name__)

# 表格列
COL_CODE, COL_EN, COL_VI, COL_KEYWORDS, COL_IMAGE, COL_CHARACTER, COL_STATUS = range(7)

SCENE_HEADERS = ["STT", "TIẾNG ANH", "TIẾNG VIỆT", "TỪ KHÓA", "HÌNH ẢNH", "ẢNH NHÂN VẬT", "TRẠNG THÁI"]

# 可编辑的文本列 -> 场景字段
EDITABLE_COLUMNS = {COL_EN: "en_text", COL_VI: "vi_text", COL_KEYWORDS: "keywords"}


class SceneMixin:
    """场景表格、编辑和图片关联相关功能"""

    # 需要在主类中定义的属性
    store: SceneStore
    scenes: List[Scene]
    missing_links: Dict[str, bool]
    selected_scene_id: Optional[str]
    scene_table: QTableWidget
    lbl_scene_count: QLabel
    txt_search: Any
    statusbar: Any
    _link_worker: Optional[LinkCheckWorker]
    _link_workers: Set[LinkCheckWorker]

    def _create_scene_table(self) -> QTableWidget:
        """创建场景表格"""
        table = QTableWidget()
        table.setColumnCount(len(SCENE_HEADERS))
        table.setHorizontalHeaderLabels(SCENE_HEADERS)
        table.setAlternatingRowColors(True)
        table.setWordWrap(True)
        table.verticalHeader().setVisible(False)
        table.verticalHeader().setDefaultSectionSize(120)
        table.setSelectionBehavior(QTableWidget.SelectRows)
        table.setSelectionMode(QTableWidget.SingleSelection)

        header = table.horizontalHeader()
        header.resizeSection(COL_CODE, 90)
        for col in EDITABLE_COLUMNS:
            header.resizeSection(col, 260)
        header.resizeSection(COL_IMAGE, 200)
        header.setStretchLastSection(True)

        table.cellChanged.connect(self._on_cell_changed)
        table.itemSelectionChanged.connect(self._on_scene_selection_changed)
        return table

    # ==================== 显示 ====================

    def _set_scenes(self, scenes: List[Scene]):
        """替换当前显示的场景列表，并重新检查图片链接"""
        self.scenes = scenes
        self._refresh_scene_table()
        self._check_links()

    def _filtered_scenes(self) -> List[Scene]:
        query = self.txt_search.text().strip() if self.txt_search else ""
        if not query:
            return list(self.scenes)
        return [scene for scene in self.scenes if scene.matches(query)]

    def _refresh_scene_table(self):
        """重建场景表格"""
        table = self.scene_table
        table.blockSignals(True)
        try:
            scenes = self._filtered_scenes()
            table.clearContents()
            table.setRowCount(len(scenes))
            for row, scene in enumerate(scenes):
                self._fill_scene_row(row, scene)
        finally:
            table.blockSignals(False)

        self._update_scene_count()

    def _fill_scene_row(self, row: int, scene: Scene):
        table = self.scene_table

        code_item = QTableWidgetItem(scene.code or str(row + 1))
        code_item.setData(Qt.UserRole, scene.id)
        code_item.setFlags(code_item.flags() & ~Qt.ItemIsEditable)
        code_item.setForeground(QBrush(QColor("#A5B4FC")))
        table.setItem(row, COL_CODE, code_item)

        for col, field_name in EDITABLE_COLUMNS.items():
            table.setItem(row, col, QTableWidgetItem(getattr(scene, field_name)))

        table.setCellWidget(row, COL_IMAGE, self._create_image_cell(scene))

        character_item = QTableWidgetItem("Ảnh nhân vật")
        character_item.setFlags(Qt.ItemIsUserCheckable | Qt.ItemIsEnabled | Qt.ItemIsSelectable)
        character_item.setCheckState(Qt.Checked if scene.character_image else Qt.Unchecked)
        table.setItem(row, COL_CHARACTER, character_item)

        status_item = QTableWidgetItem()
        status_item.setFlags(status_item.flags() & ~Qt.ItemIsEditable)
        table.setItem(row, COL_STATUS, status_item)
        self._update_status_item(status_item, scene)

    def _create_image_cell(self, scene: Scene) -> QWidget:
        """图片单元格：预览 + 从素材库选择 + 断链提示"""
        broken = self.missing_links.get(scene.id, False)

        cell = QWidget()
        layout = QVBoxLayout(cell)
        layout.setContentsMargins(4, 4, 4, 4)

        image_label = ImageDropLabel(scene.id)
        image_label.set_image(scene.primary_image_path, broken)
        image_label.file_dropped.connect(self._on_image_file_dropped)
        image_label.clicked.connect(self.pick_image_for_scene)
        layout.addWidget(image_label)

        button_layout = QHBoxLayout()
        btn_library = QPushButton("Chọn từ kho")
        btn_library.clicked.connect(lambda _checked=False, sid=scene.id: self.open_library_for_scene(sid))
        button_layout.addWidget(btn_library)

        if broken:
            lbl_broken = QLabel("Mất liên kết")
            lbl_broken.setStyleSheet(f"color: {BROKEN_LINK_COLOR};")
            button_layout.addWidget(lbl_broken)
        button_layout.addStretch()
        layout.addLayout(button_layout)

        return cell

    def _update_status_item(self, item: QTableWidgetItem, scene: Scene):
        ready = bool(scene.primary_image_path) and not self.missing_links.get(scene.id, False)
        item.setText("SẴN SÀNG" if ready else "ĐANG CHỜ")
        item.setForeground(QBrush(QColor(OK_LINK_COLOR if ready else "#FBBF24")))

    def _update_scene_count(self):
        broken = sum(1 for value in self.missing_links.values() if value)
        message = f"{len(self.scenes)} cảnh"
        if broken:
            message += f" · {broken} mất liên kết"
        self.lbl_scene_count.setText(message)

    def _on_search_changed(self, _text: str):
        self._refresh_scene_table()

    def _on_scene_selection_changed(self):
        row = self.scene_table.currentRow()
        item = self.scene_table.item(row, COL_CODE) if row >= 0 else None
        self.selected_scene_id = item.data(Qt.UserRole) if item else None

    def _row_scene_id(self, row: int) -> Optional[str]:
        item = self.scene_table.item(row, COL_CODE)
        return item.data(Qt.UserRole) if item else None

    # ==================== 链接检查 ====================

    def _check_links(self):
        """在后台线程中重新检查所有场景的图片链接"""
        if not self.scenes:
            self._link_worker = None
            self._on_links_checked({})
            return

        worker = LinkCheckWorker(list(self.scenes), self)
        worker.links_checked.connect(partial(self._on_links_checked_from, worker))
        worker.finished.connect(partial(self._on_link_worker_finished, worker))
        self._link_worker = worker
        self._link_workers.add(worker)
        worker.start()

    def _on_links_checked_from(self, worker: LinkCheckWorker, result: dict):
        # 只采用最近一次检查的结果
        if worker is self._link_worker:
            self._on_links_checked(result)

    def _on_link_worker_finished(self, worker: LinkCheckWorker):
        self._link_workers.discard(worker)
        worker.deleteLater()

    def _on_links_checked(self, result: dict):
        self.missing_links = result
        self._refresh_scene_table()

    # ==================== 编辑 ====================

    def _on_cell_changed(self, row: int, column: int):
        scene_id = self._row_scene_id(row)
        if not scene_id:
            return

        if column in EDITABLE_COLUMNS:
            value = self.scene_table.item(row, column).text()
            self._update_scene_field(scene_id, **{EDITABLE_COLUMNS[column]: value})
        elif column == COL_CHARACTER:
            checked = self.scene_table.item(row, column).checkState() == Qt.Checked
            self.toggle_character(scene_id, checked)

    def _update_scene_field(self, scene_id: str, **fields):
        try:
            updated = self.store.update_scene_fields(scene_id, **fields)
        except SceneNotFoundError as e:
            self._report_missing_scene(e)
            return
        except OSError as e:
            self._report_store_error(e)
            return
        self._apply_updated_scene(updated, refresh_table=False)
        self.trigger_autosave()

    def toggle_character(self, scene_id: str, value: bool):
        """切换角色图标记"""
        try:
            updated = self.store.toggle_character(scene_id, value)
        except SceneNotFoundError as e:
            self._report_missing_scene(e)
            return
        except OSError as e:
            self._report_store_error(e)
            return
        self._apply_updated_scene(updated, refresh_table=False)
        self.trigger_autosave()

    def _apply_updated_scene(self, scene: Scene, refresh_table: bool = True):
        """
        更新单个场景并重新检查图片链接

        单元格内的编辑已经显示在表格中，此时传入 refresh_table=False，
        表格在链接检查完成后再重建。
        """
        self.scenes = [scene if item.id == scene.id else item for item in self.scenes]
        if refresh_table:
            self._refresh_scene_table()
        self._check_links()

    def _reload_scenes_later(self):
        # cellChanged 处理中不能重建表格
        QTimer.singleShot(0, self, lambda: self._set_scenes(self.store.read_scenes()))

    def _report_missing_scene(self, error: SceneNotFoundError):
        logger.error("%s", error)
        self.statusbar.showMessage(f"Lỗi: không tìm thấy cảnh {error.scene_id}", 5000)
        QMessageBox.critical(self, "Lỗi", f"Không tìm thấy cảnh cần cập nhật.\n{error.scene_id}")
        self._reload_scenes_later()

    def _report_store_error(self, error: OSError):
        """数据文件写入失败：提示并恢复表格为已保存的内容"""
        logger.error("保存数据失败: %s", error)
        self.statusbar.showMessage(f"Lỗi lưu dữ liệu: {error}", 5000)
        QMessageBox.critical(self, "Lỗi", f"Không lưu được dữ liệu:\n{error}")
        self._reload_scenes_later()

    # ==================== 图片关联 ====================

    def pick_image_for_scene(self, scene_id: str):
        """选择图片文件并关联到场景"""
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Chọn ảnh", "", "Hình ảnh (*.png *.jpg *.jpeg *.webp *.gif)"
        )
        if file_path:
            self._on_image_file_dropped(scene_id, file_path)

    def _on_image_file_dropped(self, scene_id: str, file_path: str):
        try:
            data = read_file_bytes(file_path)
        except OSError as e:
            QMessageBox.warning(self, "Lỗi", f"Không đọc được tệp:\n{e}")
            return
        self._attach_image_bytes(scene_id, data, get_image_extension("", file_path))

    def paste_image_to_selected(self):
        """把剪贴板中的图片粘贴到当前选中的场景"""
        if not self.selected_scene_id:
            return
        clipboard = clipboard_image_bytes()
        if not clipboard:
            return
        data, ext = clipboard
        self._attach_image_bytes(self.selected_scene_id, data, ext)

    def _attach_image_bytes(self, scene_id: str, data: bytes, ext: str):
        try:
            updated = self.store.attach_scene_image(scene_id, data, ext)
        except SceneNotFoundError as e:
            self._report_missing_scene(e)
            return
        except OSError as e:
            self._report_store_error(e)
            return
        self._apply_updated_scene(updated)
        self.trigger_autosave()
