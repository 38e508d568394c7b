# -*- coding: utf-8 -*-
"""
对话框组件模块
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QCheckBox, QDialog, QDialogButtonBox, QFileDialog, QGroupBox, QHBoxLayout,
    QLabel, QLineEdit, QListWidget, QMessageBox, QPlainTextEdit, QPushButton,
    QSplitter, QTreeWidget, QTreeWidgetItem, QVBoxLayout, QWidget
)

from storyboard_manager.core.importer import (
    build_markdown, convert_import_rows, html_to_markdown, parse_rows
)
from storyboard_manager.core.library import (
    add_library_root, copy_file_to_folder, list_directory, remove_library_root,
    save_clipboard_image_to_folder, search_in_directory
)
from storyboard_manager.utils.models import AppSettings, LibraryFile
from storyboard_manager.utils.qss import QSS_THEME
from storyboard_manager.utils.utils import open_in_file_manager
from .widgets import LibraryFileListWidget, SearchLineEdit, clipboard_image_bytes

logger = logging.getLogger(__name__)

LIBRARY_HINT = "Mẹo: Chọn thư mục theo chủ đề (dao, súng, đường phố…) rồi gán ảnh vào cảnh."


class ImportTextEdit(QPlainTextEdit):
    """导入输入框，粘贴 HTML 时转换为 Markdown"""

    html_pasted = Signal(str)

    def insertFromMimeData(self, source):
        if source.hasHtml():
            self.html_pasted.emit(html_to_markdown(source.html()))
        else:
            self.html_pasted.emit("")
        super().insertFromMimeData(source)


class ImportDialog(QDialog):
    """场景导入对话框"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.import_markdown = ""
        self._skip_next_change = False
        self.setWindowTitle("Nhập dữ liệu")
        self.setModal(True)
        self.resize(900, 600)
        self.setStyleSheet(QSS_THEME)
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)

        layout.addWidget(QLabel("Dán bảng (Markdown hoặc phân cách bằng Tab): Mã | Tiếng Anh | Tiếng Việt | Từ khóa"))
        layout.addWidget(QLabel("Lưu ý: nhập dữ liệu sẽ thay thế toàn bộ cảnh hiện có."))

        splitter = QSplitter(Qt.Horizontal)

        self.txt_input = ImportTextEdit()
        self.txt_input.setPlaceholderText("| 1 | Hello | Xin chào | knife |")
        self.txt_input.html_pasted.connect(self._on_html_pasted)
        self.txt_input.textChanged.connect(self._on_input_changed)
        splitter.addWidget(self.txt_input)

        self.txt_preview = QPlainTextEdit()
        self.txt_preview.setReadOnly(True)
        splitter.addWidget(self.txt_preview)

        layout.addWidget(splitter)

        self.lbl_count = QLabel("0 cảnh hợp lệ")
        layout.addWidget(self.lbl_count)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.button(QDialogButtonBox.Ok).setText("Áp dụng")
        buttons.button(QDialogButtonBox.Cancel).setText("Hủy")
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _on_html_pasted(self, markdown: str):
        """粘贴富文本时使用转换后的 Markdown"""
        self._skip_next_change = bool(markdown)
        if markdown:
            self.import_markdown = markdown
            self.txt_preview.setPlainText(markdown)
            self._update_count()

    def _on_input_changed(self):
        # 粘贴 HTML 后紧接着的一次文本变化保留转换结果
        if self._skip_next_change:
            self._skip_next_change = False
            return
        rows = parse_rows(self.txt_input.toPlainText())
        self.import_markdown = build_markdown(rows)
        self.txt_preview.setPlainText(self.import_markdown)
        self._update_count()

    def _update_count(self):
        count = len(convert_import_rows(parse_rows(self.import_text())))
        self.lbl_count.setText(f"{count} cảnh hợp lệ")

    def import_text(self) -> str:
        """用于导入的文本（优先使用转换后的 Markdown）"""
        return self.import_markdown or self.txt_input.toPlainText()


class SettingsDialog(QDialog):
    """设置对话框"""

    def __init__(self, settings: AppSettings, parent=None):
        super().__init__(parent)
        self.settings = settings
        self.setWindowTitle("Cài đặt")
        self.setModal(True)
        self.resize(600, 420)
        self.setStyleSheet(QSS_THEME)
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)

        # 导出设置
        export_group = QGroupBox("Xuất bản")
        export_layout = QVBoxLayout(export_group)

        self.chk_autosave = QCheckBox("Tự động lưu (10 giây sau lần chỉnh sửa cuối)")
        self.chk_autosave.setChecked(self.settings.autosave_enabled)
        export_layout.addWidget(self.chk_autosave)

        dir_layout = QHBoxLayout()
        self.txt_save_dir = QLineEdit(self.settings.save_directory)
        self.txt_save_dir.setPlaceholderText("Thư mục lưu STORYBOARD_EXPORT.zip")
        btn_browse = QPushButton("Chọn...")
        btn_browse.clicked.connect(self._browse_save_dir)
        dir_layout.addWidget(self.txt_save_dir)
        dir_layout.addWidget(btn_browse)
        export_layout.addLayout(dir_layout)

        layout.addWidget(export_group)

        # 素材库根目录
        library_group = QGroupBox("Kho Footage")
        library_layout = QVBoxLayout(library_group)

        self.list_roots = QListWidget()
        self.list_roots.addItems(self.settings.library_roots)
        library_layout.addWidget(self.list_roots)

        root_layout = QHBoxLayout()
        self.txt_root = QLineEdit()
        self.txt_root.setPlaceholderText("Đường dẫn thư mục")
        btn_pick_root = QPushButton("Chọn...")
        btn_pick_root.clicked.connect(self._pick_root)
        btn_add_root = QPushButton("Thêm")
        btn_add_root.clicked.connect(self._add_root)
        btn_remove_root = QPushButton("Xóa")
        btn_remove_root.clicked.connect(self._remove_root)
        root_layout.addWidget(self.txt_root)
        root_layout.addWidget(btn_pick_root)
        root_layout.addWidget(btn_add_root)
        root_layout.addWidget(btn_remove_root)
        library_layout.addLayout(root_layout)

        layout.addWidget(library_group)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _browse_save_dir(self):
        folder = QFileDialog.getExistingDirectory(self, "Chọn thư mục lưu", self.txt_save_dir.text())
        if folder:
            self.txt_save_dir.setText(folder)

    def _pick_root(self):
        folder = QFileDialog.getExistingDirectory(self, "Chọn thư mục footage", "")
        if folder:
            self.txt_root.setText(folder)

    def _add_root(self):
        self.settings = add_library_root(self.settings, self.txt_root.text())
        self._reload_roots()
        self.txt_root.clear()

    def _remove_root(self):
        item = self.list_roots.currentItem()
        if item:
            self.settings = remove_library_root(self.settings, item.text())
            self._reload_roots()

    def _reload_roots(self):
        self.list_roots.clear()
        self.list_roots.addItems(self.settings.library_roots)

    def get_settings(self) -> AppSettings:
        """获取修改后的设置"""
        return AppSettings(
            autosave_enabled=self.chk_autosave.isChecked(),
            save_directory=self.txt_save_dir.text().strip(),
            last_saved_at=self.settings.last_saved_at,
            library_roots=list(self.settings.library_roots),
        )


class LibraryDialog(QDialog):
    """
    素材库对话框
    左侧为根目录树（展开时加载子目录），右侧为当前文件夹的文件列表
    """

    file_attached = Signal(str, str)  # 场景ID, 文件路径

    def __init__(self, library_roots: List[str], target_scene_id: Optional[str] = None,
                 target_label: str = "", add_mode: bool = False,
                 initial_folder: Optional[str] = None, parent=None):
        super().__init__(parent)
        self.library_roots = library_roots
        self.target_scene_id = target_scene_id
        self.add_mode = add_mode
        self.selected_folder: Optional[str] = None
        self.folder_items: Dict[str, QTreeWidgetItem] = {}

        title = "Thêm hình ảnh vào kho footage" if add_mode else "Kho Footage"
        if target_label and not add_mode:
            title += f" → {target_label}"
        self.setWindowTitle(title)
        self.resize(1100, 700)
        self.setStyleSheet(QSS_THEME)
        self._setup_ui()
        self._load_roots()

        if initial_folder and initial_folder in self.folder_items:
            self._select_folder(initial_folder)
        elif self.library_roots:
            self._select_folder(self.library_roots[0])

    def _setup_ui(self):
        layout = QVBoxLayout(self)

        lbl_hint = QLabel(LIBRARY_HINT)
        lbl_hint.setStyleSheet("color: #A5B4FC;")
        layout.addWidget(lbl_hint)

        splitter = QSplitter(Qt.Horizontal)

        self.folder_tree = QTreeWidget()
        self.folder_tree.setHeaderLabel("Thư mục")
        self.folder_tree.itemExpanded.connect(self._on_item_expanded)
        self.folder_tree.itemClicked.connect(lambda item: self._select_folder(item.data(0, Qt.UserRole)))
        splitter.addWidget(self.folder_tree)

        right = QWidget()
        right_layout = QVBoxLayout(right)
        right_layout.setContentsMargins(0, 0, 0, 0)

        self.txt_search = SearchLineEdit()
        self.txt_search.setPlaceholderText("Tìm trong thư mục...")
        self.txt_search.textChanged.connect(lambda _: self._refresh_folder())
        right_layout.addWidget(self.txt_search)

        self.file_list = LibraryFileListWidget()
        self.file_list.itemSelectionChanged.connect(self._on_file_selected)
        self.file_list.itemDoubleClicked.connect(lambda _: self._attach_selected())
        right_layout.addWidget(self.file_list)

        self.lbl_selected = QLabel("")
        right_layout.addWidget(self.lbl_selected)

        splitter.addWidget(right)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 3)
        layout.addWidget(splitter)

        # 按钮
        button_layout = QHBoxLayout()

        self.btn_add_file = QPushButton("Thêm ảnh vào thư mục...")
        self.btn_add_file.clicked.connect(self._add_file_to_folder)
        button_layout.addWidget(self.btn_add_file)

        self.btn_paste = QPushButton("Dán ảnh (Ctrl+V)")
        self.btn_paste.clicked.connect(self._paste_into_folder)
        button_layout.addWidget(self.btn_paste)

        self.btn_open_folder = QPushButton("Mở thư mục")
        self.btn_open_folder.clicked.connect(
            lambda: open_in_file_manager(Path(self.selected_folder)) if self.selected_folder else None)
        button_layout.addWidget(self.btn_open_folder)

        button_layout.addStretch()

        self.btn_attach = QPushButton("Gán vào cảnh")
        self.btn_attach.setObjectName("primary")
        self.btn_attach.setEnabled(False)
        self.btn_attach.setVisible(not self.add_mode)
        self.btn_attach.clicked.connect(self._attach_selected)
        button_layout.addWidget(self.btn_attach)

        btn_close = QPushButton("Đóng")
        btn_close.clicked.connect(self.reject)
        button_layout.addWidget(btn_close)

        layout.addLayout(button_layout)

        paste_shortcut = QShortcut(QKeySequence.Paste, self)
        paste_shortcut.activated.connect(self._paste_into_folder)
        self._update_folder_buttons()

    # ==================== 目录树 ====================

    def _load_roots(self):
        self.folder_tree.clear()
        self.folder_items.clear()
        for root in self.library_roots:
            item = self._create_folder_item(root, Path(root).name or root)
            self.folder_tree.addTopLevelItem(item)
            item.setExpanded(True)

    def _create_folder_item(self, full_path: str, name: str) -> QTreeWidgetItem:
        item = QTreeWidgetItem([name])
        item.setData(0, Qt.UserRole, full_path)
        item.setToolTip(0, full_path)
        # 占位子项，展开时再加载
        item.setChildIndicatorPolicy(QTreeWidgetItem.ShowIndicator)
        self.folder_items[full_path] = item
        return item

    def _on_item_expanded(self, item: QTreeWidgetItem):
        folder_path = item.data(0, Qt.UserRole)
        item.takeChildren()
        try:
            listing = list_directory(folder_path)
        except OSError as e:
            logger.warning("无法读取目录 %s: %s", folder_path, e)
            item.setChildIndicatorPolicy(QTreeWidgetItem.DontShowIndicator)
            return

        for folder in listing.folders:
            item.addChild(self._create_folder_item(folder.full_path, folder.name))
        if not listing.folders:
            item.setChildIndicatorPolicy(QTreeWidgetItem.DontShowIndicator)

    def _select_folder(self, folder_path: Optional[str]):
        if not folder_path:
            return
        self.selected_folder = folder_path
        item = self.folder_items.get(folder_path)
        if item:
            self.folder_tree.setCurrentItem(item)
        self._refresh_folder()
        self._update_folder_buttons()

    def _refresh_folder(self):
        """重新读取当前文件夹（每次都访问文件系统）"""
        if not self.selected_folder:
            self.file_list.clear()
            return

        query = self.txt_search.text().strip()
        try:
            if query:
                listing = search_in_directory(self.selected_folder, query)
            else:
                listing = list_directory(self.selected_folder)
        except OSError as e:
            logger.warning("无法读取目录 %s: %s", self.selected_folder, e)
            self.file_list.clear()
            self.lbl_selected.setText(f"Không đọc được thư mục: {e}")
            return

        self.file_list.set_files(listing.files)
        self.lbl_selected.setText(f"{len(listing.files)} tệp")

    def _update_folder_buttons(self):
        has_folder = self.selected_folder is not None
        self.btn_add_file.setEnabled(has_folder)
        self.btn_paste.setEnabled(has_folder)
        self.btn_open_folder.setEnabled(has_folder)

    # ==================== 文件操作 ====================

    def _on_file_selected(self):
        file_info: Optional[LibraryFile] = self.file_list.selected_file()
        if file_info:
            self.lbl_selected.setText(file_info.full_path)
        self.btn_attach.setEnabled(
            bool(file_info and file_info.is_image and self.target_scene_id and not self.add_mode))

    def _attach_selected(self):
        """把选中的图片关联到目标场景"""
        file_info = self.file_list.selected_file()
        if not file_info or not self.target_scene_id or self.add_mode:
            return
        if not file_info.is_image:
            QMessageBox.warning(self, "Lỗi", "Chỉ có thể gán tệp hình ảnh cho cảnh")
            return
        self.file_attached.emit(self.target_scene_id, file_info.full_path)
        self.accept()

    def _add_file_to_folder(self):
        if not self.selected_folder:
            return
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Chọn ảnh", "", "Hình ảnh (*.png *.jpg *.jpeg *.webp *.gif);;Tất cả (*.*)"
        )
        if not file_path:
            return
        try:
            copy_file_to_folder(file_path, self.selected_folder)
        except OSError as e:
            QMessageBox.warning(self, "Lỗi", f"Không sao chép được tệp:\n{e}")
            return
        self._refresh_folder()

    def _paste_into_folder(self):
        if not self.selected_folder:
            return
        clipboard = clipboard_image_bytes()
        if not clipboard:
            return
        data, ext = clipboard
        try:
            save_clipboard_image_to_folder(self.selected_folder, data, ext)
        except OSError as e:
            QMessageBox.warning(self, "Lỗi", f"Không lưu được ảnh:\n{e}")
            return
        self._refresh_folder()
