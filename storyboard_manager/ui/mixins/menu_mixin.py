# -*- coding: utf-8 -*-
"""菜单和状态栏功能混入类"""

from typing import TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMessageBox

from storyboard_manager import __version__
from storyboard_manager.core.store import SceneStore
from storyboard_manager.utils.utils import open_in_file_manager

if TYPE_CHECKING:
    from storyboard_manager.ui.mixins.base import MixinBase
else:
    MixinBase = object


class MenuMixin(MixinBase):
    """菜单和状态栏功能混入类"""

    # 需要在主类中定义的属性
    store: SceneStore
    statusbar: any  # QStatusBar instance

    def _setup_menubar(self):
        """设置菜单栏"""
        menubar = self.menuBar()

        # 文件菜单
        file_menu = menubar.addMenu("Tệp")

        actions = [
            ("📥 Nhập dữ liệu...", "Ctrl+I", self.show_import_dialog),
            ("💾 Xuất bản", "Ctrl+S", self.export_now),
            None,  # 分隔符
            ("📂 Mở thư mục dữ liệu", None, self.open_data_folder),
            ("⚙️ Cài đặt...", "Ctrl+,", self.show_settings),
            None,
            ("❌ Thoát", "Ctrl+Q", self.close)
        ]
        self._add_actions(file_menu, actions)

        # 工具菜单
        tools_menu = menubar.addMenu("Công cụ")

        tool_actions = [
            ("🔍 Tìm cảnh", "Ctrl+F", self._focus_search),
            ("🎞️ Kho Footage", "Ctrl+L", self.open_library_for_scene),
            ("➕ Thêm hình ảnh vào kho footage", None, self.open_library_for_add),
            None,
            ("⚠️ Ảnh thiếu khi xuất bản", None, self.show_export_warnings),
        ]
        self._add_actions(tools_menu, tool_actions)

        # 帮助菜单
        help_menu = menubar.addMenu("Trợ giúp")

        help_actions = [
            ("📚 Hướng dẫn sử dụng", None, self.show_help),
            ("ℹ️ Giới thiệu", None, self.show_about)
        ]
        self._add_actions(help_menu, help_actions)

    def _add_actions(self, menu, actions):
        for action_data in actions:
            if action_data is None:
                menu.addSeparator()
                continue
            text, shortcut, handler = action_data
            action = QAction(text, self)  # type: ignore
            if shortcut:
                action.setShortcut(shortcut)
            # triggered 会传入 checked 参数
            action.triggered.connect(lambda _checked=False, h=handler: h())
            menu.addAction(action)

    def _setup_statusbar(self):
        """设置状态栏"""
        self.statusbar = self.statusBar()  # 自动创建状态栏
        self.statusbar.showMessage("Sẵn sàng")

    def open_data_folder(self):
        """在文件管理器中打开数据目录"""
        open_in_file_manager(self.store.data_path.parent)

    def show_help(self):
        """显示帮助信息"""
        help_text = f"""
Storyboard Manager - Hướng dẫn
========================

Phiên bản: {__version__}

## Nhập dữ liệu
- Dán bảng Markdown hoặc dữ liệu cách nhau bằng Tab: Mã | Tiếng Anh | Tiếng Việt | Từ khóa
- Chỉ những dòng có mã hợp lệ (ví dụ 1, 003.2, 12-1) mới được nhập
- Nhập dữ liệu sẽ thay thế toàn bộ cảnh hiện có

## Hình ảnh
- Kéo thả ảnh vào ô HÌNH ẢNH hoặc bấm vào ô để chọn tệp
- Chọn một cảnh rồi nhấn Ctrl+V để dán ảnh từ clipboard
- "Chọn từ kho" để gán ảnh có sẵn trong Kho Footage
- Ảnh bị di chuyển hoặc xóa sẽ được đánh dấu "Mất liên kết"

## Xuất bản
- Tạo STORYBOARD_EXPORT.zip gồm scenes_images/, character_images/ và mapping.csv
- Bật "Tự động lưu" trong Cài đặt để xuất bản 10 giây sau lần chỉnh sửa cuối

## Phím tắt
- Ctrl+I: Nhập dữ liệu
- Ctrl+S: Xuất bản
- Ctrl+F: Tìm cảnh
- Ctrl+L: Kho Footage
- Ctrl+Q: Thoát
"""

        dialog = QMessageBox(self)  # type: ignore
        dialog.setWindowTitle("Hướng dẫn sử dụng")
        dialog.setText(help_text)
        dialog.setTextFormat(Qt.PlainText)  # type: ignore
        dialog.setStyleSheet("""
            QMessageBox {
                min-width: 600px;
            }
            QLabel {
                font-family: Consolas, Monaco, monospace;
                font-size: 12px;
            }
        """)
        dialog.exec()

    def show_about(self):
        """显示关于对话框"""
        about_text = f"""Storyboard Manager - Công cụ quản lý storyboard

Phiên bản: {__version__}

Quản lý danh sách cảnh song ngữ, gán hình ảnh cho từng cảnh
và xuất bản gói STORYBOARD_EXPORT.zip cho khâu dựng phim."""

        QMessageBox.about(self, "Giới thiệu", about_text)  # type: ignore
