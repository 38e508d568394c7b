# -*- coding: utf-8 -*-
"""
主窗口模块
"""

import logging
from typing import Dict, List, Optional, Set

from PySide6.QtCore import QSettings
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import QHBoxLayout, QLabel, QMainWindow, QPushButton, QVBoxLayout, QWidget

from storyboard_manager import __version__
from storyboard_manager.core.store import SceneStore
from storyboard_manager.core.workers import ExportWorker, LinkCheckWorker
from storyboard_manager.utils.constants import APPLICATION_NAME, ORGANIZATION_NAME
from storyboard_manager.utils.models import ExportStatus, Scene
from storyboard_manager.utils.qss import QSS_THEME
from .mixins import ExportMixin, ImportMixin, LibraryMixin, MenuMixin, SceneMixin
from .widgets import SearchLineEdit

logger = logging.getLogger(__name__)


class StoryboardManager(QMainWindow, SceneMixin, ImportMixin, LibraryMixin, ExportMixin, MenuMixin):
    """分镜管理器主窗口"""

    def __init__(self, store: SceneStore):
        super().__init__()

        self.setWindowTitle(f"Storyboard Manager v{__version__}")
        self.resize(1400, 800)

        # 初始化
        self.store = store
        self.settings = store.read_settings()
        self.app_settings = QSettings(ORGANIZATION_NAME, APPLICATION_NAME)

        # 状态变量
        self.scenes: List[Scene] = []
        self.missing_links: Dict[str, bool] = {}
        self.selected_scene_id: Optional[str] = None
        self.export_status = ExportStatus()
        self.export_warnings: List[str] = []
        self._export_worker: Optional[ExportWorker] = None
        self._link_worker: Optional[LinkCheckWorker] = None
        self._link_workers: Set[LinkCheckWorker] = set()

        # 设置UI
        self._setup_ui()
        self._setup_menubar()
        self._setup_statusbar()
        self._setup_autosave()

        # 应用样式
        self.setStyleSheet(QSS_THEME)

        self._load_app_settings()
        self._set_scenes(self.store.read_scenes())

    def _setup_ui(self):
        """设置主界面"""
        central = QWidget()
        self.setCentralWidget(central)

        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(8, 8, 8, 0)

        main_layout.addLayout(self._create_toolbar())

        self.scene_table = self._create_scene_table()
        main_layout.addWidget(self.scene_table)

        paste_shortcut = QShortcut(QKeySequence.Paste, self.scene_table)
        paste_shortcut.activated.connect(self.paste_image_to_selected)

    def _create_toolbar(self) -> QHBoxLayout:
        layout = QHBoxLayout()

        self.txt_search = SearchLineEdit()
        self.txt_search.setPlaceholderText("Tìm theo mã, nội dung hoặc từ khóa... (Esc để xóa)")
        self.txt_search.setClearButtonEnabled(True)
        self.txt_search.textChanged.connect(self._on_search_changed)
        layout.addWidget(self.txt_search, 2)

        self.lbl_scene_count = QLabel("0 cảnh")
        layout.addWidget(self.lbl_scene_count)

        buttons = [
            ("Nhập dữ liệu", self.show_import_dialog),
            ("Kho Footage", self.open_library_for_scene),
            ("Thêm hình ảnh vào kho footage", self.open_library_for_add),
            ("Cài đặt", self.show_settings),
        ]
        for text, handler in buttons:
            btn = QPushButton(text)
            btn.clicked.connect(lambda _checked=False, h=handler: h())
            layout.addWidget(btn)

        self.lbl_export_status = QLabel("")
        layout.addWidget(self.lbl_export_status)

        self.btn_export = QPushButton("Xuất bản")
        self.btn_export.setObjectName("primary")
        self.btn_export.clicked.connect(self.export_now)
        layout.addWidget(self.btn_export)

        return layout

    def _focus_search(self):
        """聚焦到搜索框"""
        self.txt_search.setFocus()
        self.txt_search.selectAll()

    # ========================== 软件设置 ========================== #

    def _load_app_settings(self):
        """加载软件设置"""
        geometry = self.app_settings.value("window_geometry")
        if geometry:
            self.restoreGeometry(geometry)

        self.statusbar.showMessage(f"Dữ liệu: {self.store.data_path}")

    def _save_app_settings(self):
        """保存软件设置"""
        self.app_settings.setValue("window_geometry", self.saveGeometry())

    def closeEvent(self, event):
        """窗口关闭事件"""
        if self.autosave.is_pending():
            # 关闭前执行尚未触发的自动保存
            self.autosave.cancel()
            self._on_autosave_fired()
        if self._export_worker is not None:
            self._export_worker.wait()
        for worker in list(self._link_workers):
            worker.wait()
        self._save_app_settings()
        event.accept()
