# -*- coding: utf-8 -*-
"""
自定义控件模块
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, QBuffer, QByteArray, QIODevice, QSize, QRect, Signal
from PySide6.QtGui import QColor, QFont, QIcon, QPainter, QPixmap
from PySide6.QtWidgets import (
    QAbstractItemView, QApplication, QLabel, QLineEdit, QListWidget, QListWidgetItem,
    QStyle, QStyledItemDelegate, QStyleOptionViewItem
)

from storyboard_manager.utils.constants import IMAGE_EXTENSIONS, FileType
from storyboard_manager.utils.models import LibraryFile
from storyboard_manager.utils.utils import format_file_size

THUMBNAIL_SIZE = 96


class SearchLineEdit(QLineEdit):
    """支持Esc键清除的搜索框"""

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape:
            self.clear()
        else:
            super().keyPressEvent(event)


class ImageDropLabel(QLabel):
    """场景图片预览，支持拖放图片文件"""

    file_dropped = Signal(str, str)  # 场景ID, 文件路径
    clicked = Signal(str)  # 场景ID

    def __init__(self, scene_id: str, parent=None):
        super().__init__(parent)
        self.scene_id = scene_id
        self.setObjectName("imageDrop")
        self.setAcceptDrops(True)
        self.setAlignment(Qt.AlignCenter)
        self.setFixedSize(THUMBNAIL_SIZE * 16 // 9, THUMBNAIL_SIZE)
        self.setCursor(Qt.PointingHandCursor)

    def set_image(self, path: Optional[str], broken: bool = False):
        """显示图片；断链时显示提示"""
        self.setProperty("broken", "true" if broken else "false")
        self.style().unpolish(self)
        self.style().polish(self)

        if not path:
            self.setPixmap(QPixmap())
            self.setText("Kéo thả ảnh")
            self.setToolTip("")
            return

        self.setToolTip(path)
        if broken:
            self.setPixmap(QPixmap())
            self.setText("⚠ Mất liên kết")
            return

        pixmap = QPixmap(path)
        if pixmap.isNull():
            self.setText(Path(path).name)
            return
        self.setPixmap(pixmap.scaled(self.size(), Qt.KeepAspectRatio, Qt.SmoothTransformation))

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.clicked.emit(self.scene_id)
        super().mousePressEvent(event)

    def dragEnterEvent(self, event):
        if self._first_image_path(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        path = self._first_image_path(event.mimeData())
        if path:
            self.file_dropped.emit(self.scene_id, path)
            event.acceptProposedAction()

    @staticmethod
    def _first_image_path(mime_data) -> Optional[str]:
        if not mime_data.hasUrls():
            return None
        for url in mime_data.urls():
            path = url.toLocalFile()
            if path and Path(path).suffix.lower() in IMAGE_EXTENSIONS:
                return path
        return None


class LibraryFileDelegate(QStyledItemDelegate):
    """素材库文件项委托，绘制缩略图、名称、大小和日期"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.icon_size = 64
        self.padding = 8
        self.name_font = QFont("Segoe UI", 11, QFont.Bold)
        self.meta_font = QFont("Segoe UI", 9)

    def paint(self, painter: QPainter, option: QStyleOptionViewItem, index):
        painter.save()

        file_info = index.data(Qt.UserRole + 1)
        if not file_info:
            super().paint(painter, option, index)
            painter.restore()
            return

        rect = option.rect

        # 背景
        if option.state & QStyle.State_Selected:
            painter.fillRect(rect, QColor("#4F46E5"))
        elif option.state & QStyle.State_MouseOver:
            painter.fillRect(rect, QColor("#1E1B4B"))

        # 图标
        icon = index.data(Qt.DecorationRole)
        if icon:
            icon_rect = QRect(rect.left() + self.padding, rect.top() + self.padding,
                              self.icon_size, self.icon_size)
            icon.paint(painter, icon_rect)

        text_left = rect.left() + self.icon_size + self.padding * 2
        text_width = rect.width() - self.icon_size - self.padding * 3

        # 文件名
        painter.setFont(self.name_font)
        painter.setPen(QColor("#FFFFFF"))
        painter.drawText(QRect(text_left, rect.top() + self.padding, text_width, 25),
                         Qt.AlignLeft | Qt.AlignVCenter, file_info.name)

        # 大小和日期
        painter.setFont(self.meta_font)
        painter.setPen(QColor("#E0E7FF") if option.state & QStyle.State_Selected else QColor("#94A3B8"))
        modified = datetime.fromtimestamp(file_info.mtime / 1000).strftime("%d/%m/%Y")
        meta = f"{format_file_size(file_info.size)} · {modified}"
        painter.drawText(QRect(text_left, rect.top() + self.padding + 30, text_width, 20),
                         Qt.AlignLeft | Qt.AlignVCenter, meta)

        painter.restore()

    def sizeHint(self, option: QStyleOptionViewItem, index) -> QSize:
        return QSize(320, self.icon_size + self.padding * 2)


class LibraryFileListWidget(QListWidget):
    """素材库文件列表"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setItemDelegate(LibraryFileDelegate(self))
        self.setSpacing(2)
        self.setSelectionMode(QAbstractItemView.SingleSelection)
        self.setMouseTracking(True)

    def set_files(self, files):
        """显示文件列表"""
        self.clear()
        for file_info in files:
            self.add_file_item(file_info)

    def add_file_item(self, file_info: LibraryFile):
        item = QListWidgetItem()
        item.setData(Qt.UserRole, file_info.full_path)
        item.setData(Qt.UserRole + 1, file_info)
        item.setIcon(self._get_file_icon(file_info))
        self.addItem(item)

    def selected_file(self) -> Optional[LibraryFile]:
        item = self.currentItem()
        return item.data(Qt.UserRole + 1) if item else None

    def _get_file_icon(self, file_info: LibraryFile) -> QIcon:
        if file_info.type == FileType.IMAGE:
            pixmap = QPixmap(file_info.full_path)
            if not pixmap.isNull():
                return QIcon(pixmap.scaled(64, 64, Qt.KeepAspectRatio, Qt.SmoothTransformation))
        if file_info.type == FileType.VIDEO:
            return self.style().standardIcon(QStyle.SP_MediaPlay)
        return self.style().standardIcon(QStyle.SP_FileIcon)


def clipboard_image_bytes():
    """读取剪贴板中的图片，返回 (PNG 字节, 扩展名)；没有图片时返回 None"""
    clipboard = QApplication.clipboard()
    mime_data = clipboard.mimeData()
    if mime_data is None or not mime_data.hasImage():
        return None
    image = clipboard.image()
    if image.isNull():
        return None

    data = QByteArray()
    buffer = QBuffer(data)
    buffer.open(QIODevice.WriteOnly)
    image.save(buffer, "PNG")
    buffer.close()
    return bytes(data), "png"
