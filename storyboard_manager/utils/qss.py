# -*- coding: utf-8 -*-
"""
深色主题样式（slate / indigo 配色）
"""

# 断链标记颜色
BROKEN_LINK_COLOR = "#F87171"
OK_LINK_COLOR = "#34D399"
ACCENT_COLOR = "#6366F1"

QSS_THEME = """
/* 全局样式 */
* {
    color: #E2E8F0;
    font-family: "Segoe UI", "Be Vietnam Pro", Arial;
    font-size: 13px;
}

QMainWindow, QWidget, QDialog {
    background-color: #020617;
}

/* 按钮样式 */
QPushButton {
    background-color: #0F172A;
    border: 1px solid #4F46E5;
    border-radius: 6px;
    padding: 5px 14px;
    min-height: 24px;
    color: #E0E7FF;
}

QPushButton:hover {
    background-color: #1E1B4B;
}

QPushButton:pressed {
    background-color: #312E81;
}

QPushButton:disabled {
    color: #475569;
    border-color: #1E293B;
}

QPushButton#primary {
    background-color: #6366F1;
    border-color: #6366F1;
    color: #FFFFFF;
    font-weight: bold;
}

QPushButton#primary:hover {
    background-color: #818CF8;
}

/* 输入框样式 */
QLineEdit, QComboBox, QPlainTextEdit, QTextEdit {
    background-color: #0F172A;
    border: 1px solid #312E81;
    border-radius: 6px;
    padding: 4px 6px;
}

QLineEdit:focus, QPlainTextEdit:focus, QTextEdit:focus {
    border-color: #6366F1;
}

/* 分组框样式 */
QGroupBox {
    border: 1px solid #1E293B;
    border-radius: 6px;
    margin-top: 8px;
    padding-top: 8px;
}

QGroupBox::title {
    subcontrol-origin: margin;
    left: 8px;
    padding: 0 4px;
    color: #A5B4FC;
}

/* 表格样式 */
QTableWidget {
    background-color: #0F172A;
    alternate-background-color: #111C33;
    border: 1px solid #1E293B;
    gridline-color: #1E293B;
    outline: none;
}

QTableWidget::item:selected {
    background-color: #312E81;
}

QHeaderView::section {
    background: #1E293B;
    border: none;
    padding: 4px 8px;
    font-weight: bold;
    color: #A5B4FC;
}

/* 列表和树控件样式 */
QListWidget, QTreeWidget {
    background-color: #0F172A;
    border: 1px solid #1E293B;
    border-radius: 6px;
    outline: none;
}

QListWidget::item, QTreeWidget::item {
    padding: 4px;
}

QListWidget::item:hover, QTreeWidget::item:hover {
    background-color: #1E1B4B;
}

QListWidget::item:selected, QTreeWidget::item:selected {
    background-color: #4F46E5;
}

/* 菜单样式 */
QMenuBar {
    background-color: #0F172A;
    border-bottom: 1px solid #1E293B;
}

QMenuBar::item:selected, QMenu::item:selected {
    background-color: #4F46E5;
}

QMenu {
    background-color: #0F172A;
    border: 1px solid #1E293B;
}

/* 状态栏样式 */
QStatusBar {
    background-color: #0F172A;
    border-top: 1px solid #1E293B;
    color: #A5B4FC;
}

/* 复选框样式 */
QCheckBox {
    spacing: 8px;
}

QCheckBox::indicator {
    width: 18px;
    height: 18px;
    border: 1px solid #4F46E5;
    border-radius: 4px;
    background-color: #0F172A;
}

QCheckBox::indicator:checked {
    background-color: #6366F1;
}

/* 分割器样式 */
QSplitter::handle {
    background-color: #1E293B;
}

QSplitter::handle:hover {
    background-color: #6366F1;
}

/* 滚动条样式 */
QScrollBar:vertical {
    background-color: #0F172A;
    width: 12px;
    border-radius: 6px;
}

QScrollBar::handle:vertical {
    background-color: #312E81;
    min-height: 20px;
    border-radius: 6px;
}

QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {
    height: 0px;
}

QScrollBar:horizontal {
    background-color: #0F172A;
    height: 12px;
    border-radius: 6px;
}

QScrollBar::handle:horizontal {
    background-color: #312E81;
    min-width: 20px;
    border-radius: 6px;
}

QScrollBar::add-line:horizontal, QScrollBar::sub-line:horizontal {
    width: 0px;
}

/* 图片拖放区域 */
QLabel#imageDrop {
    border: 1px dashed #4F46E5;
    border-radius: 6px;
    color: #64748B;
}

QLabel#imageDrop[broken="true"] {
    border: 2px solid #F87171;
}
"""
