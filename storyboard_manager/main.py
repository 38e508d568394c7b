# -*- coding: utf-8 -*-
"""
Storyboard Manager - 分镜管理工具
主程序入口
"""

import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication, QMessageBox

from storyboard_manager.core.store import SceneStore, default_data_path
from storyboard_manager.utils.constants import APPLICATION_NAME, ORGANIZATION_NAME
from storyboard_manager.utils.errors import StoreFormatError

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Storyboard Manager")
    parser.add_argument("--data", type=Path, default=None, help="数据文件路径")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    # Qt 自己的参数留给 QApplication
    args, _unknown = parser.parse_known_args(argv)
    return args


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def load_store(data_path: Path) -> SceneStore:
    """
    加载数据文件，文件无效时询问是否以空数据重新开始

    Raises:
        StoreFormatError: 用户拒绝重置
    """
    store = SceneStore(data_path)
    try:
        return store.load()
    except StoreFormatError as e:
        logger.error("%s", e)
        reply = QMessageBox.question(
            None, "Dữ liệu không hợp lệ",
            f"Không đọc được tệp dữ liệu:\n{data_path}\n\n{e}\n\n"
            "Sao lưu tệp hiện tại và bắt đầu với dữ liệu trống?",
            QMessageBox.Yes | QMessageBox.No, QMessageBox.No
        )
        if reply != QMessageBox.Yes:
            raise
        store.reset()
        return store


def main(argv=None):
    """主程序入口"""
    args = parse_args(argv)
    setup_logging(args.verbose)

    app = QApplication(sys.argv)
    app.setApplicationName(APPLICATION_NAME)
    app.setOrganizationName(ORGANIZATION_NAME)

    # 设置应用图标（可选）
    icon_path = Path("_imgs/app_icon.png")
    if icon_path.exists():
        app.setWindowIcon(QIcon(str(icon_path)))

    data_path = args.data or default_data_path()
    try:
        store = load_store(data_path)
    except StoreFormatError:
        return 1

    # 导入放在 QApplication 创建之后
    from storyboard_manager.ui.main_window import StoryboardManager

    window = StoryboardManager(store)
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
