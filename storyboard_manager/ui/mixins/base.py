# -*- coding: utf-8 -*-
"""Mixin 基类"""

from abc import ABC
from typing import Any, Dict, List, Optional

from PySide6.QtWidgets import QStatusBar

from storyboard_manager.core.store import SceneStore
from storyboard_manager.utils.errors import SceneNotFoundError
from storyboard_manager.utils.models import AppSettings, Scene


class MixinBase(ABC):
    """
    Mixin 基类，定义所有 Mixin 需要的接口。
    这个类仅用于类型检查，实际功能由主窗口类提供。
    """

    # 从 QMainWindow 继承的方法
    def menuBar(self) -> Any:
        """获取菜单栏"""
        raise NotImplementedError

    def statusBar(self) -> QStatusBar:
        """获取状态栏"""
        raise NotImplementedError

    def close(self) -> None:
        """关闭窗口"""
        raise NotImplementedError

    # 需要在主类中定义的属性
    store: SceneStore
    settings: AppSettings
    scenes: List[Scene]
    missing_links: Dict[str, bool]
    selected_scene_id: Optional[str]
    app_settings: Any
    statusbar: QStatusBar

    # 来自各个 Mixin 的方法
    def show_import_dialog(self) -> None:
        """导入场景"""
        raise NotImplementedError

    def open_library_for_scene(self, scene_id: Optional[str] = None) -> None:
        """打开素材库（关联到场景）"""
        raise NotImplementedError

    def open_library_for_add(self) -> None:
        """打开素材库（添加图片）"""
        raise NotImplementedError

    def export_now(self) -> None:
        """手动导出"""
        raise NotImplementedError

    def show_settings(self) -> None:
        """显示设置"""
        raise NotImplementedError

    def show_export_warnings(self) -> None:
        """显示导出时缺失的图片"""
        raise NotImplementedError

    def trigger_autosave(self) -> None:
        """安排自动保存"""
        raise NotImplementedError

    def _set_scenes(self, scenes: List[Scene]) -> None:
        """替换当前显示的场景列表"""
        raise NotImplementedError

    def _apply_updated_scene(self, scene: Scene, refresh_table: bool = True) -> None:
        """更新单个场景"""
        raise NotImplementedError

    def _report_missing_scene(self, error: SceneNotFoundError) -> None:
        """提示场景已不存在"""
        raise NotImplementedError

    def _report_store_error(self, error: OSError) -> None:
        """提示数据文件写入失败"""
        raise NotImplementedError

    def _save_settings(self, settings: AppSettings) -> None:
        """保存设置"""
        raise NotImplementedError

    def _focus_search(self) -> None:
        """聚焦搜索框"""
        raise NotImplementedError

    def open_data_folder(self) -> None:
        """打开数据目录"""
        raise NotImplementedError

    def show_help(self) -> None:
        """显示帮助"""
        raise NotImplementedError

    def show_about(self) -> None:
        """显示关于"""
        raise NotImplementedError
