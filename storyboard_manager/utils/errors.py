# -*- coding: utf-8 -*-
"""
异常定义模块
"""


class StoryboardError(Exception):
    """所有业务异常的基类"""


class SceneNotFoundError(StoryboardError):
    """要修改的场景已不在集合中"""

    def __init__(self, scene_id: str):
        super().__init__(f"找不到场景: {scene_id}")
        self.scene_id = scene_id


class StoreFormatError(StoryboardError):
    """数据文件结构无效"""


class ExportError(StoryboardError):
    """导出文件无法写入"""
