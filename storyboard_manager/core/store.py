# -*- coding: utf-8 -*-
"""
数据存储模块
单个 JSON 文档保存 { settings, scenes }，每次修改整体重写
"""

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

from PySide6.QtCore import QSettings, QStandardPaths

from ..utils.constants import APPLICATION_NAME, ASSETS_DIR, DATA_FILE, ORGANIZATION_NAME
from ..utils.errors import SceneNotFoundError, StoreFormatError, StoryboardError
from ..utils.models import AppSettings, Scene
from ..utils.utils import ensure_dir, now_ms, write_file_atomic

logger = logging.getLogger(__name__)

_SCENE_STRING_FIELDS = ("id", "code", "enText", "viText", "keywords")
_SCENE_EDITABLE_FIELDS = {"code", "en_text", "vi_text", "keywords", "primary_image_path", "character_image"}


def default_data_path(app_settings: Optional[QSettings] = None) -> Path:
    """
    获取数据文件路径
    优先级：QSettings 中的 data_dir > 系统应用数据目录
    """
    if app_settings is None:
        app_settings = QSettings(ORGANIZATION_NAME, APPLICATION_NAME)

    data_dir = app_settings.value("data_dir", "")
    if not data_dir:
        data_dir = QStandardPaths.writableLocation(QStandardPaths.AppDataLocation)
    if not data_dir:
        data_dir = str(Path.home() / ".storyboard_manager")
    return Path(data_dir) / DATA_FILE


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_settings(data: Any) -> AppSettings:
    if data is None:
        return AppSettings()
    if not isinstance(data, dict):
        raise StoreFormatError("settings 必须是对象")

    if not isinstance(data.get("autosaveEnabled", False), bool):
        raise StoreFormatError("settings.autosaveEnabled 必须是布尔值")
    if not isinstance(data.get("saveDirectory", ""), str):
        raise StoreFormatError("settings.saveDirectory 必须是字符串")
    last_saved = data.get("lastSavedAt")
    if last_saved is not None and not _is_number(last_saved):
        raise StoreFormatError("settings.lastSavedAt 必须是数字或 null")
    roots = data.get("libraryRoots", [])
    if not isinstance(roots, list) or not all(isinstance(root, str) for root in roots):
        raise StoreFormatError("settings.libraryRoots 必须是字符串列表")

    return AppSettings.from_dict(data)


def _validate_scene(index: int, data: Any) -> Scene:
    if not isinstance(data, dict):
        raise StoreFormatError(f"scenes[{index}] 必须是对象")

    for key in _SCENE_STRING_FIELDS:
        if key == "id" or key in data:
            if not isinstance(data.get(key), str):
                raise StoreFormatError(f"scenes[{index}].{key} 必须是字符串")

    image_path = data.get("primaryImagePath")
    if image_path is not None and not isinstance(image_path, str):
        raise StoreFormatError(f"scenes[{index}].primaryImagePath 必须是字符串或 null")
    if not isinstance(data.get("characterImage", False), bool):
        raise StoreFormatError(f"scenes[{index}].characterImage 必须是布尔值")
    if not _is_number(data.get("updatedAt", 0)):
        raise StoreFormatError(f"scenes[{index}].updatedAt 必须是数字")

    return Scene.from_dict(data)


def validate_document(data: Any) -> Tuple[AppSettings, List[Scene]]:
    """
    校验已解析的 JSON 文档

    Returns:
        tuple: (AppSettings, 场景列表)

    Raises:
        StoreFormatError: 文档结构无效
    """
    if not isinstance(data, dict):
        raise StoreFormatError("数据文件顶层必须是对象")

    settings = _validate_settings(data.get("settings"))

    raw_scenes = data.get("scenes", [])
    if not isinstance(raw_scenes, list):
        raise StoreFormatError("scenes 必须是列表")
    scenes = [_validate_scene(i, item) for i, item in enumerate(raw_scenes)]

    ids = [scene.id for scene in scenes]
    if len(ids) != len(set(ids)):
        raise StoreFormatError("scenes 中存在重复的 id")

    return settings, scenes


class SceneStore:
    """
    场景数据存储
    负责数据文件的加载、保存以及场景的修改操作
    """

    def __init__(self, data_path: Path, clock: Callable[[], int] = now_ms):
        """
        初始化存储

        Args:
            data_path: 数据文件路径
            clock: 时间戳来源（毫秒）
        """
        self.data_path = Path(data_path)
        self.clock = clock
        self.settings = AppSettings()
        self.scenes: List[Scene] = []
        self.loaded = False

    @property
    def asset_dir(self) -> Path:
        """粘贴/拖入图片的保存目录"""
        return self.data_path.parent / ASSETS_DIR

    # ==================== 加载与保存 ====================

    def load(self) -> 'SceneStore':
        """
        加载数据文件，文件不存在时创建默认文档

        Raises:
            StoreFormatError: 文件无法解析或结构无效
        """
        if not self.data_path.exists():
            logger.info("数据文件不存在，创建新文件: %s", self.data_path)
            self.settings = AppSettings()
            self.scenes = []
            self.loaded = True
            self.save()
            return self

        try:
            with open(self.data_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreFormatError(f"数据文件无法解析: {e}") from e
        except OSError as e:
            raise StoreFormatError(f"读取数据文件失败: {e}") from e

        self.settings, self.scenes = validate_document(data)
        self.loaded = True
        logger.info("已加载 %d 个场景", len(self.scenes))
        return self

    def reset(self) -> None:
        """以空文档重新开始，原文件备份为 .corrupt.json"""
        if self.data_path.exists():
            corrupt_path = self.data_path.with_suffix(".corrupt.json")
            shutil.copy2(self.data_path, corrupt_path)
            logger.warning("已备份无效的数据文件: %s", corrupt_path)
        self.settings = AppSettings()
        self.scenes = []
        self.loaded = True
        self.save()

    def save(self) -> None:
        """整体写入数据文件（写入前备份旧文件）"""
        self._require_loaded()
        ensure_dir(self.data_path.parent)

        if self.data_path.exists():
            backup_path = self.data_path.with_suffix(".backup.json")
            shutil.copy2(self.data_path, backup_path)

        data = {
            "settings": self.settings.to_dict(),
            "scenes": [scene.to_dict() for scene in self.scenes],
        }
        text = json.dumps(data, indent=2, ensure_ascii=False)
        write_file_atomic(self.data_path, text.encode("utf-8"))

    def ensure_assets_dir(self) -> Path:
        ensure_dir(self.asset_dir)
        return self.asset_dir

    def _require_loaded(self) -> None:
        if not self.loaded:
            raise StoryboardError("数据尚未加载，请先调用 load()")

    def _find_scene(self, scene_id: str) -> Scene:
        return self.scenes[self._scene_index(scene_id)]

    def _scene_index(self, scene_id: str) -> int:
        for index, scene in enumerate(self.scenes):
            if scene.id == scene_id:
                return index
        raise SceneNotFoundError(scene_id)

    def _commit(self, settings: AppSettings, scenes: List[Scene]) -> None:
        """写入新状态；写入失败时恢复内存中的旧状态"""
        previous = (self.settings, self.scenes)
        self.settings, self.scenes = settings, scenes
        try:
            self.save()
        except OSError:
            self.settings, self.scenes = previous
            raise

    # ==================== 设置 ====================

    def read_settings(self) -> AppSettings:
        self._require_loaded()
        return AppSettings.from_dict(self.settings.to_dict())

    def save_settings(self, settings: AppSettings) -> None:
        self._require_loaded()
        self._commit(AppSettings.from_dict(settings.to_dict()), self.scenes)

    # ==================== 场景 ====================

    def read_scenes(self) -> List[Scene]:
        """返回场景快照（副本）"""
        self._require_loaded()
        return [scene.copy_with() for scene in self.scenes]

    def get_scene(self, scene_id: str) -> Scene:
        self._require_loaded()
        return self._find_scene(scene_id).copy_with()

    def replace_scenes(self, scenes: List[Scene]) -> List[Scene]:
        """用新列表整体替换所有场景（导入）"""
        self._require_loaded()
        self._commit(self.settings, [scene.copy_with() for scene in scenes])
        logger.info("场景已整体替换，共 %d 个", len(self.scenes))
        return self.read_scenes()

    def update_scene(self, scene: Scene) -> Scene:
        """
        用传入的场景替换同 ID 的场景

        写入失败时内存中的场景保持不变。

        Raises:
            SceneNotFoundError: 场景已不存在
            OSError: 数据文件无法写入
        """
        self._require_loaded()
        index = self._scene_index(scene.id)
        scenes = list(self.scenes)
        scenes[index] = scene.copy_with()
        self._commit(self.settings, scenes)
        return scene.copy_with()

    def update_scene_fields(self, scene_id: str, **fields) -> Scene:
        """修改场景字段并刷新修改时间"""
        self._require_loaded()
        unknown = set(fields) - _SCENE_EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"不支持修改的字段: {', '.join(sorted(unknown))}")

        scene = self._find_scene(scene_id)
        return self.update_scene(scene.copy_with(updated_at=self.clock(), **fields))

    def toggle_character(self, scene_id: str, value: bool) -> Scene:
        """设置角色图标记"""
        return self.update_scene_fields(scene_id, character_image=bool(value))

    def assign_image_path(self, scene_id: str, path: Optional[str]) -> Scene:
        """关联已有图片文件（如素材库中的文件）"""
        return self.update_scene_fields(scene_id, primary_image_path=path)

    def attach_scene_image(self, scene_id: str, data: bytes, ext: str) -> Scene:
        """
        保存图片数据到 assets 目录并关联到场景

        Args:
            scene_id: 场景 ID
            data: 图片字节
            ext: 扩展名（带或不带点）
        """
        self._require_loaded()
        self._find_scene(scene_id)

        self.ensure_assets_dir()
        ext = ext.lstrip(".") or "png"
        target = self.asset_dir / f"{scene_id}_{self.clock()}.{ext}"
        with open(target, "wb") as f:
            f.write(data)
        return self.assign_image_path(scene_id, str(target))
