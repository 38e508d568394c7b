# -*- coding: utf-8 -*-
"""
数据类定义模块
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from .constants import ExportState


@dataclass
class Scene:
    """分镜场景（一行脚本数据）"""
    id: str
    code: str
    en_text: str = ""
    vi_text: str = ""
    keywords: str = ""
    primary_image_path: Optional[str] = None
    character_image: bool = False
    updated_at: int = 0

    def to_dict(self) -> Dict:
        """转换为字典（沿用 camelCase 键名）"""
        return {
            "id": self.id,
            "code": self.code,
            "enText": self.en_text,
            "viText": self.vi_text,
            "keywords": self.keywords,
            "primaryImagePath": self.primary_image_path,
            "characterImage": self.character_image,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Scene':
        """从字典创建"""
        return cls(
            id=data["id"],
            code=data.get("code", ""),
            en_text=data.get("enText", ""),
            vi_text=data.get("viText", ""),
            keywords=data.get("keywords", ""),
            primary_image_path=data.get("primaryImagePath"),
            character_image=bool(data.get("characterImage", False)),
            updated_at=int(data.get("updatedAt", 0)),
        )

    def copy_with(self, **changes) -> 'Scene':
        """返回修改后的副本"""
        return replace(self, **changes)

    def matches(self, query: str) -> bool:
        """搜索匹配（编号、文本、关键词，不区分大小写）"""
        query = query.lower()
        return any(query in value.lower()
                   for value in (self.code, self.en_text, self.vi_text, self.keywords))


@dataclass
class AppSettings:
    """软件设置（随数据文件保存）"""
    autosave_enabled: bool = False
    save_directory: str = ""
    last_saved_at: Optional[int] = None
    library_roots: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "autosaveEnabled": self.autosave_enabled,
            "saveDirectory": self.save_directory,
            "lastSavedAt": self.last_saved_at,
            "libraryRoots": list(self.library_roots),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'AppSettings':
        return cls(
            autosave_enabled=bool(data.get("autosaveEnabled", False)),
            save_directory=data.get("saveDirectory", "") or "",
            last_saved_at=data.get("lastSavedAt"),
            library_roots=list(data.get("libraryRoots", [])),
        )


@dataclass
class LibraryFolder:
    """素材库文件夹"""
    full_path: str
    name: str


@dataclass
class LibraryFile:
    """素材库文件"""
    full_path: str
    name: str
    ext: str
    type: str
    size: int = 0
    mtime: float = 0.0

    @property
    def is_image(self) -> bool:
        return self.type == "image"


@dataclass
class DirectoryListing:
    """目录列表结果"""
    folders: List[LibraryFolder] = field(default_factory=list)
    files: List[LibraryFile] = field(default_factory=list)


@dataclass
class ExportStatus:
    """导出状态"""
    state: str = ExportState.IDLE
    message: str = ""


@dataclass
class ExportRecord:
    """单个场景的导出记录"""
    code: str
    filename: str
    en_text: str
    vi_text: str
    keywords: str
    character_image: bool
    image_path: Optional[str] = None
    link_ok: Optional[bool] = None


@dataclass
class ExportBundle:
    """导出压缩包及缺失文件列表"""
    archive: bytes
    missing: List[str] = field(default_factory=list)
    image_count: int = 0
