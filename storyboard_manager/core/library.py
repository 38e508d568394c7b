# -*- coding: utf-8 -*-
"""
素材库（Footage）模块
浏览素材根目录、搜索文件、向素材文件夹添加图片
"""

import logging
import shutil
from pathlib import Path
from typing import List

from ..utils.constants import FileType, IMAGE_EXTENSIONS, VIDEO_EXTENSIONS
from ..utils.models import AppSettings, DirectoryListing, LibraryFile, LibraryFolder
from ..utils.utils import ensure_dir, now_ms

logger = logging.getLogger(__name__)


def classify_file(ext: str) -> str:
    """根据扩展名判断文件类型"""
    ext = ext.lower()
    if ext in IMAGE_EXTENSIONS:
        return FileType.IMAGE
    if ext in VIDEO_EXTENSIONS:
        return FileType.VIDEO
    return FileType.OTHER


def list_directory(dir_path: str) -> DirectoryListing:
    """列出目录下的子文件夹和文件（按名称排序）"""
    folders: List[LibraryFolder] = []
    files: List[LibraryFile] = []

    for entry in Path(dir_path).iterdir():
        if entry.is_dir():
            folders.append(LibraryFolder(full_path=str(entry), name=entry.name))
        elif entry.is_file():
            try:
                stat = entry.stat()
            except OSError as e:
                logger.warning("无法读取文件信息 %s: %s", entry, e)
                continue
            ext = entry.suffix.lower()
            files.append(LibraryFile(
                full_path=str(entry),
                name=entry.name,
                ext=ext,
                type=classify_file(ext),
                size=stat.st_size,
                mtime=stat.st_mtime * 1000,
            ))

    folders.sort(key=lambda f: f.name.lower())
    files.sort(key=lambda f: f.name.lower())
    return DirectoryListing(folders=folders, files=files)


def search_in_directory(dir_path: str, query: str) -> DirectoryListing:
    """按文件名搜索（不区分大小写），子文件夹不过滤"""
    listing = list_directory(dir_path)
    normalized = query.lower()
    listing.files = [f for f in listing.files if normalized in f.name.lower()]
    return listing


def ensure_unique_name(dir_path: Path, base_name: str, ext: str) -> str:
    """生成目录中不重名的文件名：name.ext, name_1.ext, name_2.ext ..."""
    counter = 0
    candidate = f"{base_name}{ext}"
    while (Path(dir_path) / candidate).exists():
        counter += 1
        candidate = f"{base_name}_{counter}{ext}"
    return candidate


def copy_file_to_folder(src_file: str, dest_dir: str) -> str:
    """复制文件到素材文件夹，重名时自动编号"""
    src = Path(src_file)
    dest = Path(dest_dir)
    ensure_dir(dest)
    file_name = ensure_unique_name(dest, src.stem, src.suffix)
    destination = dest / file_name
    shutil.copy2(src, destination)
    logger.info("已添加到素材库: %s", destination)
    return str(destination)


def save_clipboard_image_to_folder(dest_dir: str, data: bytes, ext: str) -> str:
    """保存剪贴板图片到素材文件夹"""
    dest = Path(dest_dir)
    ensure_dir(dest)
    safe_ext = ext if ext.startswith(".") else f".{ext}"
    file_name = ensure_unique_name(dest, f"clipboard_{now_ms()}", safe_ext)
    destination = dest / file_name
    with open(destination, "wb") as f:
        f.write(data)
    return str(destination)


def add_library_root(settings: AppSettings, path: str) -> AppSettings:
    """添加素材根目录（去重，保持顺序）"""
    path = path.strip()
    if not path:
        return settings
    roots = list(dict.fromkeys([*settings.library_roots, path]))
    return AppSettings(
        autosave_enabled=settings.autosave_enabled,
        save_directory=settings.save_directory,
        last_saved_at=settings.last_saved_at,
        library_roots=roots,
    )


def remove_library_root(settings: AppSettings, path: str) -> AppSettings:
    """移除素材根目录"""
    return AppSettings(
        autosave_enabled=settings.autosave_enabled,
        save_directory=settings.save_directory,
        last_saved_at=settings.last_saved_at,
        library_roots=[root for root in settings.library_roots if root != path],
    )
