# -*- coding: utf-8 -*-
"""
导出模块
生成 STORYBOARD_EXPORT.zip：mapping.csv + 场景图片 + 角色图片副本
"""

import io
import json
import logging
import os
import zipfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..utils.constants import (
    EXPORT_CHARACTER_FOLDER, EXPORT_CSV_HEADER, EXPORT_FILENAME, EXPORT_MAPPING_FILE,
    EXPORT_SCENE_FOLDER, IO_WORKERS
)
from ..utils.errors import ExportError
from ..utils.models import ExportBundle, ExportRecord, Scene
from ..utils.utils import ensure_dir, file_exists, read_file_bytes, write_file_atomic

logger = logging.getLogger(__name__)

ExistsFunc = Callable[[str], bool]
ReadFunc = Callable[[str], bytes]


def derive_filename(scene: Scene) -> str:
    """导出文件名：编号 + 原图片扩展名；无图片时为空"""
    if not scene.primary_image_path:
        return ""
    return f"{scene.code}{os.path.splitext(scene.primary_image_path)[1]}"


def _load_image(path: str, exists: ExistsFunc, read_bytes: ReadFunc) -> Optional[bytes]:
    """读取图片，不存在或无法读取时返回 None"""
    try:
        if not exists(path):
            return None
        return read_bytes(path)
    except OSError as e:
        logger.warning("读取图片失败 %s: %s", path, e)
        return None


def _load_images(scenes: List[Scene], exists: ExistsFunc,
                 read_bytes: ReadFunc) -> List[Optional[bytes]]:
    """并发读取所有场景的图片，结果顺序与场景一致"""
    paths = [scene.primary_image_path for scene in scenes]
    linked = [path for path in paths if path]
    if not linked:
        return [None] * len(scenes)

    with ThreadPoolExecutor(max_workers=IO_WORKERS) as pool:
        loaded = dict(zip(linked, pool.map(lambda p: _load_image(p, exists, read_bytes), linked)))
    return [loaded[path] if path else None for path in paths]


def _csv_row(record: ExportRecord) -> str:
    return ",".join([
        record.code,
        record.filename,
        json.dumps(record.en_text or "", ensure_ascii=False),
        json.dumps(record.vi_text or "", ensure_ascii=False),
        json.dumps(record.keywords or "", ensure_ascii=False),
        "TRUE" if record.character_image else "FALSE",
    ])


def build_mapping_csv(records: Iterable[ExportRecord]) -> str:
    """生成 mapping.csv 内容"""
    lines = [",".join(EXPORT_CSV_HEADER)]
    lines.extend(_csv_row(record) for record in records)
    return "\n".join(lines)


def _make_record(scene: Scene, link_ok: Optional[bool]) -> ExportRecord:
    return ExportRecord(
        code=scene.code,
        filename=derive_filename(scene),
        en_text=scene.en_text,
        vi_text=scene.vi_text,
        keywords=scene.keywords,
        character_image=scene.character_image,
        image_path=scene.primary_image_path,
        link_ok=link_ok,
    )


def build_export_bundle(scenes: Iterable[Scene],
                        exists: ExistsFunc = file_exists,
                        read_bytes: ReadFunc = read_file_bytes) -> ExportBundle:
    """
    生成导出压缩包

    场景按传入顺序处理，不重新排序。图片缺失或无法读取时记入 missing，
    导出继续进行；每个场景都会在 CSV 中占一行。

    Args:
        scenes: 场景列表（通常已按编号排序）
        exists: 文件存在性检查函数
        read_bytes: 文件读取函数

    Returns:
        ExportBundle: 压缩包字节、缺失文件路径列表、图片数量
    """
    scenes = list(scenes)
    images = _load_images(scenes, exists, read_bytes)

    records: List[ExportRecord] = []
    entries: Dict[str, bytes] = {}
    missing: List[str] = []

    for scene, data in zip(scenes, images):
        record = _make_record(scene, (data is not None) if scene.primary_image_path else None)
        records.append(record)
        filename = record.filename

        if record.link_ok is None:
            continue
        if not record.link_ok:
            missing.append(record.image_path)
            continue

        # 同名条目后者覆盖前者
        entries[f"{EXPORT_SCENE_FOLDER}/{filename}"] = data
        if scene.character_image:
            entries[f"{EXPORT_CHARACTER_FOLDER}/{filename}"] = data

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
        archive.writestr(EXPORT_MAPPING_FILE, build_mapping_csv(records))

    image_count = sum(1 for name in entries if name.startswith(EXPORT_SCENE_FOLDER + "/"))
    if missing:
        logger.warning("导出时有 %d 个图片文件缺失", len(missing))
    return ExportBundle(archive=buffer.getvalue(), missing=missing, image_count=image_count)


def write_export(directory: Path, bundle: ExportBundle,
                 filename: str = EXPORT_FILENAME) -> Path:
    """
    写入导出文件

    先写入临时文件再替换，写入失败时保留上一次的导出文件。

    Raises:
        ExportError: 目标目录无法创建或文件无法写入
    """
    target = Path(directory) / filename
    try:
        ensure_dir(Path(directory))
        write_file_atomic(target, bundle.archive)
    except OSError as e:
        raise ExportError(str(e)) from e

    logger.info("导出完成: %s", target)
    return target


def export_scenes(scenes: Iterable[Scene], directory: Path) -> Tuple[Path, List[str]]:
    """生成并写入导出文件，返回 (文件路径, 缺失图片列表)"""
    bundle = build_export_bundle(scenes)
    return write_export(directory, bundle), bundle.missing
