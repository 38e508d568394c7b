# -*- coding: utf-8 -*-
"""
图片链接检查模块
检查场景记录的图片路径是否仍然存在，每次调用都重新访问文件系统
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Iterable

from ..utils.constants import IO_WORKERS
from ..utils.models import Scene
from ..utils.utils import file_exists

logger = logging.getLogger(__name__)

ExistsFunc = Callable[[str], bool]


def is_link_broken(scene: Scene, exists: ExistsFunc = file_exists) -> bool:
    """场景有图片路径且文件不存在时返回 True"""
    if not scene.primary_image_path:
        return False
    return not exists(scene.primary_image_path)


def check_links(scenes: Iterable[Scene], exists: ExistsFunc = file_exists) -> Dict[str, bool]:
    """
    检查所有场景的图片链接

    Args:
        scenes: 场景列表（只读）
        exists: 文件存在性检查函数

    Returns:
        Dict[str, bool]: 场景 ID -> 是否断链；没有图片的场景不在结果中
    """
    linked = [scene for scene in scenes if scene.primary_image_path]
    if not linked:
        return {}

    with ThreadPoolExecutor(max_workers=IO_WORKERS) as pool:
        results = list(pool.map(lambda scene: is_link_broken(scene, exists), linked))

    broken = {scene.id: result for scene, result in zip(linked, results)}
    broken_count = sum(broken.values())
    if broken_count:
        logger.warning("发现 %d 个场景的图片链接失效", broken_count)
    return broken
