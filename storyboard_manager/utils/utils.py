# -*- coding: utf-8 -*-
"""
工具函数模块
"""

import logging
import os
import platform
import re
import subprocess
import time
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_EXT_PATTERN = re.compile(r'\.([a-zA-Z0-9]+)$')


def zero_pad(value: str, width: int = 3) -> str:
    """左侧补零，超出宽度时保留末尾几位"""
    return value.rjust(width, "0")[-width:]


def now_ms() -> int:
    """当前时间（毫秒）"""
    return int(time.time() * 1000)


def ensure_dir(path: Path) -> None:
    """确保目录存在"""
    Path(path).mkdir(parents=True, exist_ok=True)


def file_exists(path: str) -> bool:
    """检查文件是否存在"""
    return os.path.exists(path)


def read_file_bytes(path: str) -> bytes:
    """读取文件内容"""
    with open(path, "rb") as f:
        return f.read()


def write_file_atomic(path: Path, data: bytes) -> None:
    """
    先写入同目录下的临时文件，再替换目标文件

    写入失败时目标文件保持原样，临时文件会被删除。
    """
    path = Path(path)
    tmp = path.with_name(path.name + ".tmp")
    try:
        with open(tmp, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except OSError:
        if tmp.exists():
            tmp.unlink()
        raise


def format_file_size(size: float) -> str:
    """格式化文件大小"""
    if size < 1024:
        return f"{int(size)} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def get_image_extension(mime_type: str, fallback_name: str = "") -> str:
    """从 MIME 类型或文件名推断图片扩展名（不带点）"""
    if mime_type:
        parts = mime_type.split("/")
        if len(parts) == 2:
            return parts[1]
    match = _EXT_PATTERN.search(fallback_name or "")
    return match.group(1) if match else "png"


def open_in_file_manager(path: Optional[Path]) -> None:
    """在文件管理器中打开路径"""
    if not path or not path.exists():
        return

    system = platform.system()
    try:
        if system == "Windows":
            if path.is_file():
                subprocess.run(["explorer", "/select,", str(path)])
            else:
                subprocess.run(["explorer", str(path)])
        elif system == "Darwin":  # macOS
            if path.is_file():
                subprocess.run(["open", "-R", str(path)])
            else:
                subprocess.run(["open", str(path)])
        else:  # Linux
            subprocess.run(["xdg-open", str(path.parent if path.is_file() else path)])
    except OSError as e:
        logger.warning("打开文件管理器失败: %s", e)
