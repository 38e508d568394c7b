# -*- coding: utf-8 -*-
"""
脚本导入模块
解析粘贴的表格文本（Markdown 管道表格或 Tab 分隔），转换为场景列表
"""

import logging
import uuid
from typing import Callable, Iterable, List, Sequence, Tuple

from ..utils.constants import IMPORT_COLUMNS
from ..utils.models import Scene
from ..utils.utils import now_ms
from .scene_codes import code_matches, normalize_code, sort_scenes

logger = logging.getLogger(__name__)

ImportRow = Tuple[str, str, str, str]

MARKDOWN_HEADER = "| Code | English | Vietnamese | Keywords |\n| --- | --- | --- | --- |"


def _new_scene_id() -> str:
    return str(uuid.uuid4())


def parse_rows(text: str) -> List[ImportRow]:
    """
    解析表格文本

    以 "|" 开头的行按 "|" 拆分并丢弃空单元格；含 Tab 的行按 Tab 拆分。
    少于 4 列的行被忽略，多余的列被截断。
    """
    rows: List[ImportRow] = []
    for line in (text or "").splitlines():
        line = line.strip()
        if not line:
            continue

        if line.startswith("|"):
            cols = [col.strip() for col in line.split("|")]
            cols = [col for col in cols if col]
        elif "\t" in line:
            cols = line.split("\t")
        else:
            continue

        if len(cols) >= IMPORT_COLUMNS:
            rows.append((cols[0], cols[1], cols[2], cols[3]))
    return rows


def build_markdown(rows: Sequence[Sequence[str]]) -> str:
    """生成导入预览用的 Markdown 表格"""
    body = "\n".join(f"| {row[0]} | {row[1]} | {row[2]} | {row[3]} |" for row in rows)
    return "\n".join(part for part in (MARKDOWN_HEADER, body) if part)


def html_to_markdown(html: str) -> str:
    """将剪贴板中的 HTML（表格）转换为 Markdown"""
    if not html:
        return ""
    from PySide6.QtGui import QTextDocument

    document = QTextDocument()
    document.setHtml(html)
    return document.toMarkdown()


def convert_import_rows(rows: Iterable[Sequence[str]],
                        id_factory: Callable[[], str] = _new_scene_id,
                        clock: Callable[[], int] = now_ms) -> List[Scene]:
    """
    将导入行转换为新的场景列表

    首列不是数字编号的行、列数不足的行会被跳过（不报错）。
    每个场景都是全新的：新 ID、规范化编号、无图片、非角色图。
    返回按编号排序的列表。
    """
    scenes = []
    skipped = 0
    for row in rows:
        cols = list(row)
        if len(cols) < IMPORT_COLUMNS or not code_matches(cols[0] or ""):
            skipped += 1
            continue

        en_text, vi_text, keywords = (value or "" for value in cols[1:IMPORT_COLUMNS])
        scenes.append(Scene(
            id=id_factory(),
            code=normalize_code(cols[0]),
            en_text=en_text,
            vi_text=vi_text,
            keywords=keywords,
            primary_image_path=None,
            character_image=False,
            updated_at=clock(),
        ))

    if skipped:
        logger.info("导入时跳过 %d 行（编号无效或列数不足）", skipped)
    return sort_scenes(scenes)


def import_text(text: str, **kwargs) -> List[Scene]:
    """解析并转换粘贴的文本"""
    return convert_import_rows(parse_rows(text), **kwargs)
