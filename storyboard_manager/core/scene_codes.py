# -*- coding: utf-8 -*-
"""
场景编号模块
负责编号的规范化、格式校验以及按层级数值排序
"""

from functools import cmp_to_key
from itertools import zip_longest
from typing import Iterable, List

from ..utils.constants import CODE_PATTERN, CODE_SPLIT_PATTERN, CODE_HEAD_WIDTH
from ..utils.models import Scene
from ..utils.utils import zero_pad


def normalize_code(raw: str) -> str:
    """
    规范化人工输入的场景编号

    首段补零到 3 位（超长则保留末 3 位），其余分段原样保留。
    输入中出现过 "-" 时用 "-" 连接其余分段，否则用 "."。
    混用分隔符时同样以 "-" 为准（"3.1-2" -> "003-1-2"），与旧版
    分镜工具生成的数据保持一致，不采用第一个分隔符。

    Args:
        raw: 原始编号，如 "3.1"、" 12-4 "

    Returns:
        str: 规范化后的编号，如 "003.1"、"012-4"；空输入返回 ""
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        return ""

    parts = CODE_SPLIT_PATTERN.split(trimmed)
    head = zero_pad(parts[0], CODE_HEAD_WIDTH)
    separator = "-" if "-" in trimmed else "."
    rest = separator.join(parts[1:])
    return f"{head}{separator}{rest}" if rest else head


def code_matches(value: str) -> bool:
    """检查是否为可识别的层级数字编号"""
    return bool(CODE_PATTERN.match((value or "").strip()))


def parse_code(code: str) -> List[int]:
    """拆分编号为整数分段，无法解析的分段视为 0"""
    segments = []
    for part in CODE_SPLIT_PATTERN.split(code or ""):
        try:
            segments.append(int(part))
        except ValueError:
            segments.append(0)
    return segments


def compare_codes(code_a: str, code_b: str) -> int:
    """
    按层级数值比较两个编号

    较短的一方在末尾补 0 后逐段比较，"2.10" 大于 "2.9"。

    Returns:
        int: -1 / 0 / 1
    """
    for a, b in zip_longest(parse_code(code_a), parse_code(code_b), fillvalue=0):
        if a != b:
            return -1 if a < b else 1
    return 0


def _compare_scenes(scene_a: Scene, scene_b: Scene) -> int:
    return compare_codes(scene_a.code, scene_b.code)


scene_sort_key = cmp_to_key(_compare_scenes)


def sort_scenes(scenes: Iterable[Scene]) -> List[Scene]:
    """返回按编号排序的新列表（稳定排序，不修改原列表）"""
    return sorted(scenes, key=scene_sort_key)
