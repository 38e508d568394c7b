# -*- coding: utf-8 -*-
"""
常量定义模块
"""

import re

# ================================ 文件扩展名 ================================ #

# 图片文件扩展名
IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.webp', '.gif'}

# 视频文件扩展名
VIDEO_EXTENSIONS = {'.mp4', '.mov', '.m4v', '.mkv'}

# ================================ 正则表达式 ================================ #

# 场景编号（数字段，用 . 或 - 分隔）
CODE_PATTERN = re.compile(r'^\d+(?:[.-]\d+)*$')

# 编号分段分隔符
CODE_SPLIT_PATTERN = re.compile(r'[.-]')

# 编号首段宽度
CODE_HEAD_WIDTH = 3

# ================================ 文件名常量 ================================ #

DATA_FILE = "storyboard-db.json"
ASSETS_DIR = "assets"

EXPORT_FILENAME = "STORYBOARD_EXPORT.zip"
EXPORT_MAPPING_FILE = "mapping.csv"
EXPORT_SCENE_FOLDER = "scenes_images"
EXPORT_CHARACTER_FOLDER = "character_images"
EXPORT_CSV_HEADER = ["code", "filename", "enText", "viText", "keywords", "CharacterImage"]

# ================================ 应用设置 ================================ #

ORGANIZATION_NAME = "StoryboardStudio"
APPLICATION_NAME = "StoryboardManager"

# 自动保存空闲时间（毫秒）
AUTOSAVE_DELAY_MS = 10000

# 文件存在性检查的并发数
IO_WORKERS = 8

# 导入表格的列数
IMPORT_COLUMNS = 4


class FileType:
    """素材库文件类型"""
    IMAGE = "image"
    VIDEO = "video"
    OTHER = "other"


class ExportState:
    """导出状态"""
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"
