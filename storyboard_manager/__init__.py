# -*- coding: utf-8 -*-
"""
Storyboard Manager - 分镜制作工具

将表格形式的分镜脚本导入为场景列表，为每个场景关联参考图片，
并导出为图片 + CSV 映射表的压缩包。

功能特性：
• 粘贴 Markdown / Tab 分隔表格导入场景（编号、英文、越南文、关键词）
• 场景编号规范化与层级数值排序
• 拖放 / 粘贴 / 文件选择关联场景图片
• 素材库（Footage）浏览、搜索、添加图片
• 角色图标记
• 图片断链检测
• 导出 STORYBOARD_EXPORT.zip
• 自动保存（空闲后导出）
• 深色主题 UI
"""

__version__ = "1.0"

__all__ = ['__version__']
