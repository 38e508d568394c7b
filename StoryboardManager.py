# -*- coding: utf-8 -*-
"""
Storyboard Manager - 分镜管理工具
=============================================
功能特性：
• 粘贴 Markdown / Tab 表格导入场景（整体替换）
• 场景编号规范化与层级排序
• 拖放、粘贴或从素材库为场景关联图片
• 图片断链检测
• 导出 STORYBOARD_EXPORT.zip（图片 + mapping.csv）
• 编辑后自动保存
• 深色主题 UI
"""

import sys

from storyboard_manager.main import main

if __name__ == "__main__":
    sys.exit(main())
