# -*- coding: utf-8 -*-
"""
自动保存调度模块
编辑后等待一段空闲时间再导出；空闲期内的新编辑会取消并重新计时
"""

import logging
from typing import Callable

from PySide6.QtCore import QObject, QTimer, Signal

from ..utils.constants import AUTOSAVE_DELAY_MS

logger = logging.getLogger(__name__)


class AutosaveScheduler(QObject):
    """可取消、可重新计时的单次定时任务"""

    fired = Signal()

    def __init__(self, callback: Callable[[], None], delay_ms: int = AUTOSAVE_DELAY_MS, parent=None):
        super().__init__(parent)
        self.callback = callback
        self.delay_ms = delay_ms
        self.enabled = True

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)

    def set_enabled(self, enabled: bool) -> None:
        """关闭时同时取消尚未触发的任务"""
        self.enabled = enabled
        if not enabled:
            self.cancel()

    def schedule(self) -> bool:
        """
        安排一次自动保存（已有任务时重新计时）

        Returns:
            bool: 是否已安排
        """
        if not self.enabled:
            return False
        self._timer.start(self.delay_ms)
        logger.debug("自动保存将在 %d ms 后执行", self.delay_ms)
        return True

    def cancel(self) -> None:
        self._timer.stop()

    def is_pending(self) -> bool:
        return self._timer.isActive()

    def _fire(self):
        logger.debug("执行自动保存")
        self.fired.emit()
        self.callback()
