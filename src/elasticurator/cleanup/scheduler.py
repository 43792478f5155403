"""固定延迟清理调度器模块."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from .exceptions import SchedulerError

logger = logging.getLogger(__name__)


class CleanupScheduler:
    """固定延迟调度器.

    在单个后台线程中运行：先等待 initial_delay 秒，执行一次回调，
    之后每次回调结束后再等待 repeat_delay 秒。下一次执行总是在上一次
    结束之后才开始计时，清理周期之间不会重叠；run_now() 与后台执行
    也通过同一把锁串行化。

    回调抛出的异常会被记录并计数，调度继续进行。

    Args:
        callback: 每个周期执行的回调
        initial_delay: 首次执行前的等待秒数，不能为负数
        repeat_delay: 两次执行之间的等待秒数，必须大于 0

    Examples:
        >>> scheduler = CleanupScheduler(service.do_cleanup, 60, 3600)
        >>> scheduler.start()
        >>> # ... 应用运行 ...
        >>> scheduler.stop()
    """

    def __init__(
        self,
        callback: Callable[[], Any],
        initial_delay: float,
        repeat_delay: float,
    ) -> None:
        if initial_delay < 0:
            raise SchedulerError(f"initial_delay 不能为负数，当前值: {initial_delay}")
        if repeat_delay <= 0:
            raise SchedulerError(f"repeat_delay 必须大于 0，当前值: {repeat_delay}")
        self._callback = callback
        self.initial_delay = initial_delay
        self.repeat_delay = repeat_delay

        self._run_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._run_count = 0
        self._error_count = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def run_count(self) -> int:
        """成功执行的次数."""
        return self._run_count

    @property
    def error_count(self) -> int:
        """执行失败的次数."""
        return self._error_count

    def start(self) -> None:
        """启动后台调度线程，已启动时不做任何操作."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop, name="elasticurator-cleanup", daemon=True
        )
        self._thread.start()
        logger.info(
            f"清理调度器已启动，首次延迟 {self.initial_delay} 秒，间隔 {self.repeat_delay} 秒"
        )

    def stop(self, timeout: float = 10.0) -> None:
        """停止调度器.

        Args:
            timeout: 等待后台线程结束的最长秒数
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
            logger.info("清理调度器已停止")

    def wait(self, timeout: float | None = None) -> bool:
        """阻塞直到调度器被停止.

        Returns:
            调度器是否已停止
        """
        return self._stop_event.wait(timeout)

    def run_now(self) -> Any:
        """立即执行一次回调，异常直接抛出给调用方."""
        with self._run_lock:
            return self._callback()

    def _run_once(self) -> None:
        try:
            self.run_now()
            self._run_count += 1
        except Exception as e:
            self._error_count += 1
            logger.error(f"清理执行失败: {e}", exc_info=True)

    def _run_loop(self) -> None:
        """后台调度主循环."""
        if self._stop_event.wait(self.initial_delay):
            return
        while not self._stop_event.is_set():
            self._run_once()
            if self._stop_event.wait(self.repeat_delay):
                break
