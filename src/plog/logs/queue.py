# -*- coding: utf-8 -*-
"""
可关闭的 FIFO 队列

生产者与唯一消费者之间的交接队列：
- put: 入队，队列关闭后拒绝新元素
- take: 阻塞取出，队列为空时等待；关闭且取空后返回 (False, None)
- close: 单向关闭，已入队元素仍可被取出
"""

import threading
from collections import deque
from typing import Deque, Generic, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T")


class ClosableQueue(Generic[T]):
    """线程安全的可关闭 FIFO 队列"""

    def __init__(self, maxsize: int = 0):
        """初始化

        Args:
            maxsize: 最大长度，0 表示不限制。队列满时 put 阻塞直到有空位或队列关闭
        """
        self.maxsize = maxsize
        self._items: Deque[T] = deque()
        self._closed = False
        self._mutex = threading.Lock()
        self._not_empty = threading.Condition(self._mutex)
        self._not_full = threading.Condition(self._mutex)

    def __len__(self) -> int:
        with self._mutex:
            return len(self._items)

    @property
    def closed(self) -> bool:
        with self._mutex:
            return self._closed

    def put(self, item: T) -> bool:
        """入队

        Returns:
            bool: 是否入队成功，队列已关闭时返回 False
        """
        with self._not_full:
            if self.maxsize > 0:
                while len(self._items) >= self.maxsize and not self._closed:
                    self._not_full.wait()
            if self._closed:
                return False
            self._items.append(item)
            self._not_empty.notify()
            return True

    def take(self, timeout: Optional[float] = None) -> Tuple[bool, Optional[T]]:
        """取出队首元素

        Args:
            timeout: 最长等待时间（秒），None 表示一直等待

        Returns:
            (True, item): 取到元素
            (False, None): 队列已关闭且为空，或等待超时
        """
        with self._not_empty:
            if not self._not_empty.wait_for(
                lambda: self._items or self._closed, timeout=timeout
            ):
                return False, None
            if not self._items:
                return False, None
            item = self._items.popleft()
            self._not_full.notify()
            return True, item

    def close(self) -> None:
        """关闭队列，唤醒所有等待者"""
        with self._mutex:
            self._closed = True
            self._not_empty.notify_all()
            self._not_full.notify_all()

    def __iter__(self) -> Iterator[T]:
        """按 FIFO 顺序迭代，直到队列关闭且取空"""
        while True:
            ok, item = self.take()
            if not ok:
                return
            yield item
