"""
跳过统计钩子

宿主环境可注册回调，在内置规则之后修改最终的排除决定。
回调签名为 (exclude: bool) -> bool，按注册顺序依次执行，
每个回调收到上一个回调的返回值。没有注册回调时保持内置规则的结论。
"""

from __future__ import annotations

from typing import Callable, Optional, Union

from src.core.exceptions import TrackingError
from src.core.logger import get_logger

logger = get_logger(__name__)

SkipTrackingCallback = Callable[[bool], bool]


class SkipTrackingHooks:
    """
    跳过统计钩子链

    Example:
        hooks = SkipTrackingHooks()
        hooks.add(lambda exclude: False)  # 强制统计
        final_exclude = hooks.apply(True)
    """

    def __init__(self, callbacks: Optional[list[SkipTrackingCallback]] = None) -> None:
        self._callbacks: list[SkipTrackingCallback] = list(callbacks or [])
        self._applied = 0

    def add(self, callback: SkipTrackingCallback) -> None:
        """注册回调(追加到链尾)"""
        self._callbacks.append(callback)

    def remove(self, callback: SkipTrackingCallback) -> bool:
        """
        移除回调

        Returns:
            是否成功移除
        """
        if callback in self._callbacks:
            self._callbacks.remove(callback)
            return True
        return False

    def clear(self) -> None:
        """移除所有回调"""
        self._callbacks.clear()

    def apply(self, exclude: bool) -> bool:
        """
        执行钩子链

        Args:
            exclude: 内置规则给出的排除决定

        Returns:
            最终排除决定

        Raises:
            TrackingError: 回调抛出异常时抛出
        """
        self._applied += 1
        result = exclude
        for callback in self._callbacks:
            try:
                result = bool(callback(result))
            except Exception as e:
                name = getattr(callback, "__qualname__", repr(callback))
                logger.error(f"跳过统计钩子执行失败: {name}, 错误: {e}")
                raise TrackingError(
                    f"跳过统计钩子 {name} 执行失败",
                    details={"callback": name, "error": str(e)},
                ) from e
        if result != exclude:
            logger.debug(f"钩子修改了排除决定: {exclude} -> {result}")
        return result

    __call__ = apply

    @property
    def applied(self) -> int:
        """钩子链被执行的次数"""
        return self._applied

    def __len__(self) -> int:
        return len(self._callbacks)


def as_hooks(
    hook: Union[SkipTrackingHooks, SkipTrackingCallback, None],
) -> SkipTrackingHooks:
    """将单个回调或 None 统一包装为钩子链"""
    if hook is None:
        return SkipTrackingHooks()
    if isinstance(hook, SkipTrackingHooks):
        return hook
    return SkipTrackingHooks([hook])
