"""诊断信息输出实现

- LoggingDiagnostics: 转发到标准 logging（默认）
- CollectingDiagnostics: 在内存中收集，便于测试断言或嵌入调用方
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class LoggingDiagnostics:
    """将诊断信息写入 logger（warn -> WARNING, error -> ERROR）"""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def warn(self, message: str) -> None:
        self._log.warning(message)

    def error(self, message: str) -> None:
        self._log.error(message)


class CollectingDiagnostics:
    """收集诊断信息；forward 为 True 时同时写入 logger"""

    def __init__(self, forward: bool = False) -> None:
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self._forward = LoggingDiagnostics() if forward else None

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        if self._forward:
            self._forward.warn(message)

    def error(self, message: str) -> None:
        self.errors.append(message)
        if self._forward:
            self._forward.error(message)

    def clear(self) -> None:
        self.warnings.clear()
        self.errors.clear()

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
