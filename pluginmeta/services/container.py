"""服务容器 — 统一依赖注入

生成器及其外部能力（镜像解析器、诊断输出）通过容器获取，
同一容器内的实例共享。显式传入的实现优先于按配置构造的默认实现。

用法:
    container = ServiceContainer()
    specs = await container.generator.compute(plugins)

    # 注入自定义镜像解析器
    container = ServiceContainer(image_resolver=my_resolver)

    # 全局单例
    from pluginmeta.services.container import get_container
    gen = get_container().generator
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pluginmeta.core.config import Config
    from pluginmeta.core.protocols import Diagnostics, ImageResolver
    from pluginmeta.services.generator import MetaYamlGenerator

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器"""

    def __init__(
        self,
        config: Config | None = None,
        image_resolver: ImageResolver | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self._instances: dict[str, object] = {}
        if config is None:
            from pluginmeta.core.config import get_config
            config = get_config()
        self._config = config
        if image_resolver is not None:
            self._instances["image_resolver"] = image_resolver
        if diagnostics is not None:
            self._instances["diagnostics"] = diagnostics

    @property
    def config(self) -> Config:
        return self._config

    @property
    def image_resolver(self) -> ImageResolver:
        if "image_resolver" not in self._instances:
            from pluginmeta.services.image_resolver import ConfiguredImageResolver
            self._instances["image_resolver"] = ConfiguredImageResolver(
                template=self._config.sidecar_image_template,
                overrides=self._config.sidecar_image_overrides,
            )
        return self._instances["image_resolver"]  # type: ignore[return-value]

    @property
    def diagnostics(self) -> Diagnostics:
        if "diagnostics" not in self._instances:
            from pluginmeta.core.diagnostics import LoggingDiagnostics
            self._instances["diagnostics"] = LoggingDiagnostics()
        return self._instances["diagnostics"]  # type: ignore[return-value]

    @property
    def generator(self) -> MetaYamlGenerator:
        if "generator" not in self._instances:
            from pluginmeta.services.generator import MetaYamlGenerator
            self._instances["generator"] = MetaYamlGenerator(
                image_resolver=self.image_resolver,
                diagnostics=self.diagnostics,
                config=self._config,
            )
        return self._instances["generator"]  # type: ignore[return-value]


# ---- 全局单例 ----

_global: ServiceContainer | None = None
_global_lock = threading.Lock()


def get_container() -> ServiceContainer:
    """获取全局 ServiceContainer 单例（线程安全）"""
    global _global  # noqa: PLW0603
    if _global is not None:
        return _global
    with _global_lock:
        if _global is None:
            _global = ServiceContainer()
        return _global


def reset_container() -> None:
    """重置全局容器（仅用于测试）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = None
