"""同步入口

init_runtime: 加载配置、配置日志（环境变量优先于配置文件）
generate: 在新的事件循环中执行整批生成
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Sequence

from pluginmeta.core.config import Config, init_config
from pluginmeta.core.models import OutputSpec, PluginDescriptor
from pluginmeta.core.protocols import Diagnostics, ImageResolver
from pluginmeta.services.container import ServiceContainer, get_container
from pluginmeta.utils.logger import setup_logging


def init_runtime(config_path: str = "configs/pluginmeta.yml") -> Config:
    cfg = init_config(config_path)
    setup_logging(
        level=os.getenv("PLUGINMETA_LOG_LEVEL", cfg.log_level),
        json_output=os.getenv("PLUGINMETA_LOG_JSON", "1" if cfg.log_json else "") == "1",
    )
    return cfg


def generate(
    plugins: Sequence[PluginDescriptor],
    *,
    image_resolver: ImageResolver | None = None,
    diagnostics: Diagnostics | None = None,
    config: Config | None = None,
) -> list[OutputSpec]:
    """同步生成 meta 记录；未注入任何能力时使用全局容器"""
    if image_resolver is None and diagnostics is None and config is None:
        container = get_container()
    else:
        container = ServiceContainer(
            config=config, image_resolver=image_resolver, diagnostics=diagnostics,
        )
    return asyncio.run(container.generator.compute(plugins))
