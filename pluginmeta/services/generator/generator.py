"""meta 生成器 - 批次编排

职责：
- 为整批插件建立只读 id 索引
- 以有界并发逐插件执行 GenerationSteps
- 按输入位置收集结果，保证输出顺序与输入一致
- 任一插件致命失败时取消其余任务并整体抛出，不返回部分结果
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from datetime import date
from typing import Callable

from pluginmeta.core.config import Config, get_config
from pluginmeta.core.dep import DependencyResolver, PluginIndex
from pluginmeta.core.diagnostics import LoggingDiagnostics
from pluginmeta.core.models import OutputSpec, PluginDescriptor
from pluginmeta.core.protocols import Diagnostics, ImageResolver
from pluginmeta.core.sidecar import SidecarSpecBuilder
from pluginmeta.services.generator.models import PluginContext
from pluginmeta.services.generator.steps import GenerationSteps

logger = logging.getLogger(__name__)


class MetaYamlGenerator:
    """插件描述 -> meta 记录

    image_resolver 与 diagnostics 在构造时注入；config 缺省使用全局配置。
    """

    def __init__(
        self,
        image_resolver: ImageResolver,
        diagnostics: Diagnostics | None = None,
        config: Config | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.config = config or get_config()
        self.diagnostics = diagnostics or LoggingDiagnostics()
        self.sidecar_builder = SidecarSpecBuilder(image_resolver)
        self._today = today

    def _steps_for(self, plugins: Sequence[PluginDescriptor]) -> GenerationSteps:
        resolver = DependencyResolver(
            PluginIndex(plugins),
            follow_extension_dependencies=self.config.follow_extension_dependencies,
        )
        return GenerationSteps(resolver, self.sidecar_builder, self.diagnostics)

    async def compute(self, plugins: Sequence[PluginDescriptor]) -> list[OutputSpec]:
        """生成整批 meta 记录，长度与顺序和输入一致"""
        if not plugins:
            return []

        steps = self._steps_for(plugins)
        run_date = self._today().isoformat()
        semaphore = asyncio.Semaphore(self.config.max_concurrency)

        async def _one(plugin: PluginDescriptor) -> OutputSpec:
            async with semaphore:
                logger.debug("生成插件 meta: %s", plugin.id, extra={"plugin_id": plugin.id})
                return await steps.run(PluginContext(plugin=plugin, run_date=run_date))

        tasks = [asyncio.ensure_future(_one(p)) for p in plugins]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        logger.info("已生成 %d 个插件的 meta 记录", len(results))
        return list(results)
