"""单插件生成步骤

步骤顺序：
1. locate_archive - 定位主归档与 package.json
2. check_required - 校验 publisher / name / version 与创建日期
3. derive_metadata - 推导展示字段
4. resolve_dependencies - 解析额外依赖并合并 vsix 注册表
5. build_container - 构造 sidecar 容器（可选）
6. assemble - 组装 OutputSpec

前两步的失败都是致命的，尽早抛出。
"""

from __future__ import annotations

import logging

from pluginmeta.core import metadata
from pluginmeta.core.dep import DependencyResolver
from pluginmeta.core.exceptions import MissingPackageDescriptorError
from pluginmeta.core.models import OutputSpec, PluginSpec
from pluginmeta.core.protocols import Diagnostics
from pluginmeta.core.sidecar import SidecarSpecBuilder
from pluginmeta.services.generator.models import PluginContext

logger = logging.getLogger(__name__)


class GenerationSteps:
    """生成步骤集合"""

    def __init__(
        self,
        resolver: DependencyResolver,
        sidecar_builder: SidecarSpecBuilder,
        diagnostics: Diagnostics,
    ) -> None:
        self.resolver = resolver
        self.sidecar_builder = sidecar_builder
        self.diagnostics = diagnostics

    def locate_archive(self, ctx: PluginContext) -> None:
        """步骤1: 定位主归档，缺少 package.json 即失败"""
        archive = ctx.plugin.primary_archive()
        if archive is None or archive.package_json is None:
            raise MissingPackageDescriptorError(ctx.plugin.id)
        ctx.archive = archive

    def check_required(self, ctx: PluginContext) -> None:
        """步骤2: 必填字段与创建日期（ctx.archive 已由 locate_archive 填充）"""
        plugin_id = ctx.plugin.id
        pkg = ctx.package_json
        ctx.publisher, ctx.name, ctx.version = (
            metadata.require_field(pkg, f, plugin_id) for f in metadata.REQUIRED_FIELDS
        )
        ctx.creation_date = metadata.require_creation_date(ctx.archive, plugin_id)

    def derive_metadata(self, ctx: PluginContext) -> None:
        """步骤3: description / displayName / category / icon / repository / preferences"""
        plugin_id = ctx.plugin.id
        pkg = ctx.package_json
        ctx.description = metadata.derive_description(
            pkg, ctx.nls, plugin_id, self.diagnostics,
        )
        ctx.display_name = metadata.derive_display_name(pkg, ctx.nls, ctx.description)
        ctx.category = metadata.derive_category(pkg, plugin_id, self.diagnostics)
        ctx.icon = metadata.derive_icon(pkg, plugin_id, self.diagnostics)
        ctx.repository = metadata.derive_repository(pkg, ctx.plugin)
        ctx.preferences = metadata.preferences_json(ctx.plugin.preferences)

    def resolve_dependencies(self, ctx: PluginContext) -> None:
        """步骤4: 依赖解析"""
        resolved = self.resolver.resolve(ctx.plugin)
        ctx.extensions = resolved.extensions
        ctx.vsix_infos = resolved.vsix_infos

    async def build_container(self, ctx: PluginContext) -> None:
        """步骤5: sidecar 容器，唯一的挂起点"""
        ctx.container = await self.sidecar_builder.build(
            ctx.plugin.sidecar, ctx.plugin.id, ctx.preferences,
        )

    def assemble(self, ctx: PluginContext) -> OutputSpec:
        """步骤6: 组装输出记录"""
        plugin = ctx.plugin
        containers = [ctx.container] if ctx.container is not None else None
        return OutputSpec(
            id=plugin.id,
            publisher=ctx.publisher,
            name=ctx.name,
            version=ctx.version,
            display_name=ctx.display_name,
            description=ctx.description,
            category=ctx.category,
            icon=ctx.icon,
            repository=ctx.repository,
            first_publication_date=ctx.creation_date,
            latest_update_date=ctx.run_date,
            featured=plugin.featured,
            aliases=list(plugin.aliases),
            spec=PluginSpec(extensions=ctx.extensions, containers=containers),
            vsix_infos=ctx.vsix_infos,
        )

    async def run(self, ctx: PluginContext) -> OutputSpec:
        """按顺序执行全部步骤"""
        self.locate_archive(ctx)
        self.check_required(ctx)
        self.derive_metadata(ctx)
        self.resolve_dependencies(ctx)
        await self.build_container(ctx)
        return self.assemble(ctx)
