"""sidecar 容器规格构造

镜像由外部 ImageResolver 解析，sidecar 配置中的 image 仅作为解析输入。
其余字段原样拷贝；存在 preferences 时追加一个固定名称的环境变量。
"""

from __future__ import annotations

import logging

from pluginmeta.core.exceptions import ImageResolutionError
from pluginmeta.core.models import ContainerSpec, EnvVar, SidecarConfig
from pluginmeta.core.protocols import ImageResolver

logger = logging.getLogger(__name__)

PREFERENCES_ENV_NAME = "CHE_THEIA_SIDECAR_PREFERENCES"


class SidecarSpecBuilder:
    """sidecar 配置 -> ContainerSpec"""

    def __init__(self, image_resolver: ImageResolver) -> None:
        self._resolver = image_resolver

    async def resolve_image(self, sidecar: SidecarConfig, plugin_id: str) -> str:
        try:
            image = await self._resolver.resolve_image(plugin_id, sidecar.image)
        except Exception as e:
            raise ImageResolutionError(plugin_id, str(e) or type(e).__name__) from e
        logger.debug("插件 %s 的 sidecar 镜像: %s", plugin_id, image)
        return image

    async def build(
        self,
        sidecar: SidecarConfig | None,
        plugin_id: str,
        preferences: str | None = None,
    ) -> ContainerSpec | None:
        """构造容器规格；未配置 sidecar 时返回 None"""
        if sidecar is None:
            return None

        image = await self.resolve_image(sidecar, plugin_id)

        env = [EnvVar(name=e.name, value=e.value) for e in sidecar.env]
        if preferences is not None:
            env.append(EnvVar(name=PREFERENCES_ENV_NAME, value=preferences))

        return ContainerSpec(
            image=image,
            name=sidecar.name,
            memory_request=sidecar.memory_request,
            memory_limit=sidecar.memory_limit,
            cpu_request=sidecar.cpu_request,
            cpu_limit=sidecar.cpu_limit,
            command=list(sidecar.command),
            args=list(sidecar.args),
            env=env,
            mount_sources=sidecar.mount_sources,
            endpoints=list(sidecar.endpoints),
            volume_mounts=list(sidecar.volume_mounts),
        )
