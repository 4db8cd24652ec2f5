"""基于配置的 sidecar 镜像解析器

默认的 ImageResolver 实现，不访问网络：
  1. sidecar_image_overrides 中按插件 id 命中则直接使用
  2. 否则用 sidecar_image_template 展开，占位符:
       {image}     sidecar 配置中的 image
       {plugin_id} 插件 id
       {tag}       由插件 id 转换出的镜像 tag（/ 替换为 -）
"""

from __future__ import annotations

import logging

from pluginmeta.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


class ConfiguredImageResolver:
    """模板 + 覆盖表的镜像解析器"""

    def __init__(
        self,
        template: str = "{image}",
        overrides: dict[str, str] | None = None,
    ) -> None:
        self.template = template
        self.overrides = dict(overrides or {})

    async def resolve_image(self, plugin_id: str, base_image: str) -> str:
        if plugin_id in self.overrides:
            return self.overrides[plugin_id]
        try:
            image = self.template.format(
                image=base_image,
                plugin_id=plugin_id,
                tag=plugin_id.replace("/", "-"),
            )
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigError(
                f"sidecar 镜像模板无效: {self.template!r}: {e}", plugin_id=plugin_id,
            ) from e
        if not image:
            raise ConfigError(
                f"插件 {plugin_id} 的 sidecar 镜像为空", plugin_id=plugin_id,
            )
        return image
