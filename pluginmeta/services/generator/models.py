"""生成上下文数据模型"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pluginmeta.core.models import ArchiveInfo, ContainerSpec, PluginDescriptor


@dataclass
class PluginContext:
    """单个插件在各步骤之间传递的中间状态"""

    plugin: PluginDescriptor
    run_date: str
    archive: ArchiveInfo | None = None

    publisher: str = ""
    name: str = ""
    version: str = ""
    creation_date: str = ""

    description: str = ""
    display_name: str = ""
    category: str = ""
    icon: str | None = None
    repository: str = ""
    preferences: str | None = None

    extensions: list[str] = field(default_factory=list)
    vsix_infos: dict[str, ArchiveInfo] = field(default_factory=dict)
    container: ContainerSpec | None = None

    @property
    def package_json(self) -> dict[str, Any]:
        if self.archive is None or self.archive.package_json is None:
            return {}
        return self.archive.package_json

    @property
    def nls(self) -> dict[str, str] | None:
        return self.archive.package_nls_json if self.archive else None
