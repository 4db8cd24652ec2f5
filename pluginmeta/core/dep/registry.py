"""插件查找表

职责:
- 以批次中的插件 id 建立只读索引
- 拒绝同一批次中的重复 id
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from pluginmeta.core.exceptions import DuplicatePluginError
from pluginmeta.core.models import PluginDescriptor

logger = logging.getLogger(__name__)


class PluginIndex:
    """按 id 索引的插件表，构造后只读，可被并发解析共享"""

    def __init__(self, plugins: Iterable[PluginDescriptor]) -> None:
        self._by_id: dict[str, PluginDescriptor] = {}
        for plugin in plugins:
            if plugin.id in self._by_id:
                raise DuplicatePluginError(plugin.id)
            self._by_id[plugin.id] = plugin
        logger.debug("已索引 %d 个插件", len(self._by_id))

    def get(self, plugin_id: str) -> PluginDescriptor | None:
        return self._by_id.get(plugin_id)

    def __contains__(self, plugin_id: object) -> bool:
        return plugin_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[PluginDescriptor]:
        return iter(self._by_id.values())
