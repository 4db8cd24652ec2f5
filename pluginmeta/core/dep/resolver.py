"""插件依赖解析器

职责:
- 按声明顺序遍历插件的 extraDependencies（可选地先遍历 package.json 的
  extensionDependencies），跳过 skipDependencies 中的 id
- 汇总扩展链接列表（自身链接恒在首位，按追加去重）
- 合并各依赖的 vsix 注册表（同一链接先写入者保留）

只遍历直接声明的依赖，不递归展开依赖的依赖。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pluginmeta.core.dep.registry import PluginIndex
from pluginmeta.core.exceptions import DependencyNotFoundError
from pluginmeta.core.models import ArchiveInfo, PluginDescriptor

logger = logging.getLogger(__name__)


@dataclass
class ResolvedDependencies:
    """单个插件的依赖解析结果，容器为新建对象，不与输入共享"""

    extensions: list[str] = field(default_factory=list)
    vsix_infos: dict[str, ArchiveInfo] = field(default_factory=dict)


def extension_dependency_ids(target: PluginDescriptor) -> list[str]:
    """将主归档 package.json 中的 publisher.name 依赖转换为 publisher/name 形式的 id"""
    archive = target.primary_archive()
    if archive is None or not archive.package_json:
        return []
    deps = archive.package_json.get("extensionDependencies") or []
    return [str(dep).replace(".", "/", 1) for dep in deps]


class DependencyResolver:
    """插件依赖解析器 - 只读取 PluginIndex，不修改任何输入"""

    def __init__(
        self,
        index: PluginIndex,
        follow_extension_dependencies: bool = False,
    ) -> None:
        self.index = index
        self.follow_extension_dependencies = follow_extension_dependencies

    def declared_ids(self, target: PluginDescriptor) -> list[str]:
        """按声明顺序返回需要遍历的依赖 id（重复 id 只保留第一次）"""
        ids: list[str] = []
        if self.follow_extension_dependencies:
            ids.extend(extension_dependency_ids(target))
        if target.meta_yaml is not None:
            ids.extend(target.meta_yaml.extra_dependencies)
        return list(dict.fromkeys(ids))

    def resolve(self, target: PluginDescriptor) -> ResolvedDependencies:
        result = ResolvedDependencies(
            extensions=[target.extension],
            vsix_infos=dict(target.vsix_infos),
        )
        skipped = set(target.meta_yaml.skip_dependencies) if target.meta_yaml else set()

        for dep_id in self.declared_ids(target):
            dependency = self.index.get(dep_id)
            if dependency is None:
                raise DependencyNotFoundError(dep_id, target.id)
            if dep_id in skipped:
                logger.debug("跳过依赖 %s (插件 %s)", dep_id, target.id)
                continue
            if dependency.extension not in result.extensions:
                result.extensions.append(dependency.extension)
            for uri, info in dependency.vsix_infos.items():
                result.vsix_infos.setdefault(uri, info)

        logger.debug(
            "插件 %s 依赖解析完成: %d 个扩展, %d 个 vsix",
            target.id, len(result.extensions), len(result.vsix_infos),
        )
        return result
