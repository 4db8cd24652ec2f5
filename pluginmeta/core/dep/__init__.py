"""插件依赖解析模块

- registry.py: 按 id 索引的插件查找表
- resolver.py: extra / skip 依赖解析与 vsix 注册表合并
"""

from pluginmeta.core.dep.registry import PluginIndex
from pluginmeta.core.dep.resolver import DependencyResolver, ResolvedDependencies

__all__ = [
    "PluginIndex",
    "DependencyResolver",
    "ResolvedDependencies",
]
