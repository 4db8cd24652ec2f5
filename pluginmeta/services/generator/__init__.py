"""meta 生成编排模块

- models.py: 单插件生成上下文
- steps.py: 单插件生成步骤
- generator.py: 批次编排（并发、保序、整批失败）
"""

from pluginmeta.services.generator.generator import MetaYamlGenerator
from pluginmeta.services.generator.models import PluginContext
from pluginmeta.services.generator.steps import GenerationSteps

__all__ = [
    "MetaYamlGenerator",
    "PluginContext",
    "GenerationSteps",
]
