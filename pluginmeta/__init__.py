"""pluginmeta - 插件元信息生成器

将一批插件描述（每个 IDE 扩展包一个）转换为部署系统可消费的 meta 规格。
"""

__version__ = "0.1.0"
