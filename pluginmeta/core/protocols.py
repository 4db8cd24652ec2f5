"""领域协议定义

生成器依赖的外部能力以 Protocol 描述，构造时注入，
测试中可直接替换为 mock 或收集器实现。
"""

from __future__ import annotations

from typing import Protocol


# =========================================================================
# 镜像解析协议
# =========================================================================

class ImageResolver(Protocol):
    """sidecar 镜像解析器协议

    按插件 id 异步解析出具体镜像；base_image 是 sidecar 配置中的参考值。
    解析失败直接抛出异常，由 SidecarSpecBuilder 转换为致命错误。
    """

    async def resolve_image(self, plugin_id: str, base_image: str) -> str:
        """返回插件 sidecar 的完整镜像名"""
        ...


# =========================================================================
# 诊断输出协议
# =========================================================================

class Diagnostics(Protocol):
    """非致命诊断信息的旁路输出

    warn / error 只用于观察，不影响生成结果。
    """

    def warn(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...
