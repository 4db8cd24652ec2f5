"""统一异常体系

所有业务异常继承 PluginMetaError，调用方可按 code 区分失败类型。
任一致命异常都会中止整批 compute 调用，不返回部分结果。
"""

from __future__ import annotations


class PluginMetaError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str, *, plugin_id: str = "") -> None:
        super().__init__(message)
        self.plugin_id = plugin_id


class ConfigError(PluginMetaError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class DuplicatePluginError(PluginMetaError):
    """同一批次中出现重复的插件 id"""

    code = "DUPLICATE_PLUGIN"

    def __init__(self, plugin_id: str) -> None:
        super().__init__(
            f"Duplicate plug-in id {plugin_id} in the same batch",
            plugin_id=plugin_id,
        )


class MissingPackageDescriptorError(PluginMetaError):
    """插件自身的归档没有解析出 package.json"""

    code = "MISSING_PACKAGE_DESCRIPTOR"

    def __init__(self, plugin_id: str) -> None:
        super().__init__(
            f"No package.json found for {plugin_id}", plugin_id=plugin_id,
        )


class MissingRequiredFieldError(PluginMetaError):
    """package.json 缺少 publisher / name / version 之一"""

    code = "MISSING_REQUIRED_FIELD"

    def __init__(self, field: str, plugin_id: str) -> None:
        super().__init__(
            f"No {field} field in package.json found for {plugin_id}",
            plugin_id=plugin_id,
        )
        self.field = field


class MissingCreationDateError(PluginMetaError):
    """主归档缺少创建日期"""

    code = "MISSING_CREATION_DATE"

    def __init__(self, uri: str, plugin_id: str) -> None:
        super().__init__(
            f"No creation date found for vsix {uri} of plug-in {plugin_id}",
            plugin_id=plugin_id,
        )
        self.uri = uri


class DependencyNotFoundError(PluginMetaError):
    """声明的额外依赖不在本批次中"""

    code = "DEPENDENCY_NOT_FOUND"

    def __init__(self, dependency_id: str, plugin_id: str) -> None:
        super().__init__(
            f"Unable to find the dependency id {dependency_id} "
            f"required by plug-in {plugin_id}",
            plugin_id=plugin_id,
        )
        self.dependency_id = dependency_id


class ImageResolutionError(PluginMetaError):
    """外部镜像解析器失败"""

    code = "IMAGE_RESOLUTION_FAILED"

    def __init__(self, plugin_id: str, reason: str) -> None:
        super().__init__(
            f"Unable to resolve sidecar image for plug-in {plugin_id}: {reason}",
            plugin_id=plugin_id,
        )
