"""核心数据模型

输入实体（PluginDescriptor / ArchiveInfo / SidecarConfig）由调用方在
下载、解包、解析之后构造，核心流水线只读不写。
输出实体（OutputSpec / PluginSpec / ContainerSpec）每个插件新建一份。

from_dict 接受插件注册表 YAML 使用的 camelCase 键；to_dict 产出 meta.yaml 形状的映射。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

META_YAML_TYPE = "VS Code extension"

# =========================================================================
# 输入模型
# =========================================================================


@dataclass
class Repository:
    """插件声明的源码仓库"""

    url: str = ""
    revision: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Repository:
        data = data or {}
        return cls(url=data.get("url", ""), revision=data.get("revision", ""))


@dataclass
class EnvVar:
    name: str
    value: str = ""


@dataclass
class Endpoint:
    """sidecar 暴露的端点"""

    name: str
    target_port: int
    public: bool = False
    attributes: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Endpoint:
        return cls(
            name=data["name"],
            target_port=int(data["targetPort"]),
            public=bool(data.get("public", False)),
            attributes=dict(data.get("attributes") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "public": self.public,
            "targetPort": self.target_port,
        }
        if self.attributes:
            result["attributes"] = dict(self.attributes)
        return result


@dataclass
class VolumeMount:
    path: str
    name: str


@dataclass
class SidecarConfig:
    """插件可选的 sidecar 进程配置

    image 只是传给外部镜像解析器的参考输入，不会原样拷贝到输出。
    """

    image: str
    name: str | None = None
    memory_request: str | None = None
    memory_limit: str | None = None
    cpu_request: str | None = None
    cpu_limit: str | None = None
    command: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)
    env: list[EnvVar] = field(default_factory=list)
    mount_sources: bool | None = None
    endpoints: list[Endpoint] = field(default_factory=list)
    volume_mounts: list[VolumeMount] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SidecarConfig:
        """从注册表中的 sidecar 段构造"""
        return cls(
            image=data.get("image", ""),
            name=data.get("name"),
            memory_request=data.get("memoryRequest"),
            memory_limit=data.get("memoryLimit"),
            cpu_request=data.get("cpuRequest"),
            cpu_limit=data.get("cpuLimit"),
            command=list(data.get("command") or []),
            args=list(data.get("args") or []),
            env=[
                EnvVar(name=e["name"], value=str(e.get("value", "")))
                for e in data.get("env") or []
            ],
            mount_sources=data.get("mountSources"),
            endpoints=[Endpoint.from_dict(e) for e in data.get("endpoints") or []],
            volume_mounts=[
                VolumeMount(path=v["path"], name=v["name"])
                for v in data.get("volumeMounts") or []
            ],
        )


@dataclass
class MetaYamlOverrides:
    """metaYaml 覆盖段：额外依赖 / 跳过依赖"""

    extra_dependencies: list[str] = field(default_factory=list)
    skip_dependencies: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> MetaYamlOverrides:
        data = data or {}
        return cls(
            extra_dependencies=list(data.get("extraDependencies") or []),
            skip_dependencies=list(data.get("skipDependencies") or []),
        )


@dataclass
class ArchiveInfo:
    """单个扩展归档（vsix）的解析结果

    plugin_id 是所属插件的 id，不持有插件对象本身。
    package_json 保持解析后的原始映射，字段缺失即视为未声明。
    """

    uri: str
    plugin_id: str
    package_json: dict[str, Any] | None = None
    package_nls_json: dict[str, str] | None = None
    creation_date: str | None = None
    downloaded_archive: str = ""
    unpacked_archive: str = ""
    unpacked_extension_root_dir: str = ""


@dataclass
class PluginDescriptor:
    """一个插件的完整输入描述"""

    id: str
    extension: str
    repository: Repository = field(default_factory=Repository)
    featured: bool = False
    aliases: list[str] = field(default_factory=list)
    preferences: dict[str, Any] | None = None
    sidecar: SidecarConfig | None = None
    meta_yaml: MetaYamlOverrides | None = None
    vsix_infos: dict[str, ArchiveInfo] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PluginDescriptor:
        """从注册表条目构造；vsix_infos 由调用方在解析归档后补充"""
        sidecar = data.get("sidecar")
        meta_yaml = data.get("metaYaml")
        return cls(
            id=data["id"],
            extension=data["extension"],
            repository=Repository.from_dict(data.get("repository")),
            featured=bool(data.get("featured", False)),
            aliases=list(data.get("aliases") or []),
            preferences=data.get("preferences"),
            sidecar=SidecarConfig.from_dict(sidecar) if sidecar else None,
            meta_yaml=MetaYamlOverrides.from_dict(meta_yaml) if meta_yaml is not None else None,
        )

    def add_archive(self, info: ArchiveInfo) -> None:
        self.vsix_infos[info.uri] = info

    def primary_archive(self) -> ArchiveInfo | None:
        """插件自身的归档：优先取以 extension 为键的条目，否则取 plugin_id 属于本插件的第一个归档

        合并进来的依赖归档不会被当作本插件的归档。
        """
        info = self.vsix_infos.get(self.extension)
        if info is None:
            info = next((a for a in self.vsix_infos.values() if a.plugin_id == self.id), None)
        return info


# =========================================================================
# 输出模型
# =========================================================================


@dataclass
class ContainerSpec:
    """由 sidecar 配置生成的容器规格"""

    image: str
    name: str | None = None
    memory_request: str | None = None
    memory_limit: str | None = None
    cpu_request: str | None = None
    cpu_limit: str | None = None
    command: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)
    env: list[EnvVar] = field(default_factory=list)
    mount_sources: bool | None = None
    endpoints: list[Endpoint] = field(default_factory=list)
    volume_mounts: list[VolumeMount] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"image": self.image}
        optional = {
            "name": self.name,
            "memoryRequest": self.memory_request,
            "memoryLimit": self.memory_limit,
            "cpuRequest": self.cpu_request,
            "cpuLimit": self.cpu_limit,
            "mountSources": self.mount_sources,
        }
        result.update({k: v for k, v in optional.items() if v is not None})
        if self.command:
            result["command"] = list(self.command)
        if self.args:
            result["args"] = list(self.args)
        if self.env:
            result["env"] = [{"name": e.name, "value": e.value} for e in self.env]
        if self.endpoints:
            result["endpoints"] = [e.to_dict() for e in self.endpoints]
        if self.volume_mounts:
            result["volumeMounts"] = [
                {"path": v.path, "name": v.name} for v in self.volume_mounts
            ]
        return result


@dataclass
class PluginSpec:
    """meta 记录中的 spec 段

    containers 为 None 表示插件没有 sidecar；否则恰好一个元素。
    """

    extensions: list[str] = field(default_factory=list)
    containers: list[ContainerSpec] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.containers:
            result["containers"] = [c.to_dict() for c in self.containers]
        result["extensions"] = list(self.extensions)
        return result


@dataclass
class OutputSpec:
    """单个插件的最终 meta 记录，与输入顺序一一对应"""

    id: str
    publisher: str
    name: str
    version: str
    display_name: str
    description: str
    category: str
    repository: str
    first_publication_date: str
    latest_update_date: str
    spec: PluginSpec
    icon: str | None = None
    featured: bool = False
    aliases: list[str] = field(default_factory=list)
    type: str = META_YAML_TYPE
    vsix_infos: dict[str, ArchiveInfo] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """meta.yaml 形状的映射（不含 vsix_infos 注册表）"""
        result: dict[str, Any] = {
            "id": self.id,
            "publisher": self.publisher,
            "name": self.name,
            "version": self.version,
            "type": self.type,
            "displayName": self.display_name,
            "description": self.description,
            "category": self.category,
            "repository": self.repository,
            "firstPublicationDate": self.first_publication_date,
            "latestUpdateDate": self.latest_update_date,
        }
        if self.icon is not None:
            result["icon"] = self.icon
        if self.featured:
            result["featured"] = True
        if self.aliases:
            result["aliases"] = list(self.aliases)
        result["spec"] = self.spec.to_dict()
        return result
