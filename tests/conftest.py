"""测试共享 fixture - 插件描述工厂 + 假镜像解析器

make_plugin("foo/bar") 构造一个完整可用的插件：
  - 自身链接 https://fake-foo-bar-first.vsix
  - 一个以该链接为键的 ArchiveInfo（package.json 取自 Go 扩展的常见字段）
  - 带全部字段的 sidecar 配置与两条 preferences
测试用例只修改与断言相关的差异部分。
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any

import pytest

import pluginmeta.core.config as cfgmod
from pluginmeta.core.diagnostics import CollectingDiagnostics
from pluginmeta.core.models import (
    ArchiveInfo,
    Endpoint,
    EnvVar,
    MetaYamlOverrides,
    PluginDescriptor,
    Repository,
    SidecarConfig,
    VolumeMount,
)
from pluginmeta.services.container import reset_container

FAKE_IMAGE = "quay-fake.io/my-image:123"

_PACKAGE_JSON: dict[str, Any] = {
    "name": "Go",
    "displayName": "Go",
    "version": "0.23.0",
    "publisher": "golang",
    "description": "Rich Go language support for Visual Studio Code",
    "categories": ["Programming Languages", "Snippets", "Linters"],
    "icon": "media/go-logo-blue.png",
    "repository": {"type": "git", "url": "https://github.com/golang/vscode-go"},
}


class FakeImageResolver:
    """记录调用并返回固定镜像；fail 为异常实例时抛出"""

    def __init__(self, image: str = FAKE_IMAGE, fail: Exception | None = None) -> None:
        self.image = image
        self.fail = fail
        self.calls: list[tuple[str, str]] = []

    async def resolve_image(self, plugin_id: str, base_image: str) -> str:
        self.calls.append((plugin_id, base_image))
        if self.fail is not None:
            raise self.fail
        return self.image


def _make_sidecar() -> SidecarConfig:
    return SidecarConfig(
        image="fake-image",
        name="my-name",
        memory_request="1m",
        memory_limit="2m",
        cpu_request="3m",
        cpu_limit="4m",
        command=["/bin/sh"],
        args=["-c", "./entrypoint.sh"],
        env=[EnvVar(name="my-env-name", value="my-env-value")],
        mount_sources=True,
        endpoints=[
            Endpoint(
                name="configuration-endpoint", public=True, target_port=61436,
                attributes={"protocol": "http"},
            ),
            Endpoint(
                name="report-endpoint", public=True, target_port=61435,
                attributes={"protocol": "http"},
            ),
        ],
        volume_mounts=[
            VolumeMount(path="/home/theia/.ivy2", name="ivy2"),
            VolumeMount(path="/home/theia/.m2", name=".m2"),
        ],
    )


def _make_plugin(
    plugin_id: str,
    *,
    extension: str | None = None,
    extra: list[str] | None = None,
    skip: list[str] | None = None,
) -> PluginDescriptor:
    link = extension or f"https://fake-{plugin_id.replace('/', '-')}-first.vsix"
    meta_yaml = None
    if extra is not None or skip is not None:
        meta_yaml = MetaYamlOverrides(
            extra_dependencies=list(extra or []),
            skip_dependencies=list(skip or []),
        )
    plugin = PluginDescriptor(
        id=plugin_id,
        extension=link,
        repository=Repository(url="http://fake-repo", revision="main"),
        preferences={"my.preferences1": True, "debug.node.useV3": False},
        sidecar=_make_sidecar(),
        meta_yaml=meta_yaml,
    )
    plugin.add_archive(ArchiveInfo(
        uri=link,
        plugin_id=plugin_id,
        package_json=deepcopy(_PACKAGE_JSON),
        package_nls_json={"key1": "value1"},
        creation_date="2020-01-01",
        downloaded_archive="/fake/downloaded-archive",
        unpacked_archive="/fake/unpacked-archive",
        unpacked_extension_root_dir="/fake/root-dir",
    ))
    return plugin


def _package_json_of(plugin: PluginDescriptor) -> dict[str, Any]:
    archive = plugin.vsix_infos[plugin.extension]
    assert archive.package_json is not None
    return archive.package_json


@pytest.fixture()
def fake_image() -> str:
    return FAKE_IMAGE


@pytest.fixture()
def make_sidecar():
    """sidecar 配置工厂：全部字段都已填充"""
    return _make_sidecar


@pytest.fixture()
def make_plugin():
    """插件描述工厂：make_plugin(id, extension=None, extra=None, skip=None)"""
    return _make_plugin


@pytest.fixture()
def package_json_of():
    """取插件主归档的 package.json（可原地修改）"""
    return _package_json_of


@pytest.fixture()
def make_resolver():
    """假镜像解析器工厂：make_resolver(image=FAKE_IMAGE, fail=None)"""
    return FakeImageResolver


@pytest.fixture()
def resolver() -> FakeImageResolver:
    return FakeImageResolver()


@pytest.fixture()
def diagnostics() -> CollectingDiagnostics:
    return CollectingDiagnostics()


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch):
    """每个测试使用独立的默认配置与全局容器"""
    monkeypatch.setattr(cfgmod, "_current", cfgmod.Config())
    reset_container()
    yield
    reset_container()
