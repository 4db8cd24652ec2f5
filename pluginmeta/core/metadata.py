"""插件元信息推导

每个函数只计算一个输出字段，输入为插件主归档的 package.json 与可选的 NLS 表。
缺失必填字段时抛出致命异常；可降级的字段通过 Diagnostics 旁路报告后使用默认值。

回退链:
  description  -> name
  displayName  -> description -> name
  categories   -> "Other"
  repository   -> 插件自身声明的 repository.url
"""

from __future__ import annotations

import json
import re
from typing import Any

from pluginmeta.core.exceptions import (
    MissingCreationDateError,
    MissingRequiredFieldError,
)
from pluginmeta.core.models import ArchiveInfo, PluginDescriptor
from pluginmeta.core.protocols import Diagnostics

DEFAULT_CATEGORY = "Other"
REQUIRED_FIELDS: tuple[str, ...] = ("publisher", "name", "version")

_NLS_RE = re.compile(r"^%(?P<token>[^%]+)%$")


def first_present(*candidates: Any, default: Any = None) -> Any:
    """返回第一个非 None 的候选值，全部缺失时返回 default"""
    for value in candidates:
        if value is not None:
            return value
    return default


def require_field(package_json: dict[str, Any], field: str, plugin_id: str) -> str:
    value = package_json.get(field)
    if value is None:
        raise MissingRequiredFieldError(field, plugin_id)
    return str(value)


def require_creation_date(archive: ArchiveInfo, plugin_id: str) -> str:
    if not archive.creation_date:
        raise MissingCreationDateError(archive.uri, plugin_id)
    return archive.creation_date


def localize(value: str, nls: dict[str, str] | None) -> str:
    """替换 %token% 形式的本地化占位符；NLS 表或键缺失时原样返回"""
    m = _NLS_RE.match(value)
    if not m or not nls:
        return value
    return nls.get(m.group("token"), value)


def _localized(
    package_json: dict[str, Any], key: str, nls: dict[str, str] | None,
) -> str | None:
    value = package_json.get(key)
    if value is None:
        return None
    return localize(str(value), nls)


def derive_description(
    package_json: dict[str, Any],
    nls: dict[str, str] | None,
    plugin_id: str,
    diagnostics: Diagnostics,
) -> str:
    description = _localized(package_json, "description", nls)
    if description is None:
        diagnostics.error(
            f"No description field in package.json found for {plugin_id}"
        )
    return first_present(description, default=str(package_json.get("name")))


def derive_display_name(
    package_json: dict[str, Any],
    nls: dict[str, str] | None,
    description: str | None,
) -> str:
    """displayName 缺失时依次回退到已解析的 description 与 name"""
    return first_present(
        _localized(package_json, "displayName", nls),
        description,
        default=str(package_json.get("name")),
    )


def derive_category(
    package_json: dict[str, Any], plugin_id: str, diagnostics: Diagnostics,
) -> str:
    categories = package_json.get("categories") or []
    if categories:
        return str(categories[0])
    diagnostics.error(f"No categories field in package.json found for {plugin_id}")
    return DEFAULT_CATEGORY


def derive_icon(
    package_json: dict[str, Any], plugin_id: str, diagnostics: Diagnostics,
) -> str | None:
    icon = package_json.get("icon")
    if icon is None:
        diagnostics.warn(f"No icon field in package.json found for {plugin_id}")
        return None
    return str(icon)


def derive_repository(package_json: dict[str, Any], plugin: PluginDescriptor) -> str:
    """package.json 的 repository 可以是字符串或 {url: ...} 对象

    无法取出字符串 url 时静默回退到插件自身声明的仓库地址。
    """
    repository = package_json.get("repository")
    if isinstance(repository, str):
        return repository
    if isinstance(repository, dict) and isinstance(repository.get("url"), str):
        return repository["url"]
    return plugin.repository.url


def preferences_json(preferences: dict[str, Any] | None) -> str | None:
    """紧凑 JSON，保持插入顺序；未声明 preferences 时返回 None"""
    if preferences is None:
        return None
    return json.dumps(preferences, separators=(",", ":"), ensure_ascii=False)
