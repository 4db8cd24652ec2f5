"""元信息推导函数单元测试"""

from __future__ import annotations

import pytest

from pluginmeta.core import metadata
from pluginmeta.core.diagnostics import CollectingDiagnostics
from pluginmeta.core.exceptions import MissingCreationDateError, MissingRequiredFieldError
from pluginmeta.core.models import ArchiveInfo


class TestFirstPresent:
    def test_first_non_none_wins(self) -> None:
        assert metadata.first_present(None, "a", "b") == "a"

    def test_empty_string_counts_as_present(self) -> None:
        assert metadata.first_present("", "b") == ""

    def test_default(self) -> None:
        assert metadata.first_present(None, None, default="d") == "d"
        assert metadata.first_present() is None


class TestLocalize:
    @pytest.mark.parametrize("value, nls, expected", [
        ("%desc%", {"desc": "Localized"}, "Localized"),
        ("%desc%", {"other": "x"}, "%desc%"),
        ("%desc%", None, "%desc%"),
        ("%desc%", {}, "%desc%"),
        ("plain text", {"plain text": "x"}, "plain text"),
        ("50% off%", {" off": "x"}, "50% off%"),
        ("%%", {"": "x"}, "%%"),
    ])
    def test_localize(self, value, nls, expected) -> None:
        assert metadata.localize(value, nls) == expected


class TestRequired:
    def test_present(self) -> None:
        assert metadata.require_field({"name": "Go"}, "name", "p") == "Go"

    def test_missing(self) -> None:
        with pytest.raises(MissingRequiredFieldError, match="No publisher field") as exc_info:
            metadata.require_field({}, "publisher", "my/plugin")
        assert exc_info.value.plugin_id == "my/plugin"

    def test_creation_date(self) -> None:
        archive = ArchiveInfo(uri="http://a.vsix", plugin_id="p", creation_date="2020-01-01")
        assert metadata.require_creation_date(archive, "p") == "2020-01-01"
        archive.creation_date = None
        with pytest.raises(MissingCreationDateError, match="http://a.vsix"):
            metadata.require_creation_date(archive, "p")


class TestDescription:
    def test_localized(self, diagnostics: CollectingDiagnostics) -> None:
        pkg = {"name": "n", "description": "%d%"}
        assert metadata.derive_description(pkg, {"d": "D"}, "p", diagnostics) == "D"
        assert diagnostics.errors == []

    def test_missing_falls_back_to_name(self, diagnostics: CollectingDiagnostics) -> None:
        assert metadata.derive_description({"name": "n"}, None, "p", diagnostics) == "n"
        assert diagnostics.errors == ["No description field in package.json found for p"]


class TestDisplayName:
    def test_localized(self) -> None:
        pkg = {"name": "n", "displayName": "%dn%"}
        assert metadata.derive_display_name(pkg, {"dn": "Display"}, "desc") == "Display"

    def test_falls_back_to_description(self) -> None:
        assert metadata.derive_display_name({"name": "n"}, None, "desc") == "desc"

    def test_falls_back_to_name(self) -> None:
        assert metadata.derive_display_name({"name": "n"}, None, None) == "n"


class TestCategory:
    def test_first_category(self, diagnostics: CollectingDiagnostics) -> None:
        pkg = {"categories": ["Linters", "Other"]}
        assert metadata.derive_category(pkg, "p", diagnostics) == "Linters"
        assert diagnostics.errors == []

    @pytest.mark.parametrize("pkg", [{}, {"categories": []}, {"categories": None}])
    def test_default(self, pkg, diagnostics: CollectingDiagnostics) -> None:
        assert metadata.derive_category(pkg, "p", diagnostics) == "Other"
        assert len(diagnostics.errors) == 1


class TestIcon:
    def test_present(self, diagnostics: CollectingDiagnostics) -> None:
        assert metadata.derive_icon({"icon": "i.png"}, "p", diagnostics) == "i.png"
        assert diagnostics.warnings == []

    def test_missing(self, diagnostics: CollectingDiagnostics) -> None:
        assert metadata.derive_icon({}, "p", diagnostics) is None
        assert diagnostics.warnings == ["No icon field in package.json found for p"]
        assert diagnostics.errors == []


class TestRepository:
    @pytest.mark.parametrize("repository, expected", [
        ("http://plain", "http://plain"),
        ({"type": "git", "url": "http://obj"}, "http://obj"),
        ({"type": "git"}, "http://fake-repo"),
        ({"url": {"nested": "http://x"}}, "http://fake-repo"),
        (["http://list"], "http://fake-repo"),
        (None, "http://fake-repo"),
    ])
    def test_repository(self, repository, expected, make_plugin) -> None:
        plugin = make_plugin("p/p")
        pkg = {} if repository is None else {"repository": repository}
        assert metadata.derive_repository(pkg, plugin) == expected


class TestPreferences:
    def test_compact_and_ordered(self) -> None:
        prefs = {"b": 1, "a": [True, None], "c": {"x": "y"}}
        assert metadata.preferences_json(prefs) == '{"b":1,"a":[true,null],"c":{"x":"y"}}'

    def test_none(self) -> None:
        assert metadata.preferences_json(None) is None

    def test_empty_mapping_still_serialized(self) -> None:
        assert metadata.preferences_json({}) == "{}"
