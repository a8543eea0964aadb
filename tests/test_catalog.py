"""Tests for the module catalog loader."""

import pytest

from geotutor.classroom import CatalogError, MissingCatalogEntry, ModuleCatalog
from geotutor.schemas import ModuleRecord


class TestModuleCatalog:

    def test_ordered_modules(self, catalog):
        assert [m.id for m in catalog.get_ordered_modules()] == [
            "basic-shapes", "angles", "transformations",
        ]
        assert catalog.module_ids == ["basic-shapes", "angles", "transformations"]

    def test_lookup(self, catalog):
        assert catalog.get_module_by_id("angles").title == "Angles"
        assert catalog.get_module_by_id("missing") is None
        assert "angles" in catalog
        assert "missing" not in catalog
        assert len(catalog) == 3

    def test_require_missing(self, catalog):
        with pytest.raises(MissingCatalogEntry) as exc_info:
            catalog.require("missing")
        assert exc_info.value.module_id == "missing"

    def test_duplicate_ids_rejected(self):
        with pytest.raises(CatalogError):
            ModuleCatalog([
                ModuleRecord(id="a", title="A", order=1, review_interval=3),
                ModuleRecord(id="a", title="A again", order=2, review_interval=3),
            ])

    def test_ordered_modules_returns_copy(self, catalog):
        catalog.get_ordered_modules().clear()
        assert len(catalog.get_ordered_modules()) == 3


class TestCatalogYaml:

    def test_packaged_catalog(self):
        catalog = ModuleCatalog.from_yaml()
        assert catalog.module_ids[0] == "basic-shapes"
        assert catalog.get_module_by_id("pythagorean-theorem").review_interval == 3

    def test_custom_file(self, tmp_path):
        path = tmp_path / "modules.yaml"
        path.write_text(
            "modules:\n"
            "  - {id: b, title: B, order: 2, review_interval: 4}\n"
            "  - {id: a, title: A, order: 1, review_interval: 3}\n",
            encoding="utf-8",
        )
        catalog = ModuleCatalog.from_yaml(path)
        assert catalog.module_ids == ["a", "b"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            ModuleCatalog.from_yaml(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "modules.yaml"
        path.write_text("modules: [unclosed", encoding="utf-8")
        with pytest.raises(CatalogError):
            ModuleCatalog.from_yaml(path)

    def test_invalid_record(self, tmp_path):
        path = tmp_path / "modules.yaml"
        path.write_text("modules:\n  - {id: a, title: A, order: 1}\n", encoding="utf-8")
        with pytest.raises(CatalogError):
            ModuleCatalog.from_yaml(path)
