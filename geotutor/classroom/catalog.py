"""
ModuleCatalog - Read-only access to the static module catalog.

Provides:
- Lookup by module id
- Modules ordered by their declared order field

The catalog is loaded from a YAML document (default: the packaged
geotutor/data/modules.yaml) and never mutated afterwards.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import ValidationError

from geotutor.schemas import ModuleCatalogDocument, ModuleRecord

from .errors import CatalogError, MissingCatalogEntry


logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent.parent / "data" / "modules.yaml"


class ModuleCatalog:
    """
    Immutable catalog of learning modules.

    Module ids are unique; the catalog is the authority on which ids exist.
    """

    def __init__(self, modules: Iterable[ModuleRecord]):
        self._modules: dict[str, ModuleRecord] = {}
        for module in modules:
            if module.id in self._modules:
                raise CatalogError(f"Duplicate module id in catalog: {module.id}")
            self._modules[module.id] = module
        self._ordered = sorted(self._modules.values(), key=lambda m: m.order)

    @classmethod
    def from_yaml(cls, path: Optional[Path] = None) -> "ModuleCatalog":
        """
        Load a catalog from a YAML file.

        Args:
            path: Path to the catalog YAML (default: packaged modules.yaml)

        Raises:
            CatalogError: If the file is missing, unparsable or fails validation
        """
        file_path = Path(path) if path else DEFAULT_CATALOG_PATH
        if not file_path.exists():
            raise CatalogError(f"Module catalog not found: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
            document = ModuleCatalogDocument.model_validate(raw)
        except (yaml.YAMLError, ValidationError) as e:
            raise CatalogError(f"Invalid module catalog {file_path}: {e}") from e

        logger.debug(f"Loaded {len(document.modules)} modules from {file_path}")
        return cls(document.modules)

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._modules

    @property
    def module_ids(self) -> list[str]:
        """Module ids in catalog order."""
        return [m.id for m in self._ordered]

    def get_module_by_id(self, module_id: str) -> Optional[ModuleRecord]:
        """Get a module by id, or None if absent."""
        return self._modules.get(module_id)

    def require(self, module_id: str) -> ModuleRecord:
        """Get a module by id, raising MissingCatalogEntry if absent."""
        module = self._modules.get(module_id)
        if module is None:
            raise MissingCatalogEntry(module_id)
        return module

    def get_ordered_modules(self) -> list[ModuleRecord]:
        """Get all modules sorted by their order field."""
        return list(self._ordered)
