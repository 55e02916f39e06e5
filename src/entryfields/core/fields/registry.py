#!/usr/bin/env python3
"""
Purpose:
    Implements the field registry: a builder that collects field modules from
    a fixed registration list (core first, then custom, then extras) and an
    immutable snapshot giving uniform per-capability lookup by type name.
"""
from __future__ import annotations

import importlib
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from loguru import logger

from entryfields.core.constants import CAPABILITIES, STRUCTURAL_TYPES
from entryfields.core.errors import FieldRegistryError, UnknownFieldType
from entryfields.core.fields.module import MISSING, FieldModule
from entryfields.core.utils import is_valid_type_name


@dataclass(frozen=True)
class TypeEntry:
    """
    Lightweight record describing a registered type (for listings/UX).
    - name: type name
    - label: display label (falls back to the name)
    - sources: registration sources in order, e.g. ("core", "custom")
    - capabilities: supplied capability slots after merging
    """
    name: str
    label: str
    sources: Tuple[str, ...]
    capabilities: Tuple[str, ...]


# --- Builder --- #

class RegistryBuilder:
    """
    Collects field modules before the registry is frozen.

    Duplicate policy: registrations are applied in call order and the last
    module to supply a capability wins it; slots a later module leaves empty
    keep the earlier module's value. Core modules are registered before
    custom ones, so custom modules override or extend core types.
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[str, Any]] = {cap: {} for cap in CAPABILITIES}
        self._supports_list: Dict[str, bool] = {}
        self._sources: Dict[str, List[str]] = {}

    def register(self, type_name: str, module: FieldModule, *, source: str = "core") -> "RegistryBuilder":
        """
        Register `module` under `type_name`, populating each capability table.

        Raises:
            FieldRegistryError: on an invalid type name, a reserved structural
                type, or a malformed module
        """
        if not isinstance(type_name, str) or not is_valid_type_name(type_name):
            raise FieldRegistryError(f"Invalid field type name {type_name!r}")
        if type_name in STRUCTURAL_TYPES:
            raise FieldRegistryError(f"{type_name!r} is a reserved structural type")
        if not isinstance(module, FieldModule):
            raise FieldRegistryError(
                f"Field type {type_name!r}: expected a FieldModule, got {type(module).__name__}"
            )
        module.validate(type_name)

        for cap in module.capabilities():
            if type_name in self._tables[cap]:
                logger.info(f"Field type {type_name!r}: {cap} overridden by {source} module")
            self._tables[cap][type_name] = getattr(module, cap)
        if module.supports_list is not None:
            self._supports_list[type_name] = module.supports_list
        self._sources.setdefault(type_name, []).append(source)
        logger.debug(f"Registered field type {type_name!r} from {source}: {module.capabilities()}")
        return self

    def register_all(self, modules: Mapping[str, FieldModule], *, source: str) -> "RegistryBuilder":
        """Register a name -> module table in its insertion order."""
        for name, module in modules.items():
            self.register(name, module, source=source)
        return self

    def freeze(self) -> "FieldRegistry":
        """Return an immutable snapshot of the registrations so far."""
        tables = {cap: MappingProxyType(dict(table)) for cap, table in self._tables.items()}
        return FieldRegistry(
            tables=MappingProxyType(tables),
            supports_list=MappingProxyType(dict(self._supports_list)),
            sources=MappingProxyType({k: tuple(v) for k, v in self._sources.items()}),
        )


# --- Snapshot --- #

class FieldRegistry:
    """
    Read-only lookup of field capabilities by type name.

    Never mutated after construction; share one instance per process (see
    `entryfields.core.app.get_context`) or inject one explicitly.
    """

    def __init__(
        self,
        tables: Mapping[str, Mapping[str, Any]],
        supports_list: Mapping[str, bool],
        sources: Mapping[str, Tuple[str, ...]],
    ):
        self._tables = tables
        self._supports_list = supports_list
        self._sources = sources

    # --- Query API --- #

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._sources

    def types(self) -> List[str]:
        """Sorted names of registered types."""
        return sorted(self._sources.keys())

    def get(self, capability: str, type_name: str) -> Any:
        """
        The value a type supplied for `capability`, or None.

        Raises:
            KeyError: if `capability` is not a capability slot name
        """
        if capability not in self._tables:
            raise KeyError(f"Unknown capability {capability!r}; expected one of {list(CAPABILITIES)}")
        return self._tables[capability].get(type_name)

    def require_type(self, type_name: str, field_name: Optional[str] = None) -> None:
        """Raise UnknownFieldType unless `type_name` is registered."""
        if type_name not in self:
            raise UnknownFieldType(type_name, field_name)

    def label(self, type_name: str) -> Optional[str]:
        return self.get("label", type_name)

    def schema(self, type_name: str):
        return self.get("schema", type_name)

    def read_fn(self, type_name: str):
        return self.get("read", type_name)

    def write_fn(self, type_name: str):
        return self.get("write", type_name)

    def sort_fn(self, type_name: str):
        return self.get("sort", type_name)

    def edit_component(self, type_name: str) -> Optional[str]:
        return self.get("edit_component", type_name)

    def view_component(self, type_name: str) -> Optional[str]:
        return self.get("view_component", type_name)

    def has_default(self, type_name: str) -> bool:
        return type_name in self._tables["default_value"]

    def default_value(self, type_name: str) -> Any:
        """
        The type's default value; generators are invoked on every call.
        Returns None when the type supplies no default.
        """
        provider = self._tables["default_value"].get(type_name, MISSING)
        if provider is MISSING:
            return None
        return provider() if callable(provider) else provider

    def supports_list(self, type_name: str) -> bool:
        return self._supports_list.get(type_name, False)

    def entries(self) -> List[TypeEntry]:
        """One record per registered type, sorted by name."""
        rows = []
        for name in self.types():
            caps = tuple(cap for cap in CAPABILITIES if name in self._tables[cap])
            rows.append(TypeEntry(
                name=name,
                label=self.label(name) or name,
                sources=self._sources[name],
                capabilities=caps,
            ))
        return rows


# --- Factory --- #

def build_registry(
    extra: Iterable[Tuple[str, FieldModule]] = (),
    *,
    custom_paths: Iterable[str] = (),
) -> FieldRegistry:
    """
    Build a registry from the fixed registration list.

    Order (later wins per capability):
        1. core field modules (`CORE_FIELDS`)
        2. bundled custom field modules (`CUSTOM_FIELDS`)
        3. modules from `custom_paths` (dotted imports exposing `FIELDS`)
        4. `extra` (name, module) pairs

    Raises:
        FieldRegistryError: if any module is malformed (startup-fatal)
    """
    from entryfields.core.fields.core import CORE_FIELDS
    from entryfields.core.fields.custom import CUSTOM_FIELDS

    builder = RegistryBuilder()
    builder.register_all(CORE_FIELDS, source="core")
    builder.register_all(CUSTOM_FIELDS, source="custom")
    for path in custom_paths:
        builder.register_all(load_custom_fields(path), source=path)
    for name, module in extra:
        builder.register(name, module, source="extra")
    return builder.freeze()


def load_custom_fields(dotted_path: str) -> Mapping[str, FieldModule]:
    """
    Import `dotted_path` and return its `FIELDS` mapping.

    Raises:
        FieldRegistryError: if the module cannot be imported or lacks a `FIELDS` mapping
    """
    try:
        module = importlib.import_module(dotted_path)
    except ImportError as e:
        raise FieldRegistryError(f"Cannot import custom fields module {dotted_path!r}: {e}") from e
    fields = getattr(module, "FIELDS", None)
    if not isinstance(fields, Mapping):
        raise FieldRegistryError(f"Custom fields module {dotted_path!r} must define a FIELDS mapping")
    return fields
