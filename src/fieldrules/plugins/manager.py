"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus local directory discovery from ``.fieldrules/plugins/``.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from types import ModuleType

import pluggy

from fieldrules.domain.catalog import register_rule, register_rule_factory
from fieldrules.plugins.hookspecs import FieldRulesHookSpec

PROJECT_NAME = "fieldrules"
ENTRY_POINT_GROUP = "fieldrules.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and catalog registration."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(FieldRulesHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Registers every rule the plugins expose into the catalog and
        returns the names of the loaded plugins.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        for plugin in self._pm.get_plugins():
            self._register_plugin_rules(plugin, self._name_of(plugin))
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        if self._loaded:
            self._register_plugin_rules(plugin, resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._name_of(p) for p in self._pm.get_plugins()]

    def _name_of(self, plugin: object) -> str:
        return self._pm.get_name(plugin) or plugin.__class__.__name__

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Register plugin classes found in ``*.py`` files under *local_dir*.

        Files starting with ``_`` are ignored. A file that fails to import,
        or a class that fails to instantiate, is logged and skipped.
        """
        if not local_dir.is_dir():
            return
        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module = _import_plugin_file(py_file)
            if module is None:
                continue
            for index, plugin_cls in enumerate(self._plugin_classes(module)):
                instance = _instantiate(plugin_cls, str(py_file))
                if instance is None:
                    continue
                name = module.__name__ if index == 0 else f"{module.__name__}.{plugin_cls.__name__}"
                self._pm.register(instance, name=name)
                logger.debug("Loaded local plugin %s from %s", plugin_cls.__name__, py_file)

    @classmethod
    def _plugin_classes(cls, module: ModuleType) -> list[type]:
        """Classes defined in *module* (not imported into it) with hookimpls."""
        return [
            obj
            for _name, obj in inspect.getmembers(module, inspect.isclass)
            if obj.__module__ == module.__name__ and cls._has_hook_impls(obj)
        ]

    def _normalize_plugin_instances(self) -> None:
        """Swap entry-point plugin classes for instances of them.

        Pluggy calls hooks on whatever object was registered; a class would
        leave ``self`` unbound.
        """
        classes = [
            p for p in self._pm.get_plugins() if inspect.isclass(p) and self._has_hook_impls(p)
        ]
        for plugin_cls in classes:
            name = self._pm.get_name(plugin_cls) or plugin_cls.__name__
            self._pm.unregister(plugin_cls)
            instance = _instantiate(plugin_cls, f"entry point {name}")
            if instance is not None:
                self._pm.register(instance, name=name)

    # ------------------------------------------------------------------
    # Catalog registration
    # ------------------------------------------------------------------

    @classmethod
    def _register_plugin_rules(cls, plugin: object, plugin_name: str) -> None:
        cls._collect(plugin, plugin_name, "register_rules", register_rule)
        cls._collect(plugin, plugin_name, "register_rule_factories", register_rule_factory)

    @staticmethod
    def _collect(
        plugin: object,
        plugin_name: str,
        hook_name: str,
        register: Callable[[str, Callable[..., object]], None],
    ) -> None:
        """Call one registration hook on *plugin* and feed the catalog."""
        hook = getattr(plugin, hook_name, None)
        if hook is None:
            return

        try:
            mapping = hook()
        except Exception:
            logger.warning("Hook %s failed in plugin %s", hook_name, plugin_name, exc_info=True)
            return

        if mapping is None:
            return
        if not isinstance(mapping, dict):
            logger.warning("Plugin %s returned non-dict from %s", plugin_name, hook_name)
            return

        for name, target in mapping.items():
            try:
                register(name, target)
            except (TypeError, ValueError):
                logger.warning(
                    "Skipping rule %r from plugin %s",
                    name,
                    plugin_name,
                    exc_info=True,
                )

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any ``@hookimpl``-decorated methods.

        Pluggy's ``HookimplMarker("fieldrules")`` sets a ``fieldrules_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "fieldrules_impl", None):
                return True
        return False


def _import_plugin_file(py_file: Path) -> ModuleType | None:
    """Import *py_file* as ``fieldrules_local_plugin_<stem>``, or log and return None."""
    module_name = f"fieldrules_local_plugin_{py_file.stem}"
    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        logger.warning("Could not create module spec for %s", py_file)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
        return None
    return module


def _instantiate(plugin_cls: type, origin: str) -> object | None:
    try:
        return plugin_cls()
    except Exception:
        logger.warning(
            "Failed to instantiate plugin class %s from %s",
            plugin_cls.__name__,
            origin,
            exc_info=True,
        )
        return None
