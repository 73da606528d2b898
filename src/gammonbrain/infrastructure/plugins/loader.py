from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path
from types import ModuleType

import structlog

from gammonbrain.domain.analyzers.move_analyzers import MoveAnalyzer

PLUGIN_SUFFIXES = (".py",)
PLUGIN_EXPORT = "default"

logger = structlog.get_logger("gammonbrain.plugins")


def load_analyzers_from_plugins_dir(plugins_dir: str | Path) -> dict[str, MoveAnalyzer]:
    """Import every plugin module in ``plugins_dir`` and instantiate its analyzer.

    A plugin is a ``.py`` file defining a module-level ``default`` that is a
    zero-argument analyzer class. It is registered under the file's stem.
    Files that do not follow this shape are skipped. Failing to list the
    directory itself propagates to the caller.
    """
    root = Path(plugins_dir)
    # Listing first means an unreadable directory aborts before anything is imported.
    entries = sorted(root.iterdir())

    analyzers: dict[str, MoveAnalyzer] = {}
    for path in entries:
        if path.suffix not in PLUGIN_SUFFIXES or path.name.startswith("__"):
            continue
        if not path.is_file():
            continue

        name = path.stem
        try:
            module = _import_plugin(name, path)
        except Exception as exc:
            logger.warning("plugin_import_failed", plugin=name, path=str(path), error=str(exc))
            continue

        plugin_class = getattr(module, PLUGIN_EXPORT, None)
        if not inspect.isclass(plugin_class):
            logger.debug("plugin_skipped", plugin=name, reason="no default export")
            continue

        try:
            analyzer = plugin_class()
        except Exception as exc:
            logger.warning("plugin_construct_failed", plugin=name, error=str(exc))
            continue

        if not callable(getattr(analyzer, "select_move", None)):
            logger.debug("plugin_skipped", plugin=name, reason="missing select_move")
            continue

        analyzers[name] = analyzer
        logger.info("plugin_loaded", plugin=name, analyzer=plugin_class.__name__)

    return analyzers


def _import_plugin(name: str, path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(f"gammonbrain_plugins.{name}", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load plugin from {path}")
    module = importlib.util.module_from_spec(spec)
    # Dataclasses and pickling resolve classes through sys.modules.
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(spec.name, None)
        raise
    return module


__all__ = ["PLUGIN_EXPORT", "PLUGIN_SUFFIXES", "load_analyzers_from_plugins_dir"]
