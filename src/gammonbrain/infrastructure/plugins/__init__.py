"""Runtime discovery of third-party move analyzers."""

from .loader import PLUGIN_EXPORT, PLUGIN_SUFFIXES, load_analyzers_from_plugins_dir

__all__ = ["PLUGIN_EXPORT", "PLUGIN_SUFFIXES", "load_analyzers_from_plugins_dir"]
