"""
GammonBrain package bootstrap.

Subpackages:
- domain: Move analyzers, their registry, and per-robot AI sessions.
- infrastructure: Configuration, plugin discovery, and the GNU Backgammon bridge.
- interface: HTTP, CLI, and telemetry adapters.
"""

__all__ = ["domain", "infrastructure", "interface"]
