from __future__ import annotations

from typing import Callable, Iterator, Mapping

from gammonbrain.domain.analyzers.move_analyzers import (
    ExamplePluginAnalyzer,
    FurthestFromOffMoveAnalyzer,
    MoveAnalyzer,
    RandomMoveAnalyzer,
)
from gammonbrain.domain.analyzers.strategic import StrategicMoveAnalyzer

AnalyzerFactory = Callable[[], MoveAnalyzer]

RANDOM = "random"
FURTHEST_FROM_OFF = "furthest_from_off"
STRATEGIC = "strategic"
EXAMPLE = "example"

BUILTIN_ANALYZERS: dict[str, AnalyzerFactory] = {
    RANDOM: RandomMoveAnalyzer,
    FURTHEST_FROM_OFF: FurthestFromOffMoveAnalyzer,
    STRATEGIC: StrategicMoveAnalyzer,
    EXAMPLE: ExamplePluginAnalyzer,
}


class UnknownAnalyzerError(KeyError):
    code = "unknown_analyzer"


class AnalyzerRegistry:
    """Name-keyed table of analyzer factories.

    Built-ins are present from construction. Plugin analyzers arrive already
    instantiated and are registered as shared instances.
    """

    def __init__(self, include_builtins: bool = True) -> None:
        self._factories: dict[str, AnalyzerFactory] = {}
        if include_builtins:
            self._factories.update(BUILTIN_ANALYZERS)

    def register(self, name: str, factory: AnalyzerFactory) -> None:
        self._factories[name] = factory

    def register_instance(self, name: str, analyzer: MoveAnalyzer) -> None:
        self._factories[name] = lambda: analyzer

    def extend(self, analyzers: Mapping[str, MoveAnalyzer]) -> None:
        for name, analyzer in analyzers.items():
            self.register_instance(name, analyzer)

    def create(self, name: str) -> MoveAnalyzer:
        try:
            factory = self._factories[name]
        except KeyError as exc:
            raise UnknownAnalyzerError(name) from exc
        return factory()

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._factories)


__all__ = [
    "AnalyzerFactory",
    "AnalyzerRegistry",
    "BUILTIN_ANALYZERS",
    "EXAMPLE",
    "FURTHEST_FROM_OFF",
    "RANDOM",
    "STRATEGIC",
    "UnknownAnalyzerError",
]
