"""Output format registry and base class."""

from __future__ import annotations

from typing import Dict, Sequence, Type

from nonogram.core.solution import Solution


class Format:
    """Base output format."""
    name: str = "format"

    def render(self, solutions: Sequence[Solution], count: int) -> str:  # pragma: no cover - abstract
        raise NotImplementedError


FORMAT_REGISTRY: Dict[str, Type[Format]] = {}


def register_format(cls: Type[Format]) -> Type[Format]:
    FORMAT_REGISTRY[cls.name] = cls
    return cls


def get_format(name: str) -> Format:
    try:
        return FORMAT_REGISTRY[name]()
    except KeyError:
        known = ", ".join(sorted(FORMAT_REGISTRY))
        raise KeyError(f"unknown output format {name!r} (known: {known})") from None


from . import grid, plain, yaml_format  # noqa: E402,F401  registers the built-in formats
