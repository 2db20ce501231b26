# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Qualified keys, size metrics and per-key representative selection."""

import logging
from dataclasses import dataclass
from typing import Iterable, Literal

from irsize.ir import (
    SYNTHETIC_PRIMARY_CONSTRUCTOR,
    ElementKind,
    IrDeclaration,
    IrFunction,
    fq_name_when_available,
)
from irsize.rendering import Renderer

logger = logging.getLogger(__name__)

TypeLabel = Literal[
    "function", "property", "field", "anonymousInitializer", "class", "unknown"
]

UNKNOWN_NAME = "<unknown>"
SYNTHETIC_SUFFIX = "[synthetic]"

_TYPE_LABELS: dict[ElementKind, TypeLabel] = {
    "function": "function",
    "property": "property",
    "field": "field",
    "anonymousInitializer": "anonymousInitializer",
    "class": "class",
}


@dataclass(frozen=True)
class ReportEntry:
    """Represent one reported declaration group.

    Attributes:
        key: Qualified key shared by every declaration of the group.
        declaration: Largest declaration of the group.
        size: Length of the representative's rendered text.
        type: Report label for the representative's kind.
    """

    key: str
    declaration: IrDeclaration
    size: int
    type: TypeLabel


def qualified_key(declaration: IrDeclaration, renderer: Renderer) -> str:
    """Build the grouping key of a declaration.

    The key is the qualified name (or ``<unknown>``), followed for functions
    by the rendered parameter types in parentheses, followed by
    ``[synthetic]`` for synthetic primary constructors.

    Args:
        declaration: Declaration to key.
        renderer: Renderer used for parameter types.

    Returns:
        Stable grouping key.
    """
    fq_name = fq_name_when_available(declaration)
    key = UNKNOWN_NAME if fq_name is None else fq_name
    if isinstance(declaration, IrFunction):
        parameter_types = ", ".join(
            renderer.render(parameter.type) for parameter in declaration.value_parameters
        )
        key += f"({parameter_types})"
    if declaration.origin == SYNTHETIC_PRIMARY_CONSTRUCTOR:
        key += SYNTHETIC_SUFFIX
    return key


def type_label(declaration: IrDeclaration) -> TypeLabel:
    """Map a declaration kind to its report label."""
    return _TYPE_LABELS.get(declaration.kind, "unknown")


class SizeResolver:
    """Group declarations by qualified key and keep the largest of each."""

    def __init__(self, renderer: Renderer) -> None:
        self._renderer = renderer

    def resolve(self, declarations: Iterable[IrDeclaration]) -> list[ReportEntry]:
        """Resolve declarations into one report entry per qualified key.

        Args:
            declarations: Collected declarations in discovery order.

        Returns:
            Entries in first-seen key order. Within a group the first
            declaration with the longest rendering wins.
        """
        groups: dict[str, list[IrDeclaration]] = {}
        declaration_count = 0
        for declaration in declarations:
            declaration_count += 1
            key = qualified_key(declaration, self._renderer)
            groups.setdefault(key, []).append(declaration)

        entries: list[ReportEntry] = []
        for key, members in groups.items():
            sized = [
                (member, len(self._renderer.render(member))) for member in members
            ]
            representative, size = max(sized, key=lambda pair: pair[1])
            entries.append(
                ReportEntry(
                    key=key,
                    declaration=representative,
                    size=size,
                    type=type_label(representative),
                )
            )
        logger.debug(
            f"Size resolution completed (declarations={declaration_count} groups={len(entries)})"
        )
        return entries
