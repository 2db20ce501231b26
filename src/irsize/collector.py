# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Declaration discovery over an IR forest."""

import logging
from typing import Iterable

from irsize.ir import ElementKind, IrDeclaration, IrElement, IrModuleFragment

logger = logging.getLogger(__name__)

REPORTED_KINDS: frozenset[ElementKind] = frozenset(
    {"function", "property", "field", "anonymousInitializer", "class"}
)


class DeclarationCollector:
    """Collect reportable declarations from module roots."""

    def collect(self, modules: Iterable[IrModuleFragment]) -> list[IrDeclaration]:
        """Walk every module tree and gather reportable declarations.

        Descends into every node, matched or not, so nested declarations such
        as local functions are found too.

        Args:
            modules: Module roots in compilation order.

        Returns:
            Declarations in pre-order encounter order, each node once.
        """
        found: dict[IrDeclaration, None] = {}
        module_count = 0
        for module in modules:
            module_count += 1
            self._walk(module, found)
        logger.debug(
            f"Declaration collection completed (modules={module_count} declarations={len(found)})"
        )
        return list(found)

    def _walk(self, root: IrElement, found: dict[IrDeclaration, None]) -> None:
        stack: list[IrElement] = list(reversed(root.children()))
        while stack:
            element = stack.pop()
            if element.kind in REPORTED_KINDS and isinstance(element, IrDeclaration):
                found.setdefault(element, None)
            stack.extend(reversed(element.children()))
