# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Canonical text rendering of IR nodes."""

from typing import Protocol, Sequence

from irsize.ir import (
    DEFINED,
    IrAnonymousInitializer,
    IrClass,
    IrElement,
    IrExpression,
    IrField,
    IrFile,
    IrFunction,
    IrModuleFragment,
    IrProperty,
    IrType,
    IrValueParameter,
    IrVariable,
)


class Renderer(Protocol):
    """Render an IR node or type to deterministic text."""

    def render(self, node: IrElement | IrType) -> str:
        """Return the canonical text form of ``node``."""


class KotlinLikeRenderer:
    """Render IR nodes as Kotlin-like pseudo source.

    Output is stable for an unchanged tree and only meant for humans and
    for relative size comparisons.
    """

    def __init__(self, indent: str = "  ") -> None:
        self._indent = indent

    def render(self, node: IrElement | IrType) -> str:
        """Render a node or a type.

        Args:
            node: Element or type to render.

        Returns:
            Rendered text without a trailing newline.
        """
        if isinstance(node, IrType):
            return self.render_type(node)
        return "\n".join(self._lines(node, depth=0))

    def render_type(self, type_: IrType) -> str:
        text = type_.name
        if type_.arguments:
            arguments = ", ".join(self.render_type(arg) for arg in type_.arguments)
            text += f"<{arguments}>"
        if type_.nullable:
            text += "?"
        return text

    def _lines(self, root: IrElement, depth: int) -> list[str]:
        lines: list[str] = []
        stack: list[tuple[IrElement, int] | str] = [(root, depth)]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                lines.append(item)
                continue
            node, level = item
            head, children, tail = self._layout(node, level)
            lines.extend(head)
            stack.extend(reversed(tail))
            stack.extend(reversed(children))
        return lines

    def _layout(
        self, node: IrElement, depth: int
    ) -> tuple[list[str], list[tuple[IrElement, int]], list[str]]:
        """Split a node into its own lines, its nested children and closing lines."""
        pad = self._indent * depth
        if isinstance(node, IrModuleFragment):
            return [f"{pad}// MODULE: {node.name}"], self._nested(node.files, depth), []
        if isinstance(node, IrFile):
            head = [f"{pad}// FILE: {node.name}"]
            if node.package_fq_name:
                head.append(f"{pad}package {node.package_fq_name}")
            return head, self._nested(node.declarations, depth), []
        if isinstance(node, IrExpression):
            return [f"{pad}{line}" for line in node.text.splitlines() or [""]], [], []
        if isinstance(node, IrValueParameter):
            return [f"{pad}{self._value_parameter(node)}"], [], []
        if isinstance(node, IrVariable):
            keyword = "var" if node.is_var else "val"
            header = f"{keyword} {node.name}: {self.render_type(node.type)}"
            if node.initializer is not None:
                header += f" = {node.initializer.text}"
            return [f"{pad}{self._origin(node.origin)}{header}"], [], []
        if isinstance(node, IrFunction):
            return self._function(node, depth)
        if isinstance(node, IrField):
            header = f"field {node.name}: {self.render_type(node.type)}"
            if node.initializer is not None:
                header += f" = {node.initializer.text}"
            return [f"{pad}{self._origin(node.origin)}{header}"], [], []
        if isinstance(node, IrProperty):
            keyword = "var" if node.is_var else "val"
            header = (
                f"{pad}{self._origin(node.origin)}{keyword} {node.name}: "
                f"{self.render_type(node.type)}"
            )
            return [header], self._nested(node.children(), depth + 1), []
        if isinstance(node, IrAnonymousInitializer):
            return self._block(
                f"{pad}{self._origin(node.origin)}init", node.body, depth
            )
        if isinstance(node, IrClass):
            header = f"class {node.name or '<no name provided>'}"
            if node.super_types:
                header += " : " + ", ".join(
                    self.render_type(super_type) for super_type in node.super_types
                )
            return self._block(
                f"{pad}{self._origin(node.origin)}{header}", node.declarations, depth
            )
        return [f"{pad}/* {node.kind} */"], [], []

    def _function(
        self, node: IrFunction, depth: int
    ) -> tuple[list[str], list[tuple[IrElement, int]], list[str]]:
        pad = self._indent * depth
        parameters = ", ".join(
            self._value_parameter(parameter) for parameter in node.value_parameters
        )
        if node.is_constructor:
            header = f"constructor({parameters})"
        else:
            header = (
                f"fun {node.name or '<anonymous>'}({parameters}): "
                f"{self.render_type(node.return_type)}"
            )
        header = f"{pad}{self._origin(node.origin)}{header}"
        if node.body is None:
            return [header], [], []
        return self._block(header, node.body, depth)

    def _block(
        self, header: str, body: Sequence[IrElement], depth: int
    ) -> tuple[list[str], list[tuple[IrElement, int]], list[str]]:
        return (
            [f"{header} {{"],
            self._nested(body, depth + 1),
            [f"{self._indent * depth}}}"],
        )

    def _nested(
        self, children: Sequence[IrElement], depth: int
    ) -> list[tuple[IrElement, int]]:
        return [(child, depth) for child in children]

    def _value_parameter(self, parameter: IrValueParameter) -> str:
        return f"{parameter.name}: {self.render_type(parameter.type)}"

    def _origin(self, origin: str) -> str:
        if origin == DEFINED:
            return ""
        return f"/* {origin} */ "
