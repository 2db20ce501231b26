# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Load IR forests from JSON dumps.

One document holds one module::

    {"kind": "module", "name": "main", "files": [
        {"kind": "file", "name": "Foo.kt", "package": "pkg", "declarations": [
            {"kind": "function", "name": "foo",
             "parameters": [{"name": "x", "type": "Int"}],
             "returnType": "Unit", "body": [{"kind": "expression", "text": "println(x)"}]}
        ]}
    ]}

Types are either a plain name or ``{"name", "arguments", "nullable"}``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Iterable

from irsize.ir import (
    DEFINED,
    UNIT,
    IrAnonymousInitializer,
    IrClass,
    IrDeclaration,
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

logger = logging.getLogger(__name__)


class IrLoadError(ValueError):
    """Represent a malformed or unreadable IR dump."""


class IrJsonLoader:
    """Build module fragments from JSON IR dumps."""

    def __init__(self) -> None:
        self._builders: dict[str, Callable[[dict[str, Any]], IrElement]] = {
            "function": self._function,
            "property": self._property,
            "field": self._field,
            "anonymousInitializer": self._anonymous_initializer,
            "class": self._class,
            "variable": self._variable,
            "expression": self._expression,
        }

    def load(self, paths: Iterable[Path]) -> list[IrModuleFragment]:
        """Load one module fragment per file.

        Args:
            paths: JSON dump files in module order.

        Returns:
            Module fragments in the order of ``paths``.

        Raises:
            IrLoadError: If a file cannot be read or does not describe a module.
        """
        modules: list[IrModuleFragment] = []
        for path in paths:
            try:
                document = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, ValueError, RecursionError) as exc:
                raise IrLoadError(f"Cannot read IR dump {path}: {exc}") from exc
            try:
                modules.append(self.module(document))
            except IrLoadError as exc:
                raise IrLoadError(f"Invalid IR dump {path}: {exc}") from exc
            except RecursionError as exc:
                raise IrLoadError(f"Invalid IR dump {path}: nesting too deep") from exc
            logger.debug(f"Loaded IR module (path={path} name={modules[-1].name})")
        return modules

    def module(self, data: Any) -> IrModuleFragment:
        """Build a module fragment from its decoded JSON object."""
        node = self._expect_kind(data, "module")
        return IrModuleFragment(
            name=self._string(node, "name"),
            files=[self._file(item) for item in self._list(node, "files")],
        )

    def _file(self, data: Any) -> IrFile:
        node = self._expect_kind(data, "file")
        return IrFile(
            name=self._string(node, "name"),
            package_fq_name=self._optional_string(node, "package") or "",
            declarations=[
                self._declaration(item) for item in self._list(node, "declarations")
            ],
        )

    def _element(self, data: Any) -> IrElement:
        if not isinstance(data, dict):
            raise IrLoadError(f"Expected an object node, got {type(data).__name__}")
        kind = data.get("kind")
        builder = self._builders.get(kind) if isinstance(kind, str) else None
        if builder is None:
            raise IrLoadError(f"Unsupported node kind: {kind!r}")
        return builder(data)

    def _declaration(self, data: Any) -> IrDeclaration:
        element = self._element(data)
        if not isinstance(element, IrDeclaration):
            raise IrLoadError(f"Expected a declaration, got {element.kind!r}")
        return element

    def _function(self, node: dict[str, Any]) -> IrFunction:
        return IrFunction(
            name=self._optional_string(node, "name"),
            origin=self._origin(node),
            value_parameters=[
                self._value_parameter(item) for item in self._list(node, "parameters")
            ],
            return_type=self._type(node["returnType"]) if "returnType" in node else UNIT,
            body=(
                None
                if node.get("body") is None
                else [self._element(item) for item in self._list(node, "body")]
            ),
            is_constructor=bool(node.get("constructor", False)),
        )

    def _value_parameter(self, data: Any) -> IrValueParameter:
        if not isinstance(data, dict):
            raise IrLoadError(f"Expected a parameter object, got {type(data).__name__}")
        return IrValueParameter(
            name=self._string(data, "name"),
            type=self._type(self._required(data, "type")),
        )

    def _property(self, node: dict[str, Any]) -> IrProperty:
        return IrProperty(
            name=self._optional_string(node, "name"),
            origin=self._origin(node),
            type=self._type(self._required(node, "type")),
            is_var=bool(node.get("var", False)),
            backing_field=self._optional(node, "backingField", IrField),
            getter=self._optional(node, "getter", IrFunction),
            setter=self._optional(node, "setter", IrFunction),
        )

    def _field(self, node: dict[str, Any]) -> IrField:
        return IrField(
            name=self._optional_string(node, "name"),
            origin=self._origin(node),
            type=self._type(self._required(node, "type")),
            initializer=self._initializer(node),
        )

    def _anonymous_initializer(self, node: dict[str, Any]) -> IrAnonymousInitializer:
        return IrAnonymousInitializer(
            origin=self._origin(node),
            body=[self._element(item) for item in self._list(node, "body")],
        )

    def _class(self, node: dict[str, Any]) -> IrClass:
        return IrClass(
            name=self._optional_string(node, "name"),
            origin=self._origin(node),
            super_types=[self._type(item) for item in self._list(node, "superTypes")],
            declarations=[
                self._declaration(item) for item in self._list(node, "declarations")
            ],
        )

    def _variable(self, node: dict[str, Any]) -> IrVariable:
        return IrVariable(
            name=self._optional_string(node, "name"),
            origin=self._origin(node),
            type=self._type(self._required(node, "type")),
            is_var=bool(node.get("var", False)),
            initializer=self._initializer(node),
        )

    def _expression(self, node: dict[str, Any]) -> IrExpression:
        return IrExpression(text=self._string(node, "text"))

    def _initializer(self, node: dict[str, Any]) -> IrExpression | None:
        text = self._optional_string(node, "initializer")
        return None if text is None else IrExpression(text=text)

    def _origin(self, node: dict[str, Any]) -> str:
        return self._optional_string(node, "origin") or DEFINED

    def _optional(self, node: dict[str, Any], key: str, expected: type) -> Any:
        if node.get(key) is None:
            return None
        element = self._element(node[key])
        if not isinstance(element, expected):
            raise IrLoadError(f"Expected {key} to be a {expected.kind}, got {element.kind!r}")
        return element

    def _type(self, data: Any) -> IrType:
        if isinstance(data, str):
            return IrType(data)
        if not isinstance(data, dict):
            raise IrLoadError(f"Expected a type, got {type(data).__name__}")
        return IrType(
            name=self._string(data, "name"),
            arguments=tuple(self._type(item) for item in self._list(data, "arguments")),
            nullable=bool(data.get("nullable", False)),
        )

    def _expect_kind(self, data: Any, kind: str) -> dict[str, Any]:
        if not isinstance(data, dict) or data.get("kind") != kind:
            raise IrLoadError(f"Expected a {kind!r} node")
        return data

    def _required(self, node: Any, key: str) -> Any:
        if not isinstance(node, dict) or key not in node:
            raise IrLoadError(f"Missing required field {key!r}")
        return node[key]

    def _string(self, node: Any, key: str) -> str:
        value = self._required(node, key)
        if not isinstance(value, str):
            raise IrLoadError(f"Expected {key!r} to be a string, got {type(value).__name__}")
        return value

    def _optional_string(self, node: dict[str, Any], key: str) -> str | None:
        value = node.get(key)
        if value is not None and not isinstance(value, str):
            raise IrLoadError(f"Expected {key!r} to be a string, got {type(value).__name__}")
        return value

    def _list(self, node: dict[str, Any], key: str) -> list[Any]:
        items = node.get(key, [])
        if not isinstance(items, list):
            raise IrLoadError(f"Expected {key!r} to be a list, got {type(items).__name__}")
        return items


def load_modules(paths: Iterable[Path]) -> list[IrModuleFragment]:
    """Load module fragments from JSON dump files."""
    return IrJsonLoader().load(paths)
