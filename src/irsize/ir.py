# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Read-only declaration model of a lowered IR forest.

Every node is an ``IrElement`` subclass tagged with a class-level ``kind``.
Containers link the ``parent`` of each child when they are constructed, so a
fully built module can answer qualified-name queries for any declaration in it.
Elements compare and hash by identity: the same node reachable through two
paths is one declaration, two structurally equal nodes are two declarations.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Literal

ElementKind = Literal[
    "module",
    "file",
    "function",
    "property",
    "field",
    "anonymousInitializer",
    "class",
    "valueParameter",
    "variable",
    "expression",
]

DEFINED = "DEFINED"
SYNTHETIC_PRIMARY_CONSTRUCTOR = "SYNTHETIC_PRIMARY_CONSTRUCTOR"


@dataclass(frozen=True)
class IrType:
    """Represent a resolved type reference.

    Attributes:
        name: Classifier name, e.g. ``Int`` or ``kotlin.collections.List``.
        arguments: Type arguments in declaration order.
        nullable: Whether the type is marked nullable.
    """

    name: str
    arguments: tuple["IrType", ...] = ()
    nullable: bool = False


UNIT = IrType("Unit")


@dataclass(eq=False, kw_only=True)
class IrElement:
    """Base for all IR nodes."""

    kind: ClassVar[ElementKind]
    parent: "IrElement | None" = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        for child in self.children():
            child.parent = self

    def children(self) -> list["IrElement"]:
        """Return direct children in source order."""
        return []


@dataclass(eq=False, kw_only=True)
class IrExpression(IrElement):
    """Opaque statement or expression kept as pre-rendered text."""

    kind: ClassVar[ElementKind] = "expression"
    text: str


@dataclass(eq=False, kw_only=True)
class IrDeclaration(IrElement):
    """Base for declarations; ``origin`` names the pass that produced it."""

    origin: str = DEFINED


@dataclass(eq=False, kw_only=True)
class IrDeclarationWithName(IrDeclaration):
    name: str | None = None


@dataclass(eq=False, kw_only=True)
class IrValueParameter(IrDeclarationWithName):
    kind: ClassVar[ElementKind] = "valueParameter"
    type: IrType


@dataclass(eq=False, kw_only=True)
class IrVariable(IrDeclarationWithName):
    kind: ClassVar[ElementKind] = "variable"
    type: IrType
    is_var: bool = False
    initializer: IrExpression | None = None

    def children(self) -> list[IrElement]:
        return [self.initializer] if self.initializer is not None else []


@dataclass(eq=False, kw_only=True)
class IrFunction(IrDeclarationWithName):
    """Represent a function or constructor.

    Attributes:
        value_parameters: Declared parameters, receivers excluded.
        return_type: Declared return type.
        body: Statements of the body; ``None`` for bodiless functions.
        is_constructor: Whether the function is a class constructor.
    """

    kind: ClassVar[ElementKind] = "function"
    value_parameters: list[IrValueParameter] = field(default_factory=list)
    return_type: IrType = UNIT
    body: list[IrElement] | None = None
    is_constructor: bool = False

    def children(self) -> list[IrElement]:
        return [*self.value_parameters, *(self.body or [])]


@dataclass(eq=False, kw_only=True)
class IrField(IrDeclarationWithName):
    kind: ClassVar[ElementKind] = "field"
    type: IrType
    initializer: IrExpression | None = None

    def children(self) -> list[IrElement]:
        return [self.initializer] if self.initializer is not None else []


@dataclass(eq=False, kw_only=True)
class IrProperty(IrDeclarationWithName):
    kind: ClassVar[ElementKind] = "property"
    type: IrType
    is_var: bool = False
    backing_field: IrField | None = None
    getter: IrFunction | None = None
    setter: IrFunction | None = None

    def children(self) -> list[IrElement]:
        return [
            child
            for child in (self.backing_field, self.getter, self.setter)
            if child is not None
        ]


@dataclass(eq=False, kw_only=True)
class IrAnonymousInitializer(IrDeclaration):
    kind: ClassVar[ElementKind] = "anonymousInitializer"
    body: list[IrElement] = field(default_factory=list)

    def children(self) -> list[IrElement]:
        return list(self.body)


@dataclass(eq=False, kw_only=True)
class IrClass(IrDeclarationWithName):
    kind: ClassVar[ElementKind] = "class"
    super_types: list[IrType] = field(default_factory=list)
    declarations: list[IrDeclaration] = field(default_factory=list)

    def children(self) -> list[IrElement]:
        return list(self.declarations)


@dataclass(eq=False, kw_only=True)
class IrFile(IrElement):
    """Represent one source file; ``package_fq_name`` is empty for the root package."""

    kind: ClassVar[ElementKind] = "file"
    name: str
    package_fq_name: str = ""
    declarations: list[IrDeclaration] = field(default_factory=list)

    def children(self) -> list[IrElement]:
        return list(self.declarations)


@dataclass(eq=False, kw_only=True)
class IrModuleFragment(IrElement):
    """Represent the root of one compilation module."""

    kind: ClassVar[ElementKind] = "module"
    name: str
    files: list[IrFile] = field(default_factory=list)

    def children(self) -> list[IrElement]:
        return list(self.files)


def fq_name_when_available(declaration: IrDeclaration) -> str | None:
    """Derive the qualified name of a declaration from its parent chain.

    Backing fields and accessors are named through the container of their
    property, so ``C.p``'s field is ``C.p`` and its getter ``C.<get-p>``.

    Args:
        declaration: Declaration to name.

    Returns:
        Dot-separated qualified name, or ``None`` when the declaration or one
        of its declaration ancestors is unnamed. A declaration without a
        parent is treated as living in the root package.
    """
    segments: list[str] = []
    current: IrElement = declaration
    while True:
        if not isinstance(current, IrDeclarationWithName) or current.name is None:
            return None
        segments.append(current.name)
        parent = current.parent
        if isinstance(parent, IrProperty):
            parent = parent.parent
        if parent is None:
            break
        if isinstance(parent, IrFile):
            if parent.package_fq_name:
                segments.append(parent.package_fq_name)
            break
        if not isinstance(parent, IrDeclaration):
            return None
        current = parent
    return ".".join(reversed(segments))
