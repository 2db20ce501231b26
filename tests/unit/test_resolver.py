# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
from irsize.ir import (
    SYNTHETIC_PRIMARY_CONSTRUCTOR,
    IrAnonymousInitializer,
    IrClass,
    IrDeclaration,
    IrExpression,
    IrField,
    IrFile,
    IrFunction,
    IrProperty,
    IrType,
    IrValueParameter,
    IrVariable,
)
from irsize.rendering import KotlinLikeRenderer
from irsize.resolver import SizeResolver, qualified_key, type_label


class _LengthRenderer:
    """Render declarations as text of a preset length."""

    def __init__(self, lengths: dict[int, int]) -> None:
        self._lengths = lengths

    def render(self, node: object) -> str:
        if isinstance(node, IrType):
            return node.name
        return "x" * self._lengths[id(node)]


def _parameter(type_name: str) -> IrValueParameter:
    return IrValueParameter(name="p", type=IrType(type_name))


def _in_package(*declarations: IrDeclaration) -> IrFile:
    return IrFile(name="a.kt", package_fq_name="pkg", declarations=list(declarations))


def test_res_001_synthetic_constructor_is_keyed_apart_from_user_function(
    renderer: KotlinLikeRenderer,
) -> None:
    user = IrFunction(name="Foo", value_parameters=[_parameter("Int")], body=[])
    synthetic = IrFunction(
        name="Foo",
        origin=SYNTHETIC_PRIMARY_CONSTRUCTOR,
        value_parameters=[_parameter("Int")],
        body=[],
    )
    _in_package(user, synthetic)

    entries = SizeResolver(renderer).resolve([user, synthetic])

    assert qualified_key(user, renderer) == "pkg.Foo(Int)"
    assert qualified_key(synthetic, renderer) == "pkg.Foo(Int)[synthetic]"
    assert [entry.key for entry in entries] == ["pkg.Foo(Int)", "pkg.Foo(Int)[synthetic]"]
    assert [entry.declaration for entry in entries] == [user, synthetic]


def test_res_002_function_keys_render_every_parameter_type(
    renderer: KotlinLikeRenderer,
) -> None:
    generic = IrFunction(
        name="f",
        value_parameters=[
            _parameter("Int"),
            IrValueParameter(
                name="q",
                type=IrType("List", (IrType("String", nullable=True),)),
            ),
        ],
    )
    no_parameters = IrFunction(name="g")
    _in_package(generic, no_parameters)

    assert qualified_key(generic, renderer) == "pkg.f(Int, List<String?>)"
    assert qualified_key(no_parameters, renderer) == "pkg.g()"


def test_res_003_non_function_keys_have_no_signature(
    renderer: KotlinLikeRenderer,
) -> None:
    backing_field = IrField(name="p", type=IrType("Int"))
    prop = IrProperty(name="p", type=IrType("Int"), backing_field=backing_field)
    klass = IrClass(name="C", declarations=[prop])
    _in_package(klass)

    assert qualified_key(klass, renderer) == "pkg.C"
    assert qualified_key(prop, renderer) == "pkg.C.p"
    assert qualified_key(backing_field, renderer) == "pkg.C.p"


def test_res_004_unnamed_declarations_use_unknown_placeholder(
    renderer: KotlinLikeRenderer,
) -> None:
    initializer = IrAnonymousInitializer(body=[IrExpression(text="x()")])
    lambda_function = IrFunction(name=None, value_parameters=[_parameter("Int")])
    IrClass(name="C", declarations=[initializer, lambda_function])

    assert qualified_key(initializer, renderer) == "<unknown>"
    assert qualified_key(lambda_function, renderer) == "<unknown>(Int)"


def test_res_005_key_is_stable_across_calls(renderer: KotlinLikeRenderer) -> None:
    function = IrFunction(name="f", value_parameters=[_parameter("Int")], body=[])
    _in_package(function)

    assert qualified_key(function, renderer) == qualified_key(function, renderer)


def test_res_006_group_keeps_largest_declaration() -> None:
    small = IrFunction(name="f", value_parameters=[_parameter("Int")], body=[])
    large = IrFunction(name="f", value_parameters=[_parameter("Int")], body=[])
    medium = IrFunction(name="f", value_parameters=[_parameter("Int")], body=[])
    _in_package(small, large, medium)
    renderer = _LengthRenderer({id(small): 10, id(large): 40, id(medium): 25})

    entries = SizeResolver(renderer).resolve([small, large, medium])

    assert len(entries) == 1
    assert entries[0].declaration is large
    assert entries[0].size == 40
    assert entries[0].type == "function"


def test_res_007_first_declaration_wins_a_size_tie() -> None:
    first = IrClass(name="C")
    second = IrClass(name="C")
    _in_package(first)
    _in_package(second)
    renderer = _LengthRenderer({id(first): 7, id(second): 7})

    entries = SizeResolver(renderer).resolve([first, second])

    assert len(entries) == 1
    assert entries[0].declaration is first


def test_res_008_entry_count_matches_distinct_keys_in_first_seen_order(
    renderer: KotlinLikeRenderer,
) -> None:
    a_int = IrFunction(name="a", value_parameters=[_parameter("Int")], body=[])
    b = IrFunction(name="b", body=[])
    a_string = IrFunction(name="a", value_parameters=[_parameter("String")], body=[])
    a_int_again = IrFunction(
        name="a",
        value_parameters=[_parameter("Int")],
        body=[IrExpression(text="println()")],
    )
    _in_package(a_int, b, a_string, a_int_again)

    entries = SizeResolver(renderer).resolve([a_int, b, a_string, a_int_again])

    assert [entry.key for entry in entries] == ["pkg.a(Int)", "pkg.b()", "pkg.a(String)"]
    assert entries[0].declaration is a_int_again
    assert entries[0].size == len(renderer.render(a_int_again))


def test_res_009_type_labels_cover_reported_kinds() -> None:
    assert type_label(IrFunction(name="f")) == "function"
    assert type_label(IrProperty(name="p", type=IrType("Int"))) == "property"
    assert type_label(IrField(name="f", type=IrType("Int"))) == "field"
    assert type_label(IrAnonymousInitializer()) == "anonymousInitializer"
    assert type_label(IrClass(name="C")) == "class"
    assert type_label(IrVariable(name="v", type=IrType("Int"))) == "unknown"


def test_res_010_empty_input_resolves_to_no_entries(
    renderer: KotlinLikeRenderer,
) -> None:
    assert SizeResolver(renderer).resolve([]) == []


def test_res_011_accessors_are_keyed_through_the_property_container(
    renderer: KotlinLikeRenderer,
) -> None:
    getter = IrFunction(name="<get-p>", return_type=IrType("Int"), body=[])
    setter = IrFunction(
        name="<set-p>", value_parameters=[_parameter("Int")], body=[]
    )
    prop = IrProperty(name="p", type=IrType("Int"), is_var=True, getter=getter, setter=setter)
    IrClass(name="C", declarations=[prop])
    top_level = IrProperty(
        name="q", type=IrType("Int"), backing_field=IrField(name="q", type=IrType("Int"))
    )
    _in_package(top_level)

    assert qualified_key(getter, renderer) == "C.<get-p>()"
    assert qualified_key(setter, renderer) == "C.<set-p>(Int)"
    assert top_level.backing_field is not None
    assert qualified_key(top_level.backing_field, renderer) == "pkg.q"


def test_res_012_property_and_backing_field_share_one_entry() -> None:
    backing_field = IrField(name="p", type=IrType("Int"))
    prop = IrProperty(name="p", type=IrType("Int"), backing_field=backing_field)
    klass = IrClass(name="C", declarations=[prop])
    _in_package(klass)
    renderer = _LengthRenderer(
        {id(klass): 50, id(prop): 12, id(backing_field): 20}
    )

    entries = SizeResolver(renderer).resolve([klass, prop, backing_field])

    assert [entry.key for entry in entries] == ["pkg.C", "pkg.C.p"]
    assert entries[1].declaration is backing_field
    assert entries[1].size == 20
    assert entries[1].type == "field"


def test_res_013_deeply_nested_declarations_are_keyed_and_rendered(
    renderer: KotlinLikeRenderer,
) -> None:
    innermost = IrFunction(name="f0", body=[IrExpression(text="return")])
    outer = innermost
    for level in range(1, 1500):
        outer = IrFunction(name=f"f{level}", body=[outer])
    _in_package(outer)

    key = qualified_key(innermost, renderer)
    text = renderer.render(outer)

    assert key.startswith("pkg.f1499.f1498.")
    assert key.endswith(".f1.f0()")
    assert text.count("\n") == 2 * 1500
    assert text.endswith("\n}")
