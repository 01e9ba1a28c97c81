"""
TreeWalker 單元測試
祖先 block 傳遞、元件邊界、屬性消耗與錯誤類型。
"""
import pytest

from bem_react.config import BEMOptions
from bem_react.errors import (
    MissingBlockError,
    OrphanModifiersError,
    UnsupportedClassNameError,
    UnsupportedModifiersShapeError,
)
from bem_react.js_ast import (
    BooleanLiteral,
    CallExpression,
    Identifier,
    MemberExpression,
    Node,
    ObjectExpression,
    ObjectProperty,
    RawNode,
    StringLiteral,
    property_key_name,
    to_source,
)
from bem_react.walker import TreeWalker


# ─── helper ──────────────────────────────────────────────────────────────────

def to_node(value):
    if isinstance(value, Node):
        return value
    if isinstance(value, bool):
        return BooleanLiteral(value)
    if isinstance(value, dict):
        return obj(**value)
    return StringLiteral(value)


def obj(**props):
    return ObjectExpression([ObjectProperty(Identifier(k), to_node(v)) for k, v in props.items()])


def el(tag, props=None, *children):
    """React.createElement(tag, props, ...children)；大寫開頭視為元件."""
    type_node = Identifier(tag) if tag[:1].isupper() else StringLiteral(tag)
    props_node = props if props is not None else RawNode("NullLiteral")
    callee = MemberExpression(Identifier("React"), Identifier("createElement"))
    return CallExpression(callee, [type_node, props_node, *children])


def prop_names(call):
    return [property_key_name(p) for p in call.arguments[1].properties]


def class_name(call):
    for p in call.arguments[1].properties:
        if property_key_name(p) == "className":
            return p.value
    return None


def run(tree, options=None):
    TreeWalker(options).walk(None, tree)
    return tree


# ─── 無 BEM 屬性 ─────────────────────────────────────────────────────────────

class TestPassThrough:
    def test_props_without_bem_unchanged(self):
        tree = run(el("div", obj(id="main")))
        assert tree.arguments[1] == obj(id="main")

    def test_non_factory_call_ignored(self):
        call = CallExpression(Identifier("h"), [StringLiteral("div"), obj(block="card")])
        run(call)
        assert prop_names(call) == ["block"]

    def test_null_props_children_still_walked(self):
        child = el("span", obj(element="label"))
        run(el("section", obj(block="panel"), el("div", None, child)))
        assert class_name(child) == StringLiteral("panel__label")

    def test_string_children_ignored(self):
        tree = run(el("p", obj(block="note"), StringLiteral("hello")))
        assert class_name(tree) == StringLiteral("note")


# ─── className 產生 ──────────────────────────────────────────────────────────

class TestClassNameSynthesis:
    def test_block_only(self):
        tree = run(el("div", obj(block="card")))
        assert prop_names(tree) == ["className"]
        assert class_name(tree) == StringLiteral("card")

    def test_block_element_string_modifiers(self):
        tree = run(el("h2", obj(block="card", element="title", modifiers="active large")))
        assert class_name(tree) == StringLiteral(
            "card__title card__title--active card__title--large"
        )

    def test_boolean_modifier_map_collapses_to_string(self):
        tree = run(el("button", obj(block="btn", modifiers={"primary": True, "disabled": False})))
        assert class_name(tree) == StringLiteral("btn btn--primary")

    def test_dynamic_modifier_uses_classnames(self):
        tree = run(el("button", obj(block="btn", modifiers={"primary": Identifier("isPrimary")})))
        assert class_name(tree) == CallExpression(Identifier("classnames"), [
            StringLiteral("btn"),
            ObjectExpression([ObjectProperty(StringLiteral("btn--primary"), Identifier("isPrimary"))]),
        ])

    def test_existing_literal_class_name_appended(self):
        tree = run(el("div", obj(block="row", className="extra")))
        assert class_name(tree) == StringLiteral("row extra")
        assert prop_names(tree) == ["className"]

    def test_existing_dynamic_class_name_rejected(self):
        with pytest.raises(UnsupportedClassNameError):
            run(el("div", obj(block="row", className=Identifier("cls"))))

    def test_identifier_element_becomes_placeholder(self):
        tree = run(el("div", obj(block="card", element=Identifier("part"))))
        assert class_name(tree) == StringLiteral("card__{part}")

    def test_expression_block_uses_classnames(self):
        styles_card = MemberExpression(Identifier("styles"), Identifier("card"))
        tree = run(el("div", obj(block=styles_card)))
        assert class_name(tree) == CallExpression(Identifier("classnames"), [
            MemberExpression(Identifier("styles"), Identifier("card")),
        ])

    def test_element_under_expression_block_concatenated(self):
        child = el("h2", obj(element="title", modifiers="big"))
        run(el("div", obj(block=MemberExpression(Identifier("styles"), Identifier("card"))), child))
        assert to_source(class_name(child)) == (
            'classnames(styles.card + "__title", styles.card + "__title" + "--big")'
        )

    def test_custom_prefixes(self):
        options = BEMOptions(block_prefix="b-", element_prefix="-", modifier_prefix="_")
        tree = run(el("div", obj(block="card", element="title", modifiers="active")), options)
        assert class_name(tree) == StringLiteral("b-card-title b-card-title_active")

    def test_bem_props_consumed_other_props_kept(self):
        tree = run(el("a", obj(href="#", block="nav", element="link", modifiers="current")))
        assert prop_names(tree) == ["href", "className"]


# ─── 祖先 block 傳遞 ─────────────────────────────────────────────────────────

class TestAncestorBlock:
    def test_child_element_inherits_block(self):
        child = el("li", obj(element="item"))
        parent = run(el("ul", obj(block="list"), child))
        assert class_name(parent) == StringLiteral("list")
        assert class_name(child) == StringLiteral("list__item")

    def test_nested_block_shadows_only_its_subtree(self):
        inner = el("span", obj(element="icon"))
        sibling = el("span", obj(element="text"))
        run(el("div", obj(block="card"), el("div", obj(block="badge"), inner), sibling))
        assert class_name(inner) == StringLiteral("badge__icon")
        assert class_name(sibling) == StringLiteral("card__text")

    def test_element_without_own_block_used_as_context(self):
        grandchild = el("b", obj(element="value"))
        child = el("span", obj(element="label"), grandchild)
        run(el("div", obj(block="field"), child))
        assert class_name(child) == StringLiteral("field__label")
        assert class_name(grandchild) == StringLiteral("field__value")

    def test_rerun_is_noop(self):
        child = el("li", obj(element="item"))
        tree = run(el("ul", obj(block="list"), child))
        run(tree)
        assert class_name(tree) == StringLiteral("list")
        assert class_name(child) == StringLiteral("list__item")


# ─── 元件邊界 ────────────────────────────────────────────────────────────────

class TestComponentBoundary:
    def test_element_component_gets_ancestor_block(self):
        item = el("Item", obj(element="item"))
        run(el("ul", obj(block="list"), item))
        props = item.arguments[1].properties
        assert props[0] == ObjectProperty(Identifier("block"), StringLiteral("list"))
        assert prop_names(item) == ["block", "element"]
        assert class_name(item) is None

    def test_component_with_own_block_passes_it_down(self):
        child = el("span", obj(element="title"))
        component = el("Card", obj(block="card", modifiers="wide"), child)
        run(el("div", obj(block="page"), component))
        assert prop_names(component) == ["block", "modifiers"]
        assert class_name(child) == StringLiteral("card__title")

    def test_component_without_bem_keeps_ancestor(self):
        child = el("span", obj(element="title"))
        run(el("div", obj(block="page"), el("Layout", obj(id="x"), child)))
        assert class_name(child) == StringLiteral("page__title")

    def test_expression_ancestor_block_injected_as_node(self):
        item = el("Item", obj(element="item"))
        run(el("ul", obj(block=MemberExpression(Identifier("styles"), Identifier("list"))), item))
        props = item.arguments[1].properties
        assert props[0] == ObjectProperty(
            Identifier("block"), MemberExpression(Identifier("styles"), Identifier("list"))
        )

    def test_component_element_without_any_block_fails(self):
        with pytest.raises(MissingBlockError):
            run(el("Item", obj(element="item")))


# ─── 錯誤 ────────────────────────────────────────────────────────────────────

class TestErrors:
    def test_element_without_block(self):
        with pytest.raises(MissingBlockError) as exc:
            run(el("div", obj(element="title")))
        assert exc.value.kind == "missing-block"

    def test_modifiers_without_block(self):
        with pytest.raises(OrphanModifiersError):
            run(el("div", obj(modifiers="active")))

    def test_children_fail_before_parent(self):
        with pytest.raises(MissingBlockError):
            run(el("div", obj(modifiers="active"), el("span", obj(element="x"))))

    def test_identifier_modifiers_rejected(self):
        with pytest.raises(UnsupportedModifiersShapeError):
            run(el("div", obj(block="card", modifiers=Identifier("mods"))))

    def test_error_reports_line(self):
        tree = el("div", obj(element="title"))
        tree.meta["loc"] = {"start": {"line": 7, "column": 4}}
        with pytest.raises(MissingBlockError, match=r"line 7"):
            run(tree)
