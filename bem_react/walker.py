"""
Tree Walker: 遞迴走訪 React.createElement 呼叫

祖先 block 以參數逐層往下傳：每個帶 block 的節點只遮蔽自己的子樹。
"""

import copy
from typing import Optional

from .config import BEMOptions
from .errors import MissingBlockError
from .js_ast import (
    Identifier,
    Node,
    ObjectProperty,
    StringLiteral,
    is_element_factory_call,
    is_identifier,
    is_object_expression,
    property_key_name,
)
from .resolver import BEMResolver
from .tokens import resolve_modifiers_value, resolve_token_value, token_text

BEM_KEYS = ("block", "element", "modifiers")


class TreeWalker:
    """走訪元素樹並把 BEM 屬性改寫成 className."""

    def __init__(self, options: Optional[BEMOptions] = None, resolver: Optional[BEMResolver] = None):
        self.resolver = resolver or BEMResolver(options)

    def walk(self, ancestor_block, node) -> None:
        if not is_element_factory_call(node):
            return

        args = node.arguments
        element_type = args[0] if args else None
        props = args[1] if len(args) > 1 else None
        children = args[2:]

        if not is_object_expression(props):
            self._walk_children(ancestor_block, children)
            return

        if is_identifier(element_type):
            self._walk_component(ancestor_block, props, children)
            return

        bem = consume_bem_properties(props)
        block = bem["block"] or ancestor_block

        self._walk_children(block, children)

        if not self.resolver.validate(block, bem["element"], bem["modifiers"], node):
            return
        self.resolver.synthesize(props.properties, block, bem["element"], bem["modifiers"])

    def _walk_component(self, ancestor_block, props, children) -> None:
        """元件邊界：不產生 className，只把祖先 block 明確傳給元件."""
        bem = read_bem_properties(props)
        block, element = bem["block"], bem["element"]
        if element and not block:
            if not ancestor_block:
                raise MissingBlockError(props)
            value = ancestor_block if isinstance(ancestor_block, Node) else StringLiteral(token_text(ancestor_block))
            props.properties.insert(0, ObjectProperty(Identifier("block"), copy.deepcopy(value)))
        self._walk_children(block or ancestor_block, children)

    def _walk_children(self, ancestor_block, children) -> None:
        for child in children:
            self.walk(ancestor_block, child)


def read_bem_properties(props) -> dict:
    """讀取 block / element（不移除）；同名屬性以最後一個為準."""
    found = {key: None for key in BEM_KEYS}
    for prop in props.properties:
        name = property_key_name(prop)
        if name in ("block", "element"):
            found[name] = resolve_token_value(prop.value)
    return found


def consume_bem_properties(props) -> dict:
    """讀取並移除 block / element / modifiers."""
    found = {key: None for key in BEM_KEYS}
    kept = []
    for prop in props.properties:
        name = property_key_name(prop)
        if name == "modifiers":
            found[name] = resolve_modifiers_value(prop.value)
        elif name in BEM_KEYS:
            found[name] = resolve_token_value(prop.value)
        else:
            kept.append(prop)
    props.properties = kept
    return found
