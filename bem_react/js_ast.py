"""
JS AST 模型: Babel AST JSON ↔ Python 節點

轉換只需要判斷與建立少數幾種節點（Identifier / 字串 / 布林 / 物件 / 呼叫），
其餘節點一律以 RawNode 保留原始欄位，確保輸出 JSON 與輸入結構一致。
"""

import copy
import json
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional


@dataclass
class Node:
    """所有節點的基底；meta 保存 loc / start / end / extra 等未解析欄位."""
    meta: dict = field(default_factory=dict, kw_only=True, repr=False, compare=False)

    @property
    def type(self) -> str:
        return type(self).__name__

    @property
    def line(self) -> Optional[int]:
        loc = self.meta.get("loc") or {}
        return (loc.get("start") or {}).get("line")


@dataclass
class Identifier(Node):
    name: str


@dataclass
class StringLiteral(Node):
    value: str


@dataclass
class BooleanLiteral(Node):
    value: bool


@dataclass
class ObjectProperty(Node):
    key: Node
    value: Node
    computed: bool = False
    shorthand: bool = False


@dataclass
class ObjectExpression(Node):
    properties: list = field(default_factory=list)


@dataclass
class MemberExpression(Node):
    object: Node
    property: Node
    computed: bool = False


@dataclass
class CallExpression(Node):
    callee: Node
    arguments: list = field(default_factory=list)


@dataclass
class ReturnStatement(Node):
    argument: Optional[Node] = None


@dataclass
class RawNode(Node):
    """未建模的節點；fields 內的子節點同樣已轉成 Node."""
    kind: str
    fields: dict = field(default_factory=dict)

    @property
    def type(self) -> str:
        return self.kind


# ─── 判斷 ────────────────────────────────────────────────────────────────────

def is_identifier(node, name: Optional[str] = None) -> bool:
    if not isinstance(node, Identifier):
        return False
    return name is None or node.name == name


def is_string_literal(node) -> bool:
    return isinstance(node, StringLiteral)


def is_boolean_literal(node) -> bool:
    return isinstance(node, BooleanLiteral)


def is_object_expression(node) -> bool:
    return isinstance(node, ObjectExpression)


def is_element_factory_call(node) -> bool:
    """`React.createElement(...)` 才算元素建構呼叫."""
    if not isinstance(node, CallExpression):
        return False
    callee = node.callee
    if not isinstance(callee, MemberExpression) or callee.computed:
        return False
    return is_identifier(callee.object, "React") and is_identifier(callee.property, "createElement")


def property_key_name(prop) -> Optional[str]:
    """ObjectProperty 的 key 名稱（identifier 或字串 key），其他情況回傳 None."""
    if not isinstance(prop, ObjectProperty) or prop.computed:
        return None
    if isinstance(prop.key, Identifier):
        return prop.key.name
    if isinstance(prop.key, StringLiteral):
        return prop.key.value
    return None


def iter_nodes(node) -> Iterator[Node]:
    """Pre-order traversal over every nested node."""
    if isinstance(node, list):
        for item in node:
            yield from iter_nodes(item)
        return
    if not isinstance(node, Node):
        return
    yield node
    for value in _child_values(node):
        yield from iter_nodes(value)


def _child_values(node: Node) -> list:
    if isinstance(node, RawNode):
        return list(node.fields.values())
    if isinstance(node, ObjectProperty):
        return [node.key, node.value]
    if isinstance(node, ObjectExpression):
        return [node.properties]
    if isinstance(node, MemberExpression):
        return [node.object, node.property]
    if isinstance(node, CallExpression):
        return [node.callee, node.arguments]
    if isinstance(node, ReturnStatement):
        return [node.argument]
    return []


# ─── 建構 ────────────────────────────────────────────────────────────────────

def string_concat(parts: list):
    """串接字串與運算式；全為字串時回傳 str，否則回傳 `a + "b"` 形式的 BinaryExpression."""
    merged = []
    for part in parts:
        if isinstance(part, str):
            if not part:
                continue
            if merged and isinstance(merged[-1], str):
                merged[-1] += part
                continue
            merged.append(part)
        else:
            merged.append(copy.deepcopy(part))

    if all(isinstance(p, str) for p in merged):
        return "".join(merged)
    nodes = [StringLiteral(p) if isinstance(p, str) else p for p in merged]
    # 前兩項都不是字串時，以空字串開頭確保是字串串接而非數值相加
    if len(nodes) > 1 and not isinstance(nodes[0], StringLiteral) and not isinstance(nodes[1], StringLiteral):
        nodes.insert(0, StringLiteral(""))
    expr = nodes[0]
    for right in nodes[1:]:
        expr = RawNode("BinaryExpression", {"left": expr, "operator": "+", "right": right})
    return expr


# ─── Babel AST JSON ──────────────────────────────────────────────────────────

# 各節點型別對應的子節點欄位；其餘欄位放進 meta
_MODELED_FIELDS = {
    "Identifier": ("name",),
    "StringLiteral": ("value",),
    "BooleanLiteral": ("value",),
    "ObjectProperty": ("key", "value", "computed", "shorthand"),
    "ObjectExpression": ("properties",),
    "MemberExpression": ("object", "property", "computed"),
    "CallExpression": ("callee", "arguments"),
    "ReturnStatement": ("argument",),
}

_NODE_CLASSES = {
    "Identifier": Identifier,
    "StringLiteral": StringLiteral,
    "BooleanLiteral": BooleanLiteral,
    "ObjectProperty": ObjectProperty,
    "ObjectExpression": ObjectExpression,
    "MemberExpression": MemberExpression,
    "CallExpression": CallExpression,
    "ReturnStatement": ReturnStatement,
}

# 位置資訊不含子節點，不必遞迴轉換
_PLAIN_KEYS = {"loc", "start", "end", "range", "extra", "comments", "tokens",
               "leadingComments", "trailingComments", "innerComments"}


def from_dict(data: Any) -> Any:
    """將 Babel AST JSON（dict / list）轉成節點；非節點值原樣回傳."""
    if isinstance(data, list):
        return [from_dict(item) for item in data]
    if not isinstance(data, dict) or "type" not in data:
        return data

    kind = data["type"]
    cls = _NODE_CLASSES.get(kind)
    if cls is None:
        fields = {}
        meta = {}
        for key, value in data.items():
            if key == "type":
                continue
            if key in _PLAIN_KEYS:
                meta[key] = value
            else:
                fields[key] = from_dict(value)
        return RawNode(kind, fields, meta=meta)

    modeled = _MODELED_FIELDS[kind]
    kwargs = {}
    meta = {}
    for key, value in data.items():
        if key == "type":
            continue
        if key in modeled:
            kwargs[key] = from_dict(value)
        else:
            meta[key] = value
    if kind == "ObjectProperty":
        kwargs.setdefault("computed", False)
        kwargs.setdefault("shorthand", False)
    if kind == "MemberExpression":
        kwargs.setdefault("computed", False)
    try:
        return cls(**kwargs, meta=meta)
    except TypeError as e:
        raise ValueError(f"Malformed {kind} node: {e}") from e


def to_dict(node: Any) -> Any:
    """from_dict 的反向：節點 → Babel AST JSON."""
    if isinstance(node, list):
        return [to_dict(item) for item in node]
    if not isinstance(node, Node):
        return node

    data = {"type": node.type}
    if isinstance(node, RawNode):
        for key, value in node.fields.items():
            data[key] = to_dict(value)
    else:
        for key in _MODELED_FIELDS[node.type]:
            data[key] = to_dict(getattr(node, key))
    for key, value in node.meta.items():
        data.setdefault(key, value)
    return data


def load_ast(path: str) -> Node:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict) or "type" not in data:
        raise ValueError(f"'{path}' is not a Babel AST JSON document")
    return from_dict(data)


# ─── JS 輸出（預覽與錯誤訊息用） ─────────────────────────────────────────────

def to_source(node: Any) -> str:
    """將運算式節點輸出成 JavaScript 原始碼；未支援的節點輸出 /* Type */."""
    if node is None:
        return "null"
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, StringLiteral):
        return json.dumps(node.value, ensure_ascii=False)
    if isinstance(node, BooleanLiteral):
        return "true" if node.value else "false"
    if isinstance(node, ObjectProperty):
        if node.shorthand:
            return to_source(node.value)
        key = to_source(node.key)
        if node.computed:
            key = f"[{key}]"
        return f"{key}: {to_source(node.value)}"
    if isinstance(node, ObjectExpression):
        if not node.properties:
            return "{}"
        return "{ " + ", ".join(to_source(p) for p in node.properties) + " }"
    if isinstance(node, MemberExpression):
        if node.computed:
            return f"{to_source(node.object)}[{to_source(node.property)}]"
        return f"{to_source(node.object)}.{to_source(node.property)}"
    if isinstance(node, CallExpression):
        args = ", ".join(to_source(a) for a in node.arguments)
        return f"{to_source(node.callee)}({args})"
    if isinstance(node, ReturnStatement):
        return f"return {to_source(node.argument)};"
    if isinstance(node, RawNode):
        return _raw_to_source(node)
    return f"/* {type(node).__name__} */"


def _raw_to_source(node: RawNode) -> str:
    f = node.fields
    kind = node.kind
    if kind == "NumericLiteral":
        raw = (node.meta.get("extra") or {}).get("raw")
        return raw if raw is not None else str(f.get("value"))
    if kind == "NullLiteral":
        return "null"
    if kind == "ThisExpression":
        return "this"
    if kind == "SpreadElement":
        return f"...{to_source(f.get('argument'))}"
    if kind == "ArrayExpression":
        return "[" + ", ".join(to_source(e) for e in f.get("elements", [])) + "]"
    if kind in ("BinaryExpression", "LogicalExpression"):
        return f"{to_source(f.get('left'))} {f.get('operator')} {to_source(f.get('right'))}"
    if kind == "UnaryExpression":
        op = f.get("operator", "")
        sep = " " if op.isalpha() else ""
        return f"{op}{sep}{to_source(f.get('argument'))}"
    if kind == "ConditionalExpression":
        return (f"{to_source(f.get('test'))} ? {to_source(f.get('consequent'))}"
                f" : {to_source(f.get('alternate'))}")
    return f"/* {kind} */"
