"""
屬性值解析

block / element 的值在轉換時盡量化成字串；識別字變成 `{name}` 佔位字串，
其他運算式保持節點原樣，之後以執行期字串串接處理。
modifiers 只展開 literal，其餘一律保留原始節點。
"""

from .js_ast import is_boolean_literal, is_identifier, is_string_literal


def resolve_token_value(token):
    """字串 / 布林 literal → 值；identifier → "{name}"；其他 → 節點本身."""
    if is_string_literal(token) or is_boolean_literal(token):
        return token.value
    if is_identifier(token):
        return f"{{{token.name}}}"
    return token


def resolve_modifiers_value(token):
    """字串 / 布林 literal → 值；其他（含 identifier）→ 節點本身."""
    if is_string_literal(token) or is_boolean_literal(token):
        return token.value
    return token


def token_text(token) -> str:
    """literal token 組成 class 字串時的文字形式."""
    if isinstance(token, bool):
        return "true" if token else "false"
    return str(token)
