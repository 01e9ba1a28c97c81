"""
BEM 解析器: block / element / modifiers → className

驗證用法、組出 class 前綴、展開 modifiers，最後合併進節點的 className 屬性。
結果若全為 literal 則為單一字串，否則為 classnames(...) 呼叫的參數列表；
block / element 為運算式時，前綴以執行期字串串接組成。
"""

from typing import Optional, Union

from .config import BEMOptions
from .errors import (
    MissingBlockError,
    OrphanModifiersError,
    UnsupportedClassNameError,
    UnsupportedModifiersShapeError,
)
from .js_ast import (
    BooleanLiteral,
    CallExpression,
    Identifier,
    Node,
    ObjectExpression,
    ObjectProperty,
    StringLiteral,
    property_key_name,
    string_concat,
)
from .tokens import token_text

CLASSNAMES_HELPER = "classnames"

ClassNameResult = Union[str, list]


class BEMResolver:
    """依前綴設定把 BEM 屬性轉成 className."""

    def __init__(self, options: Optional[BEMOptions] = None):
        self.options = options or BEMOptions()

    def validate(self, block, element, modifiers, node=None) -> bool:
        """回傳是否需要產生 className；用法錯誤時拋出對應的 BEMError."""
        if block:
            return True
        if element:
            raise MissingBlockError(node)
        if modifiers:
            raise OrphanModifiersError(node)
        return False

    def build_prefix(self, block, element=None):
        """全為 literal 時回傳字串；block / element 為運算式時回傳字串串接節點."""
        parts = [self.options.block_prefix, _prefix_part(block)]
        if element:
            parts += [self.options.element_prefix, _prefix_part(element)]
        return string_concat(parts)

    def expand_modifiers(self, prefix, modifiers) -> ClassNameResult:
        if not modifiers:
            return prefix if isinstance(prefix, str) else [prefix]
        if isinstance(modifiers, str):
            names = modifiers.split()
            if isinstance(prefix, str):
                return " ".join([prefix] + [self._modifier_class(prefix, name) for name in names])
            return [prefix] + [self._modifier_class(prefix, name) for name in names]
        if isinstance(modifiers, ObjectExpression):
            return self._expand_modifier_map(prefix, modifiers)
        raise UnsupportedModifiersShapeError(modifiers)

    def _modifier_class(self, prefix, name: str):
        return string_concat([prefix, self.options.modifier_prefix, name])

    def _expand_modifier_map(self, prefix, modifiers: ObjectExpression) -> ClassNameResult:
        fragments = [_fragment(prefix)]
        for prop in modifiers.properties:
            name = property_key_name(prop)
            if name is None:
                raise UnsupportedModifiersShapeError(prop)
            key = _fragment(self._modifier_class(prefix, name))
            value = prop.value
            if isinstance(value, BooleanLiteral):
                if value.value:
                    fragments.append(key)
                continue
            # classnames 只在 value 為 truthy 時加入 key
            computed = not isinstance(key, StringLiteral)
            fragments.append(ObjectExpression([ObjectProperty(key, value, computed=computed)]))

        if all(isinstance(f, StringLiteral) for f in fragments):
            return " ".join(f.value for f in fragments)
        return fragments

    def synthesize(self, properties: list, block, element=None, modifiers=None) -> None:
        """把計算出的 class 合併進 properties（原地修改）."""
        class_name = self.expand_modifiers(self.build_prefix(block, element), modifiers)

        class_prop = next(
            (p for p in properties if property_key_name(p) == "className"), None
        )
        if class_prop is None:
            properties.append(ObjectProperty(Identifier("className"), _class_name_value(class_name)))
            return

        existing = class_prop.value
        if not isinstance(existing, StringLiteral):
            raise UnsupportedClassNameError(existing)

        # 計算出的 class 在前，使用者原本的字串接在後面
        loc = {"loc": existing.meta["loc"]} if "loc" in existing.meta else {}
        if isinstance(class_name, str):
            class_prop.value = StringLiteral(f"{class_name} {existing.value}", meta=loc)
        else:
            class_prop.value = _class_name_value(class_name + [StringLiteral(existing.value, meta=loc)])


def _prefix_part(token):
    return token if isinstance(token, Node) else token_text(token)


def _fragment(value):
    return StringLiteral(value) if isinstance(value, str) else value


def _class_name_value(class_name: ClassNameResult):
    if isinstance(class_name, str):
        return StringLiteral(class_name)
    return CallExpression(Identifier(CLASSNAMES_HELPER), class_name)
