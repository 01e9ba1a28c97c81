"""BEM 用法錯誤；任何一個都會中止目前這棵樹的轉換."""

from typing import Optional


class BEMError(Exception):
    """Malformed BEM usage at a specific node."""

    kind = "bem"

    def __init__(self, message: str, node=None):
        self.node = node
        self.line: Optional[int] = getattr(node, "line", None)
        if self.line is not None:
            message = f"{message} (line {self.line})"
        super().__init__(message)


class MissingBlockError(BEMError):
    kind = "missing-block"

    def __init__(self, node=None):
        super().__init__("BEM element must have an ancestor block", node)


class OrphanModifiersError(BEMError):
    kind = "orphan-modifiers"

    def __init__(self, node=None):
        super().__init__("BEM modifiers must be attached to a block or an element", node)


class UnsupportedClassNameError(BEMError):
    kind = "unsupported-class-name"

    def __init__(self, node=None):
        super().__init__("Unsupported className for BEM block or element", node)


class UnsupportedModifiersShapeError(BEMError):
    kind = "unsupported-modifiers"

    def __init__(self, node=None):
        super().__init__("Unsupported value for BEM modifiers", node)
