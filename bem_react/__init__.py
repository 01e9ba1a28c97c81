"""
bem-react: React.createElement 的 BEM 命名轉換

把 block / element / modifiers 屬性改寫成符合 BEM 慣例的 className。
"""

__version__ = "0.1.0"

from .config import BEMOptions, load_config, options_from_config, validate_config
from .errors import (
    BEMError,
    MissingBlockError,
    OrphanModifiersError,
    UnsupportedClassNameError,
    UnsupportedModifiersShapeError,
)
from .resolver import BEMResolver
from .tokens import resolve_token_value
from .transform import find_root_calls, transform, transform_ast_json, transform_file
from .walker import TreeWalker

__all__ = [
    "__version__",
    "BEMOptions",
    "load_config",
    "options_from_config",
    "validate_config",
    "BEMError",
    "MissingBlockError",
    "OrphanModifiersError",
    "UnsupportedClassNameError",
    "UnsupportedModifiersShapeError",
    "BEMResolver",
    "TreeWalker",
    "resolve_token_value",
    "find_root_calls",
    "transform",
    "transform_ast_json",
    "transform_file",
]
