"""
轉換入口: 找出 return 的 React.createElement 呼叫並逐一改寫

只有直接作為 return 運算元的呼叫會被當成根節點；巢狀 callback 內的 return
（例如 items.map 內）各自成為獨立的根，不繼承外層 block。
"""

import json
from pathlib import Path
from typing import Optional

from .config import BEMOptions
from .js_ast import CallExpression, ReturnStatement, from_dict, iter_nodes, load_ast, to_dict
from .walker import TreeWalker


def find_root_calls(tree) -> list:
    """所有 ReturnStatement 直接回傳的 CallExpression，依原始碼順序."""
    return [
        node.argument
        for node in iter_nodes(tree)
        if isinstance(node, ReturnStatement) and isinstance(node.argument, CallExpression)
    ]


def transform(tree, options: Optional[BEMOptions] = None) -> int:
    """原地改寫整棵樹，回傳走訪的根節點數."""
    walker = TreeWalker(options)
    roots = find_root_calls(tree)
    for call in roots:
        walker.walk(None, call)
    return len(roots)


def transform_ast_json(data: dict, options: Optional[BEMOptions] = None) -> dict:
    """Babel AST JSON in, transformed Babel AST JSON out."""
    tree = from_dict(data)
    transform(tree, options)
    return to_dict(tree)


def transform_file(src: str, dst: Optional[str] = None, options: Optional[BEMOptions] = None) -> str:
    """轉換 AST JSON 檔；dst 未指定時覆寫原檔。回傳寫出的路徑."""
    tree = load_ast(src)
    transform(tree, options)
    out_path = Path(dst or src)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(to_dict(tree), f, indent=2, ensure_ascii=False)
    return str(out_path)
