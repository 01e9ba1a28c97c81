#!/usr/bin/env python3
"""
bem-react CLI: React.createElement 的 BEM 屬性 → className

  python -m bem_react.cli transform App.ast.json [-o out.json]   # 改寫 AST JSON
  python -m bem_react.cli preview App.ast.json                   # 預覽改寫後的元素
  python -m bem_react.cli watch src --out build                  # 監聽並自動改寫
"""

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Optional

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from bem_react import __version__

from .config import DEFAULT_CONFIG_PATH, load_config, options_from_config
from .errors import BEMError
from .js_ast import load_ast, to_dict, to_source
from .transform import find_root_calls, transform, transform_file

_WATCHED_SUFFIX = ".ast.json"


def cmd_transform(args, config: dict) -> int:
    """Transform: 讀 AST JSON → 改寫 → 寫出."""
    options = options_from_config(config)
    try:
        if args.output:
            out_path = transform_file(args.input, args.output, options)
            print(f"✅ Wrote {out_path}")
        else:
            tree = load_ast(args.input)
            transform(tree, options)
            json.dump(to_dict(tree), sys.stdout, indent=2, ensure_ascii=False)
            sys.stdout.write("\n")
    except BEMError as e:
        print(f"❌ {args.input}: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"❌ 無法讀取 '{args.input}'：{e}", file=sys.stderr)
        return 1
    return 0


def cmd_preview(args, config: dict) -> int:
    """預覽改寫後的根元素（輸出成 JS）."""
    options = options_from_config(config)
    try:
        tree = load_ast(args.input)
        roots = find_root_calls(tree)
        transform(tree, options)
    except BEMError as e:
        print(f"❌ {args.input}: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"❌ 無法讀取 '{args.input}'：{e}", file=sys.stderr)
        return 1

    print(f"👁️  Preview: {args.input}")
    for call in roots:
        line = call.line
        label = f"line {line}" if line is not None else "?"
        print(f"├─ [{label}] {to_source(call)}")
    print(f"\nTotal roots: {len(roots)}")
    return 0


class ChangeHandler(FileSystemEventHandler):
    """檔案變更事件處理器，每個路徑各自 debounce。"""

    def __init__(self, callback, debounce: float = 1.0):
        self.callback = callback
        self.debounce_seconds = debounce
        self.last_trigger: dict[str, float] = {}

    def on_modified(self, event):
        if event.is_directory:
            return
        src_path = str(event.src_path)
        if not src_path.endswith(_WATCHED_SUFFIX):
            return
        current_time = time.time()
        if current_time - self.last_trigger.get(src_path, 0.0) < self.debounce_seconds:
            return
        self.last_trigger[src_path] = current_time
        print(f"\n🔄 File changed: {src_path}")
        self.callback(src_path)

    on_created = on_modified


def _output_path(src_path: str, src_dir: str, out_dir: Optional[str]) -> str:
    if not out_dir:
        return src_path
    return str(Path(out_dir) / Path(src_path).relative_to(src_dir))


def cmd_watch(args, config: dict) -> int:
    """Watch: 監聽 *.ast.json 變更並自動改寫."""
    watch_cfg = config.get("watch", {}) or {}
    src_dir = args.src or watch_cfg.get("srcRoot", ".") or "."
    out_dir = args.out or watch_cfg.get("outDir")
    debounce = watch_cfg.get("debounce", 1.0)
    if isinstance(debounce, bool) or not isinstance(debounce, (int, float)):
        debounce = 1.0
    options = options_from_config(config)

    if not out_dir:
        print("❌ 請使用 --out 或在 config 的 watch.outDir 設定輸出目錄（避免覆寫後再次觸發）。", file=sys.stderr)
        return 1

    src_dir = str(Path(src_dir).resolve())
    out_dir = str(Path(out_dir).resolve())
    if out_dir == src_dir or out_dir.startswith(src_dir + "/"):
        print("❌ watch.outDir 不可位於 srcRoot 內。", file=sys.stderr)
        return 1

    print(f"👀 Watching for changes in '{src_dir}'...")
    print(f"   Output: {out_dir}")
    print("   Press Ctrl+C to stop.")

    def rewrite(path: str):
        try:
            written = transform_file(path, _output_path(path, src_dir, out_dir), options)
        except BEMError as e:
            print(f"   ❌ {path}: {e}")
            return
        except (OSError, ValueError) as e:
            print(f"   ⚠️  Skipped {path}: {e}")
            return
        print(f"   ✅ Wrote {written}")

    # 初始執行一次
    for path in sorted(Path(src_dir).rglob(f"*{_WATCHED_SUFFIX}")):
        rewrite(str(path))

    event_handler = ChangeHandler(rewrite, debounce=debounce)
    observer = Observer()
    observer.schedule(event_handler, path=src_dir, recursive=True)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n👋 Stopping watch...")
        observer.stop()
    finally:
        observer.join()
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="bem-react: BEM block/element/modifiers → className for React.createElement",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    transform_p = sub.add_parser("transform", help="Rewrite a Babel AST JSON file",
        epilog="Examples:\n  bem-react transform App.ast.json\n  bem-react transform App.ast.json -o build/App.ast.json",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    transform_p.add_argument("input", help="Babel AST JSON (@babel/parser output)")
    transform_p.add_argument("--output", "-o", help="Output path (default: stdout)")

    preview_p = sub.add_parser("preview", help="Print rewritten root elements as JS")
    preview_p.add_argument("input", help="Babel AST JSON")

    watch_p = sub.add_parser("watch", help="Watch *.ast.json files and rewrite on change",
        epilog="Examples:\n  bem-react watch src --out build",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    watch_p.add_argument("src", nargs="?", help="Directory to watch (default: watch.srcRoot)")
    watch_p.add_argument("--out", help="Output directory (default: watch.outDir)")

    args = parser.parse_args(argv)
    config = load_config(args.config)

    if args.command == "transform":
        return cmd_transform(args, config)
    if args.command == "preview":
        return cmd_preview(args, config)
    if args.command == "watch":
        return cmd_watch(args, config)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
