"""設定檔載入與基本驗證."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = "bem.config.json"

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"bem", "watch"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "bem": {"blockPrefix", "elementPrefix", "modifierPrefix"},
    "watch": {"srcRoot", "outDir", "debounce"},
}


@dataclass(frozen=True)
class BEMOptions:
    """class 名稱前綴設定；轉換期間唯讀."""
    block_prefix: str = ""
    element_prefix: str = "__"
    modifier_prefix: str = "--"


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 頂層未知欄位
    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    # 各區塊欄位
    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' 應為物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    # 前綴必須是字串
    bem_cfg = cfg.get("bem", {})
    if isinstance(bem_cfg, dict):
        for key in sorted(_KNOWN_SECTION_KEYS["bem"]):
            val = bem_cfg.get(key)
            if val is not None and not isinstance(val, str):
                _warn(f"bem.{key} 應為字串，目前是 {type(val).__name__}，改用預設值")

    debounce = cfg.get("watch", {}).get("debounce") if isinstance(cfg.get("watch"), dict) else None
    if debounce is not None and (isinstance(debounce, bool) or not isinstance(debounce, (int, float))):
        _warn(f"watch.debounce 應為數字，目前是 {type(debounce).__name__}")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def options_from_config(cfg: dict) -> BEMOptions:
    """從 config 的 bem 區塊建立 BEMOptions；未知欄位與非字串值忽略."""
    bem_cfg = cfg.get("bem", {}) if cfg else {}
    if not isinstance(bem_cfg, dict):
        return BEMOptions()
    defaults = BEMOptions()
    values = {}
    for key, attr in (
        ("blockPrefix", "block_prefix"),
        ("elementPrefix", "element_prefix"),
        ("modifierPrefix", "modifier_prefix"),
    ):
        val = bem_cfg.get(key)
        values[attr] = val if isinstance(val, str) else getattr(defaults, attr)
    return BEMOptions(**values)
