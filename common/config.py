import json
from pathlib import Path
from typing import Any, Dict

ROOT = Path(__file__).resolve().parents[1]


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base without mutating inputs."""
    merged = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(merged.get(k), dict):
            merged[k] = _deep_merge(merged[k], v)
        else:
            merged[k] = v
    return merged


def load_config(
    default_path: Path | str = ROOT / "configs" / "default.json",
    local_path: Path | str = ROOT / "configs" / "local.json",
) -> Dict[str, Any]:
    """
    Load default config and optionally merge local overrides.
    """
    default_path = Path(default_path)
    local_path = Path(local_path)

    with default_path.open("r", encoding="utf-8") as f:
        base_cfg = json.load(f)

    if local_path.exists():
        with local_path.open("r", encoding="utf-8") as f:
            local_cfg = json.load(f)
        return _deep_merge(base_cfg, local_cfg)

    return base_cfg


def edge_settings(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """
    Read the `edges` block with defaults applied and values coerced.
    """
    edges_cfg = cfg.get("edges", {})
    low_k = float(edges_cfg.get("low_k", 1.0))
    high_k = float(edges_cfg.get("high_k", 2.0))
    if low_k < 0 or high_k < 0:
        raise ValueError(f"Threshold multipliers must be non-negative: low_k={low_k}, high_k={high_k}")
    if low_k > high_k:
        raise ValueError(f"low_k ({low_k}) must not exceed high_k ({high_k})")

    return {
        "mode": edges_cfg.get("mode", "GRAY"),
        "backend": str(edges_cfg.get("backend", "CPU")).upper(),
        "kernel": str(edges_cfg.get("kernel", "sobel")).lower(),
        "low_k": low_k,
        "high_k": high_k,
        "vectorized_min_pixels": int(edges_cfg.get("vectorized_min_pixels", 4096)),
    }


def ensure_output_dirs(cfg: Dict[str, Any]) -> None:
    """
    Create output directories referenced by the config if they do not exist.
    """
    outputs = cfg.get("outputs", {})
    paths = [
        outputs.get("root"),
        outputs.get("debug_dir"),
        Path(outputs.get("metrics_csv", "")).parent if outputs.get("metrics_csv") else None,
        Path(outputs.get("report_txt", "")).parent if outputs.get("report_txt") else None,
    ]
    for p in paths:
        if not p:
            continue
        Path(p).mkdir(parents=True, exist_ok=True)
