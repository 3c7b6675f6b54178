# どこで: `src/imscope/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: ウィンドウサイズやフレームレート、エラー方針をコードを変えずに利用者が指定できるようにするため。

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from .session import validate_error_policy


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """imscope の実行時設定。"""

    config_path: Path | None
    window_size: tuple[int, int]
    window_position: tuple[int, int] | None
    vsync: bool
    resizable: bool
    fps: float
    error_policy: str
    log_level: int


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    p = Path(os.path.expandvars(str(path))).expanduser()
    _EXPLICIT_CONFIG_PATH = p
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".imscope" / "config.yaml",
        home / ".config" / "imscope" / "config.yaml",
    )


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int] | None:
    if value is None:
        return None
    if isinstance(value, (str, bytes)):
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    try:
        seq = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    try:
        x = int(seq[0])
        y = int(seq[1])
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の整数配列である必要があります: got={value!r}") from exc
    return (x, y)


def _as_float(value: Any, *, key: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}")
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_bool(value: Any, *, key: str) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    raise RuntimeError(f"{key} は true/false である必要があります: got={value!r}")


def _as_log_level(value: Any, *, key: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return int(value)
    name = str(value).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise RuntimeError(f"{key} はログレベル名である必要があります: got={value!r}")
    return level


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    try:
        import yaml  # type: ignore[import-untyped]
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(f"PyYAML を import できません: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("imscope")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="imscope/resource/default_config.yaml")


def _merge_sections(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """トップレベルのセクション（window/loop/...）単位で浅くマージする。"""

    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            merged = dict(out[key])
            merged.update(value)
            out[key] = merged
        else:
            out[key] = value
    return out


def config_from_payload(payload: dict[str, Any], *, config_path: Path | None = None) -> RuntimeConfig:
    """マージ済み payload を検証して RuntimeConfig を返す。"""

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    try:
        version_i = int(version)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    window = _as_mapping(payload.get("window"), key="window")
    window_size = _as_int_pair(window.get("size"), key="window.size")
    if window_size is None:
        raise RuntimeError(
            "window.size が未設定です（同梱 default_config.yaml を確認してください）"
        )
    if window_size[0] <= 0 or window_size[1] <= 0:
        raise ValueError(f"window.size は正の値である必要があります: got={window_size}")
    window_position = _as_int_pair(window.get("position"), key="window.position")
    vsync = _as_bool(window.get("vsync"), key="window.vsync")
    resizable = _as_bool(window.get("resizable"), key="window.resizable")

    loop = _as_mapping(payload.get("loop"), key="loop")
    fps = _as_float(loop.get("fps"), key="loop.fps")
    if fps is None:
        raise RuntimeError("loop.fps が未設定です（同梱 default_config.yaml を確認してください）")

    errors = _as_mapping(payload.get("errors"), key="errors")
    policy_raw = errors.get("policy")
    if policy_raw is None:
        raise RuntimeError(
            "errors.policy が未設定です（同梱 default_config.yaml を確認してください）"
        )
    try:
        error_policy = validate_error_policy(str(policy_raw))
    except ValueError as exc:
        raise RuntimeError(f"errors.policy が不正です: {exc}") from exc

    logging_section = _as_mapping(payload.get("logging"), key="logging")
    log_level = _as_log_level(logging_section.get("level"), key="logging.level")

    return RuntimeConfig(
        config_path=config_path,
        window_size=window_size,
        window_position=window_position,
        vsync=bool(vsync) if vsync is not None else False,
        resizable=bool(resizable) if resizable is not None else True,
        fps=float(fps),
        error_policy=error_policy,
        log_level=logging.WARNING if log_level is None else int(log_level),
    )


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.imscope/config.yaml` / `~/.config/imscope/config.yaml`
    3) `run(..., config_path=...)` の `config_path`
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload = _merge_sections(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload = _merge_sections(payload, _load_yaml_config(explicit_path))

    cfg = config_from_payload(payload, config_path=explicit_path or discovered_path)
    _CONFIG_CACHE = cfg
    return cfg


__all__ = [
    "RuntimeConfig",
    "config_from_payload",
    "runtime_config",
    "set_config_path",
]
