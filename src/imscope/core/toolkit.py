# どこで: `src/imscope/core/toolkit.py`。
# 何を: コアが外部 GUI toolkit に要求する能力（リージョン開閉/ウィジェット描画/ループ）を Protocol で定義する。
# なぜ: スタック/スコープ/ガードのロジックを pyimgui や pyglet に依存させず、ヘッドレスでも駆動できるようにするため。

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

ROOT_KIND = "root"

# スコープ関数が toolkit へ渡すリージョン種別。
SCOPE_KINDS: frozenset[str] = frozenset(
    {
        "horizontal",
        "horizontal_centered",
        "horizontal_top",
        "horizontal_wrapped",
        "vertical",
        "collapsing",
        "indent",
        "group",
        "scope",
        "enabled",
    }
)


@dataclass(frozen=True, slots=True)
class FrameContext:
    """ホストの update 関数へ毎フレーム渡す情報。"""

    frame_index: int
    # 前フレームからの経過秒。
    dt: float
    # 注: toolkit 固有の機能へ触りたいホスト向けに、そのまま渡す。
    toolkit: Any


class Toolkit(Protocol):
    """外部 GUI toolkit の能力インターフェース。"""

    def open_region(self, parent: Any, kind: str, params: Mapping[str, Any]) -> Any | None:
        """`parent` の中に子リージョンを開く。開けない（例: 折りたたみ中）なら None。

        `kind == "root"` のとき `parent` は None。
        """
        ...

    def close_region(self, region: Any) -> None:
        """`open_region` が返したリージョンを閉じる。"""
        ...

    def draw(self, region: Any, widget: str, *args: Any) -> Any:
        """`region` にウィジェットを 1 つ描画し、その結果（クリック有無など）を返す。"""
        ...

    def install_image_loaders(self) -> None:
        """`image` 系ウィジェットのための画像ローダーを準備する。"""
        ...

    def run(self, on_frame: Callable[[float], None]) -> None:
        """ウィンドウが閉じられるまでループし、毎フレーム `on_frame(dt)` を呼ぶ。"""
        ...

    def close(self) -> None:
        """toolkit の資源を破棄する。二重呼び出しを許容する。"""
        ...


__all__ = ["FrameContext", "ROOT_KIND", "SCOPE_KINDS", "Toolkit"]
