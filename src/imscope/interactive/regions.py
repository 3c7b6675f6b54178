# どこで: `src/imscope/interactive/regions.py`。
# 何を: リージョン種別（root/horizontal/collapsing/indent/group/...）を pyimgui の begin/end 対へ対応付ける。
# なぜ: ImGui の「対で呼ぶ API」の開閉と、リージョンごとのレイアウト/スタイル状態を 1 箇所で管理するため。

from __future__ import annotations

import importlib
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from imscope.core.toolkit import ROOT_KIND

# 無効化したリージョンの描画 alpha 倍率。
DISABLED_ALPHA = 0.5

# kind -> (layout, 要素を縦中央へ揃えるか)
_GROUP_LAYOUTS: dict[str, tuple[str, bool]] = {
    "horizontal": ("horizontal", True),
    "horizontal_centered": ("horizontal", True),
    "horizontal_top": ("horizontal", False),
    "horizontal_wrapped": ("wrapped", True),
    "vertical": ("vertical", False),
    "group": ("vertical", False),
}

_GROUP_FRAME_PADDING = 4.0
_GROUP_FRAME_RGBA = (0.5, 0.5, 0.5, 0.6)


@dataclass(slots=True)
class ImGuiRegion:
    """pyimgui 上の 1 リージョンの状態。"""

    kind: str
    layout: str = "vertical"
    align_center: bool = False
    # このリージョンに直接置いた要素数（同じ行に並べる判定と ID 生成に使う）。
    item_count: int = 0
    # close 時に pop する数。
    style_var_count: int = 0
    item_flag_count: int = 0
    disabled: bool = False
    invisible: bool = False
    framed: bool = False
    closed: bool = False


def _imgui_internal() -> Any | None:
    try:
        return importlib.import_module("imgui.internal")
    except ImportError:
        return None


def before_item(imgui: Any, region: ImGuiRegion) -> None:
    """`region` に要素を 1 つ置く直前に呼び、レイアウトに応じてカーソルを進める。"""

    if region.item_count > 0:
        if region.layout == "horizontal":
            imgui.same_line()
        elif region.layout == "wrapped":
            # 次の要素幅は描くまで分からないので、直前の要素幅で見積もる。
            last_width = float(imgui.get_item_rect_size().x)
            spacing = float(imgui.get_style().item_spacing.x)
            right = float(imgui.get_item_rect_max().x) + spacing + last_width
            limit = float(imgui.get_window_position().x) + float(
                imgui.get_window_content_region_max().x
            )
            if right <= limit:
                imgui.same_line()
    if region.layout != "vertical" and region.align_center:
        imgui.align_text_to_frame_padding()
    region.item_count += 1


def push_alpha(imgui: Any, region: ImGuiRegion, factor: float) -> None:
    """現在の alpha に `factor` を掛けた値を、このリージョンが閉じるまで適用する。"""

    factor = max(0.0, min(1.0, float(factor)))
    alpha = float(imgui.get_style().alpha) * factor
    imgui.push_style_var(imgui.STYLE_ALPHA, alpha)
    region.style_var_count += 1


def apply_disabled(imgui: Any, region: ImGuiRegion) -> None:
    """以降の要素を操作不可・半透明にする。既に無効なら何もしない。"""

    if region.disabled:
        return
    internal = _imgui_internal()
    push_item_flag = getattr(internal, "push_item_flag", None)
    item_disabled = getattr(internal, "ITEM_DISABLED", None)
    if callable(push_item_flag) and item_disabled is not None:
        push_item_flag(item_disabled, True)
        region.item_flag_count += 1
    push_alpha(imgui, region, DISABLED_ALPHA)
    region.disabled = True


def apply_invisible(imgui: Any, region: ImGuiRegion) -> None:
    """以降の要素を不可視にする（領域は確保する）。不可視は無効化を含む。"""

    if region.invisible:
        return
    apply_disabled(imgui, region)
    push_alpha(imgui, region, 0.0)
    region.invisible = True


def open_region(
    imgui: Any,
    parent: ImGuiRegion | None,
    kind: str,
    params: Mapping[str, Any],
    *,
    window: Any,
    title: str,
) -> ImGuiRegion | None:
    """`parent` の中に `kind` のリージョンを開く。折りたたみ中の collapsing は None。"""

    if kind == ROOT_KIND:
        # root は 1 ウィンドウ全面に固定表示する（位置/サイズ固定）。
        imgui.set_next_window_position(0, 0)
        imgui.set_next_window_size(window.width, window.height)
        imgui.begin(
            f"{title}##imscope_root",
            flags=imgui.WINDOW_NO_RESIZE
            | imgui.WINDOW_NO_COLLAPSE
            | imgui.WINDOW_NO_TITLE_BAR
            | imgui.WINDOW_NO_MOVE,
        )
        return ImGuiRegion(kind=ROOT_KIND)

    if parent is None:
        raise ValueError(f"{kind} region requires a parent region")

    before_item(imgui, parent)
    region = ImGuiRegion(kind=str(kind), disabled=parent.disabled, invisible=parent.invisible)

    if kind in _GROUP_LAYOUTS:
        layout, align_center = _GROUP_LAYOUTS[kind]
        region.layout = layout
        region.align_center = align_center
        region.framed = kind == "group"
        imgui.begin_group()
    elif kind == "collapsing":
        flags = imgui.TREE_NODE_DEFAULT_OPEN if params.get("default_open") else 0
        # 見出しテキストを ID にする（展開状態は ImGui がこの ID で保持する）。
        if not imgui.tree_node(str(params.get("heading", "")), flags):
            return None
    elif kind == "indent":
        imgui.indent()
    elif kind in ("scope", "enabled"):
        pass
    else:
        raise ValueError(f"unknown region kind: {kind}")

    # 子リージョン内の ID が兄弟リージョンと衝突しないよう、親内の位置で push_id する。
    imgui.push_id(f"{kind}#{parent.item_count}")

    if kind == "enabled" and not params.get("enabled", True):
        apply_disabled(imgui, region)
    return region


def close_region(imgui: Any, region: ImGuiRegion) -> None:
    """`open_region` が開いたリージョンを、開いた順の逆に閉じる。"""

    if region.closed:
        raise ValueError(f"region is already closed: {region.kind}")
    region.closed = True

    if region.style_var_count:
        imgui.pop_style_var(region.style_var_count)
    if region.item_flag_count:
        internal = _imgui_internal()
        for _ in range(region.item_flag_count):
            internal.pop_item_flag()  # type: ignore[union-attr]

    kind = region.kind
    if kind == ROOT_KIND:
        imgui.end()
        return

    imgui.pop_id()
    if kind in _GROUP_LAYOUTS:
        imgui.end_group()
        if region.framed:
            _draw_group_frame(imgui)
    elif kind == "collapsing":
        imgui.tree_pop()
    elif kind == "indent":
        imgui.unindent()


def _draw_group_frame(imgui: Any) -> None:
    """直前に閉じた group の外周に枠を描く。"""

    rect_min = imgui.get_item_rect_min()
    rect_max = imgui.get_item_rect_max()
    pad = _GROUP_FRAME_PADDING
    imgui.get_window_draw_list().add_rect(
        float(rect_min.x) - pad,
        float(rect_min.y) - pad,
        float(rect_max.x) + pad,
        float(rect_max.y) + pad,
        imgui.get_color_u32_rgba(*_GROUP_FRAME_RGBA),
        rounding=4.0,
    )


__all__ = [
    "ImGuiRegion",
    "apply_disabled",
    "apply_invisible",
    "before_item",
    "close_region",
    "open_region",
    "push_alpha",
]
