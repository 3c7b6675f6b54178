# どこで: `src/imscope/api/widgets.py`。公開 API のウィジェット関数。
# 何を: 現在のリージョン（スコープスタックの先頭）へウィジェットを 1 つ描く関数群を提供する。
# なぜ: ホストが描画先を引数で持ち回らずに、update 関数の中で素の関数呼び出しだけで UI を記述できるようにするため。

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from imscope.core.cells import RGB, Bool, Date, Float, Int, Str, as_int32
from imscope.core.selection import selected_label
from imscope.core.session import current_session

C = TypeVar("C")


def _draw(widget: str, *args: Any) -> Any:
    """現在のリージョンへ `widget` を描画する。フレーム外なら `NoActiveFrame`。"""

    session = current_session()
    region = session.stack.top()
    return session.toolkit.draw(region.native, widget, *args)


def _require_cell(value: Any, cell_type: type[C], widget: str) -> C:
    if not isinstance(value, cell_type):
        raise TypeError(
            f"{widget} には {cell_type.__name__} セルを渡してください: got={type(value).__name__}"
        )
    return value


def _int32_range(lo: Any, hi: Any, widget: str) -> tuple[int, int]:
    """int ウィジェットの範囲を int32 として検証する。"""

    try:
        return as_int32(lo), as_int32(hi)
    except OverflowError as exc:
        raise OverflowError(f"{widget} の範囲は int32 に収めてください: {exc}") from exc


# --- テキスト ---


def heading(text: str) -> None:
    """大きな文字でテキストを表示する。

    Examples
    --------
    >>> heading("hello")  # doctest: +SKIP
    """

    _draw("heading", str(text))


def monospace(text: str) -> None:
    """等幅フォントでテキストを表示する。"""

    _draw("monospace", str(text))


def small(text: str) -> None:
    """小さな文字でテキストを表示する。"""

    _draw("small", str(text))


def strong(text: str) -> None:
    """少し目立つ色でテキストを表示する。"""

    _draw("strong", str(text))


def weak(text: str) -> None:
    """淡い色でテキストを表示する。"""

    _draw("weak", str(text))


def label(text: str) -> None:
    """テキストを表示する。"""

    _draw("label", str(text))


def code(text: str) -> None:
    """コード片として（等幅・背景付きで）テキストを表示する。"""

    _draw("code", str(text))


# --- テキスト編集 ---


def code_editor(text: Str) -> None:
    """コード編集用の複数行テキスト欄を表示し、編集結果を `text` に書き戻す。

    Examples
    --------
    >>> source = Str("print(42 + 27)")
    >>> code_editor(source)  # doctest: +SKIP
    """

    _draw("code_editor", _require_cell(text, Str, "code_editor"))


def text_edit_singleline(text: Str) -> None:
    """1 行のテキスト欄を表示し、編集結果を `text` に書き戻す。"""

    _draw("text_edit_singleline", _require_cell(text, Str, "text_edit_singleline"))


def text_edit_multiline(text: Str) -> None:
    """複数行のテキスト欄を表示し、編集結果を `text` に書き戻す。"""

    _draw("text_edit_multiline", _require_cell(text, Str, "text_edit_multiline"))


# --- ボタン / リンク ---


def button_clicked(text: str) -> bool:
    """ボタンを表示し、このフレームでクリックされたら True を返す。

    Examples
    --------
    >>> if button_clicked("click me"):  # doctest: +SKIP
    ...     print("clicked")
    """

    return bool(_draw("button_clicked", str(text)))


def small_button_clicked(text: str) -> bool:
    """小さいボタンを表示し、このフレームでクリックされたら True を返す。"""

    return bool(_draw("small_button_clicked", str(text)))


def hyperlink(url: str) -> None:
    """URL をクリック可能なリンクとして表示する。クリックでブラウザを開く。"""

    _draw("hyperlink", str(url))


def hyperlink_to(label: str, url: str) -> None:
    """`label` を表示し、クリックで `url` をブラウザで開く。"""

    _draw("hyperlink_to", str(label), str(url))


def link_clicked(label: str) -> bool:
    """リンク風のテキストを表示し、クリックされたら True を返す。

    Web ページへのリンクには `hyperlink` / `hyperlink_to` を使う。
    """

    return bool(_draw("link_clicked", str(label)))


def image(source: str) -> None:
    """`source`（ファイルパスまたは file:// URI）の画像を表示する。"""

    _draw("image", str(source))


def image_and_text_clicked(source: str, text: str) -> bool:
    """画像付きボタンを表示し、クリックされたら True を返す。"""

    return bool(_draw("image_and_text_clicked", str(source), str(text)))


# --- 値ウィジェット ---


def slider_float(value: Float, min: float, max: float, text: str) -> None:
    """float をスライダーで編集する。

    操作されない限り `value` は変更しない（範囲外の値もそのまま残る）。

    Parameters
    ----------
    value : Float
        編集対象のセル。
    min, max : float
        スライダーの範囲。
    text : str
        スライダー横に表示するラベル。
    """

    _draw(
        "slider_float",
        _require_cell(value, Float, "slider_float"),
        float(min),
        float(max),
        str(text),
    )


def slider_int(value: Int, min: int, max: int, text: str) -> None:
    """int をスライダーで編集する。"""

    lo, hi = _int32_range(min, max, "slider_int")
    _draw("slider_int", _require_cell(value, Int, "slider_int"), lo, hi, str(text))


def drag_float(value: Float, min: float, max: float, speed: float) -> None:
    """数値をドラッグして float を編集する。"""

    _draw(
        "drag_float",
        _require_cell(value, Float, "drag_float"),
        float(min),
        float(max),
        float(speed),
    )


def drag_int(value: Int, min: int, max: int, speed: float) -> None:
    """数値をドラッグして int を編集する。"""

    lo, hi = _int32_range(min, max, "drag_int")
    _draw("drag_int", _require_cell(value, Int, "drag_int"), lo, hi, float(speed))


def checkbox(checked: Bool, text: str) -> None:
    """チェックボックスを表示する。"""

    _draw("checkbox", _require_cell(checked, Bool, "checkbox"), str(text))


def toggle_value(selected: Bool, text: str) -> None:
    """チェックボックスと同じ動作の、選択可能ラベルを表示する。"""

    _draw("toggle_value", _require_cell(selected, Bool, "toggle_value"), str(text))


def radio_value(current_value: Int, alternative: int, text: str) -> None:
    """ラジオボタンを表示する。

    `current_value == alternative` のとき選択状態で描き、クリックされると
    `alternative` を `current_value` に代入する。

    Examples
    --------
    >>> RED, GREEN = 0, 1
    >>> color = Int(RED)
    >>> radio_value(color, RED, "red")  # doctest: +SKIP
    >>> radio_value(color, GREEN, "green")  # doctest: +SKIP
    """

    _draw("radio_value", _require_cell(current_value, Int, "radio_value"), int(alternative), str(text))


def selectable_value(current_value: Int, alternative: int, text: str) -> None:
    """選択可能なテキストを表示する。選択規則は `radio_value` と同じ。"""

    _draw(
        "selectable_value",
        _require_cell(current_value, Int, "selectable_value"),
        int(alternative),
        str(text),
    )


def combo_box(
    current_value: Int,
    alternatives: Sequence[int],
    names: Sequence[str],
    label: str,
) -> None:
    """`alternatives` の値を `names` の名前で選ぶコンボボックスを表示する。

    現在値が `alternatives` に無い、または対応する名前が無い場合は "Unknown" と表示する。

    Examples
    --------
    >>> RED, GREEN, BLUE = 0, 1, 2
    >>> data = Int(RED)
    >>> combo_box(data, [RED, GREEN, BLUE], ["red", "green", "blue"], "choose")  # doctest: +SKIP
    """

    cell = _require_cell(current_value, Int, "combo_box")
    alts = tuple(int(a) for a in alternatives)
    labels = tuple(str(n) for n in names)
    preview = selected_label(alts, labels, cell.value)
    _draw("combo_box", cell, alts, labels, preview, str(label))


def color_edit_button_rgb(rgb: RGB) -> None:
    """色見本ボタンを表示し、クリックでカラーピッカーを開く。"""

    _draw("color_edit_button_rgb", _require_cell(rgb, RGB, "color_edit_button_rgb"))


def date_picker_button(selection: Date) -> None:
    """日付を表示し、クリックで日付ピッカーを開く。"""

    _draw("date_picker_button", _require_cell(selection, Date, "date_picker_button"))


# --- その他 ---


def progress(value: float) -> None:
    """進捗バーを表示する。`value` は 0..1（1 が完了）。"""

    _draw("progress", float(value))


def spinner() -> None:
    """読み込み中を示すスピナーを表示する。"""

    _draw("spinner")


def separator() -> None:
    """区切り線を表示する。"""

    _draw("separator")


def add_space(amount: float) -> None:
    """次のウィジェットの前に余白を入れる（方向はレイアウト依存）。"""

    _draw("add_space", float(amount))


def set_invisible() -> None:
    """以降のウィジェットを（領域は確保したまま）不可視にする。

    不可視は無効化を含む。同じリージョンの中では元に戻せない。
    """

    _draw("set_invisible")


def disable() -> None:
    """以降のウィジェットを無効化（灰色・操作不可）にする。

    同じリージョンの中では元に戻せない。部分的に無効化するなら `add_enabled` を使う。
    """

    _draw("disable")


def set_opacity(opacity: float) -> None:
    """以降のウィジェットを半透明にする。`opacity` は 0..1。"""

    _draw("set_opacity", float(opacity))


__all__ = [
    "add_space",
    "button_clicked",
    "checkbox",
    "code",
    "code_editor",
    "color_edit_button_rgb",
    "combo_box",
    "date_picker_button",
    "disable",
    "drag_float",
    "drag_int",
    "heading",
    "hyperlink",
    "hyperlink_to",
    "image",
    "image_and_text_clicked",
    "label",
    "link_clicked",
    "monospace",
    "progress",
    "radio_value",
    "selectable_value",
    "separator",
    "set_invisible",
    "set_opacity",
    "slider_float",
    "slider_int",
    "small",
    "small_button_clicked",
    "spinner",
    "strong",
    "text_edit_multiline",
    "text_edit_singleline",
    "toggle_value",
    "weak",
]
