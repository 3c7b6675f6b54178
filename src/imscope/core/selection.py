# どこで: `src/imscope/core/selection.py`。
# 何を: combo_box / selectable_value 系の「現在値 → 表示ラベル」解決を純粋関数で提供する。
# なぜ: 候補外の値でも例外にせず "Unknown" を表示する方針を toolkit 非依存でテストできるようにするため。

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

UNKNOWN_LABEL = "Unknown"

T = TypeVar("T")


def label_at(names: Sequence[str], index: int) -> str:
    """`names[index]` を返す。範囲外なら "Unknown"。"""

    if 0 <= int(index) < len(names):
        return str(names[int(index)])
    return UNKNOWN_LABEL


def index_of(alternatives: Sequence[T], value: T) -> int | None:
    """値が等しい最初の候補の位置を返す（無ければ None）。"""

    for i, alternative in enumerate(alternatives):
        if alternative == value:
            return i
    return None


def selected_label(alternatives: Sequence[T], names: Sequence[str], value: T) -> str:
    """現在値に対応する表示ラベルを返す。

    Notes
    -----
    値が候補に無い場合、または対応する位置に名前が無い場合は "Unknown"。
    """

    index = index_of(alternatives, value)
    if index is None:
        return UNKNOWN_LABEL
    return label_at(names, index)


__all__ = ["UNKNOWN_LABEL", "index_of", "label_at", "selected_label"]
