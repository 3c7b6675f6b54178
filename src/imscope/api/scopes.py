# どこで: `src/imscope/api/scopes.py`。公開 API のスコープ関数。
# 何を: 子リージョン（横並び/グループ/折りたたみ/無効化など）を開き、引数なしの関数をその中で実行する関数群を提供する。
# なぜ: 全てのネスト構文を `invoke_scope` の同じ push → body → pop 手順に乗せるため。

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from imscope.core.scope_invoker import ScopeResult, invoke_scope

Body = Callable[[], Any]


def horizontal(body: Body) -> ScopeResult:
    """横並びレイアウトの子リージョンで `body()` を実行する。

    要素は縦方向に中央揃えされる。上揃えにしたい場合は `horizontal_top` を使う。

    Examples
    --------
    >>> def row():
    ...     heading("I'm horizontal")
    >>> horizontal(row)  # doctest: +SKIP
    """

    return invoke_scope("horizontal", body)


def horizontal_centered(body: Body) -> ScopeResult:
    """`horizontal` と同じだが、要素を縦方向の中央へ揃える。"""

    return invoke_scope("horizontal_centered", body)


def horizontal_top(body: Body) -> ScopeResult:
    """`horizontal` と同じだが、要素を上端へ揃える。"""

    return invoke_scope("horizontal_top", body)


def horizontal_wrapped(body: Body) -> ScopeResult:
    """右端に達したら次の行へ折り返す横並びレイアウトで `body()` を実行する。"""

    return invoke_scope("horizontal_wrapped", body)


def vertical(body: Body) -> ScopeResult:
    """縦並びレイアウトの子リージョンで `body()` を実行する。"""

    return invoke_scope("vertical", body)


def collapsing(heading: str, body: Body, *, default_open: bool = False) -> ScopeResult:
    """折りたたみ見出しを表示し、展開中だけ `body()` を実行する。

    折りたたまれている場合は body を呼ばずに `ScopeResult.REGION_UNAVAILABLE` を返す。
    これはエラーではない。

    Parameters
    ----------
    heading : str
        見出しテキスト。展開状態の識別にも使う。
    body : Callable[[], Any]
        展開中に実行する関数。
    default_open : bool
        初回表示時に展開しておくか。既定は折りたたみ。
    """

    return invoke_scope("collapsing", body, heading=str(heading), default_open=bool(default_open))


def indent(body: Body) -> ScopeResult:
    """右へ字下げした子リージョンで `body()` を実行する。"""

    return invoke_scope("indent", body)


def group(body: Body) -> ScopeResult:
    """`body()` の内容を枠で囲んでひとまとまりに見せる。"""

    return invoke_scope("group", body)


def scope(body: Body) -> ScopeResult:
    """スタイル変更（`set_opacity` など）を閉じ込める子リージョンで `body()` を実行する。

    Examples
    --------
    >>> def faded():
    ...     set_opacity(0.5)
    ...     heading("0.5 opacity")
    >>> scope(faded)  # doctest: +SKIP
    >>> heading("normal opacity")  # doctest: +SKIP
    """

    return invoke_scope("scope", body)


def add_enabled(enabled: bool, body: Body) -> ScopeResult:
    """`enabled` が False なら無効化（灰色・操作不可）した子リージョンで `body()` を実行する。

    既に無効化されたリージョンの中では、`enabled=True` でも無効のままになる。
    """

    return invoke_scope("enabled", body, enabled=bool(enabled))


__all__ = [
    "add_enabled",
    "collapsing",
    "group",
    "horizontal",
    "horizontal_centered",
    "horizontal_top",
    "horizontal_wrapped",
    "indent",
    "scope",
    "vertical",
]
