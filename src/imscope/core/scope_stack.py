# どこで: `src/imscope/core/scope_stack.py`。
# 何を: 開いているリージョンのハンドルを LIFO で保持するスコープスタックを提供する。
# なぜ: ウィジェット関数が「今どこへ描くか」を引数なしで解決する唯一の経路にするため。

from __future__ import annotations

from typing import Any

from .errors import DanglingHandle, NoActiveScope, StackUnderflow


class RegionHandle:
    """toolkit のネイティブリージョンへの非所有参照。

    生成元のスコープが終わると `invalidate()` され、以降 `native` の参照は
    `DanglingHandle` になる。
    """

    __slots__ = ("_native", "kind", "generation", "_alive")

    def __init__(self, native: Any, *, kind: str, generation: int) -> None:
        self._native = native
        self.kind = str(kind)
        self.generation = int(generation)
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def native(self) -> Any:
        """ネイティブリージョンを返す。スコープ終了後は `DanglingHandle`。"""

        if not self._alive:
            raise DanglingHandle(
                f"region handle is no longer valid: kind={self.kind} generation={self.generation}"
            )
        return self._native

    def invalidate(self) -> None:
        self._alive = False
        self._native = None

    def __repr__(self) -> str:
        state = "alive" if self._alive else "dead"
        return f"RegionHandle(kind={self.kind!r}, generation={self.generation}, {state})"


class ScopeStack:
    """セッション 1 つ分のリージョンスタック。

    深さは「現在開いているスコープ呼び出しの数」と常に一致し、フレーム外では空になる。
    所有スレッド以外からは触らない前提（`Session` と `RunGuard` が保証する）。
    """

    def __init__(self) -> None:
        self._handles: list[RegionHandle] = []
        self._generation = 0

    @property
    def depth(self) -> int:
        return len(self._handles)

    def __len__(self) -> int:
        return len(self._handles)

    def push(self, native: Any, *, kind: str) -> RegionHandle:
        """ネイティブリージョンを包んだハンドルを積み、そのハンドルを返す。"""

        self._generation += 1
        handle = RegionHandle(native, kind=kind, generation=self._generation)
        self._handles.append(handle)
        return handle

    def pop(self) -> RegionHandle:
        """末尾のハンドルを取り除いて返す。"""

        if not self._handles:
            raise StackUnderflow("UI stack is empty. This is likely to be a problem with imscope")
        return self._handles.pop()

    def top(self) -> RegionHandle:
        """末尾のハンドルを取り除かずに返す。"""

        if not self._handles:
            raise NoActiveScope("UI stack is empty: no scope is open")
        handle = self._handles[-1]
        if not handle.alive:
            raise DanglingHandle(
                f"region handle on top of the stack is no longer valid: {handle!r}"
            )
        return handle

    def invalidate_all(self) -> int:
        """残っている全ハンドルを無効化して取り除き、その数を返す。

        セッション終了時の後始末用。正常終了なら常に 0。
        """

        count = len(self._handles)
        for handle in reversed(self._handles):
            handle.invalidate()
        self._handles.clear()
        return count

    def kinds(self) -> tuple[str, ...]:
        """底から順に、積まれているリージョン種別を返す。"""

        return tuple(h.kind for h in self._handles)


__all__ = ["RegionHandle", "ScopeStack"]
