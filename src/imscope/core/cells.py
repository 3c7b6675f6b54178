# どこで: `src/imscope/core/cells.py`。
# 何を: ウィジェットへ参照渡しする可変セル（Str/Bool/Int/Float/RGB/Date）を提供する。
# なぜ: immediate-mode のウィジェットがフレームをまたいで値を読み書きできる置き場所をホスト側に持たせるため。

from __future__ import annotations

import datetime as _dt
import operator
from typing import Any

import numpy as np

_INT32 = np.iinfo(np.int32)


def as_int32(value: Any) -> int:
    """値を符号付き 32bit 整数として検証して返す。

    Raises
    ------
    TypeError
        整数でない値（float を含む）の場合。
    OverflowError
        int32 の範囲外の場合。
    """

    if isinstance(value, (bool, np.bool_)):
        raise TypeError(f"Int の値に bool は使えません: {value!r}")
    iv = operator.index(value)
    if iv < int(_INT32.min) or iv > int(_INT32.max):
        raise OverflowError(f"Int の値が int32 の範囲外です: {iv}")
    return int(iv)


def _as_float32(value: Any) -> float:
    """値を 32bit 浮動小数へ丸めて Python float で返す。"""

    if isinstance(value, (str, bytes)):
        raise TypeError(f"数値である必要があります: {value!r}")
    return float(np.float32(float(value)))


class Str:
    """文字列セル。テキスト入力系ウィジェットが書き換える。"""

    __slots__ = ("_value",)

    def __init__(self, value: str = "") -> None:
        self.value = value

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Str の値は str である必要があります: {value!r}")
        self._value = value

    def __repr__(self) -> str:
        return f"Str({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Str):
            return NotImplemented
        return self._value == other._value


class Bool:
    """真偽値セル。checkbox / toggle_value が書き換える。"""

    __slots__ = ("_value",)

    def __init__(self, value: bool = False) -> None:
        self.value = value

    @property
    def value(self) -> bool:
        return self._value

    @value.setter
    def value(self, value: bool) -> None:
        if not isinstance(value, (bool, np.bool_)):
            raise TypeError(f"Bool の値は bool である必要があります: {value!r}")
        self._value = bool(value)

    def __repr__(self) -> str:
        return f"Bool({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bool):
            return NotImplemented
        return self._value == other._value


class Int:
    """int32 セル。slider_int / drag_int / radio_value / combo_box が書き換える。"""

    __slots__ = ("_value",)

    def __init__(self, value: int = 0) -> None:
        self.value = value

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        self._value = as_int32(value)

    def __repr__(self) -> str:
        return f"Int({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Int):
            return NotImplemented
        return self._value == other._value


class Float:
    """float32 セル。slider_float / drag_float が書き換える。"""

    __slots__ = ("_value",)

    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        self._value = _as_float32(value)

    def __repr__(self) -> str:
        return f"Float({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        return self._value == other._value


class RGB:
    """RGB セル（各成分 0..1 の float32）。color_edit_button_rgb が書き換える。"""

    __slots__ = ("_r", "_g", "_b")

    def __init__(self, r: float = 0.0, g: float = 0.0, b: float = 0.0) -> None:
        self.r = r
        self.g = g
        self.b = b

    @property
    def r(self) -> float:
        return self._r

    @r.setter
    def r(self, value: float) -> None:
        self._r = _as_float32(value)

    @property
    def g(self) -> float:
        return self._g

    @g.setter
    def g(self, value: float) -> None:
        self._g = _as_float32(value)

    @property
    def b(self) -> float:
        return self._b

    @b.setter
    def b(self, value: float) -> None:
        self._b = _as_float32(value)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self._r, self._g, self._b)

    def set(self, r: float, g: float, b: float) -> None:
        """3 成分をまとめて更新する。"""

        self.r = r
        self.g = g
        self.b = b

    def __repr__(self) -> str:
        return f"RGB({self._r!r}, {self._g!r}, {self._b!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RGB):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()


class Date:
    """日付セル。date_picker_button が書き換える。

    `datetime.datetime` を渡した場合は日付部分だけを保持する。
    """

    __slots__ = ("_value",)

    def __init__(self, value: _dt.date | None = None) -> None:
        self.value = _dt.date.today() if value is None else value

    @property
    def value(self) -> _dt.date:
        return self._value

    @value.setter
    def value(self, value: _dt.date) -> None:
        if isinstance(value, _dt.datetime):
            value = value.date()
        if not isinstance(value, _dt.date):
            raise TypeError(f"Date の値は datetime.date である必要があります: {value!r}")
        self._value = value

    def __repr__(self) -> str:
        return f"Date({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._value == other._value


__all__ = ["Bool", "Date", "Float", "Int", "RGB", "Str", "as_int32"]
