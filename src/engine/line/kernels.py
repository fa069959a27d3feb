"""
どこで: `engine.line.kernels`。
何を: テーブル補完で使う読み出し index 列の生成カーネル（numba JIT）。
なぜ: EVEN の小数ストライド累積は逐次加算の丸めまで再現する必要があり、ループで書くのが素直なため。

- `PYX_USE_NUMBA=0` のときは同じ関数を JIT せずに実行する（`py_func`）。
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from common.settings import get as _get_settings


@njit(cache=True)  # type: ignore[misc]
def _stride_indices(count: int, stride: float) -> np.ndarray:
    """`j=0` から `stride` を逐次加算し、各スロットの `floor(j)` を返す。"""
    out = np.empty(count, dtype=np.int64)
    j = 0.0
    for x in range(count):
        out[x] = int(math.floor(j))
        j += stride
    return out


@njit(cache=True)  # type: ignore[misc]
def _cyclic_indices(count: int, period: int, step: int) -> np.ndarray:
    """`0, step, 2*step, ...` を `period` で折り返した index 列を返す。"""
    out = np.empty(count, dtype=np.int64)
    i = 0
    for x in range(count):
        out[x] = i
        i += step
        if i >= period:
            i = 0
    return out


def stride_indices(count: int, stride: float) -> np.ndarray:
    if _get_settings().USE_NUMBA:
        return _stride_indices(int(count), float(stride))
    return _stride_indices.py_func(int(count), float(stride))


def cyclic_indices(count: int, period: int, step: int = 1) -> np.ndarray:
    if _get_settings().USE_NUMBA:
        return _cyclic_indices(int(count), int(period), int(step))
    return _cyclic_indices.py_func(int(count), int(period), int(step))


__all__ = ["stride_indices", "cyclic_indices"]
