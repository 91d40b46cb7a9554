"""numpy view of a vertex buffer layout, for packing vertex data on the CPU."""

from __future__ import annotations

import numpy as np

from shaderpc.builtins.types import component_shape, is_integer_based
from shaderpc.shader import ShaderVertexBufferLayout


def vertex_dtype(layout: ShaderVertexBufferLayout) -> np.dtype:
    """Build a structured dtype matching one vertex record of `layout`.

    Each element becomes a field at its byte offset; the dtype's itemsize
    equals the layout stride, so ``np.zeros(n, vertex_dtype(layout)).tobytes()``
    is ready to upload as a vertex buffer.
    """
    if not len(layout):
        raise ValueError("Cannot build a vertex dtype from an empty layout")

    names = []
    formats = []
    offsets = []
    for e in layout:
        if e.name in names:
            raise ValueError(f"Duplicate vertex attribute name '{e.name}' in layout")
        base = "<i4" if is_integer_based(e.type) else "<f4"
        shape = component_shape(e.type)
        names.append(e.name)
        formats.append((base, shape) if shape else base)
        offsets.append(e.offset)

    return np.dtype({
        "names": names,
        "formats": formats,
        "offsets": offsets,
        "itemsize": layout.stride,
    })
