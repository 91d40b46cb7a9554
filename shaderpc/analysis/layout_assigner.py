"""Derive the vertex buffer layout from the vertex stage inputs."""

from __future__ import annotations
from dataclasses import replace
from typing import Iterable

from shaderpc.builtins.types import ShaderStageType, data_type_size
from shaderpc.shader import (
    ShaderStage, ShaderVariable, ShaderVertexBufferElement, ShaderVertexBufferLayout,
)


def sort_vertex_inputs(inputs: Iterable[ShaderVariable]) -> list[ShaderVariable]:
    """Order vertex inputs for the buffer layout.

    Inputs without an explicit location come first, in declaration order,
    followed by located inputs by ascending location. The sort is stable, so
    inputs sharing a location keep their declaration order.
    """
    return sorted(inputs, key=lambda v: (v.has_location, v.layout_location))


def compute_vertex_buffer_layout(inputs: Iterable[ShaderVariable]) -> ShaderVertexBufferLayout:
    """Pack inputs, in the given order, into a tightly packed vertex record."""
    elements = []
    offset = 0
    for inp in inputs:
        size = data_type_size(inp.type)
        elements.append(ShaderVertexBufferElement(
            name=inp.identifier,
            type=inp.type,
            size=size,
            offset=offset,
            location=inp.layout_location,
        ))
        offset += size
    return ShaderVertexBufferLayout(tuple(elements))


def set_vertex_buffer_layout(
    stages: dict[ShaderStageType, ShaderStage],
) -> ShaderVertexBufferLayout:
    """Sort the vertex stage inputs in place in `stages` and return their layout."""
    vertex = stages[ShaderStageType.VERTEX]
    ordered = tuple(sort_vertex_inputs(vertex.inputs))
    stages[ShaderStageType.VERTEX] = replace(vertex, inputs=ordered)
    return compute_vertex_buffer_layout(ordered)
