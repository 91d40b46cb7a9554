"""Reflection metadata emitter.

Turns a built Shader into a JSON-serialisable dict describing each stage's
interface and the vertex buffer layout, so a rendering pipeline can set up
vertex bindings without hardcoded values.
"""

from __future__ import annotations

import json
from shaderpc.builtins.types import ShaderDataType
from shaderpc.shader import Shader, ShaderStage, ShaderVariable


# Vulkan format strings for types that map onto a single vertex attribute
_TYPE_TO_VK_FORMAT = {
    ShaderDataType.FLOAT: "R32_SFLOAT",
    ShaderDataType.VEC2: "R32G32_SFLOAT",
    ShaderDataType.VEC3: "R32G32B32_SFLOAT",
    ShaderDataType.VEC4: "R32G32B32A32_SFLOAT",
    ShaderDataType.INT: "R32_SINT",
}


def generate_reflection(shader: Shader, source_name: str = "", include_source: bool = True) -> dict:
    """Generate reflection metadata for a built shader.

    Args:
        shader: The shader returned by ShaderBuilder.build().
        source_name: Original source filename for metadata.
        include_source: Whether to embed each stage's raw source text.

    Returns:
        A dict with the stage interfaces, vertex attributes and vertex stride.
    """
    result = {
        "version": 1,
        "source": source_name,
        "stages": {
            stage_type.stage_name: _reflect_stage(stage, include_source)
            for stage_type, stage in sorted(shader.stages.items())
        },
    }

    layout = shader.vertex_buffer_layout
    result["vertex_attributes"] = [
        {
            "name": e.name,
            "type": str(e.type),
            "location": e.location,
            "format": _TYPE_TO_VK_FORMAT.get(e.type),
            "offset": e.offset,
            "size": e.size,
        }
        for e in layout
    ]
    result["vertex_stride"] = layout.stride
    return result


def emit_reflection_json(reflection: dict) -> str:
    """Serialize reflection metadata to a JSON string."""
    return json.dumps(reflection, indent=2, sort_keys=False) + "\n"


def _reflect_stage(stage: ShaderStage, include_source: bool) -> dict:
    reflected = {}
    if include_source:
        reflected["source"] = stage.source
    reflected["inputs"] = [_reflect_variable(v) for v in stage.inputs]
    reflected["outputs"] = [_reflect_variable(v) for v in stage.outputs]
    reflected["uniforms"] = [_reflect_variable(v) for v in stage.uniforms]
    return reflected


def _reflect_variable(v: ShaderVariable) -> dict:
    return {
        "name": v.identifier,
        "type": str(v.type),
        "location": v.layout_location,
        "flat": v.flat,
    }
