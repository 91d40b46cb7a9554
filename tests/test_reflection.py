"""Tests for reflection metadata and the numpy vertex dtype."""

import json
from pathlib import Path

import numpy as np
import pytest

from shaderpc.codegen.reflection import emit_reflection_json, generate_reflection
from shaderpc.codegen.vertex_dtype import vertex_dtype
from shaderpc.parser.shader_builder import ShaderBuilder
from shaderpc.shader import Shader, ShaderVertexBufferLayout

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def shader():
    return ShaderBuilder().build(FIXTURES / "basic.glsl")


class TestReflection:
    def test_schema(self, shader):
        r = generate_reflection(shader, source_name="basic.glsl")
        assert r["version"] == 1
        assert r["source"] == "basic.glsl"
        assert list(r["stages"]) == ["vertex", "fragment"]

    def test_stage_variables(self, shader):
        r = generate_reflection(shader)
        vertex = r["stages"]["vertex"]
        assert vertex["inputs"][0] == {"name": "position", "type": "vec3", "location": 0, "flat": False}
        assert vertex["inputs"][2] == {"name": "material", "type": "int", "location": 2, "flat": True}
        assert [u["name"] for u in vertex["uniforms"]] == ["view_projection", "model"]
        fragment = r["stages"]["fragment"]
        assert fragment["uniforms"] == [
            {"name": "albedo", "type": "sampler2D", "location": -1, "flat": False},
        ]

    def test_vertex_attributes(self, shader):
        r = generate_reflection(shader)
        assert r["vertex_attributes"] == [
            {"name": "position", "type": "vec3", "location": 0,
             "format": "R32G32B32_SFLOAT", "offset": 0, "size": 12},
            {"name": "uv", "type": "vec2", "location": 1,
             "format": "R32G32_SFLOAT", "offset": 12, "size": 8},
            {"name": "material", "type": "int", "location": 2,
             "format": "R32_SINT", "offset": 20, "size": 4},
        ]
        assert r["vertex_stride"] == 24

    def test_matrix_attribute_has_no_single_format(self):
        shader = ShaderBuilder().build_source(
            "vertex {\nin mat4 instance;\n}\nfragment {\nout vec4 c;\n}"
        )
        (attr,) = generate_reflection(shader)["vertex_attributes"]
        assert attr["format"] is None
        assert attr["size"] == 64

    def test_source_can_be_left_out(self, shader):
        r = generate_reflection(shader, include_source=False)
        assert "source" not in r["stages"]["vertex"]
        assert "source" in generate_reflection(shader)["stages"]["vertex"]

    def test_empty_shader(self):
        r = generate_reflection(Shader())
        assert r["stages"] == {}
        assert r["vertex_attributes"] == []
        assert r["vertex_stride"] == 0

    def test_json_serializable(self, shader):
        text = emit_reflection_json(generate_reflection(shader, source_name="basic.glsl"))
        assert text.endswith("\n")
        parsed = json.loads(text)
        assert parsed["vertex_stride"] == 24
        assert parsed["stages"]["fragment"]["outputs"][0]["name"] == "color"


class TestVertexDtype:
    def test_itemsize_matches_stride(self, shader):
        dt = vertex_dtype(shader.vertex_buffer_layout)
        assert dt.itemsize == shader.vertex_buffer_layout.stride
        assert dt.names == ("position", "uv", "material")

    def test_field_offsets_and_shapes(self, shader):
        dt = vertex_dtype(shader.vertex_buffer_layout)
        assert dt.fields["position"][1] == 0
        assert dt.fields["uv"][1] == 12
        assert dt.fields["material"][1] == 20
        assert dt["position"].shape == (3,)
        assert dt["material"].base == np.dtype("<i4")

    def test_matrix_field(self):
        shader = ShaderBuilder().build_source(
            "vertex {\nin vec3 p;\nin mat4 m;\n}\nfragment {\nout vec4 c;\n}"
        )
        dt = vertex_dtype(shader.vertex_buffer_layout)
        assert dt["m"].shape == (4, 4)
        assert dt.itemsize == 12 + 64

    def test_packs_vertex_bytes(self, shader):
        data = np.zeros(2, dtype=vertex_dtype(shader.vertex_buffer_layout))
        data["position"][1] = (1.0, 2.0, 3.0)
        data["material"][1] = 7
        raw = data.tobytes()
        assert len(raw) == 2 * 24
        assert np.frombuffer(raw, dtype="<i4", count=1, offset=24 + 20)[0] == 7

    def test_empty_layout_rejected(self):
        with pytest.raises(ValueError):
            vertex_dtype(ShaderVertexBufferLayout())

    def test_duplicate_attribute_name_rejected(self):
        shader = ShaderBuilder().build_source(
            "vertex {\nlayout(location = 0) in vec3 a;\nlayout(location = 1) in vec2 a;\n}\n"
            "fragment {\nout vec4 c;\n}"
        )
        with pytest.raises(ValueError, match="Duplicate vertex attribute name 'a'"):
            vertex_dtype(shader.vertex_buffer_layout)


class TestDuplicateAttributeNames:
    def test_locations_follow_each_element(self):
        shader = ShaderBuilder().build_source(
            "vertex {\nlayout(location = 1) in vec2 a;\nlayout(location = 0) in vec3 a;\n}\n"
            "fragment {\nout vec4 c;\n}"
        )
        attrs = generate_reflection(shader)["vertex_attributes"]
        assert [(a["type"], a["location"]) for a in attrs] == [("vec3", 0), ("vec2", 1)]
        assert [a["offset"] for a in attrs] == [0, 12]
