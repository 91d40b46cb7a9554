"""Top-level build orchestration."""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path

from shaderpc.errors import ShaderErrorCode
from shaderpc.parser.shader_builder import ShaderBuilder
from shaderpc.shader import Shader


@dataclass
class BuildResult:
    shader: Shader
    error: ShaderErrorCode = ShaderErrorCode.NONE
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error == ShaderErrorCode.NONE


def _result(builder: ShaderBuilder, shader: Shader) -> BuildResult:
    return BuildResult(shader, builder.error, builder.errors, builder.warnings)


def build_shader_source(
    source: str,
    max_word_length: int | None = None,
    max_section_length: int | None = None,
) -> BuildResult:
    builder = ShaderBuilder(max_word_length=max_word_length, max_section_length=max_section_length)
    return _result(builder, builder.build_source(source))


def build_shader(
    path: str | Path,
    max_word_length: int | None = None,
    max_section_length: int | None = None,
) -> BuildResult:
    """Build a shader file. Raises FileNotFoundError if `path` does not exist."""
    builder = ShaderBuilder(max_word_length=max_word_length, max_section_length=max_section_length)
    return _result(builder, builder.build(path))
