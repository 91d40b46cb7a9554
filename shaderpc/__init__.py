"""shaderpc: extracts stage interfaces and vertex buffer layouts from annotated shader files."""

from shaderpc.builtins.types import ShaderDataType, ShaderStageType
from shaderpc.errors import ShaderBuildError, ShaderErrorCode
from shaderpc.parser.shader_builder import ShaderBuilder
from shaderpc.shader import (
    Shader, ShaderStage, ShaderVariable, ShaderVertexBufferElement, ShaderVertexBufferLayout,
)

__version__ = "0.1.0"
