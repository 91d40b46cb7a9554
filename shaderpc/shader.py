"""Result model handed back by the shader builder."""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping

from shaderpc.builtins.types import ShaderDataType, ShaderStageType


@dataclass(frozen=True)
class ShaderVariable:
    identifier: str
    type: ShaderDataType = ShaderDataType.NONE
    flat: bool = False
    layout_location: int = -1  # -1 means no explicit location

    @property
    def has_location(self) -> bool:
        return self.layout_location != -1


@dataclass(frozen=True)
class ShaderStage:
    stage_type: ShaderStageType = ShaderStageType.NONE
    source: str = ""
    inputs: tuple[ShaderVariable, ...] = ()
    outputs: tuple[ShaderVariable, ...] = ()
    uniforms: tuple[ShaderVariable, ...] = ()

    def __lt__(self, other: ShaderStage) -> bool:
        return self.stage_type < other.stage_type


@dataclass(frozen=True)
class ShaderVertexBufferElement:
    name: str
    type: ShaderDataType = ShaderDataType.NONE
    size: int = 0    # bytes
    offset: int = 0  # bytes from the start of one vertex record
    location: int = -1


@dataclass(frozen=True)
class ShaderVertexBufferLayout:
    elements: tuple[ShaderVertexBufferElement, ...] = ()

    @property
    def stride(self) -> int:
        return sum(e.size for e in self.elements)

    def __iter__(self) -> Iterator[ShaderVertexBufferElement]:
        return iter(self.elements)

    def __len__(self):
        return len(self.elements)

    def __getitem__(self, index: int) -> ShaderVertexBufferElement:
        return self.elements[index]


@dataclass(frozen=True)
class Shader:
    """A finished shader: its stages keyed by type plus the vertex buffer layout.

    A default-constructed Shader is the empty result returned when a build fails.
    """
    stage_map: Mapping[ShaderStageType, ShaderStage] = field(default_factory=dict, hash=False)
    vertex_buffer_layout: ShaderVertexBufferLayout = field(default_factory=ShaderVertexBufferLayout)
    common_source: str = ""

    def __post_init__(self):
        object.__setattr__(self, "stage_map", MappingProxyType(dict(self.stage_map)))

    @property
    def stages(self) -> Mapping[ShaderStageType, ShaderStage]:
        return self.stage_map

    @property
    def is_empty(self) -> bool:
        return not self.stage_map

    def has_stage(self, stage_type: ShaderStageType) -> bool:
        return stage_type in self.stage_map

    def get_stage(self, stage_type: ShaderStageType) -> ShaderStage:
        try:
            return self.stage_map[stage_type]
        except KeyError:
            raise KeyError(f"Shader has no {stage_type.stage_name} stage") from None
