"""Built-in shader types, qualifiers and section keywords."""

from __future__ import annotations
from enum import Enum, IntEnum
from types import MappingProxyType


class ShaderDataType(Enum):
    NONE = "none"
    MAT2 = "mat2"
    MAT3 = "mat3"
    MAT4 = "mat4"
    VEC2 = "vec2"
    VEC3 = "vec3"
    VEC4 = "vec4"
    INT = "int"
    FLOAT = "float"
    SAMPLER2D = "sampler2D"

    def __str__(self):
        return self.value


class ShaderQualifier(Enum):
    NONE = "none"
    IN = "in"
    OUT = "out"
    UNIFORM = "uniform"
    LAYOUT = "layout"
    FLAT = "flat"

    def __str__(self):
        return self.value


class ShaderSection(Enum):
    NONE = "none"
    GLSL_COMMON = "glsl_common"
    VERTEX = "vertex"
    FRAGMENT = "fragment"


# Ordered the way the stages run in the render pipeline: vertex first, fragment last
class ShaderStageType(IntEnum):
    NONE = 0
    VERTEX = 1
    FRAGMENT = 2

    @property
    def stage_name(self) -> str:
        return self.name.lower()


# Lookup table: declaration keyword -> ShaderDataType
DECLARATION_TYPES: MappingProxyType[str, ShaderDataType] = MappingProxyType({
    "mat2": ShaderDataType.MAT2, "mat3": ShaderDataType.MAT3, "mat4": ShaderDataType.MAT4,
    "vec2": ShaderDataType.VEC2, "vec3": ShaderDataType.VEC3, "vec4": ShaderDataType.VEC4,
    "int": ShaderDataType.INT,
    "float": ShaderDataType.FLOAT,
    "sampler2D": ShaderDataType.SAMPLER2D,
})

# Lookup table: declaration keyword -> ShaderQualifier
DECLARATION_QUALIFIERS: MappingProxyType[str, ShaderQualifier] = MappingProxyType({
    "in": ShaderQualifier.IN,
    "out": ShaderQualifier.OUT,
    "uniform": ShaderQualifier.UNIFORM,
    "layout": ShaderQualifier.LAYOUT,
    "flat": ShaderQualifier.FLAT,
})

# Lookup table: top-level block keyword -> ShaderSection
SHADER_SECTIONS: MappingProxyType[str, ShaderSection] = MappingProxyType({
    "glsl_common": ShaderSection.GLSL_COMMON,
    "vertex": ShaderSection.VERTEX,
    "fragment": ShaderSection.FRAGMENT,
})

# Sections that become pipeline stages, in pipeline order
STAGE_SECTIONS: tuple[tuple[ShaderStageType, ShaderSection], ...] = (
    (ShaderStageType.VERTEX, ShaderSection.VERTEX),
    (ShaderStageType.FRAGMENT, ShaderSection.FRAGMENT),
)

# Size in bytes of one value of each type inside a vertex record.
# Samplers are not vertex data but still occupy one 4-byte slot.
_TYPE_BYTE_SIZE: MappingProxyType[ShaderDataType, int] = MappingProxyType({
    ShaderDataType.NONE: 0,
    ShaderDataType.MAT2: 4 * 2 * 2,
    ShaderDataType.MAT3: 4 * 3 * 3,
    ShaderDataType.MAT4: 4 * 4 * 4,
    ShaderDataType.VEC2: 4 * 2,
    ShaderDataType.VEC3: 4 * 3,
    ShaderDataType.VEC4: 4 * 4,
    ShaderDataType.INT: 4,
    ShaderDataType.FLOAT: 4,
    ShaderDataType.SAMPLER2D: 4,
})


def resolve_type(keyword: str) -> ShaderDataType | None:
    return DECLARATION_TYPES.get(keyword)


def resolve_qualifier(keyword: str) -> ShaderQualifier | None:
    return DECLARATION_QUALIFIERS.get(keyword)


def resolve_section(keyword: str) -> ShaderSection | None:
    return SHADER_SECTIONS.get(keyword)


def data_type_size(t: ShaderDataType) -> int:
    """Byte size of a data type in a tightly packed vertex record."""
    return _TYPE_BYTE_SIZE[t]


def component_shape(t: ShaderDataType) -> tuple[int, ...]:
    """Component shape of a data type: () for scalars, (n,) for vectors, (n, n) for matrices."""
    if t in (ShaderDataType.VEC2, ShaderDataType.VEC3, ShaderDataType.VEC4):
        return (int(t.value[-1]),)
    if t in (ShaderDataType.MAT2, ShaderDataType.MAT3, ShaderDataType.MAT4):
        n = int(t.value[-1])
        return (n, n)
    return ()


def is_integer_based(t: ShaderDataType) -> bool:
    return t in (ShaderDataType.INT, ShaderDataType.SAMPLER2D)
