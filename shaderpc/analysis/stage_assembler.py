"""Build typed ShaderStage records from the declarations captured per section."""

from __future__ import annotations
from typing import Mapping, Sequence

from shaderpc.builtins.types import ShaderQualifier, ShaderSection, ShaderStageType, STAGE_SECTIONS
from shaderpc.errors import ShaderBuildError, ShaderErrorCode
from shaderpc.parser.declarations import BuilderDeclaration
from shaderpc.shader import ShaderStage, ShaderVariable


def parse_stages(
    section_sources: Mapping[ShaderSection, str],
    section_declarations: Mapping[ShaderSection, Sequence[BuilderDeclaration]],
    warnings: list[str] | None = None,
) -> dict[ShaderStageType, ShaderStage]:
    """Assemble the vertex and fragment stages and validate them.

    Raises ShaderBuildError when a mandatory stage is missing or lacks
    its mandatory interface variables.
    """
    if warnings is None:
        warnings = []

    stages: dict[ShaderStageType, ShaderStage] = {}
    for stage_type, section in STAGE_SECTIONS:
        if section not in section_sources:
            continue
        stages[stage_type] = _assemble_stage(
            stage_type,
            section_sources[section],
            section_declarations.get(section, ()),
            warnings,
        )

    vertex = stages.get(ShaderStageType.VERTEX)
    if vertex is None:
        raise ShaderBuildError(ShaderErrorCode.MISSING_VERTEX_STAGE, "Shader has no vertex stage")
    if not vertex.inputs:
        raise ShaderBuildError(ShaderErrorCode.NO_VERTEX_INPUTS, "Vertex stage declares no inputs")

    fragment = stages.get(ShaderStageType.FRAGMENT)
    if fragment is None:
        raise ShaderBuildError(ShaderErrorCode.MISSING_FRAGMENT_STAGE, "Shader has no fragment stage")
    if not fragment.outputs:
        raise ShaderBuildError(ShaderErrorCode.NO_FRAGMENT_OUTPUTS, "Fragment stage declares no outputs")

    return stages


def _assemble_stage(
    stage_type: ShaderStageType,
    source: str,
    declarations: Sequence[BuilderDeclaration],
    warnings: list[str],
) -> ShaderStage:
    inputs: list[ShaderVariable] = []
    outputs: list[ShaderVariable] = []
    uniforms: list[ShaderVariable] = []
    seen: set[str] = set()

    for decl in declarations:
        variable = _make_variable(decl, stage_type, warnings)
        if decl.identifier and decl.identifier in seen:
            warnings.append(
                f"Duplicate interface name '{decl.identifier}' in {stage_type.stage_name} stage"
            )
        seen.add(decl.identifier)
        # First match wins: in > out > uniform
        if decl.has_qualifier(ShaderQualifier.IN):
            inputs.append(variable)
        elif decl.has_qualifier(ShaderQualifier.OUT):
            outputs.append(variable)
        elif decl.has_qualifier(ShaderQualifier.UNIFORM):
            uniforms.append(variable)

    return ShaderStage(
        stage_type=stage_type,
        source=source,
        inputs=tuple(inputs),
        outputs=tuple(outputs),
        uniforms=tuple(uniforms),
    )


def _make_variable(decl: BuilderDeclaration, stage_type: ShaderStageType, warnings: list[str]) -> ShaderVariable:
    location = -1
    location_str = decl.get_qualifier_parameter(ShaderQualifier.LAYOUT, "location")
    if location_str:
        try:
            location = int(location_str)
        except ValueError:
            warnings.append(
                f"Invalid layout location '{location_str}' for '{decl.identifier}' "
                f"in {stage_type.stage_name} stage, treated as unset"
            )

    return ShaderVariable(
        identifier=decl.identifier,
        type=decl.data_type,
        flat=decl.has_qualifier(ShaderQualifier.FLAT),
        layout_location=location,
    )
