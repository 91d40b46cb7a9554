"""Parser-internal line and declaration records."""

from __future__ import annotations
from dataclasses import dataclass, field

from shaderpc.builtins.types import ShaderDataType, ShaderQualifier


@dataclass
class BuilderLineKeyword:
    identifier: str
    parameter_map: dict[str, str] = field(default_factory=dict)


@dataclass
class BuilderLine:
    keywords: list[BuilderLineKeyword] = field(default_factory=list)

    def push(self, word: str) -> None:
        self.keywords.append(BuilderLineKeyword(word))

    def last(self) -> BuilderLineKeyword | None:
        return self.keywords[-1] if self.keywords else None

    def __bool__(self):
        return bool(self.keywords)


@dataclass
class BuilderDeclaration:
    """One qualified variable declaration found at the top level of a section."""
    identifier: str = ""
    data_type: ShaderDataType = ShaderDataType.NONE
    qualifiers: list[ShaderQualifier] = field(default_factory=list)
    parameters: dict[ShaderQualifier, dict[str, str]] = field(default_factory=dict)

    def has_qualifier(self, qualifier: ShaderQualifier) -> bool:
        return qualifier in self.qualifiers

    def get_qualifier_parameter(self, qualifier: ShaderQualifier, parameter: str) -> str:
        return self.parameters.get(qualifier, {}).get(parameter, "")
