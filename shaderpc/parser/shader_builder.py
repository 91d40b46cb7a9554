"""Shader builder: scans an annotated shader file into stages and a vertex layout.

The scanner is a character-level state machine. It tracks brace depth and
which top-level section (``glsl_common``, ``vertex``, ``fragment``) is being
scanned, groups words into statement lines, and captures parenthesized
parameter lists such as ``layout(location = 0)``. Only declaration lines at
the top level of a section are interpreted; the raw text of every section is
kept verbatim (minus line breaks and tabs) for later stage compilation.
"""

from __future__ import annotations
from enum import Enum
from pathlib import Path

from shaderpc.analysis.layout_assigner import set_vertex_buffer_layout
from shaderpc.analysis.stage_assembler import parse_stages
from shaderpc.builtins.types import (
    ShaderSection, resolve_qualifier, resolve_section, resolve_type,
)
from shaderpc.errors import ShaderBuildError, ShaderErrorCode
from shaderpc.parser.buffers import SectionBuilder, WordBuilder
from shaderpc.parser.declarations import BuilderDeclaration, BuilderLine
from shaderpc.shader import Shader


class BuilderState(Enum):
    NORMAL = 0
    PARAMETER = 1


# Parameter capture slots
_PARAM_ID = 0
_PARAM_VALUE = 1

_WHITESPACE = frozenset(" \t\n\r")


class ShaderBuilder:
    """Builds a Shader from one source file. Instances are single-use."""

    def __init__(self, max_word_length: int | None = None, max_section_length: int | None = None):
        self._word = WordBuilder(max_word_length)
        self._section_builder = SectionBuilder(max_section_length)
        self._states: list[BuilderState] = [BuilderState.NORMAL]

        self._is_comment = False
        self._line = BuilderLine()
        self._line_number = 0

        self._param_id = ""
        self._param_value = ""
        self._param_slot = _PARAM_ID

        self._scope_depth = 0
        self._section_start_depth = -1
        self._current_section = ShaderSection.NONE

        self.section_declarations: dict[ShaderSection, list[BuilderDeclaration]] = {}
        self.section_sources: dict[ShaderSection, str] = {}

        self.error = ShaderErrorCode.NONE
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self._used = False

    # --- Public API ---

    def build(self, filepath: str | Path) -> Shader:
        """Build a Shader from a file. Returns an empty Shader on a fatal error."""
        source = Path(filepath).read_text(encoding="utf-8")
        return self.build_source(source)

    def build_source(self, source: str) -> Shader:
        """Build a Shader from source text. Returns an empty Shader on a fatal error."""
        if self._used:
            raise RuntimeError("ShaderBuilder is single-use; create a new builder for each shader")
        self._used = True

        try:
            self.parse_source(source)
        except ShaderBuildError as e:
            return self._fail(e, "scanning the source")

        try:
            stages = parse_stages(self.section_sources, self.section_declarations, self.warnings)
        except ShaderBuildError as e:
            return self._fail(e, "parsing stages")

        layout = set_vertex_buffer_layout(stages)

        return Shader(
            stage_map=stages,
            vertex_buffer_layout=layout,
            common_source=self.section_sources.get(ShaderSection.GLSL_COMMON, ""),
        )

    def parse_source(self, source: str) -> None:
        """Scan source text, filling section_sources and section_declarations."""
        for line in source.split("\n"):
            self._line_number += 1
            self._scan_line(line)
        self._finish_input()

    # --- Scanner ---

    @property
    def state(self) -> BuilderState:
        return self._states[-1]

    @property
    def in_section(self) -> bool:
        return self._current_section is not ShaderSection.NONE

    def _scan_line(self, line: str) -> None:
        self._is_comment = False

        for i, c in enumerate(line):
            if self.in_section:
                self._section_builder.append(c)

            if self._is_comment:
                continue

            if c == "{":
                self._push_scope()
            elif c == "}":
                self._pop_scope()
            elif c == "(":
                self._push_word()
                self._start_parameters()
            elif c == ")":
                self._push_word()
                self._stop_parameters()
            elif c == ",":
                self._push_word()
                self._push_separator()
            elif c == ";":
                self._push_word()
                self._finish_line()
            elif c == "=":
                self._push_word()
                self._push_operator_assign()
            elif c == "/" and line[i + 1:i + 2] == "/":
                self._push_word()
                self._is_comment = True
            elif c in _WHITESPACE:
                self._push_word()
            else:
                self._word.append(c)

        # A line break ends the pending word
        self._push_word()

    def _finish_input(self) -> None:
        self._push_word()
        if self.in_section:
            self.warnings.append(
                f"Section '{self._current_section.value}' is not closed at end of input; "
                f"its source was discarded"
            )
        if len(self._states) > 1:
            self.warnings.append("Unclosed parameter list at end of input")

    def _push_word(self) -> None:
        if not len(self._word):
            return
        word = self._word.build()

        if self.state is BuilderState.NORMAL:
            self._line.push(word)
        elif self._param_slot == _PARAM_ID:
            self._param_id = word
        else:
            self._param_value = word

    # --- Scope and sections ---

    def _push_scope(self) -> None:
        self._push_word()

        if not self.in_section:
            keyword = self._line.last()
            section = resolve_section(keyword.identifier) if keyword else None
            if section is not None:
                self._enter_section(section)

        self._finish_line()
        self._scope_depth += 1

    def _pop_scope(self) -> None:
        self._push_word()
        self._finish_line()

        if self._scope_depth == 0:
            self.warnings.append(f"line {self._line_number}: unbalanced '}}' ignored")
            return
        self._scope_depth -= 1

        if self.in_section and self._scope_depth == self._section_start_depth:
            self._close_section()

    def _enter_section(self, section: ShaderSection) -> None:
        if section in self.section_declarations:
            self.warnings.append(
                f"line {self._line_number}: section '{section.value}' declared more than once, "
                f"merging with the earlier block"
            )
        else:
            self.section_declarations[section] = []
        self._current_section = section
        self._section_start_depth = self._scope_depth

    def _close_section(self) -> None:
        # Drop the closing brace
        self._section_builder.back()
        source = self._section_builder.build()

        previous = self.section_sources.get(self._current_section)
        if previous is not None:
            source = f"{previous} {source}"
        self.section_sources[self._current_section] = source

        self._current_section = ShaderSection.NONE
        self._section_start_depth = -1

    # --- Parameters ---

    def _start_parameters(self) -> None:
        self._reset_parameter()
        self._states.append(BuilderState.PARAMETER)

    def _stop_parameters(self) -> None:
        if self.state is not BuilderState.PARAMETER:
            self.warnings.append(f"line {self._line_number}: unmatched ')' ignored")
            return
        self._commit_parameter()
        self._states.pop()

    def _push_separator(self) -> None:
        if self.state is BuilderState.PARAMETER:
            self._commit_parameter()

    def _push_operator_assign(self) -> None:
        if self.state is BuilderState.NORMAL:
            self._line.push("=")
        else:
            self._param_slot = _PARAM_VALUE

    def _commit_parameter(self) -> None:
        keyword = self._line.last()
        if self._param_id and keyword is not None:
            keyword.parameter_map.setdefault(self._param_id, self._param_value)
        self._reset_parameter()

    def _reset_parameter(self) -> None:
        self._param_id = ""
        self._param_value = ""
        self._param_slot = _PARAM_ID

    # --- Declarations ---

    def _finish_line(self) -> None:
        line, self._line = self._line, BuilderLine()
        if not line:
            return
        if not self.in_section or self._scope_depth != self._section_start_depth + 1:
            return

        declaration = self._extract_declaration(line)
        if declaration is not None and declaration.qualifiers:
            self.section_declarations[self._current_section].append(declaration)

    def _extract_declaration(self, line: BuilderLine) -> BuilderDeclaration | None:
        keywords = list(line.keywords)

        # Anything after '=' is an initializer
        for i, kw in enumerate(keywords):
            if kw.identifier == "=":
                keywords = keywords[:i]
                break

        declaration = BuilderDeclaration()
        for i, kw in enumerate(keywords):
            data_type = resolve_type(kw.identifier)
            if data_type is not None:
                declaration.data_type = data_type
                del keywords[i]
                break
        else:
            return None

        for kw in keywords:
            qualifier = resolve_qualifier(kw.identifier)
            if qualifier is None:
                if not declaration.identifier:
                    declaration.identifier = kw.identifier
                else:
                    self.warnings.append(
                        f"line {self._line_number}: found duplicate declaration identifier "
                        f"'{kw.identifier}' (keeping '{declaration.identifier}')"
                    )
            else:
                declaration.qualifiers.append(qualifier)
                if kw.parameter_map:
                    declaration.parameters.setdefault(qualifier, dict(kw.parameter_map))

        if declaration.qualifiers and not declaration.identifier:
            self.warnings.append(
                f"line {self._line_number}: {declaration.data_type} declaration has no identifier"
            )
        return declaration

    # --- Errors ---

    def _fail(self, error: ShaderBuildError, stage: str) -> Shader:
        self.error = error.code
        self.errors.append(f"Error with code '{int(error.code)}' occurred while {stage}: {error}")
        return Shader()
