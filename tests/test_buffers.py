"""Tests for the scanner word and section buffers."""

import pytest

from shaderpc.errors import ScannerOverflowError, ShaderErrorCode
from shaderpc.parser.buffers import SectionBuilder, WordBuilder


class TestWordBuilder:
    def test_build_returns_word_and_resets(self):
        wb = WordBuilder()
        for c in "vec3":
            wb.append(c)
        assert wb.size() == 4
        assert wb.build() == "vec3"
        assert len(wb) == 0
        assert wb.build() == ""

    def test_no_filtering(self):
        wb = WordBuilder()
        for c in "a\tb":
            wb.append(c)
        assert wb.build() == "a\tb"

    def test_capacity_overflow_is_reported(self):
        wb = WordBuilder(capacity=3)
        for c in "abc":
            wb.append(c)
        with pytest.raises(ScannerOverflowError) as exc:
            wb.append("d")
        assert exc.value.code == ShaderErrorCode.SCANNER_OVERFLOW


class TestSectionBuilder:
    def test_filters_line_breaks_and_tabs(self):
        sb = SectionBuilder()
        for c in "\tin vec3 a;\r\n\tout vec3 b;":
            sb.append(c)
        assert sb.build() == "in vec3 a;out vec3 b;"

    def test_back_drops_last_characters(self):
        sb = SectionBuilder()
        for c in "void main() {}":
            sb.append(c)
        sb.back()
        assert sb.build() == "void main() {"

    def test_back_clamps_at_zero(self):
        sb = SectionBuilder()
        for c in "ab":
            sb.append(c)
        sb.back(5)
        assert sb.size() == 0
        assert sb.build() == ""

    def test_filtered_characters_do_not_count_toward_capacity(self):
        sb = SectionBuilder(capacity=2)
        for c in "\na\tb\r":
            sb.append(c)
        assert sb.build() == "ab"

    def test_capacity_overflow_is_reported(self):
        sb = SectionBuilder(capacity=2)
        sb.append("a")
        sb.append("b")
        with pytest.raises(ScannerOverflowError):
            sb.append("c")
