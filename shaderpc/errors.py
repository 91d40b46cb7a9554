"""Build error codes and exceptions."""

from __future__ import annotations
from enum import IntEnum


class ShaderErrorCode(IntEnum):
    NONE = 0
    MISSING_VERTEX_STAGE = 1
    NO_VERTEX_INPUTS = 2
    MISSING_FRAGMENT_STAGE = 3
    NO_FRAGMENT_OUTPUTS = 4
    SCANNER_OVERFLOW = 5


class ShaderBuildError(Exception):
    """A fatal condition that aborts a shader build."""

    def __init__(self, code: ShaderErrorCode, message: str):
        super().__init__(message)
        self.code = code


class ScannerOverflowError(ShaderBuildError):
    def __init__(self, message: str):
        super().__init__(ShaderErrorCode.SCANNER_OVERFLOW, message)
