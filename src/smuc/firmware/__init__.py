"""
smuc Firmware Module

Byte pattern scanning and BIOS image analysis.
"""

from .scanner import compile_pattern, iter_matches, search_pattern
from .analyzer import FirmwareAnalyzer
from .loader import ImageLoader, LoadedImage
from .types import (
    AgesaVersionInfo,
    CompiledPattern,
    FirmwareReport,
    InvalidInput,
    MalformedPattern,
    PatternError,
    PatternToken,
    SmuModuleDescriptor,
)

__all__ = [
    "compile_pattern",
    "iter_matches",
    "search_pattern",
    "FirmwareAnalyzer",
    "ImageLoader",
    "LoadedImage",
    "AgesaVersionInfo",
    "CompiledPattern",
    "FirmwareReport",
    "InvalidInput",
    "MalformedPattern",
    "PatternError",
    "PatternToken",
    "SmuModuleDescriptor",
]
