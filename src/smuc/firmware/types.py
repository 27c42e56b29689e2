"""
Common types for BIOS image analysis
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


class PatternError(ValueError):
    """Base class for byte pattern errors"""


class MalformedPattern(PatternError):
    """Pattern text could not be tokenized into bytes and wildcards"""


class InvalidInput(PatternError):
    """Scanner was given an empty buffer or an empty pattern"""


@dataclass(frozen=True)
class PatternToken:
    """One pattern position: a byte value, or a wildcard matching any byte"""
    value: int = 0
    wildcard: bool = False


@dataclass(frozen=True)
class CompiledPattern:
    """Tokens plus the skip table used by the scanner"""
    tokens: Tuple[PatternToken, ...]
    skip_table: Tuple[int, ...]

    @property
    def last_index(self) -> int:
        return len(self.tokens) - 1

    def __len__(self) -> int:
        return len(self.tokens)

    def __str__(self) -> str:
        return " ".join("??" if t.wildcard else f"{t.value:02X}" for t in self.tokens)


@dataclass
class AgesaVersionInfo:
    """AGESA version string found in an image"""
    offset: int
    version: str

    def __str__(self) -> str:
        return self.version


@dataclass
class SmuModuleDescriptor:
    """An SMU firmware module located by its header tag"""
    offset: int
    length: int
    major: int
    minor: int
    patch: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def version(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "length": self.length,
            "start": self.offset,
            "end": self.end,
        }

    def __str__(self) -> str:
        return f"SMU {self.version} [{self.offset:08X} - {self.end:08X}]"


@dataclass
class FirmwareReport:
    """Complete analysis results for one image"""
    name: Optional[str] = None
    size: int = 0
    agesa: Optional[AgesaVersionInfo] = None
    modules: List[SmuModuleDescriptor] = field(default_factory=list)

    @property
    def agesa_version(self) -> Optional[str]:
        return self.agesa.version if self.agesa else None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "size": self.size,
            "agesa": self.agesa_version,
            "modules": [m.to_dict() for m in self.modules],
        }
