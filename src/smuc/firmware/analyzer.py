"""
BIOS Image Analyzer

Locates the AGESA version string and the embedded SMU firmware modules
of an AMD BIOS image held in memory.
"""

import struct
from typing import Callable, List, Optional, Sequence

from .scanner import compile_pattern, iter_matches
from .signatures import (
    AGESA_SIGNATURE,
    AGESA_VERSION_OFFSET,
    AGESA_VERSION_WINDOW,
    SMU_SIGNATURE,
    SMU_HEADER_OFFSET,
    SMU_HEADER_SIZE,
    SMU_LENGTH,
    SMU_VERSION_MAJOR,
    SMU_VERSION_MINOR,
    SMU_VERSION_PATCH,
)
from .types import AgesaVersionInfo, CompiledPattern, FirmwareReport, SmuModuleDescriptor


class FirmwareAnalyzer:
    """
    Analysis engine for BIOS images.

    Looks for:
    - The AGESA version text (first occurrence only)
    - Every SMU module header, decoding its version and length

    Holds no state between images; the caller owns the buffer.
    """

    def __init__(self,
                 progress_callback: Optional[Callable[[str], None]] = None,
                 version_window: int = AGESA_VERSION_WINDOW):
        self.progress_callback = progress_callback
        self.version_window = version_window

    def _log(self, message: str) -> None:
        """Log a message via callback"""
        if self.progress_callback:
            self.progress_callback(message)

    def analyze(self, data: Sequence[int], name: Optional[str] = None) -> FirmwareReport:
        """Run both scans over an image and collect a report"""
        self._log(f"[*] Analyzing {name or 'image'} ({len(data):,} bytes)")

        agesa_pattern = compile_pattern(AGESA_SIGNATURE)
        smu_pattern = compile_pattern(SMU_SIGNATURE)

        report = FirmwareReport(
            name=name,
            size=len(data),
            agesa=self.find_agesa_version(data, agesa_pattern),
            modules=self.find_smu_modules(data, smu_pattern),
        )

        self._log(f"[+] SMU modules: {len(report.modules)}")
        return report

    def find_agesa_version(self, data: Sequence[int],
                           pattern: Optional[CompiledPattern] = None) -> Optional[AgesaVersionInfo]:
        """Decode the AGESA version text following the first version marker"""
        if pattern is None:
            pattern = compile_pattern(AGESA_SIGNATURE)

        offset = next(iter_matches(data, pattern, AGESA_VERSION_OFFSET), None)
        if offset is None:
            self._log("[*] No AGESA version marker found")
            return None

        window = bytes(data[offset:offset + self.version_window])
        text = window.decode("utf-8", errors="replace")
        if "\0" in text:
            text = text[:text.index("\0")]

        self._log(f"[+] AGESA version at 0x{offset:08X}: {text}")
        return AgesaVersionInfo(offset=offset, version=text)

    def find_smu_modules(self, data: Sequence[int],
                         pattern: Optional[CompiledPattern] = None) -> List[SmuModuleDescriptor]:
        """Decode every SMU module header in the image"""
        if pattern is None:
            pattern = compile_pattern(SMU_SIGNATURE)

        modules = []
        for start in iter_matches(data, pattern, SMU_HEADER_OFFSET):
            if start < 0 or start + SMU_HEADER_SIZE > len(data):
                self._log(f"[!] Skipping truncated SMU header at 0x{start - SMU_HEADER_OFFSET:08X}")
                continue

            length = struct.unpack("<I", bytes(data[start + SMU_LENGTH:start + SMU_HEADER_SIZE]))[0]
            module = SmuModuleDescriptor(
                offset=start,
                length=length,
                major=data[start + SMU_VERSION_MAJOR],
                minor=data[start + SMU_VERSION_MINOR],
                patch=data[start + SMU_VERSION_PATCH],
            )
            self._log(f"[+] {module}")
            modules.append(module)

        return modules
