"""
smuc - Zen2 SMU Checker

Identifies the AGESA version and the embedded SMU firmware modules of
AMD motherboard BIOS images.

Usage:
    # Command-line interface
    smuc scan E7C37AMS.2H0 X570-ACE.zip
    smuc scan --json bios.bin

    # Python API
    from smuc import FirmwareAnalyzer
    report = FirmwareAnalyzer().analyze(data, name="bios.bin")
"""

__version__ = "0.1.0"

from .firmware import FirmwareAnalyzer, FirmwareReport, ImageLoader, search_pattern

__all__ = ["FirmwareAnalyzer", "FirmwareReport", "ImageLoader", "search_pattern", "__version__"]
