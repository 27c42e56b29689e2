"""
Configuration for BIOS scans

Scan settings are plain Python files, loaded with importlib:

    ARCHIVE_BLACKLIST = ["/", ".txt", ".ini", ".bat", ".exe", ".pdf"]
    VERSION_WINDOW = 255
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple
import importlib.util

from .firmware.signatures import AGESA_VERSION_WINDOW, ARCHIVE_BLACKLIST


@dataclass
class ScanConfig:
    """Settings shared by the loader and the analyzer"""
    name: str = "default"
    archive_blacklist: Tuple[str, ...] = ARCHIVE_BLACKLIST
    version_window: int = AGESA_VERSION_WINDOW

    def __post_init__(self):
        self.archive_blacklist = tuple(self.archive_blacklist)
        if self.version_window < 1:
            raise ValueError(f"version_window must be positive, got {self.version_window}")


def load_config_file(config_path: str | Path) -> ScanConfig:
    """
    Load configuration from Python file

    Returns:
        ScanConfig object
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    spec = importlib.util.spec_from_file_location("scan_config", config_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load config file: {config_path}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    return ScanConfig(
        name=config_path.stem,
        archive_blacklist=getattr(module, 'ARCHIVE_BLACKLIST', ARCHIVE_BLACKLIST),
        version_window=getattr(module, 'VERSION_WINDOW', AGESA_VERSION_WINDOW),
    )


def save_config_file(config: ScanConfig, output_path: str | Path) -> None:
    """Save configuration to Python file"""
    output_path = Path(output_path)

    blacklist_lines = [f"    {suffix!r}," for suffix in config.archive_blacklist]

    content = f'''"""
Generated scan configuration: {config.name}
"""

# Archive entries ending with any of these are never scanned
ARCHIVE_BLACKLIST = [
{chr(10).join(blacklist_lines)}
]

# Bytes read after the AGESA marker when decoding the version text
VERSION_WINDOW = {config.version_window}
'''

    output_path.write_text(content)
