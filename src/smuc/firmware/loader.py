"""
BIOS Image Loader

Reads a BIOS image into memory, either directly from a file or from the
first eligible entry of a zip archive as shipped by board vendors.
"""

import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Callable, Optional

from .signatures import ARCHIVE_BLACKLIST


@dataclass
class LoadedImage:
    """A BIOS image read into memory"""
    name: str
    data: bytes

    @property
    def size_kb(self) -> float:
        return len(self.data) / 1024


class ImageLoader:
    """
    Loads BIOS images for analysis.

    Zip archives are searched for the first entry that isn't a directory
    or a blacklisted file type (readme, flash utility, ...).
    """

    def __init__(self,
                 progress_callback: Optional[Callable[[str], None]] = None,
                 blacklist: tuple = ARCHIVE_BLACKLIST):
        self.progress_callback = progress_callback
        self.blacklist = tuple(blacklist)

    def _log(self, message: str) -> None:
        """Log a message via callback"""
        if self.progress_callback:
            self.progress_callback(message)

    def load(self, path: str | Path) -> Optional[LoadedImage]:
        """Load an image file or zip archive, None if nothing usable"""
        path = Path(path)

        if not path.is_file():
            self._log(f"[!] Could not retrieve bios from {path}")
            return None

        if path.name.endswith(".zip"):
            image = self._load_archive(path)
        else:
            image = self._load_file(path)

        if image is None:
            return None
        if not image.data:
            self._log(f"[!] Empty image: {image.name}")
            return None

        self._log(f"[+] Loaded: {image.name} ({len(image.data):,} bytes)")
        return image

    def _is_eligible(self, entry_name: str) -> bool:
        name = PurePosixPath(entry_name).name
        return bool(name) and not name.endswith(self.blacklist)

    def _load_file(self, path: Path) -> Optional[LoadedImage]:
        try:
            return LoadedImage(name=path.name, data=path.read_bytes())
        except OSError as e:
            self._log(f"[!] Failed to read {path.name}: {e}")

        self._log(f"[!] Could not retrieve bios from {path}")
        return None

    def _load_archive(self, path: Path) -> Optional[LoadedImage]:
        # Deflate64 and encrypted entries raise NotImplementedError and RuntimeError
        try:
            with zipfile.ZipFile(path) as archive:
                for info in archive.infolist():
                    if info.is_dir() or not self._is_eligible(info.filename):
                        self._log(f"[*] Skipping archive entry: {info.filename}")
                        continue

                    image = LoadedImage(
                        name=PurePosixPath(info.filename).name,
                        data=archive.read(info),
                    )
                    return image
        except (zipfile.BadZipFile, zlib.error, OSError, EOFError,
                NotImplementedError, RuntimeError) as e:
            self._log(f"[!] Failed to read archive {path.name}: {e}")

        self._log(f"[!] Could not retrieve bios from {path}")
        return None
