"""Shared fixtures for smuc tests."""

import struct

import pytest

AGESA_MARKER = bytes.fromhex("3D 9B 25 70 41 47 45 53 41")
SMU_TAG = bytes.fromhex("24 50 53 31 00 00")


def put_agesa(image: bytearray, position: int, text: bytes) -> None:
    """Place the AGESA marker at position and the version text 0x0D later"""
    image[position:position + len(AGESA_MARKER)] = AGESA_MARKER
    start = position + 0x0D
    image[start:start + len(text)] = text


def put_smu(image: bytearray, header: int, length: int, major: int, minor: int, patch: int) -> None:
    """Place an SMU header starting at header (tag 0x10 bytes in)"""
    image[header + 0x10:header + 0x10 + len(SMU_TAG)] = SMU_TAG
    image[header + 0x60] = patch
    image[header + 0x61] = minor
    image[header + 0x62] = major
    image[header + 0x6C:header + 0x70] = struct.pack("<I", length)


@pytest.fixture
def sample_image():
    """A 4 KB image with one AGESA version and one SMU module"""
    image = bytearray(4096)
    put_agesa(image, 100, b"AgesaV9.0.1.2\x00")
    put_smu(image, 0x200, 0x1000, 9, 1, 2)
    return bytes(image)


@pytest.fixture
def sample_bios(tmp_path, sample_image):
    """sample_image written to disk"""
    path = tmp_path / "bios.bin"
    path.write_bytes(sample_image)
    return path
