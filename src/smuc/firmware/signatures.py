"""
BIOS Image Signatures

Byte patterns and header field offsets for locating AGESA and SMU data.
"""

# AGESA version marker; the version text starts 0x0D bytes into the match
AGESA_SIGNATURE = "3D 9B 25 70 41 47 45 53 41"
AGESA_VERSION_OFFSET = 0x0D
AGESA_VERSION_WINDOW = 255

# SMU module header tag ("$PS1"), found 0x10 bytes into the header
SMU_SIGNATURE = "24 50 53 31 00 00"
SMU_HEADER_OFFSET = -0x10

# Field offsets relative to the SMU header start
SMU_VERSION_PATCH = 0x60
SMU_VERSION_MINOR = 0x61
SMU_VERSION_MAJOR = 0x62
SMU_LENGTH = 0x6C
SMU_HEADER_SIZE = SMU_LENGTH + 4

# Archive entries that never hold a BIOS image
ARCHIVE_BLACKLIST = (
    "/",
    ".txt",
    ".ini",
    ".bat",
    ".exe",
)
