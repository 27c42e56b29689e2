"""Tests for smuc CLI."""

import json
import zipfile

import pytest
from click.testing import CliRunner
from smuc.cli import cli
from smuc import __version__


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self, runner):
        """Test that CLI help works."""
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'Zen2 SMU Checker' in result.output

    def test_cli_version(self, runner):
        """Test that version flag works."""
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_command_shows_help(self, runner):
        """Test that running without a command prints usage."""
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert 'scan' in result.output


class TestScanCommand:
    """Test the scan command."""

    def test_scan_help(self, runner):
        """Test scan help."""
        result = runner.invoke(cli, ['scan', '--help'])
        assert result.exit_code == 0
        assert '--json' in result.output
        assert '--config' in result.output

    def test_scan_image(self, runner, sample_bios):
        """Test the report for an image with AGESA and SMU data."""
        result = runner.invoke(cli, ['scan', str(sample_bios)])
        assert result.exit_code == 0

        lines = result.output.splitlines()
        assert lines[0] == 'Scanning: bios.bin (4 KB) AgesaV9.0.1.2'
        assert lines[1] == '   9.1.2 (  4 KB) [00000200 - 00001200]'
        assert lines[-1] == 'Done.'

    def test_scan_without_findings(self, runner, tmp_path):
        """Test an image without markers."""
        path = tmp_path / "blank.rom"
        path.write_bytes(bytes(2048))

        result = runner.invoke(cli, ['scan', str(path)])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == 'Scanning: blank.rom (2 KB)'
        assert lines[1] == 'Could not find any smu modules'

    def test_scan_zip(self, runner, tmp_path, sample_image):
        """Test images are pulled out of zip archives."""
        path = tmp_path / "X570.zip"
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr("readme.txt", "hello")
            archive.writestr("X570.CAP", sample_image)

        result = runner.invoke(cli, ['scan', str(path)])
        assert result.exit_code == 0
        assert 'Scanning: X570.CAP (4 KB) AgesaV9.0.1.2' in result.output

    def test_scan_missing_file(self, runner, tmp_path, sample_bios):
        """Test unreadable paths are reported and scanning continues."""
        result = runner.invoke(cli, ['scan', str(tmp_path / "missing.bin"), str(sample_bios)])
        assert result.exit_code == 1
        assert 'Could not retrieve bios' in result.output
        assert 'Scanning: bios.bin' in result.output

    def test_scan_json(self, runner, sample_bios):
        """Test JSON output."""
        result = runner.invoke(cli, ['scan', '--json', str(sample_bios)])
        assert result.exit_code == 0

        reports = json.loads(result.output)
        assert reports == [{
            "name": "bios.bin",
            "size": 4096,
            "agesa": "AgesaV9.0.1.2",
            "modules": [{"version": "9.1.2", "length": 4096, "start": 512, "end": 4608}],
        }]

    def test_scan_with_config(self, runner, tmp_path, sample_bios):
        """Test a config file changes the version window."""
        config = tmp_path / "short.py"
        config.write_text("VERSION_WINDOW = 5\n")

        result = runner.invoke(cli, ['scan', '--config', str(config), str(sample_bios)])
        assert result.exit_code == 0
        assert result.output.splitlines()[0] == 'Scanning: bios.bin (4 KB) Agesa'

    def test_scan_verbose(self, runner, sample_bios):
        """Test that verbose flag echoes progress lines."""
        result = runner.invoke(cli, ['-v', 'scan', str(sample_bios)])
        assert result.exit_code == 0
        assert '[+] Loaded: bios.bin' in result.output
        assert '[+] SMU 9.1.2' in result.output
        assert 'Done.' in result.output

    def test_scan_quiet_by_default(self, runner, sample_bios):
        """Test progress lines only appear with the verbose flag."""
        result = runner.invoke(cli, ['scan', str(sample_bios)])
        assert '[+] SMU' not in result.output

    def test_scan_bad_config(self, runner, tmp_path, sample_bios):
        """Test a broken config file is reported without a traceback."""
        for name, text in [('syntax.py', 'VERSION_WINDOW = (\n'), ('window.py', 'VERSION_WINDOW = 0\n')]:
            config = tmp_path / name
            config.write_text(text)

            result = runner.invoke(cli, ['scan', '--config', str(config), str(sample_bios)])
            assert result.exit_code == 1
            assert 'Error: invalid config' in result.output
            assert 'Scanning:' not in result.output

    def test_scan_continues_after_unreadable_archive(self, runner, tmp_path, sample_bios):
        """Test an archive that can't be read doesn't stop later images."""
        path = tmp_path / "encrypted.zip"
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr("bios.rom", b"\xAA" * 64)
        raw = bytearray(path.read_bytes())
        for header, flags_at in ((b"PK\x03\x04", 6), (b"PK\x01\x02", 8)):
            raw[raw.index(header) + flags_at] |= 0x1
        path.write_bytes(bytes(raw))

        result = runner.invoke(cli, ['scan', str(path), str(sample_bios)])
        assert result.exit_code == 1
        assert 'Could not retrieve bios' in result.output
        assert 'Scanning: bios.bin (4 KB) AgesaV9.0.1.2' in result.output

    def test_scan_requires_path(self, runner):
        """Test scan without paths is a usage error."""
        result = runner.invoke(cli, ['scan'])
        assert result.exit_code != 0


class TestPatternCommand:
    """Test the pattern command."""

    def test_pattern_matches(self, runner, sample_bios):
        """Test matches are printed in hex."""
        result = runner.invoke(cli, ['pattern', str(sample_bios), '24 50 53 31 ?? 00'])
        assert result.exit_code == 0
        assert '0x00000210' in result.output
        assert 'Found 1 match(es)' in result.output

    def test_pattern_offset(self, runner, sample_bios):
        """Test the offset is applied to matches."""
        result = runner.invoke(cli, ['pattern', str(sample_bios), '24 50 53 31 00 00', '--offset', '-0x10'])
        assert result.exit_code == 0
        assert '0x00000200' in result.output

    def test_pattern_malformed(self, runner, sample_bios):
        """Test a bad pattern is reported."""
        result = runner.invoke(cli, ['pattern', str(sample_bios), 'ZZ'])
        assert result.exit_code == 1
        assert 'Error' in result.output

    def test_pattern_bad_offset(self, runner, sample_bios):
        """Test a bad offset is reported."""
        result = runner.invoke(cli, ['pattern', str(sample_bios), 'AA', '--offset', 'ten'])
        assert result.exit_code == 1
