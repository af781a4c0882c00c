"""Tests for the images-manager command line interface."""

import json
import shutil
import tempfile
from pathlib import Path

from click.testing import CliRunner

from conftest import make_files
from images_manager.cli.main import cli, _format_file_size
from images_manager.core.models import CONTROL_DIR_NAME


class TestCLI:

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.root = self.temp_dir / "workspace"
        self.root.mkdir()

        self.config_path = self.temp_dir / "config.ini"
        self.config_path.write_text(
            "[logging]\n"
            "console_enabled = false\n"
            f"file_path = {self.temp_dir / 'logs' / 'app.log'}\n"
            "\n"
            "[mutations]\n"
            "audit_enabled = false\n"
        )
        self.runner = CliRunner()

    def teardown_method(self):
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def invoke(self, *args, **kwargs):
        return self.runner.invoke(cli, ["--config", str(self.config_path), *args], **kwargs)

    def test_init(self):
        result = self.invoke("init", str(self.root))
        assert result.exit_code == 0
        assert "Workspace ready" in result.output
        assert (self.root / CONTROL_DIR_NAME).is_dir()

    def test_init_missing_workspace(self):
        result = self.invoke("init", str(self.temp_dir / "missing"))
        assert result.exit_code != 0
        assert "Workspace Not Found" in result.output

    def test_validate(self):
        result = self.invoke("validate", str(self.root))
        assert result.exit_code == 0
        assert "Valid workspace" in result.output

    def test_validate_file(self):
        make_files(self.temp_dir, "x.png")
        result = self.invoke("validate", str(self.temp_dir / "x.png"))
        assert result.exit_code != 0
        assert "Not A Directory" in result.output

    def test_scan_json(self):
        make_files(self.root, "a/x.png", "b.jpg", "notes.txt", ".hidden/y.png")

        result = self.invoke("scan", str(self.root), "--format", "json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert sorted(item["relative_path"] for item in data) == ["a/x.png", "b.jpg"]

    def test_scan_csv(self):
        make_files(self.root, "a/x.png")
        result = self.invoke("scan", str(self.root), "-f", "csv")
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0].startswith("Name,Relative Path")
        assert lines[1].startswith("x.png,a/x.png,")

    def test_scan_table(self):
        make_files(self.root, "x.png", "y.gif")
        result = self.invoke("scan", str(self.root))
        assert result.exit_code == 0
        assert "Found 2 image(s)" in result.output

    def test_scan_empty_table(self):
        result = self.invoke("scan", str(self.root))
        assert result.exit_code == 0
        assert "No images found" in result.output

    def test_scan_missing_workspace(self):
        result = self.invoke("scan", str(self.temp_dir / "missing"))
        assert result.exit_code != 0
        assert "Workspace Not Found" in result.output

    def test_move(self):
        make_files(self.root, "a/x.png")
        result = self.invoke("move", str(self.root), "a/x.png", "b/y.png")
        assert result.exit_code == 0
        assert (self.root / "b" / "y.png").is_file()
        assert not (self.root / "a" / "x.png").exists()

    def test_move_onto_existing(self):
        make_files(self.root, "a/x.png", "b/y.png")
        result = self.invoke("move", str(self.root), "a/x.png", "b/y.png")
        assert result.exit_code != 0
        assert "Target Exists" in result.output
        assert (self.root / "a" / "x.png").is_file()

    def test_rename(self):
        make_files(self.root, "a/x.png")
        result = self.invoke("rename", str(self.root), "a/x.png", "y.png")
        assert result.exit_code == 0
        assert (self.root / "a" / "y.png").is_file()

    def test_rename_missing_source(self):
        result = self.invoke("rename", str(self.root), "a/x.png", "y.png")
        assert result.exit_code != 0
        assert "Missing File" in result.output

    def test_delete_with_yes(self):
        make_files(self.root, "x.png")
        result = self.invoke("delete", str(self.root), "x.png", "--yes")
        assert result.exit_code == 0
        assert not (self.root / "x.png").exists()

    def test_delete_declined(self):
        make_files(self.root, "x.png")
        result = self.invoke("delete", str(self.root), "x.png", input="n\n")
        assert result.exit_code != 0
        assert (self.root / "x.png").exists()

    def test_path(self):
        make_files(self.root, "a/x.png")
        result = self.invoke("path", str(self.root), "a/x.png")
        assert result.exit_code == 0
        assert Path(result.output.strip()) == self.root / "a" / "x.png"

    def test_path_escape(self):
        result = self.invoke("path", str(self.root), "../x.png")
        assert result.exit_code != 0
        assert "Invalid Path" in result.output

    def test_config_show(self):
        result = self.invoke("config", "show")
        assert result.exit_code == 0
        assert "Audit log enabled: False" in result.output

    def test_config_set(self):
        result = self.invoke("config", "set", "web.port", "8123")
        assert result.exit_code == 0
        assert "port = 8123" in self.config_path.read_text()

    def test_config_set_unknown_setting(self):
        result = self.invoke("config", "set", "web.colour", "blue")
        assert result.exit_code != 0
        assert "Unknown setting" in result.output

    def test_config_set_unknown_section(self):
        result = self.invoke("config", "set", "database.path", "x")
        assert result.exit_code != 0
        assert "Unknown configuration section" in result.output


def test_format_file_size():
    assert _format_file_size(512) == "512B"
    assert _format_file_size(2048) == "2.0KB"
    assert _format_file_size(5 * 1024 * 1024) == "5.0MB"
    assert _format_file_size(3 * 1024 ** 3) == "3.0GB"
