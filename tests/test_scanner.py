"""Tests for the workspace image scanner."""

import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from conftest import make_files
from images_manager.core.exceptions import (
    ErrorKind, PathNotDirectoryError, WorkspaceNotFoundError
)
from images_manager.core.models import SUPPORTED_EXTENSIONS
from images_manager.core.paths import PathResolver
from images_manager.core.scanner import ImageScanner
from images_manager.core.workspace import WorkspaceBootstrapper


class TestImageScanner:
    """Filtering, metadata and error behaviour of ImageScanner.scan."""

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.root = self.temp_dir / "workspace"
        self.root.mkdir()
        self.scanner = ImageScanner()

    def teardown_method(self):
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def _relative_paths(self):
        return {image.relative_path for image in self.scanner.scan(self.root)}

    def test_returns_only_supported_extensions(self):
        make_files(
            self.root,
            "a.jpg", "b.jpeg", "c.png", "d.gif", "e.bmp", "f.webp", "g.tiff", "h.svg",
            "notes.txt", "raw.cr2", "icon.ico", "scan.tif", "README",
        )
        assert self._relative_paths() == {
            "a.jpg", "b.jpeg", "c.png", "d.gif", "e.bmp", "f.webp", "g.tiff", "h.svg"
        }

    def test_extension_match_is_case_insensitive(self):
        make_files(self.root, "UPPER.JPG", "Mixed.Png")
        images = {image.name: image for image in self.scanner.scan(self.root)}
        assert set(images) == {"UPPER.JPG", "Mixed.Png"}
        assert images["UPPER.JPG"].extension == "jpg"
        assert images["Mixed.Png"].extension == "png"

    def test_hidden_segments_excluded_at_every_depth(self):
        make_files(
            self.root,
            "visible.png",
            ".hidden.png",
            ".git/objects/blob.png",
            "album/.thumbs/small.jpg",
            "album/photo.jpg",
            "album/deeper/.secret.gif",
            "album/deeper/still/visible.gif",
        )
        assert self._relative_paths() == {
            "visible.png",
            "album/photo.jpg",
            "album/deeper/still/visible.gif",
        }

    def test_control_directory_is_never_listed(self):
        WorkspaceBootstrapper().ensure_structure(self.root)
        make_files(self.root, ".im_settings/preview.png", "kept.png")
        assert self._relative_paths() == {"kept.png"}

    def test_hidden_parent_of_workspace_does_not_hide_files(self):
        root = self.temp_dir / ".config" / "gallery"
        root.mkdir(parents=True)
        make_files(root, "inside.png")
        images = self.scanner.scan(root)
        assert [image.relative_path for image in images] == ["inside.png"]

    def test_directories_with_image_names_are_skipped(self):
        (self.root / "folder.jpg").mkdir()
        make_files(self.root, "folder.jpg/real.png")
        assert self._relative_paths() == {"folder.jpg/real.png"}

    def test_links_to_files_outside_workspace_are_skipped(self):
        make_files(self.temp_dir, "outside/secret.png")
        make_files(self.root, "inside.png")
        try:
            os.symlink(self.temp_dir / "outside" / "secret.png", self.root / "leak.png")
            os.symlink(self.root / "inside.png", self.root / "alias.png")
        except (OSError, NotImplementedError):
            pytest.skip("Symbolic links are not available")

        assert self._relative_paths() == {"inside.png", "alias.png"}

    def test_record_metadata(self):
        make_files(self.root, "album/photo.PNG", content=b"x" * 1234)
        image = self.scanner.scan(self.root)[0]

        assert image.name == "photo.PNG"
        assert image.relative_path == "album/photo.PNG"
        assert image.file_size == 1234
        assert image.extension == "png"
        assert image.modified_at.tzinfo is not None
        assert image.created_at.tzinfo is not None

        mtime = (self.root / "album" / "photo.PNG").stat().st_mtime
        assert abs(image.modified_at.timestamp() - mtime) < 1e-3

    def test_record_serializes_rfc3339_timestamps(self):
        make_files(self.root, "photo.jpg")
        data = self.scanner.scan(self.root)[0].to_dict()

        assert set(data) == {
            "name", "relative_path", "file_size", "created_at", "modified_at", "extension"
        }
        for key in ("created_at", "modified_at"):
            parsed = datetime.fromisoformat(data[key])
            assert parsed.tzinfo is not None

    def test_scan_is_idempotent(self):
        make_files(self.root, "a.png", "b/c.jpg", "b/d/e.gif")
        assert self._relative_paths() == self._relative_paths()

    def test_relative_paths_round_trip(self):
        make_files(self.root, "a.png", "b/c.jpg", "b/with space/e (1).gif")
        for image in self.scanner.scan(self.root):
            absolute = PathResolver.to_absolute(self.root, image.relative_path)
            assert absolute.is_file()
            assert PathResolver.to_relative(self.root, absolute) == image.relative_path
            assert "\\" not in image.relative_path

    def test_empty_workspace(self):
        assert self.scanner.scan(self.root) == []

    def test_missing_root(self):
        with pytest.raises(WorkspaceNotFoundError) as exc_info:
            self.scanner.scan(self.temp_dir / "missing")
        assert exc_info.value.kind == ErrorKind.WORKSPACE_NOT_FOUND

    def test_root_is_a_file(self):
        make_files(self.temp_dir, "plain.png")
        with pytest.raises(PathNotDirectoryError) as exc_info:
            self.scanner.scan(self.temp_dir / "plain.png")
        assert exc_info.value.kind == ErrorKind.NOT_A_DIRECTORY

    def test_scan_does_not_modify_workspace(self):
        make_files(self.root, "a.png", "b/c.jpg")
        before = sorted(str(p) for p in self.root.rglob("*"))
        self.scanner.scan(self.root)
        assert sorted(str(p) for p in self.root.rglob("*")) == before

    def test_progress_callback(self):
        make_files(self.root, "a.png", "b.txt", "c/d.jpg")
        calls = []
        ImageScanner(progress_callback=lambda done, total: calls.append((done, total))).scan(self.root)

        assert calls
        assert calls[-1][0] == calls[-1][1]
        assert [done for done, _ in calls] == list(range(1, len(calls) + 1))

    def test_failing_progress_callback_does_not_abort(self):
        make_files(self.root, "a.png")

        def broken(done, total):
            raise RuntimeError("ui went away")

        images = ImageScanner(progress_callback=broken).scan(self.root)
        assert [image.name for image in images] == ["a.png"]

    def test_file_vanishing_during_scan_is_skipped(self, monkeypatch):
        make_files(self.root, "stays.png", "goes.png")
        original_stat = Path.stat

        def flaky_stat(path, *args, **kwargs):
            if path.name == "goes.png":
                raise FileNotFoundError(2, "No such file or directory", str(path))
            return original_stat(path, *args, **kwargs)

        monkeypatch.setattr(Path, "stat", flaky_stat)
        assert self._relative_paths() == {"stays.png"}


@pytest.mark.parametrize("name,expected", [
    ("photo.jpg", True),
    ("photo.JPEG", True),
    ("vector.svg", True),
    ("archive.tar.png", True),
    ("photo.jpg.txt", False),
    ("photo", False),
    ("photo.heic", False),
])
def test_is_supported(name, expected):
    assert ImageScanner.is_supported(Path(name)) is expected


def test_supported_extensions_have_no_dots():
    assert all(not ext.startswith(".") and ext == ext.lower() for ext in SUPPORTED_EXTENSIONS)
