"""Tests for workspace path translation."""

import os
import shutil
import tempfile
from pathlib import Path

import pytest

from images_manager.core.exceptions import ErrorKind, InvalidPathError
from images_manager.core.paths import PathResolver


class TestPathResolver:
    """Relative <-> absolute translation."""

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.root = self.temp_dir / "workspace"
        self.root.mkdir()

    def teardown_method(self):
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_to_absolute_joins_segments(self):
        result = PathResolver.to_absolute(self.root, "albums/2024/beach.png")
        assert result == self.root / "albums" / "2024" / "beach.png"

    def test_to_absolute_empty_is_root(self):
        assert PathResolver.to_absolute(self.root, "") == self.root

    def test_to_absolute_normalizes_dot_segments(self):
        result = PathResolver.to_absolute(self.root, "a/./b/../c.png")
        assert result == self.root / "a" / "c.png"

    def test_to_absolute_rejects_escape(self):
        with pytest.raises(InvalidPathError) as exc_info:
            PathResolver.to_absolute(self.root, "../outside.png")
        assert exc_info.value.kind == ErrorKind.INVALID_PATH

    def test_to_absolute_rejects_absolute_input(self):
        with pytest.raises(InvalidPathError):
            PathResolver.to_absolute(self.root, str(self.temp_dir / "other.png"))

    def test_to_absolute_rejects_link_out_of_root(self):
        outside = self.temp_dir / "outside"
        outside.mkdir()
        try:
            os.symlink(outside, self.root / "linked")
        except (OSError, NotImplementedError):
            pytest.skip("Symbolic links are not available")

        with pytest.raises(InvalidPathError):
            PathResolver.to_absolute(self.root, "linked/photo.png")

    def test_to_absolute_allows_link_within_root(self):
        (self.root / "real").mkdir()
        try:
            os.symlink(self.root / "real", self.root / "alias")
        except (OSError, NotImplementedError):
            pytest.skip("Symbolic links are not available")

        result = PathResolver.to_absolute(self.root, "alias/photo.png")
        assert result == self.root / "alias" / "photo.png"

    def test_to_relative_uses_forward_slashes(self):
        absolute = self.root / "a" / "b" / "c.jpg"
        assert PathResolver.to_relative(self.root, absolute) == "a/b/c.jpg"

    def test_to_relative_has_no_leading_slash(self):
        relative = PathResolver.to_relative(self.root, self.root / "top.png")
        assert relative == "top.png"
        assert not relative.startswith("/")

    def test_to_relative_outside_root_fails(self):
        with pytest.raises(InvalidPathError) as exc_info:
            PathResolver.to_relative(self.root, self.temp_dir / "elsewhere.png")
        assert "not inside workspace" in str(exc_info.value)

    def test_to_relative_sibling_with_common_prefix_fails(self):
        sibling = self.temp_dir / "workspace-other" / "x.png"
        with pytest.raises(InvalidPathError):
            PathResolver.to_relative(self.root, sibling)

    def test_round_trip(self):
        for relative in ["x.png", "a/x.png", "a/b c/d (1).jpeg", "deep/er/still/img.webp"]:
            absolute = PathResolver.to_absolute(self.root, relative)
            assert PathResolver.to_relative(self.root, absolute) == relative

    def test_root_given_as_string(self):
        absolute = PathResolver.to_absolute(str(self.root), "a/x.png")
        assert PathResolver.to_relative(str(self.root), str(absolute)) == "a/x.png"


def test_normalize_separators_with_native_backslash(monkeypatch):
    """Host separators other than '/' are rewritten on output."""
    monkeypatch.setattr(os, "sep", "\\")
    assert PathResolver.normalize_separators("a\\b\\c.png") == "a/b/c.png"


def test_normalize_separators_keeps_forward_slashes():
    assert PathResolver.normalize_separators("a/b/c.png") == "a/b/c.png"
