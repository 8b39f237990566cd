# SPDX-License-Identifier: MIT
"""Tests for building the package index from a directory."""

import hashlib
import os
from datetime import UTC, datetime
from pathlib import Path

import pytest

from lyra_server import index as index_module
from lyra_server.index import build_index

from .conftest import write_archive


class TestBuildIndex:
    """Tests for build_index function."""

    def test_groups_and_sorts_newest_first(self, sample_packages_dir: Path):
        packages = build_index(sample_packages_dir)

        assert set(packages) == {"foo", "bar", "Baz"}
        assert [e.version for e in packages["foo"]] == ["2.1.0", "2.0.5", "1.0.0"]

    def test_arch_suffix_is_grouped_by_name(self, sample_packages_dir: Path):
        packages = build_index(sample_packages_dir)

        (entry,) = packages["bar"]
        assert entry.version == "0.1.0"
        assert entry.filename == "bar-0.1.0-x86_64.tar.gz"

    def test_unparseable_files_are_skipped(self, sample_packages_dir: Path):
        packages = build_index(sample_packages_dir)

        filenames = {e.filename for entries in packages.values() for e in entries}
        assert "notapackage.txt" not in filenames
        assert "noversion.tar.gz" not in filenames
        assert "noversion" not in packages

    def test_entry_metadata(self, packages_dir: Path):
        content = b"archive bytes"
        path = write_archive(packages_dir, "foo-1.0.0.tar.gz", content)
        os.utime(path, (1_700_000_000, 1_700_000_000))

        (entry,) = build_index(packages_dir)["foo"]

        assert entry.filename == "foo-1.0.0.tar.gz"
        assert entry.size == len(content)
        assert entry.hash == hashlib.sha256(content).hexdigest()
        assert entry.uploaded_at == datetime.fromtimestamp(1_700_000_000, tz=UTC)

    def test_entry_wire_format(self, packages_dir: Path):
        write_archive(packages_dir, "foo-1.0.0.tar.gz")

        (entry,) = build_index(packages_dir)["foo"]

        assert set(entry.to_dict()) == {"version", "filename", "size", "hash", "uploaded"}

    def test_empty_directory(self, packages_dir: Path):
        assert build_index(packages_dir) == {}

    def test_missing_directory_returns_empty_index(self, tmp_path: Path, caplog):
        packages = build_index(tmp_path / "does-not-exist")

        assert packages == {}
        assert any(r.levelname == "ERROR" for r in caplog.records)

    def test_unparseable_names_are_not_logged_as_errors(self, sample_packages_dir: Path, caplog):
        build_index(sample_packages_dir)

        assert not [r for r in caplog.records if r.levelname in ("WARNING", "ERROR")]

    def test_unreadable_file_is_skipped_with_warning(
        self, sample_packages_dir: Path, monkeypatch: pytest.MonkeyPatch, caplog
    ):
        real_hash = index_module.compute_sha256_file

        def flaky_hash(path: Path) -> str:
            if path.name == "foo-2.1.0.tar.gz":
                raise PermissionError(13, "Permission denied", str(path))
            return real_hash(path)

        monkeypatch.setattr(index_module, "compute_sha256_file", flaky_hash)

        packages = build_index(sample_packages_dir)

        assert [e.version for e in packages["foo"]] == ["2.0.5", "1.0.0"]
        assert "bar" in packages
        warnings = [r for r in caplog.records if r.levelname == "WARNING"]
        assert len(warnings) == 1
        assert "foo-2.1.0.tar.gz" in warnings[0].getMessage()

    def test_directories_are_skipped(self, packages_dir: Path):
        (packages_dir / "foo-9.9.9.tar.gz").mkdir()
        write_archive(packages_dir, "foo-1.0.0.tar.gz")

        packages = build_index(packages_dir)

        assert [e.version for e in packages["foo"]] == ["1.0.0"]

    def test_not_recursive(self, packages_dir: Path):
        nested = packages_dir / "nested"
        nested.mkdir()
        write_archive(nested, "foo-1.0.0.tar.gz")

        assert build_index(packages_dir) == {}

    def test_custom_extension(self, packages_dir: Path):
        write_archive(packages_dir, "foo-1.0.0.zip")
        write_archive(packages_dir, "foo-2.0.0.tar.gz")

        packages = build_index(packages_dir, extension=".zip")

        assert [e.version for e in packages["foo"]] == ["1.0.0"]

    def test_literal_versions_are_kept(self, packages_dir: Path):
        write_archive(packages_dir, "foo-1.0.0.0.tar.gz")

        (entry,) = build_index(packages_dir)["foo"]

        assert entry.version == "1.0.0.0"

    def test_no_duplicate_filenames(self, sample_packages_dir: Path):
        for entries in build_index(sample_packages_dir).values():
            filenames = [e.filename for e in entries]
            assert len(filenames) == len(set(filenames))


class TestRebuild:
    """Tests for rebuilding the index."""

    def test_rebuild_of_unchanged_directory_is_identical(self, sample_packages_dir: Path):
        assert build_index(sample_packages_dir) == build_index(sample_packages_dir)

    def test_each_build_returns_a_new_mapping(self, sample_packages_dir: Path):
        first = build_index(sample_packages_dir)
        first.pop("foo")

        second = build_index(sample_packages_dir)

        assert "foo" in second

    def test_rebuild_sees_changes(self, sample_packages_dir: Path):
        before = build_index(sample_packages_dir)
        (sample_packages_dir / "foo-2.1.0.tar.gz").unlink()
        write_archive(sample_packages_dir, "foo-3.0.0.tar.gz")

        after = build_index(sample_packages_dir)

        assert [e.version for e in before["foo"]] == ["2.1.0", "2.0.5", "1.0.0"]
        assert [e.version for e in after["foo"]] == ["3.0.0", "2.0.5", "1.0.0"]
