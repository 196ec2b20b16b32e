"""Tests for input collection from files, directory trees and archives."""

from __future__ import annotations

import io
import tarfile
import zipfile
from pathlib import Path

import pytest

from loc_analyzer.exceptions import ArchiveError, DecodeFailedError, FileReadError
from loc_analyzer.ingest import (
    IngestFailure,
    SourceUnit,
    collect,
    decode,
    is_archive,
    read_archive,
    read_file,
    walk_directory,
)


def _make_zip(path: Path, members: dict[str, bytes]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return path


def _make_tar(path: Path, members: dict[str, bytes], mode: str = "w:gz") -> Path:
    with tarfile.open(path, mode) as tf:
        for name, data in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tf.addfile(info, io.BytesIO(data))
    return path


def _set_encrypted_flag(path: Path, member: str) -> None:
    """Mark *member* as encrypted in the zip central directory."""
    data = bytearray(path.read_bytes())
    pos = data.find(b"PK\x01\x02")
    while pos != -1:
        name_len = int.from_bytes(data[pos + 28 : pos + 30], "little")
        if data[pos + 46 : pos + 46 + name_len] == member.encode():
            data[pos + 8] |= 0x01
            break
        pos = data.find(b"PK\x01\x02", pos + 4)
    path.write_bytes(bytes(data))


class TestDecode:
    def test_utf8(self):
        assert decode("a", "héllo".encode()) == "héllo"

    def test_strips_bom(self):
        assert decode("a", b"\xef\xbb\xbfx = 1") == "x = 1"

    def test_invalid(self):
        with pytest.raises(DecodeFailedError) as exc:
            decode("bad.c", b"\xff\xfe\x00")
        assert exc.value.name == "bad.c"


class TestReadFile:
    def test_reads(self, tmp_path: Path):
        p = tmp_path / "a.py"
        p.write_text("x = 1\n")
        unit = read_file(p)
        assert unit == SourceUnit(name=str(p), content="x = 1\n")

    def test_custom_name(self, tmp_path: Path):
        p = tmp_path / "a.py"
        p.write_text("")
        assert read_file(p, "a.py").name == "a.py"

    def test_missing(self, tmp_path: Path):
        with pytest.raises(FileReadError):
            read_file(tmp_path / "nope.py")

    def test_binary(self, tmp_path: Path):
        p = tmp_path / "blob.c"
        p.write_bytes(b"\x80\x81\x82")
        with pytest.raises(DecodeFailedError):
            read_file(p)


class TestWalkDirectory:
    def test_collects_known_sources(self, source_tree: Path):
        result = walk_directory(source_tree)
        names = [u.name for u in result.units]
        assert names == ["src/main.py", "src/style.css", "src/util.js"]
        assert result.failures == []

    def test_include_unknown(self, source_tree: Path):
        result = walk_directory(source_tree, include_unknown=True)
        assert "notes.xyz" in [u.name for u in result.units]

    def test_skips_vcs_and_vendor_dirs(self, source_tree: Path):
        names = [u.name for u in walk_directory(source_tree).units]
        assert not any(n.startswith((".git/", "node_modules/")) for n in names)

    def test_custom_skip_dirs(self, source_tree: Path):
        result = walk_directory(source_tree, skip_dirs={"src", ".git"})
        assert [u.name for u in result.units] == ["node_modules/dep.js"]

    def test_undecodable_file_is_a_failure(self, tmp_path: Path):
        (tmp_path / "ok.py").write_text("x = 1\n")
        (tmp_path / "bad.py").write_bytes(b"\xff\xff")
        result = walk_directory(tmp_path)
        assert [u.name for u in result.units] == ["ok.py"]
        assert [f.name for f in result.failures] == ["bad.py"]

    def test_empty_directory(self, tmp_path: Path):
        result = walk_directory(tmp_path)
        assert result.units == [] and result.failures == []


class TestArchives:
    def test_is_archive(self):
        assert is_archive(Path("x.zip"))
        assert is_archive(Path("x.TAR.GZ"))
        assert is_archive(Path("x.tgz"))
        assert not is_archive(Path("x.py"))

    def test_zip(self, tmp_path: Path):
        z = _make_zip(
            tmp_path / "code.zip",
            {"src/a.py": b"# hi\nx = 1\n", "src/": b"", "README": b"text", "b.rs": b"fn main() {}\n"},
        )
        result = read_archive(z)
        assert [u.name for u in result.units] == ["code.zip!src/a.py", "code.zip!b.rs"]
        assert result.units[0].content == "# hi\nx = 1\n"

    def test_zip_bad_member(self, tmp_path: Path):
        z = _make_zip(tmp_path / "code.zip", {"a.py": b"x\n", "b.py": b"\xff\xfe\xfd"})
        result = read_archive(z)
        assert [u.name for u in result.units] == ["code.zip!a.py"]
        assert result.failures[0].name == "code.zip!b.py"

    def test_encrypted_member_is_skipped(self, tmp_path: Path):
        z = _make_zip(tmp_path / "locked.zip", {"a.py": b"x = 1\n", "b.py": b"y = 2\n"})
        _set_encrypted_flag(z, "b.py")
        good = tmp_path / "good.py"
        good.write_text("z = 3\n")

        result = collect([z, good])

        assert [u.name for u in result.units] == ["locked.zip!a.py", str(good)]
        assert [f.name for f in result.failures] == ["locked.zip!b.py"]

    def test_crc_mismatch_keeps_other_members(self, tmp_path: Path):
        z = _make_zip(tmp_path / "crc.zip", {"a.py": b"x = 1\n", "b.py": b"y = 2\n"})
        z.write_bytes(z.read_bytes().replace(b"y = 2\n", b"y = 3\n"))

        result = read_archive(z)

        assert [u.name for u in result.units] == ["crc.zip!a.py"]
        assert [f.name for f in result.failures] == ["crc.zip!b.py"]
        assert "CRC" in result.failures[0].reason

    def test_truncated_tar_keeps_earlier_members(self, tmp_path: Path):
        t = _make_tar(tmp_path / "cut.tar", {"a.sh": b"echo a\n", "b.sh": b"#" * 2000}, mode="w")
        # Header and padded data of a.sh, header of b.sh, then part of b.sh's data.
        t.write_bytes(t.read_bytes()[: 512 * 3 + 700])

        result = read_archive(t)

        assert [u.name for u in result.units] == ["cut.tar!a.sh"]
        assert "cut.tar!b.sh" in [f.name for f in result.failures]

    def test_tar_gz(self, tmp_path: Path):
        t = _make_tar(tmp_path / "code.tar.gz", {"pkg/main.go": b"package main\n", "pkg/x.bin": b"\x00"})
        result = read_archive(t)
        assert [u.name for u in result.units] == ["code.tar.gz!pkg/main.go"]

    def test_plain_tar(self, tmp_path: Path):
        t = _make_tar(tmp_path / "code.tar", {"a.sh": b"# c\necho\n"}, mode="w")
        assert read_archive(t).units[0].content == "# c\necho\n"

    def test_corrupt_zip(self, tmp_path: Path):
        bad = tmp_path / "broken.zip"
        bad.write_bytes(b"this is not a zip")
        with pytest.raises(ArchiveError):
            read_archive(bad)

    def test_corrupt_tar(self, tmp_path: Path):
        bad = tmp_path / "broken.tar.gz"
        bad.write_bytes(b"garbage")
        with pytest.raises(ArchiveError):
            read_archive(bad)

    def test_unsupported(self, tmp_path: Path):
        with pytest.raises(ArchiveError):
            read_archive(tmp_path / "x.rar")


class TestCollect:
    def test_mixed_inputs(self, tmp_path: Path):
        single = tmp_path / "script.bat"
        single.write_text("REM hi\necho\n")
        z = _make_zip(tmp_path / "more.zip", {"m.c": b"int x;\n"})
        result = collect([single, z])
        assert [u.name for u in result.units] == [str(single), "more.zip!m.c"]

    def test_explicit_unknown_file_is_read(self, tmp_path: Path):
        p = tmp_path / "Makefile"
        p.write_text("all:\n")
        assert len(collect([p]).units) == 1

    def test_missing_path_is_failure(self, tmp_path: Path):
        result = collect([tmp_path / "ghost.py"])
        assert result.units == []
        assert result.failures == [IngestFailure(str(tmp_path / "ghost.py"), "no such file or directory")]

    def test_corrupt_archive_does_not_stop_others(self, tmp_path: Path):
        bad = tmp_path / "bad.zip"
        bad.write_bytes(b"nope")
        good = tmp_path / "good.py"
        good.write_text("x = 1\n")
        result = collect([bad, good])
        assert [u.name for u in result.units] == [str(good)]
        assert [f.name for f in result.failures] == [str(bad)]
