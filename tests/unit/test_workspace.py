"""Unit tests for repository layout helpers."""

from __future__ import annotations

from pathlib import Path

from protokit.workspace import (
    clean_buf_cache,
    clean_generated,
    discover_packages,
    find_proto_files,
)


def test_find_proto_files_sorted(proto_repo: Path) -> None:
    (proto_repo / "user" / "v1" / "address.proto").write_text("")
    (proto_repo / "user" / "v1" / "notes.txt").write_text("")

    files = find_proto_files(proto_repo / "user")

    assert [f.name for f in files] == ["address.proto", "user.proto"]


def test_find_proto_files_missing_directory(tmp_path: Path) -> None:
    assert find_proto_files(tmp_path / "nope") == []


def test_discover_packages(proto_repo: Path) -> None:
    (proto_repo / "docs").mkdir()
    (proto_repo / ".buf" / "x").mkdir(parents=True)
    (proto_repo / ".buf" / "x" / "cached.proto").write_text("")
    (proto_repo / "tests").mkdir()
    (proto_repo / "tests" / "fixture.proto").write_text("")

    assert discover_packages(proto_repo) == ["common", "user"]


def test_clean_generated(proto_repo: Path) -> None:
    generated = [
        proto_repo / "user" / "v1" / "user.pb.go",
        proto_repo / "user" / "v1" / "user_grpc.pb.go",
        proto_repo / "common" / "v1" / "common.pb.go",
    ]
    for path in generated:
        path.write_text("package v1\n")
    hidden = proto_repo / ".git" / "objects" / "keep.pb.go"
    hidden.parent.mkdir(parents=True)
    hidden.write_text("")

    removed = clean_generated(proto_repo)

    assert sorted(removed) == sorted(generated)
    assert not any(p.exists() for p in generated)
    assert hidden.exists()
    assert (proto_repo / "user" / "v1" / "user.proto").exists()


def test_clean_generated_nothing_to_do(proto_repo: Path) -> None:
    assert clean_generated(proto_repo) == []


def test_clean_buf_cache(proto_repo: Path) -> None:
    (proto_repo / ".buf" / "v1").mkdir(parents=True)

    assert clean_buf_cache(proto_repo) is True
    assert not (proto_repo / ".buf").exists()
    assert clean_buf_cache(proto_repo) is False
