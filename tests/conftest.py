"""Pytest configuration and shared fixtures.

External tools (buf, protoc, git, go) are replaced by small shell scripts in a
temporary bin directory that becomes the whole of PATH. Each script records
its arguments so that tests can assert on the commands protokit ran.
"""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

COMMON_PROTO = """syntax = "proto3";

package common.v1;

message PageRequest {
  int32 page_size = 1;
}
"""

USER_PROTO = """syntax = "proto3";

package user.v1;

import "common/v1/common.proto";

message User {
  string id = 1;
  common.v1.PageRequest page = 2;
}
"""

BUF_YAML = """version: v1
breaking:
  use:
    - FILE
lint:
  use:
    - DEFAULT
"""

BUF_GEN_YAML = """version: v1
plugins:
  - plugin: go
    out: .
    opt: paths=source_relative
"""


class FakeToolbox:
    """Creates stand-in executables and reads back their invocations."""

    def __init__(self, bin_dir: Path) -> None:
        self.bin_dir = bin_dir

    def add(
        self,
        name: str,
        exit_code: int = 0,
        responses: dict[str, tuple[int, str]] | None = None,
    ) -> Path:
        """Install a fake tool.

        Args:
            name: Executable name
            exit_code: Exit status when no response pattern matches
            responses: Shell ``case`` patterns matched against the joined
                arguments, mapped to (exit status, stdout)
        """
        log = self.bin_dir / f"{name}.calls"
        lines = [
            "#!/bin/sh",
            f'echo "$*" >> "{log}"',
            'case "$*" in',
        ]
        for pattern, (code, out) in (responses or {}).items():
            body = f"printf '%s\\n' '{out}'; " if out else ""
            escaped = pattern.replace(" ", "\\ ")
            lines.append(f"  {escaped}) {body}exit {code};;")
        lines.append("esac")
        lines.append(f"exit {exit_code}")

        path = self.bin_dir / name
        path.write_text("\n".join(lines) + "\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    def calls(self, name: str) -> list[str]:
        """Return the argument strings of every invocation of ``name``."""
        log = self.bin_dir / f"{name}.calls"
        if not log.exists():
            return []
        return log.read_text().splitlines()


@pytest.fixture
def toolbox(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeToolbox:
    """Empty PATH holding only the fake tools a test installs."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir))
    return FakeToolbox(bin_dir)


@pytest.fixture
def proto_repo(tmp_path: Path) -> Path:
    """A minimal schema repository with common and user packages."""
    root = tmp_path / "repo"
    (root / "common" / "v1").mkdir(parents=True)
    (root / "user" / "v1").mkdir(parents=True)
    (root / "common" / "v1" / "common.proto").write_text(COMMON_PROTO)
    (root / "user" / "v1" / "user.proto").write_text(USER_PROTO)
    (root / "buf.yaml").write_text(BUF_YAML)
    (root / "buf.gen.yaml").write_text(BUF_GEN_YAML)
    return root
