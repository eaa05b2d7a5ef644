"""End-to-end tests against the real buf, protoc and git executables.

These tests are skipped when the tools are not installed.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from protokit import add_service
from protokit.cli.main import main

pytestmark = pytest.mark.integration

requires_buf = pytest.mark.skipif(shutil.which("buf") is None, reason="buf not installed")
requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
requires_protoc = pytest.mark.skipif(shutil.which("protoc") is None, reason="protoc not installed")

BUF_YAML = """version: v1
breaking:
  use:
    - FILE
lint:
  use:
    - DEFAULT
"""

BASELINE = """syntax = "proto3";

package inventory.v1;

message Item {
  string id = 1;
  string name = 2;
  int32 quantity = 3;
}
"""

BREAKING_CHANGES = {
    "field_removed": BASELINE.replace("  int32 quantity = 3;\n", ""),
    "type_changed": BASELINE.replace("int32 quantity = 3;", "string quantity = 3;"),
    "field_renumbered": BASELINE.replace("int32 quantity = 3;", "int32 quantity = 4;"),
}

ADDITIVE_CHANGE = BASELINE.replace(
    "  int32 quantity = 3;\n", "  int32 quantity = 3;\n  string location = 4;\n"
)


def _git(root: Path, *args: str) -> None:
    subprocess.run(
        [
            "git",
            "-c",
            "user.name=protokit",
            "-c",
            "user.email=protokit@example.com",
            "-c",
            "commit.gpgsign=false",
            "-c",
            "tag.gpgsign=false",
            *args,
        ],
        cwd=root,
        check=True,
        capture_output=True,
    )


@pytest.fixture
def tagged_repo(tmp_path: Path) -> Path:
    """A git repository whose inventory schema is tagged v1.0.0."""
    root = tmp_path / "repo"
    schema = root / "inventory" / "v1" / "inventory.proto"
    schema.parent.mkdir(parents=True)
    schema.write_text(BASELINE)
    (root / "buf.yaml").write_text(BUF_YAML)

    _git(root, "init", "-q")
    _git(root, "add", ".")
    _git(root, "commit", "-q", "-m", "Initial schema")
    _git(root, "tag", "v1.0.0")
    return root


@requires_buf
@pytest.mark.parametrize("name", ["product", "order_item", "item2", "a_1", "v2_item", "Billing"])
def test_scaffolded_service_passes_lint(name: str, tmp_path: Path) -> None:
    (tmp_path / "buf.yaml").write_text(BUF_YAML)

    add_service(tmp_path, name)

    assert main(["--root", str(tmp_path), "lint"]) == 0


@requires_buf
@requires_git
@pytest.mark.parametrize("change", sorted(BREAKING_CHANGES))
def test_breaking_change_fails(
    change: str, tagged_repo: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    schema = tagged_repo / "inventory" / "v1" / "inventory.proto"
    schema.write_text(BREAKING_CHANGES[change])

    assert main(["--root", str(tagged_repo), "validate-buf"]) != 0
    assert "Breaking changes detected" in capsys.readouterr().err


@requires_buf
@requires_git
def test_additive_change_passes(tagged_repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    schema = tagged_repo / "inventory" / "v1" / "inventory.proto"
    schema.write_text(ADDITIVE_CHANGE)

    assert main(["--root", str(tagged_repo), "validate-buf"]) == 0
    assert "against tag: v1.0.0" in capsys.readouterr().out


@requires_protoc
def test_protoc_validates_package(tmp_path: Path) -> None:
    schema = tmp_path / "inventory" / "v1" / "inventory.proto"
    schema.parent.mkdir(parents=True)
    schema.write_text(BASELINE)

    assert main(["--root", str(tmp_path), "validate-protoc", "inventory"]) == 0


@requires_protoc
def test_protoc_reports_broken_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    good = tmp_path / "inventory" / "v1" / "inventory.proto"
    good.parent.mkdir(parents=True)
    good.write_text(BASELINE)
    broken = tmp_path / "inventory" / "v1" / "broken.proto"
    broken.write_text('syntax = "proto3";\n\nmessage Broken {\n  strin id = 1;\n}\n')

    assert main(["--root", str(tmp_path), "validate-protoc"]) == 1

    out = capsys.readouterr().out
    assert "✗ Failed: inventory/v1/broken.proto" in out
    assert "✓ Valid: inventory/v1/inventory.proto" in out
