#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for the pehead command-line interface."""

from __future__ import annotations

from collections.abc import Callable
import json
from pathlib import Path
from typing import Any

import click
from click.testing import CliRunner, Result
import pytest

from pehead.cli import main as cli_main


def _json_line(result: Result) -> Any:
    return json.loads(result.stdout.strip().splitlines()[-1])


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestDump:
    def test_single_file_prints_document(self, runner: CliRunner, pe_file: Callable[..., Path]) -> None:
        path = pe_file()
        result = runner.invoke(cli_main, ["dump", str(path)])

        assert result.exit_code == 0, result.output
        data = _json_line(result)
        assert data["valid_pe_header"] is True
        assert data["machine_type_name"] == "IMAGE_FILE_MACHINE_I386"
        assert [s["name"] for s in data["sections"]] == [".text", ".data", ".rsrc"]

    def test_array_flag_keys_by_path(self, runner: CliRunner, pe_file: Callable[..., Path]) -> None:
        path = pe_file()
        result = runner.invoke(cli_main, ["dump", "--array", str(path)])

        assert result.exit_code == 0, result.output
        data = _json_line(result)
        assert list(data) == [str(path.resolve())]

    def test_bad_file_reported_as_null(self, runner: CliRunner, temp_dir: Path) -> None:
        bad = temp_dir / "notes.txt"
        bad.write_bytes(b"hello")
        result = runner.invoke(cli_main, ["dump", str(bad)])

        assert result.exit_code == 0, result.output
        assert _json_line(result) is None
        assert f"Unable to parse {bad.resolve()} as PE file" in result.stderr

    def test_multiple_files_with_failure(
        self, runner: CliRunner, pe_file: Callable[..., Path], temp_dir: Path
    ) -> None:
        good = pe_file("good.exe")
        missing = temp_dir / "missing.exe"
        result = runner.invoke(cli_main, ["dump", "-w", "2", str(good), str(missing)])

        assert result.exit_code == 0, result.output
        data = _json_line(result)
        assert data[str(good.resolve())]["number_of_sections"] == 3
        assert data[str(missing.resolve())] is None

    def test_wildcard_argument(self, runner: CliRunner, pe_file: Callable[..., Path], temp_dir: Path) -> None:
        pe_file("one.exe")
        pe_file("two.exe", magic=0x20B)
        result = runner.invoke(cli_main, ["dump", str(temp_dir / "*.exe")])

        assert result.exit_code == 0, result.output
        data = _json_line(result)
        assert sorted(Path(p).name for p in data) == ["one.exe", "two.exe"]

    def test_format_flag_indents(self, runner: CliRunner, pe_file: Callable[..., Path]) -> None:
        result = runner.invoke(cli_main, ["dump", "-f", str(pe_file())])

        assert result.exit_code == 0, result.output
        assert '\n  "dos_stub": ' in result.stdout

    def test_paths_required(self, runner: CliRunner) -> None:
        result = runner.invoke(cli_main, ["dump"])
        assert result.exit_code != 0

    def test_workers_must_be_positive(self, runner: CliRunner, pe_file: Callable[..., Path]) -> None:
        result = runner.invoke(cli_main, ["dump", "-w", "0", str(pe_file())])
        assert result.exit_code != 0


class TestRewrite:
    def test_rewrite_matches_source(
        self, runner: CliRunner, pe_file: Callable[..., Path], temp_dir: Path
    ) -> None:
        source = pe_file(trailing=b"\x90" * 64)
        output = temp_dir / "out" / "header.bin"
        result = runner.invoke(cli_main, ["rewrite", str(source), str(output)])

        assert result.exit_code == 0, result.output
        assert "Header region matches source" in result.stdout
        written = output.read_bytes()
        assert source.read_bytes()[: len(written)] == written

    def test_rewrite_normalizes_signature(
        self, runner: CliRunner, pe_file: Callable[..., Path], temp_dir: Path
    ) -> None:
        source = pe_file(signature=b"XX\x00\x00")
        output = temp_dir / "header.bin"
        result = runner.invoke(cli_main, ["rewrite", str(source), str(output)])

        assert result.exit_code == 0, result.output
        assert "invalid PE signature" in result.stderr
        assert "differs from source" in result.stdout
        assert output.read_bytes()[0x80:0x84] == b"PE\x00\x00"

    def test_rewrite_refuses_existing_output(
        self, runner: CliRunner, pe_file: Callable[..., Path], temp_dir: Path
    ) -> None:
        source = pe_file()
        output = temp_dir / "exists.bin"
        output.write_bytes(b"keep")
        result = runner.invoke(cli_main, ["rewrite", str(source), str(output)])

        assert result.exit_code != 0
        assert "already exists" in result.stderr
        assert output.read_bytes() == b"keep"

        forced = runner.invoke(cli_main, ["rewrite", "--force", str(source), str(output)])
        assert forced.exit_code == 0, forced.output
        assert output.read_bytes() != b"keep"

    def test_rewrite_bad_source(self, runner: CliRunner, temp_dir: Path) -> None:
        source = temp_dir / "bad.exe"
        source.write_bytes(b"MZ")
        result = runner.invoke(cli_main, ["rewrite", str(source), str(temp_dir / "o.bin")])

        assert result.exit_code != 0
        assert "Unable to parse" in result.stderr
        assert not (temp_dir / "o.bin").exists()


def test_version_option(runner: CliRunner) -> None:
    result = runner.invoke(cli_main, ["--version"])

    assert result.exit_code == 0
    assert result.output.startswith("pehead version ")


def test_group_passes_runtime_config(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PEHEAD_MAX_WORKERS", "3")
    captured: dict[str, Any] = {}

    @cli_main.command("capture")
    @click.pass_context
    def capture(ctx: click.Context) -> None:
        captured.update(ctx.obj)

    try:
        result = runner.invoke(cli_main, ["capture"])
    finally:
        cli_main.commands.pop("capture", None)

    assert result.exit_code == 0, result.output
    assert list(captured) == ["config"]
    assert captured["config"].max_workers == 3


def test_help_lists_commands(runner: CliRunner) -> None:
    result = runner.invoke(cli_main, ["-h"])

    assert result.exit_code == 0
    assert "dump" in result.output
    assert "rewrite" in result.output


# 🪟🔍🔚
