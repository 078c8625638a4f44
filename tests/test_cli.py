"""Tests for dep_roulette.cli."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from dep_roulette.cli import (
    EXIT_BAD_CONFIG,
    EXIT_NO_LOCKFILE,
    EXIT_NO_PACKAGES,
    EXIT_OK,
    FAREWELL,
    main,
)
from dep_roulette.models import PackageDetails
from dep_roulette.registry import PackageNotFoundError

DETAILS = PackageDetails(
    name="a",
    version="1.0.0",
    description="Does [bold]a[/bold] things",
    homepage="https://example.com/a",
    created="2020-01-01T00:00:00.000Z",
    modified="2020-06-01T00:00:00.000Z",
    author="Jane Doe (https://jane.dev)",
    license="MIT",
)


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)
    with patch("dep_roulette.cli.setup_logging"):
        yield


class TestFatalPaths:
    @patch("dep_roulette.cli.why_is_package_used")
    @patch("dep_roulette.cli.describe_package")
    def test_missing_lockfile(
        self,
        mock_describe: MagicMock,
        mock_why: MagicMock,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["--root", str(tmp_path)])

        assert code == EXIT_NO_LOCKFILE
        captured = capsys.readouterr()
        assert "Could not find package-lock.json or yarn.lock" in captured.err
        assert captured.out == ""
        mock_describe.assert_not_called()
        mock_why.assert_not_called()

    @patch("dep_roulette.cli.describe_package")
    def test_empty_lockfile(
        self, mock_describe: MagicMock, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (tmp_path / "yarn.lock").write_text("# yarn lockfile v1\n", encoding="utf-8")

        code = main(["--root", str(tmp_path)])

        assert code == EXIT_NO_PACKAGES
        assert "does not list any packages" in capsys.readouterr().err
        mock_describe.assert_not_called()

    def test_bad_timeout(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["--root", str(tmp_path), "--timeout", "0"])

        assert code == EXIT_BAD_CONFIG
        assert "Invalid timeout" in capsys.readouterr().err


class TestRun:
    @patch("dep_roulette.cli.why_is_package_used", return_value="my-app\n└── a@1.0.0")
    @patch("dep_roulette.cli.describe_package", return_value=DETAILS)
    def test_prints_details_and_usage(
        self,
        mock_describe: MagicMock,
        mock_why: MagicMock,
        npm_project: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["--root", str(npm_project), "--seed", "3"])

        assert code == EXIT_OK
        out = capsys.readouterr().out
        winner = mock_describe.call_args.args[0]
        assert str(winner) in {"a@1.0.0", "b@2.0.0", "c@3.0.0"}
        assert f"OK. I chose {winner} from 3 deduped packages!" in out
        assert "Does [bold]a[/bold] things" in out
        assert "https://example.com/a" in out
        assert "Authors: Jane Doe\n" in out
        assert "License: MIT\n" in out
        assert "Package age: " in out
        assert "Version age: " in out
        assert "└── a@1.0.0" in out
        assert out.rstrip().endswith(FAREWELL)
        assert mock_why.call_args.args[1] == "npm"

    @patch("dep_roulette.cli.why_is_package_used", return_value="usage")
    @patch("dep_roulette.cli.describe_package", return_value=DETAILS)
    def test_seed_makes_pick_repeatable(
        self, mock_describe: MagicMock, mock_why: MagicMock, npm_project: Path
    ) -> None:
        main(["--root", str(npm_project), "--seed", "11"])
        main(["--root", str(npm_project), "--seed", "11"])

        first, second = (call.args[0] for call in mock_describe.call_args_list)
        assert first == second

    @patch("dep_roulette.cli.why_is_package_used", return_value="left-pad is a direct dependency of the project.")
    @patch("dep_roulette.cli.describe_package", side_effect=PackageNotFoundError("E404"))
    def test_missing_metadata_still_reports_usage(
        self,
        mock_describe: MagicMock,
        mock_why: MagicMock,
        yarn_project: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(["--root", str(yarn_project)])

        assert code == EXIT_OK
        captured = capsys.readouterr()
        winner = mock_describe.call_args.args[0]
        assert f"I'm sorry, I couldn't find any information about {winner}." in captured.err
        assert "Authors:" not in captured.out
        assert "is a direct dependency of the project." in captured.out
        assert mock_why.call_args.args[1] == "yarn"

    @pytest.mark.parametrize(
        "output",
        [
            '{"name": "a", "time": {"created": "unknown", "modified": "2020-01-01T00:00:00Z"}}',
            '{"name": "a", "time": {"created": "2020-01-01T00:00:00Z", "modified": "soon"}}',
            b'{"name": "a\xff"}'.decode("utf-8", errors="replace"),
        ],
    )
    @patch("dep_roulette.cli.why_is_package_used", return_value="my-app\n└── a@1.0.0")
    @patch("dep_roulette.registry.run")
    @patch("dep_roulette.registry.which", return_value="/usr/bin/npm")
    def test_unpresentable_metadata_still_reports_usage(
        self,
        mock_which: MagicMock,
        mock_run: MagicMock,
        mock_why: MagicMock,
        output: str,
        npm_project: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        mock_run.return_value = output

        code = main(["--root", str(npm_project), "--seed", "1"])

        assert code == EXIT_OK
        captured = capsys.readouterr()
        winner = mock_run.call_args.args[2]
        assert f"I'm sorry, I couldn't find any information about {winner}." in captured.err
        assert "Package age:" not in captured.out
        assert "└── a@1.0.0" in captured.out
        assert captured.out.rstrip().endswith(FAREWELL)


class TestBadLockfiles:
    @patch("dep_roulette.cli.describe_package")
    def test_unnamed_dependency_is_ignored(
        self, mock_describe: MagicMock, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        lock = {"dependencies": {"": {"version": "1.0.0"}}}
        (tmp_path / "package-lock.json").write_text(json.dumps(lock), encoding="utf-8")

        code = main(["--root", str(tmp_path)])

        assert code == EXIT_NO_PACKAGES
        assert "does not list any packages" in capsys.readouterr().err
        mock_describe.assert_not_called()

    def test_non_finite_timeout(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["--root", str(tmp_path), "--timeout", "nan"])

        assert code == EXIT_BAD_CONFIG
        assert "Invalid timeout" in capsys.readouterr().err
