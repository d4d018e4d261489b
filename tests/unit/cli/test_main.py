"""Unit tests for the scriptsort command."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from scriptsort import __version__
from scriptsort.cli.main import app, normalize_flags, parse_cutoff, run
from scriptsort.core.errors import AllocationError, ArgumentError
from typer.testing import CliRunner

runner = CliRunner()


class TestNormalizeFlags:
    """Tests for normalize_flags function."""

    def test_lowercases_known_flags(self) -> None:
        """Known flags are matched case-insensitively."""
        args = ["/dir", "--INIT", "--Bundle", "--DeBuG", "--CUTOFF", "60"]

        assert normalize_flags(args) == [
            "/dir",
            "--init",
            "--bundle",
            "--debug",
            "--cutoff",
            "60",
        ]

    def test_keeps_other_arguments(self) -> None:
        """Positional arguments and unknown flags are untouched."""
        args = ["/Some/Dir", "--Unknown", "--initialize", "-V"]

        assert normalize_flags(args) == args

    def test_equals_form(self) -> None:
        """Only the flag part of --flag=value is normalized."""
        assert normalize_flags(["--Cutoff=70", "--CONFIG=/Path/X.toml"]) == [
            "--cutoff=70",
            "--config=/Path/X.toml",
        ]

    def test_whole_flag_equality(self) -> None:
        """Prefixes of known flags are not treated as flags."""
        assert normalize_flags(["--INI", "--BUNDLES"]) == ["--INI", "--BUNDLES"]


class TestParseCutoff:
    """Tests for parse_cutoff function."""

    def test_default_when_missing(self) -> None:
        """The default applies when no value was given."""
        assert parse_cutoff(None, 50) == 50

    def test_numeric_value(self) -> None:
        """A positive number is parsed."""
        assert parse_cutoff("75", 50) == 75

    @pytest.mark.parametrize("value", ["abc", "", "1.5", "0", "-4", "1_0", "٥", "+5", " 7 "])
    def test_invalid_values(self, value: str) -> None:
        """Non-numeric and non-positive values are argument errors."""
        with pytest.raises(ArgumentError, match="greater than 0"):
            parse_cutoff(value, 50)


class TestNameList:
    """Tests for the default name-list output."""

    def test_example_directory(self, scripts_dir: Path) -> None:
        """The documented example prints in execution order."""
        result = runner.invoke(app, [str(scripts_dir)])

        assert result.exit_code == 0
        assert result.stdout_bytes == b"ordered.01.first\nfn.a\nfn.b\nordered.52.last\n"

    def test_empty_directory(self, empty_dir: Path) -> None:
        """An empty directory prints nothing."""
        result = runner.invoke(app, [str(empty_dir)])

        assert result.exit_code == 0
        assert result.stdout_bytes == b""

    def test_cutoff_option(self, scripts_dir: Path) -> None:
        """--cutoff moves the boundary between lower and upper."""
        result = runner.invoke(app, [str(scripts_dir), "--cutoff", "53"])

        assert result.exit_code == 0
        assert result.stdout_bytes == b"ordered.01.first\nordered.52.last\nfn.a\nfn.b\n"

    def test_cutoff_boundary(self, tmp_path: Path) -> None:
        """An order number equal to the cutoff runs after unordered scripts."""
        for name in ("ordered.09.a", "ordered.10.b", "fn.x"):
            (tmp_path / name).touch()

        result = runner.invoke(app, [str(tmp_path), "--cutoff", "10"])

        assert result.stdout_bytes == b"ordered.09.a\nfn.x\nordered.10.b\n"

    def test_cutoff_from_settings(self, scripts_dir: Path, isolated_config_home: Path) -> None:
        """The settings file provides the default cutoff."""
        config_dir = isolated_config_home / "scriptsort"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text("cutoff = 53\n")

        result = runner.invoke(app, [str(scripts_dir)])

        assert result.stdout_bytes == b"ordered.01.first\nordered.52.last\nfn.a\nfn.b\n"

    def test_cutoff_flag_overrides_settings(self, scripts_dir: Path, tmp_path: Path) -> None:
        """--cutoff wins over the settings file."""
        config = tmp_path / "custom.toml"
        config.write_text("cutoff = 53\n")

        result = runner.invoke(app, [str(scripts_dir), "--config", str(config), "--cutoff", "50"])

        assert result.stdout_bytes == b"ordered.01.first\nfn.a\nfn.b\nordered.52.last\n"

    def test_unknown_arguments_ignored(self, scripts_dir: Path) -> None:
        """Unrecognized trailing arguments do not change the output."""
        result = runner.invoke(app, [str(scripts_dir), "--frobnicate"])

        assert result.exit_code == 0
        assert b"ordered.01.first\nfn.a\nfn.b\nordered.52.last\n" in result.stdout_bytes


class TestInit:
    """Tests for --init output."""

    def test_init_template(self, scripts_dir: Path) -> None:
        """--init prints the sourceable includeScripts script."""
        result = runner.invoke(app, [str(scripts_dir), "--init"])

        assert result.exit_code == 0
        assert "  scripts=( ordered.01.first fn.a fn.b ordered.52.last  )\n" in result.stdout
        assert result.stdout.endswith("unset -f includeScripts\n")
        assert "Sourcing" not in result.stdout

    def test_init_debug(self, scripts_dir: Path) -> None:
        """--init --debug adds progress lines."""
        result = runner.invoke(app, [str(scripts_dir), "--init", "--debug"])

        assert result.exit_code == 0
        assert "Sourcing" in result.stdout
        assert 'printf "done\\n"' in result.stdout

    def test_timer_command_from_settings(self, scripts_dir: Path, tmp_path: Path) -> None:
        """The timer helper name comes from the settings file."""
        config = tmp_path / "custom.toml"
        config.write_text('timer_command = "gms"\n')

        result = runner.invoke(app, [str(scripts_dir), "--init", "--config", str(config)])

        assert "-v gms && gms" in result.stdout


class TestBundle:
    """Tests for --bundle output."""

    def test_bundle(self, scripts_dir: Path) -> None:
        """--bundle prints the concatenated contents in execution order."""
        result = runner.invoke(app, [str(scripts_dir), "--bundle"])

        assert result.exit_code == 0
        assert result.stdout_bytes == b"echo first\necho a\necho b\necho last\n\n"

    def test_bundle_wins_over_init(self, scripts_dir: Path) -> None:
        """--bundle --init prints the bundle without a template."""
        result = runner.invoke(app, [str(scripts_dir), "--init", "--bundle"])

        assert result.exit_code == 0
        assert result.stdout_bytes == b"echo first\necho a\necho b\necho last\n\n"

    def test_bundle_debug(self, scripts_dir: Path) -> None:
        """--bundle --debug brackets the bundle with timer lines."""
        result = runner.invoke(app, [str(scripts_dir), "--bundle", "--debug"])

        assert result.exit_code == 0
        assert result.stdout.startswith("local start_time=")
        assert result.stdout.endswith(
            "export SCRIPTSORT_ELAPSED=$(($end_time - $start_time))\n"
        )

    def test_unreadable_file_is_warned_and_skipped(self, scripts_dir: Path) -> None:
        """An unreadable script is reported but does not fail the run."""
        (scripts_dir / "fn.broken").symlink_to(scripts_dir / "nowhere")

        result = runner.invoke(app, [str(scripts_dir), "--bundle"])

        assert result.exit_code == 0
        assert b"echo first\necho a\necho b\necho last\n\n" in result.stdout_bytes
        assert "Warning:" in result.output
        assert "fn.broken" in result.output

    def test_allocation_failure_exits(self, scripts_dir: Path) -> None:
        """Allocation failures are fatal."""
        with patch(
            "scriptsort.core.assembler.OutputBuffer.append",
            side_effect=AllocationError("Failed to reallocate buffer to size 8192"),
        ):
            result = runner.invoke(app, [str(scripts_dir), "--bundle"])

        assert result.exit_code == 1
        assert "Failed to reallocate buffer" in result.output


class TestErrors:
    """Tests for fatal argument and directory errors."""

    def test_missing_directory_argument(self) -> None:
        """Running without a directory exits with 1."""
        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Missing directory argument" in result.output

    def test_nonexistent_directory(self, tmp_path: Path) -> None:
        """A missing directory exits with 1 and prints the system reason."""
        result = runner.invoke(app, [str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Error opening directory" in result.output
        assert "No such file or directory" in result.output

    @pytest.mark.parametrize("value", ["abc", "0", "-2"])
    def test_invalid_cutoff(self, scripts_dir: Path, value: str) -> None:
        """Invalid cutoff values exit with 1 before any output."""
        result = runner.invoke(app, [str(scripts_dir), f"--cutoff={value}"])

        assert result.exit_code == 1
        assert "greater than 0" in result.output
        assert "ordered.01.first" not in result.output

    def test_invalid_settings(self, scripts_dir: Path, tmp_path: Path) -> None:
        """An invalid settings file exits with 1."""
        config = tmp_path / "bad.toml"
        config.write_text("cutoff = -1\n")

        result = runner.invoke(app, [str(scripts_dir), "--config", str(config)])

        assert result.exit_code == 1
        assert "Invalid settings" in result.output


class TestVersion:
    """Tests for --version."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"scriptsort version {__version__}" in result.stdout


class TestRun:
    """Tests for the console script entry point."""

    def test_run_normalizes_flags(
        self, scripts_dir: Path, capsysbinary: pytest.CaptureFixture[bytes]
    ) -> None:
        """Uppercase flags work through the console script."""
        argv = ["scriptsort", str(scripts_dir), "--BUNDLE"]

        with patch.object(sys, "argv", argv), pytest.raises(SystemExit) as exc_info:
            run()

        assert exc_info.value.code == 0
        assert capsysbinary.readouterr().out == b"echo first\necho a\necho b\necho last\n\n"

    def test_run_cutoff_without_value(
        self, scripts_dir: Path, capsysbinary: pytest.CaptureFixture[bytes]
    ) -> None:
        """A trailing --cutoff without a value exits with 1 and prints nothing."""
        argv = ["scriptsort", str(scripts_dir), "--CUTOFF"]

        with patch.object(sys, "argv", argv), pytest.raises(SystemExit) as exc_info:
            run()

        captured = capsysbinary.readouterr()
        assert exc_info.value.code == 1
        assert captured.out == b""
        assert b"Error:" in captured.err
        assert b"--cutoff" in captured.err

    @pytest.mark.parametrize("value", ["1_0", "+5"])
    def test_run_non_decimal_cutoff(
        self, scripts_dir: Path, capsysbinary: pytest.CaptureFixture[bytes], value: str
    ) -> None:
        """Cutoff values that are not plain decimal digits exit with 1."""
        argv = ["scriptsort", str(scripts_dir), "--cutoff", value]

        with patch.object(sys, "argv", argv), pytest.raises(SystemExit) as exc_info:
            run()

        assert exc_info.value.code == 1
        assert capsysbinary.readouterr().out == b""

    def test_run_version_exits_zero(self, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
        """--version through the console script exits with 0."""
        argv = ["scriptsort", "--VERSION"]

        with patch.object(sys, "argv", argv), pytest.raises(SystemExit) as exc_info:
            run()

        assert exc_info.value.code == 0
        assert f"scriptsort version {__version__}".encode() in capsysbinary.readouterr().out
