"""Tests for the CLI main module."""

import json
from pathlib import Path

import pytest

from xml_order_verifier.cli.main import (
    CLIConfig,
    VerificationRunner,
    create_argument_parser,
    exit_code_for,
    format_results,
    main,
    pair_paths,
    verify_pair,
)
from xml_order_verifier.shared import (
    ConfigError,
    ConfigValidationError,
    VerifyConfig,
    VerifyFailOn,
    VerifyFailType,
)

SORTED = "<project>\n  <a>1</a>\n  <b>2</b>\n</project>\n"
UNSORTED = "<project>\n  <b>2</b>\n  <a>1</a>\n</project>\n"
REFORMATTED = "<project><a>1</a><b>2</b></project>"


@pytest.fixture
def files(tmp_path: Path):
    """Write a sorted reference and a few originals."""
    paths = {}
    for name, content in {
        "sorted.xml": SORTED,
        "unsorted.xml": UNSORTED,
        "same.xml": SORTED,
        "reformatted.xml": REFORMATTED,
    }.items():
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        paths[name] = path
    return paths


class TestCLIConfig:
    """Test CLI configuration management."""

    def test_default_config(self):
        config = CLIConfig()

        assert config.max_workers == 1
        assert config.output_format == "text"
        assert config.verify_config == VerifyConfig()

    def test_config_from_file(self, tmp_path: Path):
        config_path = tmp_path / "verify.json"
        config_path.write_text(json.dumps({
            "fail_type": "stop",
            "fail_on": "stringdifference",
            "max_workers": 4,
            "output_format": "json",
        }))

        config = CLIConfig.from_file(config_path)

        assert config.verify_config.fail_type is VerifyFailType.STOP
        assert config.verify_config.fail_on is VerifyFailOn.STRINGDIFFERENCE
        assert config.max_workers == 4
        assert config.output_format == "json"

    def test_config_from_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Could not read config file"):
            CLIConfig.from_file(tmp_path / "missing.json")

    @pytest.mark.parametrize("value", ["4", None, 0, -2, True, 2.5])
    def test_config_file_rejects_invalid_max_workers(self, tmp_path: Path, value):
        """Test that max_workers must be a positive integer."""
        config_path = tmp_path / "verify.json"
        config_path.write_text(json.dumps({"max_workers": value}))

        with pytest.raises(ConfigValidationError, match="Invalid max_workers") as excinfo:
            CLIConfig.from_file(config_path)

        assert excinfo.value.field_name == "max_workers"
        assert excinfo.value.suggestions

    @pytest.mark.parametrize("value", ["xml", None, 1])
    def test_config_file_rejects_unknown_output_format(self, tmp_path: Path, value):
        """Test that output_format must be text or json."""
        config_path = tmp_path / "verify.json"
        config_path.write_text(json.dumps({"output_format": value}))

        with pytest.raises(ConfigValidationError, match="Invalid output_format") as excinfo:
            CLIConfig.from_file(config_path)

        assert excinfo.value.field_name == "output_format"
        assert excinfo.value.suggestions == ["text", "json"]

    def test_config_file_with_invalid_json(self, tmp_path: Path):
        """Test that a malformed config file is a configuration error."""
        config_path = tmp_path / "verify.json"
        config_path.write_text("{not json")

        with pytest.raises(ConfigValidationError, match="Invalid configuration JSON"):
            CLIConfig.from_file(config_path)

    def test_negative_workers_argument_is_rejected(self):
        """Test that --workers is validated like the config file value."""
        config = CLIConfig()
        args = create_argument_parser().parse_args(["a.xml", "b.xml", "-w", "-1"])

        with pytest.raises(ConfigValidationError, match="Invalid max_workers"):
            config.apply_arguments(args)

    def test_arguments_override_file_settings(self):
        config = CLIConfig(VerifyConfig.strict())
        args = create_argument_parser().parse_args(
            ["a.xml", "b.xml", "--fail-type", "warn", "--keep-namespaces", "-f", "json", "-w", "3"]
        )

        config.apply_arguments(args)

        assert config.verify_config.fail_type is VerifyFailType.WARN
        assert config.verify_config.strip_namespaces is False
        assert config.output_format == "json"
        assert config.max_workers == 3


class TestHelpers:
    """Test argument pairing, formatting and exit codes."""

    def test_pair_paths(self):
        paths = [Path("a.xml"), Path("a.sorted.xml"), Path("b.xml"), Path("b.sorted.xml")]

        assert pair_paths(paths) == [
            (Path("a.xml"), Path("a.sorted.xml")),
            (Path("b.xml"), Path("b.sorted.xml")),
        ]

    def test_pair_paths_rejects_odd_count(self):
        with pytest.raises(ValueError, match="ORIGINAL SORTED pairs"):
            pair_paths([Path("a.xml")])

    def test_format_results_empty(self):
        assert format_results([], "text") == "No files verified."
        assert format_results([], "json") == "[]"

    def test_format_results_text(self):
        results = [
            {"file": "ok.xml", "ordered": True},
            {"file": "bad.xml", "ordered": False, "result": {"message": "The xml element <a> ..."}},
            {"file": "gone.xml", "ordered": False, "error": "Could not read gone.xml"},
        ]

        output = format_results(results, "text")

        assert "Verified 3 files, 1 sorted" in output
        assert "✓ ok.xml" in output
        assert "✗ bad.xml" in output
        assert "   The xml element <a> ..." in output
        assert "   Error: Could not read gone.xml" in output

    def test_exit_codes(self):
        assert exit_code_for([]) == 1
        assert exit_code_for([{"ordered": True}]) == 0
        assert exit_code_for([{"ordered": False}]) == 0
        assert exit_code_for([{"ordered": False, "stopped": True}]) == 1
        assert exit_code_for([{"ordered": False, "error": "x"}]) == 1


class TestVerification:
    """Test verify_pair and VerificationRunner."""

    def test_verify_pair_sorted(self, files):
        outcome = verify_pair(VerifyConfig(), files["same.xml"], files["sorted.xml"])

        assert outcome["ordered"] is True
        assert outcome["result"]["kind"] == "ordered"

    def test_verify_pair_stopped(self, files):
        outcome = verify_pair(VerifyConfig.strict(), files["unsorted.xml"], files["sorted.xml"])

        assert outcome["ordered"] is False
        assert outcome["stopped"] is True
        assert outcome["result"]["kind"] == "children_differ"

    def test_verify_pair_missing_file(self, files, tmp_path: Path):
        outcome = verify_pair(VerifyConfig(), tmp_path / "nope.xml", files["sorted.xml"])

        assert outcome["ordered"] is False
        assert "Could not read" in outcome["error"]
        assert outcome["file"] == str((tmp_path / "nope.xml").absolute())

    def test_relative_paths_are_reported_absolute(self, files, monkeypatch):
        """Test that read errors and reports label files the same way."""
        monkeypatch.chdir(files["sorted.xml"].parent)

        reported = verify_pair(VerifyConfig(), Path("same.xml"), Path("sorted.xml"))
        failed = verify_pair(VerifyConfig(), Path("nope.xml"), Path("sorted.xml"))

        assert reported["file"] == str(Path("same.xml").absolute())
        assert failed["file"] == str(Path("nope.xml").absolute())

    def test_stop_policy_aborts_sequential_run(self, files):
        runner = VerificationRunner(CLIConfig(VerifyConfig.strict()))

        results = runner.run([
            (files["unsorted.xml"], files["sorted.xml"]),
            (files["same.xml"], files["sorted.xml"]),
        ])

        assert len(results) == 1
        assert results[0]["stopped"] is True

    def test_warn_policy_checks_every_pair(self, files):
        runner = VerificationRunner(CLIConfig())

        results = runner.run([
            (files["unsorted.xml"], files["sorted.xml"]),
            (files["same.xml"], files["sorted.xml"]),
        ])

        assert [r["ordered"] for r in results] == [False, True]


class TestMain:
    """Test the main entry point."""

    def test_sorted_file(self, files, capsys):
        exit_code = main([str(files["same.xml"]), str(files["sorted.xml"])])

        assert exit_code == 0
        assert "Verified 1 files, 1 sorted" in capsys.readouterr().out

    def test_unsorted_file_with_warn(self, files, capsys):
        exit_code = main([str(files["unsorted.xml"]), str(files["sorted.xml"])])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "✗" in output
        assert "The xml element <a> should be placed before <b> in <project>" in output

    def test_unsorted_file_with_stop(self, files):
        exit_code = main([
            str(files["unsorted.xml"]), str(files["sorted.xml"]), "--fail-type", "stop",
        ])

        assert exit_code == 1

    def test_json_output_in_string_mode(self, files, capsys):
        exit_code = main([
            str(files["reformatted.xml"]), str(files["sorted.xml"]),
            "--fail-on", "stringdifference", "--format", "json",
        ])

        results = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert results[0]["ordered"] is False
        assert results[0]["fail_on"] == "STRINGDIFFERENCE"
        assert results[0]["result"]["kind"] == "line_differs"

    def test_config_file(self, files, tmp_path: Path):
        config_path = tmp_path / "verify.json"
        config_path.write_text(json.dumps({"fail_type": "stop"}))

        exit_code = main([
            str(files["unsorted.xml"]), str(files["sorted.xml"]), "--config", str(config_path),
        ])

        assert exit_code == 1

    def test_invalid_config_file(self, files, tmp_path: Path, capsys):
        config_path = tmp_path / "verify.json"
        config_path.write_text(json.dumps({"fail_type": "sort"}))

        exit_code = main([
            str(files["same.xml"]), str(files["sorted.xml"]), "--config", str(config_path),
        ])

        assert exit_code == 1
        assert "Configuration error" in capsys.readouterr().err

    @pytest.mark.parametrize("settings", [
        {"max_workers": "4"},
        {"max_workers": None},
        {"output_format": "yaml"},
    ])
    def test_invalid_cli_settings_in_config_file(self, files, tmp_path: Path, capsys, settings):
        """Test that bad CLI settings report a configuration error instead of crashing."""
        config_path = tmp_path / "verify.json"
        config_path.write_text(json.dumps(settings))
        pair = [str(files["same.xml"]), str(files["sorted.xml"])]

        exit_code = main(["-c", str(config_path)] + pair + pair)

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Configuration error: Invalid" in captured.err
        assert captured.out == ""

    def test_missing_file(self, files, tmp_path: Path, capsys):
        exit_code = main([str(tmp_path / "missing.xml"), str(files["sorted.xml"])])

        assert exit_code == 1
        assert "Error: Could not read" in capsys.readouterr().out

    def test_odd_number_of_paths(self, files):
        with pytest.raises(SystemExit) as excinfo:
            main([str(files["same.xml"])])

        assert excinfo.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])

        assert excinfo.value.code == 0
        assert "0.1.0" in capsys.readouterr().out
