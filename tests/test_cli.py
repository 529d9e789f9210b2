"""Tests for the command-line interface."""

import json
import math

import pandas as pd
import pytest

from variates.cli import main


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


class TestListCommand:
    """Test `variates list`."""

    def test_lists_distributions(self, capsys):
        """Test that every distribution is printed with its parameters."""
        assert main(["list"]) == 0

        out = capsys.readouterr().out
        assert "gamma(shape, scale)" in out
        assert "normal_truncated(mean, std_dev, lower, upper)" in out
        assert "zeta(a)" in out


class TestSampleCommand:
    """Test `variates sample`."""

    def test_prints_samples(self, capsys):
        """Test plain output, one value per line."""
        code = main(["sample", "gamma", "-p", "shape=2", "-p", "scale=1", "-n", "5", "--seed", "1"])

        captured = capsys.readouterr()
        assert code == 0
        lines = captured.out.strip().splitlines()
        assert len(lines) == 5
        assert all(float(line) >= 0.0 for line in lines)
        assert "seed=1" in captured.err

    def test_json_output(self, capsys):
        """Test the full JSON result."""
        code = main(
            [
                "sample",
                "normal_truncated",
                "-p",
                "mean=0",
                "-p",
                "std_dev=1",
                "-p",
                "lower=2",
                "-p",
                "upper=inf",
                "-n",
                "20",
                "--seed",
                "3",
                "--json",
            ]
        )

        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["distribution"] == "normal_truncated"
        assert payload["seed"] == 3
        assert len(payload["values"]) == 20
        assert all(v >= 2.0 for v in payload["values"])
        assert payload["params"]["upper"] == "Infinity"

    def test_json_output_keeps_infinite_values(self, capsys):
        """Test that a point mass at infinity survives JSON output."""
        code = main(
            ["sample", "gamma", "-p", "shape=inf", "-p", "scale=1", "-n", "3", "--seed", "1", "--json"]
        )

        assert code == 0
        payload = json.loads(capsys.readouterr().out, parse_constant=_reject_constant)
        assert float(payload["params"]["shape"]) == math.inf
        assert [float(v) for v in payload["values"]] == [math.inf] * 3
        assert payload["stats"]["non_finite_count"] == 3
        assert payload["stats"]["mean"] is None

    def test_float32_json(self, capsys):
        """Test that the dtype flag reaches the result."""
        assert main(["sample", "zeta", "-p", "a=2", "-n", "3", "--dtype", "float32", "--json"]) == 0

        assert json.loads(capsys.readouterr().out)["dtype"] == "float32"

    def test_writes_csv(self, tmp_path, capsys):
        """Test writing the samples to a CSV file."""
        output = tmp_path / "samples.csv"

        code = main(["sample", "beta", "-p", "alpha=2", "-p", "beta=3", "-n", "7", "--output", str(output)])

        assert code == 0
        df = pd.read_csv(output)
        assert list(df.columns) == ["beta"]
        assert len(df) == 7

    def test_parameter_error_exit_status(self, capsys):
        """Test that a construction error is printed as JSON with exit status 1."""
        code = main(["sample", "gamma", "-p", "shape=-1", "-p", "scale=1"])

        assert code == 1
        error = json.loads(capsys.readouterr().err)["error"]
        assert error["code"] == "SHAPE_TOO_SMALL"
        assert error["phase"] == "construct"

    def test_non_finite_parameters_in_error_are_valid_json(self, capsys):
        """Test that NaN and infinite parameters in an error payload are strict JSON."""
        code = main(["sample", "gamma", "-p", "shape=nan", "-p", "scale=inf"])

        assert code == 1
        error = json.loads(capsys.readouterr().err, parse_constant=_reject_constant)["error"]
        assert error["code"] == "SHAPE_TOO_SMALL"
        assert error["details"]["params"] == {"shape": "NaN", "scale": "Infinity"}

    def test_unknown_distribution(self, capsys):
        """Test that an unknown distribution exits with status 1."""
        assert main(["sample", "nope"]) == 1

        assert json.loads(capsys.readouterr().err)["error"]["code"] == "DISTRIBUTION_ERROR"

    def test_negative_size(self, capsys):
        """Test that an invalid request exits with status 1."""
        assert main(["sample", "gamma", "-p", "shape=1", "-p", "scale=1", "-n", "-1"]) == 1

        assert json.loads(capsys.readouterr().err)["error"]["code"] == "VALIDATION_ERROR"

    def test_malformed_parameter(self, capsys):
        """Test that a parameter without '=' is an argument error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["sample", "gamma", "-p", "shape"])

        assert exc_info.value.code == 2
