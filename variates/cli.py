"""Command-line interface for listing distributions and drawing samples.

Usage:
    variates list
    variates sample gamma -p shape=2 -p scale=5 -n 10 --seed 42
    variates sample normal_truncated -p mean=0 -p std_dev=1 -p lower=2 -p upper=inf --json
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any

import pydantic

from variates.core.config import SUPPORTED_DTYPES, settings
from variates.core.exceptions import ValidationError, VariatesError
from variates.models.generation import SampleRequest
from variates.services.distribution_registry import get_distribution_registry
from variates.services.sampler import generate_samples, samples_to_dataframe

logger = logging.getLogger(__name__)


def _parse_param(text: str) -> tuple[str, float]:
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected key=value, got {text!r}")
    try:
        return key.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Parameter {key!r} is not a number: {value!r}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="variates", description="Sample from exact random-variate generators"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List available distributions and their parameters")

    sample = subparsers.add_parser("sample", help="Draw samples from a distribution")
    sample.add_argument("distribution", help="Distribution name (see 'variates list')")
    sample.add_argument(
        "-p",
        "--param",
        dest="params",
        action="append",
        type=_parse_param,
        default=[],
        metavar="KEY=VALUE",
        help="Distribution parameter, repeatable (inf and nan are accepted)",
    )
    sample.add_argument("-n", "--size", type=int, default=10, help="Number of samples")
    sample.add_argument("--seed", type=int, default=None, help="Random seed")
    sample.add_argument("--dtype", choices=SUPPORTED_DTYPES, default=None, help="Output precision")
    sample.add_argument("--json", action="store_true", help="Print the full result as JSON")
    sample.add_argument("--output", type=Path, default=None, help="Also write the samples to a CSV file")

    return parser


def _json_safe(value: Any) -> Any:
    """Replace non-finite floats with the strings used in sample results."""
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


def _cmd_list() -> int:
    for info in get_distribution_registry().get_available_distributions():
        params = ", ".join(p.name for p in info.parameters)
        print(f"{info.name}({params})  [{info.category}, support {info.support}]")
        print(f"    {info.description}")
    return 0


def _build_request(args: argparse.Namespace) -> SampleRequest:
    try:
        return SampleRequest(
            distribution=args.distribution,
            params=dict(args.params),
            size=args.size,
            seed=args.seed,
            dtype=args.dtype,
        )
    except pydantic.ValidationError as e:
        errors = [f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise ValidationError(
            message=f"Invalid sample request: {'; '.join(errors)}",
            details={"errors": errors},
        )


def _cmd_sample(args: argparse.Namespace) -> int:
    request = _build_request(args)
    result = generate_samples(request)

    if args.output is not None:
        samples_to_dataframe(result).to_csv(args.output, index=False)
        logger.info("Wrote %d samples to %s", result.size, args.output)

    if args.json:
        print(result.model_dump_json(indent=2))
        return 0

    for value in result.values:
        print(repr(value))
    stats = result.stats
    print(
        f"# seed={result.seed} count={stats.count} mean={stats.mean} std={stats.std} "
        f"min={stats.min} max={stats.max} non_finite={stats.non_finite_count}",
        file=sys.stderr,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface and return the exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())

    try:
        if args.command == "list":
            return _cmd_list()
        return _cmd_sample(args)
    except VariatesError as e:
        print(json.dumps(_json_safe(e.to_dict()), default=str, allow_nan=False), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
