"""
Module with example code for running the invigilation allocator.

There are two ways to run the code:

1. Run the code with default options. This will generate a synthetic
    faculty roster and exam schedule from the config and allocate duties.
2. Run the code with a roster and schedule pre-defined in a metadata JSON file.

Usage via cli:
    python3 -m src.example --option 1
    python3 -m src.example --option 2 --metadata src/example_metadata.json
"""

from __future__ import annotations

import argparse
from pathlib import Path

from invigilation import Config, InputData, run_allocation
from invigilation.main import Reporter, default_input_builder
from invigilation.metadata import metadata_from_json
from invigilation.rules.base import RuleSpec
from invigilation.rules.consecutive_regular import ConsecutiveRegularRule
from invigilation.rules.registry import default_rule_specs

cfg = Config(
    OUTPUT_DIR=Path("outputs"),
    GEN_FACULTY=60,
    GEN_DAYS=5,
    GEN_MIN_SLOTS_PER_DAY=2,
    GEN_MAX_SLOTS_PER_DAY=3,
    GEN_UNAVAILABLE_RATE=0.05,
    SEED=11,
)


def _example_rule_specs() -> list[RuleSpec]:
    """Default rules, but keep a two-slot gap between regular duties."""
    specs = []
    for spec in default_rule_specs():
        if spec.cls is ConsecutiveRegularRule:
            spec = RuleSpec(cls=spec.cls, order=spec.order, settings={"gap": 2})
        specs.append(spec)
    return specs


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run invigilation examples.")
    parser.add_argument(
        "--option",
        type=int,
        default=1,
        choices=(1, 2),
        help="Example scenario to run (default: 1).",
    )
    parser.add_argument(
        "--metadata",
        type=Path,
        default=Path("src/example_metadata.json"),
        help="Metadata JSON file used by option 2.",
    )
    return parser.parse_args()


def run_option(option: int, metadata: Path) -> None:
    print(f"Running example code with option {option}")

    # Run the code with default options. This will generate
    # a synthetic roster and schedule from the config and allocate for these.
    if option == 1:

        # The parameters below are defaults, with the exception of config,
        # they can be omitted i.e. the below is equivalent to:
        # run_allocation(cfg)
        run_allocation(
            config=cfg,
            validate_config=True,
            input_builder=default_input_builder,
            reporter=Reporter(cfg),
            enable_reporting=True,
        )

    # Run the code with data from a metadata JSON file. Typical production use.
    elif option == 2:

        meta = metadata_from_json(metadata)
        for w in meta.warnings:
            print(f"⚠️ {w}")
        run_allocation(
            cfg,
            data=InputData.from_metadata(meta),
            rules=_example_rule_specs(),
        )
    else:
        raise SystemExit(f"Unknown option {option}")


def main() -> None:
    args = parse_args()
    run_option(args.option, args.metadata)


if __name__ == "__main__":
    main()
