from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence, Type

from invigilation.allocation import allocate
from invigilation.config import Config, cfg
from invigilation.input_data import InputData, build_input
from invigilation.metadata import write_assignments_json
from invigilation.models import AssignmentResult
from invigilation.reporting import PandasResultAdapter, Reporter
from invigilation.rules.base import Rule, RuleSpec

InputBuilder = Callable[[Config], InputData]


def default_input_builder(config: Config) -> InputData:
    """Build synthetic input data using the project's helper."""
    seed = config.SEED if config.SEED is not None else 7
    return build_input(config, seed=seed)


def run_allocation(
    config: Config | None = None,
    data: InputData | None = None,
    input_builder: InputBuilder | None = None,
    reporter: Reporter | None = None,
    validate_config: bool = True,
    enable_reporting: bool = True,
    rules: Sequence[RuleSpec | Type[Rule]] | None = None,
) -> AssignmentResult:
    """
    Build inputs, allocate duties, and optionally report on the result.

    Parameters
    ----------
    config:
        The configuration for the run. Defaults to `invigilation.config.cfg` when omitted.
    data:
        Pre-built `InputData`. When omitted then `input_builder` (or the default synthetic
        builder) is used to construct data from the given config.
    input_builder:
        Optional callable that accepts a `Config` and returns `InputData`. Ignored when
        `data` is supplied.
    reporter:
        Custom reporter instance. When `enable_reporting` is True and no reporter is
        provided, the default `Reporter` is used.
    validate_config:
        Toggle to run `Config.validate()` before building inputs.
    enable_reporting:
        When False, skips reporter pre/post hooks even if a reporter is provided.
    rules:
        Optional iterable describing which rule classes to use (and any per-rule
        settings). `None` falls back to the library defaults.

    Returns
    -------
    AssignmentResult
        The allocation outcome. Failures are reported in `errors`, not raised.
    """
    cfg_obj = config or cfg

    if validate_config:
        cfg_obj.validate()

    input_data = data
    if input_data is None:
        builder = input_builder or default_input_builder
        input_data = builder(cfg_obj)

    active_reporter = reporter if enable_reporting else None
    if active_reporter is None and enable_reporting:
        active_reporter = Reporter(
            cfg_obj,
            num_print_examples=cfg_obj.NUM_PRINT_EXAMPLES,
            enable_plots=cfg_obj.ENABLE_PLOTS,
        )

    if active_reporter is not None:
        active_reporter.pre_allocate(input_data.faculty, input_data.structure)

    result = allocate(
        input_data.faculty,
        input_data.structure,
        input_data.unavailability,
        rules=rules,
    )

    if active_reporter is not None:
        active_reporter.post_allocate(result, input_data)

    if cfg_obj.EXPORT_CSV:
        _export_reports(result, cfg_obj, input_data)

    return result


def main() -> AssignmentResult:
    """CLI entry point."""
    return run_allocation(
        config=cfg,
        validate_config=True,
        input_builder=default_input_builder,
        reporter=Reporter(cfg, num_print_examples=cfg.NUM_PRINT_EXAMPLES),
        enable_reporting=cfg.ENABLE_REPORTING,
    )


def _export_reports(res: AssignmentResult, cfg: Config, data: InputData) -> None:
    if not res.success:
        return

    adapter = PandasResultAdapter()
    out_dir = Path(cfg.OUTPUT_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)

    df_assign = adapter.df_assignments(res)
    slots = {(s.day, s.slot): s for s in data.structure.duty_slots}
    dates = [slots[(d, s)].iso_date for d, s in zip(df_assign.day, df_assign.slot)]
    df_assign.insert(2, "date", dates)
    df_assign.sort_values(["day", "slot", "role", "faculty_id"]).to_csv(
        out_dir / "assignments.csv", index=False
    )
    adapter.df_overview(res).to_csv(out_dir / "faculty_overview.csv", index=False)
    adapter.df_violations(res).to_csv(out_dir / "violations.csv", index=False)

    write_assignments_json(out_dir / "assignment.json", res, data.structure)


if __name__ == "__main__":
    main()
