from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Sequence

from invigilation.input_data import InputData
from invigilation.models import AssignmentResult, ExamStructure, Faculty
from invigilation.precheck import PrecheckResult, precheck_allocation
from invigilation.reporting.adapters import PandasResultAdapter, ResultAdapter
from invigilation.reporting.plots import show_duty_load_chart, show_slot_fill_heatmap
from invigilation.reporting.text_report import (
    ReportDocument,
    render_text_report,
    set_active_report,
)


class Reporter:
    """High-level orchestrator: runs pre-check confirmations and renders reports."""

    def __init__(
        self,
        cfg: Any,
        adapter: ResultAdapter | None = None,
        num_print_examples: int = 6,
        enable_plots: bool = True,
    ) -> None:
        """
        cfg must expose:
          - OUTPUT_DIR
          - PROMPT_ON_FAILED_PRECHECK
          - WRITE_PDF_REPORT
        """
        self.cfg = cfg
        self.adapter: ResultAdapter = adapter or PandasResultAdapter()
        self.num_print_examples = num_print_examples
        self.enable_plots = enable_plots

    @property
    def out_dir(self) -> Path:
        return Path(getattr(self.cfg, "OUTPUT_DIR", "outputs"))

    def pre_allocate(
        self, faculty: Sequence[Faculty], structure: ExamStructure
    ) -> PrecheckResult:
        """
        Print the pre-check. When it fails and the config asks for it, prompt
        before continuing; declining stops the run.
        """
        res = precheck_allocation(faculty, structure, verbose=True)
        if not res.valid and getattr(self.cfg, "PROMPT_ON_FAILED_PRECHECK", False):
            proceed = self._prompt_yes_no_default_yes(
                "Pre-check failed. Continue anyway?"
            )
            if not proceed:
                raise SystemExit("Stopped by user after failed pre-check.")
        return res

    def render_text_report(self, res: AssignmentResult, data: InputData) -> None:
        """Public entry point for callers that want text reporting only."""
        render_text_report(
            self.adapter,
            res,
            data.faculty,
            data.structure,
            num_print_examples=self.num_print_examples,
        )

    def post_allocate(self, res: AssignmentResult, data: InputData) -> None:
        """Render textual report (and optional plots) after allocating."""
        write_pdf = bool(getattr(self.cfg, "WRITE_PDF_REPORT", True))
        report_doc = ReportDocument(self.out_dir / "report.pdf") if write_pdf else None
        set_active_report(report_doc)
        try:
            self.render_text_report(res, data)
            if not self.enable_plots or not self.adapter.success(res):
                return
            show_duty_load_chart(
                res,
                self.adapter,
                enable_plot=self.enable_plots,
                out_dir=self.out_dir,
            )
            show_slot_fill_heatmap(
                data.structure,
                res,
                self.adapter,
                enable_plot=self.enable_plots,
                out_dir=self.out_dir,
            )
        finally:
            set_active_report(None)
            if report_doc is not None:
                report_doc.write()

    # ---------- helpers ----------

    def _prompt_yes_no_default_yes(self, msg: str) -> bool:
        """Prompt '[Y/n]' and return True for yes (default)."""
        try:
            if not sys.stdin or not sys.stdin.isatty():
                print(f"{msg} [Y/n] (non-interactive -> default: Y)")
                return True

            while True:
                resp = input(f"{msg} [Y/n]: ").strip().lower()
                if resp in ("", "y", "yes"):
                    return True
                if resp in ("n", "no"):
                    return False
                print("Please type 'y' or 'n'.")
        except (EOFError, KeyboardInterrupt):
            print("\nAborted by user.")
            return False
