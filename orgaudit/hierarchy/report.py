"""Render analysis findings as text, rich tables or JSON.

All numbers come straight from the findings; nothing is recomputed here.
"""

import json
from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from orgaudit.errors import BrokenReferenceWarning
from orgaudit.hierarchy.models import DepthFinding, Record, SalaryDirection, SalaryFinding
from orgaudit.hierarchy.org_model import OrgModel
from orgaudit.utils.types import OutputFormat

NO_SALARY_FINDINGS = "No salary discrepancies found among managers."
NO_DEPTH_FINDINGS = "No excessively long reporting lines found."


@dataclass(frozen=True)
class AnalysisReport:
    model: OrgModel
    salary_findings: list[SalaryFinding]
    depth_findings: list[DepthFinding]
    warnings: list[BrokenReferenceWarning]

    @property
    def has_findings(self) -> bool:
        return bool(self.salary_findings or self.depth_findings)


def salary_message(finding: SalaryFinding, manager: Record) -> str:
    prefix = f"Manager {manager.full_name} (ID: {manager.id})"
    match finding.direction:
        case SalaryDirection.UNDER:
            return (
                f"{prefix} earns less than they should. "
                f"Expected at least {finding.expected_bound:.2f}, earns {finding.actual}. "
                f"Deficit: {finding.difference:.2f}"
            )
        case SalaryDirection.OVER:
            return (
                f"{prefix} earns more than they should. "
                f"Expected no more than {finding.expected_bound:.2f}, earns {finding.actual}. "
                f"Excess: {finding.difference:.2f}"
            )


def depth_message(finding: DepthFinding, employee: Record) -> str:
    return (
        f"Employee {employee.full_name} (ID: {employee.id}) has a reporting line that is too long. "
        f"Has {finding.manager_count} managers to CEO (max allowed: {finding.max_allowed}). "
        f"Excess: {finding.excess}"
    )


def findings_frame(findings: Sequence[SalaryFinding | DepthFinding]) -> pd.DataFrame:
    """Flatten findings into a DataFrame, one row per finding."""
    return pd.DataFrame([f.to_dict() for f in findings])


def export_frame(report: AnalysisReport) -> pd.DataFrame:
    """Both finding kinds in one frame, tagged by a ``kind`` column."""
    frames = [
        findings_frame(findings).assign(kind=kind)
        for kind, findings in (
            ("salary", report.salary_findings),
            ("reporting_line", report.depth_findings),
        )
        if findings
    ]
    if not frames:
        return pd.DataFrame(columns=["kind"])
    return pd.concat(frames, ignore_index=True)


def render_text(report: AnalysisReport) -> str:
    model = report.model
    lines = ["--- Manager Salary Analysis ---"]
    lines += [salary_message(f, model.by_id[f.manager_id]) for f in report.salary_findings]
    if not report.salary_findings:
        lines.append(NO_SALARY_FINDINGS)

    lines += ["", "--- Reporting Line Analysis ---"]
    lines += [depth_message(f, model.by_id[f.employee_id]) for f in report.depth_findings]
    if not report.depth_findings:
        lines.append(NO_DEPTH_FINDINGS)

    for warning in report.warnings:
        lines.append(f"Warning: {warning}")
    return "\n".join(lines)


def _salary_table(report: AnalysisReport) -> Table:
    table = Table(title="Manager Salary Analysis")
    table.add_column("ID", justify="right")
    table.add_column("Manager", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Expected", justify="right")
    table.add_column("Actual", justify="right")
    table.add_column("Difference", justify="right")

    for f in report.salary_findings:
        manager = report.model.by_id[f.manager_id]
        status = "[yellow]UNDER[/yellow]" if f.direction is SalaryDirection.UNDER else "[red]OVER[/red]"
        table.add_row(
            str(f.manager_id),
            escape(manager.full_name),
            status,
            f"{f.expected_bound:.2f}",
            str(f.actual),
            f"{f.difference:.2f}",
        )
    return table


def _depth_table(report: AnalysisReport) -> Table:
    table = Table(title="Reporting Line Analysis")
    table.add_column("ID", justify="right")
    table.add_column("Employee", style="cyan")
    table.add_column("Managers", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Excess", justify="right", style="red")

    for f in report.depth_findings:
        employee = report.model.by_id[f.employee_id]
        table.add_row(
            str(f.employee_id),
            escape(employee.full_name),
            str(f.manager_count),
            str(f.max_allowed),
            str(f.excess),
        )
    return table


def render_table(report: AnalysisReport) -> str:
    buf = Console(file=None, force_terminal=False, width=120)
    with buf.capture() as capture:
        if report.salary_findings:
            buf.print(_salary_table(report))
        else:
            buf.print(NO_SALARY_FINDINGS)
        if report.depth_findings:
            buf.print(_depth_table(report))
        else:
            buf.print(NO_DEPTH_FINDINGS)
        for warning in report.warnings:
            buf.print(f"[yellow]Warning: {escape(str(warning))}[/yellow]")
    return capture.get()


def render_json(report: AnalysisReport) -> str:
    document = {
        "summary": {
            "employees": len(report.model),
            "managers": len(report.model.managers()),
            "ceo_id": report.model.root.id,
            "salary_findings": len(report.salary_findings),
            "depth_findings": len(report.depth_findings),
            "warnings": len(report.warnings),
        },
        "salary": [f.to_dict() for f in report.salary_findings],
        "reporting_lines": [f.to_dict() for f in report.depth_findings],
        "warnings": [w.to_dict() for w in report.warnings],
    }
    return json.dumps(document, indent=2)


def render(report: AnalysisReport, output_format: OutputFormat | str = OutputFormat.TEXT) -> str:
    match OutputFormat(output_format):
        case OutputFormat.JSON:
            return render_json(report)
        case OutputFormat.TABLE:
            return render_table(report)
        case OutputFormat.TEXT:
            return render_text(report)
