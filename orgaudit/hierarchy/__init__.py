"""Org hierarchy analysis.

Loads an employee roster, builds the reporting tree, and checks manager
pay bands and reporting line depth.
"""

import logging

from orgaudit.config import AnalysisConfig
from orgaudit.errors import MalformedRecordError
from orgaudit.hierarchy.compensation import SalaryPolicyAnalyzer
from orgaudit.hierarchy.ingest import FilePath, load_roster, read_roster_frame
from orgaudit.hierarchy.models import DepthFinding, Record, SalaryDirection, SalaryFinding
from orgaudit.hierarchy.org_model import OrgModel
from orgaudit.hierarchy.report import AnalysisReport
from orgaudit.hierarchy.reporting_lines import DepthAnalyzer
from orgaudit.utils.types import AnalysisStatus
from orgaudit.utils.validators import (
    validate_referential_integrity,
    validate_single_root,
    validate_unique,
)

logger = logging.getLogger(__name__)


def analyze(model: OrgModel, config: AnalysisConfig | None = None) -> AnalysisReport:
    """Run both analyzers over an already built model."""
    config = config or AnalysisConfig()
    depth = DepthAnalyzer(config)
    salary_findings = SalaryPolicyAnalyzer(config).analyze(model)
    depth_findings = depth.analyze(model)
    return AnalysisReport(model, salary_findings, depth_findings, list(depth.warnings))


def run(path: FilePath, config: AnalysisConfig | None = None) -> AnalysisReport:
    """Load a roster file and analyze it."""
    records = load_roster(path)
    model = OrgModel(records)
    return analyze(model, config)


def validate(path: FilePath) -> dict[str, str | int | list[str]]:
    """Pre-flight check of a roster file without building the model."""
    try:
        frame = read_roster_frame(path)
    except FileNotFoundError as exc:
        return {"status": AnalysisStatus.ERROR, "message": str(exc), "errors": []}
    except MalformedRecordError as exc:
        return {
            "status": AnalysisStatus.ERROR,
            "message": "Malformed roster",
            "errors": [str(exc)],
        }

    checks = [
        validate_unique(frame, ["id"]),
        validate_single_root(frame, "manager_id"),
        validate_referential_integrity(frame, frame, "manager_id", "id"),
    ]
    errors = [e for check in checks for e in check["errors"]]
    if errors:
        logger.warning("Roster %s failed %d check(s)", path, len(errors))
        return {
            "status": AnalysisStatus.ERROR,
            "message": "Inconsistent hierarchy",
            "errors": errors,
        }
    return {"status": AnalysisStatus.OK, "rows": len(frame)}
