"""Reporting line depth — count managers between each employee and the CEO."""

import logging

from orgaudit.config import AnalysisConfig
from orgaudit.errors import BrokenReferenceWarning
from orgaudit.hierarchy.models import DepthFinding, Record
from orgaudit.hierarchy.org_model import OrgModel

logger = logging.getLogger(__name__)


class DepthAnalyzer:
    """Flag employees with more than ``max_depth`` managers up to the CEO.

    Chains that hit an unknown manager id or loop back on themselves are
    reported in ``warnings`` and left out of the findings.
    """

    def __init__(self, config: AnalysisConfig | None = None):
        config = config or AnalysisConfig()
        self.max_depth = config.max_depth
        self.warnings: list[BrokenReferenceWarning] = []

    def _walk(self, model: OrgModel, employee: Record) -> int | BrokenReferenceWarning:
        count = 0
        current = employee
        visited = {employee.id}

        while current.manager_id is not None:
            count += 1
            manager_id = current.manager_id
            manager = model.get(manager_id)

            if manager is None:
                return BrokenReferenceWarning(employee.id, manager_id, "missing")
            if manager.id == model.root.id:
                return count
            if manager.id in visited:
                return BrokenReferenceWarning(employee.id, manager_id, "cycle")

            visited.add(manager.id)
            current = manager

        # Only the root has no manager; reaching any other top is a broken chain
        return BrokenReferenceWarning(employee.id, current.id, "detached")

    def manager_count(self, model: OrgModel, employee: Record) -> int | None:
        """Managers between ``employee`` and the CEO, or None if indeterminate."""
        if employee.id == model.root.id:
            return 0
        match self._walk(model, employee):
            case int(count):
                return count
            case _:
                return None

    def analyze(self, model: OrgModel) -> list[DepthFinding]:
        self.warnings = []
        findings: list[DepthFinding] = []

        for employee in model.employees():
            if employee.id == model.root.id:
                continue

            match self._walk(model, employee):
                case BrokenReferenceWarning() as warning:
                    logger.warning("%s", warning)
                    self.warnings.append(warning)
                case count if count > self.max_depth:
                    findings.append(
                        DepthFinding(employee.id, count, self.max_depth, count - self.max_depth)
                    )
                case _:
                    pass

        logger.info(
            "Analyzed %d reporting lines, %d too long, %d broken",
            len(model) - 1,
            len(findings),
            len(self.warnings),
        )
        return findings
