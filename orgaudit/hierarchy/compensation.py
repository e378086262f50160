"""Manager pay analysis against a band derived from direct reports' pay."""

import logging

import numpy as np

from orgaudit.config import AnalysisConfig
from orgaudit.hierarchy.models import EmployeeID, SalaryDirection, SalaryFinding
from orgaudit.hierarchy.org_model import OrgModel

logger = logging.getLogger(__name__)

type SalaryBand = tuple[float, float]  # (low, high)


class SalaryPolicyAnalyzer:
    """Flag managers earning outside ``[avg * min_factor, avg * max_factor]``.

    ``avg`` is the mean salary of the manager's direct reports. A salary
    exactly on either bound is compliant.
    """

    def __init__(self, config: AnalysisConfig | None = None):
        config = config or AnalysisConfig()
        self.min_factor = config.min_factor
        self.max_factor = config.max_factor

    def band_for(self, model: OrgModel, manager_id: EmployeeID) -> SalaryBand | None:
        reports = model.reports_of(manager_id)
        if not reports:
            return None
        average = float(np.mean([r.salary for r in reports]))
        return average * self.min_factor, average * self.max_factor

    def analyze(self, model: OrgModel) -> list[SalaryFinding]:
        findings: list[SalaryFinding] = []

        for manager_id in model.direct_reports:
            manager = model.get(manager_id)
            if manager is None:
                logger.debug("Skipping unknown manager %d", manager_id)
                continue

            low, high = self.band_for(model, manager_id)
            salary = manager.salary

            if salary < low:
                findings.append(
                    SalaryFinding(manager_id, SalaryDirection.UNDER, low, salary, low - salary)
                )
            elif salary > high:
                findings.append(
                    SalaryFinding(manager_id, SalaryDirection.OVER, high, salary, salary - high)
                )

        logger.info(
            "Analyzed %d managers, %d outside salary band",
            len(model.direct_reports),
            len(findings),
        )
        return findings
