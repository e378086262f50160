"""Org hierarchy model — index roster records and identify the CEO."""

import logging
from collections import defaultdict
from collections.abc import Iterable, Iterator
from types import MappingProxyType

from orgaudit.errors import DuplicateIdError, InvalidHierarchyError
from orgaudit.hierarchy.models import EmployeeID, Record

logger = logging.getLogger(__name__)

type ReportsByManager = dict[EmployeeID, tuple[Record, ...]]


def _index_by_id(records: Iterable[Record]) -> dict[EmployeeID, Record]:
    by_id: dict[EmployeeID, Record] = {}
    for record in records:
        if record.id in by_id:
            raise DuplicateIdError(record.id)
        by_id[record.id] = record
    return by_id


def _group_reports(records: Iterable[Record]) -> ReportsByManager:
    """Build a manager_id -> direct reports map, reports sorted by id."""
    grouped: dict[EmployeeID, list[Record]] = defaultdict(list)
    for record in records:
        if record.manager_id is not None:
            grouped[record.manager_id].append(record)
    return {
        manager_id: tuple(sorted(reports, key=lambda r: r.id))
        for manager_id, reports in sorted(grouped.items())
    }


class OrgModel:
    """Validated, read-only view of a roster.

    Construction fails on duplicate ids or when the number of employees
    without a manager is not exactly one. Manager ids that point at no
    known employee are kept; traversals report them.
    """

    def __init__(self, records: Iterable[Record]):
        records = list(records)
        by_id = _index_by_id(records)

        roots = [r for r in records if r.manager_id is None]
        if len(roots) != 1:
            raise InvalidHierarchyError(len(roots))

        self._by_id = MappingProxyType(dict(sorted(by_id.items())))
        self._direct_reports = MappingProxyType(_group_reports(records))
        self._root = roots[0]

        logger.info(
            "Built org model: %d employees, %d managers, CEO %d",
            len(self._by_id),
            len(self._direct_reports),
            self._root.id,
        )

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> "OrgModel":
        return cls(records)

    @property
    def by_id(self) -> MappingProxyType[EmployeeID, Record]:
        return self._by_id

    @property
    def direct_reports(self) -> MappingProxyType[EmployeeID, tuple[Record, ...]]:
        return self._direct_reports

    @property
    def root(self) -> Record:
        return self._root

    def get(self, employee_id: EmployeeID) -> Record | None:
        return self._by_id.get(employee_id)

    def reports_of(self, manager_id: EmployeeID) -> tuple[Record, ...]:
        return self._direct_reports.get(manager_id, ())

    def managers(self) -> list[Record]:
        """Every known employee with at least one direct report, by id."""
        return [self._by_id[m] for m in self._direct_reports if m in self._by_id]

    def employees(self) -> list[Record]:
        return list(self._by_id.values())

    def dangling_manager_ids(self) -> list[EmployeeID]:
        """Manager ids referenced by some record but absent from the roster."""
        return [m for m in self._direct_reports if m not in self._by_id]

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, employee_id: object) -> bool:
        return employee_id in self._by_id

    def __iter__(self) -> Iterator[Record]:
        return iter(self._by_id.values())
