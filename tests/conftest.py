"""Shared test fixtures for orgaudit tests."""

from pathlib import Path
from typing import Callable

import pytest

from orgaudit.hierarchy.models import Record
from orgaudit.hierarchy.org_model import OrgModel

HEADER = "Id,firstName,lastName,salary,managerId"


def make_record(
    employee_id: int,
    salary: int = 50000,
    manager_id: int | None = None,
    first_name: str | None = None,
    last_name: str = "Test",
) -> Record:
    return Record(
        id=employee_id,
        first_name=first_name or f"Emp{employee_id}",
        last_name=last_name,
        salary=salary,
        manager_id=manager_id,
    )


def chain(length: int, ceo_id: int = 1) -> list[Record]:
    """CEO plus ``length`` employees, each reporting to the previous one."""
    records = [make_record(ceo_id, salary=200000)]
    for offset in range(1, length + 1):
        employee_id = ceo_id + offset
        records.append(make_record(employee_id, salary=200000 - offset * 10000, manager_id=employee_id - 1))
    return records


@pytest.fixture
def write_roster(tmp_path: Path) -> Callable[..., Path]:
    """Write CSV lines to a temporary roster file and return its path."""

    def _write(*lines: str, header: bool = True, name: str = "employees.csv") -> Path:
        path = tmp_path / name
        content = [HEADER, *lines] if header else list(lines)
        path.write_text("\n".join(content) + "\n")
        return path

    return _write


@pytest.fixture
def sample_model() -> OrgModel:
    """Small org: CEO 123, two managers, one deeper employee."""
    return OrgModel([
        make_record(123, 60000, first_name="Joe", last_name="Doe"),
        make_record(124, 45000, 123, first_name="Martin", last_name="Chekov"),
        make_record(125, 47000, 123, first_name="Bob", last_name="Ronstad"),
        make_record(300, 50000, 124, first_name="Alice", last_name="Hasacat"),
        make_record(305, 34000, 300, first_name="Brett", last_name="Hardleaf"),
    ])
