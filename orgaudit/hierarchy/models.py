"""Roster records, analysis findings and the pandera roster schema."""

from dataclasses import asdict, dataclass
from enum import StrEnum

import pandera as pa
from pandera import Check, Column

type EmployeeID = int
type SalaryAmount = int

ROSTER_COLUMNS = ["id", "first_name", "last_name", "salary", "manager_id"]


@dataclass(frozen=True)
class Record:
    """One employee row. ``manager_id`` is None only for the CEO."""

    id: EmployeeID
    first_name: str
    last_name: str
    salary: SalaryAmount
    manager_id: EmployeeID | None = None

    @property
    def is_root(self) -> bool:
        return self.manager_id is None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class SalaryDirection(StrEnum):
    UNDER = "under"
    OVER = "over"


@dataclass(frozen=True)
class SalaryFinding:
    manager_id: EmployeeID
    direction: SalaryDirection
    expected_bound: float
    actual: SalaryAmount
    difference: float

    def to_dict(self) -> dict[str, int | float | str]:
        data = asdict(self)
        data["direction"] = str(self.direction)
        return data


@dataclass(frozen=True)
class DepthFinding:
    employee_id: EmployeeID
    manager_count: int
    max_allowed: int
    excess: int

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


roster_schema = pa.DataFrameSchema(
    {
        "id": Column("Int64", nullable=False),
        "first_name": Column(str, Check.str_length(min_value=1)),
        "last_name": Column(str, Check.str_length(min_value=1)),
        "salary": Column("Int64", Check.greater_than_or_equal_to(0), nullable=False),
        "manager_id": Column("Int64", nullable=True),
    },
    strict=True,
    ordered=True,
    coerce=True,
)
