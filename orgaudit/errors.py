"""Error taxonomy for roster loading, model construction and traversal."""


class OrgAuditError(Exception):
    """Base class for every error raised by orgaudit."""


class DuplicateIdError(OrgAuditError):
    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__(f"Duplicate employee ID found: {employee_id}")


class InvalidHierarchyError(OrgAuditError):
    """Raised when the roster does not have exactly one root."""

    def __init__(self, root_count: int):
        self.root_count = root_count
        super().__init__(
            f"Expected exactly one employee without a manager (CEO), but found {root_count}"
        )


class MalformedRecordError(OrgAuditError):
    """A roster row has the wrong shape or unparseable values."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class ConfigError(OrgAuditError):
    pass


class BrokenReferenceWarning(UserWarning):
    """A manager chain could not be followed up to the root.

    Collected per traversal, never raised by the analyzers.
    """

    def __init__(self, employee_id: int, manager_id: int, reason: str = "missing"):
        self.employee_id = employee_id
        self.manager_id = manager_id
        self.reason = reason
        match reason:
            case "cycle":
                detail = f"Manager chain for employee {employee_id} loops back through {manager_id}"
            case "detached":
                detail = f"Manager chain for employee {employee_id} ends at {manager_id}, not the CEO"
            case _:
                detail = f"Manager with ID {manager_id} not found for employee {employee_id}"
        super().__init__(detail)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BrokenReferenceWarning):
            return NotImplemented
        return (self.employee_id, self.manager_id, self.reason) == (
            other.employee_id,
            other.manager_id,
            other.reason,
        )

    def __hash__(self) -> int:
        return hash((self.employee_id, self.manager_id, self.reason))

    def to_dict(self) -> dict[str, int | str]:
        return {
            "employee_id": self.employee_id,
            "manager_id": self.manager_id,
            "reason": self.reason,
            "message": str(self),
        }
