"""Shared type definitions."""

from enum import StrEnum

type ValidationOutcome = dict[str, bool | str | list[str]]
type FindingRow = dict[str, int | float | str]


class AnalysisStatus(StrEnum):
    OK = "ok"
    ERROR = "error"


class OutputFormat(StrEnum):
    TEXT = "text"
    TABLE = "table"
    JSON = "json"
