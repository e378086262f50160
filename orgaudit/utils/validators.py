"""Roster frame checks that report problems instead of raising."""

import pandas as pd

from orgaudit.utils.types import AnalysisStatus, ValidationOutcome


def _outcome(errors: list[str]) -> ValidationOutcome:
    match errors:
        case []:
            return {"valid": True, "status": AnalysisStatus.OK, "errors": []}
        case errors:
            return {"valid": False, "status": AnalysisStatus.ERROR, "errors": errors}


def validate_unique(df: pd.DataFrame, columns: list[str]) -> ValidationOutcome:
    """Check that specified columns form a unique key."""
    duplicated = df[df.duplicated(subset=columns, keep=False)]
    if duplicated.empty:
        return _outcome([])

    keys = sorted(duplicated[columns].drop_duplicates().itertuples(index=False, name=None))
    return _outcome([
        f"Duplicate {', '.join(columns)}: {', '.join(str(v) for v in key)}" for key in keys
    ])


def validate_single_root(df: pd.DataFrame, column: str) -> ValidationOutcome:
    """Check that exactly one row has no value in ``column``."""
    root_count = int(df[column].isna().sum())
    match root_count:
        case 1:
            return _outcome([])
        case n:
            return _outcome([f"Expected exactly one row without '{column}', found {n}"])


def validate_referential_integrity(
    child: pd.DataFrame,
    parent: pd.DataFrame,
    child_key: str,
    parent_key: str,
) -> ValidationOutcome:
    """Validate that all non-null child keys exist in parent."""
    orphans = set(child[child_key].dropna().unique()) - set(parent[parent_key].dropna().unique())

    match len(orphans):
        case 0:
            return _outcome([])
        case n:
            sample = sorted(int(o) for o in orphans)[:5]
            return _outcome([f"Found {n} orphan '{child_key}' value(s). Sample: {sample}"])
