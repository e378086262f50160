"""Shared utilities for roster analysis."""

from orgaudit.utils.io import load_toml_config, write_output
from orgaudit.utils.types import AnalysisStatus, OutputFormat, ValidationOutcome
from orgaudit.utils.validators import (
    validate_referential_integrity,
    validate_single_root,
    validate_unique,
)
