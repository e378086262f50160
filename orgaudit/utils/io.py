"""File I/O helpers for configuration and exported findings."""

import tomllib
from pathlib import Path

import pandas as pd
from rich.console import Console

type FilePath = str | Path

console = Console(stderr=True)


def write_output(df: pd.DataFrame, path: FilePath, fmt: str | None = None) -> Path:
    """Write a DataFrame as CSV or JSON; the suffix picks the format by default."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt or path.suffix.lstrip(".").lower():
        case "csv":
            df.to_csv(path, index=False)
        case "json":
            df.to_json(path, orient="records", indent=2)
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {len(df)} rows to {path}")
    return path


def load_toml_config(path: FilePath) -> dict:
    with open(path, "rb") as f:
        return tomllib.load(f)
