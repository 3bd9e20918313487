"""Core utility functions for Loss Modeling Tools.

This module provides shared utilities used across the project.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_RESULTS_ROOT = Path("results")
REPORT_STEM = "validation_report"


def get_report_paths(results_root: Path = DEFAULT_RESULTS_ROOT) -> tuple[Path, Path]:
    """Get text and JSON report paths under a results directory.

    Constructs file paths following the standard naming convention:
    - Text: {results_root}/validation_report.txt
    - JSON: {results_root}/validation_report.json

    Args:
        results_root: Directory holding pipeline results (defaults to ./results).

    Returns:
        A tuple of (text_path, json_path).

    Examples:
        >>> text_path, json_path = get_report_paths(Path("results"))
        >>> print(text_path)
        results/validation_report.txt
        >>> print(json_path)
        results/validation_report.json
    """
    text_path = results_root / f"{REPORT_STEM}.txt"
    json_path = results_root / f"{REPORT_STEM}.json"
    return text_path, json_path
