"""Validation report rendering.

ReportGenerator turns an ordered mapping of check name -> ValidationResult
(or a ValidationReport) into the plain-text report of the pipeline, prints
it, and persists it. A JSON rendering of the same content is available for
downstream tooling.
"""

from __future__ import annotations

import json
import logging
import math
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, List, Mapping, Optional, TextIO, Union

from .config import DEFAULT_REPORT_PATH
from .models import ValidationReport, ValidationResult

BANNER = "=" * 80
PASS_MARK = "✅"
FAIL_MARK = "❌"
WARN_MARK = "⚠️"

Results = Union[ValidationReport, Mapping[str, ValidationResult]]


class ReportGenerator:
    """Render validation results as text lines or JSON."""

    def __init__(self, decimals: int = 4) -> None:
        self.decimals = decimals

    def generate(self, results: Results) -> List[str]:
        """Build the report lines.

        Args:
            results: Check name -> result, in the order sections should appear.

        Returns:
            Report lines (without trailing newlines).

        Examples:
            >>> lines = ReportGenerator().generate({"predictions": result})
            >>> lines[-2]
            '✅ ALL CHECKS PASSED'
        """
        results = _as_mapping(results)
        lines = [BANNER, "VALIDATION REPORT", BANNER, ""]

        for check_name, result in results.items():
            lines.append(f"--- {check_name.upper()} ---")
            lines.append(f"{PASS_MARK} PASSED" if result.valid else f"{FAIL_MARK} FAILED")

            if result.errors:
                lines.append("")
                lines.append("Errors:")
                for err in result.errors:
                    lines.append(f"  {FAIL_MARK} {err}")

            if result.warnings:
                lines.append("")
                lines.append("Warnings:")
                for warn in result.warnings:
                    lines.append(f"  {WARN_MARK}  {warn}")

            details = result.details
            if details:
                lines.append("")
                lines.append(f"{result.payload_label}:")
                for name, value in details.items():
                    lines.append(f"  {name}: {self.format_value(value)}")

            lines.append("")

        all_valid = all(r.valid for r in results.values())
        lines.append(BANNER)
        if all_valid:
            lines.append(f"{PASS_MARK} ALL CHECKS PASSED")
        else:
            lines.append(f"{FAIL_MARK} SOME CHECKS FAILED - REVIEW ERRORS ABOVE")
        lines.append(BANNER)
        return lines

    def format_value(self, value: Any) -> str:
        """Format a detail value; numbers are rounded, (min, max) pairs joined."""
        if isinstance(value, (tuple, list)):
            return ", ".join(self.format_value(v) for v in value)
        if value is None:
            return "NA"
        if isinstance(value, bool):
            return str(value)
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            if math.isnan(value):
                return "NaN"
            if math.isinf(value):
                return "Inf" if value > 0 else "-Inf"
            rounded = round(value, self.decimals)
            return str(int(rounded)) if rounded.is_integer() else repr(rounded)
        return str(value)

    def to_json(self, results: Results) -> str:
        """Generate a JSON report of the same results.

        Returns:
            Formatted JSON string with metadata, summary counts and one entry
            per check (NaN/Inf details are serialized as null).
        """
        results = _as_mapping(results)
        failed = [name for name, r in results.items() if not r.valid]
        report_data = {
            "metadata": {
                "generated_at": datetime.now().isoformat(),
            },
            "summary": {
                "total_checks": len(results),
                "passed_checks": len(results) - len(failed),
                "failed_checks": len(failed),
                "errors": sum(len(r.errors) for r in results.values()),
                "warnings": sum(len(r.warnings) for r in results.values()),
                "all_valid": not failed,
            },
            "checks": [{"name": name, **r.to_dict()} for name, r in results.items()],
        }
        return json.dumps(report_data, indent=2, ensure_ascii=False)


def print_report(report: List[str], stream: Optional[TextIO] = None) -> None:
    """Write report lines to a console stream (stdout by default)."""
    stream = stream or sys.stdout
    for line in report:
        stream.write(f"{line}\n")


def save_report(
    report: List[str], filepath: Union[str, Path] = DEFAULT_REPORT_PATH
) -> Path:
    """Persist report lines as a UTF-8 text file, creating parent directories.

    Returns:
        The path written to.
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(report))
        f.write("\n")
    logging.info("Validation report saved to: %s", path)
    return path


def save_json(content: str, filepath: Union[str, Path]) -> Path:
    """Persist a JSON report, creating parent directories."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    logging.info("JSON report saved: %s", path)
    return path


def _as_mapping(results: Results) -> Mapping[str, ValidationResult]:
    if isinstance(results, ValidationReport):
        return results.results
    return results
