"""Check command implementation."""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from ..engine import validate
from ..errors import ValidationErrors


def load_records(data_path: Path) -> list[Any]:
    """Read record payloads from a JSON or TOML file.

    JSON may hold one object or a list of objects. TOML holds either a
    ``[[records]]`` array of tables or a single top-level table.
    """
    text = data_path.read_text(encoding="utf-8")
    if data_path.suffix.lower() == ".toml":
        data: Any = tomllib.loads(text)
        records = data.get("records")
        # Only an array of tables is a batch; a list-valued field named
        # "records" belongs to a single record.
        if isinstance(records, list) and records and all(isinstance(r, dict) for r in records):
            return records
        return [data]

    data = json.loads(text)
    if isinstance(data, list):
        return data
    return [data]


def _check_one(record_type: type, payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        return {"valid": False, "construction_error": f"expected a mapping, got {type(payload).__name__}", "errors": []}
    try:
        record = record_type(**payload)
    except (TypeError, ValueError) as e:
        return {"valid": False, "construction_error": str(e), "errors": []}

    errors = validate(record)
    return {"valid": errors is None, "construction_error": None, "errors": _errors_to_dicts(errors)}


def _errors_to_dicts(errors: ValidationErrors | None) -> list[dict[str, Any]]:
    if errors is None:
        return []
    return [
        {
            "field": e.field,
            "error": type(e).__name__,
            "message": e.message,
            "position": e.position,
        }
        for e in errors
    ]


def run_check(
    record_type: type,
    payloads: list[Any],
    source: Path,
    target: str,
    output_json: bool = False,
    fail_fast: bool = False,
) -> int:
    """Validate every record payload loaded from a data file.

    Args:
        record_type: Dataclass used to construct each record
        payloads: Record payloads, as returned by load_records()
        source: File the payloads were read from, echoed in output
        target: Original ``module:Class`` reference, echoed in output
        output_json: Output results as JSON instead of human-readable
        fail_fast: Stop at the first invalid record

    Returns:
        Exit code (0 = all records valid, 1 = at least one invalid)
    """
    console = Console(stderr=True)

    console.print(f"Checking {len(payloads)} record(s) from {source} against {target}...", style="dim")

    reports: list[dict[str, Any]] = []
    for index, payload in enumerate(payloads):
        report = {"index": index, **_check_one(record_type, payload)}
        reports.append(report)
        if fail_fast and not report["valid"]:
            break

    invalid = sum(1 for r in reports if not r["valid"])

    if output_json:
        output = {
            "target": target,
            "records": reports,
            "summary": {
                "records": len(reports),
                "valid": len(reports) - invalid,
                "invalid": invalid,
            },
        }
        print(json.dumps(output, indent=2))
    else:
        _print_human_output(console, record_type, reports)

    return 1 if invalid else 0


def _print_human_output(console: Console, record_type: type, reports: list[dict[str, Any]]) -> None:
    name = record_type.__name__
    for report in reports:
        label = f"{name} #{report['index']}"
        if report["valid"]:
            console.print(f"✓ {label}", style="bold green")
            continue

        if report["construction_error"]:
            console.print(f"✗ {label}: could not construct record", style="bold red")
            console.print(f"    {escape(report['construction_error'])}", style="dim")
            continue

        errors = report["errors"]
        console.print(f"✗ {label}: {len(errors)} failure(s)", style="bold red")
        for e in errors:
            where = e["field"]
            if e["position"] is not None:
                where += f"[{e['position']}]"
            console.print(f"    {e['error']}: {escape(where)} - {escape(e['message'])}", style="red")

    invalid = sum(1 for r in reports if not r["valid"])
    console.print()
    if invalid:
        console.print(f"{invalid} of {len(reports)} record(s) invalid", style="bold red")
    else:
        console.print(f"All {len(reports)} record(s) valid", style="bold green")
