"""Scenario reports for CI logs and PR comments."""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List

from .metadata import PLUGIN_NAME
from .types import ScenarioResult, ScenarioSuiteResult, ScenarioSummary


def result_to_dict(result: ScenarioResult) -> Dict[str, Any]:
    return {
        "name": result.name,
        "passed": result.passed,
        "duration_ms": result.duration_ms,
        "message": result.message,
    }


def summary_to_dict(summary: ScenarioSummary) -> Dict[str, Any]:
    """Counts plus every scenario result, grouped by suite."""
    return {
        "total": summary.total,
        "passed": summary.passed,
        "failed": summary.failed,
        "duration_ms": summary.duration_ms,
        "suites": [
            {
                "name": suite.name,
                "total": suite.total,
                "passed": suite.passed,
                "failed": suite.failed,
                "results": [result_to_dict(r) for r in suite.results],
            }
            for suite in summary.suites
        ],
    }


def _suite_section(suite: ScenarioSuiteResult) -> List[str]:
    lines = [
        f"## {suite.name.title()} ({suite.passed}/{suite.total})",
        "",
        "| Scenario | Result | Time |",
        "|----------|--------|------|",
    ]
    lines.extend(f"| {r.name} | {'pass' if r.passed else 'FAIL'} | {r.duration_ms}ms |" for r in suite.results)
    lines.append("")

    for result in suite.results:
        if result.passed:
            continue
        lines.extend([f"<details><summary>{result.name}</summary>", "", "```"])
        lines.append(result.message or "(no message)")
        lines.extend(["```", "", "</details>", ""])

    return lines


def generate_markdown_report(summary: ScenarioSummary, bridge_name: str = PLUGIN_NAME) -> str:
    """
    Render a markdown report.

    Args:
        summary: Scenario summary
        bridge_name: Name reported by the bridge under test

    Returns:
        Markdown text
    """
    verdict = "passed" if summary.failed == 0 else f"{summary.failed} failed"
    lines = [
        f"# {bridge_name} scenarios: {verdict}",
        "",
        f"- Scenarios: {summary.passed}/{summary.total} passed",
        f"- Duration: {summary.duration_ms}ms",
        f"- Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')}",
        "",
    ]

    for suite in summary.suites:
        lines.extend(_suite_section(suite))

    return "\n".join(lines)


def generate_json_report(summary: ScenarioSummary, bridge_name: str = PLUGIN_NAME) -> Dict[str, Any]:
    report = summary_to_dict(summary)
    report["bridge_name"] = bridge_name
    report["timestamp"] = datetime.now(timezone.utc).isoformat()
    return report


def save_report(
    summary: ScenarioSummary, output_path: str, format: str = "markdown", bridge_name: str = PLUGIN_NAME
) -> None:
    """
    Write a report next to the run.

    Args:
        summary: Scenario summary
        output_path: Destination file
        format: 'markdown' or 'json'
        bridge_name: Name reported by the bridge under test

    Raises:
        ValueError: If the format is not supported
    """
    renderers = {
        "markdown": lambda: generate_markdown_report(summary, bridge_name),
        "json": lambda: json.dumps(generate_json_report(summary, bridge_name), indent=2),
    }
    if format not in renderers:
        raise ValueError(f"Unsupported report format: {format}")

    with open(output_path, "w") as f:
        f.write(renderers[format]())
