"""Lint command implementation."""

import json
from typing import Iterable

from rich.console import Console

from ..lint import LintOutcome, RuleViolation, lint_messages
from ..policy import CommitPolicy, Severity


def run_lint(
    policy: CommitPolicy,
    messages: Iterable[tuple[str | None, str]],
    fail_on: str = "error",
    output_json: bool = False,
    quiet: bool = False,
) -> int:
    """Lint commit messages against a policy.

    Args:
        policy: Resolved policy to enforce
        messages: ``(ref, text)`` pairs; ref is a commit sha or None
        fail_on: Exit with error if this level or higher found ("error" or "warning")
        output_json: Output results as JSON instead of human-readable
        quiet: Only print messages that have findings

    Returns:
        Exit code (0 = success, 1 = failures found)
    """
    console = Console(stderr=True)

    outcomes = lint_messages(policy, messages)

    counts = {"error": 0, "warning": 0, "parse": 0}
    for outcome in outcomes:
        counts["error"] += len(outcome.errors)
        counts["warning"] += len(outcome.warnings)
        if outcome.parse_error:
            counts["parse"] += 1

    if output_json:
        _output_json(outcomes, counts)
    else:
        _print_human_output(console, outcomes, counts, quiet=quiet)

    # Determine exit code
    if counts["parse"] > 0 or counts["error"] > 0:
        return 1
    if fail_on == "warning" and counts["warning"] > 0:
        return 1
    return 0


def _violation_to_dict(violation: RuleViolation) -> dict:
    return {
        "level": violation.level,
        "rule": violation.rule,
        "message": violation.message,
    }


def _outcome_to_dict(outcome: LintOutcome) -> dict:
    """Convert LintOutcome to JSON-serializable dict."""
    return {
        "ref": outcome.ref,
        "header": outcome.header,
        "valid": outcome.valid,
        "ignored": outcome.ignored,
        "parse_error": outcome.parse_error,
        "errors": [_violation_to_dict(v) for v in outcome.errors],
        "warnings": [_violation_to_dict(v) for v in outcome.warnings],
    }


def _output_json(outcomes: list[LintOutcome], counts: dict[str, int]) -> None:
    output = {
        "valid": all(o.valid for o in outcomes),
        "results": [_outcome_to_dict(o) for o in outcomes],
        "summary": {
            "messages": len(outcomes),
            "ignored": sum(1 for o in outcomes if o.ignored),
            "errors": counts["error"],
            "warnings": counts["warning"],
            "parse_errors": counts["parse"],
        },
    }
    print(json.dumps(output, indent=2))


def _print_human_output(
    console: Console,
    outcomes: list[LintOutcome],
    counts: dict[str, int],
    *,
    quiet: bool = False,
) -> None:
    for outcome in outcomes:
        has_findings = bool(outcome.violations or outcome.parse_error)
        if quiet and not has_findings:
            continue

        label = f"{outcome.ref[:10]} " if outcome.ref else ""
        console.print(f"⧗ input: {label}{outcome.header}", style="dim", markup=False)

        if outcome.ignored:
            console.print("  ↷ ignored", style="dim")
            continue

        if outcome.parse_error:
            console.print(f"  ✗ PARSE: {outcome.parse_error}", style="bold red", markup=False)
            continue

        for v in sorted(outcome.violations, key=lambda x: (-int(x.severity), x.rule)):
            if v.severity == Severity.ERROR:
                console.print(f"  ✗ {v.message} [{v.rule}]", style="bold red", markup=False)
            else:
                console.print(f"  ⚠ {v.message} [{v.rule}]", style="yellow", markup=False)

        if not outcome.violations:
            console.print("  ✓ passed", style="green")

    console.print()
    status_style = "bold red" if counts["error"] or counts["parse"] else ("yellow" if counts["warning"] else "bold green")
    console.print(
        f"{len(outcomes)} message(s): {counts['error']} error(s), {counts['warning']} warning(s), "
        f"{counts['parse']} unparsable",
        style=status_style,
    )
