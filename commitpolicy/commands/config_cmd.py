"""Inspect the active policy and the rule library."""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table

from ..policy import CommitPolicy, Severity
from ..rules import RULES


def run_print_config(policy: CommitPolicy, *, output_json: bool = False) -> int:
    if output_json:
        print(json.dumps(policy.to_config(), indent=2))
        return 0

    console = Console()
    extends = ", ".join(policy.extends) or "(none)"
    table = Table(title=f"Policy (extends: {extends})")
    table.add_column("Rule", style="bold")
    table.add_column("Severity")
    table.add_column("When")
    table.add_column("Options")

    severity_styles = {Severity.ERROR: "red", Severity.WARNING: "yellow", Severity.OFF: "dim"}
    for name in sorted(policy.rules):
        spec = policy.rules[name]
        options = "" if spec.options is None else json.dumps(spec.to_config()[2])
        table.add_row(
            name,
            f"[{severity_styles[spec.severity]}]{spec.severity.label}[/]",
            spec.applicability.value,
            options,
        )
    console.print(table)
    return 0


def run_list_rules() -> int:
    console = Console()
    table = Table(title="Available rules")
    table.add_column("Rule", style="bold")
    table.add_column("Condition")
    table.add_column("Options", style="dim")
    for name in sorted(RULES):
        rule = RULES[name]
        table.add_row(name, rule.description, "" if rule.options == "none" else rule.options)
    console.print(table)
    return 0
