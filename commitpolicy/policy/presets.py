"""Built-in base policies, addressable by name from ``extends``."""

from __future__ import annotations

from typing import Any

CONFIG_CONVENTIONAL: dict[str, Any] = {
    "rules": {
        "body-leading-blank": [1, "always"],
        "body-max-line-length": [2, "always", 100],
        "footer-leading-blank": [1, "always"],
        "footer-max-line-length": [2, "always", 100],
        "header-max-length": [2, "always", 100],
        "header-trim": [2, "always"],
        "subject-case": [2, "never", ["sentence-case", "start-case", "pascal-case", "upper-case"]],
        "subject-empty": [2, "never"],
        "subject-full-stop": [2, "never", "."],
        "type-case": [2, "always", "lower-case"],
        "type-empty": [2, "never"],
        "type-enum": [
            2,
            "always",
            ["build", "chore", "ci", "docs", "feat", "fix", "perf", "refactor", "revert", "style", "test"],
        ],
    },
}

# The policy this repository enforces on its own history.
PROJECT_CONFIG: dict[str, Any] = {
    "extends": ["config-conventional"],
    "rules": {
        "type-enum": [
            2,
            "always",
            [
                "feat",  # New feature
                "fix",  # Bug fix
                "perf",  # Performance improvement
                "refactor",  # Code refactoring
                "test",  # Adding or updating tests
                "docs",  # Documentation changes
                "chore",  # Maintenance tasks
                "ci",  # CI/CD changes
                "build",  # Build system changes
                "revert",  # Reverting changes
            ],
        ],
        "subject-case": [2, "never", ["upper-case"]],
        "subject-empty": [2, "never"],
        "subject-full-stop": [2, "never", "."],
        "type-case": [2, "always", "lower-case"],
        "type-empty": [2, "never"],
    },
}

PRESETS: dict[str, dict[str, Any]] = {
    "config-conventional": CONFIG_CONVENTIONAL,
}

PRESET_ALIASES: dict[str, str] = {
    "@commitlint/config-conventional": "config-conventional",
}


def canonical_preset_name(name: str) -> str | None:
    key = name.strip()
    key = PRESET_ALIASES.get(key, key)
    return key if key in PRESETS else None
