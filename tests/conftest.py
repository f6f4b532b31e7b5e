"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from commitpolicy.policy import CommitPolicy, policy_from_config
from commitpolicy.policy.presets import CONFIG_CONVENTIONAL, PROJECT_CONFIG


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of config discovery."""
    monkeypatch.delenv("COMMITPOLICY_CONFIG", raising=False)


@pytest.fixture
def project_policy() -> CommitPolicy:
    """The policy this repository enforces."""
    return policy_from_config(PROJECT_CONFIG)


@pytest.fixture
def conventional_policy() -> CommitPolicy:
    """The bare config-conventional base rule set."""
    return policy_from_config(CONFIG_CONVENTIONAL)


@pytest.fixture
def write_file(tmp_path: Path):
    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
