from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

from ..errors import ConfigError
from .presets import PRESETS, PROJECT_CONFIG, canonical_preset_name
from .schema import Applicability, CommitPolicy, RuleSpec, Severity, merge

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".commitpolicy.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "COMMITPOLICY_CONFIG"


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def parse_rule_entry(name: str, raw: Any, *, source: str | None = None) -> RuleSpec:
    """
    Turn a ``[severity, when?, options?]`` array into a RuleSpec.

    Raises ConfigError for anything the evaluator could not act on.
    """
    if not isinstance(raw, (list, tuple)) or not raw:
        raise ConfigError("rule entry must be a non-empty array [severity, when?, options?]", rule=name, source=source)
    if len(raw) > 3:
        raise ConfigError(f"rule entry has {len(raw)} elements, expected at most 3", rule=name, source=source)

    level = raw[0]
    if isinstance(level, bool) or not isinstance(level, int):
        raise ConfigError(f"severity must be 0, 1 or 2, got {level!r}", rule=name, source=source)
    try:
        severity = Severity(level)
    except ValueError as e:
        raise ConfigError(f"severity must be 0, 1 or 2, got {level!r}", rule=name, source=source) from e

    applicability = Applicability.ALWAYS
    if len(raw) > 1:
        when = raw[1]
        if not isinstance(when, str):
            raise ConfigError(f"applicability must be 'always' or 'never', got {when!r}", rule=name, source=source)
        try:
            applicability = Applicability(when.strip().lower())
        except ValueError as e:
            raise ConfigError(
                f"applicability must be 'always' or 'never', got {when!r}", rule=name, source=source
            ) from e

    options = _freeze(raw[2]) if len(raw) > 2 else None
    return RuleSpec(severity=severity, applicability=applicability, options=options)


def parse_rules(raw_rules: Any, *, source: str | None = None) -> dict[str, RuleSpec]:
    from ..rules import RULES, check_options

    if raw_rules is None:
        return {}
    if not isinstance(raw_rules, Mapping):
        raise ConfigError("'rules' must be a table of rule name -> array", source=source)

    rules: dict[str, RuleSpec] = {}
    for name, raw in raw_rules.items():
        rule_name = str(name).strip()
        if rule_name not in RULES:
            raise ConfigError("no implementation for this rule", rule=rule_name, source=source)
        spec = parse_rule_entry(rule_name, raw, source=source)
        # Options of disabled rules are never read.
        if spec.severity > Severity.OFF:
            problem = check_options(RULES[rule_name], spec.options)
            if problem:
                raise ConfigError(problem, rule=rule_name, source=source)
        rules[rule_name] = spec
    return rules


def _extends_list(raw: Any, *, source: str | None) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw]
    if not isinstance(raw, (list, tuple)) or not all(isinstance(x, str) for x in raw):
        raise ConfigError("'extends' must be a list of preset names", source=source)
    return list(raw)


def policy_from_config(config: Mapping[str, Any], *, source: str | None = None) -> CommitPolicy:
    """
    Build a CommitPolicy from the public ``extends`` / ``rules`` shape.

    Bases are merged left to right, then the local rules on top.
    """
    if not isinstance(config, Mapping):
        raise ConfigError("configuration must be a table", source=source)

    policy = CommitPolicy()
    extends: list[str] = []
    for name in _extends_list(config.get("extends"), source=source):
        preset = canonical_preset_name(name)
        if preset is None:
            raise ConfigError(f"unknown base policy {name!r} (known: {', '.join(sorted(PRESETS))})", source=source)
        logger.debug("extending %s", preset)
        base = policy_from_config(PRESETS[preset], source=preset)
        policy = merge(policy, base.rules)
        extends.append(preset)

    policy = merge(policy, parse_rules(config.get("rules"), source=source))

    default_ignores = config.get("default_ignores", True)
    if not isinstance(default_ignores, bool):
        raise ConfigError("'default_ignores' must be true or false", source=source)

    return CommitPolicy(rules=policy.rules, extends=tuple(extends), default_ignores=default_ignores)


def _read_toml(path: Path) -> dict[str, Any]:
    import tomllib

    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid TOML: {e}", source=str(path)) from e
    except OSError as e:
        raise ConfigError(f"cannot read config: {e}", source=str(path)) from e


def _pyproject_section(data: Mapping[str, Any]) -> Mapping[str, Any] | None:
    tool = data.get("tool")
    if not isinstance(tool, Mapping):
        return None
    section = tool.get("commitpolicy")
    return section if isinstance(section, Mapping) else None


def load_policy(path: Path) -> CommitPolicy:
    """
    Load a policy from TOML.

    ``pyproject.toml`` files are read from their ``[tool.commitpolicy]`` table.
    """
    data = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        section = _pyproject_section(data)
        if section is None:
            raise ConfigError("missing [tool.commitpolicy] table", source=str(path))
        data = dict(section)
    logger.debug("loaded config from %s", path)
    return policy_from_config(data, source=str(path))


def find_config(start: Path) -> Path | None:
    """Find the nearest config file by walking up from ``start``."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        candidate = p / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = p / PYPROJECT_FILENAME
        if not pyproject.is_file():
            continue
        try:
            data = _read_toml(pyproject)
        except ConfigError as e:
            logger.debug("skipping unreadable %s: %s", pyproject, e)
            continue
        if _pyproject_section(data) is not None:
            return pyproject
    return None


def load_project_policy(path: Path | None = None, *, cwd: Path | None = None) -> CommitPolicy:
    """
    Resolve the active policy.

    Order: explicit path, $COMMITPOLICY_CONFIG, discovered config file,
    then the built-in project policy.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
        if env_path:
            path = Path(env_path)
    if path is None:
        path = find_config(cwd or Path.cwd())

    if path is None:
        logger.debug("no config file found, using built-in project policy")
        return policy_from_config(PROJECT_CONFIG, source="builtin")

    if not path.is_file():
        raise ConfigError("config file not found", source=str(path))
    return load_policy(path)
