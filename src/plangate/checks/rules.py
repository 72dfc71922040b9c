"""Load and query phase-rules.yaml."""

from pathlib import Path

import yaml

from plangate.paths import phase_rules_path


def load_phase_rules(path: Path | str | None = None) -> dict:
    """Load the phase rules file.

    Args:
        path: Path to a rules file. Defaults to ``PLANGATE_PHASE_RULES``
            or the bundled rules.

    Returns:
        Parsed rules dict.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the document is not a mapping.
    """
    rules_path = Path(path) if path else phase_rules_path()
    with open(rules_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"phase rules at {rules_path} are not a YAML mapping")

    return data


def supported_phases(rules: dict) -> list[str]:
    """Phase identifiers defined in the rules, sorted."""
    return sorted(str(p) for p in (rules.get("phases", {}) or {}))


def get_phase(rules: dict, phase: str) -> dict | None:
    """Rules for one phase, or None when the phase is unknown."""
    phases = rules.get("phases", {}) or {}
    entry = phases.get(phase)
    if entry is None:
        return None
    return entry or {}


def get_required_files(phase_rules: dict) -> list[str]:
    return list(phase_rules.get("required", []) or [])


def get_checks(phase_rules: dict) -> list[str]:
    return list(phase_rules.get("checks", []) or [])


def get_prior_gate(phase_rules: dict) -> str:
    return phase_rules.get("prior_gate", "") or ""


def get_repo_documentation_rules(rules: dict) -> dict:
    """Extract the per-repo documentation maturity section."""
    return rules.get("repo_documentation", {}) or {}


def get_repo_traceability_rules(rules: dict) -> dict:
    """Extract the per-repo traceability bundle section."""
    return rules.get("repo_traceability", {}) or {}
