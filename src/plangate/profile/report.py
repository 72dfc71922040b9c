"""Render the planning behavior resolution report.

The report is an audit artifact: a fixed Markdown template listing every
expected control with its resolved value or ``<unset>``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from plangate.paths import rel_posix

UNSET = "<unset>"

# ── Expected controls, grouped by domain ──────────────────────────

CONTROL_GROUPS: dict[str, tuple[str, ...]] = {
    "plan": (
        "profile_id",
        "plan_storage_mode",
        "plan_directory",
        "plan_index_file",
        "plan_story_file_pattern",
        "plan_traceability_required",
    ),
    "topology": (
        "topology.default",
        "topology.service_per_repo_best_practice",
    ),
    "contracts": (
        "contracts.contract_first_required",
        "contracts.require_openapi_for_http",
    ),
    "workstreams": ("workstreams.dependency_graph_required",),
    "reviews": ("reviews.code_review_feedback_loop_required",),
    "integration": ("integration.orchestration_requires_all_prerequisites_passed",),
    "evidence": ("evidence.ai_usage_metrics_required_when_available",),
    "storage": (
        "storage.strategy_required",
        "storage.primary_system_of_record",
        "storage.cache_policy_required",
        "storage.object_storage_for_blobs_required",
        "storage.search_index_for_discovery_allowed",
    ),
    "eventing": (
        "eventing.async_eventing_policy",
        "eventing.delivery_semantics_default",
        "eventing.ordering_scope_default",
        "eventing.schema_versioning_required",
        "eventing.idempotent_consumers_required",
    ),
    "production": (
        "production.scalability_budget_required",
        "production.performance_slo_required",
        "production.maintainability_controls_required",
        "production.upgrade_strategy_required",
        "production.zero_downtime_upgrades_required",
        "production.operability_slos_required",
    ),
}

CONTROL_KEYS: tuple[str, ...] = tuple(
    key for keys in CONTROL_GROUPS.values() for key in keys
)

REPORT_TEMPLATE = """\
# Planning Behavior Resolution

- Timestamp (UTC): {timestamp}
- Target root: {root}
- Profile source: {profile_source}

## Resolved controls
{controls_block}

## Notes
- Values are resolved from the selected profile source for this run.
- Missing scalar values are marked as <unset> and should be treated as planning blockers where required by workflow gates.
"""


@dataclass(frozen=True)
class ResolvedControl:
    """A control key paired with its scalar value, or ``None`` when unset."""

    key: str
    value: str | None

    @property
    def display(self) -> str:
        return self.value if self.value is not None else UNSET

    def line(self) -> str:
        return f"- {self.key}: {self.display}"


def resolve_controls(
    values: dict[str, str],
    keys: tuple[str, ...] = CONTROL_KEYS,
) -> list[ResolvedControl]:
    """Pair each expected key with its value; blank values count as unset."""
    resolved = []
    for key in keys:
        value = values.get(key)
        if value is not None and not value.strip():
            value = None
        resolved.append(ResolvedControl(key, value))
    return resolved


def format_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp at second precision."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def render_report(
    root: Path,
    profile_path: Path,
    values: dict[str, str],
    now: datetime | None = None,
) -> str:
    """Render the Markdown report for a parsed profile."""
    controls = resolve_controls(values)
    return REPORT_TEMPLATE.format(
        timestamp=format_timestamp(now),
        root=root,
        profile_source=rel_posix(root, profile_path),
        controls_block="\n".join(c.line() for c in controls),
    )
