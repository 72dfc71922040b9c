"""Tests for the profile module."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from plangate.errors import ConfigurationError, ProfileNotFoundError
from plangate.profile.locator import FALLBACK_CANDIDATES, locate_profile
from plangate.profile.parser import parse_scalars, read_profile
from plangate.profile.report import (
    CONTROL_KEYS,
    UNSET,
    format_timestamp,
    render_report,
    resolve_controls,
)
from plangate.profile.resolver import DEFAULT_OUT, resolve

FIXTURES = Path(__file__).parent / "fixtures"
FIXED_NOW = datetime(2026, 3, 1, 12, 30, 5, tzinfo=timezone.utc)


def _without_timestamp(report: str) -> list[str]:
    return [line for line in report.splitlines() if not line.startswith("- Timestamp")]


class TestParser:
    def test_nested_scalars(self):
        values = parse_scalars(
            "storage:\n"
            "  cache_policy_required: \"true\"\n"
            "  primary_system_of_record: postgres\n"
            "eventing:\n"
            "  delivery_semantics_default: at-least-once\n"
        )
        assert values == {
            "storage.cache_policy_required": "true",
            "storage.primary_system_of_record": "postgres",
            "eventing.delivery_semantics_default": "at-least-once",
        }

    def test_dedent_closes_parent(self):
        values = parse_scalars("a:\n  b: 1\nc: 2\n")
        assert values == {"a.b": "1", "c": "2"}

    def test_sibling_parent_at_same_indent(self):
        values = parse_scalars("a:\n  x:\n    y: 1\n  z: 2\n")
        assert values == {"a.x.y": "1", "a.z": "2"}

    def test_flat_profile(self):
        values = parse_scalars("profile_id: p1\nplan_directory: docs/plans\n")
        assert values == {"profile_id": "p1", "plan_directory": "docs/plans"}

    def test_quotes_and_whitespace_stripped(self):
        values = parse_scalars("a:   'single'  \nb: \"double\"\n")
        assert values == {"a": "single", "b": "double"}

    def test_skips_comments_lists_and_blank_lines(self):
        values = parse_scalars(
            "# heading\n"
            "\n"
            "engines:\n"
            "  - postgres\n"
            "  # comment inside\n"
            "  primary: postgres\n"
        )
        assert values == {"engines.primary": "postgres"}

    def test_malformed_lines_are_ignored(self):
        values = parse_scalars("no colon here\n: orphan value\nok: yes\n")
        assert values == {"ok": "yes"}

    def test_value_split_on_first_colon(self):
        values = parse_scalars("url: http://example.test:8080/x\n")
        assert values == {"url": "http://example.test:8080/x"}

    def test_quoted_empty_value_opens_parent(self):
        values = parse_scalars("a: \"\"\n  b: 1\n")
        assert values == {"a.b": "1"}

    def test_tab_indentation(self):
        values = parse_scalars("a:\n\tb: 1\nc: 2\n")
        assert values == {"a.b": "1", "c": "2"}

    def test_last_write_wins(self):
        values = parse_scalars("a: 1\na: 2\n")
        assert values == {"a": "2"}

    def test_read_fixture(self):
        values = read_profile(FIXTURES / "planning-behavior-profile.yaml")
        assert values["profile_id"] == "demo-platform"
        assert values["plan_index_file"] == "docs/plans/index.md"
        assert values["topology.service_per_repo_best_practice"] == "true"
        assert "storage.allowed_engines" not in values

    def test_read_non_utf8_bytes(self, tmp_path):
        path = tmp_path / "profile.yaml"
        path.write_bytes(b"# caf\xe9 owner\nprofile_id: p1\nowner: r\xe9mi\n")
        values = read_profile(path)
        assert values["profile_id"] == "p1"
        assert values["owner"] == "r\ufffdmi"

    def test_read_missing_file(self):
        with pytest.raises(FileNotFoundError):
            read_profile("/nonexistent/planning-behavior-profile.yaml")


class TestLocator:
    def test_fallback_candidate(self, profile_root):
        path = locate_profile(profile_root)
        assert path == profile_root / FALLBACK_CANDIDATES[0]

    def test_fallback_order(self, tmp_path, write):
        write(FALLBACK_CANDIDATES[2], "a: 1\n")
        write(FALLBACK_CANDIDATES[1], "a: 1\n")
        assert locate_profile(tmp_path) == tmp_path / FALLBACK_CANDIDATES[1]

    def test_explicit_relative_to_root_wins(self, profile_root, write):
        explicit = write("config/profile.yaml", "a: 1\n")
        path = locate_profile(profile_root, "config/profile.yaml")
        assert path == explicit

    def test_explicit_relative_to_cwd(self, profile_root, write, tmp_path_factory, monkeypatch):
        write("local.yaml", "b: 2\n")
        workdir = tmp_path_factory.mktemp("workdir")
        (workdir / "local.yaml").write_text("a: 1\n")
        monkeypatch.chdir(workdir)
        path = locate_profile(profile_root, "local.yaml")
        assert path.resolve() == (workdir / "local.yaml").resolve()

    def test_root_joined_when_not_under_cwd(self, profile_root, write, tmp_path_factory, monkeypatch):
        explicit = write("local.yaml", "a: 1\n")
        monkeypatch.chdir(tmp_path_factory.mktemp("empty"))
        assert locate_profile(profile_root, "local.yaml") == explicit

    def test_explicit_absolute(self, profile_root, tmp_path_factory):
        other = tmp_path_factory.mktemp("elsewhere") / "p.yaml"
        other.write_text("a: 1\n")
        assert locate_profile(profile_root, str(other)) == other

    def test_missing_explicit_falls_back(self, profile_root):
        path = locate_profile(profile_root, "does/not/exist.yaml")
        assert path == profile_root / FALLBACK_CANDIDATES[0]

    def test_directory_is_not_a_profile(self, tmp_path):
        (tmp_path / FALLBACK_CANDIDATES[0]).mkdir(parents=True)
        with pytest.raises(ProfileNotFoundError):
            locate_profile(tmp_path)

    def test_not_found(self, tmp_path):
        with pytest.raises(ProfileNotFoundError, match="planning behavior profile not found"):
            locate_profile(tmp_path)

    def test_not_found_with_explicit(self, tmp_path):
        with pytest.raises(ProfileNotFoundError):
            locate_profile(tmp_path, "missing.yaml")


class TestReport:
    def test_resolve_controls_marks_unset(self):
        controls = resolve_controls({"profile_id": "p1", "plan_directory": "  "})
        by_key = {c.key: c for c in controls}
        assert by_key["profile_id"].display == "p1"
        assert by_key["plan_directory"].value is None
        assert by_key["plan_directory"].display == UNSET
        assert [c.key for c in controls] == list(CONTROL_KEYS)

    def test_control_keys_unique(self):
        assert len(CONTROL_KEYS) == len(set(CONTROL_KEYS)) == 30

    def test_format_timestamp(self):
        assert format_timestamp(FIXED_NOW) == "2026-03-01T12:30:05Z"

    def test_render_report(self, tmp_path):
        profile = tmp_path / FALLBACK_CANDIDATES[0]
        values = {
            "storage.cache_policy_required": "true",
            "storage.primary_system_of_record": "postgres",
            "eventing.delivery_semantics_default": "at-least-once",
        }
        report = render_report(tmp_path, profile, values, now=FIXED_NOW)
        assert report.startswith("# Planning Behavior Resolution\n")
        assert "- Timestamp (UTC): 2026-03-01T12:30:05Z" in report
        assert f"- Target root: {tmp_path}" in report
        assert f"- Profile source: {FALLBACK_CANDIDATES[0]}" in report
        assert "- storage.cache_policy_required: true\n" in report
        assert "- storage.primary_system_of_record: postgres\n" in report
        assert "- eventing.delivery_semantics_default: at-least-once\n" in report
        assert "- storage.search_index_for_discovery_allowed: <unset>\n" in report

    def test_profile_outside_root(self, tmp_path_factory):
        root = tmp_path_factory.mktemp("root")
        profile = tmp_path_factory.mktemp("other") / "p.yaml"
        report = render_report(root, profile, {}, now=FIXED_NOW)
        assert f"- Profile source: ../{profile.parent.name}/p.yaml\n" in report

    def test_rendering_is_deterministic(self, tmp_path):
        profile = tmp_path / "p.yaml"
        values = {"profile_id": "p1"}
        first = render_report(tmp_path, profile, values, now=FIXED_NOW)
        second = render_report(tmp_path, profile, dict(values), now=FIXED_NOW)
        assert first == second


class TestResolve:
    def test_writes_default_report(self, profile_root):
        result = resolve(profile_root, now=FIXED_NOW)
        assert result.out_path == profile_root / DEFAULT_OUT
        assert result.out_path.read_text() == result.report
        assert "- profile_id: demo-platform" in result.report
        assert "- eventing.ordering_scope_default: per-aggregate" in result.report
        assert "- production.operability_slos_required: <unset>" in result.report

    def test_rerun_differs_only_in_timestamp(self, profile_root):
        first = resolve(profile_root, now=FIXED_NOW).report
        second = resolve(profile_root, now=datetime(2027, 1, 1, tzinfo=timezone.utc)).report
        assert first != second
        assert _without_timestamp(first) == _without_timestamp(second)

    def test_overwrites_previous_report(self, profile_root):
        out = profile_root / DEFAULT_OUT
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text("stale")
        resolve(profile_root, now=FIXED_NOW)
        assert "stale" not in out.read_text()

    def test_absolute_out(self, profile_root, tmp_path_factory):
        out = tmp_path_factory.mktemp("reports") / "nested" / "report.md"
        result = resolve(profile_root, out=str(out), now=FIXED_NOW)
        assert result.out_path == out
        assert out.is_file()

    def test_explicit_profile_used(self, profile_root, write):
        write("custom.yaml", "profile_id: custom\n")
        result = resolve(profile_root, profile_file="custom.yaml", now=FIXED_NOW)
        assert result.values == {"profile_id": "custom"}
        assert "- Profile source: custom.yaml" in result.report

    def test_missing_profile_writes_nothing(self, tmp_path):
        with pytest.raises(ProfileNotFoundError):
            resolve(tmp_path)
        assert not (tmp_path / DEFAULT_OUT).exists()
        assert not (tmp_path / "docs").exists()

    def test_blank_out_rejected(self, profile_root):
        with pytest.raises(ConfigurationError):
            resolve(profile_root, out="  ")

    def test_blank_root_rejected(self):
        with pytest.raises(ConfigurationError):
            resolve("  ")

    def test_missing_root_rejected(self):
        with pytest.raises(ConfigurationError, match="--target-root is required"):
            resolve(None)
