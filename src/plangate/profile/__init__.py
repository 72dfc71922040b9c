"""Profile module — locate, parse and report the planning behavior profile."""

from plangate.profile.locator import locate_profile
from plangate.profile.parser import parse_scalars, read_profile
from plangate.profile.report import render_report, resolve_controls
from plangate.profile.resolver import resolve, Resolution

__all__ = [
    "locate_profile",
    "parse_scalars",
    "read_profile",
    "render_report",
    "resolve_controls",
    "resolve",
    "Resolution",
]
