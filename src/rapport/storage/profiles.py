"""Report profiles stored as ``<slug>/_profile.md``."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from pathlib import Path

from rapport.model.report import (
    DEFAULT_CADENCE,
    ManagerInfo,
    Report,
    ReportProfile,
    ReportType,
)
from rapport.slug import name_to_slug
from rapport.storage.errors import (
    FrontmatterError,
    InvalidWorkspaceError,
    ProfileNotFoundError,
)
from rapport.storage.frontmatter import parse_frontmatter, load_header, render_document
from rapport.storage.workspace import PROFILE_FILE, TEAM_DIR

logger = logging.getLogger(__name__)


def _optional_str(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_date(value) -> date | None:
    if value is None or isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        return None


def profile_from_dict(data: dict, default_frequency: str = DEFAULT_CADENCE) -> ReportProfile:
    """Build a profile from header data; ``name`` is the only required key.

    A profile without a cadence gets ``default_frequency``.
    """
    name = _optional_str(data.get("name"))
    if not name:
        raise FrontmatterError("Profile is missing 'name'")

    report_type = ReportType.parse(data.get("report_type"))
    manager_info = None
    raw_info = data.get("manager_info")
    if isinstance(raw_info, dict):
        manager_info = ManagerInfo(team_name=_optional_str(raw_info.get("team_name")))
    elif report_type.is_manager:
        manager_info = ManagerInfo()

    frequency = data.get("meeting_frequency", data.get("cadence")) or default_frequency

    children = data.get("children") or []
    if not isinstance(children, list):
        children = [children]

    skills = data.get("skills") or {}
    if not isinstance(skills, dict):
        skills = {}

    return ReportProfile(
        name=name,
        title=_optional_str(data.get("title")),
        start_date=_optional_date(data.get("start_date")),
        level=_optional_str(data.get("level")),
        meeting_frequency=str(frequency),
        active=bool(data.get("active", True)),
        report_type=report_type,
        manager_info=manager_info,
        birthday=_optional_date(data.get("birthday")),
        partner=_optional_str(data.get("partner")),
        children=[str(c) for c in children],
        skills={
            str(category): {str(k): str(v) for k, v in (values or {}).items()}
            for category, values in skills.items()
            if isinstance(values, dict) or values is None
        },
        skills_updated=_optional_date(data.get("skills_updated")),
        color=_optional_str(data.get("color")),
    )


def profile_to_dict(profile: ReportProfile) -> dict:
    data: dict = {"name": profile.name}
    if profile.title:
        data["title"] = profile.title
    if profile.start_date:
        data["start_date"] = profile.start_date
    if profile.level:
        data["level"] = profile.level
    data["meeting_frequency"] = profile.meeting_frequency
    data["active"] = profile.active
    data["report_type"] = profile.report_type.value
    if profile.manager_info is not None:
        data["manager_info"] = {"team_name": profile.manager_info.team_name}
    if profile.birthday:
        data["birthday"] = profile.birthday
    if profile.partner:
        data["partner"] = profile.partner
    if profile.children:
        data["children"] = list(profile.children)
    if profile.skills:
        data["skills"] = profile.skills
    if profile.skills_updated:
        data["skills_updated"] = profile.skills_updated
    if profile.color:
        data["color"] = profile.color
    return data


def load_report(
    report_dir: Path,
    manager_slug: str | None = None,
    default_frequency: str = DEFAULT_CADENCE,
) -> Report:
    profile_path = report_dir / PROFILE_FILE
    if not profile_path.exists():
        raise ProfileNotFoundError(str(profile_path))

    header, body = parse_frontmatter(profile_path.read_text(encoding="utf-8"))
    if header is None:
        raise FrontmatterError(f"Profile missing frontmatter: {profile_path}")

    profile = profile_from_dict(load_header(header), default_frequency)
    return Report(
        slug=report_dir.name,
        path=report_dir,
        profile=profile,
        notes_content=body,
        manager_slug=manager_slug,
    )


def load_report_with_manager(
    report_dir: Path, manager_slug: str, default_frequency: str = DEFAULT_CADENCE
) -> Report:
    return load_report(report_dir, manager_slug, default_frequency)


def save_report(report: Report) -> None:
    report.path.mkdir(parents=True, exist_ok=True)
    content = render_document(profile_to_dict(report.profile), report.notes_content)
    (report.path / PROFILE_FILE).write_text(content, encoding="utf-8")


def create_report(workspace_path: Path, name: str, profile: ReportProfile) -> Report:
    """Create ``<workspace>/<slug>/_profile.md``; managers also get ``team/``."""
    slug = name_to_slug(name)
    if not slug:
        raise InvalidWorkspaceError(f"Cannot derive a directory name from {name!r}")

    report_dir = workspace_path / slug
    if report_dir.exists():
        raise InvalidWorkspaceError(f"Report directory already exists: {slug}")

    notes = f"# {name}\n\n## Background\n\n## Working Style\n\n## Notes\n"
    report = Report(slug=slug, path=report_dir, profile=profile, notes_content=notes)
    save_report(report)
    if report.is_manager:
        (report_dir / TEAM_DIR).mkdir(exist_ok=True)

    logger.info("Created report %s at %s", name, report_dir)
    return report


def archive_report(report: Report) -> Report:
    """Write an inactive copy of the report and return it. Nothing is deleted."""
    archived = replace(report, profile=replace(report.profile, active=False))
    save_report(archived)
    logger.info("Archived report %s", report.slug)
    return archived
