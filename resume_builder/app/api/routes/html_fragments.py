import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from resume_builder.app.api.routes.route_logic.editor_session import (
    EditorSession,
    SaveStatus,
)
from resume_builder.app.core.templates import get_template
from resume_builder.app.models.content import (
    BulletRecord,
    BulletReference,
    PositionRecord,
    PositionReference,
    RecordResolver,
    ResumeContent,
    ResumeSection,
)
from resume_builder.app.models.resume_model import Resume as DatabaseResume

log = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "templates"
env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=True)


def _date_format_filter(value: date | None, format_string: str = "%b %Y") -> str:
    """Jinja2 filter to format a date as a string."""
    if value is None:
        return ""
    return value.strftime(format_string)


env.filters["date_format"] = _date_format_filter


@dataclass(frozen=True)
class RenderedItem:
    """An item slot whose reference resolved to a record."""

    kind: str
    ref_id: str
    record: BulletRecord | PositionRecord


@dataclass(frozen=True)
class RenderedSection:
    """A section with its resolvable items, ready for a template."""

    id: str
    title: str
    items: list[RenderedItem]
    is_empty: bool


def _resolve_section(section: ResumeSection, resolver: RecordResolver) -> RenderedSection:
    """
    Resolve a section's references for rendering.

    Args:
        section (ResumeSection): The section to render.
        resolver (RecordResolver): Looks up bullet and position records.

    Returns:
        RenderedSection: The section with dangling references left out.

    Notes:
        1. `is_empty` reflects the stored items, not the resolvable ones, so a section
           holding only dangling references is not shown as an empty drop placeholder.

    """
    items = []
    for item in section.items:
        if isinstance(item, BulletReference):
            record = resolver.resolve_bullet(item.bullet_id)
            kind = "bullet"
        elif isinstance(item, PositionReference):
            record = resolver.resolve_position(item.position_id)
            kind = "position"
        else:
            raise TypeError(f"Unhandled resume item type: {type(item).__name__}")

        if record is None:
            _msg = f"Skipping dangling {kind} reference {item.ref_id} in section {section.id}"
            log.debug(_msg)
            continue
        items.append(RenderedItem(kind=kind, ref_id=item.ref_id, record=record))

    return RenderedSection(
        id=section.id,
        title=section.title,
        items=items,
        is_empty=section.is_empty,
    )


def _resolve_content(
    content: ResumeContent,
    resolver: RecordResolver,
) -> list[RenderedSection]:
    return [_resolve_section(section, resolver) for section in content.sections]


def _generate_editor_html(
    resume_id: int,
    content: ResumeContent,
    resolver: RecordResolver,
) -> str:
    """
    Generate the drag-and-drop editor column.

    Args:
        resume_id (int): The resume being edited.
        content (ResumeContent): The document to render.
        resolver (RecordResolver): Looks up bullet and position records.

    Returns:
        str: HTML for the editor. Every section is shown; empty sections render a
            drop placeholder.

    Notes:
        1. Renders the `partials/builder/_editor.html` template.

    """
    template = env.get_template("partials/builder/_editor.html")
    return template.render(
        resume_id=resume_id,
        sections=_resolve_content(content, resolver),
    )


def _generate_preview_html(
    name: str,
    content: ResumeContent,
    resolver: RecordResolver,
    template_id: str | None = None,
) -> str:
    """
    Generate the live preview with the resume's template.

    Args:
        name (str): The resume name shown in the header.
        content (ResumeContent): The document to render.
        resolver (RecordResolver): Looks up bullet and position records.
        template_id (str | None): The template id; unknown or missing ids use the default.

    Returns:
        str: HTML for the preview.

    Notes:
        1. Empty sections and dangling references are skipped.
        2. When every section is empty, the template shows an empty-resume message.

    """
    metadata = get_template(template_id)
    template = env.get_template(f"resume_templates/{metadata.file}")
    return template.render(
        name=name,
        sections=_resolve_content(content, resolver),
        is_empty=content.is_empty(),
    )


def _generate_save_indicator_html(session: EditorSession) -> str:
    """
    Generate the save indicator for an editor session.

    Args:
        session (EditorSession): The session whose status is shown.

    Returns:
        str: HTML for the indicator.

    Notes:
        1. Renders the `partials/builder/_save_indicator.html` template.

    """
    template = env.get_template("partials/builder/_save_indicator.html")
    return template.render(
        resume_id=session.resume_id,
        status=session.status.value,
        has_unsaved_changes=session.has_unsaved_changes,
        failed=session.status == SaveStatus.FAILED,
    )


def _generate_builder_html(
    resume: DatabaseResume,
    session: EditorSession,
    resolver: RecordResolver,
    template_id: str | None = None,
) -> str:
    """
    Generate the builder: editor, preview and save indicator.

    Args:
        resume (DatabaseResume): The resume being edited; provides id and name.
        session (EditorSession): The session holding the in-memory document.
        resolver (RecordResolver): Looks up bullet and position records.
        template_id (str | None): The preview template.

    Returns:
        str: HTML for the builder.

    """
    template = env.get_template("partials/builder/_builder.html")
    return template.render(
        resume_id=resume.id,
        name=resume.name,
        editor_html=_generate_editor_html(resume.id, session.content, resolver),
        preview_html=_generate_preview_html(
            resume.name, session.content, resolver, template_id
        ),
        indicator_html=_generate_save_indicator_html(session),
    )


def _generate_resume_list_html(resumes: list[DatabaseResume]) -> str:
    """
    Generates HTML for a list of resumes.

    Args:
        resumes (list[DatabaseResume]): The resumes to display.

    Returns:
        str: HTML string for the resume list.

    Notes:
        1. Renders the `partials/resume/_resume_list.html` template.

    """
    template = env.get_template("partials/resume/_resume_list.html")
    return template.render(resumes=resumes)
