"""This module stores the registry of preview templates for resumes."""

import logging
from dataclasses import dataclass

from resume_builder.app.core.config import get_settings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateMetadata:
    """
    Describes a preview template.

    Attributes:
        id (str): The stable id stored on resumes.
        name (str): The name shown in the template selector.
        description (str): A one-line description.
        file (str): The Jinja2 file under `templates/resume_templates`.
    """

    id: str
    name: str
    description: str
    file: str


# Built-in fallback when neither the resume nor the settings name a known template.
DEFAULT_TEMPLATE_ID = "classic_v1"

_TEMPLATES: dict[str, TemplateMetadata] = {
    "classic_v1": TemplateMetadata(
        id="classic_v1",
        name="Classic",
        description="Traditional serif layout with a centered header and section dividers.",
        file="classic_v1.html",
    ),
}

# Old ids still stored on some resumes.
_LEGACY_IDS: dict[str, str] = {
    "default": "classic_v1",
}


def default_template_id() -> str:
    """Return the configured default template id (`DEFAULT_TEMPLATE_ID` setting), legacy ids mapped."""
    configured = get_settings().default_template_id
    return _LEGACY_IDS.get(configured, configured)


def resolve_template_id(template_id: str | None) -> str:
    """Map a legacy id to its current id. None resolves to the configured default template."""
    if template_id is None:
        return default_template_id()
    return _LEGACY_IDS.get(template_id, template_id)


def has_template(template_id: str) -> bool:
    return resolve_template_id(template_id) in _TEMPLATES


def get_template(template_id: str | None) -> TemplateMetadata:
    """
    Get a template by id.

    Args:
        template_id (str | None): A current or legacy id, or None.

    Returns:
        TemplateMetadata: The template, or the default template when the id is unknown.

    Notes:
        1. An unknown id falls back to the configured default, or to the built-in
           `DEFAULT_TEMPLATE_ID` when the configured default is unknown too.

    """
    resolved = resolve_template_id(template_id)
    template = _TEMPLATES.get(resolved)
    if template is None:
        fallback = _TEMPLATES.get(default_template_id(), _TEMPLATES[DEFAULT_TEMPLATE_ID])
        _msg = f"Unknown template {template_id!r}, using {fallback.id}"
        log.warning(_msg)
        return fallback
    return template


def list_templates() -> list[TemplateMetadata]:
    """List the available templates. Legacy ids are not listed."""
    return list(_TEMPLATES.values())
