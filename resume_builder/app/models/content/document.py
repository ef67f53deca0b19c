import json
import logging
from collections import Counter
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

log = logging.getLogger(__name__)


class BulletReference(BaseModel):
    """
    An item slot pointing at a bullet record.

    Attributes:
        type (Literal["bullet"]): The variant tag.
        bullet_id (str): The id of the referenced bullet, stored as `bulletId`.

    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["bullet"] = "bullet"
    bullet_id: str = Field(alias="bulletId", min_length=1)

    @property
    def ref_id(self) -> str:
        """The id this item points at."""
        return self.bullet_id


class PositionReference(BaseModel):
    """
    An item slot pointing at a position record.

    Attributes:
        type (Literal["position"]): The variant tag.
        position_id (str): The id of the referenced position, stored as `positionId`.

    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["position"] = "position"
    position_id: str = Field(alias="positionId", min_length=1)

    @property
    def ref_id(self) -> str:
        """The id this item points at."""
        return self.position_id


ResumeItem = Annotated[
    BulletReference | PositionReference,
    Field(discriminator="type"),
]

_item_adapter = TypeAdapter(ResumeItem)


class ResumeSection(BaseModel):
    """
    A named, ordered container of items, such as "Experience".

    Attributes:
        id (str): The section id, unique within a document.
        title (str): The heading shown in the builder and the preview.
        items (tuple[ResumeItem, ...]): The ordered references. May be empty.

    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str
    items: tuple[ResumeItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items


class ResumeContent(BaseModel):
    """
    The resume content document: an ordered sequence of sections.

    The document stores ids only. Bullet and position display data belong to the
    record pool and are looked up at render time.

    Attributes:
        sections (tuple[ResumeSection, ...]): The sections in render and print order.

    Notes:
        1. Section ids are unique within a document.
        2. Each bullet or position id appears in at most one item slot across all sections.
        3. Instances are immutable; a move builds a new document.

    """

    model_config = ConfigDict(frozen=True)

    sections: tuple[ResumeSection, ...] = ()

    def section_ids(self) -> list[str]:
        return [section.id for section in self.sections]

    def find_section(self, section_id: str) -> ResumeSection | None:
        """Return the section with the given id, or None."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def reference_ids(self) -> list[str]:
        """All item reference ids, in document order."""
        return [item.ref_id for section in self.sections for item in section.items]

    def bullet_ids(self) -> list[str]:
        return [
            item.bullet_id
            for section in self.sections
            for item in section.items
            if isinstance(item, BulletReference)
        ]

    def position_ids(self) -> list[str]:
        return [
            item.position_id
            for section in self.sections
            for item in section.items
            if isinstance(item, PositionReference)
        ]

    def item_count(self) -> int:
        return sum(len(section.items) for section in self.sections)

    def is_empty(self) -> bool:
        """True when every section has no items."""
        return all(section.is_empty for section in self.sections)

    def to_storage(self) -> dict[str, Any]:
        """
        Serialize the document to its stored JSON shape.

        Returns:
            dict[str, Any]: `{"sections": [{"id", "title", "items": [{"type", "bulletId" | "positionId"}]}]}`.

        """
        return self.model_dump(mode="json", by_alias=True)


def create_default_resume_content() -> ResumeContent:
    """
    Create the default content for a new resume.

    Returns:
        ResumeContent: Experience, Skills and Education sections, each with no items.

    """
    return ResumeContent(
        sections=(
            ResumeSection(id="experience", title="Experience"),
            ResumeSection(id="skills", title="Skills"),
            ResumeSection(id="education", title="Education"),
        )
    )


def create_draft_resume_content(bullet_ids: list[str]) -> ResumeContent:
    """
    Create content for a resume built from a job draft.

    Args:
        bullet_ids (list[str]): The bullets chosen for the draft, in order.

    Returns:
        ResumeContent: The default sections with the bullets placed in Experience.

    Notes:
        1. A bullet id repeated in `bullet_ids` is only placed once, at its first occurrence.

    """
    seen: set[str] = set()
    items = []
    for bullet_id in bullet_ids:
        if bullet_id in seen:
            continue
        seen.add(bullet_id)
        items.append(BulletReference(bullet_id=bullet_id))

    default = create_default_resume_content()
    experience = default.sections[0].model_copy(update={"items": tuple(items)})
    return ResumeContent(sections=(experience, *default.sections[1:]))


def _parse_section(raw: Any) -> ResumeSection | None:
    """Parse one stored section, dropping malformed items. Returns None for a malformed section."""
    if not isinstance(raw, dict):
        return None
    raw_items = raw.get("items") or []
    if not isinstance(raw_items, list):
        _msg = f"Section {raw.get('id')!r} has non-list items {raw_items!r}, loading it empty"
        log.warning(_msg)
        raw_items = []
    items = []
    for raw_item in raw_items:
        try:
            items.append(_item_adapter.validate_python(raw_item))
        except ValidationError:
            _msg = f"Dropping malformed item in section {raw.get('id')!r}: {raw_item!r}"
            log.warning(_msg)
    try:
        return ResumeSection(
            id=raw.get("id"),
            title=raw.get("title") or "",
            items=tuple(items),
        )
    except ValidationError:
        _msg = f"Dropping malformed section: {raw!r}"
        log.warning(_msg)
        return None


def parse_resume_content(raw: Any) -> ResumeContent:
    """
    Parse stored resume content, falling back to the default document.

    Args:
        raw (Any): The stored value: a dict, a JSON string, or None.

    Returns:
        ResumeContent: The parsed document.

    Notes:
        1. A JSON string is decoded first.
        2. If the value is not a mapping with a `sections` list, the default content is returned.
        3. Malformed sections and items are dropped with a warning instead of failing the load.
        4. Invariant violations in stored content are logged but the document is still returned.

    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            _msg = "Stored resume content is not valid JSON, using default content"
            log.warning(_msg)
            return create_default_resume_content()

    if not isinstance(raw, dict) or not isinstance(raw.get("sections"), list):
        _msg = "Stored resume content has no sections list, using default content"
        log.debug(_msg)
        return create_default_resume_content()

    sections = [
        section
        for section in (_parse_section(raw_section) for raw_section in raw["sections"])
        if section is not None
    ]
    content = ResumeContent(sections=tuple(sections))

    violations = find_invariant_violations(content)
    if violations:
        _msg = f"Stored resume content violates invariants: {violations}"
        log.warning(_msg)
    return content


def find_invariant_violations(content: ResumeContent) -> list[str]:
    """
    List every violation of the document invariants.

    Args:
        content (ResumeContent): The document to check.

    Returns:
        list[str]: One message per duplicated section id or reference id. Empty when the document is consistent.

    """
    violations = []
    for section_id, count in Counter(content.section_ids()).items():
        if count > 1:
            violations.append(f"section id {section_id!r} appears {count} times")
    for ref_id, count in Counter(content.reference_ids()).items():
        if count > 1:
            violations.append(f"reference id {ref_id!r} appears {count} times")
    return violations


def validate_resume_content(content: ResumeContent) -> ResumeContent:
    """
    Check the document invariants.

    Args:
        content (ResumeContent): The document to check.

    Returns:
        ResumeContent: The same document, for chaining.

    Raises:
        ValueError: If a section id or a reference id is duplicated.

    """
    violations = find_invariant_violations(content)
    if violations:
        raise ValueError("; ".join(violations))
    return content
