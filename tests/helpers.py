from resume_builder.app.models.content import (
    BulletReference,
    PositionReference,
    ResumeContent,
    ResumeSection,
)


def make_content(layout: dict[str, list[str]]) -> ResumeContent:
    """
    Build a document from `{section_id: [ref ids]}`.

    Ids starting with "p" become position references; all others become bullet references.
    Section titles are the capitalized section ids.
    """
    sections = []
    for section_id, ref_ids in layout.items():
        items = tuple(
            PositionReference(position_id=ref_id)
            if ref_id.startswith("p")
            else BulletReference(bullet_id=ref_id)
            for ref_id in ref_ids
        )
        sections.append(
            ResumeSection(id=section_id, title=section_id.capitalize(), items=items)
        )
    return ResumeContent(sections=tuple(sections))


def layout_of(content: ResumeContent) -> dict[str, list[str]]:
    """The inverse of `make_content`: `{section_id: [ref ids]}` in document order."""
    return {
        section.id: [item.ref_id for item in section.items]
        for section in content.sections
    }
