"""
This package defines the resume content document and the record pool it points into.

The document (`ResumeContent`) is an ordered tree of sections holding bullet and
position references by id. The record pool (`RecordPool`) maps those ids to the
display data the builder and the preview render.

Notes:
1. Every type here is a passive value; moves are computed by
   `app.api.routes.route_logic.resume_reorder`.
2. No disk, network, or database access is performed in this package.
"""

from .document import (
    BulletReference,
    PositionReference,
    ResumeContent,
    ResumeItem,
    ResumeSection,
    create_default_resume_content,
    create_draft_resume_content,
    find_invariant_violations,
    parse_resume_content,
    validate_resume_content,
)
from .records import (
    BulletRecord,
    PositionRecord,
    PositionSummary,
    RecordPool,
    RecordResolver,
)

__all__ = [
    "BulletRecord",
    "BulletReference",
    "PositionRecord",
    "PositionReference",
    "PositionSummary",
    "RecordPool",
    "RecordResolver",
    "ResumeContent",
    "ResumeItem",
    "ResumeSection",
    "create_default_resume_content",
    "create_draft_resume_content",
    "find_invariant_violations",
    "parse_resume_content",
    "validate_resume_content",
]
