import logging
from dataclasses import dataclass
from enum import Enum

from resume_builder.app.models.content import ResumeContent, ResumeItem, ResumeSection

log = logging.getLogger(__name__)


class MoveKind(str, Enum):
    """
    What a drag relocated.

    Attributes:
        SECTION (str): A whole section moved among the top-level sections.
        ITEM (str): A bullet or position reference moved within or between sections.
    """

    SECTION = "section"
    ITEM = "item"


class NoOpReason(str, Enum):
    """
    Why a drag left the document unchanged.

    Attributes:
        SAME_ID (str): The item was dropped on itself.
        SOURCE_NOT_FOUND (str): The dragged id is not a section move and names no item.
        TARGET_NOT_FOUND (str): The drop id names neither a section nor an item.
        SAME_POSITION (str): The move resolves to the slot the item already occupies.
    """

    SAME_ID = "same_id"
    SOURCE_NOT_FOUND = "source_not_found"
    TARGET_NOT_FOUND = "target_not_found"
    SAME_POSITION = "same_position"


@dataclass(frozen=True)
class ItemLocation:
    """The position of an item slot: section index and item index within that section."""

    section_index: int
    item_index: int


@dataclass(frozen=True)
class ReorderResult:
    """
    The outcome of a drag.

    Attributes:
        content (ResumeContent): The next document. For a no-op this is the input object itself.
        kind (MoveKind | None): What moved, or None for a no-op.
        reason (NoOpReason | None): Why nothing moved, or None when something did.
        source (ItemLocation | None): Where the dragged entity was. Section moves use item_index -1.
        target (ItemLocation | None): Where the dragged entity ended up.
    """

    content: ResumeContent
    kind: MoveKind | None = None
    reason: NoOpReason | None = None
    source: ItemLocation | None = None
    target: ItemLocation | None = None

    @property
    def moved(self) -> bool:
        return self.kind is not None

    @classmethod
    def noop(cls, content: ResumeContent, reason: NoOpReason) -> "ReorderResult":
        return cls(content=content, reason=reason)


def _find_section_index(content: ResumeContent, section_id: str) -> int | None:
    for index, section in enumerate(content.sections):
        if section.id == section_id:
            return index
    return None


def _find_item(content: ResumeContent, ref_id: str) -> ItemLocation | None:
    """Scan sections in order for the first item whose reference id is `ref_id`."""
    for section_index, section in enumerate(content.sections):
        for item_index, item in enumerate(section.items):
            if item.ref_id == ref_id:
                return ItemLocation(section_index, item_index)
    return None


def _find_drop_target(content: ResumeContent, over_id: str) -> ItemLocation | None:
    """
    Resolve the drop id to an insertion slot.

    Args:
        content (ResumeContent): The document being edited.
        over_id (str): The id under the pointer when the drag ended.

    Returns:
        ItemLocation | None: The insertion slot, or None if `over_id` is unknown.

    Notes:
        1. Sections are scanned in order. Within each section the section id is checked
           before its items.
        2. Dropping on a section container appends: the slot is one past its last item.
        3. Dropping on an item inserts before it: the slot is that item's index.

    """
    for section_index, section in enumerate(content.sections):
        if section.id == over_id:
            return ItemLocation(section_index, len(section.items))
        for item_index, item in enumerate(section.items):
            if item.ref_id == over_id:
                return ItemLocation(section_index, item_index)
    return None


def move_section(
    content: ResumeContent,
    old_index: int,
    new_index: int,
) -> ResumeContent:
    """
    Relocate one section, shifting the sections in between by one.

    Args:
        content (ResumeContent): The document being edited.
        old_index (int): The current index of the section.
        new_index (int): The index the section should occupy afterwards.

    Returns:
        ResumeContent: A new document. Section objects are reused unchanged.

    Notes:
        1. This is remove-then-insert, not a swap.

    """
    sections = list(content.sections)
    section = sections.pop(old_index)
    sections.insert(new_index, section)
    return ResumeContent(sections=tuple(sections))


def move_item(
    content: ResumeContent,
    source: ItemLocation,
    target: ItemLocation,
) -> tuple[ResumeContent, ItemLocation]:
    """
    Relocate one item slot.

    Args:
        content (ResumeContent): The document being edited.
        source (ItemLocation): Where the item currently is.
        target (ItemLocation): The insertion slot computed before the item is removed.

    Returns:
        tuple[ResumeContent, ItemLocation]: The new document and the slot the item landed in.

    Notes:
        1. Remove the item from the source section.
        2. Within one section the item takes the target item's original index, so an
           item dragged down lands after the item it was dropped on. A drop on the
           item's own section container is clamped to the end of the shortened list.
        3. Insert the item into the target section at the adjusted index.
        4. Only the touched sections are rebuilt; every other section object is reused.

    """
    sections = list(content.sections)

    source_items = list(sections[source.section_index].items)
    item: ResumeItem = source_items.pop(source.item_index)

    target_index = target.item_index
    same_section = source.section_index == target.section_index
    if same_section:
        target_index = min(target_index, len(source_items))
        target_items = source_items
    else:
        target_items = list(sections[target.section_index].items)
        sections[source.section_index] = _with_items(
            sections[source.section_index], source_items
        )

    target_items.insert(target_index, item)
    sections[target.section_index] = _with_items(
        sections[target.section_index], target_items
    )

    landed = ItemLocation(target.section_index, target_index)
    return ResumeContent(sections=tuple(sections)), landed


def _with_items(section: ResumeSection, items: list[ResumeItem]) -> ResumeSection:
    return section.model_copy(update={"items": tuple(items)})


def reorder(content: ResumeContent, active_id: str, over_id: str) -> ReorderResult:
    """
    Compute the document that results from dropping `active_id` on `over_id`.

    Args:
        content (ResumeContent): The current document. Assumed to hold unique section ids
            and unique reference ids.
        active_id (str): The id of the dragged section or item.
        over_id (str): The id of the section or item under the pointer on release.

    Returns:
        ReorderResult: The next document and a description of the move, or a no-op result
            holding the input document itself.

    Notes:
        1. If `active_id` equals `over_id`, nothing moves.
        2. If both ids name sections, the dragged section takes the target section's index.
        3. Otherwise the dragged id must name an item; unknown ids are a no-op.
        4. A drop on a section appends to it; a drop on an item takes that item's slot.
        5. Unknown or stale ids never raise; they produce a no-op so a drag racing a
           deletion cannot corrupt the document.
        6. The input document is never mutated.
        7. This function performs no disk, network, or database access.

    """
    if active_id == over_id:
        _msg = f"reorder: {active_id} dropped on itself"
        log.debug(_msg)
        return ReorderResult.noop(content, NoOpReason.SAME_ID)

    old_section_index = _find_section_index(content, active_id)
    new_section_index = _find_section_index(content, over_id)
    if old_section_index is not None and new_section_index is not None:
        _msg = f"reorder: moving section {active_id} from {old_section_index} to {new_section_index}"
        log.debug(_msg)
        return ReorderResult(
            content=move_section(content, old_section_index, new_section_index),
            kind=MoveKind.SECTION,
            source=ItemLocation(old_section_index, -1),
            target=ItemLocation(new_section_index, -1),
        )

    source = _find_item(content, active_id)
    if source is None:
        _msg = f"reorder: no item with id {active_id}, ignoring drop"
        log.debug(_msg)
        return ReorderResult.noop(content, NoOpReason.SOURCE_NOT_FOUND)

    target = _find_drop_target(content, over_id)
    if target is None:
        _msg = f"reorder: drop target {over_id} not found, ignoring drop"
        log.debug(_msg)
        return ReorderResult.noop(content, NoOpReason.TARGET_NOT_FOUND)

    next_content, landed = move_item(content, source, target)
    if landed == source:
        _msg = f"reorder: {active_id} already at {source}, nothing to do"
        log.debug(_msg)
        return ReorderResult.noop(content, NoOpReason.SAME_POSITION)

    _msg = f"reorder: moved item {active_id} from {source} to {landed}"
    log.debug(_msg)
    return ReorderResult(
        content=next_content,
        kind=MoveKind.ITEM,
        source=source,
        target=landed,
    )


def apply_reorder(content: ResumeContent, active_id: str, over_id: str) -> ResumeContent:
    """Return only the next document for a drag; see `reorder`."""
    return reorder(content, active_id, over_id).content
