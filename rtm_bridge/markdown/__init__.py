"""Markdown rendering and parsing of RTM task lines."""

from .codec import (
    COMPLETE_MARKER,
    ID_GLYPH,
    INCOMPLETE_MARKER,
    decode_ref,
    encode_new_task,
    encode_task,
    extract_task_name,
    id_tag,
    list_tag,
    mark_completed,
    render_block,
    tags_list,
)

__all__ = [
    "encode_task",
    "encode_new_task",
    "render_block",
    "decode_ref",
    "extract_task_name",
    "mark_completed",
    "id_tag",
    "list_tag",
    "tags_list",
    "ID_GLYPH",
    "INCOMPLETE_MARKER",
    "COMPLETE_MARKER",
]
