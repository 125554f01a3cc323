"""Produce destination content records from source records."""

from typing import List

from .models import Content

DEFAULT_CONFLICT_SUFFIX = "- import"


class ContentTransformer:
    """Turns a source page snapshot into a page to create at the destination.

    The new record keeps type, status and body verbatim, gets an empty ID,
    the destination space and exactly the ancestry it is given. When the
    destination space is the source page's own space the conflict suffix
    is appended to the title; no other collision check is made.
    """

    def __init__(self, conflict_suffix: str = DEFAULT_CONFLICT_SUFFIX):
        self.conflict_suffix = conflict_suffix

    def transform(
        self,
        source: Content,
        dest_ancestry: List[str],
        dest_space_key: str,
    ) -> Content:
        title = source.title
        if dest_space_key == source.space_key:
            title = source.title + self.conflict_suffix

        return Content(
            id="",
            type=source.type,
            status=source.status,
            title=title,
            space_key=dest_space_key,
            ancestors=list(dest_ancestry),
            body=source.body,
        )
