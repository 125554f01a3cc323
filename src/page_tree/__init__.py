"""Content tree discovery, copying and deletion.

The walker reads a page tree into memory, the transformer derives the
records to create, the materializer recreates the tree at a destination and
the deleter removes a tree children-first.

Import TreeWalker, TreeMaterializer and TreeDeleter from their modules;
they depend on the Confluence client wrapper.
"""

from .models import (
    Content,
    ContentNode,
    ContentQuery,
    CopyResult,
    CreatedPage,
    build_ancestry,
)
from .errors import TreeError, FetchError, CreateError, DeleteError
from .transformer import ContentTransformer, DEFAULT_CONFLICT_SUFFIX

__all__ = [
    'Content',
    'ContentNode',
    'ContentQuery',
    'CopyResult',
    'CreatedPage',
    'build_ancestry',
    'TreeError',
    'FetchError',
    'CreateError',
    'DeleteError',
    'ContentTransformer',
    'DEFAULT_CONFLICT_SUFFIX',
]
