"""Snapshot Primitive — copy-on-write production of a new document version.

Invariants:
    - The base snapshot is never mutated
    - The draft is private to one produce() call
    - An exception raised by the recipe propagates and the draft is discarded

Design Decisions:
    - Deep clone, mutate, return: no structural sharing, but the per-operation
      cost stays O(document) which is fine for editor-sized documents
    - Recipe return value is passed through so operations can report ids and no-op reasons
"""

from typing import Callable, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)
ResultT = TypeVar("ResultT")


def produce(
    base: ModelT, recipe: Callable[[ModelT], ResultT],
) -> tuple[ModelT, ResultT]:
    """Run `recipe` against a deep-cloned draft of `base`.

    Returns (draft, recipe_result). The caller decides whether the draft
    becomes the next snapshot.
    """
    draft = base.model_copy(deep=True)
    result = recipe(draft)
    return draft, result
