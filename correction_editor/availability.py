from __future__ import annotations
from typing import Iterable, List

from correction_editor.ir import (
    Sentence,
    Transformation,
    TRANSFORM_STATUS_ACCEPTED,
    TRANSFORM_STATUS_CLEAN,
    TRANSFORM_STATUS_REJECTED,
)
from correction_editor.tokens import present


def compute_available(transform: Transformation, sentence: Sentence) -> bool:
    """True if an undecided transformation's affected tokens are live in the sentence."""
    if transform.status not in (None, TRANSFORM_STATUS_CLEAN):
        return False
    return present(transform.tokens_affected, sentence.active_tokens)


def set_available(transforms: Iterable[Transformation], sentence: Sentence) -> None:
    for transform in transforms:
        transform.is_available = compute_available(transform, sentence)


def refresh_group(sentence: Sentence, transform: Transformation) -> None:
    # only group members share token ids with the splice that just happened
    set_available(sentence.groups.get(transform.group_id, [transform]), sentence)


def refresh_sentence(sentence: Sentence) -> None:
    set_available(sentence.transformations, sentence)


def can_undo(transform: Transformation, sentence: Sentence) -> bool:
    return (
        not transform.has_replacement
        or (transform.status == TRANSFORM_STATUS_ACCEPTED and present(transform.tokens_added, sentence.active_tokens))
        or (transform.status == TRANSFORM_STATUS_REJECTED and present(transform.tokens_affected, sentence.active_tokens))
    )


def available_transforms(sentence: Sentence) -> List[Transformation]:
    return [t for t in sentence.transformations if t.is_available]
