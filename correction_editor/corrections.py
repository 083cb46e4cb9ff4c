"""
Stateless operations on a prepared proofreading result.

These work directly on a DocumentResult; InteractiveEditor builds the
undo history and the available-transformation list on top of them.
"""
from __future__ import annotations
from typing import List, Optional

from correction_editor.apply import apply_transform, reject_transform, undo_transform
from correction_editor.availability import can_undo
from correction_editor.ir import (
    DocumentResult,
    Sentence,
    Transformation,
    TRANSFORM_STATUS_ACCEPTED,
    TRANSFORM_STATUS_CLEAN,
    TRANSFORM_STATUS_REJECTED,
)
from correction_editor.offsets import transform_offset
from correction_editor.persist import StatusPersister
from correction_editor.tokens import present, render


def get_sentence(document: DocumentResult, sentence_index: int) -> Sentence:
    return document.rules_applied[sentence_index]


def num_sentences(document: DocumentResult) -> int:
    return len(document.rules_applied or [])


def num_transformations(sentence: Sentence) -> int:
    return len(sentence.transformations)


def transformation_at_index(sentence: Sentence, index_in_sentence: int) -> Transformation:
    return sentence.transformations[index_in_sentence]


def current_sentence_text(sentence: Sentence) -> str:
    return render(sentence.active_tokens)


def original_sentence_text(sentence: Sentence) -> str:
    return render(sentence.original_sentence)


def current_text(document: DocumentResult) -> str:
    return "".join(current_sentence_text(s) for s in document.rules_applied or [])


def original_text(document: DocumentResult) -> str:
    return "".join(original_sentence_text(s) for s in document.rules_applied or [])


def affected_text(transform: Transformation) -> str:
    return render(transform.tokens_affected)


def added_text(transform: Transformation) -> str:
    return render(transform.tokens_added)


def is_clean(transform: Transformation) -> bool:
    return transform.status == TRANSFORM_STATUS_CLEAN


def is_accepted(transform: Transformation) -> bool:
    return transform.status == TRANSFORM_STATUS_ACCEPTED


def is_rejected(transform: Transformation) -> bool:
    return transform.status == TRANSFORM_STATUS_REJECTED


def can_make_transform(sentence: Sentence, transform: Transformation) -> bool:
    return present(transform.tokens_affected, sentence.active_tokens)


def can_undo_transform(sentence: Sentence, transform: Transformation) -> bool:
    return can_undo(transform, sentence)


def clean_transforms(document: DocumentResult) -> List[Transformation]:
    return [t for s in document.rules_applied or [] for t in s.transformations if is_clean(t)]


def accept_correction(
    document: DocumentResult,
    transform: Transformation,
    persister: Optional[StatusPersister] = None,
    identity: Optional[str] = None,
) -> bool:
    """Accept ``transform`` and forward the decision with the text it applied to."""
    sentence = get_sentence(document, transform.sentence_index)
    if not transform.is_available:
        return False

    prev_text = current_sentence_text(sentence)
    offset = transform_offset(document, transform)
    if not apply_transform(sentence, transform):
        return False

    if persister is not None:
        persister.save(document, transform, prev_text, offset, identity)
    return True


def reject_correction(
    document: DocumentResult,
    transform: Transformation,
    persister: Optional[StatusPersister] = None,
    identity: Optional[str] = None,
) -> bool:
    sentence = get_sentence(document, transform.sentence_index)
    if not transform.is_available:
        return False

    prev_text = current_sentence_text(sentence)
    offset = transform_offset(document, transform)
    if not reject_transform(sentence, transform):
        return False

    if persister is not None:
        persister.save(document, transform, prev_text, offset, identity)
    return True


def reset_correction(
    document: DocumentResult,
    transform: Transformation,
    persister: Optional[StatusPersister] = None,
    identity: Optional[str] = None,
) -> bool:
    """Return ``transform`` to clean; the saved text/offset describe the restored state."""
    sentence = get_sentence(document, transform.sentence_index)
    if not undo_transform(sentence, transform):
        return False

    if persister is not None:
        persister.save(document, transform, current_sentence_text(sentence), transform_offset(document, transform), identity)
    return True
