from __future__ import annotations
import logging

from correction_editor.availability import can_undo, compute_available, refresh_group
from correction_editor.ir import (
    Sentence,
    Transformation,
    TRANSFORM_STATUS_ACCEPTED,
    TRANSFORM_STATUS_CLEAN,
    TRANSFORM_STATUS_REJECTED,
)
from correction_editor.tokens import present, splice

logger = logging.getLogger(__name__)


def apply_transform(sentence: Sentence, transform: Transformation) -> bool:
    """
    Accept ``transform``: swap its affected tokens for its added tokens.

    Returns False, leaving everything untouched, when the transformation is
    not currently available or its affected tokens are no longer live.
    """
    if not transform.is_available:
        return False

    if transform.has_replacement:
        affected = transform.tokens_affected
        if not affected or not present(affected, sentence.active_tokens):
            logger.warning(
                f"Transformation {transform.transform_index} marked available but its tokens "
                f"are not in sentence {sentence.sentence_index}"
            )
            return False
        sentence.active_tokens = splice(sentence.active_tokens, affected, transform.tokens_added)
        transform.status = TRANSFORM_STATUS_ACCEPTED
        refresh_group(sentence, transform)
    else:
        transform.status = TRANSFORM_STATUS_ACCEPTED

    # comment-only transformations stay technically applicable; mark them done
    transform.is_available = False
    logger.debug(f"Accepted transformation {transform.transform_index} in sentence {sentence.sentence_index}")
    return True


def reject_transform(sentence: Sentence, transform: Transformation) -> bool:
    if not transform.is_available:
        return False

    # tokens are unchanged, so no other availability can move
    transform.status = TRANSFORM_STATUS_REJECTED
    transform.is_available = False
    logger.debug(f"Rejected transformation {transform.transform_index} in sentence {sentence.sentence_index}")
    return True


def undo_transform(sentence: Sentence, transform: Transformation) -> bool:
    """Return ``transform`` to clean, reversing its edit if it was accepted."""
    if not can_undo(transform, sentence):
        return False

    was_accepted = transform.status == TRANSFORM_STATUS_ACCEPTED
    transform.status = TRANSFORM_STATUS_CLEAN
    if transform.has_replacement and was_accepted:
        sentence.active_tokens = splice(sentence.active_tokens, transform.tokens_added, transform.tokens_affected)
        refresh_group(sentence, transform)

    transform.is_available = compute_available(transform, sentence)
    logger.debug(f"Reset transformation {transform.transform_index} in sentence {sentence.sentence_index}")
    return True


def replay_accepted(sentence: Sentence, transform: Transformation) -> None:
    """Re-apply a transformation recovered with an accepted status."""
    if transform.has_replacement and transform.status == TRANSFORM_STATUS_ACCEPTED:
        sentence.active_tokens = splice(sentence.active_tokens, transform.tokens_affected, transform.tokens_added)
