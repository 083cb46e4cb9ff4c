"""
One-time preparation of a proofreading result.

Every operation on a result assumes this has run: it assigns the stable
indices, rebuilds the live token stream from any recovered statuses, groups
overlapping transformations and computes initial availability.
"""
from __future__ import annotations
import logging

from correction_editor.apply import replay_accepted
from correction_editor.availability import refresh_sentence
from correction_editor.grouping import assign_groups
from correction_editor.ir import DocumentResult, Sentence, TRANSFORM_STATUS_CLEAN
from correction_editor.verify import check_token_ids

logger = logging.getLogger(__name__)


def _index_sentence(sentence: Sentence, sentence_index: int, counter: int) -> int:
    sentence.active_tokens = list(sentence.original_sentence)
    sentence.sentence_index = sentence_index

    for index_in_sentence, transform in enumerate(sentence.transformations):
        transform.transform_index = counter
        transform.index_in_sentence = index_in_sentence
        transform.sentence_index = sentence_index
        counter += 1

        if not transform.status:
            transform.status = TRANSFORM_STATUS_CLEAN

        # arrival order is topological, so replaying in order is safe
        replay_accepted(sentence, transform)

    return counter


def set_metadata(document: DocumentResult) -> DocumentResult:
    if document.rules_applied is None:
        logger.warning(f"Result {document.id} has no rulesApplied; nothing to prepare")
        return document
    if document.has_meta:
        return document

    counter = 0
    for sentence_index, sentence in enumerate(document.rules_applied):
        counter = _index_sentence(sentence, sentence_index, counter)
        for finding in check_token_ids(sentence):
            logger.warning(finding.message)
        assign_groups(sentence)
        refresh_sentence(sentence)

    document.has_meta = True
    logger.info(f"Prepared result {document.id}: {len(document.rules_applied)} sentences, {counter} transformations")
    return document
