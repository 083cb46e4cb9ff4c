from __future__ import annotations

from correction_editor.ir import DocumentResult, Sentence, Transformation
from correction_editor.tokens import present, render

NOT_FOUND = -1


def sentence_offset(document: DocumentResult, sentence: Sentence) -> int:
    """Character offset of ``sentence`` in the document's current text."""
    offset = 0
    for s in document.rules_applied or []:
        if s is sentence or s.sentence_index == sentence.sentence_index:
            return offset
        offset += len(render(s.active_tokens))
    return NOT_FOUND


def transform_offset(document: DocumentResult, transform: Transformation) -> int:
    """
    Character offset of ``transform`` within its sentence's current text, or
    NOT_FOUND when its affected tokens are not a live contiguous run.
    """
    sentence = document.rules_applied[transform.sentence_index]
    if not transform.tokens_affected or not present(transform.tokens_affected, sentence.active_tokens):
        return NOT_FOUND

    first_id = transform.tokens_affected[0].id
    offset = 0
    for token in sentence.active_tokens:
        if token.id == first_id:
            return offset
        offset += len(token.value) + len(token.after)
    return NOT_FOUND


def document_offset(document: DocumentResult, transform: Transformation) -> int:
    local = transform_offset(document, transform)
    if local == NOT_FOUND:
        return NOT_FOUND
    sentence = document.rules_applied[transform.sentence_index]
    return sentence_offset(document, sentence) + local
