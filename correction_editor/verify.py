from __future__ import annotations
from collections import Counter
from typing import List

from correction_editor.availability import compute_available
from correction_editor.grouping import arrays_overlap
from correction_editor.ir import DocumentResult, Finding, Sentence, TRANSFORM_STATUS_ACCEPTED
from correction_editor.tokens import present, render, splice


def check_token_ids(sentence: Sentence) -> List[Finding]:
    findings: List[Finding] = []
    counts = Counter(t.id for t in sentence.original_sentence)
    dupes = sorted(str(i) for i, n in counts.items() if n > 1)
    if dupes:
        findings.append(Finding(
            rule_id="inv.duplicate_token_id",
            severity="critical",
            message=f"Sentence {sentence.sentence_index} repeats token ids: {', '.join(dupes)}",
            sentence_index=sentence.sentence_index,
            details={"ids": ",".join(dupes)},
        ))

    original_ids = set(counts)
    for transform in sentence.transformations:
        clashes = sorted(str(t.id) for t in transform.tokens_added if t.id in original_ids)
        if clashes:
            findings.append(Finding(
                rule_id="inv.inserted_id_collision",
                severity="critical",
                message=f"Transformation {transform.transform_index} inserts ids already in sentence "
                        f"{sentence.sentence_index}: {', '.join(clashes)}",
                sentence_index=sentence.sentence_index,
                transform_index=transform.transform_index,
                details={"ids": ",".join(clashes)},
            ))
    return findings


def check_replay(sentence: Sentence) -> List[Finding]:
    """Live text must equal the original with exactly the accepted edits replayed."""
    tokens = list(sentence.original_sentence)
    ordered = sorted(
        (t for t in sentence.transformations if t.status == TRANSFORM_STATUS_ACCEPTED and t.has_replacement),
        key=lambda t: t.transform_index if t.transform_index is not None else 0,
    )
    for transform in ordered:
        if not present(transform.tokens_affected, tokens):
            return [Finding(
                rule_id="inv.replay_broken",
                severity="critical",
                message=f"Accepted transformation {transform.transform_index} cannot be replayed "
                        f"on sentence {sentence.sentence_index}",
                sentence_index=sentence.sentence_index,
                transform_index=transform.transform_index,
            )]
        tokens = splice(tokens, transform.tokens_affected, transform.tokens_added)

    expected = render(tokens)
    actual = render(sentence.active_tokens)
    if expected != actual:
        return [Finding(
            rule_id="inv.replay_mismatch",
            severity="critical",
            message=f"Sentence {sentence.sentence_index} text diverged from its accepted transformations",
            sentence_index=sentence.sentence_index,
            details={"expected": expected, "actual": actual},
        )]
    return []


def check_availability(sentence: Sentence) -> List[Finding]:
    findings: List[Finding] = []
    for transform in sentence.transformations:
        fresh = compute_available(transform, sentence)
        if transform.is_available != fresh:
            findings.append(Finding(
                rule_id="inv.stale_availability",
                severity="warning",
                message=f"Transformation {transform.transform_index} cached availability "
                        f"{transform.is_available} but is {fresh}",
                sentence_index=sentence.sentence_index,
                transform_index=transform.transform_index,
            ))
    return findings


def check_groups(sentence: Sentence) -> List[Finding]:
    findings: List[Finding] = []
    membership = Counter(id(t) for members in sentence.groups.values() for t in members)
    for transform in sentence.transformations:
        if membership.get(id(transform), 0) != 1:
            findings.append(Finding(
                rule_id="inv.group_partition",
                severity="critical",
                message=f"Transformation {transform.transform_index} belongs to "
                        f"{membership.get(id(transform), 0)} groups",
                sentence_index=sentence.sentence_index,
                transform_index=transform.transform_index,
            ))

    transforms = sentence.transformations
    for i, t1 in enumerate(transforms):
        for t2 in transforms[i + 1:]:
            if t1.group_id != t2.group_id and arrays_overlap(t1.tokens_affected, t2.tokens_affected):
                findings.append(Finding(
                    rule_id="inv.group_split",
                    severity="critical",
                    message=f"Transformations {t1.transform_index} and {t2.transform_index} share "
                            f"tokens but sit in different groups",
                    sentence_index=sentence.sentence_index,
                    transform_index=t1.transform_index,
                ))
    return findings


def verify_document(document: DocumentResult) -> List[Finding]:
    findings: List[Finding] = []
    for sentence in document.rules_applied or []:
        findings.extend(check_token_ids(sentence))
        findings.extend(check_replay(sentence))
        findings.extend(check_availability(sentence))
        findings.extend(check_groups(sentence))
    return findings
