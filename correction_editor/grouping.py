"""
Overlap groups for the transformations of one sentence.

Two transformations overlap when they touch the same tokens, or when one of
them rewrites tokens that the other one inserted. The service emits a
sentence's transformations in the order it produced them, so an earlier
transformation never depends on the output of a later one.
"""
from __future__ import annotations
from collections import deque
from typing import Dict, List, Sequence
import logging

from correction_editor.ir import Sentence, Token, Transformation

logger = logging.getLogger(__name__)


def arrays_overlap(a: Sequence[Token], b: Sequence[Token]) -> bool:
    ids = {t.id for t in a}
    return any(t.id in ids for t in b)


def transforms_overlap(t1: Transformation, t2: Transformation, in_order: bool = False) -> bool:
    """
    Overlap test. With ``in_order`` the caller guarantees ``t1`` precedes
    ``t2``, so only ``t2`` can depend on ``t1``'s output.
    """
    return (
        arrays_overlap(t1.tokens_affected, t2.tokens_affected)
        or arrays_overlap(t1.tokens_added, t2.tokens_affected)
        or (not in_order and arrays_overlap(t2.tokens_added, t1.tokens_affected))
    )


def find_groups(transformations: Sequence[Transformation]) -> Dict[int, List[Transformation]]:
    """
    Partition ``transformations`` (in sentence order) into connected
    components of the overlap relation. Does not modify the transformations.

    Each component is grown breadth first from its earliest ungrouped member;
    members within a group keep sentence order.
    """
    group_of: Dict[int, int] = {}
    groups: Dict[int, List[int]] = {}
    next_group = 0

    for seed in range(len(transformations)):
        if seed in group_of:
            continue
        group_id = next_group
        next_group += 1
        group_of[seed] = group_id
        groups[group_id] = [seed]
        queue = deque([seed])

        while queue:
            member = queue.popleft()
            # everything before the seed is already grouped
            for candidate in range(seed + 1, len(transformations)):
                if candidate in group_of:
                    continue
                first, second = sorted((member, candidate))
                if transforms_overlap(transformations[first], transformations[second], in_order=True):
                    group_of[candidate] = group_id
                    groups[group_id].append(candidate)
                    queue.append(candidate)

    return {
        gid: [transformations[i] for i in sorted(members)]
        for gid, members in groups.items()
    }


def assign_groups(sentence: Sentence) -> Dict[int, List[Transformation]]:
    groups = find_groups(sentence.transformations)
    for group_id, members in groups.items():
        for transform in members:
            transform.group_id = group_id
    sentence.groups = groups
    logger.debug(
        f"Sentence {sentence.sentence_index}: {len(sentence.transformations)} transformations "
        f"in {len(groups)} groups"
    )
    return groups


def overlapping_group(sentence: Sentence, transform: Transformation) -> List[Transformation]:
    return sentence.groups.get(transform.group_id, [])


def affects_same_tokens(t1: Transformation, t2: Transformation) -> bool:
    return (
        t1.sentence_index == t2.sentence_index
        and [t.id for t in t1.tokens_affected] == [t.id for t in t2.tokens_affected]
    )
