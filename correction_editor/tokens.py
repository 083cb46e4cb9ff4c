from __future__ import annotations
from typing import Any, Dict, List, Sequence
import logging

from correction_editor.ir import Token

logger = logging.getLogger(__name__)


def find_index(stream: Sequence[Token], token_id: Any) -> int:
    for i, token in enumerate(stream):
        if token.id == token_id:
            return i
    return -1


def present(subsequence: Sequence[Token], stream: Sequence[Token]) -> bool:
    """
    True if the ids of ``subsequence`` appear in ``stream`` in order and
    contiguously (no other token between consecutive ids).

    An empty subsequence is trivially present.
    """
    positions: Dict[Any, int] = {}
    for i, token in enumerate(stream):
        positions.setdefault(token.id, i)

    last = -1
    for token in subsequence:
        idx = positions.get(token.id)
        if idx is None:
            return False
        if last != -1 and idx != last + 1:
            return False
        last = idx
    return True


def splice(stream: Sequence[Token], remove_run: Sequence[Token], insert_run: Sequence[Token]) -> List[Token]:
    """
    Replace the contiguous run ``remove_run`` in ``stream`` with ``insert_run``.

    Only the first and last ids of ``remove_run`` are used to slice. If the run
    is not present the stream comes back unchanged: callers check availability
    first, so reaching that branch means a stale availability flag.
    """
    if not remove_run or not present(remove_run, stream):
        logger.warning(
            f"Splice skipped: run {[t.id for t in remove_run]} not present in active tokens"
        )
        return list(stream)

    start = find_index(stream, remove_run[0].id)
    end = find_index(stream, remove_run[-1].id)
    return list(stream[:start]) + list(insert_run) + list(stream[end + 1:])


def render(stream: Sequence[Token]) -> str:
    return "".join(token.value + token.after for token in stream)
