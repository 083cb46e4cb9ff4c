"""
Interactive review of a proofreading result.

InteractiveEditor walks a user through accepting and rejecting the
transformations of one document. It keeps a linear history of decisions so
the most recent one can be undone, and a cached list of the transformations
that can be acted on in the current state.
"""
from __future__ import annotations
from typing import List, Optional, Tuple
import logging

from correction_editor import corrections
from correction_editor.config import EditorConfig
from correction_editor.grouping import affects_same_tokens, overlapping_group
from correction_editor.ir import DocumentResult, Sentence, Transformation
from correction_editor.metadata import set_metadata
from correction_editor.offsets import document_offset, sentence_offset, transform_offset
from correction_editor.persist import StatusPersister
from correction_editor.tokens import present, splice

logger = logging.getLogger(__name__)


class InteractiveEditor:
    """
    Stateful façade over a single DocumentResult.

    Args:
        document: Result returned by the proofreading service (prepared on
            construction if it has not been already)
        config: Client configuration; ``ignore_no_replacement`` hides
            comment-only transformations from the available list
        identity: Optional user identity forwarded with every status save
        persister: Optional StatusPersister receiving each decision while
            ``config.persist`` is set

    Not thread-safe: one owner mutates a document at a time.
    """

    def __init__(
        self,
        document: DocumentResult,
        config: Optional[EditorConfig] = None,
        identity: Optional[str] = None,
        persister: Optional[StatusPersister] = None,
    ):
        self.document = document
        self.config = config or EditorConfig()
        self.identity = identity
        self.persister = persister

        if not document.has_meta:
            set_metadata(document)

        self._transforms: Tuple[Transformation, ...] = tuple(
            t for s in document.rules_applied or [] for t in s.transformations
        )
        # decisions recovered with the document can be undone like fresh ones
        self._history: List[Transformation] = self._recovered_history()
        self._available: List[Transformation] = []
        self._update_available()

    @property
    def _save_to(self) -> Optional[StatusPersister]:
        return self.persister if self.config.persist else None

    def _recovered_history(self) -> List[Transformation]:
        """
        Order recovered decisions so that undoing them one by one works.

        Each sentence's decisions are replayed from the original tokens:
        rejections as soon as their tokens are live, accepts in transform
        order otherwise. Decisions that fit no replay sit at the bottom.
        """
        history: List[Transformation] = []
        for sentence in self.document.rules_applied or []:
            tokens = list(sentence.original_sentence)
            remaining = [t for t in sentence.transformations if not corrections.is_clean(t)]
            ordered: List[Transformation] = []
            while remaining:
                live = [t for t in remaining if corrections.is_rejected(t) and present(t.tokens_affected, tokens)]
                if live:
                    ordered.extend(live)
                    remaining = [t for t in remaining if t not in live]
                    continue
                nxt = next((t for t in remaining if present(t.tokens_affected, tokens)), None)
                if nxt is None:
                    break
                ordered.append(nxt)
                remaining.remove(nxt)
                if nxt.has_replacement:
                    tokens = splice(tokens, nxt.tokens_affected, nxt.tokens_added)
            history.extend(remaining + ordered)
        return history

    def _update_available(self) -> None:
        self._available = [
            t for t in self._transforms
            if t.is_available and (not self.config.ignore_no_replacement or t.has_replacement)
        ]

    # --- accessors -------------------------------------------------------

    @property
    def data(self) -> DocumentResult:
        return self.document

    @property
    def grammar_score(self) -> Optional[float]:
        return self.document.grammar_score

    @property
    def transforms(self) -> Tuple[Transformation, ...]:
        return self._transforms

    def get_transform(self, transform_index: int) -> Transformation:
        return self._transforms[transform_index]

    def get_sentence(self, sentence_index: int) -> Sentence:
        return corrections.get_sentence(self.document, sentence_index)

    def sentence_for_transform(self, transform: Transformation) -> Sentence:
        return self.get_sentence(transform.sentence_index)

    def num_sentences(self) -> int:
        return corrections.num_sentences(self.document)

    def num_transformations(self) -> int:
        return len(self._transforms)

    def available_transforms(self) -> List[Transformation]:
        return list(self._available)

    def all_clean(self) -> List[Transformation]:
        return [t for t in self._transforms if corrections.is_clean(t)]

    def has_next_transform(self, skip_suggestions: bool = False) -> bool:
        return self.next_transform(skip_suggestions) is not None

    def next_transform(self, skip_suggestions: bool = False) -> Optional[Transformation]:
        for transform in self._available:
            if not (skip_suggestions and transform.is_suggestion):
                return transform
        return None

    def overlapping_transforms(self, transform: Transformation) -> List[Transformation]:
        """Members of ``transform``'s group that rewrite exactly the same tokens."""
        group = overlapping_group(self.sentence_for_transform(transform), transform)
        return [t for t in group if affects_same_tokens(t, transform)]

    def can_make_transform(self, transform: Transformation) -> bool:
        return corrections.can_make_transform(self.sentence_for_transform(transform), transform)

    def last_transform(self) -> Optional[Transformation]:
        return self._history[-1] if self._history else None

    def can_undo_last(self) -> bool:
        last = self.last_transform()
        if last is None:
            return False
        return corrections.can_undo_transform(self.sentence_for_transform(last), last)

    # --- text and offsets ------------------------------------------------

    def current_text(self) -> str:
        return corrections.current_text(self.document)

    def original_text(self) -> str:
        return corrections.original_text(self.document)

    def current_sentence_text(self, sentence: Sentence) -> str:
        return corrections.current_sentence_text(sentence)

    def affected_text(self, transform: Transformation) -> str:
        return corrections.affected_text(transform)

    def added_text(self, transform: Transformation) -> str:
        return corrections.added_text(transform)

    def transform_offset(self, transform: Transformation) -> int:
        return transform_offset(self.document, transform)

    def sentence_offset(self, sentence: Sentence) -> int:
        return sentence_offset(self.document, sentence)

    def document_offset(self, transform: Transformation) -> int:
        return document_offset(self.document, transform)

    # --- decisions -------------------------------------------------------

    def accept(self, transform: Transformation) -> bool:
        if not corrections.accept_correction(self.document, transform, self._save_to, self.identity):
            return False
        self._history.append(transform)
        self._update_available()
        return True

    def reject(self, transform: Transformation) -> bool:
        if not corrections.reject_correction(self.document, transform, self._save_to, self.identity):
            return False
        self._history.append(transform)
        self._update_available()
        return True

    def undo_last(self) -> bool:
        """Revert the most recent accept/reject back to clean."""
        last = self.last_transform()
        if last is None:
            return False
        if not corrections.reset_correction(self.document, last, self._save_to, self.identity):
            return False
        self._history.pop()
        self._update_available()
        return True

    def apply_all(self, skip_suggestions: bool = False) -> int:
        """Accept every remaining available transformation. Returns how many were accepted."""
        accepted = 0
        while True:
            transform = self.next_transform(skip_suggestions)
            if transform is None:
                break
            if not self.accept(transform):
                logger.warning(f"Transformation {transform.transform_index} listed as available but could not be accepted")
                break
            accepted += 1
        logger.info(f"Accepted {accepted} transformations ({len(self._available)} still available)")
        return accepted

    def undo_all(self) -> int:
        undone = 0
        while self.can_undo_last() and self.undo_last():
            undone += 1
        return undone
