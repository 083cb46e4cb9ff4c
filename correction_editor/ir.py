from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from correction_editor.errors import ResultFormatError

TRANSFORM_STATUS_ACCEPTED = "accept"
TRANSFORM_STATUS_REJECTED = "reject"
TRANSFORM_STATUS_CLEAN = "clean"
TRANSFORM_STATUSES = (TRANSFORM_STATUS_CLEAN, TRANSFORM_STATUS_ACCEPTED, TRANSFORM_STATUS_REJECTED)

ALL_RESPONSE_TYPES = ("rulesApplied", "grammarScore", "corrected")

_TRANSFORM_KEYS = {
    "tokensAffected", "tokensAdded", "status", "isAvailable", "hasReplacement",
    "isSuggestion", "groupId", "sentenceIndex", "indexInSentence", "transformIndex",
}
_SENTENCE_KEYS = {"originalSentence", "activeTokens", "transformations", "groups", "sentenceIndex"}
_DOCUMENT_KEYS = {"rulesApplied", "grammarScore", "hasMeta", "id"}


@dataclass(frozen=True)
class Token:
    id: Any
    value: str
    after: str = ""  # trailing whitespace/punctuation

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Token":
        if not isinstance(data, dict) or data.get("id") is None:
            raise ResultFormatError(f"token without an id: {data!r}")
        return cls(id=data["id"], value=str(data.get("value") or ""), after=str(data.get("after") or ""))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "value": self.value, "after": self.after}


def _tokens(raw: Any, what: str) -> List[Token]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ResultFormatError(f"{what} must be a list, got {type(raw).__name__}")
    return [Token.from_dict(t) for t in raw]


@dataclass(eq=False)
class Transformation:
    """One proposed edit: replace ``tokens_affected`` with ``tokens_added``.

    Index fields and ``group_id`` are filled in once by the metadata pass.
    Equality is identity; two proposals with the same tokens are still
    distinct decisions.
    """
    tokens_affected: List[Token] = field(default_factory=list)
    tokens_added: List[Token] = field(default_factory=list)
    status: Optional[str] = None
    is_available: bool = False
    has_replacement: bool = True
    is_suggestion: bool = False
    group_id: Optional[int] = None
    sentence_index: Optional[int] = None
    index_in_sentence: Optional[int] = None
    transform_index: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transformation":
        if not isinstance(data, dict):
            raise ResultFormatError(f"transformation must be an object, got {type(data).__name__}")
        added = _tokens(data.get("tokensAdded"), "tokensAdded")
        status = data.get("status")
        if status is not None and status not in TRANSFORM_STATUSES:
            raise ResultFormatError(f"unknown transformation status: {status!r}")
        has_replacement = data.get("hasReplacement")
        return cls(
            tokens_affected=_tokens(data.get("tokensAffected"), "tokensAffected"),
            tokens_added=added,
            status=status,
            is_available=bool(data.get("isAvailable", False)),
            has_replacement=bool(added) if has_replacement is None else bool(has_replacement),
            is_suggestion=bool(data.get("isSuggestion", False)),
            group_id=data.get("groupId"),
            sentence_index=data.get("sentenceIndex"),
            index_in_sentence=data.get("indexInSentence"),
            transform_index=data.get("transformIndex"),
            extra={k: v for k, v in data.items() if k not in _TRANSFORM_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        out.update({
            "tokensAffected": [t.to_dict() for t in self.tokens_affected],
            "tokensAdded": [t.to_dict() for t in self.tokens_added],
            "status": self.status,
            "isAvailable": self.is_available,
            "hasReplacement": self.has_replacement,
            "isSuggestion": self.is_suggestion,
            "groupId": self.group_id,
            "sentenceIndex": self.sentence_index,
            "indexInSentence": self.index_in_sentence,
            "transformIndex": self.transform_index,
        })
        return out


@dataclass(eq=False)
class Sentence:
    original_sentence: List[Token] = field(default_factory=list)
    active_tokens: List[Token] = field(default_factory=list)
    transformations: List[Transformation] = field(default_factory=list)
    groups: Dict[int, List[Transformation]] = field(default_factory=dict)
    sentence_index: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sentence":
        if not isinstance(data, dict):
            raise ResultFormatError(f"sentence must be an object, got {type(data).__name__}")
        raw_transforms = data.get("transformations") or []
        if not isinstance(raw_transforms, list):
            raise ResultFormatError("transformations must be a list")
        original = _tokens(data.get("originalSentence"), "originalSentence")
        # activeTokens is derived; the metadata pass rebuilds it from the statuses
        return cls(
            original_sentence=original,
            active_tokens=list(original),
            transformations=[Transformation.from_dict(t) for t in raw_transforms],
            sentence_index=data.get("sentenceIndex"),
            extra={k: v for k, v in data.items() if k not in _SENTENCE_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        out.update({
            "originalSentence": [t.to_dict() for t in self.original_sentence],
            "activeTokens": [t.to_dict() for t in self.active_tokens],
            "transformations": [t.to_dict() for t in self.transformations],
            "sentenceIndex": self.sentence_index,
        })
        return out


@dataclass(eq=False)
class DocumentResult:
    rules_applied: Optional[List[Sentence]] = None
    grammar_score: Optional[float] = None
    has_meta: bool = False
    id: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentResult":
        if not isinstance(data, dict):
            raise ResultFormatError(f"result must be an object, got {type(data).__name__}")
        raw_sentences = data.get("rulesApplied")
        sentences = None
        if raw_sentences is not None:
            if not isinstance(raw_sentences, list):
                raise ResultFormatError("rulesApplied must be a list")
            sentences = [Sentence.from_dict(s) for s in raw_sentences]
        # hasMeta is not trusted from the payload: derived fields are rebuilt on load
        return cls(
            rules_applied=sentences,
            grammar_score=data.get("grammarScore"),
            has_meta=False,
            id=data.get("id"),
            extra={k: v for k, v in data.items() if k not in _DOCUMENT_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        out.update({
            "id": self.id,
            "grammarScore": self.grammar_score,
            "hasMeta": self.has_meta,
        })
        if self.rules_applied is not None:
            out["rulesApplied"] = [s.to_dict() for s in self.rules_applied]
        return out


@dataclass
class Finding:
    rule_id: str
    severity: str  # info|warning|critical
    message: str
    sentence_index: Optional[int] = None
    transform_index: Optional[int] = None
    details: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_id": self.rule_id, "severity": self.severity, "message": self.message,
            "sentence_index": self.sentence_index, "transform_index": self.transform_index,
            "details": self.details,
        }
