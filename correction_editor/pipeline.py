from __future__ import annotations
from typing import Any, Dict, Optional
from pathlib import Path
from datetime import datetime, timezone
import json
import logging

from correction_editor import corrections
from correction_editor.changelog import write_json, write_txt
from correction_editor.config import EditorConfig, load_config
from correction_editor.errors import PersistError
from correction_editor.ir import DocumentResult
from correction_editor.persist import StatusPersister, StatusSink
from correction_editor.session import InteractiveEditor
from correction_editor.verify import verify_document

logger = logging.getLogger(__name__)


def load_result(path: str) -> DocumentResult:
    with open(path, "r", encoding="utf-8") as f:
        return DocumentResult.from_dict(json.load(f))


def run_review(
    *,
    input_json: str,
    out_dir: str,
    config: Optional[EditorConfig] = None,
    config_path: Optional[str] = None,
    apply_all: bool = False,
    skip_suggestions: bool = False,
    emit_docx: bool = False,
    sink: Optional[StatusSink] = None,
    identity: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Load a proofreading result, optionally accept everything still open, verify
    the resulting state and write a review bundle next to the decided result.
    """
    ts = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
    if config is None:
        config = load_config(config_path) if config_path else EditorConfig()

    document = load_result(input_json)
    persister = StatusPersister(sink, config) if sink is not None else None
    try:
        editor = InteractiveEditor(document, config=config, identity=identity, persister=persister)

        stem = Path(input_json).stem
        bundle = Path(out_dir) / f"{stem}_{ts.replace('-','').replace(':','').replace('T','_')}"
        bundle.mkdir(parents=True, exist_ok=True)
        result_path = str(bundle / f"{stem}.decided.json")
        clean_path = str(bundle / f"{stem}.clean.docx")
        review_path = str(bundle / f"{stem}.review.docx")

        accepted_now = 0
        if apply_all:
            accepted_now = editor.apply_all(skip_suggestions=skip_suggestions)

        findings = verify_document(document)
        for f in findings:
            logger.warning(f"{f.rule_id}: {f.message}")

        write_json(result_path, document.to_dict())

        artifacts: Dict[str, Any] = {"result_json": result_path, "clean_docx": None, "review_docx": None}
        if emit_docx:
            from correction_editor.adapters.docx_adapter import emit_clean_docx, emit_review_docx
            emit_clean_docx(document, clean_path)
            emit_review_docx(document, review_path, title=f"Job {document.id}")
            artifacts["clean_docx"] = clean_path
            artifacts["review_docx"] = review_path

        persistence: Dict[str, Any] = {"enabled": bool(persister and persister.enabled), "saved": 0, "error": None}
        if persister is not None:
            try:
                persistence["saved"] = persister.flush()
            except PersistError as e:
                persistence["error"] = str(e)

        transforms = editor.transforms
        payload: Dict[str, Any] = {
            "timestamp_utc": ts,
            "job_id": document.id,
            "grammar_score": document.grammar_score,
            "artifacts": artifacts,
            "persistence": persistence,
            "stats": {
                "sentences": editor.num_sentences(),
                "transformations": len(transforms),
                "accepted": sum(1 for t in transforms if corrections.is_accepted(t)),
                "rejected": sum(1 for t in transforms if corrections.is_rejected(t)),
                "clean": sum(1 for t in transforms if corrections.is_clean(t)),
                "accepted_this_run": accepted_now,
                "still_available": len(editor.available_transforms()),
                "findings_total": len(findings),
            },
            "text": {"original": editor.original_text(), "current": editor.current_text()},
            "findings": [f.to_dict() for f in findings],
            "decisions": [
                {
                    "transform_index": t.transform_index,
                    "sentence_index": t.sentence_index,
                    "status": t.status,
                    "affected": corrections.affected_text(t),
                    "added": corrections.added_text(t),
                    "is_suggestion": t.is_suggestion,
                }
                for t in transforms if not corrections.is_clean(t)
            ],
        }

        write_json(str(bundle / f"{stem}.changelog.json"), payload)
        write_txt(str(bundle / f"{stem}.changelog.txt"), payload)
        payload["bundle_dir"] = str(bundle)
        return payload
    finally:
        if persister is not None:
            persister.close()
