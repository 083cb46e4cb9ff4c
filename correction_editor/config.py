from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple
import os

import yaml

from correction_editor.ir import ALL_RESPONSE_TYPES

APP_KEY_ENV = "CORRECTION_EDITOR_APP_KEY"


@dataclass
class EditorConfig:
    """Client configuration, passed explicitly to sessions and persisters."""
    app_key: str = ""  # sent by the submitting client, not the editor
    verbose: bool = False
    persist: bool = True  # forward accept/reject/reset decisions to the status sink
    options: Dict[str, Any] = field(default_factory=dict)  # default service options, e.g. protected text
    response_type: Tuple[str, ...] = ALL_RESPONSE_TYPES
    ignore_no_replacement: bool = False  # hide comment-only transformations from the available list
    persist_workers: int = 2

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "EditorConfig":
        data = data or {}
        response_type = data.get("response_type") or ALL_RESPONSE_TYPES
        if isinstance(response_type, str):
            response_type = (response_type,)
        return cls(
            app_key=str(data.get("app_key") or os.environ.get(APP_KEY_ENV, "")),
            verbose=bool(data.get("verbose", False)),
            persist=bool(data.get("persist", True)),
            options=dict(data.get("options") or {}),
            response_type=tuple(response_type),
            ignore_no_replacement=bool(data.get("ignore_no_replacement", False)),
            persist_workers=max(1, int(data.get("persist_workers", 2))),
        )

    def job_request(
        self,
        text: str,
        options: Optional[Mapping[str, Any]] = None,
        response_type: Optional[Tuple[str, ...]] = None,
    ) -> Dict[str, Any]:
        """
        Body of a proofreading submit call. ``app_key``, ``options`` and
        ``response_type`` are not used by the editor itself; they are passed
        through to whatever client submits the text.
        """
        merged = dict(self.options)
        merged.update(options or {})
        return {
            "text": text,
            "responseType": list(response_type or self.response_type),
            "options": merged,
        }


def load_config(path: str) -> EditorConfig:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return EditorConfig.from_mapping(data.get("editor", data))
