import json
from pathlib import Path

import pytest
from docx import Document

from correction_editor.cli import main
from correction_editor.persist import StatusPersister
from correction_editor.pipeline import run_review


def _write(tmp_path, raw):
    path = tmp_path / "job.json"
    path.write_text(json.dumps(raw), encoding="utf-8")
    return str(path)


def test_review_bundle(tmp_path, two_raw, sink):
    payload = run_review(
        input_json=_write(tmp_path, two_raw),
        out_dir=str(tmp_path / "out"),
        apply_all=True,
        skip_suggestions=True,
        emit_docx=True,
        sink=sink,
    )
    assert payload["text"]["current"] == "This is fine. It is good."
    assert payload["stats"]["accepted"] == 3
    assert payload["stats"]["clean"] == 2
    assert payload["findings"] == []
    assert payload["persistence"] == {"enabled": True, "saved": 3, "error": None}
    assert len(sink.records) == 3

    bundle = Path(payload["bundle_dir"])
    assert (bundle / "job.changelog.json").exists()
    assert "Decisions" in (bundle / "job.changelog.txt").read_text(encoding="utf-8")

    decided = json.loads(Path(payload["artifacts"]["result_json"]).read_text(encoding="utf-8"))
    assert [t["status"] for t in decided["rulesApplied"][1]["transformations"]] == ["accept", "clean", "accept", "clean"]

    clean = Document(payload["artifacts"]["clean_docx"])
    assert [p.text for p in clean.paragraphs] == ["This is fine. It is good."]
    review = Document(payload["artifacts"]["review_docx"])
    struck = [r.text for p in review.paragraphs for r in p.runs if r.font.strike]
    assert struck == ["Ths is fine. ", "It are good."]


def test_review_without_decisions(tmp_path, scenario_raw):
    payload = run_review(input_json=_write(tmp_path, scenario_raw), out_dir=str(tmp_path / "out"))
    assert payload["text"]["current"] == payload["text"]["original"] == "hzve be befor"
    assert payload["stats"]["still_available"] == 2
    assert payload["artifacts"]["clean_docx"] is None
    assert payload["persistence"]["enabled"] is False


def test_cli_prints_text(tmp_path, scenario_raw, capsys):
    path = _write(tmp_path, scenario_raw)
    assert main([path, "--out", str(tmp_path / "out"), "--apply-all", "--print-text"]) == 0
    assert capsys.readouterr().out.strip() == "has been before"


def test_cli_summary(tmp_path, two_raw, capsys):
    path = _write(tmp_path, two_raw)
    main([path, "--out", str(tmp_path / "out"), "--apply-all", "--ignore-no-replacement"])
    summary = json.loads(capsys.readouterr().out)
    assert summary["job_id"] == "job-two"
    assert summary["accepted"] == 3
    assert summary["clean"] == 2


def test_persister_closed_when_review_fails(tmp_path, two_raw, sink, monkeypatch):
    closed = []

    def broken_verify(document):
        raise RuntimeError("verification crashed")

    monkeypatch.setattr("correction_editor.pipeline.verify_document", broken_verify)
    monkeypatch.setattr(StatusPersister, "close", lambda self: closed.append(self))

    with pytest.raises(RuntimeError, match="verification crashed"):
        run_review(input_json=_write(tmp_path, two_raw), out_dir=str(tmp_path / "out"), apply_all=True, sink=sink)
    assert len(closed) == 1
