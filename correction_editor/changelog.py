from __future__ import annotations
from typing import Dict, Any, List
import json

def write_json(path: str, payload: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

def write_txt(path: str, payload: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_txt(payload))

def render_txt(payload: Dict[str, Any]) -> str:
    lines: List[str] = []
    lines.append(f"Correction Review: job {payload.get('job_id')} - {payload.get('timestamp_utc')}")
    lines.append("")
    a = payload.get("artifacts", {})
    lines.append("Artifacts")
    lines.append(f"- Result:  {a.get('result_json')}")
    lines.append(f"- Clean:   {a.get('clean_docx') or '[not generated]'}")
    lines.append(f"- Review:  {a.get('review_docx') or '[not generated]'}")
    lines.append("")
    stats = payload.get("stats", {})
    lines.append("Stats")
    for k, v in stats.items():
        lines.append(f"- {k}: {v}")
    lines.append("")
    p = payload.get("persistence", {})
    if p:
        lines.append("Status Saves")
        lines.append(f"- Enabled: {p.get('enabled')}")
        lines.append(f"- Saved:   {p.get('saved')}")
        if p.get("error"):
            lines.append(f"- Error:   {p.get('error')}")
        lines.append("")
    findings = payload.get("findings", []) or []
    if findings:
        lines.append("Findings")
        for fnd in findings[:60]:
            lines.append(f"- [{fnd['severity'].upper()}] {fnd['rule_id']}: {fnd['message']}")
        if len(findings) > 60:
            lines.append(f"... plus {len(findings)-60} more.")
        lines.append("")
    decisions = payload.get("decisions", []) or []
    if decisions:
        lines.append("Decisions (first 50)")
        for d in decisions[:50]:
            lines.append(f"- {d['status']}: #{d['transform_index']} \"{d['affected']}\" -> \"{d['added']}\" (sentence {d['sentence_index']})")
    return "\n".join(lines)
