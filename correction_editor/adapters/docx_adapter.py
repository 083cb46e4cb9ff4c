from __future__ import annotations
from typing import Optional

from docx import Document
from docx.shared import Pt, RGBColor

from correction_editor.corrections import current_sentence_text, current_text, original_sentence_text
from correction_editor.ir import DocumentResult

DELETED_COLOR = (0xC0, 0x00, 0x00)
INSERTED_COLOR = (0x00, 0x4C, 0x99)


def emit_clean_docx(document: DocumentResult, out_docx: str, title: Optional[str] = None) -> int:
    """Write the current text, one paragraph per line. Returns the paragraph count."""
    doc = Document()
    if title:
        doc.add_heading(title, level=1)
    paragraphs = current_text(document).split("\n")
    for text in paragraphs:
        doc.add_paragraph(text.rstrip())
    doc.save(out_docx)
    return len(paragraphs)


def emit_review_docx(document: DocumentResult, out_docx: str, title: Optional[str] = None) -> int:
    """
    Write one paragraph per sentence. Changed sentences show the original
    text struck through followed by the current text underlined.

    Returns the number of changed sentences.
    """
    doc = Document()
    doc.add_heading(title or "Correction review", level=1)
    changed = 0
    for sentence in document.rules_applied or []:
        before = original_sentence_text(sentence)
        after = current_sentence_text(sentence)
        para = doc.add_paragraph()
        if before == after:
            para.add_run(after)
            continue

        changed += 1
        old = para.add_run(before)
        old.font.strike = True
        old.font.color.rgb = RGBColor(*DELETED_COLOR)
        new = para.add_run(after)
        new.font.underline = True
        new.font.color.rgb = RGBColor(*INSERTED_COLOR)
        note = para.add_run(f"  [sentence {sentence.sentence_index}]")
        note.font.size = Pt(8)
        note.font.italic = True
    doc.save(out_docx)
    return changed
