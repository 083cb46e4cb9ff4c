from __future__ import annotations
import argparse
import json
import logging

from correction_editor.config import EditorConfig, load_config
from correction_editor.pipeline import run_review


def main(argv=None):
    ap = argparse.ArgumentParser(
        prog="correction-edit",
        description="Review grammar corrections returned by a proofreading service"
    )
    ap.add_argument("input_json", help="Path to a proofreading result (rulesApplied JSON)")
    ap.add_argument("--out", default="./correction_out", help="Output directory")
    ap.add_argument("--config", help="YAML client configuration")
    ap.add_argument("--verbose", action="store_true", help="Debug logging")

    review_group = ap.add_argument_group("Review Options")
    review_group.add_argument(
        "--apply-all",
        action="store_true",
        help="Accept every transformation that is still available"
    )
    review_group.add_argument(
        "--skip-suggestions",
        action="store_true",
        help="With --apply-all, leave optional stylistic suggestions undecided"
    )
    review_group.add_argument(
        "--ignore-no-replacement",
        action="store_true",
        help="Do not list comment-only transformations as available"
    )
    review_group.add_argument(
        "--docx",
        action="store_true",
        help="Also write clean and review .docx files"
    )
    review_group.add_argument(
        "--print-text",
        action="store_true",
        help="Print the current text instead of the summary"
    )

    args = ap.parse_args(argv)

    if args.skip_suggestions and not args.apply_all:
        ap.error("--skip-suggestions requires --apply-all")

    config = load_config(args.config) if args.config else EditorConfig()
    if args.ignore_no_replacement:
        config.ignore_no_replacement = True
    if args.verbose:
        config.verbose = True

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    payload = run_review(
        input_json=args.input_json,
        out_dir=args.out,
        config=config,
        apply_all=args.apply_all,
        skip_suggestions=args.skip_suggestions,
        emit_docx=args.docx,
    )

    if args.print_text:
        print(payload["text"]["current"])
        return 0

    output = {
        "bundle_dir": payload["bundle_dir"],
        "job_id": payload["job_id"],
        "grammar_score": payload["grammar_score"],
        **payload["stats"],
    }
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    main()
