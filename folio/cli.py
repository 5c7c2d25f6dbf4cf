"""Command line entry point: folio parse | clone | convert | generate | preview."""

from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path

from folio import config
from folio.cloner import convert_html_to_template
from folio.exceptions import FolioError
from folio.generator_rule import TemplateStore
from folio.pipeline import clone_portfolio, generate_portfolio, parse_resume


def _cmd_parse(args, store):
    print(json.dumps(parse_resume(args.file), ensure_ascii=False, indent=2))


def _cmd_clone(args, store):
    print(json.dumps(clone_portfolio(args.url, store), indent=2))


def _cmd_convert(args, store):
    html = Path(args.file).read_text(encoding="utf-8", errors="replace")
    config.check_input_size(html)
    skeleton = convert_html_to_template(html, args.origin)
    out = Path(args.out or Path(args.file).with_suffix(".hbs"))
    out.write_text(skeleton.template_markup, encoding="utf-8")
    print(json.dumps({"template": str(out), "detectedSections": skeleton.detected_sections}, indent=2))


def _cmd_generate(args, store):
    payload = json.loads(Path(args.payload).read_text(encoding="utf-8"))
    result = generate_portfolio(payload, store, template=args.template, out_root=args.out)
    print(json.dumps(result, indent=2))


def _cmd_preview(args, store):
    html = store.preview(args.template)
    if args.out:
        Path(args.out).write_text(html, encoding="utf-8")
    else:
        sys.stdout.write(html)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="folio", description="Portfolio sites from résumés or cloned designs.")
    parser.add_argument("--templates", help=f"Template directory (default: {config.TEMPLATES_DIR})")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="Extract profile data from a résumé (PDF/DOCX/TXT)")
    p.add_argument("file")
    p.set_defaults(func=_cmd_parse)

    p = sub.add_parser("clone", help="Clone the design of a live portfolio URL")
    p.add_argument("url")
    p.set_defaults(func=_cmd_clone)

    p = sub.add_parser("convert", help="Convert a saved HTML page into a template skeleton")
    p.add_argument("file")
    p.add_argument("--origin", default="", help="Origin used to absolutise relative URLs")
    p.add_argument("--out", help="Where to write the skeleton (default: <file>.hbs)")
    p.set_defaults(func=_cmd_convert)

    p = sub.add_parser("generate", help="Render a profile JSON payload into a portfolio")
    p.add_argument("payload")
    p.add_argument("--template", help=f"Template name (default: {config.DEFAULT_TEMPLATE})")
    p.add_argument("--out", help=f"Output root (default: {config.PORTFOLIOS_DIR})")
    p.set_defaults(func=_cmd_generate)

    p = sub.add_parser("preview", help="Render a template with sample data")
    p.add_argument("template")
    p.add_argument("--out")
    p.set_defaults(func=_cmd_preview)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    store = TemplateStore(args.templates)
    try:
        args.func(args, store)
    except FolioError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
