# src/sensei/cli.py
import argparse
import json
import logging
import multiprocessing
import sys
import time
from typing import Any, Dict, List, Optional

import pandas as pd
from tqdm.auto import tqdm

from sensei.controllers.audit_controller import AuditController
from sensei.managers.config_manager import ConfigManager
from sensei.model import SeoReport
from sensei.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)


def build_parser(config: ConfigManager) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seo-sensei", description="SEO and accessibility audits for HTML pages")
    subparsers = parser.add_subparsers(dest="subcommand")

    audit_parser = subparsers.add_parser("audit", help="Audit one or more local HTML files")
    audit_parser.add_argument("files", nargs="+", help="HTML files to audit")
    audit_parser.add_argument("--workers", type=int, default=max(1, multiprocessing.cpu_count() - 1),
                              help="CPU workers")
    audit_parser.add_argument("--export", type=str, default=None, help="Write one row per issue to this CSV file")
    audit_parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API")
    serve_parser.add_argument("--host", type=str, default=config.get_nested("server.host", "127.0.0.1"))
    serve_parser.add_argument("--port", type=int, default=config.get_nested("server.port", 5000))

    return parser


def export_rows(reports: List[SeoReport]) -> List[Dict[str, Any]]:
    """Flattens document and element issues of every report into export rows."""
    rows: List[Dict[str, Any]] = []
    for report in reports:
        for issue in report.issues:
            rows.append({
                "URL": report.url,
                "Level": "document",
                "Section": "",
                "Selector": "",
                "Severity": issue.severity.value,
                "Issue": issue.title,
                "Fix": issue.how_to_fix,
                "Placeholder": report.is_placeholder,
            })
        if report.element_analysis is None:
            continue
        for issue in report.element_analysis.element_issues:
            rows.append({
                "URL": report.url,
                "Level": "element",
                "Section": issue.section.label,
                "Selector": issue.selector,
                "Severity": issue.severity.value,
                "Issue": issue.issue,
                "Fix": issue.recommendation,
                "Placeholder": report.is_placeholder,
            })
    return rows


def _handle_audit(parsed_args: argparse.Namespace, config: ConfigManager) -> int:
    controller = AuditController.from_config(config)

    pbar = tqdm(total=len(parsed_args.files), desc="Auditing", unit="file", file=sys.stderr)

    def progress_update(current, total):
        pbar.n = current
        pbar.refresh()

    start_audit = time.perf_counter()
    reports = controller.audit_files(
        parsed_args.files,
        workers=parsed_args.workers,
        progress_callback=progress_update
    )
    pbar.close()
    logger.info("Audit finished in %.2f seconds", time.perf_counter() - start_audit)

    payload = [r.model_dump(mode="json", by_alias=True) for r in reports]
    print(json.dumps(payload, indent=2 if parsed_args.pretty else None, ensure_ascii=False))

    if parsed_args.export:
        _handle_export(parsed_args.export, export_rows(reports))

    return 0 if not any(r.is_placeholder for r in reports) else 2


def _handle_export(filename: str, rows: List[Dict[str, Any]]):
    if not filename.endswith(".csv"):
        filename += ".csv"
    pd.DataFrame(rows).to_csv(filename, index=False)
    logger.info("Exported %d issues to %s", len(rows), filename)


def main(argv: Optional[List[str]] = None) -> int:
    config = ConfigManager()
    configure_logger(config=config)

    parser = build_parser(config)
    parsed_args = parser.parse_args(argv)

    if parsed_args.subcommand == "audit":
        return _handle_audit(parsed_args, config)
    if parsed_args.subcommand == "serve":
        from sensei.server.app import serve
        serve(parsed_args.host, parsed_args.port, config)
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
