# src/content_auditor/cli.py
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd
from tqdm import tqdm

from content_auditor.controllers.content_audit_controller import ContentAuditController
from content_auditor.managers.config_manager import ConfigManager
from content_auditor.model import ContentAnalysisResult
from content_auditor.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

TOP_RECOMMENDATIONS = 5


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="content-audit",
        description="Analyse the content quality and readability of local HTML files."
    )
    parser.add_argument("files", nargs="+", help="HTML files to analyse.")
    parser.add_argument("--url", help="Page URL used for link classification (default: the file URI).")
    parser.add_argument("--json", action="store_true", help="Print the full result(s) as JSON.")
    parser.add_argument("--settings", help="Path to an alternative settings.json.")
    parser.add_argument("--log-level", help="Overrides 'debug.level' from the settings.")
    parser.add_argument("--workers", type=int, help="Worker processes (default: 'audit.workers').")
    return parser


def _read_pages(files: List[str], url: Optional[str]) -> Optional[pd.DataFrame]:
    rows = []
    for name in files:
        path = Path(name)
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            print(f"❌ Error: cannot read '{name}': {e}", file=sys.stderr)
            return None
        rows.append({"url": url or path.resolve().as_uri(), "content": content})
    return pd.DataFrame(rows, columns=["url", "content"])


def _print_summary(result: ContentAnalysisResult) -> None:
    print(f"📄 {result.url}")
    if result.fallback:
        print("   Analysis failed, fallback result used.")
        return
    readability = result.readability
    print(f"   Score:        {result.score}/100")
    print(f"   Words:        {result.text.content_words} ({result.text.reading_time_minutes} min read)")
    print(f"   Readability:  {readability.score} ({readability.level}), fog {readability.fog_index}")
    print(f"                 {readability.interpretation}")
    for rec in result.recommendations[:TOP_RECOMMENDATIONS]:
        print(f"   [{rec.priority:<8}] {rec.title}")
    remaining = len(result.recommendations) - TOP_RECOMMENDATIONS
    if remaining > 0:
        print(f"   ... and {remaining} more")


def main(argv: Optional[List[str]] = None) -> int:
    """Entrypoint for analysing HTML files from the command line."""
    args = _build_parser().parse_args(argv)

    config_manager = ConfigManager()
    if args.settings:
        config_manager.load(Path(args.settings))

    configure_logger(
        general_level=args.log_level or config_manager.get_nested("debug.level", "WARNING"),
        module_specific_levels=config_manager.get_nested("debug.modules", {}),
        silenced_loggers=config_manager.get_nested("debug.silenced", {}),
    )

    df = _read_pages(args.files, args.url)
    if df is None:
        return 1

    workers = args.workers if args.workers is not None else config_manager.get_nested("audit.workers", 1)
    workers = min(int(workers), len(df))

    controller = ContentAuditController(config_manager.get_analysis_config())
    with tqdm(total=len(df), desc="Analysing", unit="page", disable=args.json or len(df) == 1) as bar:
        summary = controller.run_audit(df, workers=workers, progress_callback=lambda done, _total: bar.update(1))

    results = controller.get_results()
    if args.json:
        payload = [r.model_dump(by_alias=True) for r in results]
        print(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2, ensure_ascii=False))
        return 0

    for result in results:
        _print_summary(result)
    if len(results) > 1:
        print(f"\n✅ {summary['analysed_pages']}/{summary['total_pages']} pages analysed, "
              f"average score {summary['average_score']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
