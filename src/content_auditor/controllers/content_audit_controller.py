# src/content_auditor/controllers/content_audit_controller.py
import logging
from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from typing import List, Dict, Any, Tuple, Optional, Callable

import pandas as pd

from content_auditor.config import AnalysisConfig
from content_auditor.model import ContentAnalysisResult
from content_auditor.services.content_engine import ContentEngine

logger = logging.getLogger(__name__)


def _worker_analyze_page(page_data: Tuple[str, str], config: AnalysisConfig) -> Dict[str, Any]:
    """
    Worker function to analyse a single page in a separate process.
    Any failure is replaced by the static fallback result so the batch never aborts.
    """
    url, html = page_data
    try:
        engine = ContentEngine(config)
        result = engine.analyze_html(url, html if isinstance(html, str) else "")
        return {"result": result.model_dump(), "error": None}
    except Exception as e:
        logger.error(f"Worker failed on {url}: {e}")
        return {"result": ContentAnalysisResult.fallback_for(url).model_dump(), "error": str(e)}


class ContentAuditController:
    """
    Orchestrates content analysis over many pages: parallel execution,
    fallback substitution on failure and aggregation of the results.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

        # Results Buffers
        self.results: List[ContentAnalysisResult] = []
        self.export_rows: List[Dict[str, Any]] = []
        self.failures: List[Dict[str, Any]] = []

    def run_audit(
            self,
            df: pd.DataFrame,
            workers: int = 4,
            progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> Dict[str, Any]:
        """
        Runs the content analysis on a DataFrame with 'url' and 'content' columns.

        Returns:
            Dict[str, Any]: Summary with page count, failures, average score and
                            the number of pages each recommendation id was raised on.
        """
        total_rows = len(df)

        # Reset Buffers
        self.results = []
        self.export_rows = []
        self.failures = []

        tasks = [(row.url, getattr(row, "content", "")) for row in df.itertuples()]

        if workers <= 1:
            results_iter = map(partial(_worker_analyze_page, config=self.config), tasks)
            self._collect(results_iter, total_rows, progress_callback)
        else:
            with ProcessPoolExecutor(max_workers=workers) as executor:
                results_iter = executor.map(partial(_worker_analyze_page, config=self.config), tasks)
                self._collect(results_iter, total_rows, progress_callback)

        return self._summary(total_rows)

    def _collect(self, results_iter, total_rows: int, progress_callback) -> None:
        for i, payload in enumerate(results_iter):
            if progress_callback:
                progress_callback(i + 1, total_rows)

            result = ContentAnalysisResult.model_validate(payload["result"])
            self.results.append(result)

            if payload["error"]:
                self.failures.append({"row": i, "url": result.url, "error": payload["error"]})
                continue

            for rec in result.recommendations:
                self.export_rows.append({
                    "URL": result.url,
                    "Score": result.score,
                    "Id": rec.id,
                    "Priority": rec.priority,
                    "Impact": rec.impact,
                    "Category": rec.category,
                    "Title": rec.title,
                })

    def _summary(self, total_rows: int) -> Dict[str, Any]:
        analysed = [r for r in self.results if not r.fallback]
        recommendation_counts = Counter(rec.id for r in analysed for rec in r.recommendations)
        average_score = round(sum(r.score for r in analysed) / len(analysed), 1) if analysed else 0.0

        logger.info(f"Content audit finished: {len(analysed)}/{total_rows} pages analysed, "
                    f"{len(self.failures)} failed")

        return {
            "total_pages": total_rows,
            "analysed_pages": len(analysed),
            "failed_pages": len(self.failures),
            "average_score": average_score,
            "recommendations": dict(recommendation_counts),
        }

    # --- Result Getters ---
    def get_results(self) -> List[ContentAnalysisResult]:
        return self.results

    def get_results_for_export(self) -> pd.DataFrame:
        columns = ["URL", "Score", "Id", "Priority", "Impact", "Category", "Title"]
        return pd.DataFrame(self.export_rows, columns=columns)
