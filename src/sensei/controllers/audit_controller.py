# src/sensei/controllers/audit_controller.py
import logging
import random
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from sensei.dom.document_analyzer import analyze_document, is_valid_html
from sensei.dom.element_analyzer import analyze_elements
from sensei.errors import InvalidHtmlError, SenseiError
from sensei.managers.config_manager import ConfigManager
from sensei.managers.result_cache_manager import ResultCacheManager
from sensei.model import ElementAnalysisResult, HtmlAnalysisResult, ReportMetadata, SeoReport
from sensei.services.placeholder_service import generate_placeholder_report
from sensei.services.scoring_service import ScoreEstimator, overall_score
from sensei.services.suggestion_service import SuggestionClient, SuggestionGenerator

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Creates a suggestion client from an API key
ClientFactory = Callable[[str], SuggestionClient]


def read_html_file(path: PathLike) -> str:
    """
    Reads a local file as UTF-8 and checks that it looks like an HTML document.

    Raises:
        OSError: The file cannot be read.
        UnicodeDecodeError: The file is not UTF-8.
        InvalidHtmlError: The content lacks the html/head/body skeleton.
    """
    text = Path(path).read_text(encoding="utf-8")
    if not is_valid_html(text):
        raise InvalidHtmlError(f"{Path(path).name} is not a valid HTML document")
    return text


def _worker_analyze_file(path: str) -> Dict[str, Any]:
    """
    Worker function to analyze a single file in a separate process.
    Only the pure analyzers run here; scoring and suggestions stay in the parent.
    """
    name = Path(path).name
    try:
        html = read_html_file(path)
    except (SenseiError, OSError, UnicodeDecodeError) as e:
        return {"path": path, "name": name, "error": str(e)}

    return {
        "path": path,
        "name": name,
        "html_analysis": analyze_document(html),
        "element_analysis": analyze_elements(html, name),
    }


class AuditController:
    """
    Orchestrates a full audit: both analyzers, scoring, suggestions and the
    placeholder fallback for sources that cannot be analysed.
    """

    def __init__(
            self,
            suggestion_generator: Optional[SuggestionGenerator] = None,
            cache: Optional[ResultCacheManager] = None,
            rng: Optional[random.Random] = None,
            file_performance: int = 80
    ):
        self.rng = rng or random.Random()
        self.suggestions = suggestion_generator or SuggestionGenerator(rng=self.rng)
        self.cache = cache or ResultCacheManager()
        self.estimator = ScoreEstimator(rng=self.rng, file_performance=file_performance)

    @classmethod
    def from_config(
            cls,
            config: Optional[ConfigManager] = None,
            client_factory: Optional[ClientFactory] = None
    ) -> "AuditController":
        """
        Builds a controller from the application configuration.

        ``client_factory`` is called with the configured 'ai.api_key' to create
        the suggestion client. Without a key or a factory the rule-based
        suggestions are used.
        """
        config = config or ConfigManager()
        rng = random.Random()

        client = None
        api_key = config.get_nested("ai.api_key", "")
        if api_key and client_factory is not None:
            client = client_factory(api_key)
        elif api_key:
            logger.warning("ai.api_key is set but no client factory was supplied; using fallback suggestions")

        generator = SuggestionGenerator(
            client=client,
            model=config.get_nested("ai.model", "gemini-pro"),
            rng=rng,
        )
        return cls(
            suggestion_generator=generator,
            cache=ResultCacheManager(ttl_seconds=int(config.get_nested("cache.ttl_seconds", 1800))),
            rng=rng,
            file_performance=int(config.get_nested("scores.file_performance", 80)),
        )

    # --- Entry points ---

    def audit_html(self, html: str, source: str, type: str = "html") -> SeoReport:
        """Audits raw markup; results are cached per source and content."""
        key = ResultCacheManager.make_key(type, source, html)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            report = self._compose_report(
                source,
                type,
                analyze_document(html, source),
                analyze_elements(html, source),
            )
        except SenseiError as e:
            logger.error("Audit of %s failed, returning placeholder: %s", source, e)
            return generate_placeholder_report(source, type, self.rng)

        self.cache.put(key, report)
        return report

    def audit_file(self, path: PathLike) -> SeoReport:
        """Audits a local HTML file, reported under its basename."""
        name = Path(path).name
        try:
            html = read_html_file(path)
        except (SenseiError, OSError, UnicodeDecodeError) as e:
            logger.error("Could not audit %s, returning placeholder: %s", path, e)
            return generate_placeholder_report(name, "file", self.rng)
        return self.audit_html(html, name, type="file")

    def audit_files(
            self,
            paths: Sequence[PathLike],
            workers: int = 4,
            progress_callback=None
    ) -> List[SeoReport]:
        """
        Audits several files in a process pool.

        Reports are returned in the order of ``paths``. ``progress_callback``
        is called as ``(done, total)`` after each file.
        """
        total = len(paths)
        reports: List[SeoReport] = []

        with ProcessPoolExecutor(max_workers=workers) as executor:
            results_iter = executor.map(_worker_analyze_file, [str(p) for p in paths])

            for i, result in enumerate(results_iter):
                if progress_callback:
                    progress_callback(i + 1, total)

                if "error" in result:
                    logger.error("Could not audit %s, returning placeholder: %s", result["path"], result["error"])
                    reports.append(generate_placeholder_report(result["name"], "file", self.rng))
                    continue

                reports.append(self._compose_report(
                    result["name"], "file", result["html_analysis"], result["element_analysis"]
                ))

        logger.info("Audited %d files (%d placeholders)", total, sum(r.is_placeholder for r in reports))
        return reports

    # --- Composition ---

    def _compose_report(
            self,
            url: str,
            type: str,
            html_analysis: HtmlAnalysisResult,
            element_analysis: ElementAnalysisResult
    ) -> SeoReport:
        issues = html_analysis.issues
        subscores = self.estimator.subscores(issues, type)
        metadata = ReportMetadata(
            title=html_analysis.title,
            description=html_analysis.description,
            keywords=html_analysis.keywords,
            og_tags=html_analysis.og_tags,
        )
        suggestions = self.suggestions.generate(url, issues, metadata.model_dump())

        return SeoReport(
            url=url,
            type=type,
            overall=overall_score(subscores),
            subscores=subscores,
            issues=issues,
            suggestions=suggestions,
            metadata=metadata,
            element_analysis=element_analysis,
        )
