from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional

from tqdm.auto import tqdm

from sami_parser.dom.builder import TreeBuilder
from sami_parser.dom.models import ParseResult
from sami_parser.errors import SamiError
from sami_parser.services.scan_service import ScanService

logger = logging.getLogger(__name__)


class ParseController:
    """
    Orchestrates scanning and tree building for SAMI caption documents.
    The caller supplies decoded text; no file or network access happens here.
    """

    def __init__(
            self,
            *,
            scanner: Optional[ScanService] = None,
            builder: Optional[TreeBuilder] = None,
    ) -> None:
        self.scanner = scanner or ScanService()
        self.builder = builder or TreeBuilder()

    def parse(self, text: str) -> ParseResult:
        """Scans and builds one document. Any SamiError propagates to the caller."""
        tokens = self.scanner.tokenize(text)
        result = self.builder.build(tokens)
        logger.debug("Parsed document: %d tokens, %d cues.", len(tokens), len(result.cues))
        return result

    def parse_many(
            self,
            documents: Mapping[str, str],
            *,
            show_progress: bool = True,
    ) -> Dict[str, Any]:
        """
        Parses a batch of named documents independently.

        A malformed document is recorded under 'errors' and does not stop the
        batch. Returns a dictionary containing execution statistics and results.
        """
        start = time.perf_counter()
        results: Dict[str, ParseResult] = {}
        errors: Dict[str, str] = {}

        iterator = documents.items()
        if show_progress:
            iterator = tqdm(iterator, total=len(documents), desc="Parsing captions", unit=" doc")

        for name, text in iterator:
            try:
                results[name] = self.parse(text)
            except SamiError as e:
                logger.warning("Failed to parse '%s': %s: %s", name, type(e).__name__, e)
                errors[name] = f"{type(e).__name__}: {e}"

        duration = time.perf_counter() - start
        logger.info("Parsed %d documents (%d failed) in %.2fs.", len(results), len(errors), duration)
        return {
            "parsed": len(results),
            "failed": len(errors),
            "duration_s": round(duration, 3),
            "results": results,
            "errors": errors,
        }


def parse_sami(text: str) -> ParseResult:
    """Parses a SAMI document with the default scanner and grammar."""
    return ParseController().parse(text)
