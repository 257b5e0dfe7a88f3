"""
Ingestion Service - Extraction and chunking for uploaded batches

Runs every uploaded file through classification, text extraction and
chunking. Each file is isolated: a failing file (or archive entry) is
recorded in the UploadReport and the batch moves on. Successful chunking
results can be handed to a sink, e.g. an embedding + vector-store upsert
step, keyed by an opaque owner key.

Usage:
    from ingestion import IngestionService

    service = IngestionService()
    report = service.process_batch([("notes.txt", data)], owner_key="session-1")
    print(report.to_json())
"""

import logging
from typing import Callable, Iterable, Optional

from chunking.chunker import Chunker
from chunking.config import ChunkingServiceConfig
from chunking.models import ChunkingResult
from chunking.service import ChunkingService
from extraction.exceptions import IngestError, format_error_chain
from extraction.extractor import TextExtractor
from extraction.models import ExtractionResult

from .config import IngestionConfig
from .models import UploadReport

logger = logging.getLogger(__name__)

ChunkSink = Callable[[str, ChunkingResult], None]


class IngestionService:
    """
    Orchestrates extraction and chunking per uploaded file.

    Args:
        config: Chunking, extraction and storage settings.
        extractor: Text extractor (built from config.extraction by default).
        chunker: Chunker (built from config.chunking by default).
    """

    def __init__(
        self,
        config: Optional[IngestionConfig] = None,
        extractor: Optional[TextExtractor] = None,
        chunker: Optional[Chunker] = None,
    ):
        self.config = config or IngestionConfig()
        self.extractor = extractor or TextExtractor(self.config.extraction)
        self.chunking = ChunkingService(
            ChunkingServiceConfig(
                data_dir=self.config.data_dir,
                chunking=self.config.chunking,
            ),
            chunker=chunker,
        )

    def extract(self, name: str, content: bytes) -> ExtractionResult:
        return self.extractor.extract(content, name)

    def process_file(self, name: str, content: bytes) -> list[ChunkingResult]:
        """
        Extract and chunk one upload, failing on the first error.

        Returns:
            One ChunkingResult per extracted document (archives yield one
            per entry).

        Raises:
            IngestError: Any extraction or chunking failure.
        """
        extraction = self.extract(name, content)
        return [
            self.chunking.chunk_text(doc.text, doc.name)
            for doc in extraction.documents
        ]

    def process_batch(
        self,
        files: Iterable[tuple[str, bytes]],
        owner_key: str = "",
        sink: Optional[ChunkSink] = None,
    ) -> UploadReport:
        """
        Process a batch of uploads, isolating failures per file.

        Args:
            files: (file name, raw bytes) pairs in upload order.
            owner_key: Opaque key (tenant, session) passed to the sink and
                used as storage namespace.
            sink: Called with (owner_key, result) for every chunked document.

        Returns:
            UploadReport with one entry per file or archive entry.
        """
        report = UploadReport()

        for name, content in files:
            try:
                extraction = self.extract(name, content)
            except IngestError as exc:
                self._fail(report, name, exc)
                continue

            for failure in extraction.failures:
                report.record_failure(failure.name, failure.reason)

            if not extraction.documents and not extraction.failures:
                report.record_failure(name, "No documents found in upload")
                continue

            for doc in extraction.documents:
                self._process_document(report, doc.name, doc.text, owner_key, sink)

        logger.info(
            "Batch done: %d succeeded, %d failed",
            report.num_files_succeeded,
            report.num_files_failed,
        )
        return report

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _process_document(
        self,
        report: UploadReport,
        name: str,
        text: str,
        owner_key: str,
        sink: Optional[ChunkSink],
    ) -> None:
        try:
            result = self.chunking.chunk_text(text, name)
        except IngestError as exc:
            self._fail(report, name, exc)
            return

        if sink is not None:
            try:
                sink(owner_key, result)
            except Exception as exc:
                logger.error("[%s] Sink failed: %s", name, exc)
                report.record_failure(name, f"Error handing off chunks: {exc}")
                return

        if self.config.save_results:
            self.chunking.storage.save(result, owner_key)

        report.record_success(name, result)

    @staticmethod
    def _fail(report: UploadReport, name: str, exc: IngestError) -> None:
        logger.error("[%s] %s", name, format_error_chain(exc))
        report.record_failure(name, exc.message)
