"""
Compliance analysis pipeline.

Runs one query through retrieval, interpretation and formatting:

    store.fetch -> RelevanceScorer.retrieve -> Interpreter.interpret
        -> TraceabilityFormatter.format

and reports compliance events to an audit sink.
"""

import logging
import time
import uuid
from datetime import date
from typing import Optional

from .exceptions import DocumentStoreError, RetrievalError
from .ingestion.store import DocumentStore
from .interpretation.outcome import Interpreter
from .models import (
    CANDIDATE_CATEGORIES,
    AnalysisResult,
    BiasFlag,
    FormattedOutput,
    InterpretationResult,
    RetrievalResult,
)
from .reports.audit import AuditLogType, AuditRecord, AuditSink, LoggingAuditSink
from .reports.formatter import TraceabilityFormatter
from .retrieval.relevance import RelevanceScorer


logger = logging.getLogger(__name__)


class ComplianceAnalyzer:
    """
    Orchestrates the three pipeline stages for a single query.

    The analyzer holds no per-query state; every call to analyze() builds
    fresh result objects, so one instance can serve any number of queries.
    """

    HIGH_CONFLICT_THRESHOLD = 7

    def __init__(
        self,
        store: DocumentStore,
        scorer: Optional[RelevanceScorer] = None,
        interpreter: Optional[Interpreter] = None,
        formatter: Optional[TraceabilityFormatter] = None,
        audit_sink: Optional[AuditSink] = None,
        candidate_limit: int = 20
    ):
        """
        Initialize the pipeline.

        Args:
            store: Document store gateway supplying candidate provisions
            scorer: Relevance scorer (default configuration if None)
            interpreter: Interpretation stage (default configuration if None)
            formatter: Output formatter (default configuration if None)
            audit_sink: Destination for audit records; JSON log lines if None
            candidate_limit: Maximum candidates fetched from the store
        """
        self.store = store
        self.scorer = scorer or RelevanceScorer()
        self.interpreter = interpreter or Interpreter()
        self.formatter = formatter or TraceabilityFormatter()
        self.audit_sink = audit_sink or LoggingAuditSink()
        self.candidate_limit = candidate_limit

    def analyze(
        self,
        query: str,
        primary_jurisdiction: Optional[str] = None,
        as_of: Optional[date] = None
    ) -> AnalysisResult:
        """
        Analyze a query end to end.

        Args:
            query: Free-text user question
            primary_jurisdiction: Optional jurisdiction to prioritise
            as_of: Evaluation date for recency scoring (default today)

        Returns:
            AnalysisResult with all three stage results

        Raises:
            RetrievalError: If the document store cannot be read
        """
        query_id = str(uuid.uuid4())
        started = time.perf_counter()

        retrieval = self.retrieve(query, primary_jurisdiction, as_of)
        interpretation = self.interpreter.interpret(retrieval, query)
        output = self.formatter.format(retrieval, interpretation)

        elapsed_ms = int((time.perf_counter() - started) * 1000)

        logger.info(
            f"Query {query_id}: {output.outcome.value} "
            f"({len(output.citations)} citations, conflict {retrieval.conflict_score}/10)"
        )

        self._audit(query_id, query, retrieval, interpretation, output, elapsed_ms)

        return AnalysisResult(
            retrieval=retrieval,
            interpretation=interpretation,
            output=output,
        )

    def retrieve(
        self,
        query: str,
        primary_jurisdiction: Optional[str] = None,
        as_of: Optional[date] = None
    ) -> RetrievalResult:
        """
        Fetch candidates and run the relevance scorer.

        Raises:
            RetrievalError: Wrapping the store failure
        """
        try:
            candidates = self.store.fetch(
                CANDIDATE_CATEGORIES,
                self.candidate_limit,
                primary_jurisdiction=primary_jurisdiction,
            )
        except DocumentStoreError as e:
            logger.error(f"Document store fetch failed: {e}")
            raise RetrievalError(str(e)) from e

        logger.debug(f"Fetched {len(candidates)} candidate provisions")

        return self.scorer.retrieve(query, candidates, primary_jurisdiction, as_of)

    def _audit(
        self,
        query_id: str,
        query: str,
        retrieval: RetrievalResult,
        interpretation: InterpretationResult,
        output: FormattedOutput,
        elapsed_ms: int
    ) -> None:
        records = []

        if interpretation.bias_flag == BiasFlag.YES:
            records.append(AuditRecord(
                log_type=AuditLogType.BIAS_DETECTED,
                details={
                    'query': query,
                    'rationale': interpretation.rationale_summary,
                },
                query_id=query_id,
            ))

        if retrieval.conflict_score >= self.HIGH_CONFLICT_THRESHOLD:
            records.append(AuditRecord(
                log_type=AuditLogType.HIGH_CONFLICT,
                details={
                    'conflict_score': retrieval.conflict_score,
                    'citations_count': len(retrieval.top_citations),
                },
                query_id=query_id,
            ))

        records.append(AuditRecord(
            log_type=AuditLogType.QUERY_PROCESSED,
            details={
                'query': query,
                'outcome': output.outcome.value,
                'bias_flag': interpretation.bias_flag.value,
                'conflict_score': retrieval.conflict_score,
                'citations_count': len(output.citations),
                'misuse_detected': interpretation.misuse_detected,
                'processing_time_ms': elapsed_ms,
            },
            query_id=query_id,
        ))

        for record in records:
            try:
                self.audit_sink.emit(record)
            except Exception as e:
                logger.warning(
                    f"Audit sink failed to record {record.log_type.value} "
                    f"for query {query_id}: {e}"
                )
