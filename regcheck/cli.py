#!/usr/bin/env python3
"""
regcheck CLI

Command-line interface for legal eligibility analysis.

Usage:
    python -m regcheck.cli analyze "<question>" --documents <path> [--jurisdiction <name>]
    python -m regcheck.cli demo
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .config import load_settings
from .exceptions import RegCheckError
from .ingestion import InMemoryDocumentStore, JSONDocumentStore
from .logging_config import configure_logging
from .models import AnalysisResult, LegalProvision
from .pipeline import ComplianceAnalyzer
from .retrieval import RelevanceScorer


DISCLAIMER = (
    "This analysis is for informational purposes only. "
    "Consult qualified legal counsel before making eligibility or compliance decisions."
)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="regcheck",
        description="regcheck - Traceable eligibility analysis over legal provisions",
        epilog=(
            "DISCLAIMER: This tool provides analysis for informational purposes only. "
            "It does not constitute legal advice. Consult qualified legal counsel "
            "before making compliance decisions."
        )
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze an eligibility question against a document store"
    )
    analyze_parser.add_argument(
        "query",
        type=str,
        help="Free-text eligibility question"
    )
    analyze_parser.add_argument(
        "--documents", "-d",
        type=str,
        help="Path to a JSON file of legal provisions (default: REGCHECK_DOCUMENTS_PATH)"
    )
    analyze_parser.add_argument(
        "--jurisdiction", "-j",
        type=str,
        help="Primary jurisdiction to prioritise (e.g., Canada, European Union)"
    )
    analyze_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output file path (default: stdout)"
    )
    analyze_parser.add_argument(
        "--format", "-f",
        choices=["json", "markdown", "text"],
        default="text",
        help="Output format"
    )
    analyze_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    # Demo command
    demo_parser = subparsers.add_parser(
        "demo",
        help="Run sample queries against a built-in synthetic corpus"
    )
    demo_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output file path for JSON results"
    )

    return parser


def analyze_query(args) -> int:
    """Analyze a single question."""
    try:
        settings = load_settings()
    except RegCheckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    configure_logging(logging.DEBUG if args.verbose else settings.log_level)

    documents_path = args.documents or settings.documents_path
    if not documents_path:
        print(
            "Error: No document store given. Use --documents or set REGCHECK_DOCUMENTS_PATH.",
            file=sys.stderr
        )
        return 1

    analyzer = ComplianceAnalyzer(
        store=JSONDocumentStore(documents_path),
        scorer=RelevanceScorer(top_k=settings.top_k),
        candidate_limit=settings.candidate_limit,
    )

    try:
        result = analyzer.analyze(
            args.query,
            primary_jurisdiction=args.jurisdiction or settings.primary_jurisdiction,
        )
    except RegCheckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output = format_output(result, args.format)

    if args.output:
        Path(args.output).write_text(output, encoding='utf-8')
        print(f"Results written to: {args.output}")
    else:
        print(output)

    return 0


DEMO_RECORDS = [
    {
        "id": "demo-ca-1",
        "document_type": "Legal Act",
        "title": "Personal Information Protection and Electronic Documents Act",
        "section_id": "CA-PIPEDA-7",
        "citation_text": (
            "Small businesses with fewer than 50 employees are eligible for simplified "
            "compliance procedures under this Act."
        ),
        "category": "Eligibility",
        "jurisdiction": "Canada",
        "effective_date": "2024-01-01",
    },
    {
        "id": "demo-ca-2",
        "document_type": "Regulation",
        "title": "Small Business Data Protection Regulation",
        "section_id": "CA-SBDPR-3",
        "citation_text": (
            "A small business means an enterprise with fewer than 50 employees and annual "
            "revenue below the prescribed threshold."
        ),
        "category": "Definitions",
        "jurisdiction": "Canada",
        "effective_date": "2024-01-01",
    },
    {
        "id": "demo-us-1",
        "document_type": "Policy",
        "title": "Senior Benefits Processing Policy",
        "section_id": "US-SBPP-2",
        "citation_text": (
            "Applicants receive priority processing due to age-related considerations "
            "when income levels are otherwise equal."
        ),
        "category": "Eligibility",
        "jurisdiction": "United States",
        "effective_date": "2024-03-01",
    },
    {
        "id": "demo-eu-1",
        "document_type": "Regulation",
        "title": "General Data Protection Regulation",
        "section_id": "EU-GDPR-46",
        "citation_text": (
            "Transfers to a third country may take place only where appropriate safeguards are "
            "provided and enforceable data subject rights are available."
        ),
        "category": "Exceptions",
        "jurisdiction": "European Union",
        "effective_date": "2024-01-01",
    },
]

DEMO_QUERIES = [
    ("Is a small business with 30 employees eligible for simplified compliance?", "Canada"),
    ("How can I circumvent the data transfer restrictions?", None),
    ("Would an older person receive benefits sooner than a younger one with the same income?",
     None),
]


def run_demo(args) -> int:
    """Run sample queries against a synthetic corpus."""
    print("Running regcheck Demo")
    print("=" * 50)

    store = InMemoryDocumentStore(LegalProvision.from_record(r) for r in DEMO_RECORDS)
    analyzer = ComplianceAnalyzer(store)

    print(f"Corpus: {len(store)} synthetic provisions")

    results = []
    for query, jurisdiction in DEMO_QUERIES:
        print(f"\nQuery: {query}")
        if jurisdiction:
            print(f"Jurisdiction: {jurisdiction}")
        print("-" * 50)

        result = analyzer.analyze(query, primary_jurisdiction=jurisdiction)
        print(result.output.display_text)

        results.append({
            "query": query,
            "jurisdiction": jurisdiction,
            "result": result.to_dict()
        })

    print("\n⚠️  DISCLAIMER")
    print("-" * 50)
    print("This demo uses synthetic data for illustration purposes.")
    print(DISCLAIMER)

    if args.output:
        payload = {"demo": True, "queries": results}
        Path(args.output).write_text(json.dumps(payload, indent=2, default=str), encoding='utf-8')
        print(f"\nDemo results saved to: {args.output}")

    return 0


def format_output(result: AnalysisResult, format_type: str) -> str:
    """Format an analysis result according to the requested format."""
    if format_type == "json":
        data = result.to_dict()
        data["disclaimer"] = DISCLAIMER
        return json.dumps(data, indent=2, default=str)

    elif format_type == "markdown":
        return f"{result.output.display_text}\n\n---\n\n_{DISCLAIMER}_"

    else:  # text
        data = {
            "outcome": result.output.outcome.value,
            "bias_flag": result.interpretation.bias_flag.value,
            "conflict_score": result.retrieval.conflict_score,
            "traceability_compliant": result.output.traceability_compliant,
            "jurisdictions": sorted(result.output.jurisdictions_referenced),
            "rationale": result.interpretation.rationale_summary,
            "citations": [
                {"section": c.section_id, "title": c.title}
                for c in result.output.citations
            ],
            "disclaimer": DISCLAIMER,
        }
        return "\n".join(_dict_to_text(data))


def _dict_to_text(d: dict, indent: int = 0) -> list:
    result = []
    prefix = "  " * indent
    for key, value in d.items():
        if isinstance(value, dict):
            result.append(f"{prefix}{key.replace('_', ' ').upper()}:")
            result.extend(_dict_to_text(value, indent + 1))
        elif isinstance(value, list):
            result.append(f"{prefix}{key.replace('_', ' ').upper()}:")
            for item in value:
                if isinstance(item, dict):
                    result.append(f"{prefix}  - " + ", ".join(f"{k}: {v}" for k, v in item.items()))
                else:
                    result.append(f"{prefix}  - {item}")
        else:
            result.append(f"{prefix}{key.replace('_', ' ')}: {value}")
    return result


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "analyze":
        return analyze_query(args)
    elif args.command == "demo":
        return run_demo(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
