"""
Bank Statement Parser Package

Extracts the transaction table from PDF bank statements as structured rows.
"""

from .config import ArtifactRule, StatementLayout
from .exceptions import NoTransactionsFoundError, PdfTextExtractionError, StatementParserError
from .extractor import StatementExtractor, extract_transactions
from .line_parser import PrefixReferenceClassifier, Transaction, parse_transaction_line

__version__ = "1.0.0"

__all__ = [
  "ArtifactRule",
  "StatementLayout",
  "StatementExtractor",
  "extract_transactions",
  "parse_transaction_line",
  "PrefixReferenceClassifier",
  "Transaction",
  "StatementParserError",
  "PdfTextExtractionError",
  "NoTransactionsFoundError",
]
