"""Statement-level extraction: page text in, ordered transactions out."""

import logging
from typing import Callable, Iterable, List, Optional

from .config import StatementLayout
from .exceptions import NoTransactionsFoundError
from .line_merger import group_transaction_lines
from .line_parser import PrefixReferenceClassifier, ReferenceClassifier, Transaction, parse_transaction_group
from .pdf_text import extract_page_texts
from .table_locator import locate_table_lines

logger = logging.getLogger(__name__)


class StatementExtractor:
  """Runs table location, line merging and line parsing over every page.

  A page without a transaction table is skipped. A document in which no
  page yields a transaction raises :class:`NoTransactionsFoundError`.
  """

  def __init__(
    self,
    layout: Optional[StatementLayout] = None,
    classifier: Optional[ReferenceClassifier] = None,
    text_extractor: Callable[[bytes], List[str]] = extract_page_texts,
  ):
    self.layout = layout or StatementLayout()
    self.classifier = classifier or PrefixReferenceClassifier.from_layout(self.layout)
    self.text_extractor = text_extractor

  def extract(self, data: bytes) -> List[Transaction]:
    """Parse the raw bytes of a PDF statement."""
    page_texts = self.text_extractor(data)
    return self.extract_pages(page_texts)

  def extract_pages(self, page_texts: Iterable[str]) -> List[Transaction]:
    transactions = []
    pages = 0
    for page_num, page_text in enumerate(page_texts):
      pages += 1
      page_txns = self.parse_page(page_text)
      if page_txns is None:
        logger.info(f"Page {page_num + 1}: no transaction table")
        continue
      logger.info(f"Page {page_num + 1}: parsed {len(page_txns)} transactions")
      transactions.extend(page_txns)

    if not transactions:
      raise NoTransactionsFoundError(pages=pages)
    return transactions

  def parse_page(self, page_text: str) -> Optional[List[Transaction]]:
    """Transactions on one page, or ``None`` if the page has no table."""
    candidates = locate_table_lines(page_text, self.layout)
    if candidates is None:
      return None

    parsed = []
    for group in group_transaction_lines(candidates):
      txn = parse_transaction_group(group, self.layout, self.classifier)
      if txn is not None:
        parsed.append(txn)
    return parsed


def extract_transactions(data: bytes, layout: Optional[StatementLayout] = None) -> List[Transaction]:
  return StatementExtractor(layout).extract(data)
