"""line_parser.py
Turn one merged statement line into a :class:`Transaction`.

A merged line is read as a sequence of tokens following a small grammar::

    DATE WORD* REFERENCE? AMOUNT AMOUNT? CONTINUATION*

* ``DATE`` is the literal ``DD Mon, YYYY`` prefix. It is kept as text and
  never converted to a calendar date.
* ``AMOUNT`` tokens look like ``-1,250.00``. The first one is the signed
  transaction amount (negative means money out), the optional second one is
  the running balance.
* ``REFERENCE`` is the last details word when the reference classifier
  accepts it (UPI/FCM/IMPS codes and cheque numbers by default).
* ``CONTINUATION`` words are wrapped description text. When the wrapped
  lines are handed over separately (:func:`parse_transaction_group`), the
  amounts are read from the date-led line only, so numbers in wrapped text
  never become amounts. A single merged string falls back to treating the
  words after the last amounts as continuation. With trailing-text recovery
  disabled, any continuation rejects the line.

Lines that do not fit the grammar are not errors: the parser returns
``None`` and the caller drops them.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Dict, List, Optional, Protocol, Sequence

from .config import DEFAULT_REFERENCE_PREFIXES, StatementLayout

logger = logging.getLogger(__name__)

__all__ = [
  "Transaction",
  "TokenKind",
  "Token",
  "ReferenceClassifier",
  "PrefixReferenceClassifier",
  "parse_amount",
  "tokenize_transaction_line",
  "parse_transaction_line",
  "parse_transaction_group",
]

DATE_RE = re.compile(r'^(\d{2} \w{3}, \d{4})')
AMOUNT_RE = re.compile(r'[+-]?\d[\d,]*\.\d{2}')
NUMERIC_REFERENCE_RE = re.compile(r'[0-9]+')
NON_NUMERIC_RE = re.compile(r'[^\d.-]')


class TokenKind(Enum):
  DATE = "date"
  WORD = "word"
  REFERENCE = "reference"
  AMOUNT = "amount"
  CONTINUATION = "continuation"


@dataclass(frozen=True)
class Token:
  kind: TokenKind
  text: str


@dataclass
class Transaction:
  """A single parsed statement row."""

  date: str
  description: str
  reference: str
  debit: Decimal
  credit: Decimal
  balance: Decimal

  def to_dict(self) -> Dict[str, object]:
    return {
      "date": self.date,
      "description": self.description,
      "reference": self.reference,
      "debit": float(self.debit),
      "credit": float(self.credit),
      "balance": float(self.balance),
    }


class ReferenceClassifier(Protocol):
  def is_reference(self, token: str) -> bool:
    ...


class PrefixReferenceClassifier:
  """Accept tokens with a known payment-system prefix, or plain numbers."""

  def __init__(self, prefixes: Sequence[str] = DEFAULT_REFERENCE_PREFIXES, numeric: bool = True):
    self.prefixes = tuple(prefixes)
    self.numeric = numeric

  @classmethod
  def from_layout(cls, layout: StatementLayout) -> "PrefixReferenceClassifier":
    return cls(layout.reference_prefixes, layout.numeric_references)

  def is_reference(self, token: str) -> bool:
    if self.prefixes and token.startswith(self.prefixes):
      return True
    return self.numeric and bool(NUMERIC_REFERENCE_RE.fullmatch(token))


def is_amount(token: str) -> bool:
  return bool(AMOUNT_RE.fullmatch(token))


def parse_amount(token: str) -> Decimal:
  """Parse an amount token, treating anything unparseable as zero."""
  cleaned = NON_NUMERIC_RE.sub('', token)
  try:
    return Decimal(cleaned)
  except InvalidOperation:
    return Decimal(0)


def _last_amount_index(words: List[str]) -> Optional[int]:
  for i in range(len(words) - 1, -1, -1):
    if is_amount(words[i]):
      return i
  return None


def tokenize_transaction_line(
  line: str,
  classifier: Optional[ReferenceClassifier] = None,
  recover_trailing_text: bool = True,
  continuation: Sequence[str] = (),
) -> Optional[List[Token]]:
  """Tokenize a transaction line, or return ``None`` if it is not one.

  ``line`` may be a fully merged line. When the wrapped lines are passed
  separately as ``continuation``, amounts are only looked for in the
  date-led ``line`` and every continuation word is description text.
  """
  match = DATE_RE.match(line)
  if not match:
    return None

  classifier = classifier or PrefixReferenceClassifier()
  date = match.group(1)
  words = line[len(date):].strip().split()
  trailing = [w for part in continuation for w in part.split()]

  last = _last_amount_index(words)
  if last is None:
    return None
  if (last != len(words) - 1 or trailing) and not recover_trailing_text:
    return None

  first = last - 1 if last > 0 and is_amount(words[last - 1]) else last
  details = words[:first]

  tokens = [Token(TokenKind.DATE, date)]
  if details and classifier.is_reference(details[-1]):
    tokens.extend(Token(TokenKind.WORD, w) for w in details[:-1])
    tokens.append(Token(TokenKind.REFERENCE, details[-1]))
  else:
    tokens.extend(Token(TokenKind.WORD, w) for w in details)
  tokens.extend(Token(TokenKind.AMOUNT, w) for w in words[first:last + 1])
  tokens.extend(Token(TokenKind.CONTINUATION, w) for w in words[last + 1:] + trailing)
  return tokens


def parse_transaction_line(
  line: str,
  layout: Optional[StatementLayout] = None,
  classifier: Optional[ReferenceClassifier] = None,
  continuation: Sequence[str] = (),
) -> Optional[Transaction]:
  """Parse one merged line into a :class:`Transaction`.

  Returns ``None`` when the line has no leading date or no amounts.
  """
  layout = layout or StatementLayout()
  classifier = classifier or PrefixReferenceClassifier.from_layout(layout)

  tokens = tokenize_transaction_line(line, classifier, layout.recover_trailing_text, continuation)
  if tokens is None:
    logger.debug(f"Not a transaction line: {line}")
    return None

  by_kind = {kind: [t.text for t in tokens if t.kind is kind] for kind in TokenKind}
  amounts = [parse_amount(a) for a in by_kind[TokenKind.AMOUNT]]

  debit = credit = Decimal(0)
  if amounts[0] < 0:
    debit = abs(amounts[0])
  else:
    credit = abs(amounts[0])
  balance = amounts[1] if len(amounts) > 1 else Decimal(0)

  description = ' '.join(by_kind[TokenKind.WORD] + by_kind[TokenKind.CONTINUATION])
  for rule in layout.description_artifacts:
    description = rule.apply(description)
  reference = by_kind[TokenKind.REFERENCE][0] if by_kind[TokenKind.REFERENCE] else ''

  return Transaction(
    date=by_kind[TokenKind.DATE][0],
    description=description.strip(),
    reference=reference.strip(),
    debit=debit,
    credit=credit,
    balance=balance,
  )


def parse_transaction_group(
  group: Sequence[str],
  layout: Optional[StatementLayout] = None,
  classifier: Optional[ReferenceClassifier] = None,
) -> Optional[Transaction]:
  """Parse a date-led line together with the lines wrapped under it."""
  if not group:
    return None
  return parse_transaction_line(group[0], layout, classifier, continuation=group[1:])
