"""Rejoin transaction rows that the PDF renderer wrapped over several lines."""

import re
from typing import Iterable, List

TRANSACTION_START_RE = re.compile(r'^\d{2}\s\w{3},\s\d{4}')


def starts_transaction(line: str) -> bool:
  return bool(TRANSACTION_START_RE.match(line.strip()))


def group_transaction_lines(lines: Iterable[str]) -> List[List[str]]:
  """Group continuation lines under the date-led line that opened them.

  Each group is a list of trimmed lines whose first item is the date-led
  line. Lines seen before the first date-led line form a group of their
  own; there is no transaction to attach them to, so they are kept as they
  are and left for the line parser to reject.
  """
  groups = []
  group = []

  for line in lines:
    text = line.strip()
    if starts_transaction(text):
      if group:
        groups.append(group)
      group = [text]
    elif text:
      group.append(text)

  if group:
    groups.append(group)
  return groups


def merge_transaction_lines(lines: Iterable[str]) -> List[str]:
  """One space-joined string per transaction group."""
  return [' '.join(group).strip() for group in group_transaction_lines(lines)]
