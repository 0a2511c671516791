"""Find the transaction table inside the text of one statement page."""

import logging
from typing import List, Optional

from .config import StatementLayout

logger = logging.getLogger(__name__)


def find_header_line(lines: List[str], header_marker: str) -> Optional[int]:
  """Index of the first line containing the column header row."""
  for i, line in enumerate(lines):
    if header_marker in line:
      return i
  return None


def find_end_line(lines: List[str], start: int, end_markers) -> Optional[int]:
  """Index of the first line after ``start`` beginning with an end marker."""
  for i in range(start + 1, len(lines)):
    if lines[i].startswith(tuple(end_markers)):
      return i
  return None


def locate_table_lines(page_text: str, layout: Optional[StatementLayout] = None) -> Optional[List[str]]:
  """Return the raw candidate lines of the page's transaction table.

  ``None`` means the page has no header row and therefore no table. A
  missing end marker means the table runs to the end of the page.
  """
  layout = layout or StatementLayout()
  lines = [line.rstrip('\r') for line in page_text.split('\n')]

  start = find_header_line(lines, layout.header_marker)
  if start is None:
    logger.debug('No header row on page, skipping')
    return None

  end = find_end_line(lines, start, layout.end_markers)
  if end is None:
    logger.debug(f'No end marker after header line {start}, table runs to end of page')
    end = len(lines)

  candidates = [
    line for line in lines[start + 1:end]
    if line.strip() and not line.startswith(layout.footer_prefix)
  ]
  logger.debug(f'Table spans lines {start + 1}..{end - 1}, {len(candidates)} candidate lines')
  return candidates
