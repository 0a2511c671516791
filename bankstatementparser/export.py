"""Tabular views of parsed transactions."""

import logging
import os
from typing import Callable, Dict, List, Optional

import pandas as pd

from .exceptions import StatementParserError
from .extractor import StatementExtractor
from .line_parser import Transaction

logger = logging.getLogger(__name__)

COLUMNS = ['date', 'description', 'reference', 'debit', 'credit', 'balance']


def transactions_to_dataframe(transactions: List[Transaction]) -> pd.DataFrame:
  """Create a DataFrame with one row per transaction."""
  if not transactions:
    return pd.DataFrame(columns=COLUMNS)
  return pd.DataFrame([t.to_dict() for t in transactions], columns=COLUMNS)


def convert_multiple(
  pdf_paths: List[str],
  extractor: Optional[StatementExtractor] = None,
  progress_callback: Optional[Callable] = None,
) -> pd.DataFrame:
  """Parse several statement files and combine them into one frame.

  Files that fail are logged and left out; each row records the file it
  came from in ``source_file``.
  """
  extractor = extractor or StatementExtractor()
  frames = []
  total_files = len(pdf_paths)

  for i, path in enumerate(pdf_paths):
    name = os.path.basename(path)
    if progress_callback:
      progress_callback(i * 100 // max(total_files, 1), f'Processing {name}...')

    try:
      with open(path, 'rb') as f:
        transactions = extractor.extract(f.read())
    except (OSError, StatementParserError) as e:
      logger.error(f"Error processing {path}: {e}")
      continue

    df = transactions_to_dataframe(transactions)
    df['source_file'] = name
    frames.append(df)

  if progress_callback:
    progress_callback(100, 'Processing complete!')

  if not frames:
    return pd.DataFrame(columns=COLUMNS + ['source_file'])
  return pd.concat(frames, ignore_index=True)


def summarize(df: pd.DataFrame) -> Dict[str, float]:
  """Totals over a transactions frame."""
  return {
    'count': int(len(df)),
    'total_debit': float(df['debit'].sum()) if len(df) else 0.0,
    'total_credit': float(df['credit'].sum()) if len(df) else 0.0,
  }
