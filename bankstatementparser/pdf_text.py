"""Page text extraction with pdfplumber."""

import io
import logging
from typing import List

import pdfplumber

from .exceptions import PdfTextExtractionError

logger = logging.getLogger(__name__)


def extract_page_texts(data: bytes) -> List[str]:
  """Return one text string per page, in document order."""
  try:
    with pdfplumber.open(io.BytesIO(data)) as pdf:
      texts = []
      for page_num, page in enumerate(pdf.pages):
        text = page.extract_text() or ""
        logger.debug(f"Page {page_num + 1}: extracted {len(text)} characters")
        texts.append(text)
  except Exception as e:
    raise PdfTextExtractionError(f"Could not read PDF text: {e}") from e

  logger.info(f"Extracted text from {len(texts)} pages")
  return texts
