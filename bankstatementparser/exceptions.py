"""Errors raised while turning a statement PDF into transactions."""


class StatementParserError(Exception):
  """Base class for statement parsing failures."""

  label = 'Error processing PDF.'


class PdfTextExtractionError(StatementParserError):
  """The PDF could not be decoded into page text."""


class NoTransactionsFoundError(StatementParserError):
  """No page of the statement produced a single transaction."""

  label = 'No transactions found in statement.'

  def __init__(self, message: str = 'Table boundaries not found.', pages: int = 0):
    super().__init__(message)
    self.pages = pages
