"""Statement layout settings.

Defaults describe the one statement layout this package understands. Each
of them can be overridden from the environment, which is how the web app
and the CLI pick them up.
"""

import os
from dataclasses import dataclass, field, replace
from typing import Tuple

DEFAULT_HEADER_MARKER = 'DATE TRANSACTION DETAILS CHEQUE/REFERENCE# DEBIT CREDIT BALANCE'
DEFAULT_END_MARKERS = ('SUMMARY', 'Page ', 'AP-Aut')
DEFAULT_FOOTER_PREFIX = 'Page '
DEFAULT_REFERENCE_PREFIXES = ('UPI', 'FCM', 'IMPS')

# Stray "3 " emitted in front of descriptions by some statement renderings
RENDER_ARTIFACT = '3 '


def _env_flag(name: str, default: bool) -> bool:
  value = os.getenv(name)
  if value is None:
    return default
  return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
  value = os.getenv(name)
  if value is None:
    return default
  # keep trailing spaces, "Page " is a prefix
  return tuple(item.lstrip() for item in value.split(',') if item.strip())


HEADER_MARKER = os.getenv('STATEMENT_HEADER_MARKER', DEFAULT_HEADER_MARKER)
END_MARKERS = _env_list('STATEMENT_END_MARKERS', DEFAULT_END_MARKERS)
REFERENCE_PREFIXES = _env_list('STATEMENT_REFERENCE_PREFIXES', DEFAULT_REFERENCE_PREFIXES)
STRIP_RENDER_ARTIFACT = _env_flag('STRIP_RENDER_ARTIFACT', True)
RECOVER_TRAILING_TEXT = _env_flag('RECOVER_TRAILING_TEXT', True)

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
MAX_UPLOAD_MB = int(os.getenv('MAX_UPLOAD_MB', '25'))
HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', '8080'))


@dataclass(frozen=True)
class ArtifactRule:
  """Text replaced in descriptions after parsing.

  ``count`` limits the number of replacements; ``-1`` replaces them all.
  """
  text: str
  replacement: str = ''
  count: int = 1

  def apply(self, value: str) -> str:
    return value.replace(self.text, self.replacement, self.count)


@dataclass(frozen=True)
class StatementLayout:
  header_marker: str = DEFAULT_HEADER_MARKER
  end_markers: Tuple[str, ...] = DEFAULT_END_MARKERS
  footer_prefix: str = DEFAULT_FOOTER_PREFIX
  reference_prefixes: Tuple[str, ...] = DEFAULT_REFERENCE_PREFIXES
  numeric_references: bool = True
  description_artifacts: Tuple[ArtifactRule, ...] = field(
    default_factory=lambda: (ArtifactRule(RENDER_ARTIFACT),))
  recover_trailing_text: bool = True

  def without_artifact_rules(self) -> 'StatementLayout':
    return replace(self, description_artifacts=())

  def strict(self) -> 'StatementLayout':
    """Layout that rejects lines with text after the amounts."""
    return replace(self, recover_trailing_text=False)


def layout_from_env() -> StatementLayout:
  """Build the layout from the environment-derived settings above."""
  return StatementLayout(
    header_marker=HEADER_MARKER,
    end_markers=END_MARKERS,
    reference_prefixes=REFERENCE_PREFIXES,
    description_artifacts=(ArtifactRule(RENDER_ARTIFACT),) if STRIP_RENDER_ARTIFACT else (),
    recover_trailing_text=RECOVER_TRAILING_TEXT,
  )
