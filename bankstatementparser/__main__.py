import argparse
import json
import logging
import sys

from . import config
from .export import convert_multiple, summarize
from .extractor import StatementExtractor


def build_parser():
  parser = argparse.ArgumentParser(description='Extract transactions from PDF bank statements')
  parser.add_argument('pdfs', nargs='+', help='Input PDF files')
  parser.add_argument('--output', help='Output file (default: stdout)')
  parser.add_argument('--format', choices=['json', 'csv'], default='json', help='Output format')
  parser.add_argument('--no-artifact-strip', action='store_true',
                      help='Keep descriptions exactly as extracted')
  parser.add_argument('--strict', action='store_true',
                      help='Reject lines with text after the amounts')
  parser.add_argument('--log-level', default=config.LOG_LEVEL, help='Logging level')
  return parser


def main(argv=None):
  args = build_parser().parse_args(argv)
  logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s | %(name)s | %(message)s')
  logger = logging.getLogger('bankstatementparser')

  layout = config.layout_from_env()
  if args.no_artifact_strip:
    layout = layout.without_artifact_rules()
  if args.strict:
    layout = layout.strict()

  df = convert_multiple(args.pdfs, StatementExtractor(layout))
  if df.empty:
    logger.error('No transactions found in any input file')
    return 1

  totals = summarize(df)
  logger.info(f"Extracted {totals['count']} transactions "
              f"(debits {totals['total_debit']:.2f}, credits {totals['total_credit']:.2f})")

  if args.format == 'csv':
    body = df.to_csv(index=False)
  else:
    body = json.dumps({'transactions': df.to_dict('records')}, indent=2)

  if args.output:
    with open(args.output, 'w', newline='') as f:
      f.write(body)
  else:
    sys.stdout.write(body)
    if not body.endswith('\n'):
      sys.stdout.write('\n')
  return 0


if __name__ == '__main__':
  sys.exit(main())
