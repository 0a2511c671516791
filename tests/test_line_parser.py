import unittest
from decimal import Decimal

from bankstatementparser.config import ArtifactRule, StatementLayout
from bankstatementparser.line_merger import group_transaction_lines
from bankstatementparser.line_parser import (
  PrefixReferenceClassifier,
  TokenKind,
  Transaction,
  parse_amount,
  parse_transaction_group,
  parse_transaction_line,
  tokenize_transaction_line,
)


class StartsWithNeft:
  def is_reference(self, token):
    return token.startswith('NEFT')


class LineParserTest(unittest.TestCase):
  def test_debit_with_reference(self):
    txn = parse_transaction_line('05 Jan, 2024 Grocery Store UPI123 -250.00 4750.00')
    self.assertEqual(txn, Transaction(
      date='05 Jan, 2024',
      description='Grocery Store',
      reference='UPI123',
      debit=Decimal('250.00'),
      credit=Decimal(0),
      balance=Decimal('4750.00'),
    ))

  def test_credit_without_reference(self):
    txn = parse_transaction_line('12 Feb, 2024 Salary Credit 50000.00 54750.00')
    self.assertEqual(txn.to_dict(), {
      'date': '12 Feb, 2024',
      'description': 'Salary Credit',
      'reference': '',
      'debit': 0.0,
      'credit': 50000.0,
      'balance': 54750.0,
    })

  def test_numeric_and_prefixed_references(self):
    self.assertEqual(parse_transaction_line('01 Mar, 2024 Cheque deposit 004512 1000.00 2000.00').reference, '004512')
    self.assertEqual(parse_transaction_line('01 Mar, 2024 Transfer IMPS998877 -10.00 1990.00').reference, 'IMPS998877')
    self.assertEqual(parse_transaction_line('01 Mar, 2024 Card fee FCM/0042 -5.00 1985.00').reference, 'FCM/0042')
    self.assertEqual(parse_transaction_line('01 Mar, 2024 Card fee AB12 -5.00 1985.00').reference, '')

  def test_grouped_and_signed_amounts(self):
    txn = parse_transaction_line('03 Apr, 2024 Bonus +1,25,000.00 1,30,000.50')
    self.assertEqual(txn.credit, Decimal('125000.00'))
    self.assertEqual(txn.debit, Decimal(0))
    self.assertEqual(txn.balance, Decimal('130000.50'))

  def test_single_amount_has_zero_balance(self):
    txn = parse_transaction_line('03 Apr, 2024 Interest 12.34')
    self.assertEqual(txn.credit, Decimal('12.34'))
    self.assertEqual(txn.balance, Decimal(0))

  def test_only_last_two_amounts_are_columns(self):
    txn = parse_transaction_line('03 Apr, 2024 Refund of 99.00 order 10.00 20.00 30.00')
    self.assertEqual(txn.description, 'Refund of 99.00 order 10.00')
    self.assertEqual(txn.credit, Decimal('20.00'))
    self.assertEqual(txn.balance, Decimal('30.00'))

  def test_debit_xor_credit(self):
    lines = [
      '05 Jan, 2024 Grocery Store UPI123 -250.00 4750.00',
      '12 Feb, 2024 Salary Credit 50000.00 54750.00',
      '13 Feb, 2024 ATM 1,000.00 -5.00',
      '14 Feb, 2024 Fee -0.50',
    ]
    for line in lines:
      txn = parse_transaction_line(line)
      self.assertTrue((txn.debit > 0) != (txn.credit > 0), line)
      self.assertGreaterEqual(txn.debit, 0)
      self.assertGreaterEqual(txn.credit, 0)

  def test_rejects_line_without_amounts(self):
    self.assertIsNone(parse_transaction_line('12 Feb, 2024 incomplete text'))

  def test_rejects_line_without_date(self):
    self.assertIsNone(parse_transaction_line('Opening balance 1000.00'))
    self.assertIsNone(parse_transaction_line('5 Jan, 2024 Cafe -80.00 920.00'))

  def test_text_after_amounts_is_continuation(self):
    line = '05 Jan, 2024 Grocery Store UPI123 -250.00 4750.00 Continued note'
    txn = parse_transaction_line(line)
    self.assertEqual(txn.description, 'Grocery Store Continued note')
    self.assertEqual(txn.reference, 'UPI123')
    self.assertEqual(txn.debit, Decimal('250.00'))
    self.assertEqual(txn.balance, Decimal('4750.00'))

  def test_strict_layout_rejects_text_after_amounts(self):
    layout = StatementLayout().strict()
    line = '05 Jan, 2024 Grocery Store UPI123 -250.00 4750.00 Continued note'
    self.assertIsNone(parse_transaction_line(line, layout))
    self.assertIsNotNone(parse_transaction_line('05 Jan, 2024 Grocery Store UPI123 -250.00 4750.00', layout))

  def test_numbers_in_wrapped_lines_are_not_amounts(self):
    groups = group_transaction_lines(['05 Jan, 2024 Forex Card UPI1 -250.00 4750.00', 'FX rate 83.25'])
    txn = parse_transaction_group(groups[0])
    self.assertEqual(txn, Transaction(
      date='05 Jan, 2024',
      description='Forex Card FX rate 83.25',
      reference='UPI1',
      debit=Decimal('250.00'),
      credit=Decimal(0),
      balance=Decimal('4750.00'),
    ))

  def test_wrapped_lines_are_continuation_tokens(self):
    tokens = tokenize_transaction_line(
      '05 Jan, 2024 Forex Card UPI1 -250.00 4750.00', continuation=['FX rate 83.25', 'ref 12.00'])
    self.assertEqual(
      [t.text for t in tokens if t.kind is TokenKind.AMOUNT], ['-250.00', '4750.00'])
    self.assertEqual(
      [t.text for t in tokens if t.kind is TokenKind.CONTINUATION], ['FX', 'rate', '83.25', 'ref', '12.00'])

  def test_strict_layout_rejects_wrapped_group(self):
    layout = StatementLayout().strict()
    self.assertIsNone(parse_transaction_group(['05 Jan, 2024 Cafe -80.00 920.00', 'table 4'], layout))
    self.assertIsNotNone(parse_transaction_group(['05 Jan, 2024 Cafe -80.00 920.00'], layout))

  def test_group_without_date_line_is_rejected(self):
    self.assertIsNone(parse_transaction_group(['brought forward 10.00 20.00']))
    self.assertIsNone(parse_transaction_group([]))

  def test_render_artifact_removed_once(self):
    txn = parse_transaction_line('05 Jan, 2024 3 Coffee 3 Shop 123456 -80.00 920.00')
    self.assertEqual(txn.description, 'Coffee 3 Shop')
    self.assertEqual(txn.reference, '123456')

  def test_artifact_rules_can_be_disabled_or_replaced(self):
    line = '05 Jan, 2024 Gate 3 Parking -40.00 880.00'
    layout = StatementLayout().without_artifact_rules()
    self.assertEqual(parse_transaction_line(line, layout).description, 'Gate 3 Parking')

    layout = StatementLayout(description_artifacts=(ArtifactRule('Parking', 'Car park'),))
    self.assertEqual(parse_transaction_line(line, layout).description, 'Gate 3 Car park')

  def test_custom_reference_classifier(self):
    line = '05 Jan, 2024 Rent NEFT0099 UPI77 -100.00 900.00'
    txn = parse_transaction_line(line, classifier=StartsWithNeft())
    self.assertEqual(txn.reference, '')
    self.assertEqual(txn.description, 'Rent NEFT0099 UPI77')

    txn = parse_transaction_line('05 Jan, 2024 Rent NEFT0099 -100.00 900.00', classifier=StartsWithNeft())
    self.assertEqual(txn.reference, 'NEFT0099')

  def test_prefix_classifier_without_numeric_references(self):
    classifier = PrefixReferenceClassifier(prefixes=('UPI',), numeric=False)
    self.assertTrue(classifier.is_reference('UPI/123'))
    self.assertFalse(classifier.is_reference('004512'))
    self.assertFalse(classifier.is_reference('IMPS1'))

  def test_tokenize_follows_grammar(self):
    tokens = tokenize_transaction_line('05 Jan, 2024 Grocery Store UPI123 -250.00 4750.00 note')
    self.assertEqual([t.kind for t in tokens], [
      TokenKind.DATE,
      TokenKind.WORD,
      TokenKind.WORD,
      TokenKind.REFERENCE,
      TokenKind.AMOUNT,
      TokenKind.AMOUNT,
      TokenKind.CONTINUATION,
    ])
    self.assertEqual(tokens[0].text, '05 Jan, 2024')

  def test_parse_amount(self):
    self.assertEqual(parse_amount('-1,200.50'), Decimal('-1200.50'))
    self.assertEqual(parse_amount('+75.00'), Decimal('75.00'))
    self.assertEqual(parse_amount('1-2.00'), Decimal(0))


if __name__ == '__main__':
  unittest.main()
