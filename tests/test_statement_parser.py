"""Tests for bank detection and transaction extraction."""
import unittest

from statementflow.categorize import Category
from statementflow.parsing import (
    StatementParser,
    PatternExtractor,
    LineExtractor,
    MatchShape,
    Transaction,
    category_key,
    detect_bank,
    templates_for
)
from statementflow.parsing.parser import LINE_FALLBACK


class TestCategoryKey(unittest.TestCase):
    """Test category_key."""

    def test_keys(self):
        """Test enum values and the fallback."""
        self.assertEqual(category_key(Transaction("03/01", "SHELL", "-1.00", Category.GAS)), "Gas & Fuel")
        self.assertEqual(category_key(Transaction("03/01", "SHELL", "-1.00")), "General")
        self.assertEqual(category_key(Transaction("03/01", "SHELL", "-1.00"), "Uncategorized"), "Uncategorized")


class TestBankDetector(unittest.TestCase):
    """Test detect_bank."""

    def test_known_banks(self):
        """Test each issuer signature."""
        self.assertEqual(detect_bank("JPMorgan Chase Bank, N.A."), "chase")
        self.assertEqual(detect_bank("Statement from Wells Fargo"), "wellsFargo")
        self.assertEqual(detect_bank("Bank of America Advantage"), "bankOfAmerica")
        self.assertEqual(detect_bank("Citibank N.A."), "citi")
        self.assertEqual(detect_bank("U.S. Bank National Association"), "usBank")
        self.assertEqual(detect_bank("Capital One 360"), "capital")

    def test_first_match_wins(self):
        """Test that the earliest signature in the list wins."""
        self.assertEqual(detect_bank("Citibank transfer to CHASE account"), "chase")

    def test_generic(self):
        """Test fallback label."""
        self.assertEqual(detect_bank("03/14 GROCERY STORE -5.75"), "generic")
        self.assertEqual(detect_bank(""), "generic")


class TestTemplates(unittest.TestCase):
    """Test template registry."""

    def test_banks_without_templates_use_generic(self):
        """Test generic fallback list."""
        self.assertEqual(templates_for("citi"), templates_for("generic"))
        self.assertNotEqual(templates_for("chase"), templates_for("generic"))

    def test_shapes(self):
        """Test shapes come from group counts."""
        chase = templates_for("chase")
        self.assertEqual(chase[0].shape, MatchShape.POSTED_DATE)
        self.assertEqual(chase[1].shape, MatchShape.DESCRIPTION)
        self.assertEqual(chase[2].shape, MatchShape.DESCRIPTION)
        self.assertEqual(templates_for("generic")[1].shape, MatchShape.DATE_AMOUNT)


class TestPatternExtractor(unittest.TestCase):
    """Test PatternExtractor."""

    def setUp(self):
        """Set up test fixtures."""
        self.extractor = PatternExtractor()

    def test_chase_simple_template_wins(self):
        """Test that the second chase template stops the cascade."""
        text = (
            "JPMORGAN CHASE BANK\n"
            "01/15 WHOLE FOODS MARKET -45.20\n"
            "01/16 Card Purchase 01/14 AMAZON MKTPLACE -12.99"
        )
        candidates, strategy = self.extractor.extract(text, "chase")

        self.assertEqual(strategy, "chase_simple")
        self.assertEqual(len(candidates), 2)
        self.assertEqual(candidates[0].date, "01/15")
        self.assertEqual(candidates[0].description, "WHOLE FOODS MARKET")
        self.assertEqual(candidates[0].amount, "-45.20")
        # The typed template would have produced 01/16 for this row
        self.assertEqual(candidates[1].date, "01/14")
        self.assertEqual(candidates[1].description, "AMAZON MKTPLACE")
        self.assertEqual(candidates[1].category, Category.ONLINE_SHOPPING)

    def test_chase_typed_template_would_match(self):
        """Test that the third chase template matches the typed row on its own."""
        typed = templates_for("chase")[2]
        match = typed.pattern.search("01/16 Card Purchase 01/14 AMAZON MKTPLACE -12.99")

        self.assertIsNotNone(match)
        self.assertEqual(match.groups(), ("01/16", "AMAZON MKTPLACE", "-12.99"))

    def test_posted_date_shape(self):
        """Test four-group chase rows take description and amount from groups 3 and 4."""
        text = "01/05 Card Purchase 01/04 Shell Oil 555-1234 TX Houston -40.00 1,960.00"
        candidates, strategy = self.extractor.extract(text, "chase")

        self.assertEqual(strategy, "chase_card_detail")
        self.assertEqual(len(candidates), 1)
        self.assertEqual(candidates[0].date, "01/05")
        self.assertEqual(candidates[0].description, "Shell Oil")
        self.assertEqual(candidates[0].amount, "-40.00")
        self.assertEqual(candidates[0].category, Category.GAS)

    def test_generic_date_with_year_and_commas(self):
        """Test date truncation and comma stripping."""
        text = "03/14/2024 NETFLIX.COM -15.99\n04/02/2024 RENT PAYMENT -1,250.00"
        candidates, strategy = self.extractor.extract(text, "generic")

        self.assertEqual(strategy, "generic_description")
        self.assertEqual([c.date for c in candidates], ["03/14", "04/02"])
        self.assertEqual(candidates[0].category, Category.SUBSCRIPTIONS)
        self.assertEqual(candidates[1].amount, "-1250.00")

    def test_date_amount_shape(self):
        """Test two-group rows derive the description from the rest of the match."""
        text = "03/14 UBER TRIP-12.50"
        candidates, strategy = self.extractor.extract(text, "generic")

        self.assertEqual(strategy, "generic_date_amount")
        self.assertEqual(candidates[0].description, "UBER TRIP")
        self.assertEqual(candidates[0].amount, "-12.50")
        self.assertEqual(candidates[0].category, Category.RIDESHARE)

    def test_empty_description_is_synthesized(self):
        """Test placeholder description uses the bank label and 1-based index."""
        candidates, _ = self.extractor.extract("03/01  -5.00", "generic")

        self.assertEqual(candidates[0].description, "generic Transaction 1")

    def test_description_whitespace_and_length(self):
        """Test whitespace collapse and truncation."""
        long_name = "BEST   BUY " + "X" * 80
        candidates, _ = self.extractor.extract(f"05/01 {long_name} -99.99", "generic")

        self.assertTrue(candidates[0].description.startswith("BEST BUY X"))
        self.assertEqual(len(candidates[0].description), 50)

    def test_no_match(self):
        """Test empty result when nothing matches."""
        self.assertEqual(self.extractor.extract("no transactions here", "generic"), ([], None))


class TestLineExtractor(unittest.TestCase):
    """Test LineExtractor."""

    def setUp(self):
        """Set up test fixtures."""
        self.extractor = LineExtractor()

    def test_last_amount_wins(self):
        """Test that the trailing amount on a line is taken."""
        candidates = self.extractor.extract("01/15-COFFEE SHOP -4.50 995.50")

        self.assertEqual(len(candidates), 1)
        self.assertEqual(candidates[0].date, "01/15")
        self.assertEqual(candidates[0].description, "-COFFEE SHOP")
        self.assertEqual(candidates[0].amount, "995.50")

    def test_headers_and_short_lines_skipped(self):
        """Test header markers and short lines are ignored."""
        text = (
            "01/31-Ending Balance 995.50\r\n"
            "TOTAL 01/31-FEES 10.00\n"
            "SUMMARY 01/31 12.00\n"
            "1/2 3.00\n"
            "02/01:TARGET STORE -1,020.00"
        )
        candidates = self.extractor.extract(text)

        self.assertEqual(len(candidates), 1)
        self.assertEqual(candidates[0].description, ":TARGET STORE")
        self.assertEqual(candidates[0].amount, "-1020.00")
        self.assertEqual(candidates[0].category, Category.GENERAL_SHOPPING)

    def test_is_transaction_line(self):
        """Test line qualification rules."""
        self.assertTrue(LineExtractor.is_transaction_line("01/15 THING 4.50"))
        self.assertFalse(LineExtractor.is_transaction_line("01/15 THING"))
        self.assertFalse(LineExtractor.is_transaction_line("THING 4.50"))
        self.assertFalse(LineExtractor.is_transaction_line("01/15 Balance 4.50"))
        self.assertTrue(LineExtractor.is_transaction_line("01/15 balance 4.50"))


class TestStatementParser(unittest.TestCase):
    """Test the full extraction cascade."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = StatementParser()

    def test_generic_statement(self):
        """Test a two-line generic statement."""
        result = self.parser.parse("03/14 STARBUCKS STORE #123 -5.75\n03/15 PAYCHECK DEPOSIT 2500.00")

        self.assertEqual(result.bank, "generic")
        self.assertEqual(len(result.transactions), 2)

        coffee, paycheck = result.transactions
        self.assertEqual(coffee.amount, "-5.75")
        self.assertEqual(coffee.category, Category.COFFEE)
        self.assertEqual(paycheck.amount, "2500.00")
        self.assertIn(paycheck.category, (Category.TRANSFER_IN, Category.OTHER_INCOME))
        self.assertFalse(result.no_transactions_found)

    def test_no_transactions_found(self):
        """Test text without date/amount lines."""
        result = self.parser.parse("Hello world\nThis is not a statement at all")

        self.assertTrue(result.no_transactions_found)
        self.assertEqual(result.candidates_found, 0)
        self.assertIsNone(result.strategy)

    def test_invalid_candidates_dropped(self):
        """Test zero amounts are filtered out."""
        result = self.parser.parse("03/01 FEE REVERSAL 0.00\n03/02 TARGET STORE -20.00")

        self.assertEqual(result.candidates_found, 2)
        self.assertEqual(len(result.transactions), 1)
        self.assertEqual(result.rejected_count, 1)
        self.assertEqual(result.transactions[0].description, "TARGET STORE")

    def test_line_fallback_used(self):
        """Test the fallback runs when no template matches."""
        result = self.parser.parse("01/15-COFFEE SHOP -4.50 995.50\n01/16-GROCERY MART -20.00 975.50")

        self.assertEqual(result.strategy, LINE_FALLBACK)
        self.assertEqual(len(result.transactions), 2)


if __name__ == "__main__":
    unittest.main()
