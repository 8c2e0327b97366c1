import unittest
from decimal import Decimal

from marathon.domain.money import to_decimal, percentage, format_money, total, to_storage, compound, multiply


class TestMoney(unittest.TestCase):

    def test_to_decimal(self):
        self.assertEqual(to_decimal("100.50"), Decimal("100.50"))
        self.assertEqual(to_decimal(7), Decimal(7))
        with self.assertRaises(TypeError):
            to_decimal(1.5)
        with self.assertRaises(TypeError):
            to_decimal(True)
        for bad in ("abc", "NaN", "Infinity"):
            with self.subTest(value=bad):
                with self.assertRaises(ValueError):
                    to_decimal(bad)

    def test_percentage(self):
        self.assertEqual(percentage(1, 8), 13)
        self.assertEqual(percentage(2, 3), 67)
        self.assertEqual(percentage(1, 3), 33)
        self.assertEqual(percentage(5, 0), 0)

    def test_large_values_stay_exact(self):
        value = compound(Decimal("999999999999.99"), Decimal("99.99"), 365)
        self.assertEqual(to_decimal(to_storage(value)), value)
        self.assertNotIn("E", to_storage(value))
        self.assertEqual(total([value, value]), multiply(value, Decimal(2)))

    def test_format_money(self):
        self.assertEqual(format_money(Decimal("1234.5"), "R"), "R 1,234.50")


if __name__ == '__main__':
    unittest.main()
