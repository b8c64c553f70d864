import unittest

from roll.config import settings
from roll.errors import ParseError, TooLargeError
from roll.expression import *
from roll.parser import MAX_NESTING, parse


def add(a, b):
    return OpExpr("+", a, b)


def sub(a, b):
    return OpExpr("-", a, b)


def mul(a, b):
    return OpExpr("*", a, b)


def div(a, b):
    return OpExpr("/", a, b)


class TestParser(unittest.TestCase):
    def test_number(self) -> None:
        self.assertEqual(parse("123"), ConstExpr(123))
        self.assertEqual(parse("-456"), ConstExpr(-456))
        self.assertEqual(parse("0"), ConstExpr(0))

    def test_dice(self) -> None:
        self.assertEqual(parse("123d456"), RollExpr(123, 456))
        self.assertEqual(parse("2D4"), RollExpr(2, 4))
        self.assertEqual(parse("D8"), RollExpr(1, 8))

    def test_implicit_times(self) -> None:
        self.assertEqual(parse("d6"), parse("1d6"))

    def test_zero_dice(self) -> None:
        self.assertEqual(parse("0d6"), RollExpr(0, 6))

    def test_whitespace(self) -> None:
        self.assertEqual(parse("3 + 4"), parse("3+4"))
        self.assertEqual(parse("3 + 4"), add(ConstExpr(3), ConstExpr(4)))
        self.assertEqual(parse("  d20  "), RollExpr(1, 20))
        self.assertEqual(
            parse("    (    -456)"), GroupExpr(ConstExpr(-456))
        )

    def test_left_associative(self) -> None:
        self.assertEqual(
            parse("1 - 2 - 3"),
            sub(sub(ConstExpr(1), ConstExpr(2)), ConstExpr(3)),
        )
        self.assertEqual(
            parse("8 / 4 * 2"),
            mul(div(ConstExpr(8), ConstExpr(4)), ConstExpr(2)),
        )

    def test_precedence(self) -> None:
        self.assertEqual(
            parse("1 + 2 * 3"),
            add(ConstExpr(1), mul(ConstExpr(2), ConstExpr(3))),
        )
        self.assertEqual(
            parse("1 * 2 - 3 / 4"),
            sub(
                mul(ConstExpr(1), ConstExpr(2)),
                div(ConstExpr(3), ConstExpr(4)),
            ),
        )

    def test_group(self) -> None:
        self.assertEqual(
            parse("123 * (3d20 * 456)"),
            mul(
                ConstExpr(123),
                GroupExpr(mul(RollExpr(3, 20), ConstExpr(456))),
            ),
        )
        self.assertEqual(
            parse("((d6))"), GroupExpr(GroupExpr(RollExpr(1, 6)))
        )

    def test_negative_numbers(self) -> None:
        self.assertEqual(parse("3 * -4"), mul(ConstExpr(3), ConstExpr(-4)))
        self.assertEqual(parse("3-4"), sub(ConstExpr(3), ConstExpr(4)))
        self.assertEqual(parse("3--4"), sub(ConstExpr(3), ConstExpr(-4)))
        self.assertEqual(parse("3 - -4"), sub(ConstExpr(3), ConstExpr(-4)))

    def test_str(self) -> None:
        self.assertEqual(str(parse("(d6-1)*2")), "(1d6 - 1) * 2")

    def test_trailing_input(self) -> None:
        self.assertRaises(ParseError, parse, "3+4)")
        self.assertRaises(ParseError, parse, "3 4")
        self.assertRaises(ParseError, parse, "1 d6")

    def test_invalid(self) -> None:
        for string in [
            "",
            "   ",
            "+ 2",
            "3 +",
            "(3",
            "()",
            "- 4",
            "-d6",
            "-(4)",
            "--4",
            "d6d6",
            "3 * * 4",
            "roll some dice",
        ]:
            with self.subTest(string=string):
                self.assertRaises(ParseError, parse, string)

    def test_zero_sides(self) -> None:
        self.assertRaises(ParseError, parse, "d0")
        self.assertRaises(ParseError, parse, "3d0 + 1")

    def test_integer_range(self) -> None:
        self.assertEqual(
            parse("9223372036854775807"), ConstExpr(MAX_VALUE)
        )
        self.assertEqual(
            parse("-9223372036854775807"), ConstExpr(-MAX_VALUE)
        )
        self.assertRaises(ParseError, parse, "9223372036854775808")
        self.assertRaises(ParseError, parse, "-9223372036854775808")
        self.assertRaises(ParseError, parse, "d99999999999999999999")

    def test_too_many_dice(self) -> None:
        self.assertEqual(
            parse(f"{settings.max_times}d6"), RollExpr(settings.max_times, 6)
        )
        self.assertRaises(
            TooLargeError, parse, f"{settings.max_times + 1}d6"
        )
        self.assertRaises(TooLargeError, parse, "10d6", max_times=5)
        self.assertRaises(TooLargeError, parse, "1 + (10d6)", max_times=5)

    def test_too_many_dice_in_total(self) -> None:
        half = settings.max_times // 2
        self.assertEqual(
            parse(f"{half}d6 + {half}d6"),
            add(RollExpr(half, 6), RollExpr(half, 6)),
        )
        self.assertRaises(
            TooLargeError, parse, f"{half + 1}d6 + {half}d6"
        )
        self.assertRaises(
            TooLargeError, parse, "3d6 * (2d6 - d4)", max_times=5
        )

    def test_total_overflow(self) -> None:
        self.assertRaises(TooLargeError, parse, "9223372036854775807 + 1")
        self.assertRaises(TooLargeError, parse, "-9223372036854775807 - 2")
        self.assertRaises(TooLargeError, parse, "4294967296 * 4294967296")
        self.assertRaises(TooLargeError, parse, "2d9223372036854775807")
        self.assertEqual(
            parse("9223372036854775807 / 2"),
            div(ConstExpr(MAX_VALUE), ConstExpr(2)),
        )

    def test_total_fits(self) -> None:
        self.assertEqual(
            parse("9223372036854775807 - 1"),
            sub(ConstExpr(MAX_VALUE), ConstExpr(1)),
        )
        self.assertEqual(
            parse("-9223372036854775807 - 1").interval(),
            (MIN_VALUE, MIN_VALUE),
        )
        self.assertEqual(
            parse("9223372036854775807 + -9223372036854775807").interval(),
            (0, 0),
        )
        self.assertEqual(
            parse("d9223372036854775807 - 1").interval(), (0, MAX_VALUE - 1)
        )

    def test_overflow_inside(self) -> None:
        for string in [
            "(9223372036854775807 + 9223372036854775807) * 0",
            "4 / (9223372036854775807 + 9223372036854775807)",
            "(9223372036854775807 + 1) - 1",
            "(-9223372036854775807 - 1) / -1",
        ]:
            with self.subTest(string=string):
                self.assertRaises(TooLargeError, parse, string)

    def test_too_large_is_parse_error(self) -> None:
        self.assertTrue(issubclass(TooLargeError, ParseError))

    def test_nesting(self) -> None:
        depth = MAX_NESTING
        self.assertEqual(parse("(" * depth + "1" + ")" * depth).depth, depth + 1)
        depth += 1
        self.assertRaises(
            TooLargeError, parse, "(" * depth + "1" + ")" * depth
        )

    def test_long_expression(self) -> None:
        self.assertEqual(parse("+".join(["1"] * MAX_DEPTH)).depth, MAX_DEPTH)
        self.assertRaises(
            TooLargeError, parse, "+".join(["1"] * (MAX_DEPTH + 1))
        )


class TestExpr(unittest.TestCase):
    def test_hashable(self) -> None:
        self.assertEqual(len({parse("2d6 + 1"), parse("2d6+1")}), 1)

    def test_not_equal(self) -> None:
        self.assertNotEqual(parse("2d6"), parse("2d8"))
        self.assertNotEqual(parse("1 + 2"), parse("1 - 2"))
        self.assertNotEqual(parse("(1)"), parse("1"))

    def test_roll_exprs(self) -> None:
        self.assertEqual(
            parse("d4 + 2 * (3d6 - 1)").roll_exprs(),
            [RollExpr(1, 4), RollExpr(3, 6)],
        )

    def test_interval(self) -> None:
        self.assertEqual(parse("3d6").interval(), (3, 18))
        self.assertEqual(parse("0d6").interval(), (0, 0))
        self.assertEqual(parse("3d6 * -2 + 4 / 0").interval(), (-36, -6))
        self.assertEqual(parse("10 - 2d6").interval(), (-2, 8))
        self.assertEqual(parse("(d6 - 4) * (d4 - 2)").interval(), (-6, 4))
        self.assertEqual(parse("-9 / (d4 - 2)").interval(), (-9, 9))
        self.assertEqual(parse("9 / d4").interval(), (0, 9))

    def test_walk(self) -> None:
        self.assertEqual(
            list(parse("(1 + d4) * 2").walk()),
            [
                parse("(1 + d4) * 2"),
                parse("(1 + d4)"),
                parse("1 + d4"),
                ConstExpr(1),
                RollExpr(1, 4),
                ConstExpr(2),
            ],
        )

    def test_invalid_leaves(self) -> None:
        self.assertRaises(ParseError, RollExpr, 1, 0)
        self.assertRaises(ParseError, RollExpr, -1, 6)
        self.assertRaises(ParseError, ConstExpr, MAX_VALUE + 1)
        self.assertEqual(ConstExpr(MIN_VALUE).value, MIN_VALUE)


if __name__ == "__main__":
    unittest.main()
