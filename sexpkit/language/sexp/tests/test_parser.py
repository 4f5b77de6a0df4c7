#
# Copyright (c) 2023 Radiance Technologies, Inc.
#
# This file is part of SEXPKIT.
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Lesser General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this program. If not, see
# <http://www.gnu.org/licenses/>.
#
"""
Test suite for s-expression parsing.
"""

import pickle
import unittest

from sexpkit.language.sexp import parse_all, parse_one
from sexpkit.language.sexp.atom import SexpAtom
from sexpkit.language.sexp.exception import (
    SexpLexException,
    SexpParseException,
)
from sexpkit.language.sexp.list import SexpList
from sexpkit.language.sexp.parser import SexpParser, StreamAction
from sexpkit.language.sexp.token import Token, TokenKind


class TestSexpParser(unittest.TestCase):
    """
    Test suite for `SexpParser`.
    """

    def test_parse(self):
        """
        Verify basic parsing functionality.
        """
        parse = SexpParser.parse
        with self.assertRaises(SexpParseException):
            parse("")
        with self.assertRaises(SexpParseException):
            parse("() ()")
        with self.assertRaises(SexpParseException):
            parse("(")
        with self.assertRaises(SexpParseException):
            parse("())")
        with self.assertRaises(SexpParseException):
            parse('("asdfasdf)"')
        self.assertEqual(parse('"())"'), SexpAtom("())"))
        self.assertEqual(str(parse('"())"')), '"())"')
        self.assertEqual(str(parse("()")), "()")
        self.assertEqual(
            str(parse('(expr \n  (v "literal")\n  (loc ([LOC])))')),
            '(expr (v literal) (loc ([LOC])))')
        self.assertEqual(
            parse("(hello world)"),
            SexpList.of(SexpAtom("hello"),
                        SexpAtom("world")))
        self.assertEqual(str(parse("日本語能力!!ソﾊﾝｶｸ")), "日本語能力!!ソﾊﾝｶｸ")

    def test_parse_nested(self):
        """
        Verify that nesting and element order are preserved.
        """
        expected = SexpList.of(
            SexpAtom("a"),
            SexpList.of(SexpAtom("b"),
                        SexpAtom("c")),
            SexpAtom("d"))
        self.assertEqual(SexpParser.parse("(a (b c) d)"), expected)
        self.assertEqual(SexpParser.parse("  (  a (b   c)  d  )  "), expected)
        commented = "; leading\n(a ; inline\n (b c) d) ; trailing"
        self.assertEqual(SexpParser.parse(commented), expected)

    def test_parse_numbers(self):
        """
        Verify that numbers remain textual atoms.
        """
        self.assertEqual(
            SexpParser.parse("(123 -456 3.14 -2.71)").to_python_ds(),
            ["123",
             "-456",
             "3.14",
             "-2.71"])

    def test_parse_deep(self):
        """
        Verify that deep nesting does not exhaust the recursion limit.
        """
        depth = 5000
        text = "(" * depth + "x" + ")" * depth
        sexp = SexpParser.parse(text)
        self.assertEqual(str(sexp), text)
        self.assertEqual(sexp, SexpParser.parse(text))
        self.assertNotEqual(sexp, SexpParser.parse(text.replace("x", "y")))
        self.assertEqual(hash(sexp), hash(SexpParser.parse(text)))
        self.assertEqual(sexp.height, depth)
        self.assertEqual(sexp.num_nodes, depth + 1)
        self.assertEqual(sexp.num_leaves, 1)
        for _ in range(depth - 1):
            self.assertEqual(len(sexp), 1)
            sexp = sexp[0]
        self.assertEqual(sexp, SexpList.of(SexpAtom("x")))

    def test_parse_list(self):
        """
        Verify parsing of documents with multiple expressions.
        """
        self.assertEqual(SexpParser.parse_list(""), [])
        self.assertEqual(SexpParser.parse_list("  ; nothing\n"), [])
        sexps = SexpParser.parse_list('atom (list 1 2 3) "quoted string"')
        self.assertEqual(len(sexps), 3)
        self.assertEqual(sexps[0], SexpAtom("atom"))
        self.assertTrue(sexps[1].is_list())
        self.assertEqual(len(sexps[1]), 4)
        self.assertEqual(sexps[2].content, "quoted string")
        # aliases
        self.assertEqual(parse_all("a b"), [SexpAtom("a"), SexpAtom("b")])
        self.assertEqual(parse_one("a"), SexpAtom("a"))

    def test_idempotent(self):
        """
        Verify that parsing is deterministic and display forms re-parse.
        """
        text = '(a "b c" (d "e\\"f" "") "\\\\x" "tab\\there")'
        first = SexpParser.parse_list(text)
        second = SexpParser.parse_list(text)
        self.assertEqual(first, second)
        self.assertEqual(
            SexpParser.parse_list(" ".join(str(s) for s in first)),
            first)

    def test_errors(self):
        """
        Verify the kinds and positions of structural errors.
        """
        with self.assertRaises(SexpParseException) as cm:
            SexpParser.parse("invalid ) syntax")
        self.assertEqual(cm.exception.position, 8)
        self.assertEqual(
            cm.exception.message,
            "Unexpected closing parenthesis")
        with self.assertRaises(SexpParseException) as cm:
            SexpParser.parse_list("a b)")
        self.assertEqual(cm.exception.position, 3)
        with self.assertRaises(SexpParseException) as cm:
            SexpParser.parse("(a (b c)")
        self.assertEqual(cm.exception.message, "Unterminated list")
        self.assertEqual(cm.exception.position, 0)
        with self.assertRaises(SexpParseException) as cm:
            SexpParser.parse("(a (b c")
        self.assertEqual(cm.exception.position, 3)
        with self.assertRaises(SexpParseException) as cm:
            SexpParser.parse("; just a comment")
        self.assertEqual(cm.exception.message, "Unexpected end of input")
        self.assertEqual(cm.exception.position, 16)
        with self.assertRaises(SexpParseException) as cm:
            SexpParser.parse("a b")
        self.assertEqual(
            str(cm.exception),
            "Unexpected content after s-expression at position 2")
        with self.assertRaises(SexpLexException) as cm:
            SexpParser.parse('(a "unterminated)')
        self.assertEqual(cm.exception.position, 3)
        exc = pickle.loads(pickle.dumps(cm.exception))
        self.assertIsInstance(exc, SexpLexException)
        self.assertEqual(str(exc), "Unterminated string literal at position 3")

    def test_parse_iter(self):
        """
        Verify that expressions are parsed on demand.
        """
        sexps = SexpParser.parse_iter("a (b c) ) d")
        self.assertEqual(next(sexps), SexpAtom("a"))
        self.assertEqual(
            next(sexps),
            SexpList.of(SexpAtom("b"),
                        SexpAtom("c")))
        with self.assertRaises(SexpParseException):
            next(sexps)
        self.assertEqual(list(SexpParser.parse_iter("")), [])

    def test_parse_streaming(self):
        """
        Verify that the handler sees each expression in order.
        """
        collected = []
        delivered = SexpParser.parse_streaming(
            "a (b c) d",
            collected.append)
        self.assertEqual(delivered, 3)
        self.assertEqual(
            collected,
            [SexpAtom("a"),
             SexpList.of(SexpAtom("b"),
                         SexpAtom("c")),
             SexpAtom("d")])

    def test_parse_streaming_stop(self):
        """
        Verify that stopping skips the rest of the input.
        """
        collected = []

        def handler(sexp):
            collected.append(sexp)
            if sexp.is_list():
                return StreamAction.Stop
            return StreamAction.Continue

        # the malformed remainder is never scanned
        delivered = SexpParser.parse_streaming(
            'a (b) ) "unterminated',
            handler)
        self.assertEqual(delivered, 2)
        self.assertEqual(collected[-1], SexpList.of(SexpAtom("b")))

    def test_parse_streaming_error(self):
        """
        Verify that expressions before an error are still delivered.
        """
        collected = []
        with self.assertRaises(SexpParseException):
            SexpParser.parse_streaming("a b (c", collected.append)
        self.assertEqual(collected, [SexpAtom("a"), SexpAtom("b")])

    def test_token_input(self):
        """
        Verify parsing of an explicit token sequence.
        """
        tokens = [
            Token(TokenKind.LPAR,
                  0),
            Token(TokenKind.ATOM,
                  1,
                  "x"),
            Token(TokenKind.RPAR,
                  2),
            Token(TokenKind.EOF,
                  3)
        ]
        self.assertEqual(
            SexpParser(tokens).parse_one(),
            SexpList.of(SexpAtom("x")))
        with self.assertRaises(SexpParseException):
            SexpParser(tokens[:-1]).parse_all()

    def test_from_python_ds(self):
        """
        Verify conversion from Python lists and strings.
        """
        sexp = SexpParser.from_python_ds(["port", 8080, ["a", []]])
        self.assertEqual(str(sexp), "(port 8080 (a ()))")
        self.assertEqual(sexp.to_python_ds(), ["port", "8080", ["a", []]])


if __name__ == '__main__':
    unittest.main()
