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
Test suite for s-expression tokenization.
"""

import unittest

from sexpkit.language.sexp.dialect import SexpDialect
from sexpkit.language.sexp.exception import (
    SexpLexException,
    SexpParseException,
)
from sexpkit.language.sexp.token import Token, TokenKind
from sexpkit.language.sexp.tokenizer import (
    SexpTokenizer,
    iter_tokens,
    tokenize,
)


def _atom(value: str, offset: int) -> Token:
    return Token(TokenKind.ATOM, offset, value)


class TestTokenize(unittest.TestCase):
    """
    Test suite for `tokenize`.
    """

    def test_empty(self):
        """
        Verify that empty input yields only the end of input.
        """
        self.assertEqual(tokenize(""), [Token(TokenKind.EOF, 0)])
        self.assertEqual(tokenize("  \n\t "), [Token(TokenKind.EOF, 5)])

    def test_comments(self):
        """
        Verify that comments produce no tokens.
        """
        text = "; just a comment\n"
        self.assertEqual(tokenize(text), [Token(TokenKind.EOF, len(text))])
        # comment running to end of input without a newline
        self.assertEqual(tokenize("a ; trailing"), [
            _atom("a", 0),
            Token(TokenKind.EOF, 12)
        ])
        # a comment terminates an unquoted atom
        self.assertEqual(
            tokenize("abc;def\nghi"),
            [_atom("abc",
                   0),
             _atom("ghi",
                   8),
             Token(TokenKind.EOF,
                   11)])

    def test_delimiters(self):
        """
        Verify that parentheses are tokenized with their offsets.
        """
        self.assertEqual(
            tokenize("(hello world)"),
            [
                Token(TokenKind.LPAR,
                      0),
                _atom("hello",
                      1),
                _atom("world",
                      7),
                Token(TokenKind.RPAR,
                      12),
                Token(TokenKind.EOF,
                      13)
            ])
        self.assertEqual(
            [t.kind for t in tokenize("(()")],
            [TokenKind.LPAR,
             TokenKind.LPAR,
             TokenKind.RPAR,
             TokenKind.EOF])

    def test_unquoted_atoms(self):
        """
        Verify the extent of unquoted atoms.
        """
        self.assertEqual(
            [t.value for t in tokenize('a-b.c 12 -3.5 x"y"')],
            ["a-b.c",
             "12",
             "-3.5",
             "x",
             "y",
             None])
        # backslashes are not escapes outside of quotes
        self.assertEqual(tokenize(r"a\b")[0], _atom(r"a\b", 0))
        self.assertEqual(tokenize("日本語")[0], _atom("日本語", 0))

    def test_quoted_atoms(self):
        """
        Verify that quoted atoms are decoded.
        """
        tests = {
            r'"\n"': "\n",
            r'"\r"': "\r",
            r'"\t"': "\t",
            r'"\\"': "\\",
            r'"\""': '"',
            r'"\x"': "\\x",
            '"hello world"': "hello world",
            '"(not a list)"': "(not a list)",
            '"; not a comment"': "; not a comment",
            '""': "",
        }
        for text, expected in tests.items():
            with self.subTest(text=text):
                tokens = tokenize(text)
                self.assertEqual(tokens[0], _atom(expected, 0))
                self.assertEqual(tokens[1], Token(TokenKind.EOF, len(text)))

    def test_unterminated_string(self):
        """
        Verify that unterminated quotes are positioned at their start.
        """
        with self.assertRaises(SexpLexException) as cm:
            tokenize('"abc')
        self.assertEqual(cm.exception.position, 0)
        self.assertIn("Unterminated string literal", str(cm.exception))
        with self.assertRaises(SexpLexException) as cm:
            tokenize('(a "b\\')
        self.assertEqual(cm.exception.position, 3)
        # lexing errors are parse errors too
        self.assertRaises(SexpParseException, tokenize, '(x "')

    def test_zero_length_atom(self):
        """
        Verify the defensive check against empty unquoted atoms.
        """
        tokenizer = SexpTokenizer("a)")
        tokenizer.position = 1
        with self.assertRaises(SexpLexException) as cm:
            tokenizer._read_unquoted()
        self.assertEqual(cm.exception.position, 1)
        self.assertIn("Unexpected character", cm.exception.message)

    def test_iter_tokens_is_lazy(self):
        """
        Verify that tokens are scanned only on demand.
        """
        tokens = iter_tokens('(a) "unterminated')
        self.assertEqual(next(tokens).kind, TokenKind.LPAR)
        self.assertEqual(next(tokens), _atom("a", 1))
        self.assertEqual(next(tokens).kind, TokenKind.RPAR)
        with self.assertRaises(SexpLexException):
            next(tokens)

    def test_dialect(self):
        """
        Verify that an alternative dialect changes the lexical grammar.
        """
        dialect = SexpDialect(lpar="[", rpar="]", comment="#")
        self.assertEqual(
            [t.kind for t in tokenize("[a # (b\n]", dialect)],
            [TokenKind.LPAR,
             TokenKind.ATOM,
             TokenKind.RPAR,
             TokenKind.EOF])
        with self.assertRaises(ValueError):
            SexpDialect(lpar="(", rpar="(")
        with self.assertRaises(ValueError):
            SexpDialect(comment="//")


if __name__ == '__main__':
    unittest.main()
