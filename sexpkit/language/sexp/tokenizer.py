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
Defines a tokenizer of s-expressions.
"""
import logging
import re
from typing import Iterator, List, NoReturn

from sexpkit.language.sexp.dialect import DEFAULT_DIALECT, SexpDialect
from sexpkit.language.sexp.exception import SexpLexException
from sexpkit.language.sexp.token import Token, TokenKind
from sexpkit.util.logging import default_log_level, log_and_raise
from sexpkit.util.re import char_class

logger = logging.getLogger(__name__)
logger.setLevel(default_log_level())


class SexpTokenizer:
    """
    A single-use, lazy scanner over the tokens of a text buffer.

    Iterating over the tokenizer yields each token only once the scan
    has reached it, so characters beyond the yielded token (and any
    whitespace or comments that precede it) are not examined until the
    next token is requested.
    The final token is always `TokenKind.EOF`.

    Parameters
    ----------
    text : str
        The text to tokenize.
    dialect : SexpDialect, optional
        The lexical dialect of `text`, by default `DEFAULT_DIALECT`.
    """

    def __init__(
            self,
            text: str,
            dialect: SexpDialect = DEFAULT_DIALECT) -> None:
        self.text = text
        self.dialect = dialect
        self.position = 0
        """
        The offset of the next character to be scanned.
        """
        self._escapes = dialect.escape_table
        self._unquoted_regex = re.compile(
            char_class(dialect.atom_terminators,
                       negate=True,
                       raw=r"\s") + "*")

    def __iter__(self) -> Iterator[Token]:  # noqa: D105
        text = self.text
        dialect = self.dialect
        end = len(text)
        self.position = 0
        while True:
            self._skip_whitespace_and_comments()
            if self.position >= end:
                break
            c = text[self.position]
            if c == dialect.lpar:
                token = Token(TokenKind.LPAR, self.position)
                self.position += 1
            elif c == dialect.rpar:
                token = Token(TokenKind.RPAR, self.position)
                self.position += 1
            elif c == dialect.quote:
                token = self._read_quoted()
            else:
                token = self._read_unquoted()
            # end if
            yield token
        # end while
        yield Token(TokenKind.EOF, end)

    def _fail(self, msg: str, position: int) -> NoReturn:
        log_and_raise(logger, msg, SexpLexException, position)

    def _skip_whitespace_and_comments(self) -> None:
        text = self.text
        end = len(text)
        while self.position < end:
            c = text[self.position]
            if c.isspace():
                self.position += 1
            elif c == self.dialect.comment:
                newline = text.find("\n", self.position)
                self.position = end if newline < 0 else newline + 1
            else:
                break
            # end if
        # end while

    def _read_quoted(self) -> Token:
        """
        Scan a quoted atom starting at the current (quote) character.

        Raises
        ------
        SexpLexException
            If the input ends before the closing quote, positioned at
            the opening quote.
        """
        text = self.text
        end = len(text)
        start = self.position
        self.position += 1
        chunks: List[str] = []
        while self.position < end:
            c = text[self.position]
            if c == self.dialect.quote:
                self.position += 1
                return Token(TokenKind.ATOM, start, ''.join(chunks))
            elif c == self.dialect.escape:
                if self.position + 1 >= end:
                    break
                escaped = text[self.position + 1]
                chunks.append(self._escapes.get(escaped, c + escaped))
                self.position += 2
            else:
                chunks.append(c)
                self.position += 1
            # end if
        # end while
        self._fail("Unterminated string literal", start)

    def _read_unquoted(self) -> Token:
        """
        Scan an unquoted atom starting at the current character.

        Raises
        ------
        SexpLexException
            If no character could be consumed.
            This cannot happen with the default dialect since the
            current character is never a terminator when this method is
            called, but a dialect whose terminators overlap with the
            characters dispatched to this method would trigger it.
        """
        start = self.position
        match = self._unquoted_regex.match(self.text, start)
        if match.end() == start:
            self._fail(f"Unexpected character {self.text[start]!r}", start)
        self.position = match.end()
        return Token(TokenKind.ATOM, start, match.group(0))


def iter_tokens(
        text: str,
        dialect: SexpDialect = DEFAULT_DIALECT) -> Iterator[Token]:
    """
    Lazily tokenize the given text.

    Parameters
    ----------
    text : str
        A fully materialized text buffer.
    dialect : SexpDialect, optional
        The lexical dialect of `text`, by default `DEFAULT_DIALECT`.

    Returns
    -------
    Iterator[Token]
        An iterator over the tokens of `text` that scans no further
        than needed to produce each token.
    """
    return iter(SexpTokenizer(text, dialect))


def tokenize(text: str, dialect: SexpDialect = DEFAULT_DIALECT) -> List[Token]:
    """
    Convert the given text into a sequence of lexical tokens.

    Parameters
    ----------
    text : str
        A fully materialized text buffer.
    dialect : SexpDialect, optional
        The lexical dialect of `text`, by default `DEFAULT_DIALECT`.

    Returns
    -------
    List[Token]
        The tokens of `text` in order, terminated by exactly one
        `TokenKind.EOF` token.

    Raises
    ------
    SexpLexException
        If a quoted atom is not terminated.
        No tokens are returned in this case.
    """
    tokens = list(iter_tokens(text, dialect))
    logger.debug(f"Tokenized {len(text)} characters into {len(tokens)} tokens")
    return tokens
