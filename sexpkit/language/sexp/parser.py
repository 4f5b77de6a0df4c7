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
Defines a parser of s-expressions.
"""
import logging
from enum import Enum
from typing import (
    Any,
    Callable,
    Iterable,
    Iterator,
    List,
    NoReturn,
    Optional,
    Tuple,
)

from sexpkit.language.sexp.atom import SexpAtom
from sexpkit.language.sexp.dialect import DEFAULT_DIALECT, SexpDialect
from sexpkit.language.sexp.exception import SexpParseException
from sexpkit.language.sexp.list import SexpList
from sexpkit.language.sexp.node import SexpNode
from sexpkit.language.sexp.token import Token, TokenKind
from sexpkit.language.sexp.tokenizer import iter_tokens
from sexpkit.util.logging import default_log_level, log_and_raise

logging.getLogger(__name__).setLevel(default_log_level())


class StreamAction(Enum):
    """
    Records whether a streaming parse should continue.
    """

    Continue = 0
    Stop = 1


class SexpParser:
    """
    A predictive parser over a stream of lexical tokens.

    Each instance owns its token stream and is an iterator over the
    top-level expressions of the stream, parsing each only once it is
    requested.
    At most one token beyond the last delivered expression is ever
    read, and only when the next expression is requested.
    Instances must not be shared between concurrent consumers.

    The class methods `parse`, `parse_list`, `parse_iter`, and
    `parse_streaming` parse text directly.

    Parameters
    ----------
    tokens : Iterable[Token]
        The tokens to parse, which must end with a `TokenKind.EOF`
        token.
    """

    logger = logging.getLogger(__name__)

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = iter(tokens)
        self._lookahead: Optional[Token] = None

    def __iter__(self) -> Iterator[SexpNode]:  # noqa: D105
        return self

    def __next__(self) -> SexpNode:
        """
        Parse the next top-level expression.

        Raises
        ------
        StopIteration
            If the end of input has been reached.
        SexpParseException
            If the next expression is malformed.
        """
        if self._peek().is_eof():
            raise StopIteration
        return self.parse_expression()

    def _fail(self, msg: str, position: int) -> NoReturn:
        log_and_raise(self.logger, msg, SexpParseException, position)

    def _peek(self) -> Token:
        if self._lookahead is None:
            token = next(self._tokens, None)
            if token is None:
                self._fail("Token stream ended without end of input", -1)
            self._lookahead = token
        return self._lookahead

    def _advance(self) -> Token:
        """
        Consume the next token.

        The end-of-input token is never consumed so that it may be
        observed repeatedly.
        """
        token = self._peek()
        if not token.is_eof():
            self._lookahead = None
        return token

    def parse_expression(self) -> SexpNode:
        """
        Parse exactly one expression from the token stream.

        Nested lists are built with an explicit stack rather than
        recursion, so parsing arbitrarily deep input does not exhaust
        the interpreter's recursion limit.
        See `SexpList` for which operations on the result are likewise
        free of recursion.

        Returns
        -------
        SexpNode
            The next complete expression.

        Raises
        ------
        SexpParseException
            If the end of input is reached before an expression is
            complete or a closing parenthesis has no matching opening
            parenthesis.
        """
        # each frame holds an opening parenthesis and the children
        # parsed since
        stack: List[Tuple[Token, List[SexpNode]]] = []
        while True:
            token = self._advance()
            if token.kind == TokenKind.ATOM:
                node = SexpAtom(token.value)
            elif token.kind == TokenKind.LPAR:
                stack.append((token, []))
                continue
            elif token.kind == TokenKind.RPAR:
                if not stack:
                    self._fail("Unexpected closing parenthesis", token.offset)
                _, children = stack.pop()
                node = SexpList(children)
            elif token.kind == TokenKind.EOF:
                if stack:
                    self._fail("Unterminated list", stack[-1][0].offset)
                else:
                    self._fail("Unexpected end of input", token.offset)
            else:
                raise AssertionError(f"Unhandled token kind {token.kind}")
            # end if
            if not stack:
                return node
            stack[-1][1].append(node)
        # end while

    def parse_one(self) -> SexpNode:
        """
        Parse a single expression that must span the whole stream.

        Raises
        ------
        SexpParseException
            If there is no expression, it is malformed, or any token
            besides the end of input follows it.
        """
        node = self.parse_expression()
        trailing = self._peek()
        if trailing.kind == TokenKind.RPAR:
            self._fail("Unexpected closing parenthesis", trailing.offset)
        elif not trailing.is_eof():
            self._fail(
                "Unexpected content after s-expression",
                trailing.offset)
        return node

    def parse_all(self) -> List[SexpNode]:
        """
        Parse every remaining top-level expression.
        """
        return list(self)

    @classmethod
    def from_python_ds(cls, python_ds: Any) -> SexpNode:
        """
        Convert a Python str/list s-expression to an `SexpNode`.

        Parameters
        ----------
        python_ds : Any
            A standalone term in an s-expression represented by Python
            iterables and strings.
            Other scalars (e.g., numbers) are converted to atoms with
            `str`.

        Returns
        -------
        SexpNode
            An abstract, tree-structured representation of the given
            s-expression term.

        See Also
        --------
        SexpNode.to_python_ds : For the inverse operation.
        """
        if isinstance(python_ds, SexpNode):
            return python_ds
        elif isinstance(python_ds, str) or not isinstance(python_ds,
                                                          Iterable):
            return SexpAtom(python_ds)
        else:
            return SexpList([cls.from_python_ds(child) for child in python_ds])
        # end if

    @classmethod
    def parse(
            cls,
            sexp_str: str,
            dialect: SexpDialect = DEFAULT_DIALECT) -> SexpNode:
        r"""
        Parse a string of s-expression to a structured s-expression.

        Escape sequences within quoted atoms are decoded (e.g.,
        ``\\n`` is stored as a newline in the returned `SexpNode`).
        Unrecognized escape sequences are preserved verbatim.

        Parameters
        ----------
        sexp_str : str
            A string representing a standalone term in an s-expression.
        dialect : SexpDialect, optional
            The lexical dialect of `sexp_str`, by default
            `DEFAULT_DIALECT`.

        Returns
        -------
        SexpNode
            The deserialized representation of the given s-expression.

        Raises
        ------
        SexpParseException
            If the given s-expression string yields anything other than
            exactly one node or is malformed.
        """
        return cls(iter_tokens(sexp_str, dialect)).parse_one()

    @classmethod
    def parse_list(
            cls,
            sexp_str: str,
            dialect: SexpDialect = DEFAULT_DIALECT) -> List[SexpNode]:
        """
        Parse a string of a sequence of s-expressions into `SexpNode`s.

        A single s-expression yields a singleton list and an empty
        document yields an empty list.

        Parameters
        ----------
        sexp_str : str
            A document containing zero or more top-level s-expressions.
        dialect : SexpDialect, optional
            The lexical dialect of `sexp_str`, by default
            `DEFAULT_DIALECT`.

        Returns
        -------
        list of SexpNode
            The top-level expressions in document order.

        Raises
        ------
        SexpParseException
            If the s-expression cannot be parsed, e.g., due to a syntax
            error.
        """
        sexps = cls(iter_tokens(sexp_str, dialect)).parse_all()
        cls.logger.debug(f"Parsed {len(sexps)} top-level s-expressions")
        return sexps

    @classmethod
    def parse_iter(
            cls,
            sexp_str: str,
            dialect: SexpDialect = DEFAULT_DIALECT) -> Iterator[SexpNode]:
        """
        Lazily parse the top-level s-expressions of a document.

        Expressions are parsed on demand; input after the last
        requested expression (beyond one token of lookahead) is never
        scanned, so a syntax error later in the document is only
        raised if the consumer continues that far.

        See Also
        --------
        parse_list : For the eager equivalent.
        """
        return cls(iter_tokens(sexp_str, dialect))

    @classmethod
    def parse_streaming(
            cls,
            sexp_str: str,
            handler: Callable[[SexpNode],
                              Optional[StreamAction]],
            dialect: SexpDialect = DEFAULT_DIALECT) -> int:
        """
        Parse top-level s-expressions, handing each off as it completes.

        Parameters
        ----------
        sexp_str : str
            A document containing zero or more top-level s-expressions.
        handler : Callable[[SexpNode], Optional[StreamAction]]
            A function called with each top-level expression
            immediately after it is parsed.
            Returning `StreamAction.Stop` ends the parse; any other
            return value (including None) continues it.
        dialect : SexpDialect, optional
            The lexical dialect of `sexp_str`, by default
            `DEFAULT_DIALECT`.

        Returns
        -------
        int
            The number of expressions delivered to `handler`.

        Raises
        ------
        SexpParseException
            If an expression is malformed.
            Expressions preceding the malformed one will have already
            been delivered.
        """
        delivered = 0
        for sexp in cls.parse_iter(sexp_str, dialect):
            delivered += 1
            if handler(sexp) == StreamAction.Stop:
                cls.logger.debug(
                    f"Streaming parse stopped after {delivered} expressions")
                break
            # end if
        # end for
        return delivered
