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
Provides parsing utilities and abstractions for s-expressions.
"""

from .atom import SexpAtom  # noqa: F401
from .dialect import DEFAULT_DIALECT, SexpDialect  # noqa: F401
from .exception import (  # noqa: F401
    IllegalSexpOperationException,
    SexpLexException,
    SexpParseException,
)
from .list import SexpList  # noqa: F401
from .node import SexpNode  # noqa: F401
from .parser import SexpParser, StreamAction  # noqa: F401
from .token import Token, TokenKind  # noqa: F401
from .tokenizer import SexpTokenizer, iter_tokens, tokenize  # noqa: F401

parse_one = SexpParser.parse
parse_all = SexpParser.parse_list
parse_iter = SexpParser.parse_iter
parse_streaming = SexpParser.parse_streaming
