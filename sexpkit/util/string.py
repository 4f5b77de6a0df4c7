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
Miscellaneous string utilities for s-expression atoms.
"""

import re

_escape_regex = re.compile('(["\\\\\t\n\r])')

_escaped_chars = {
    x: repr(x)[1 :-1] for x in "\t\n\r"
} | {
    x: "\\" + x for x in "\"\\"
}


def escape(s: str) -> str:
    """
    Sanitize the given string by escaping special characters.

    Only the characters with a recognized escape sequence inside a
    quoted atom are escaped: double quotes, backslashes, newlines,
    carriage returns, and tabs.

    Parameters
    ----------
    s : str
        A string.

    Returns
    -------
    str
        The sanitized string.
    """
    return _escape_regex.sub(lambda m: _escaped_chars[m.group(0)], s)


def quote_escape(s: str, force: bool = False) -> str:
    """
    Escape the given string and surround it in double quotes.

    Quotes are only added if any character in the string needed to be
    escaped or if `force` is True.

    Parameters
    ----------
    s : str
        A string.
    force : bool, optional
        Quote the string even if no character needed escaping, by
        default False.

    Returns
    -------
    str
        The escaped and quoted string.
    """
    if force or _escape_regex.search(s) is not None:
        s = f'"{escape(s)}"'
    return s
