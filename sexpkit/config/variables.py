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
Expansion of ``define`` variables in configuration documents.

A top-level form ``(define NAME VALUE...)`` binds ``NAME`` to its
value(s).
Every later atom equal to a bound name is replaced by the bound value,
except for atoms in the head position of a list, which name entries.
"""
import logging
from typing import Dict, Iterable, List

from sexpkit.config.exception import SexpConfigException
from sexpkit.language.sexp import SexpAtom, SexpList, SexpNode
from sexpkit.util.logging import default_log_level, log_and_raise

logger = logging.getLogger(__name__)
logger.setLevel(default_log_level())

DEFINE_KEYWORD = "define"


def is_definition(sexp: SexpNode) -> bool:
    """
    Return whether the given expression is a ``define`` form.
    """
    return (
        sexp.is_list() and len(sexp) > 0
        and sexp[0] == SexpAtom(DEFINE_KEYWORD))


def substitute(sexp: SexpNode, bindings: Dict[str, SexpNode]) -> SexpNode:
    """
    Replace bound atoms in the given expression.

    Parameters
    ----------
    sexp : SexpNode
        An expression.
    bindings : Dict[str, SexpNode]
        A map from variable names to their values.

    Returns
    -------
    SexpNode
        A copy of `sexp` with each atom that is not at the head of a
        list and whose content is a key of `bindings` replaced by the
        corresponding value.
    """
    if sexp.is_atom():
        return bindings.get(sexp.content, sexp)
    children = sexp.children
    if not children:
        return sexp
    return SexpList(
        children[: 1] + tuple(substitute(c,
                                         bindings) for c in children[1 :]))


def expand_variables(sexps: Iterable[SexpNode]) -> List[SexpNode]:
    """
    Evaluate and remove the ``define`` forms of a document.

    Definitions are processed in order, so a value may refer to any
    variable defined before it.
    Names that are never defined are left as atoms.

    Parameters
    ----------
    sexps : Iterable[SexpNode]
        The top-level expressions of a document.

    Returns
    -------
    List[SexpNode]
        The non-``define`` expressions with variables substituted.

    Raises
    ------
    SexpConfigException
        If a ``define`` form lacks a name atom or a value.
    """
    bindings: Dict[str, SexpNode] = {}
    body: List[SexpNode] = []
    for sexp in sexps:
        if not is_definition(sexp):
            body.append(sexp)
            continue
        if len(sexp) < 3 or not sexp[1].is_atom():
            log_and_raise(
                logger,
                f"Malformed variable definition {sexp}",
                SexpConfigException,
                DEFINE_KEYWORD)
        name = sexp[1].content
        values = [substitute(v, bindings) for v in sexp.children[2 :]]
        bindings[name] = values[0] if len(values) == 1 else SexpList(values)
        logger.debug(f"Defined variable {name} = {bindings[name]}")
    # end for
    return [substitute(sexp, bindings) for sexp in body]
