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
Defines a path-based, typed view of an s-expression configuration.
"""
import logging
import re
from typing import (
    Callable,
    Dict,
    Iterator,
    List,
    NoReturn,
    Optional,
    Tuple,
    TypeVar,
)

from sexpkit.config.exception import SexpConfigException
from sexpkit.config.variables import expand_variables
from sexpkit.language.sexp import (
    DEFAULT_DIALECT,
    IllegalSexpOperationException,
    SexpDialect,
    SexpList,
    SexpNode,
    SexpParser,
)
from sexpkit.util.logging import default_log_level, log_and_raise
from sexpkit.util.re import regex_from_options

logger = logging.getLogger(__name__)
logger.setLevel(default_log_level())

T = TypeVar('T')

Payload = Tuple[SexpNode, ...]
"""
The elements of an entry that follow its key.
"""

_int_regex = re.compile(r"-?[0-9]+")
_float_regex = re.compile(
    r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")
_bool_regex = regex_from_options(["true",
                                  "false"],
                                 must_start=True,
                                 must_end=True,
                                 flags=re.IGNORECASE)


def iter_entries(nodes: Payload) -> Iterator[Tuple[str, Payload]]:
    """
    Iterate over the named entries among the given nodes.

    An entry is a list whose first element is an atom.
    Other nodes are skipped.

    Yields
    ------
    key : str
        The content of the entry's first atom.
    payload : Payload
        The remaining elements of the entry.
    """
    for node in nodes:
        children = node.get_children()
        if children and children[0].is_atom():
            yield children[0].content, children[1 :]
        # end if
    # end for


def find_entry(nodes: Payload, key: str) -> Optional[Payload]:
    """
    Get the payload of the first entry named `key`, if any.
    """
    for k, payload in iter_entries(nodes):
        if k == key:
            return payload
    return None


def is_property_list(nodes: Payload) -> bool:
    """
    Return whether the nodes alternate between atom keys and values.

    For example, ``host "localhost" port 5432`` is a property list with
    the keys ``host`` and ``port``.
    """
    return (
        len(nodes) > 0 and len(nodes) % 2 == 0
        and all(nodes[i].is_atom() for i in range(0,
                                                  len(nodes),
                                                  2)))


def find_property(nodes: Payload, key: str) -> Optional[Payload]:
    """
    Get the value following the first key `key` in a property list.

    Returns
    -------
    Payload or None
        A singleton payload holding the value, or None if `nodes` is not
        a property list or lacks the key.
    """
    if is_property_list(nodes):
        for i in range(0, len(nodes), 2):
            if nodes[i].content == key:
                return nodes[i + 1 : i + 2]
        # end for
    return None


def find_value(nodes: Payload, key: str) -> Optional[Payload]:
    """
    Get the payload named `key` at one level of a configuration.

    The level is searched in the following order:

    1. If the level consists of a single list that is a property list,
       as in ``(database (host "localhost" port 5432))``, the value of
       its first key `key`.
    2. The payload of the first entry named `key`.
    3. If the level is itself a property list, as the payload of
       ``(define name "value")`` is, the value of its first key `key`.

    Returns
    -------
    Payload or None
        The payload, or None if `key` names nothing at this level.
    """
    if len(nodes) == 1 and nodes[0].is_list():
        payload = find_property(nodes[0].children, key)
        if payload is not None:
            return payload
    payload = find_entry(nodes, key)
    if payload is None:
        payload = find_property(nodes, key)
    return payload


def as_string(payload: Payload) -> Optional[str]:
    """
    Coerce a payload of exactly one atom to its content.
    """
    if len(payload) == 1 and payload[0].is_atom():
        return payload[0].content
    return None


def as_int(payload: Payload) -> Optional[int]:
    """
    Coerce a payload to a base-10 integer.

    Only an optional leading minus sign followed by digits is accepted.
    """
    value = as_string(payload)
    if value is not None and _int_regex.fullmatch(value) is not None:
        return int(value)
    return None


def as_float(payload: Payload) -> Optional[float]:
    """
    Coerce a payload to a decimal floating-point number.
    """
    value = as_string(payload)
    if value is not None and _float_regex.fullmatch(value) is not None:
        return float(value)
    return None


def as_boolean(payload: Payload) -> Optional[bool]:
    """
    Coerce a payload to a boolean.

    Only ``true`` and ``false`` are accepted, in any letter case.
    """
    value = as_string(payload)
    if value is not None and _bool_regex.fullmatch(value) is not None:
        return value.lower() == "true"
    return None


def as_list(payload: Payload) -> List[SexpNode]:
    """
    Coerce a payload to a sequence of items.

    A payload consisting of a single list, as in
    ``(features (auth logging))``, yields the children of that list.
    Any other payload, as in ``(features auth logging)``, yields its own
    elements.
    """
    if len(payload) == 1 and payload[0].is_list():
        return list(payload[0].children)
    return list(payload)


def as_string_list(payload: Payload) -> Optional[List[str]]:
    """
    Coerce a payload to a list of atom contents.

    The items are determined as in `as_list` and must all be atoms.
    """
    items = as_list(payload)
    if all(item.is_atom() for item in items):
        return [item.content for item in items]
    return None


class SexpConfig:
    """
    A read-only, path-addressable view of a configuration tree.

    The configuration is a root list whose children that are themselves
    lists headed by an atom are named entries, e.g., ``(port 8080)`` is
    an entry named ``port`` with payload ``8080``.
    Entries nest through their payloads and are addressed by
    dot-separated paths such as ``server.port``.
    Matching is exact and case-sensitive, and the first of several
    sibling entries with the same key wins.
    Where no entry matches, a level that alternates atom keys and values,
    such as the payload of ``(define name "value")``, is searched as a
    property list.
    See `find_value` for the exact order.

    If the first segment of a path matches no entry of the root but the
    root is itself headed by an atom equal to that segment, the root
    acts as that entry, so the view of ``(server (port 8080))`` answers
    both ``port`` and ``server.port``.

    The tree is traversed on demand for each query and never copied.

    Parameters
    ----------
    root : SexpNode
        The root list.

    Raises
    ------
    IllegalSexpOperationException
        If `root` is not a list.
    """

    separator = "."

    def __init__(self, root: SexpNode) -> None:
        if not root.is_list():
            log_and_raise(
                logger,
                f"Type mismatch: expected list as configuration root "
                f"but got atom {root}",
                IllegalSexpOperationException)
        self.root = root

    def __contains__(self, path: str) -> bool:  # noqa: D105
        return self.has(path)

    def __repr__(self) -> str:  # noqa: D105
        return f"{type(self).__name__}({self.root})"

    @classmethod
    def from_string(
            cls,
            text: str,
            support_variables: bool = False,
            dialect: SexpDialect = DEFAULT_DIALECT) -> 'SexpConfig':
        """
        Parse a configuration document.

        All top-level expressions of the document are wrapped in a
        synthetic root list.

        Parameters
        ----------
        text : str
            The document.
        support_variables : bool, optional
            Whether to evaluate top-level ``define`` forms, by default
            False.
            See `sexpkit.config.variables`.
        dialect : SexpDialect, optional
            The lexical dialect of `text`, by default `DEFAULT_DIALECT`.

        Returns
        -------
        SexpConfig
            A view of the parsed document.

        Raises
        ------
        SexpParseException
            If the document is malformed.
        SexpConfigException
            If `support_variables` is True and a ``define`` form is
            malformed.
        """
        sexps = SexpParser.parse_list(text, dialect)
        if support_variables:
            sexps = expand_variables(sexps)
        return cls(SexpList(sexps))

    def _fail(self, msg: str, path: str) -> NoReturn:
        log_and_raise(logger, msg, SexpConfigException, path)

    def _resolve(self, path: str) -> Optional[Payload]:
        segments = path.split(self.separator)
        if not all(segments):
            return None
        root_children = self.root.children
        payload = find_value(root_children, segments[0])
        if (payload is None and root_children
                and root_children[0].get_content() == segments[0]):
            payload = root_children[1 :]
        for segment in segments[1 :]:
            if payload is None:
                break
            payload = find_value(payload, segment)
        # end for
        return payload

    def _get_typed(
            self,
            path: str,
            coerce: Callable[[Payload],
                             Optional[T]]) -> Optional[T]:
        payload = self._resolve(path)
        return coerce(payload) if payload is not None else None

    def _get_typed_value(
            self,
            path: str,
            coerce: Callable[[Payload],
                             Optional[T]],
            kind: str) -> T:
        payload = self.get_value(path)
        value = coerce(payload)
        if value is None:
            self._fail(f"Invalid {kind} configuration value", path)
        return value

    def has(self, path: str) -> bool:
        """
        Return whether every segment of `path` resolves to an entry.
        """
        return self._resolve(path) is not None

    def get(self, path: str) -> Optional[Payload]:
        """
        Get the raw payload of the entry at the given path.

        Parameters
        ----------
        path : str
            A dot-separated path.

        Returns
        -------
        Payload or None
            The elements following the key of the entry at `path`, or
            None if any segment does not resolve.
        """
        return self._resolve(path)

    def get_value(self, path: str) -> Payload:
        """
        Get the raw payload of the entry at the given path.

        Raises
        ------
        SexpConfigException
            If any segment of `path` does not resolve.
        """
        payload = self._resolve(path)
        if payload is None:
            self._fail("Missing configuration value", path)
        return payload

    def get_string(self, path: str) -> Optional[str]:
        """
        Get the atom at the given path, or None.
        """
        return self._get_typed(path, as_string)

    def get_string_value(self, path: str) -> str:
        """
        Get the atom at the given path, or raise `SexpConfigException`.
        """
        return self._get_typed_value(path, as_string, "string")

    def get_int(self, path: str) -> Optional[int]:
        """
        Get the integer at the given path, or None.
        """
        return self._get_typed(path, as_int)

    def get_int_value(self, path: str) -> int:
        """
        Get the integer at the given path, or raise `SexpConfigException`.
        """
        return self._get_typed_value(path, as_int, "integer")

    def get_float(self, path: str) -> Optional[float]:
        """
        Get the floating-point number at the given path, or None.
        """
        return self._get_typed(path, as_float)

    def get_float_value(self, path: str) -> float:
        """
        Get the number at the given path, or raise `SexpConfigException`.
        """
        return self._get_typed_value(path, as_float, "float")

    def get_boolean(self, path: str) -> Optional[bool]:
        """
        Get the boolean at the given path, or None.
        """
        return self._get_typed(path, as_boolean)

    def get_boolean_value(self, path: str) -> bool:
        """
        Get the boolean at the given path, or raise `SexpConfigException`.
        """
        return self._get_typed_value(path, as_boolean, "boolean")

    def get_list(self, path: str) -> Optional[List[SexpNode]]:
        """
        Get the items at the given path, or None.

        See Also
        --------
        as_list : For how items are derived from the payload.
        """
        return self._get_typed(path, as_list)

    def get_list_value(self, path: str) -> List[SexpNode]:
        """
        Get the items at the given path, or raise `SexpConfigException`.
        """
        return self._get_typed_value(path, as_list, "list")

    def get_string_list(self, path: str) -> Optional[List[str]]:
        """
        Get the atom contents at the given path, or None.

        See Also
        --------
        as_string_list : For how items are derived from the payload.
        """
        return self._get_typed(path, as_string_list)

    def get_string_list_value(self, path: str) -> List[str]:
        """
        Get the atom contents at the given path or raise an exception.

        Raises
        ------
        SexpConfigException
            If the path does not resolve or any item is not an atom.
        """
        return self._get_typed_value(path, as_string_list, "string list")

    def keys(self, path: Optional[str] = None) -> List[str]:
        """
        Get the distinct keys of the entries at one level of the tree.

        Parameters
        ----------
        path : Optional[str], optional
            The path of the entry whose nested entries are listed, by
            default None, which lists the entries of the root.

        Returns
        -------
        List[str]
            Keys in order of first appearance.

        Raises
        ------
        SexpConfigException
            If `path` does not resolve.
        """
        nodes = self.root.children if path is None else self.get_value(path)
        return list(dict.fromkeys(k for k, _ in iter_entries(nodes)))

    def section(self, path: str) -> 'SexpConfig':
        """
        Get a view rooted at the entry with the given path.

        The returned view resolves paths relative to that entry, e.g.,
        ``config.section("server").get_int("port")`` is equivalent to
        ``config.get_int("server.port")``.

        Raises
        ------
        SexpConfigException
            If `path` does not resolve.
        """
        return SexpConfig(SexpList(self.get_value(path)))

    def to_map(self) -> Dict[str, Payload]:
        """
        Flatten the configuration into a map from paths to payloads.

        Every entry path appears exactly once, and shadowed duplicate
        entries are omitted.
        Values that are reachable only through property lists are not
        included.

        Returns
        -------
        Dict[str, Payload]
            The payload of every entry keyed by its dot-separated path
            in preorder.
        """
        result: Dict[str, Payload] = {}

        def _walk(nodes: Payload, prefix: str) -> None:
            for key, payload in iter_entries(nodes):
                full_key = f"{prefix}{self.separator}{key}" if prefix else key
                if full_key in result:
                    continue
                result[full_key] = payload
                _walk(payload, full_key)
            # end for

        root_children = self.root.children
        _walk(root_children, "")
        if root_children and root_children[0].is_atom():
            root_key = root_children[0].content
            if root_key not in result:
                result[root_key] = root_children[1 :]
                _walk(root_children[1 :], root_key)
        return result
