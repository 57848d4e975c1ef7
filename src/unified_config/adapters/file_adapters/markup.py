"""Markup-tree adapter backed by :mod:`lxml.etree`.

Purpose
-------
Expose an XML configuration file through the adapter contract. Query strings
are XPath expressions evaluated by lxml; key sequences walk element names from
the root element downwards.

Contents
--------
* :class:`XMLConfigAdapter` – the adapter.
* :class:`_Step` / :func:`_parse_location` – the small XPath subset that
  :meth:`XMLConfigAdapter.set` can synthesise when a path does not exist yet:
  ``/a/b``, ``//a/b``, ``name[@attr='value']`` steps and a trailing ``@attr``.

System Role
-----------
Registered first in the default probe order, so any well-formed XML document
with an unrecognised extension is read as XML.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lxml import etree

from ...domain.errors import InvalidFormat
from ...domain.paths import normalize_keys
from ...observability import log_debug, log_error
from .base import BaseFileAdapter

_STEP_PATTERN = re.compile(
    r"""^(?P<attribute>@)?(?P<name>[^\W\d][\w.\-]*)
        (?:\[\s*@(?P<attr>[^\W\d][\w.\-]*)\s*=\s*(?P<quote>['"])(?P<value>.*?)(?P=quote)\s*\])?$""",
    re.VERBOSE,
)


@dataclass(frozen=True, slots=True)
class _Step:
    """One location step of a synthesisable XPath."""

    text: str
    name: str
    attribute: bool = False
    predicate: tuple[str, str] | None = None


class XMLConfigAdapter(BaseFileAdapter):
    """Read and write XML configuration through XPath.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / "config.xml"
    >>> _ = target.write_text(
    ...     "<config><general><interval>30</interval></general>"
    ...     "<tick type='origin'>5</tick></config>",
    ...     encoding="utf-8",
    ... )
    >>> adapter = XMLConfigAdapter(str(target))
    >>> adapter.get("/config/general/interval")
    '30'
    >>> adapter.get("//config/tick[@type='origin']")
    '5'
    >>> adapter.get_value("config", "tick", "@type")
    'origin'
    >>> tmp.cleanup()
    """

    format_name = "xml"

    def __init__(self, file_path: str | Path) -> None:
        super().__init__(file_path)
        self._tree = self.load(self.source_path)

    def load(self, path: str) -> etree._ElementTree:
        """Parse *path* into an element tree or raise :class:`InvalidFormat`.

        Entity resolution and network access are disabled on the parser.
        """

        payload = self._read(path)
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            root = etree.fromstring(payload, parser=parser)
        except (etree.XMLSyntaxError, ValueError) as exc:
            log_error("config_file_invalid", adapter=self.format_name, path=path, error=str(exc))
            raise InvalidFormat(f"Invalid XML in {path}: {exc}") from exc
        log_debug("config_file_loaded", adapter=self.format_name, path=path, root=root.tag)
        return root.getroottree()

    def get(self, query: str) -> str | None:
        """Return the value selected by the XPath *query* or ``None``.

        Elements yield their text (``""`` when empty), attributes and text
        nodes their string value, and XPath functions their scalar result.
        """

        return _render(self._evaluate(query))

    def set(self, query: str, value: str) -> bool:
        """Assign *value* to the node selected by *query*, creating it if needed.

        Existing elements get their text replaced, existing attributes their
        value. Missing nodes are created below the deepest existing ancestor
        named by the query; ``False`` is returned when that cannot be done.
        Values lxml refuses (control characters, for instance) are rejected
        before the document changes.
        """

        found = self._evaluate(query)
        if not isinstance(found, list):
            return False
        try:
            changed = _assign(found[0], value) if found else self._create(query, value)
        except ValueError as exc:
            log_debug("config_value_rejected", adapter=self.format_name, query=query, error=str(exc))
            return False
        if changed:
            log_debug("config_value_set", adapter=self.format_name, path=self.source_path, query=query)
        return changed

    def get_value(self, *keys: str) -> str | None:
        """Walk element names from the root; a final ``@name`` reads an attribute."""

        keys = normalize_keys(keys)
        if not keys:
            return None
        *elements, last = keys
        if last.startswith("@") and elements:
            node = self._walk(elements, create=False)
            return None if node is None else node.get(last[1:])
        node = self._walk(keys, create=False)
        if node is None:
            return None
        return node.text or ""

    def set_value(self, value: str, *keys: str) -> bool:
        """Write *value* at the element path *keys*, creating missing children."""

        keys = normalize_keys(keys)
        if not keys:
            return False
        *elements, last = keys
        attribute = last[1:] if last.startswith("@") and elements else None
        try:
            _check_storable(value, elements[1:] if attribute is not None else keys[1:], attribute)
            if attribute is not None:
                node = self._walk(elements, create=True)
                if node is None:
                    return False
                node.set(attribute, value)
            else:
                node = self._walk(keys, create=True)
                if node is None:
                    return False
                node.text = value
        except ValueError as exc:
            log_debug("config_value_rejected", adapter=self.format_name, keys=list(keys), error=str(exc))
            return False
        return True

    def save(self, file_path: str | Path | None = None) -> None:
        """Serialise the tree as UTF-8 XML with a declaration."""

        target = self._resolve_target(file_path)
        payload = etree.tostring(self._tree, xml_declaration=True, encoding="utf-8")
        self._write(target, payload)

    def _evaluate(self, query: str) -> Any:
        """Run *query* through lxml; invalid expressions evaluate to ``None``."""

        try:
            return self._tree.xpath(query)
        except etree.XPathError as exc:
            log_debug("xpath_invalid", adapter=self.format_name, query=query, error=str(exc))
            return None

    def _walk(self, keys: list[str] | tuple[str, ...], *, create: bool) -> etree._Element | None:
        root = self._tree.getroot()
        if keys[0] != root.tag:
            return None
        node = root
        for key in keys[1:]:
            child = next((item for item in node if item.tag == key), None)
            if child is None:
                if not create:
                    return None
                child = etree.SubElement(node, key)
            node = child
        return node

    def _create(self, query: str, value: str) -> bool:
        parsed = _parse_location(query)
        if parsed is None:
            return False
        anchor, steps = parsed
        for depth in range(len(steps) - 1, 0, -1):
            found = self._evaluate(_join(anchor, steps[:depth]))
            if isinstance(found, list) and found and _is_element(found[0]):
                # detached rehearsal so a refused name or value leaves no partial nodes
                _build(etree.Element("scratch"), steps[depth:], value)
                return _build(found[0], steps[depth:], value)
        return False


def _is_element(node: Any) -> bool:
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def _render(result: Any) -> str | None:
    if isinstance(result, list):
        if not result:
            return None
        result = result[0]
        if isinstance(result, etree._Element):
            return result.text or ""
        return str(result)
    if result is None:
        return None
    if isinstance(result, bool):
        return "true" if result else "false"
    if isinstance(result, float):
        return str(int(result)) if result.is_integer() else str(result)
    return str(result)


def _check_storable(value: str, elements: list[str] | tuple[str, ...], attribute: str | None = None) -> None:
    """Raise ``ValueError`` when lxml would refuse *value* or any of the names.

    Examples
    --------
    >>> _check_storable("ok", ["general", "interval"])
    >>> try:
    ...     _check_storable("a\\x01b", [])
    ... except ValueError:
    ...     print("refused")
    refused
    """

    node = etree.Element("scratch")
    for name in elements:
        node = etree.SubElement(node, name)
    if attribute is None:
        node.text = value
    else:
        node.set(attribute, value)


def _assign(node: Any, value: str) -> bool:
    _check_storable(value, [])
    if _is_element(node):
        node.text = value
        return True
    if getattr(node, "is_attribute", False):
        node.getparent().set(node.attrname, value)
        return True
    if getattr(node, "is_tail", False):
        node.getparent().tail = value
        return True
    if getattr(node, "is_text", False):
        node.getparent().text = value
        return True
    return False


def _build(parent: etree._Element, steps: list[_Step], value: str) -> bool:
    node = parent
    for step in steps:
        if step.attribute:
            node.set(step.name, value)
            return True
        node = etree.SubElement(node, step.name)
        if step.predicate is not None:
            node.set(*step.predicate)
    node.text = value
    return True


def _join(anchor: str, steps: list[_Step]) -> str:
    return anchor + "/".join(step.text for step in steps)


def _parse_location(query: str) -> tuple[str, list[_Step]] | None:
    """Parse *query* into ``(anchor, steps)`` or ``None`` if it cannot be synthesised.

    Examples
    --------
    >>> anchor, steps = _parse_location("//config/tick[@type='origin']/@unit")
    >>> anchor, [step.name for step in steps], steps[1].predicate, steps[2].attribute
    ('//', ['config', 'tick', 'unit'], ('type', 'origin'), True)
    >>> _parse_location("/config/tick[1]") is None
    True
    """

    query = query.strip()
    if query.startswith("//"):
        anchor, body = "//", query[2:]
    elif query.startswith("/"):
        anchor, body = "/", query[1:]
    else:
        return None
    steps: list[_Step] = []
    raw_steps = _split_steps(body)
    for index, raw in enumerate(raw_steps):
        match = _STEP_PATTERN.match(raw.strip())
        if match is None:
            return None
        attribute = bool(match.group("attribute"))
        if attribute and (index != len(raw_steps) - 1 or match.group("attr")):
            return None
        predicate = (match.group("attr"), match.group("value")) if match.group("attr") else None
        steps.append(_Step(text=raw.strip(), name=match.group("name"), attribute=attribute, predicate=predicate))
    if not steps or steps[0].attribute:
        return None
    return anchor, steps


def _split_steps(body: str) -> list[str]:
    """Split on ``/`` outside predicates and quoted literals."""

    steps: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    for char in body:
        if quote is not None:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == "/" and depth == 0:
            steps.append("".join(current))
            current = []
            continue
        current.append(char)
    steps.append("".join(current))
    return steps
