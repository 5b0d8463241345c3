"""Document parsing primitives for XAML and C# inputs."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal
from xml.etree import ElementTree
from xml.etree.ElementTree import Element

AVALONIA_NAMESPACE = "https://github.com/avaloniaui"
XAML_NAMESPACE = "http://schemas.microsoft.com/winfx/2006/xaml"
WPF_PRESENTATION_NAMESPACE = "http://schemas.microsoft.com/winfx/2006/xaml/presentation"

DocumentKind = Literal["xaml", "csharp"]


@dataclass(frozen=True, slots=True)
class ParseError:
    """Input could not be turned into a document."""

    message: str


@dataclass(frozen=True, slots=True)
class XamlDocument:
    """A parsed, read-only XAML tree."""

    root: Element
    namespaces: Mapping[str, str]

    @property
    def root_name(self) -> str:
        return local_name(self.root.tag)

    @property
    def default_namespace(self) -> str | None:
        return self.namespaces.get("")

    def namespace_for(self, prefix: str) -> str | None:
        """Namespace URI bound to ``prefix`` on the root element."""
        return self.namespaces.get(prefix)

    def iter_elements(self) -> Iterator[Element]:
        """Depth-first iteration over the root and all of its descendants."""
        return self.root.iter()

    def elements_named(self, name: str) -> list[Element]:
        return [element for element in self.iter_elements() if local_name(element.tag) == name]


@dataclass(frozen=True, slots=True)
class SourceText:
    """C# source handled as plain text."""

    text: str


def parse_xaml(text: str) -> XamlDocument | ParseError:
    """Parse XAML text into a document, or describe why it is not well-formed."""
    if not text or not text.strip():
        return ParseError(message="XAML content cannot be empty")

    parser = ElementTree.XMLPullParser(events=("start-ns", "start"))
    try:
        parser.feed(text)
        parser.close()
    except ElementTree.ParseError as exc:
        return ParseError(message=str(exc))

    namespaces: dict[str, str] = {}
    root: Element | None = None
    for event, payload in parser.read_events():
        if root is not None:
            break
        if event == "start-ns":
            prefix, uri = payload
            namespaces[prefix] = uri
        else:
            root = payload

    if root is None:
        return ParseError(message="no root element found")
    return XamlDocument(root=root, namespaces=MappingProxyType(namespaces))


def parse_source(text: str) -> SourceText | ParseError:
    """Wrap C# source text; only empty input is rejected."""
    if not text or not text.strip():
        return ParseError(message="Code content cannot be empty")
    return SourceText(text=text)


def detect_kind(text: str) -> DocumentKind | None:
    """Guess whether text is XAML markup or C# source."""
    if text.lstrip().startswith("<") and ("xmlns" in text or "</" in text):
        return "xaml"
    if "namespace" in text or "class" in text or "using" in text:
        return "csharp"
    return None


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` part of a qualified tag or attribute name."""
    if tag.startswith("{"):
        return tag.rpartition("}")[2]
    return tag


def namespace_of(tag: str) -> str | None:
    if tag.startswith("{"):
        return tag[1:].partition("}")[0]
    return None


def qualified(namespace: str, name: str) -> str:
    return f"{{{namespace}}}{name}"


def get_attribute(element: Element, name: str, namespace: str | None = None) -> str | None:
    """Attribute lookup by local name, optionally within a namespace."""
    key = qualified(namespace, name) if namespace else name
    return element.get(key)


def has_local_attribute(element: Element, name: str) -> bool:
    """True if any attribute, namespaced or not, has the given local name."""
    return any(local_name(key) == name for key in element.attrib)
