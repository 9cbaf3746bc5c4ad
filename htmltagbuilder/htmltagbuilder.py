"""
htmltagbuilder

Builds the html text of a single element: tag name, attributes, css
classes and inner content, rendered as a start tag, end tag, self closing
tag or the full element.

Does not parse html, does not build a tree (inner content is an already
rendered string) and does not validate tag or attribute names.

Note: an "id" attribute can be stored and merged but is never written out
by the attribute rendering. This matches the behaviour callers currently
rely on.
"""
from __future__ import annotations
from collections.abc import Mapping, MutableMapping
from enum import Enum
from html import escape
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple, Union

# characters that must be escaped inside a double quoted attribute value
_ATTRIBUTE_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        '"': "&quot;",
        "'": "&#39;",
        "<": "&lt;",
    }
)


def htmlencode(text: Optional[str]) -> str:
    """
    htmlencode - escape text for use as element content
    """
    if text is None:
        return ""
    # same apostrophe entity as attributeencode
    return escape(text, quote=True).replace("&#x27;", "&#39;")


def attributeencode(text: Optional[str]) -> str:
    """
    attributeencode - escape text for use inside a double quoted attribute
        value. Unlike htmlencode, ">" is left alone
    """
    if text is None:
        return ""
    return text.translate(_ATTRIBUTE_ESCAPES)


def invariantstr(value: Any) -> str:
    """
    invariantstr - convert a key or value to its string form for
        mergeAttributes. None becomes an empty string
    """
    if value is None:
        return ""
    return str(value)


class TagRenderMode(Enum):
    """
    Shape of the text produced by TagBuilder.render
    """

    NORMAL = "normal"
    STARTTAG = "starttag"
    ENDTAG = "endtag"
    SELFCLOSING = "selfclosing"


class AttributeDict(MutableMapping):
    """
    A mapping of attribute names to values with case insensitive keys.

    Writing an existing key replaces the value and the stored casing of the
    key but keeps its original position. Iteration is in first insertion
    order.
    """

    def __init__(self, pairs: Optional[Iterable[Tuple[str, Optional[str]]]] = None):
        # lowercased key -> (stored key, value)
        self._store: dict[str, Tuple[str, Optional[str]]] = {}
        if pairs:
            for name, value in pairs:
                self[name] = value

    def _lower(self, key: object) -> str:
        if not isinstance(key, str):
            raise KeyError(key)
        return key.lower()

    def __getitem__(self, key: str) -> Optional[str]:
        return self._store[self._lower(key)][1]

    def __setitem__(self, key: str, value: Optional[str]) -> None:
        self._store[key.lower()] = (key, value)

    def __delitem__(self, key: str) -> None:
        del self._store[self._lower(key)]

    def storedkey(self, key: str) -> str:
        """
        storedkey - return the casing a key is stored under. Raises KeyError
            if absent
        """
        return self._store[self._lower(key)][0]

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._store

    def __eq__(self, other: object) -> bool:
        # keys compare case insensitively, values exactly
        if not isinstance(other, Mapping):
            return NotImplemented
        if len(other) != len(self):
            return False
        mine = {k: v for k, (_, v) in self._store.items()}
        theirs = {}
        for k, v in other.items():
            if not isinstance(k, str):
                return False
            theirs[k.lower()] = v
        return mine == theirs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"AttributeDict({list(self.items())!r})"


class TagBuilder:
    """
    Builder for the html text of one element
    """

    def __init__(self, tagName: str, encodeValue: bool = True):
        """
        tagName: type of this tag. Must not be None
        encodeValue: when true (the default), attribute values and text set
            with setInnerText are html escaped
        """
        if tagName is None:
            raise ValueError("tagName must not be None")
        self._tagName = tagName
        self._attributes = AttributeDict()
        self._innerHTML = ""
        self.encodeValue = encodeValue

    @property
    def tagName(self) -> str:
        return self._tagName

    @property
    def attributes(self) -> AttributeDict:
        """
        attributes - the live attribute mapping. Keys are case insensitive
        """
        return self._attributes

    @property
    def innerHTML(self) -> str:
        """
        innerHTML (getter) - the raw content placed between the start and
            end tags when rendering the full element
        """
        return self._innerHTML

    @innerHTML.setter
    def innerHTML(self, html: Optional[str]) -> None:
        """
        innerHTML (setter) - set the content as is. The html is not escaped
        """
        self._innerHTML = html if html is not None else ""

    def addCssClass(self, value: str) -> None:
        """
        addCssClass - add a class to the "class" attribute.
            The new class is placed in front of any existing classes, so
            classes added in sequence render in reverse order.
            An existing "class" key keeps its casing.
        """
        if "class" in self._attributes:
            key = self._attributes.storedkey("class")
            existing = self._attributes[key] or ""
            self._attributes[key] = value + " " + existing
        else:
            self._attributes["class"] = value

    def mergeAttribute(
        self, key: str, value: Optional[str], replaceExisting: bool = False
    ) -> None:
        """
        mergeAttribute - set an attribute if it is not already present
        key: name of attribute, must not be empty
        value: value of attribute. None or "" renders the bare name
        replaceExisting: overwrite an existing value (and the casing of its
            name) when true
        """
        if not key:
            raise ValueError(f"Attribute name must not be empty. Got: {key!r}")
        if replaceExisting or key not in self._attributes:
            self._attributes[key] = value

    def mergeAttributes(
        self,
        source: Optional[Union[Mapping, Iterable[Tuple[Any, Any]]]],
        replaceExisting: bool = False,
        convert: Callable[[Any], str] = invariantstr,
    ) -> None:
        """
        mergeAttributes - merge many attributes with mergeAttribute
        source: a mapping, or an iterable of (name, value) pairs. Does nothing
            when None
        replaceExisting: passed on to mergeAttribute. With duplicate names in
            source, the last one wins when true and the first when false
        convert: applied to every name and value before merging
        """
        if source is None:
            return
        pairs = source.items() if isinstance(source, Mapping) else source
        for key, value in pairs:
            self.mergeAttribute(convert(key), convert(value), replaceExisting)

    def setInnerText(self, text: Optional[str]) -> None:
        """
        setInnerText - set the content from plain text. The text is escaped
            unless encodeValue is false
        """
        self.innerHTML = htmlencode(text) if self.encodeValue else text

    def _renderattributes(self, dest: List[str]) -> None:
        for k, v in self._attributes.items():
            if k.lower() == "id":
                continue
            dest.append(" " + k)
            if v:
                if self.encodeValue:
                    v = attributeencode(v)
                dest.append(f'="{v}"')

    def renderlist(self, mode: TagRenderMode = TagRenderMode.NORMAL) -> List[str]:
        """
        renderlist - render this tag in the given mode

        returns a list of strings that can be joined to create the html
        (or appended to a larger list of html fragments)
        """
        dest: List[str] = []
        if mode is TagRenderMode.ENDTAG:
            dest.append(f"</{self._tagName}>")
            return dest

        dest.append("<" + self._tagName)
        self._renderattributes(dest)

        if mode is TagRenderMode.STARTTAG:
            dest.append(">")
        elif mode is TagRenderMode.SELFCLOSING:
            dest.append(" />")
        else:
            # NORMAL, and anything unrecognised
            dest.append(">")
            dest.append(self._innerHTML)
            dest.append(f"</{self._tagName}>")
        return dest

    def render(self, mode: TagRenderMode = TagRenderMode.NORMAL) -> str:
        """
        render - render this tag to a string of html
        """
        return "".join(self.renderlist(mode))

    def __str__(self) -> str:
        """
        __str__ - the full element
        """
        return self.render()

    def __repr__(self) -> str:
        attributes = list(self._attributes.items())
        return f"TagBuilder({self._tagName!r}, attributes={attributes!r})"


if __name__ == "__main__":
    tb = TagBuilder("div")
    tb.mergeAttribute("class", "box")
    tb.setInnerText("Hi & bye")

    print(tb.render())
