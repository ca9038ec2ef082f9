from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

if sys.version_info >= (3, 10):
    from typing import TypeGuard
else:
    from typing_extensions import TypeGuard

from typing import Protocol, runtime_checkable

from ._util import html_escape, is_valid_attr_name

__all__ = (
    "TrustedFragment",
    "ValueKind",
    "ComponentFunction",
    "InvalidAttributeNameError",
    "VOID_ELEMENTS",
    "RESERVED_ATTR_NAMES",
    "is_trusted_fragment",
    "classify_value",
    "render_attribute",
    "render_children",
    "render",
    "render_template",
    "to_html_string",
)

logger = logging.getLogger(__name__)


# Only this module holds a reference to the marker; a TrustedFragment can't be built
# without it. Instances don't keep it.
_TRUST_MARKER = object()


# =============================================================================
# Trusted fragments
# =============================================================================
class TrustedFragment(str):
    """
    A string of final HTML that must not be escaped again.

    Instances are only created by this module's render functions. Passing one as a
    child (or as a template slot) splices it into the output verbatim, whereas a
    plain ``str`` is always escaped.

    Examples
    --------
    >>> from htmlssr import render
    >>> inner = render("span", {"children": "a&b"})
    >>> render("div", {"children": inner})
    <div><span>a&amp;b</span></div>
    """

    # No __dict__: nothing can be attached to (or read from) an instance.
    __slots__ = ()

    def __new__(cls, value: str, marker: object = None) -> "TrustedFragment":
        if marker is not _TRUST_MARKER:
            raise TypeError(
                "TrustedFragment objects can't be created directly. "
                + "Use render(), render_template() or render_children() instead."
            )
        return super().__new__(cls, value)

    def __copy__(self) -> "TrustedFragment":
        return self

    def __deepcopy__(self, memo: Any) -> "TrustedFragment":
        return self

    # TrustedFragment + TrustedFragment stays trusted; mixing in a plain str does not.
    def __add__(self, other: str) -> str:
        if not isinstance(other, str):
            return NotImplemented
        res = str.__add__(self, other)
        return _trusted(res) if is_trusted_fragment(other) else res

    def __radd__(self, other: str) -> str:
        if not isinstance(other, str):
            return NotImplemented
        return str.__add__(other, self)

    def __str__(self) -> str:
        return self.as_string()

    def __repr__(self) -> str:
        return self.as_string()

    def _repr_html_(self) -> str:
        return self.as_string()

    def as_string(self) -> str:
        return self + ""


def _trusted(value: str) -> TrustedFragment:
    return TrustedFragment(value, _TRUST_MARKER)


def is_trusted_fragment(x: object) -> TypeGuard[TrustedFragment]:
    """
    Whether ``x`` is a fragment produced by this module's render functions.
    """
    # Subclasses could skip the marker check in their own __new__.
    return type(x) is TrustedFragment


# =============================================================================
# Dynamic value classification
# =============================================================================
class ValueKind(Enum):
    """
    How a dynamic value contributes to rendered output.
    """

    TRUSTED = "trusted"
    """Already-rendered HTML, spliced verbatim."""
    SEQUENCE = "sequence"
    """A list or tuple whose items are rendered in order."""
    TEXT = "text"
    """Anything else; converted to text and escaped."""
    EMPTY = "empty"
    """``None``, booleans and callables; renders nothing."""


def classify_value(x: object) -> ValueKind:
    if x is None or isinstance(x, bool) or callable(x):
        return ValueKind.EMPTY
    if is_trusted_fragment(x):
        return ValueKind.TRUSTED
    if isinstance(x, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.TEXT


# =============================================================================
# Attributes
# =============================================================================
class InvalidAttributeNameError(ValueError):
    """
    Raised when an attribute name contains characters that would break the markup.
    """

    def __init__(self, name: object) -> None:
        super().__init__(f"Invalid attribute name: {name!r}")
        self.name = name


# Structural props that never appear in output.
RESERVED_ATTR_NAMES = frozenset({"key", "ref"})


def _normalize_attr_name(x: str) -> str:
    # e.g., class_ -> class
    if x.endswith("_"):
        x = x[:-1]
    return x


def _attr_value_text(x: object) -> str:
    if x is True:
        return "true"
    if x is False:
        return "false"
    return str(x)


def render_attribute(name: object, value: object) -> TrustedFragment:
    """
    Render a single ``name="value"`` attribute.

    Parameters
    ----------
    name
        The attribute name, converted with ``str()``. A single trailing underscore is
        dropped, so that Python keywords can be used (e.g., ``class_``).
    value
        The attribute value. It's converted to text and escaped.

    Returns
    -------
    :
        The attribute, or an empty string if ``name`` is ``"key"`` or ``"ref"`` (with
        or without a trailing underscore), if ``value`` is callable (an event
        handler), or if ``value`` is ``None``.

    Raises
    ------
    InvalidAttributeNameError
        If ``name`` contains a quote, ``&``, ``<``, ``>``, ``/``, ``=`` or whitespace,
        or is empty.
    """
    nm = _normalize_attr_name(str(name))
    if nm in RESERVED_ATTR_NAMES or callable(value):
        return _trusted("")

    if not is_valid_attr_name(nm):
        logger.debug("Rejecting attribute name %r", name)
        raise InvalidAttributeNameError(name)

    if value is None:
        logger.debug("Omitting attribute %r with value None", nm)
        return _trusted("")

    return _trusted(nm + '="' + html_escape(_attr_value_text(value)) + '"')


# =============================================================================
# Children
# =============================================================================
def render_children(value: object) -> TrustedFragment:
    """
    Render any dynamic value as element content.

    ``None``, booleans and callables render nothing; lists and tuples render each of
    their items in order (at any depth); trusted fragments are inserted as they are;
    everything else is converted to text and escaped exactly once.

    Examples
    --------
    >>> from htmlssr import render_children
    >>> render_children([1, [2, None, False], "<3"])
    12&lt;3
    """
    html_: list[str] = []
    # An explicit stack instead of recursion, so that deeply nested lists don't run
    # into the recursion limit. Items are pushed in reverse to pop them in order.
    stack: list[object] = [value]
    while stack:
        x = stack.pop()
        kind = classify_value(x)
        if kind is ValueKind.SEQUENCE:
            stack.extend(reversed(x))  # type: ignore[arg-type]
        elif kind is ValueKind.TRUSTED:
            html_.append(x)  # type: ignore[arg-type]
        elif kind is ValueKind.TEXT:
            html_.append(html_escape(str(x)))
    return _trusted("".join(html_))


# =============================================================================
# Elements and components
# =============================================================================
@runtime_checkable
class ComponentFunction(Protocol):
    """
    A component: called with the element's props, it returns anything that
    ``render_children()`` accepts.
    """

    def __call__(self, props: Mapping[str, Any]) -> object:
        ...


# Tags that can't have content or a closing tag.
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

_CHILDREN = "children"
_INNER_HTML = "dangerouslySetInnerHTML"


def render(
    type_: Union[str, ComponentFunction],
    props: Optional[Mapping[str, Any]] = None,
    key: Optional[Union[str, int]] = None,
) -> TrustedFragment:
    """
    Render an element or a component.

    Parameters
    ----------
    type_
        Either a tag name (e.g., ``"div"``) or a component function.
    props
        For tags, the attributes, plus ``children`` and ``dangerouslySetInnerHTML``.
        For components, the mapping passed to the function. ``None`` means no props.
    key
        Accepted for compatibility with JSX-style call sites; not rendered.

    Returns
    -------
    :
        The rendered HTML, which is not escaped again when used as a child.

    Examples
    --------
    >>> from htmlssr import render
    >>> render("a", {"href": "/?a=1&b=2", "children": "Home"})
    <a href="/?a=1&amp;b=2">Home</a>
    >>> render("img", {"src": "x.png"})
    <img src="x.png">
    """
    if props is None:
        props = {}

    if isinstance(type_, str):
        return _render_tag(type_, props)

    if callable(type_):
        return render_children(type_(props))

    raise TypeError(
        f"Invalid type for element: {type(type_)}. "
        + "Expected a tag name or a component function."
    )


def _render_tag(name: str, props: Mapping[str, Any]) -> TrustedFragment:
    html_ = "<" + name

    for k, v in props.items():
        if k == _CHILDREN or k == _INNER_HTML:
            continue
        attr = render_attribute(k, v)
        if attr:
            html_ += " " + attr

    html_ += ">"
    if name.lower() in VOID_ELEMENTS:
        return _trusted(html_)

    inner_html = _inner_html(props.get(_INNER_HTML))
    if inner_html is not None:
        content = inner_html
    else:
        content = render_children(props.get(_CHILDREN))

    return _trusted(html_ + content + "</" + name + ">")


def _inner_html(x: object) -> Optional[str]:
    if isinstance(x, Mapping):
        x = x.get("__html")  # pyright: ignore[reportUnknownMemberType]
    if x is None:
        return None
    return str(x)


# =============================================================================
# Precompiled templates
# =============================================================================
def render_template(
    static_parts: Sequence[str], *dynamic_parts: object
) -> TrustedFragment:
    """
    Interleave trusted static markup with dynamic values.

    ``static_parts[i]`` is emitted verbatim, followed by ``dynamic_parts[i]`` rendered
    with ``render_children()``. Normally there is exactly one more static part than
    dynamic parts; dynamic parts without a preceding static part are ignored.

    Examples
    --------
    >>> from htmlssr import render_attribute, render_template
    >>> render_template(['<div foo="bar" ', "></div>"], render_attribute("id", "a"))
    <div foo="bar" id="a"></div>
    """
    html_ = ""
    for i, part in enumerate(static_parts):
        html_ += part
        if i < len(dynamic_parts):
            html_ += render_children(dynamic_parts[i])
    return _trusted(html_)


def to_html_string(fragment: TrustedFragment) -> str:
    """
    Get the final HTML of a rendered fragment as a plain ``str``.
    """
    if not is_trusted_fragment(fragment):
        raise TypeError(
            f"Expected a rendered fragment, got {type(fragment)}. "
            + "Use render() or render_template() to produce one."
        )
    return fragment.as_string()
