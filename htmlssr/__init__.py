from ._version import __version__  # noqa: F401

from ._core import (
    RESERVED_ATTR_NAMES,
    VOID_ELEMENTS,
    ComponentFunction,
    InvalidAttributeNameError,
    TrustedFragment,
    ValueKind,
    classify_value,
    is_trusted_fragment,
    render,
    render_attribute,
    render_children,
    render_template,
    to_html_string,
)
from ._util import html_escape

__all__ = (
    "RESERVED_ATTR_NAMES",
    "VOID_ELEMENTS",
    "ComponentFunction",
    "InvalidAttributeNameError",
    "TrustedFragment",
    "ValueKind",
    "classify_value",
    "is_trusted_fragment",
    "render",
    "render_attribute",
    "render_children",
    "render_template",
    "to_html_string",
    "html_escape",
)

