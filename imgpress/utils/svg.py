"""Structural SVG optimizer built on lxml.

Optimization is driven by a list of named plugins, each either active or
inactive, the same shape other SVG optimizers accept:

    optimize(markup, [{"name": "removeViewBox", "active": False}])
"""

import re

from lxml import etree

from imgpress.config import DEFAULT_SVG_PLUGINS, DEFAULT_SVG_SIZE
from imgpress.errors import DecodeError
from imgpress.utils.validation import round_half_up

SVG_NS = "http://www.w3.org/2000/svg"

# Namespaces written by vector editors that carry no rendering information
EDITOR_NAMESPACES = {
    "http://inkscape.sourceforge.net/DTD/sodipodi-0.dtd",
    "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
    "http://www.inkscape.org/namespaces/inkscape",
    "http://www.bohemiancoding.com/sketch/ns",
    "http://ns.adobe.com/AdobeIllustrator/10.0/",
    "http://ns.adobe.com/Graphs/1.0/",
    "http://ns.adobe.com/AdobeSVGViewerExtensions/3.0/",
    "http://ns.adobe.com/Variables/1.0/",
    "http://ns.adobe.com/SaveForWeb/1.0/",
    "http://ns.adobe.com/Extensibility/1.0/",
    "http://ns.adobe.com/Flows/1.0/",
    "http://ns.adobe.com/ImageReplacement/1.0/",
    "http://ns.adobe.com/GenericCustomNamespace/1.0/",
    "http://ns.adobe.com/XPath/1.0/",
    "http://schemas.microsoft.com/visio/2003/SVGExtensions/",
    "http://taptrix.com/vectorillustrator/svg_extensions",
    "http://www.figma.com/figma/ns",
    "http://purl.org/dc/elements/1.1/",
    "http://creativecommons.org/ns#",
    "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "http://www.serif.com/",
    "http://www.vector.evaxdesign.sk",
}

# Elements whose whitespace is content
TEXT_ELEMENTS = {"text", "tspan", "textPath", "title", "desc", "style", "script"}

# CSS pixels per unit for absolute lengths
UNIT_TO_PX = {
    "": 1.0,
    "px": 1.0,
    "in": 96.0,
    "cm": 96.0 / 2.54,
    "mm": 96.0 / 25.4,
    "pt": 96.0 / 72.0,
    "pc": 16.0,
}

LENGTH_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*([a-z]*)\s*$")
XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"


def _parser():
    return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)


def _localname(element):
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def parse_svg(markup):
    """Parse SVG markup into its root element.

    Args:
        markup: SVG document as text or bytes

    Returns:
        lxml.etree._Element: The <svg> root

    Raises:
        ValueError: If the markup is not well-formed SVG
    """
    if isinstance(markup, str):
        markup = markup.encode("utf-8")
    try:
        root = etree.fromstring(markup, _parser())
    except etree.XMLSyntaxError as e:
        raise ValueError(f"Malformed SVG markup: {e}") from e

    if _localname(root) != "svg":
        raise ValueError(f"Root element is <{_localname(root)}>, expected <svg>")
    return root


def parse_length(value):
    """Convert an SVG length attribute to pixels.

    Returns None for missing, relative (%, em) or non-positive lengths.
    """
    if value is None:
        return None
    match = LENGTH_RE.match(value)
    if not match:
        return None
    number, unit = match.groups()
    if unit not in UNIT_TO_PX:
        return None
    length = float(number) * UNIT_TO_PX[unit]
    return length if length > 0 else None


def parse_view_box(value):
    """Parse a viewBox attribute into (min_x, min_y, width, height) or None."""
    if not value:
        return None
    parts = value.replace(",", " ").split()
    if len(parts) != 4:
        return None
    try:
        min_x, min_y, width, height = (float(p) for p in parts)
    except ValueError:
        return None
    if width <= 0 or height <= 0:
        return None
    return min_x, min_y, width, height


def _format_number(value):
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return text or "0"


def svg_dimensions(root):
    """Get the natural size of a parsed <svg> root, as a browser would.

    Uses width/height when given in absolute units, then the viewBox, then
    the 300x150 default for replaced elements.

    Returns:
        tuple: (width, height) as integers
    """
    width = parse_length(root.get("width"))
    height = parse_length(root.get("height"))
    view_box = parse_view_box(root.get("viewBox"))

    if width is None or height is None:
        if view_box is not None:
            _, _, vb_width, vb_height = view_box
            if width is not None:
                height = width * vb_height / vb_width
            elif height is not None:
                width = height * vb_width / vb_height
            else:
                width, height = vb_width, vb_height
        else:
            width = width if width is not None else DEFAULT_SVG_SIZE[0]
            height = height if height is not None else DEFAULT_SVG_SIZE[1]

    return round_half_up(width), round_half_up(height)


def read_svg_dimensions(markup):
    """Get the natural size of an SVG document.

    Args:
        markup: SVG document as text or bytes

    Returns:
        tuple: (width, height) as integers

    Raises:
        DecodeError: If the markup cannot be parsed
    """
    try:
        root = parse_svg(markup)
    except ValueError as e:
        raise DecodeError(str(e)) from e
    return svg_dimensions(root)


def load_svg(data):
    """Parse SVG bytes into markup text and natural size.

    The bytes are handed to lxml as they are, so the XML encoding
    declaration (or a byte order mark) decides how they are decoded.

    Args:
        data: SVG document as bytes

    Returns:
        tuple: (markup, width, height), markup being the serialized <svg> root

    Raises:
        DecodeError: If the document cannot be parsed
    """
    try:
        root = parse_svg(data)
    except ValueError as e:
        raise DecodeError(str(e)) from e

    width, height = svg_dimensions(root)
    return etree.tostring(root, encoding="unicode"), width, height


# === Plugins ===


def remove_comments(root):
    """Remove comments, keeping legal comments that start with '!'."""
    for comment in list(root.iter(etree.Comment)):
        if comment.text and comment.text.startswith("!"):
            continue
        comment.getparent().remove(comment)


def remove_metadata(root):
    """Remove <metadata> elements."""
    for element in list(root.iter(f"{{{SVG_NS}}}metadata", "metadata")):
        element.getparent().remove(element)


def remove_editors_ns_data(root):
    """Remove elements, attributes and namespace declarations of editors."""
    for element in list(root.iter()):
        if not isinstance(element.tag, str):
            continue
        if etree.QName(element).namespace in EDITOR_NAMESPACES:
            element.getparent().remove(element)
            continue
        for name in list(element.attrib):
            if etree.QName(name).namespace in EDITOR_NAMESPACES:
                del element.attrib[name]

    etree.cleanup_namespaces(root)


def cleanup_whitespace(root):
    """Drop whitespace-only text between elements outside text content."""

    def _walk(element, preserve):
        preserve = preserve or element.get(XML_SPACE) == "preserve"
        preserve = preserve or _localname(element) in TEXT_ELEMENTS
        if not preserve and element.text is not None and not element.text.strip():
            element.text = None
        for child in element:
            if isinstance(child.tag, str):
                _walk(child, preserve)
            if not preserve and child.tail is not None and not child.tail.strip():
                child.tail = None

    _walk(root, False)


def remove_view_box(root):
    """Remove a viewBox that only repeats width and height."""
    view_box = parse_view_box(root.get("viewBox"))
    width = parse_length(root.get("width"))
    height = parse_length(root.get("height"))
    if view_box is None or width is None or height is None:
        return
    min_x, min_y, vb_width, vb_height = view_box
    if min_x == 0 and min_y == 0 and vb_width == width and vb_height == height:
        del root.attrib["viewBox"]


def remove_dimensions(root):
    """Remove width/height from the root, adding a viewBox when needed."""
    if root.get("width") is None and root.get("height") is None:
        return

    if parse_view_box(root.get("viewBox")) is None:
        width = parse_length(root.get("width"))
        height = parse_length(root.get("height"))
        if width is None or height is None:
            # Without a usable viewBox the size would be lost
            return
        root.set("viewBox", f"0 0 {_format_number(width)} {_format_number(height)}")

    for name in ("width", "height"):
        if name in root.attrib:
            del root.attrib[name]


PLUGINS = {
    "removeComments": remove_comments,
    "removeMetadata": remove_metadata,
    "removeEditorsNSData": remove_editors_ns_data,
    "cleanupWhitespace": cleanup_whitespace,
    "removeViewBox": remove_view_box,
    "removeDimensions": remove_dimensions,
}


def resolve_plugins(plugins=None):
    """Merge plugin overrides into the default preset.

    Args:
        plugins: List of {"name": str, "active": bool} overrides

    Returns:
        list: Names of the active plugins, in run order

    Raises:
        ValueError: If a plugin name is unknown
    """
    resolved = {p["name"]: p.get("active", True) for p in DEFAULT_SVG_PLUGINS}
    for plugin in plugins or []:
        name = plugin["name"]
        if name not in PLUGINS:
            raise ValueError(f"Unknown SVG plugin: {name}")
        resolved[name] = plugin.get("active", True)

    return [name for name, active in resolved.items() if active]


def optimize(markup, plugins=None):
    """Optimize SVG markup.

    Args:
        markup: SVG document as text
        plugins: Plugin overrides applied on top of the default preset

    Returns:
        dict: {"data": optimized markup}
    """
    root = parse_svg(markup)
    for name in resolve_plugins(plugins):
        PLUGINS[name](root)

    return {"data": etree.tostring(root, encoding="unicode")}
