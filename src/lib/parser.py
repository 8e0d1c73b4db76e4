"""
Parser for <!-- KCL: ... --> directive payloads

A directive is a raw HTML comment of the form

    <!-- KCL: name=pill_2d,skip3d=false,alt=A pill, before extruding -->

(commas are not allowed inside values, so the alt above would in fact be
cut at the comma). Parsing happens in two steps:

1. payload_extract(): check the delimiters and cut out the text between them
2. directive_parse(): split that text into key=value fields and build a
   KCLRender record

Example:
    >>> payload = payload_extract("<!-- KCL: name=gear,alt= A gear  -->")
    >>> payload
    'name=gear,alt= A gear'
    >>> directive_parse(payload)
    KCLRender(name='gear', alt='A gear', skip3d=False)
"""

from typing import List, Optional, Tuple

from ..config import appsettings, AppSettings
from ..models.directives import KCLRender, DirectiveSyntaxError
from .log import LOG, logger


def payload_extract(text: str, settings: Optional[AppSettings] = None) -> Optional[str]:
    """
    Cut the field list out of a directive's raw text

    Surrounding whitespace of the whole text is ignored, as is the
    whitespace between the delimiters and the fields.

    Args:
        text: Raw HTML block content
        settings: Settings carrying the delimiters (defaults to appsettings)

    Returns:
        The field list, or None when the text does not start with the
        directive prefix or does not end with the closing delimiter
    """
    settings = settings or appsettings
    prefix = settings.directive_prefix
    suffix = settings.directive_suffix

    text = text.strip()
    if not text.startswith(prefix):
        return None
    if len(text) < len(prefix) + len(suffix) or not text.endswith(suffix):
        return None
    return text[len(prefix):len(text) - len(suffix)].strip()


def fields_split(payload: str) -> List[Tuple[str, str]]:
    """
    Split a field list into (key, value) pairs

    Entries are separated by ',' and each entry is split on its first '='.

    Raises:
        DirectiveSyntaxError: If an entry has no '='

    Example:
        >>> fields_split("name=a,alt=x=y")
        [('name', 'a'), ('alt', 'x=y')]
    """
    fields = []
    for entry in payload.split(','):
        key, sep, value = entry.partition('=')
        if not sep:
            raise DirectiveSyntaxError(
                f"KCL directive field {entry!r} has no '=' (in {payload!r})"
            )
        fields.append((key, value))
    return fields


def directive_parse(payload: str, settings: Optional[AppSettings] = None) -> KCLRender:
    """
    Build a KCLRender from a directive's field list

    Recognized keys are name (kept verbatim), alt (trimmed) and skip3d
    (true only for the exact text "true"). Unknown keys are ignored and
    a repeated key keeps its last value.

    Args:
        payload: Field list as returned by payload_extract()
        settings: Settings (strict_mode decides how a missing name is treated)

    Returns:
        The parsed record

    Raises:
        DirectiveSyntaxError: On a field without '=', or a missing name in
                              strict mode
    """
    settings = settings or appsettings
    render = KCLRender()
    has_name = False

    for key, value in fields_split(payload):
        if key == "name":
            render.name = value
            has_name = True
        elif key == "alt":
            render.alt = value.strip()
        elif key == "skip3d":
            render.skip3d = value == "true"
        else:
            LOG(f"Ignoring unknown KCL field {key!r}", level=3)

    if not has_name:
        if settings.strict_mode:
            raise DirectiveSyntaxError(f"KCL directive has no name (in {payload!r})")
        logger.warning(f"KCL directive has no name, asset paths will be empty: {payload!r}")

    return render
