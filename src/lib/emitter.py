"""
Replacement tokens for KCL directives

A directive becomes one of two shapes:

- 3D (skip3d false): a single html_block token holding a <model-viewer>
  element that loads gltf/<name>/output.gltf with the 2D render as poster
- 2D fallback (skip3d true): a paragraph holding only the image
  images/dynamic/<name>.png

Tokens are built fresh for every directive and follow markdown-it's token
grammar (balanced *_open/*_close pairs, inline children under an inline
token) so MDRenderer can re-serialize them.
"""

import re
from html import escape
from typing import List, Optional

from markdown_it.token import Token

from ..config import appsettings, AppSettings
from ..models.directives import KCLRender

# MDRenderer writes image descriptions verbatim
_DESCRIPTION_SPECIALS = re.compile(r'([\\\[\]])')


def attribute_quote(value: str) -> str:
    """HTML-escape an attribute value and keep it on one line"""
    return escape(" ".join(value.splitlines()))


def modelViewer_build(render: KCLRender, settings: Optional[AppSettings] = None) -> str:
    """
    HTML for the 3D shape.

    The complete open tag sits on the first line, which is what lets
    CommonMark start an HTML block on a custom element (block condition 7).
    """
    settings = settings or appsettings
    open_tag = " ".join([
        "<model-viewer",
        f'alt="{attribute_quote(render.alt)}"',
        f'src="{attribute_quote(render.gltf_path)}"',
        "ar",
        f'environment-image="{attribute_quote(settings.environment_image)}"',
        f'poster="{attribute_quote(render.image_path)}"',
        'shadow-intensity="1"',
        "auto-rotate",
        'camera-controls touch-action="pan-y">',
    ])
    return open_tag + "\n</model-viewer>"


def modelViewer_emit(render: KCLRender, settings: Optional[AppSettings] = None) -> List[Token]:
    """One html_block token for the 3D shape"""
    block = Token("html_block", "", 0)
    block.block = True
    block.content = modelViewer_build(render, settings) + "\n"
    return [block]


def description_escape(text: str) -> str:
    r"""
    Backslash-escape the characters that would end an image description.

    Example:
        >>> description_escape("see ]here")
        'see \\]here'
    """
    return _DESCRIPTION_SPECIALS.sub(r'\\\1', text)


def fallback_emit(render: KCLRender, tight: bool = False) -> List[Token]:
    """
    A one-image paragraph for the 2D fallback shape.

    Yields paragraph_open, inline, paragraph_close at the top level; the
    inline token carries the image, whose child is the description text.
    Title and description are both "2D fallback: <alt>".

    Args:
        render: Parsed directive
        tight: The paragraph sits directly in an item of a tight list, so
               it is hidden like the list's own paragraphs
    """
    description = render.fallback_text
    escaped = description_escape(description)

    text = Token("text", "", 0)
    text.content = escaped

    image = Token("image", "img", 0)
    image.attrs = {"src": render.image_path, "alt": "", "title": description}
    image.children = [text]
    image.content = description

    inline = Token("inline", "", 0)
    inline.content = f'![{escaped}]({render.image_path} "{description}")'
    inline.children = [image]
    inline.level = 1
    inline.block = True

    paragraph_open = Token("paragraph_open", "p", 1)
    paragraph_open.block = True
    paragraph_open.hidden = tight
    paragraph_close = Token("paragraph_close", "p", -1)
    paragraph_close.block = True
    paragraph_close.hidden = tight

    return [paragraph_open, inline, paragraph_close]


def tokens_emit(render: KCLRender, settings: Optional[AppSettings] = None,
                tight: bool = False) -> List[Token]:
    """Replacement tokens for one directive"""
    if render.skip3d:
        return fallback_emit(render, tight)
    return modelViewer_emit(render, settings)
