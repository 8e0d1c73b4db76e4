"""
KCL directive models

Defines the typed record parsed out of a <!-- KCL: ... --> directive, the
results handed back by the scanner and the chapter transform, and the
error raised for structurally broken directives.
"""

from dataclasses import dataclass, field
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from markdown_it.token import Token


class DirectiveSyntaxError(SyntaxError):
    """
    A KCL directive whose payload cannot be parsed

    Raised for a field entry without an '=' separator (and, in strict mode,
    for a directive without a name). Never recovered locally: it aborts
    the whole book.
    """


@dataclass
class KCLRender:
    """
    Fields of one KCL render directive

    Attributes:
        name: Model identifier, used to build the gltf and poster paths
        alt: Accessible description (trimmed)
        skip3d: Emit the 2D fallback image instead of a <model-viewer>

    Example:
        "<!-- KCL: name=pill_2d,skip3d=false,alt=A pill -->" gives
        KCLRender(name="pill_2d", alt="A pill", skip3d=False)
    """
    name: str = ""
    alt: str = ""
    skip3d: bool = False

    @property
    def gltf_path(self) -> str:
        return f"gltf/{self.name}/output.gltf"

    @property
    def image_path(self) -> str:
        return f"images/dynamic/{self.name}.png"

    @property
    def fallback_text(self) -> str:
        return f"2D fallback: {self.alt}"


@dataclass
class ScanResult:
    """
    Result of scanning a chapter's token stream

    Attributes:
        tokens: Token stream with every well-formed directive expanded
        found: Number of directives expanded
    """
    tokens: List['Token'] = field(default_factory=list)
    found: int = 0


@dataclass
class ChapterResult:
    """Re-serialized chapter text and the number of directives it held"""
    content: str
    found: int = 0
