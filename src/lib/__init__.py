"""
mdbook-kcl - mdBook preprocessor for KCL 3D model renders

Expands <!-- KCL: ... --> directives into <model-viewer> embeds or 2D
fallback images.
"""

__version__ = "0.1.0"

from .preprocessor import KCLPreprocessor, PreprocessorError
from .markdown import MarkdownCodec
from .log import LOG, state_connectToLogger

__all__ = [
    "KCLPreprocessor",
    "PreprocessorError",
    "MarkdownCodec",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
