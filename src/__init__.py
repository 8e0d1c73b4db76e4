"""mdbook-kcl: expands KCL render directives in mdBook chapters."""

from .lib import KCLPreprocessor, PreprocessorError, MarkdownCodec, LOG, state_connectToLogger, __version__

__all__ = [
    "KCLPreprocessor",
    "PreprocessorError",
    "MarkdownCodec",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
