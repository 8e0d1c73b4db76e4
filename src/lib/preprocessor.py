"""
KCL book preprocessor

Drives the per-chapter transform over an mdBook book:

    header inject -> tokenize -> scan/expand directives -> re-serialize

Only chapters are touched (separators and part titles are skipped) and
only the html renderer is supported. Chapters are processed in document
order; a failing chapter does not stop the others, but any failure fails
the run.
"""

from typing import Any, Dict, List, Optional

from ..config import appsettings, AppSettings
from ..models.book import PreprocessorContext, book_sections, chapters_walk
from ..models.directives import ChapterResult
from .log import LOG, logger
from .markdown import MarkdownCodec
from .scanner import tokens_scan


class PreprocessorError(Exception):
    """
    One or more chapters failed to preprocess

    Attributes:
        errors: (chapter name, exception) pairs in document order
    """

    def __init__(self, errors: List[tuple]) -> None:
        self.errors = errors
        name, first = errors[0]
        message = f"{len(errors)} chapter(s) failed; first in '{name}': {first}"
        super().__init__(message)


class KCLPreprocessor:
    """
    mdBook preprocessor that expands KCL render directives

    Example:
        >>> preprocessor = KCLPreprocessor()
        >>> preprocessor.chapter_transform("<!-- KCL: name=gear,skip3d=true,alt=Gear -->")
        '![2D fallback: Gear](images/dynamic/gear.png "2D fallback: Gear")\\n'
    """

    name = "kcl"

    def __init__(self, settings: Optional[AppSettings] = None,
                 codec: Optional[MarkdownCodec] = None) -> None:
        self.settings = settings or appsettings
        self.codec = codec or MarkdownCodec()

    def supports_renderer(self, renderer: str) -> bool:
        return renderer == self.settings.supported_renderer

    def header_inject(self, content: str) -> str:
        """Prepend the model-viewer script header to a chapter"""
        return self.settings.header + content

    def chapter_process(self, content: str) -> ChapterResult:
        """
        Expand the directives in one chapter's markdown

        Args:
            content: Chapter text (header injection is not done here)

        Returns:
            ChapterResult with the re-serialized text and directive count

        Raises:
            DirectiveSyntaxError: If a directive has a field without '='
        """
        env: Dict[str, Any] = {}
        tokens = self.codec.tokenize(content, env)
        LOG(f"Tokenized chapter into {len(tokens)} tokens", level=3)

        scan = tokens_scan(tokens, self.settings)
        return ChapterResult(content=self.codec.render(scan.tokens, env), found=scan.found)

    def chapter_transform(self, content: str) -> str:
        """Expand the directives in one chapter's markdown and return the text"""
        return self.chapter_process(content).content

    def run(self, context: PreprocessorContext, book: Dict[str, Any]) -> int:
        """
        Preprocess every chapter of a book in place

        Args:
            context: mdBook preprocessor context
            book: Book JSON object; chapter contents are replaced

        Returns:
            Number of KCL directives expanded across the book

        Raises:
            ValueError: If the context's renderer is not supported
            PreprocessorError: If any chapter failed
        """
        if context.renderer and not self.supports_renderer(context.renderer):
            raise ValueError(f"The {self.name} preprocessor does not support the '{context.renderer}' renderer")

        settings = self.settings.overrides_apply(context.preprocessorTable_get(self.name))
        processor = self if settings is self.settings else KCLPreprocessor(settings, self.codec)
        LOG(f"Preprocessing for mdBook {context.mdbook_version or '(unknown version)'}", level=2)

        errors = []
        count = 0
        for chapter in chapters_walk(book_sections(book)):
            chapter_name = chapter.get("name", "")
            content = processor.header_inject(chapter.get("content", ""))
            try:
                result = processor.chapter_process(content)
            except Exception as e:
                logger.error(f"Chapter '{chapter_name}' failed: {e}")
                errors.append((chapter_name, e))
                continue
            chapter["content"] = result.content
            count += result.found
            LOG(f"Chapter '{chapter_name}': {result.found} KCL render(s)", level=2)

        LOG(f"Found {count} 3D images", level=1)

        if errors:
            raise PreprocessorError(errors) from errors[0][1]
        return count
