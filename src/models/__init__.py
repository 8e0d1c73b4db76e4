"""
Models package for mdbook-kcl

Contains data structures and type definitions for the preprocessor pipeline.
"""

from .state import ProgramState, pipeline
from .directives import KCLRender, ScanResult, ChapterResult, DirectiveSyntaxError
from .book import PreprocessorContext, request_split, book_sections, chapters_walk

__all__ = [
    "ProgramState",
    "pipeline",
    "KCLRender",
    "ScanResult",
    "ChapterResult",
    "DirectiveSyntaxError",
    "PreprocessorContext",
    "request_split",
    "book_sections",
    "chapters_walk",
]
