"""
State bus for the preprocessor CLI

ProgramState collects what each CLI stage produces (request, book,
directive count); pipeline() runs the stages in order.
"""

from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable, TYPE_CHECKING
from dataclasses import dataclass, field

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from .book import PreprocessorContext


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the preprocessor pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: verbosity
        - request_read: context, book
        - book_preprocess: directiveCount
        - response_write: (no additions, terminal stage)

    Attributes:
        verbosity: Logging verbosity level (0-3)
        context: Validated mdBook preprocessor context
        book: The book JSON object, transformed in place
        directiveCount: Number of KCL directives expanded across the book
    """

    # CLI arguments
    verbosity: int = field(default=1)

    # Pipeline state
    context: Optional["PreprocessorContext"] = field(default=None)
    book: Optional[Dict[str, Any]] = field(default=None)
    directiveCount: int = field(default=0)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace.

        Args:
            options: Parsed CLI arguments

        Returns:
            ProgramState instance with the matching CLI options as attributes
        """
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Only keep options that are ProgramState fields (drops subcommand args)
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """Shallow copy of the state (the book dict itself is shared)."""
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Thread a ProgramState through the preprocessor stages, left to right.

    pipeline(state, request_read, book_preprocess, response_write) is
    response_write(book_preprocess(request_read(state))).
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
