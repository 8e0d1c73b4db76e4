#!/usr/bin/env python3
"""
mdbook-kcl - mdBook preprocessor for KCL 3D model renders

Expands KCL render directives embedded in book chapters:

    <!-- KCL: name=pill_2d,skip3d=false,alt=A pill before extruding -->

into a <model-viewer> element (gltf/<name>/output.gltf, with
images/dynamic/<name>.png as poster) or, with skip3d=true, into a plain
image of images/dynamic/<name>.png. Every chapter also gets the
model-viewer script tag prepended.

Protocol (as mdBook drives it):
    mdbook-kcl supports html        # exit 0 if the renderer is supported
    mdbook-kcl < request.json       # [context, book] in, book out on stdout

book.toml:
    [preprocessor.kcl]
    command = "mdbook-kcl"
    strict-mode = false

Examples:
    # Run a captured request by hand, with per-chapter details
    mdbook-kcl -vv < request.json > book.json
"""

import json
import sys
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import List, Optional

from .lib import KCLPreprocessor, PreprocessorError, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline, request_split, DirectiveSyntaxError


# Define CLI arguments
parser = ArgumentParser(
    prog="mdbook-kcl",
    description="mdbook-kcl - mdBook preprocessor for KCL 3D model renders",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")

subparsers = parser.add_subparsers(dest="command")
supports_parser = subparsers.add_parser(
    "supports", help="Check whether a renderer is supported (exit status 0 if so)"
)
supports_parser.add_argument("renderer", type=str, help="Renderer name, e.g. html")


def request_read(inputstate: ProgramState) -> ProgramState:
    """
    Read and validate the preprocessor request from stdin.

    Returns:
        ProgramState with added fields:
            - context: PreprocessorContext
            - book: Book JSON object

    Exits:
        1 if stdin is not a valid [context, book] request
    """
    state = inputstate.copy()

    LOG("Reading preprocessor request...", level=2)

    try:
        state.context, state.book = request_split(json.load(sys.stdin))
    except ValueError as e:
        # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
        print(f"Error: invalid preprocessor request: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Renderer: {state.context.renderer}", level=2)
    return state


def book_preprocess(inputstate: ProgramState) -> ProgramState:
    """
    Expand KCL directives in every chapter of the book.

    Returns:
        ProgramState with added field:
            - directiveCount: Number of directives expanded

    Exits:
        1 if any chapter failed or the renderer is unsupported
    """
    state = inputstate.copy()

    try:
        state.directiveCount = KCLPreprocessor().run(state.context, state.book)
    except (PreprocessorError, DirectiveSyntaxError, ValueError) as e:
        print(f"Preprocessing error: {e}", file=sys.stderr)
        sys.exit(1)

    return state


def response_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the transformed book to stdout for mdBook.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state = inputstate.copy()
    json.dump(state.book, sys.stdout)
    sys.stdout.flush()
    return state


def renderer_supports(renderer: str) -> None:
    """Exit 0 if the renderer is supported, 1 otherwise"""
    sys.exit(0 if KCLPreprocessor().supports_renderer(renderer) else 1)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point - run the preprocessor as mdBook invokes it.

    Orchestrates the pipeline:
        1. request_read: Parse [context, book] from stdin
        2. book_preprocess: Expand directives chapter by chapter
        3. response_write: Emit the book JSON on stdout
    """
    options: Namespace = parser.parse_args(argv)

    if options.command == "supports":
        renderer_supports(options.renderer)

    state: ProgramState = ProgramState.state_createFromNamespace(options=options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, request_read, book_preprocess, response_write)


if __name__ == "__main__":
    main()
