"""
Markdown tokenizer / re-serializer pair

markdown-it-py turns chapter text into a flat token stream and mdformat's
MDRenderer turns a (possibly modified) token stream back into markdown.
The MarkdownIt instance is configured the way mdformat configures its own
parser, so tokens carry what MDRenderer needs (reference labels etc).

Round trip:
    codec = MarkdownCodec()
    env = {}
    text = codec.render(codec.tokenize(source, env), env)
    # text is source, normalized by mdformat
"""

from typing import Any, Dict, List, MutableMapping, Optional, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdformat.renderer import MDRenderer


class MarkdownCodec:
    """
    CommonMark tokenizer and markdown re-serializer

    The env mapping filled in by tokenize() (link reference definitions)
    must be handed back to render() for the same chapter.
    """

    def __init__(self, mdformat_options: Optional[Dict[str, Any]] = None) -> None:
        self.mdit = MarkdownIt("commonmark", renderer_cls=MDRenderer)
        self.mdit.options["mdformat"] = dict(mdformat_options or {})
        self.mdit.options["store_labels"] = True
        self.mdit.options["parser_extension"] = []
        self.mdit.options["codeformatters"] = {}

    def tokenize(self, text: str, env: Optional[MutableMapping] = None) -> List[Token]:
        """Tokenize one chapter's text"""
        if env is None:
            env = {}
        return self.mdit.parse(text, env)

    def render(self, tokens: Sequence[Token], env: Optional[MutableMapping] = None) -> str:
        """
        Re-serialize a token stream to markdown

        Raises whatever MDRenderer raises for a stream it cannot render;
        callers treat that as fatal.
        """
        if env is None:
            env = {}
        return self.mdit.renderer.render(tokens, self.mdit.options, env)
