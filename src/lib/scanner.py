"""
Directive scanner

Walks a chapter's markdown-it token stream once and expands every KCL
directive in place. A token is a directive candidate only when it is a
raw HTML block starting with the directive prefix (block indentation
aside); everything else passes through in its original order.
"""

from typing import Iterable, List, Optional, Set

from markdown_it.token import Token

from ..config import appsettings, AppSettings
from ..models.directives import ScanResult
from .emitter import tokens_emit
from .log import LOG, logger
from .parser import payload_extract, directive_parse


def directive_is(token: Token, settings: Optional[AppSettings] = None) -> bool:
    """True if the token is a raw HTML block that starts like a KCL directive"""
    settings = settings or appsettings
    return token.type == "html_block" and token.content.lstrip().startswith(settings.directive_prefix)


def tightSlots_find(tokens: List[Token]) -> Set[int]:
    """
    Indices of tokens that sit directly in an item of a tight list.

    A list is tight when none of the paragraphs directly in its items is
    visible, which is how markdown-it marks tight lists and how mdformat
    decides to render them without blank lines. Item children are two
    levels below the list_open token.
    """
    tight: Set[int] = set()
    # [list level, loose, indices of item children]
    stack: List[list] = []

    for index, token in enumerate(tokens):
        if token.type in ("bullet_list_open", "ordered_list_open"):
            stack.append([token.level, False, []])
        elif token.type in ("bullet_list_close", "ordered_list_close"):
            _level, loose, members = stack.pop()
            if not loose:
                tight.update(members)
        elif stack and token.level == stack[-1][0] + 2:
            if token.type == "paragraph_open" and not token.hidden:
                stack[-1][1] = True
            stack[-1][2].append(index)

    return tight


def tokens_scan(tokens: Iterable[Token], settings: Optional[AppSettings] = None) -> ScanResult:
    """
    Expand KCL directives in a token stream

    Args:
        tokens: Chapter tokens from the tokenizer
        settings: Settings (defaults to appsettings)

    Returns:
        ScanResult with the new token list and the number of directives
        expanded. A directive missing its closing delimiter is kept as is
        and not counted.

    Raises:
        DirectiveSyntaxError: If a directive has a field without '='
    """
    settings = settings or appsettings
    tokens = list(tokens)
    tight = tightSlots_find(tokens)
    result = ScanResult()

    for index, token in enumerate(tokens):
        if not directive_is(token, settings):
            result.tokens.append(token)
            continue

        payload = payload_extract(token.content, settings)
        if payload is None:
            logger.warning(f"Malformed KCL directive, leaving it unchanged: {token.content.strip()!r}")
            result.tokens.append(token)
            continue

        render = directive_parse(payload, settings)
        LOG(f"Found KCL render: {render}", level=2)
        result.tokens.extend(tokens_emit(render, settings, tight=index in tight))
        result.found += 1

    return result
