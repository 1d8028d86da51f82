"""
A pygls-based Language Server for the CFG language (.cbl files).

Features:
- Completion: static vocabulary matching the token before the cursor
- Semantic tokens: highlighting categories from the token classifier
- Formatting: whole-document and range re-indentation
- On-type formatting: indent the new line after Enter

The server never parses a document into an AST; every request is answered
from the current text alone. Positions are exchanged in UTF-16 code units
(the LSP default encoding) and only newline characters end a line.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from pygls.lsp.server import LanguageServer
from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_FORMATTING,
    TEXT_DOCUMENT_ON_TYPE_FORMATTING,
    TEXT_DOCUMENT_RANGE_FORMATTING,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DocumentFormattingParams,
    DocumentOnTypeFormattingOptions,
    DocumentOnTypeFormattingParams,
    DocumentRangeFormattingParams,
    InitializeParams,
    Position,
    Range,
    SemanticTokens,
    SemanticTokensLegend,
    SemanticTokensParams,
    TextEdit,
)

from cbl import __version__
from cbl.completion import complete, prefix_at
from cbl.config import get_file_extensions, get_log_level, is_cbl_path
from cbl.highlight import TokenCategory, classify, classify_region
from cbl.indent import line_indent_edits

logger = logging.getLogger(__name__)

# One LSP token type per highlighted category; plain identifiers are not sent
TOKEN_TYPES = {
    TokenCategory.STATEMENT: "keyword",
    TokenCategory.MISC_KEYWORD: "macro",
    TokenCategory.OPERATOR: "operator",
    TokenCategory.TYPE_CONSTRUCTOR: "type",
    TokenCategory.NUMERIC_LITERAL: "number",
    TokenCategory.BOOLEAN_LITERAL: "enumMember",
    TokenCategory.GLOBAL_REF: "variable",
    TokenCategory.FUNCTION_REF: "function",
    TokenCategory.LABEL_REF: "label",
}
LEGEND = SemanticTokensLegend(token_types=list(TOKEN_TYPES.values()), token_modifiers=[])
_TOKEN_INDEX = {cat: i for i, cat in enumerate(TOKEN_TYPES)}

COMPLETION_KINDS = {
    TokenCategory.STATEMENT: CompletionItemKind.Keyword,
    TokenCategory.MISC_KEYWORD: CompletionItemKind.Keyword,
    TokenCategory.OPERATOR: CompletionItemKind.Function,
    TokenCategory.TYPE_CONSTRUCTOR: CompletionItemKind.Class,
}


class CblLanguageServer(LanguageServer):
    CMD_NAME = "cbl-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, f"v{__version__}")

    def document_text(self, uri: str) -> Optional[str]:
        """Current text of a .cbl document, or None for other files."""
        if not is_cbl_path(uri):
            logger.debug("Ignoring non-cbl document %s", uri)
            return None
        return self.workspace.get_text_document(uri).source


ls = CblLanguageServer()


@ls.feature(INITIALIZE)
def on_initialize(params: InitializeParams):
    client = params.client_info.name if params.client_info else "unknown client"
    logger.info("Initialized for %s; handling %s", client, ", ".join(get_file_extensions()))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(params: CompletionParams) -> CompletionList:
    text = ls.document_text(params.text_document.uri)
    if text is None:
        return CompletionList(is_incomplete=False, items=[])
    return completion_items(text, params.position)


# --- Semantic tokens ---
@ls.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
def on_semantic_tokens(params: SemanticTokensParams) -> SemanticTokens:
    text = ls.document_text(params.text_document.uri)
    return SemanticTokens(data=semantic_token_data(text) if text is not None else [])


# --- Formatting ---
@ls.feature(TEXT_DOCUMENT_FORMATTING)
def on_formatting(params: DocumentFormattingParams) -> List[TextEdit]:
    text = ls.document_text(params.text_document.uri)
    if text is None:
        return []
    edits = formatting_edits(text)
    logger.debug("Formatting %s: %d line(s) changed", params.text_document.uri, len(edits))
    return edits


@ls.feature(TEXT_DOCUMENT_RANGE_FORMATTING)
def on_range_formatting(params: DocumentRangeFormattingParams) -> List[TextEdit]:
    text = ls.document_text(params.text_document.uri)
    if text is None:
        return []
    return formatting_edits(text, params.range.start.line, params.range.end.line)


@ls.feature(TEXT_DOCUMENT_ON_TYPE_FORMATTING, DocumentOnTypeFormattingOptions(first_trigger_character="\n"))
def on_type_formatting(params: DocumentOnTypeFormattingParams) -> List[TextEdit]:
    text = ls.document_text(params.text_document.uri)
    if text is None:
        return []
    line = params.position.line
    return formatting_edits(text, line, line)


# --- Helpers ---

def _utf16_units(ch: str) -> int:
    return 2 if ord(ch) > 0xFFFF else 1


def offset_at(text: str, position: Position) -> int:
    """Offset of an LSP position; lines end at '\\n', characters are UTF-16 code units."""
    lines = text.split("\n")
    if position.line >= len(lines):
        return len(text)
    start = sum(len(line) + 1 for line in lines[: position.line])
    line_text = lines[position.line].rstrip("\r")
    units = 0
    for i, ch in enumerate(line_text):
        if units >= position.character:
            return start + i
        units += _utf16_units(ch)
    return start + len(line_text)


def completion_items(text: str, position: Position) -> CompletionList:
    prefix = prefix_at(text, offset_at(text, position))
    result = complete(prefix)
    items = [
        CompletionItem(label=word, kind=COMPLETION_KINDS.get(classify(word), CompletionItemKind.Text))
        for word in result.candidates
    ]
    # is_incomplete is about re-querying while typing; the static list never changes
    return CompletionList(is_incomplete=False, items=items)


def semantic_token_data(text: str) -> List[int]:
    """Classified spans encoded as LSP relative tokens (5 ints per token)."""
    data: List[int] = []
    prev_line = 0
    prev_col = 0
    line = 0
    line_begin = 0
    for span in classify_region(text):
        if span.category not in _TOKEN_INDEX:
            continue
        # identifiers are ASCII and never contain newlines: length in UTF-16 units is len()
        line += text.count("\n", line_begin, span.start)
        line_begin = text.rfind("\n", 0, span.start) + 1
        col = sum(_utf16_units(ch) for ch in text[line_begin:span.start])
        delta_line = line - prev_line
        delta_col = col - prev_col if delta_line == 0 else col
        data.extend([delta_line, delta_col, span.end - span.start, _TOKEN_INDEX[span.category], 0])
        prev_line, prev_col = line, col
    return data


def formatting_edits(text: str, first_line: int = 0, last_line: Optional[int] = None) -> List[TextEdit]:
    return [
        TextEdit(
            range=Range(start=Position(line=e.line, character=0), end=Position(line=e.line, character=e.old_width)),
            new_text=" " * e.column,
        )
        for e in line_indent_edits(text, first_line=first_line, last_line=last_line)
    ]


def start_server():
    logging.basicConfig(level=get_log_level())
    logger.info("Starting %s", CblLanguageServer.CMD_NAME)
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    start_server()
