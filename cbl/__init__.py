# Editor-agnostic language support for the CFG description language (.cbl files).
#
# Everything here is a pure function of the current text (and a position):
# - reader.scanner: tolerant balanced-expression scanning
# - indent:         per-keyword indentation policies and the column resolver
# - highlight:      token classification for highlighting
# - completion:     prefix completion over the static vocabulary
#
# cbl_lsp wraps these in a Language Server; nothing in this package imports it.

from cbl.completion import Completions, complete
from cbl.highlight import Span, TokenCategory, classify, classify_region
from cbl.indent import INDENT_RULES, compute_indent, reindent
from cbl.vocabulary import VOCABULARY, Vocabulary

__version__ = "0.1.0"
