from cbl.indent.rules import (
    AliasOf,
    DefaultAlign,
    FixedSpecial,
    IndentPolicy,
    IndentRuleTable,
    INDENT_RULES,
)
from cbl.indent.resolver import LineEdit, compute_indent, indent_line, line_indent_edits, reindent
