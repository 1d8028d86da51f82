from cbl.reader.scanner import (
    ParseState,
    find_enclosing_form,
    head_symbol_of,
    last_complete_sibling_before,
    column_of,
)
