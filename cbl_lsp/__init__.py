"""CFG-language Language Server package.

This package provides a pygls-based Language Server that exposes the `cbl`
indentation engine, token classifier and completion provider to any editor
speaking LSP. It handles files with the configured extensions (`.cbl` by
default).

Note: The server never evaluates or validates documents; all answers are
computed from the current text.
"""

__all__ = [
    "server",
]
