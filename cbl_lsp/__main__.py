"""
Entry point for the CFG-language server.

Usage:
    python -m cbl_lsp
"""

from cbl_lsp.server import start_server

if __name__ == "__main__":
    start_server()
