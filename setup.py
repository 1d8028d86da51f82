# setup.py
from setuptools import setup, find_packages

setup(
    name="cbl",
    version="0.1.0",
    description="Indentation, highlighting and completion for the CFG description language (.cbl)",
    packages=find_packages(include=["cbl", "cbl.*", "cbl_lsp", "cbl_lsp.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pygls>=2.0",
        "lsprotocol>=2023.0.1",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["cbl-ls=cbl_lsp.server:start_server"],
    },
    zip_safe=False,
)
