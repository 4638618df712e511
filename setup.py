# setup.py
from setuptools import setup, find_packages

setup(
    name="lirs",
    version="0.1.0",
    description="LIRS: a symbolic expression language for materials-chemistry composition",
    packages=find_packages(include=["lirs", "lirs.*", "lirs_lsp", "lirs_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "lirs=lirs.repl:main",
            "lirs-ls=lirs_lsp.server:main",
        ],
    },
    zip_safe=False,
)
