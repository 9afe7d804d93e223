"""Sphinx configuration for the Tetris board bridge documentation."""

import os
import sys

# -- Path setup ---------------------------------------------------------------
# Add the project root to sys.path so autodoc can find tetris_bridge/
sys.path.insert(0, os.path.abspath(".."))

# -- Project information ------------------------------------------------------
project = "Tetris MCP Bridge"
copyright = "2026, Tetris MCP Bridge contributors"
author = "Tetris MCP Bridge contributors"
release = "1.0.0"

# -- General configuration ----------------------------------------------------
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",  # Google/NumPy-style docstrings
    "sphinx.ext.viewcode",  # [source] links in API docs
    "sphinx.ext.intersphinx",  # cross-ref to Python/Selenium docs
    "sphinx_autodoc_typehints",  # inline type hints in signatures
    "myst_parser",  # parse .md files
]

# MyST (Markdown) settings
myst_enable_extensions = [
    "colon_fence",  # ::: directive syntax
    "deflist",  # definition lists
    "fieldlist",  # :field: value
]
myst_heading_anchors = 3

# Autodoc settings
autodoc_default_options = {
    "members": True,
    "undoc-members": True,
    "show-inheritance": True,
    "member-order": "bysource",
}
autodoc_typehints = "description"
# Browser and server stacks are not needed to render the API reference.
autodoc_mock_imports = [
    "selenium",
    "fastapi",
    "mcp",
    "starlette",
    "uvicorn",
    "yaml",
]

# Napoleon settings
napoleon_google_docstring = False
napoleon_numpy_docstring = True
napoleon_include_init_with_doc = True

# Intersphinx mapping
intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "selenium": ("https://www.selenium.dev/selenium/docs/api/py/", None),
}

# Source file suffixes
source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}

# The master doc
master_doc = "index"

# Exclude patterns
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

# -- Options for HTML output ---------------------------------------------------
html_theme = "furo"
html_title = "Tetris MCP Bridge"
html_static_path = []

# Furo theme options
html_theme_options = {
    "sidebar_hide_name": False,
    "navigation_with_keys": True,
}
