import os
import sys

sys.path.insert(0, os.path.abspath(".."))

project = "meshcombine"
copyright = "2024, tinker495"
author = "tinker495"
release = "0.1.0"

extensions = [
    "sphinx.ext.autodoc",  # API pages from docstrings
    "sphinx.ext.napoleon",  # Google style Args/Returns sections
    "sphinx.ext.viewcode",  # Links to highlighted source code
]

exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

napoleon_google_docstring = True
napoleon_numpy_docstring = False

autodoc_member_order = "bysource"
