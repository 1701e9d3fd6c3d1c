#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: CC0-1.0

import os

from importlib.metadata import version as get_version

from packaging.version import parse as parse_version

os.environ["SPHINX_AUTODOC_RELOAD_MODULES"] = "1"

project = "scopeguard"
author = "Ilya Egorov"
copyright = "2026 Ilya Egorov"

v = parse_version(get_version("scopeguard"))
version = v.base_version
release = v.public

extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.doctest",
    "sphinx.ext.intersphinx",
    "sphinx.ext.napoleon",
    "sphinx_copybutton",
    "sphinx_inline_tabs",
    "sphinx_rtd_theme",
]

toc_object_entries = False

autodoc_class_signature = "separated"
autodoc_inherit_docstrings = False
autodoc_preserve_defaults = True
autodoc_default_options = {
    "exclude-members": "__init_subclass__,__class_getitem__,__weakref__",
    "member-order": "bysource",
    "show-inheritance": True,
    "special-members": "__enter__,__exit__,__len__,__bool__",
}

doctest_global_setup = "from scopeguard import *"

intersphinx_mapping = {
    "exceptiongroup": ("https://exceptiongroup.readthedocs.io/en/stable/", None),
    "python": ("https://docs.python.org/3", None),
    "wrapt": ("https://wrapt.readthedocs.io/en/master/", None),
}

html_theme = "sphinx_rtd_theme"
html_theme_options = {}
html_context = {
    "display_github": True,
    "github_user": "x42005e1f",
    "github_repo": "scopeguard",
    "github_version": "main",
    "conf_py_path": "/docs/",
}
