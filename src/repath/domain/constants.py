from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the conventions of Rojo-managed Roblox projects: the source
file extensions that carry module scripts, the script-context suffixes
stripped from module names, and the well-known document names consulted
in the project root.
"""

from typing import List

# -----------------------------------------------------------------------------
# SOURCE FILE CONVENTIONS
# -----------------------------------------------------------------------------

DEFAULT_EXTENSIONS: List[str] = [".lua", ".luau"]

# Script context tags: Foo.server.lua, Foo.client.luau, Foo.shared.lua
DEFAULT_ENV_SUFFIXES: List[str] = ["server", "client", "shared"]

# init.lua / init.server.luau stand for their containing folder
DEFAULT_INIT_TOKEN = "init"

# Conventional source root dropped by the fallback resolver
DEFAULT_SOURCE_ROOT = "src"

# -----------------------------------------------------------------------------
# REFERENCE GRAMMAR
# -----------------------------------------------------------------------------

DEFAULT_DATAMODEL_ROOT = "game"
DEFAULT_ANCHOR_ACCESSOR = "GetService"
DEFAULT_ALIAS_KEYWORD = "local"

# -----------------------------------------------------------------------------
# PROJECT DOCUMENTS
# -----------------------------------------------------------------------------

PROJECT_FILE_SUFFIX = ".project.json"
IGNORE_FILE_NAME = ".repathignore"
DEFAULT_IGNORES: List[str] = [".git", "node_modules"]
