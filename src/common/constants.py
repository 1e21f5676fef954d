"""Shared constants describing the layout of a generated project.

For environment-based configuration (timeouts, commands, etc.), use the env module:
    from common.env import env
    retries = env.max_retries()
"""

# Sub-directories of a generated project
FRONTEND_DIR = "frontend"
OPTIONAL_DIRS: tuple[str, ...] = ("admin", "backend")

# Inside every node sub-tree
SOURCE_DIR = "src"
PAGES_DIR = "pages"
MANIFEST_FILE = "package.json"
DEPENDENCY_DIR = "node_modules"

# Never descended into when walking a source tree (dot-directories are skipped too)
IGNORED_DIRS: set[str] = {DEPENDENCY_DIR}

# Backend health endpoint checked by live audits
BACKEND_HEALTH_PATH = "/api/health"
