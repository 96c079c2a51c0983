import os

TOP_K: int = 10

# Where `index` writes and `serve`/`search` read the JSON snapshot by default
DEFAULT_INDEX_PATH: str = "data/index.json"

# Storage backend DSN: "memory://" or "sqlite:///path/to/index.sqlite"
DEFAULT_DSN: str = "memory://"

# HTTP server
DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8383

# /* ~~~ file types picked up by the folder walker ~~~ */
XML_EXTS = {".xml", ".xhtml"}
TEXT_EXTS = {".txt", ".md"}
INCLUDE_EXTS = XML_EXTS | TEXT_EXTS

# folders to skip
EXCLUDE_DIRS = {".git", ".hg", ".svn", ".idea", ".vscode", "node_modules", "__pycache__"}

# Progress logging (set DOCSEARCH_VERBOSE=1 to enable); read on every call
def verbose() -> bool:
    return os.environ.get("DOCSEARCH_VERBOSE") == "1"

PROGRESS_EVERY_FILES: int = 500
