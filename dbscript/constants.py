"""
Defaults shared by the reader, the splitter and the executor.
"""
from __future__ import annotations

DEFAULT_STATEMENT_SEPARATOR = ";"

# Used when neither a custom separator nor ";" occurs in the script.
FALLBACK_STATEMENT_SEPARATOR = "\n"

# Virtual separator: the whole script is one statement.  Scripts are not
# expected to actually contain it.
EOF_STATEMENT_SEPARATOR = "^^^ END OF SCRIPT ^^^"

DEFAULT_COMMENT_PREFIX = "--"
DEFAULT_BLOCK_COMMENT_START_DELIMITER = "/*"
DEFAULT_BLOCK_COMMENT_END_DELIMITER = "*/"

DEFAULT_ENCODING = "utf-8"
