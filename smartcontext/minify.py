import re

BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
LINE_COMMENT_RE = re.compile(r"//[^\r\n]*")
HASH_COMMENT_RE = re.compile(r"^[ \t]*#[^\r\n]*", re.MULTILINE)
WHITESPACE_RUN_RE = re.compile(r"\s+")


def minify_content(content: str) -> str:
    """
    Removes comments and redundant whitespace from source text.

    Block comments, ``//`` comments and lines starting with ``#`` go away,
    every line is trimmed, empty lines are dropped and inner whitespace runs
    collapse to a single space. No trailing newline is added.
    """
    content = BLOCK_COMMENT_RE.sub("", content)
    content = LINE_COMMENT_RE.sub("", content)
    content = HASH_COMMENT_RE.sub("", content)

    processed_lines = []
    for line in content.split("\n"):
        line = line.strip()
        if line:
            processed_lines.append(WHITESPACE_RUN_RE.sub(" ", line))
    return "\n".join(processed_lines)
