"""Skeletonization: reduce brace-delimited source to its declarative shape.

Class and interface openings survive, methods and functions collapse to
one-line signatures with empty bodies (``name(args){}``), and statement
bodies, conditionals and in-body comments are discarded. Top-level comments,
doc comments and import/export lines pass through untouched.

This is a line classifier, not a parser. Braces are counted naively, so
braces inside strings or regexes shift the depth, and a body that never
closes swallows the rest of the file.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List

DOC_COMMENT_OPENER = "/**"
BLOCK_COMMENT_OPENER = "/*"
BLOCK_COMMENT_CLOSER = "*/"
LINE_COMMENT = "//"
EMPTY_BODY = "{}"
MEMBER_INDENT = "  "

# Declarations may end in an opening brace, nothing, or an already-empty body.
_DECL_END = r"\s*(?:\{\})?\{?$"

CLASS_OR_INTERFACE_RE = re.compile(r"^(export\s+)?(abstract\s+)?(class|interface)\s+\w+")
FUNCTION_DECL_RE = re.compile(r"^(export\s+)?(async\s+)?function\s+\w+\s*\(.*\)" + _DECL_END)
ARROW_FUNC_RE = re.compile(
    r"^(export\s+)?(const|let|var)\s+\w+\s*=\s*(async\s+)?\(.*\)\s*=>" + _DECL_END
)
METHOD_DECL_RES = [
    re.compile(r"^(async\s+)?(constructor|get|set)\s*\(.*\)" + _DECL_END),
    re.compile(r"^(async\s+)?get\s+\w+\s*\(\)" + _DECL_END),
    re.compile(r"^(async\s+)?set\s+\w+\s*\(.*\)" + _DECL_END),
    re.compile(r"^(async\s+)?\w+\s*\(.*\)" + _DECL_END),
]
IF_STATEMENT_RE = re.compile(r"^if\s*\(.+\)\s*\{")
IMPORT_EXPORT_RE = re.compile(r"^(import|export)\s+")


class ScanMode(Enum):
    CODE = auto()
    DOC_COMMENT = auto()
    SKIPPING_BODY = auto()


@dataclass
class ScanState:
    mode: ScanMode = ScanMode.CODE
    in_type_block: bool = False
    skip_depth: int = 0
    output: List[str] = field(default_factory=list)

    def start_skipping(self) -> None:
        self.mode = ScanMode.SKIPPING_BODY
        self.skip_depth = 1


@dataclass(frozen=True)
class Rule:
    """One line classification: ``matches`` decides, ``apply`` acts.

    Rules are tried in order and the first match consumes the line.
    """

    name: str
    matches: Callable[[ScanState, str, str], bool]
    apply: Callable[[ScanState, str, str], None]


def is_doc_comment_start(trimmed: str) -> bool:
    return trimmed.startswith(DOC_COMMENT_OPENER)


def is_comment(trimmed: str) -> bool:
    return (
        trimmed.startswith(LINE_COMMENT)
        or (trimmed.startswith(BLOCK_COMMENT_OPENER) and not is_doc_comment_start(trimmed))
        or trimmed.endswith(BLOCK_COMMENT_CLOSER)
    )


def is_if_statement(trimmed: str) -> bool:
    return IF_STATEMENT_RE.match(trimmed) is not None


def is_class_or_interface_decl(trimmed: str) -> bool:
    return CLASS_OR_INTERFACE_RE.match(trimmed) is not None


def is_function_decl(trimmed: str) -> bool:
    return FUNCTION_DECL_RE.match(trimmed) is not None or ARROW_FUNC_RE.match(trimmed) is not None


def is_method_decl(trimmed: str) -> bool:
    return any(regex.match(trimmed) for regex in METHOD_DECL_RES)


def is_import_export(trimmed: str) -> bool:
    return IMPORT_EXPORT_RE.match(trimmed) is not None


def finalize_declaration(decl: str) -> str:
    """Rewrite a declaration header as a one-line declaration with an empty body.

    ``method() {`` becomes ``method(){}``, ``const f = (x) => {`` becomes
    ``const f = (x)=>{}``.
    """
    decl = re.sub(r"(?:\{\})?\{?\s*$", "", decl, count=1)
    if not re.search(r"\(.*\)", decl):
        decl += "()"
    decl += EMPTY_BODY
    decl = re.sub(r"\s+\{\}", EMPTY_BODY, decl, count=1)
    decl = re.sub(r"\)\s*=>\s*\{\}", ")=>{}", decl, count=1)
    return decl


# --- Rule actions ---


def _skip_body_line(state: ScanState, line: str, trimmed: str) -> None:
    state.skip_depth += trimmed.count("{") - trimmed.count("}")
    if state.skip_depth <= 0:
        state.skip_depth = 0
        state.mode = ScanMode.CODE


def _emit_doc_comment_line(state: ScanState, line: str, trimmed: str) -> None:
    state.output.append(line)
    if trimmed.endswith(BLOCK_COMMENT_CLOSER):
        state.mode = ScanMode.CODE


def _open_doc_comment(state: ScanState, line: str, trimmed: str) -> None:
    state.output.append(line)
    # Only a later line can close the block, even for "/** one-liner */".
    state.mode = ScanMode.DOC_COMMENT


def _drop(state: ScanState, line: str, trimmed: str) -> None:
    pass


def _open_type_block(state: ScanState, line: str, trimmed: str) -> None:
    decl = trimmed if trimmed.endswith("{") else trimmed + " {"
    state.output.append(decl)
    state.in_type_block = True


def _close_block(state: ScanState, line: str, trimmed: str) -> None:
    # A lone "}" outside a type block is dropped.
    if state.in_type_block:
        state.output.append("}")
        state.in_type_block = False


def _emit_type_member(state: ScanState, line: str, trimmed: str) -> None:
    if not is_method_decl(trimmed):
        return
    state.output.append(MEMBER_INDENT + finalize_declaration(trimmed))
    if trimmed.endswith("{"):
        state.start_skipping()


def _emit_function(state: ScanState, line: str, trimmed: str) -> None:
    state.output.append(finalize_declaration(trimmed))
    if trimmed.endswith("{"):
        state.start_skipping()


def _emit_verbatim(state: ScanState, line: str, trimmed: str) -> None:
    state.output.append(line)


RULES: List[Rule] = [
    Rule(
        "body_skip",
        lambda state, line, trimmed: state.mode is ScanMode.SKIPPING_BODY,
        _skip_body_line,
    ),
    Rule(
        "doc_comment_body",
        lambda state, line, trimmed: state.mode is ScanMode.DOC_COMMENT,
        _emit_doc_comment_line,
    ),
    Rule(
        "doc_comment_open",
        lambda state, line, trimmed: is_doc_comment_start(trimmed),
        _open_doc_comment,
    ),
    Rule(
        "conditional",
        lambda state, line, trimmed: is_if_statement(trimmed),
        _drop,
    ),
    Rule(
        "type_declaration",
        lambda state, line, trimmed: is_class_or_interface_decl(trimmed),
        _open_type_block,
    ),
    Rule(
        "block_close",
        lambda state, line, trimmed: trimmed == "}",
        _close_block,
    ),
    Rule(
        "type_member",
        lambda state, line, trimmed: state.in_type_block,
        _emit_type_member,
    ),
    Rule(
        "function_declaration",
        lambda state, line, trimmed: is_function_decl(trimmed),
        _emit_function,
    ),
    Rule(
        "passthrough",
        lambda state, line, trimmed: is_import_export(trimmed) or is_comment(trimmed),
        _emit_verbatim,
    ),
]


def classify_line(state: ScanState, line: str) -> str:
    """Apply the first matching rule to ``line`` and return its name.

    Lines no rule claims are dropped and reported as ``"dropped"``.
    """
    trimmed = line.strip()
    for rule in RULES:
        if rule.matches(state, line, trimmed):
            rule.apply(state, line, trimmed)
            return rule.name
    return "dropped"


def skeletonize(source: str) -> str:
    """Strip logic from brace-delimited source, keeping only its skeleton.

    Always returns text ending in exactly one newline; never raises.
    """
    state = ScanState()
    for line in source.split("\n"):
        classify_line(state, line)

    lines = state.output
    while lines and lines[-1].strip() == "":
        lines.pop()

    return "\n".join(lines) + "\n"
