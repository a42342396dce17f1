"""Lexical checks - text heuristics over a single file.

Every check is a pure function ``(content, path, ...) -> list[Issue]``.
Function and block boundaries come from brace balancing, which does not know
about braces inside strings or comments; that imprecision is accepted.
"""

import fnmatch
import re
from dataclasses import dataclass
from pathlib import PurePosixPath

from code_quality.domain.entities.quality import AnalysisOptions, Issue
from code_quality.infrastructure.rules import patterns as p
from code_quality.infrastructure.rules.rule_catalog import RuleSet


@dataclass(frozen=True)
class FunctionSpan:
    """1-based inclusive line range of a brace-delimited function."""

    start: int
    end: int
    header: str

    @property
    def length(self) -> int:
        return self.end - self.start + 1


def strip_comments_and_strings(content: str) -> str:
    """Blank out comments and string/template literals, keeping newlines."""
    out: list[str] = []
    i, n = 0, len(content)
    while i < n:
        ch = content[i]
        nxt = content[i + 1] if i + 1 < n else ""
        if ch == "/" and nxt == "/":
            while i < n and content[i] != "\n":
                out.append(" ")
                i += 1
        elif ch == "/" and nxt == "*":
            end = content.find("*/", i + 2)
            end = n if end == -1 else end + 2
            out.extend("\n" if c == "\n" else " " for c in content[i:end])
            i = end
        elif ch in "'\"`":
            j = i + 1
            while j < n and content[j] != ch:
                if content[j] == "\\":
                    j += 1
                elif content[j] == "\n" and ch != "`":
                    break
                j += 1
            j = min(j + 1, n)
            out.extend("\n" if c == "\n" else " " for c in content[i:j])
            i = j
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _balanced_end(lines: list[str], start: int, offset: int = 0) -> tuple[int, int] | None:
    """Scan from lines[start][offset:] to the line where braces net to zero.

    Returns (index of first line with "{", end index), or None when the
    statement ends before any brace opens.
    """
    depth = 0
    opened_at: int | None = None
    for idx in range(start, len(lines)):
        text = lines[idx][offset:] if idx == start else lines[idx]
        for ch in text:
            if ch == "{":
                depth += 1
                if opened_at is None:
                    opened_at = idx
            elif ch == "}" and opened_at is not None:
                depth -= 1
                if depth == 0:
                    return opened_at, idx
        if opened_at is None and text.rstrip().endswith(";"):
            return None
    return None


def find_function_spans(content: str) -> list[FunctionSpan]:
    """Function spans: declaration line through the line closing its body."""
    lines = content.splitlines()
    spans: list[FunctionSpan] = []
    for idx, line in enumerate(lines):
        if not p.FUNCTION_DECLARATION.match(line):
            continue
        bounds = _balanced_end(lines, idx)
        if bounds is None:
            continue
        spans.append(FunctionSpan(start=idx + 1, end=bounds[1] + 1, header=line.strip()))
    return spans


def keyword_complexity(text: str) -> int:
    """Branching keyword/operator count (1 for straight-line code)."""
    return 1 + len(p.COMPLEXITY_TOKENS.findall(text))


def check_debug_statements(content: str, path: str) -> list[Issue]:
    """Print/debug calls inappropriate for the file's language."""
    name = PurePosixPath(path).name
    issues: list[Issue] = []
    for extensions, compiled in p.COMPILED_DEBUG_PATTERNS.items():
        if not path.endswith(extensions):
            continue
        for lineno, line in enumerate(content.splitlines(), 1):
            for pattern, severity, category, rule, message in compiled:
                if name in p.DEBUG_EXEMPT_FILES.get(rule, ()):
                    continue
                if pattern.search(line):
                    issues.append(
                        Issue(severity=severity, category=category, rule=rule, message=message, file=path, line=lineno)
                    )
    return issues


def check_deep_imports(content: str, path: str) -> list[Issue]:
    return [
        Issue(
            severity="warning",
            category="imports",
            rule="no-deep-imports",
            message="Deep relative import (../../); use a path alias",
            file=path,
            line=lineno,
        )
        for lineno, line in enumerate(content.splitlines(), 1)
        if p.DEEP_IMPORT.search(line)
    ]


def is_analysis_logic(path: str, globs: tuple[str, ...]) -> bool:
    name = PurePosixPath(path).name
    return any(fnmatch.fnmatch(name, g) or fnmatch.fnmatch(path, g) for g in globs)


def check_marker_comments(content: str, path: str, analysis_logic_globs: tuple[str, ...] = ()) -> list[Issue]:
    """TODO/FIXME/HACK/XXX markers, one issue per line."""
    if is_analysis_logic(path, analysis_logic_globs):
        return []
    issues: list[Issue] = []
    for lineno, line in enumerate(content.splitlines(), 1):
        match = p.MARKER_PATTERN.search(line)
        if not match or p.QUOTED_MARKER.search(line):
            continue
        issues.append(
            Issue(
                severity="info",
                category="maintenance",
                rule="no-todo-comments",
                message=f"{match.group(1)} comment found",
                file=path,
                line=lineno,
            )
        )
    return issues


def compile_script_pattern(script_range: str) -> re.Pattern[str]:
    return re.compile(f"[{script_range}]")


def check_non_english_comments(content: str, path: str, script: re.Pattern[str]) -> list[Issue]:
    issues: list[Issue] = []
    for lineno, line in enumerate(content.splitlines(), 1):
        if script.search(line) and line.strip().startswith(p.COMMENT_PREFIXES):
            issues.append(
                Issue(
                    severity="info",
                    category="comments",
                    rule="no-non-english-comments",
                    message="Comment is not written in English",
                    file=path,
                    line=lineno,
                )
            )
    return issues


def check_error_logging(content: str, path: str) -> list[Issue]:
    """Catch blocks that neither log nor hand the error back to the caller."""
    lines = content.splitlines()
    issues: list[Issue] = []
    for idx, line in enumerate(lines):
        match = p.CATCH_START.search(line)
        if not match:
            continue
        bounds = _balanced_end(lines, idx, match.start())
        if bounds is None:
            continue
        first, last = bounds
        head = lines[first]
        head = head[head.find("{", match.start() if first == idx else 0) + 1:]
        body = "\n".join([head, *lines[first + 1:last + 1]])
        if p.LOGGING_CALLS.search(body) or p.SURFACE_TO_CALLER.search(body):
            continue
        issues.append(
            Issue(
                severity="warning",
                category="error-handling",
                rule="require-error-logging",
                message="catch block swallows the error without logging it",
                file=path,
                line=idx + 1,
            )
        )
    return issues


def _identifier_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![\w$]){re.escape(name)}(?![\w$])")


def _used_later(name: str, raw_after: str) -> bool:
    """Identifier recurs in a return statement or object-literal position."""
    ident = re.escape(name)
    checks = (
        rf"\breturn\b[^;\n]*(?<![\w$]){ident}(?![\w$])",
        rf"[{{,]\s*{ident}\s*(?=[,}}])",
        rf"(?<![\w$.]){ident}\s*:",
    )
    return any(re.search(c, raw_after) for c in checks)


def check_unused_variables(content: str, path: str) -> list[Issue]:
    """Local declarations whose identifier occurs once in comment/string-free text."""
    stripped = strip_comments_and_strings(content)
    stripped_lines = stripped.splitlines()
    raw_lines = content.splitlines()
    issues: list[Issue] = []
    for idx, line in enumerate(stripped_lines):
        match = p.LOCAL_DECLARATION.match(line)
        if not match:
            continue
        name = match.group(1)
        if name[0].isupper() or p.FUNCTION_VALUE.search(line):
            continue
        if len(_identifier_pattern(name).findall(stripped)) != 1:
            continue
        if _used_later(name, "\n".join(raw_lines[idx + 1:])):
            continue
        issues.append(
            Issue(
                severity="warning",
                category="unused-code",
                rule="no-unused-vars",
                message=f"Variable '{name}' is declared but never used",
                file=path,
                line=idx + 1,
            )
        )
    return issues


def is_constants_module(path: str) -> bool:
    return bool(p.CONSTANTS_PATH.search(path))


def exported_constants(content: str) -> list[tuple[str, int]]:
    return [
        (m.group(1), lineno)
        for lineno, line in enumerate(content.splitlines(), 1)
        if (m := p.EXPORTED_CONSTANT.match(line))
    ]


def check_unused_exports(path: str, content: str, other_contents: list[str]) -> list[Issue]:
    """Exported constants of a constants module not referenced in any other file."""
    if not is_constants_module(path):
        return []
    issues: list[Issue] = []
    for name, lineno in exported_constants(content):
        pattern = _identifier_pattern(name)
        if any(pattern.search(other) for other in other_contents):
            continue
        issues.append(
            Issue(
                severity="info",
                category="unused-code",
                rule="no-unused-exports",
                message=f"Exported constant '{name}' is not used elsewhere",
                file=path,
                line=lineno,
            )
        )
    return issues


def check_length_limits(content: str, path: str, rules: RuleSet) -> list[Issue]:
    """File, line and function length against the active RuleSet."""
    lines = content.splitlines()
    issues: list[Issue] = []
    if len(lines) > rules.max_file_lines:
        issues.append(
            Issue(
                severity="warning",
                category="file-size",
                rule="max-file-lines",
                message=f"File has {len(lines)} lines (max {rules.max_file_lines})",
                file=path,
            )
        )
    for lineno, line in enumerate(lines, 1):
        if len(line) > rules.max_line_length:
            issues.append(
                Issue(
                    severity="info",
                    category="code-style",
                    rule="max-line-length",
                    message=f"Line has {len(line)} characters (max {rules.max_line_length})",
                    file=path,
                    line=lineno,
                )
            )
    for span in find_function_spans(content):
        if span.length > rules.max_function_lines:
            issues.append(
                Issue(
                    severity="warning",
                    category="function-length",
                    rule="max-function-lines",
                    message=f"Function has {span.length} lines (max {rules.max_function_lines})",
                    file=path,
                    line=span.start,
                )
            )
    return issues


def check_complexity(content: str, path: str, rules: RuleSet) -> list[Issue]:
    stripped_lines = strip_comments_and_strings(content).splitlines()
    issues: list[Issue] = []
    for span in find_function_spans(content):
        score = keyword_complexity("\n".join(stripped_lines[span.start - 1:span.end]))
        if score > rules.max_complexity:
            issues.append(
                Issue(
                    severity="warning",
                    category="complexity",
                    rule="complexity",
                    message=f"Function complexity {score} exceeds {rules.max_complexity}",
                    file=path,
                    line=span.start,
                )
            )
    return issues


def check_hardcoded_values(content: str, path: str) -> list[Issue]:
    issues: list[Issue] = []
    for lineno, line in enumerate(content.splitlines(), 1):
        for pattern, severity, rule, message in p.HARDCODED_VALUES:
            if pattern.search(line):
                issues.append(
                    Issue(severity=severity, category="security", rule=rule, message=message, file=path, line=lineno)
                )
    return issues


class LexicalChecker:
    """Runs the enabled lexical checks for one file."""

    def __init__(
        self,
        rules: RuleSet,
        options: AnalysisOptions,
        script_range: str = "\u0590-\u05ff",
        analysis_logic_globs: tuple[str, ...] = (),
    ) -> None:
        self._rules = rules
        self._options = options
        self._script = compile_script_pattern(script_range)
        self._analysis_logic_globs = analysis_logic_globs

    def check(self, content: str, path: str) -> list[Issue]:
        issues = check_debug_statements(content, path)
        issues += check_deep_imports(content, path)
        issues += check_marker_comments(content, path, self._analysis_logic_globs)
        issues += check_non_english_comments(content, path, self._script)
        issues += check_error_logging(content, path)
        issues += check_length_limits(content, path, self._rules)
        if self._options.check_unused_code:
            issues += check_unused_variables(content, path)
        if self._options.check_complexity:
            issues += check_complexity(content, path, self._rules)
        if self._options.check_security:
            issues += check_hardcoded_values(content, path)
        return issues
