"""Pattern tables for lexical checks.

Tables are tuples, compiled once at module load.
"""

import re

JS_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")
JAVA_EXTENSIONS = (".java",)
CSHARP_EXTENSIONS = (".cs",)

# (pattern, severity, category, rule, message)
DebugPattern = tuple[str, str, str, str, str]

DEBUG_PATTERNS: dict[tuple[str, ...], tuple[DebugPattern, ...]] = {
    JS_EXTENSIONS: (
        (r"\bconsole\.(log|debug)\s*\(", "error", "code-quality", "no-console", "console statement left in code"),
        (r"(?<![\w.])debugger\s*;?\s*$", "warning", "code-quality", "no-debug-code", "debugger statement left in code"),
        (r"(?<![\w.])alert\s*\(", "warning", "code-quality", "no-debug-code", "alert() call left in code"),
    ),
    JAVA_EXTENSIONS: (
        (r"\bSystem\.out\.println\s*\(", "warning", "java-logging", "java-no-sysout", "Use a logger instead of System.out.println"),
    ),
    CSHARP_EXTENSIONS: (
        (r"\bConsole\.WriteLine\s*\(", "warning", "dotnet-logging", "dotnet-no-console", "Use ILogger instead of Console.WriteLine"),
    ),
}

COMPILED_DEBUG_PATTERNS: dict[tuple[str, ...], tuple[tuple[re.Pattern[str], str, str, str, str], ...]] = {
    exts: tuple((re.compile(p), sev, cat, rule, msg) for p, sev, cat, rule, msg in patterns)
    for exts, patterns in DEBUG_PATTERNS.items()
}

# Console output is expected in the entry point
DEBUG_EXEMPT_FILES: dict[str, tuple[str, ...]] = {
    "dotnet-no-console": ("Program.cs",),
}

# Import path starting with two or more parent traversals
DEEP_IMPORT = re.compile(
    r"""(?:\bfrom\s+|\brequire\s*\(\s*|\bimport\s*\(?\s*)['"](?:\.\./){2,}"""
)

MARKERS: tuple[str, ...] = ("TODO", "FIXME", "HACK", "XXX")
MARKER_PATTERN = re.compile(r"\b(" + "|".join(MARKERS) + r")\b")
# Marker used as data: 'TODO', "FIXME", `HACK`
QUOTED_MARKER = re.compile(r"""(['"`])(?:TODO|FIXME|HACK|XXX)\1""")

COMMENT_PREFIXES: tuple[str, ...] = ("//", "/*", "*", "#")

CATCH_START = re.compile(r"\bcatch\b")
LOGGING_CALLS = re.compile(
    r"\b(?:logger|log|_logger|logging|Log|console)\.(?:error|warn|warning|info|debug|exception|log|critical|Error|Warning|LogError|LogWarning)\b"
)
SURFACE_TO_CALLER = re.compile(
    r"\b(?:return|throw)\b|\.status\s*\(|\berror\s*:|\.error\s*=|\bsetError\s*\(|\breject\s*\(|\bnext\s*\("
)

LOCAL_DECLARATION = re.compile(r"^\s*(?:const|let|var)\s+([A-Za-z_$][\w$]*)\s*=")
EXPORTED_CONSTANT = re.compile(r"^\s*export\s+const\s+([A-Za-z_$][\w$]*)")
FUNCTION_VALUE = re.compile(r"=\s*(?:async\s+)?(?:function\b|(?:\([^)]*\)|[A-Za-z_$][\w$]*)\s*=>)")
CONSTANTS_PATH = re.compile(r"(?:^|[/\\])(?:constants?|consts?)(?:[/\\]|\.[jt]sx?$)", re.IGNORECASE)

# Heuristic function start: JS/TS declarations, arrow consts, Java/C# methods
FUNCTION_DECLARATION = re.compile(
    r"^\s*(?:export\s+)?(?:default\s+)?(?:"
    r"(?:async\s+)?function\s*\*?\s*[\w$]+"
    r"|(?:const|let|var)\s+[\w$]+\s*=\s*(?:async\s+)?(?:function\b|\([^)]*\)\s*(?::\s*[^=]+)?=>|[\w$]+\s*=>)"
    r"|(?:(?:public|private|protected|internal|static|final|override|virtual|abstract|synchronized)\s+)+"
    r"(?:async\s+)?[\w<>\[\],.?]+(?:\s+[\w$]+)?\s*\([^;]*$"
    r")"
)

COMPLEXITY_TOKENS = re.compile(r"\b(?:if|else|for|while|do|switch|case|catch)\b|&&|\|\||\?(?![.?])")

# (pattern, severity, rule, message)
HARDCODED_VALUES: tuple[tuple[re.Pattern[str], str, str, str], ...] = (
    (re.compile(r"""\bpassword\s*:\s*['"`][^'"`]+['"`]""", re.IGNORECASE), "error", "no-hardcoded-secrets", "Hardcoded password"),
    (re.compile(r"""\bsecret\s*:\s*['"`][^'"`]+['"`]""", re.IGNORECASE), "error", "no-hardcoded-secrets", "Hardcoded secret"),
    (re.compile(r"localhost:\d+"), "warning", "no-hardcoded-hosts", "Hardcoded localhost address"),
    (re.compile(r"\b127\.0\.0\.1\b"), "warning", "no-hardcoded-hosts", "Hardcoded loopback address"),
)

DB_OPERATIONS = re.compile(
    r"\.(?:find|findOne|findById|create|update|updateOne|delete|deleteOne|save|insert|query|aggregate)\s*\("
    r"|\bprisma\.|\bknex\s*\(|\bsequelize\."
)

CREDENTIAL_KEYS = re.compile(r"\b(?:accessKeyId|secretAccessKey)\b")
ANGULAR_DOM_ACCESS = re.compile(r"\bdocument\.(?:getElementById|querySelector)\b")
FIREBASE_EXPORT = re.compile(r"^\s*export\s+(?:const|function|async\s+function)\s+(\w+)")
CAMEL_CASE_FILE = re.compile(r"^[a-z][a-zA-Z]*\.(ts|js)$")
