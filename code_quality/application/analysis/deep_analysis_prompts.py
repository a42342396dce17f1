"""Prompts for the LLM-backed deep analysis of a single file."""

MAX_FILE_CHARS = 12000

SYSTEM_PROMPT = """You are a senior code reviewer. You review one source file at a time and
report only concrete, line-anchored problems. Answer with JSON only."""

FILE_REVIEW_PROMPT = """Review the file `{path}`.

Look for:
1. Unused code: variables, functions, imports and exports that are never used.
2. Code smells: long functions, deep nesting, duplicated logic, magic numbers.
3. Refactoring opportunities: extract function, simplify conditionals, better naming.

Respond with a single JSON object:
{{
  "issues": [
    {{"severity": "error|warning|info", "category": "unused-code|code-smell|refactoring",
      "line": <line number or null>, "message": "<short description>"}}
  ],
  "insights": ["<one-sentence refactoring suggestion>"]
}}

Return empty lists when the file is fine.

```
{content}
```"""
