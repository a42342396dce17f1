"""Tests for lexical checks."""

from code_quality.domain.entities.quality import AnalysisOptions
from code_quality.infrastructure.analyzer.lexical import (
    LexicalChecker,
    check_debug_statements,
    check_deep_imports,
    check_error_logging,
    check_hardcoded_values,
    check_length_limits,
    check_marker_comments,
    check_non_english_comments,
    check_unused_exports,
    check_unused_variables,
    compile_script_pattern,
    find_function_spans,
    strip_comments_and_strings,
)
from code_quality.infrastructure.rules.rule_catalog import RuleSet


def _function(body_lines: int, name: str = "handler") -> str:
    """Function spanning body_lines + 2 lines (header and closing brace)."""
    body = "\n".join(f"  step{i}();" for i in range(body_lines))
    return f"function {name}() {{\n{body}\n}}\n"


class TestStrip:
    def test_comments_and_strings_blanked(self):
        src = 'const a = "x y"; // note a\n/* a\n a */ const b = `t ${a}`;\n'
        stripped = strip_comments_and_strings(src)
        assert stripped.count("\n") == src.count("\n")
        assert "note" not in stripped
        assert "x y" not in stripped
        assert "const b" in stripped


class TestDebugStatements:
    def test_console_log_is_error(self):
        issues = check_debug_statements('console.log("hi");\n', "src/app.js")
        assert len(issues) == 1
        assert (issues[0].severity, issues[0].category, issues[0].rule, issues[0].line) == (
            "error",
            "code-quality",
            "no-console",
            1,
        )

    def test_console_error_allowed(self):
        assert check_debug_statements("console.error(e);\n", "a.ts") == []

    def test_language_specific(self):
        assert check_debug_statements("System.out.println(x);", "A.java")[0].rule == "java-no-sysout"
        assert check_debug_statements("Console.WriteLine(x);", "Service.cs")[0].rule == "dotnet-no-console"
        assert check_debug_statements("Console.WriteLine(x);", "Program.cs") == []
        assert check_debug_statements("System.out.println(x);", "a.ts") == []

    def test_debugger(self):
        issues = check_debug_statements("  debugger;\n", "a.ts")
        assert [i.rule for i in issues] == ["no-debug-code"]


class TestDeepImports:
    def test_two_levels_flagged(self):
        src = "import x from '../../utils/x';\nimport y from '../y';\nconst z = require(\"../../../z\");\n"
        assert [i.line for i in check_deep_imports(src, "a.ts")] == [1, 3]


class TestMarkerComments:
    def test_markers(self):
        src = "// TODO: fix\nconst a = 1; // FIXME later\nconst todo = 2;\n"
        issues = check_marker_comments(src, "a.ts")
        assert [i.line for i in issues] == [1, 2]
        assert issues[0].rule == "no-todo-comments"

    def test_quoted_marker_is_data(self):
        assert check_marker_comments("const MARKERS = ['TODO', 'FIXME'];\n", "a.ts") == []

    def test_analysis_logic_file_skipped(self):
        assert check_marker_comments("// TODO\n", "src/QualityRules.ts", ("*QualityRules*",)) == []


class TestNonEnglishComments:
    def test_only_comment_lines(self):
        script = compile_script_pattern("\u0590-\u05ff")
        src = "// שלום\nconst s = 'שלום';\n# הערה\n"
        issues = check_non_english_comments(src, "a.ts", script)
        assert [i.line for i in issues] == [1, 3]
        assert issues[0].category == "comments"


class TestErrorLogging:
    def test_swallowed_error_flagged(self):
        src = "try {\n  run();\n} catch (e) {\n  cleanup();\n}\n"
        issues = check_error_logging(src, "a.ts")
        assert len(issues) == 1
        assert (issues[0].rule, issues[0].line) == ("require-error-logging", 3)

    def test_logged_error_ok(self):
        src = "try {\n  run();\n} catch (e) {\n  logger.error('failed', e);\n}\n"
        assert check_error_logging(src, "a.ts") == []

    def test_rethrow_ok(self):
        src = "try { run(); } catch (err) {\n  throw new AppError(err);\n}\n"
        assert check_error_logging(src, "a.ts") == []

    def test_typed_catch_variable_not_counted_as_surface(self):
        src = "try {\n  run();\n} catch (error: unknown) {\n  cleanup();\n}\n"
        assert len(check_error_logging(src, "a.ts")) == 1

    def test_promise_catch_with_handler(self):
        assert check_error_logging("fetchData().catch(console.error);\n", "a.ts") == []

    def test_promise_catch_with_named_handler(self):
        assert check_error_logging("fetchData().catch(handleError);\n", "a.ts") == []

    def test_promise_catch_with_silent_arrow_body(self):
        src = "fetchData().catch((err) => {\n  cleanup();\n});\n"
        issues = check_error_logging(src, "a.ts")
        assert [(i.rule, i.line) for i in issues] == [("require-error-logging", 1)]


class TestUnusedVariables:
    def test_single_occurrence_flagged(self):
        src = "function f() {\n  const unusedValue = compute();\n  doWork();\n}\n"
        issues = check_unused_variables(src, "a.ts")
        assert len(issues) == 1
        assert (issues[0].rule, issues[0].category, issues[0].line) == ("no-unused-vars", "unused-code", 2)

    def test_later_return_not_flagged(self):
        src = "function f() {\n  const result = compute();\n  return result;\n}\n"
        assert check_unused_variables(src, "a.ts") == []

    def test_return_inside_template_literal_not_flagged(self):
        src = "function f() {\n  const label = compute();\n  return `${label}!`;\n}\n"
        assert check_unused_variables(src, "a.ts") == []

    def test_occurrence_in_comment_does_not_count(self):
        src = "const helperValue = 1;\n// helperValue is handy\n"
        assert len(check_unused_variables(src, "a.ts")) == 1

    def test_exceptions(self):
        src = (
            "const Component = build();\n"
            "const onClick = () => go();\n"
            "const handler = function () {};\n"
            "export const shared = 1;\n"
        )
        assert check_unused_variables(src, "a.tsx") == []


class TestUnusedExports:
    def test_constants_module_only(self):
        src = "export const API_URL = 'x';\nexport const TIMEOUT = 5;\n"
        others = ["import { API_URL } from './constants';"]
        issues = check_unused_exports("src/constants/index.ts", src, others)
        assert [i.message for i in issues] == ["Exported constant 'TIMEOUT' is not used elsewhere"]
        assert issues[0].rule == "no-unused-exports"
        assert check_unused_exports("src/utils/index.ts", src, []) == []


class TestFunctionLength:
    rules = RuleSet(max_function_lines=10)

    def test_span_length(self):
        spans = find_function_spans(_function(8))
        assert len(spans) == 1
        assert spans[0].length == 10

    def test_at_threshold_not_flagged(self):
        issues = check_length_limits(_function(8), "a.ts", self.rules)
        assert [i for i in issues if i.rule == "max-function-lines"] == []

    def test_over_threshold_flagged(self):
        issues = check_length_limits(_function(9), "a.ts", self.rules)
        flagged = [i for i in issues if i.rule == "max-function-lines"]
        assert len(flagged) == 1
        assert (flagged[0].severity, flagged[0].category, flagged[0].line) == ("warning", "function-length", 1)

    def test_arrow_function(self):
        src = "export const load = async (id) => {\n  a();\n  b();\n};\n"
        assert find_function_spans(src)[0].length == 4

    def test_expression_without_body_ignored(self):
        assert find_function_spans("const double = (x) => x * 2;\nconst y = { a: 1 };\n") == []

    def test_line_and_file_length(self):
        rules = RuleSet(max_file_lines=2, max_line_length=10)
        issues = check_length_limits("a\nb\n" + "x" * 11 + "\n", "a.ts", rules)
        assert {i.rule for i in issues} == {"max-file-lines", "max-line-length"}


class TestHardcodedValues:
    def test_secrets_and_hosts(self):
        src = "const cfg = { password: 'hunter22', url: 'http://localhost:3000' };\n"
        assert {i.rule for i in check_hardcoded_values(src, "a.ts")} == {"no-hardcoded-secrets", "no-hardcoded-hosts"}


class TestLexicalChecker:
    def test_toggles(self):
        src = "function f() {\n  const unusedThing = 1;\n  if (a) { b(); }\n}\nconst c = { secret: 'abc' };\n"
        rules = RuleSet(max_complexity=1)

        default = LexicalChecker(rules, AnalysisOptions()).check(src, "a.ts")
        assert {i.rule for i in default} == {"no-unused-vars"}

        everything = LexicalChecker(
            rules,
            AnalysisOptions(check_unused_code=False, check_complexity=True, check_security=True),
        ).check(src, "a.ts")
        assert {i.rule for i in everything} == {"complexity", "no-hardcoded-secrets"}
