"""Tests for the Signature Linter: static analysis of argument design.

Covers:
- LintDiagnostic creation and string representation
- LintResult aggregation, filtering, summary
- All built-in rules (W101-W103, W201-W203, I301-W303, E401-W404)
- Scope (private, dunder, overload), suppressions, select/ignore
- Custom rule registration and crash handling
- File, path, and callable entry points
"""

from __future__ import annotations

import textwrap

import pytest

from sigspine.config import LinterConfig
from sigspine.errors import RuleError, SourceParseError
from sigspine.linter import (
    RULE_INFO,
    LintDiagnostic,
    LintResult,
    Severity,
    clear_custom_rules,
    describe_rules,
    lint_callable,
    lint_file,
    lint_paths,
    lint_signature,
    lint_source,
    list_lint_rules,
    register_lint_rule,
)
from sigspine.parser import SignatureWalker


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _lint(source: str, **config) -> LintResult:
    return lint_source(textwrap.dedent(source), config=LinterConfig(**config))


def _codes(source: str, **config) -> list[str]:
    return sorted(d.code for d in _lint(source, **config).diagnostics)


def bad_default(x, items=[]):  # noqa: B006
    return x


def clean_function(data, *, size=None):
    return data


# ---------------------------------------------------------------------------
# LintDiagnostic
# ---------------------------------------------------------------------------

class TestLintDiagnostic:
    def test_creation(self):
        d = LintDiagnostic(code="E401", severity=Severity.ERROR, message="Mutable.")
        assert d.code == "E401"
        assert d.function is None
        assert d.suggestion is None
        assert d.location == ""

    def test_str_with_location_and_suggestion(self):
        d = LintDiagnostic(
            code="W203", severity=Severity.WARNING, message="Positional flag.",
            function="render", file="pkg/mod.py", line=12, suggestion="Make it keyword-only.",
        )
        s = str(d)
        assert s.startswith("pkg/mod.py:12: [W203] WARNING")
        assert "'render'" in s
        assert "Make it keyword-only." in s

    def test_to_dict(self):
        d = LintDiagnostic(code="I301", severity=Severity.INFO, message="m", parameter="n")
        data = d.to_dict()
        assert data["severity"] == "info"
        assert data["parameter"] == "n"

    def test_frozen(self):
        d = LintDiagnostic(code="E401", severity=Severity.ERROR, message="x")
        with pytest.raises(AttributeError):
            d.code = "E402"


# ---------------------------------------------------------------------------
# LintResult
# ---------------------------------------------------------------------------

class TestLintResult:
    def test_empty_result_passes(self):
        r = LintResult(target="t")
        assert r.passed is True
        assert r.summary() == "PASS: t"

    def test_errors_fail(self):
        r = LintResult(
            target="t",
            diagnostics=[
                LintDiagnostic(code="E401", severity=Severity.ERROR, message="bad"),
                LintDiagnostic(code="W203", severity=Severity.WARNING, message="meh"),
            ],
        )
        assert r.passed is False
        assert len(r.errors) == 1
        assert len(r.warnings) == 1
        assert r.summary() == "FAIL: t | 1 errors | 1 warnings"

    def test_warnings_only_pass(self):
        r = LintResult(
            target="t",
            diagnostics=[LintDiagnostic(code="W203", severity=Severity.WARNING, message="w")],
        )
        assert r.passed is True

    def test_by_code(self):
        r = LintResult(
            target="t",
            diagnostics=[
                LintDiagnostic(code="W203", severity=Severity.WARNING, message="a"),
                LintDiagnostic(code="E401", severity=Severity.ERROR, message="b"),
                LintDiagnostic(code="W203", severity=Severity.WARNING, message="c"),
            ],
        )
        grouped = r.by_code()
        assert list(grouped) == ["E401", "W203"]
        assert len(grouped["W203"]) == 2

    def test_merge(self):
        a = LintResult(target="a", functions_checked=1, files_checked=1)
        b = LintResult(
            target="b",
            diagnostics=[LintDiagnostic(code="E401", severity=Severity.ERROR, message="x")],
            functions_checked=2,
            files_checked=1,
        )
        merged = a.merge(b)
        assert merged is a
        assert a.functions_checked == 3
        assert a.files_checked == 2
        assert len(a.diagnostics) == 1


# ---------------------------------------------------------------------------
# Built-in rules
# ---------------------------------------------------------------------------

class TestRequiredWithDefault:
    def test_flags_default_rejected_by_body(self):
        result = _lint("""
            def fit(data, formula=None):
                if formula is None:
                    raise ValueError("formula is required")
                return data
        """)
        assert [d.code for d in result.diagnostics] == ["W101"]
        d = result.diagnostics[0]
        assert d.parameter == "formula"
        assert d.function == "fit"
        assert d.convention == "C-REQ"
        assert d.line == 2

    def test_none_handled_in_body_is_fine(self):
        assert _codes("""
            def fit(data, formula=None):
                if formula is None:
                    formula = "y ~ x"
                return data
        """) == []

    def test_non_none_default_is_fine(self):
        assert _codes("""
            def fit(data, formula=""):
                if formula is None:
                    raise ValueError
        """) == []

    def test_check_required_call(self):
        result = _lint("""
            from sigspine.args import check_required

            def fit(data, formula=None):
                check_required(formula=formula)
                return data
        """)
        assert [d.code for d in result.diagnostics] == ["W101"]
        assert result.diagnostics[0].parameter == "formula"


class TestMagicalDefault:
    def test_private_sentinel(self):
        assert _codes("""
            _MISSING = object()

            def sample(x, *, size=_MISSING):
                if size is _MISSING:
                    size = 1
                return x
        """) == ["W102"]

    def test_public_sentinel_is_fine(self):
        assert _codes("""
            MISSING = object()

            def sample(x, *, size=MISSING):
                return x
        """) == []

    def test_presence_check(self):
        result = _lint("""
            def sample(x, *, size=None):
                if "size" in locals():
                    return size
                return x
        """)
        assert [d.code for d in result.diagnostics] == ["W102"]
        assert result.diagnostics[0].parameter == "size"


class TestHiddenArgument:
    def test_one_diagnostic_per_key(self):
        result = _lint("""
            def plot(data, **kwargs):
                color = kwargs.get("color", "blue")
                width = kwargs["width"]
                return data
        """)
        assert [d.code for d in result.diagnostics] == ["W103", "W103"]
        assert {d.parameter for d in result.diagnostics} == {"kwargs"}
        assert "color" in result.diagnostics[0].message

    def test_passthrough_is_fine(self):
        assert _codes("""
            def wrapper(data, **kwargs):
                return inner(data, **kwargs)
        """) == []


class TestArgumentOrder:
    def test_required_keyword_after_optional(self):
        result = _lint("def f(x, *, opt=1, key): ...")
        assert [d.code for d in result.diagnostics] == ["W201"]
        assert result.diagnostics[0].parameter == "key"

    def test_optional_before_varargs(self):
        result = _lint("def f(x, y=1, *args): ...")
        assert [d.code for d in result.diagnostics] == ["W201"]
        assert result.diagnostics[0].parameter == "y"

    def test_good_order(self):
        assert _codes("def f(x, *args, key, opt=1): ...") == []


class TestDetailsPositional:
    def test_too_many_positional_details(self):
        result = _lint("def f(x, a=1, b=2, c=3): ...")
        assert [d.code for d in result.diagnostics] == ["W202"]
        assert result.diagnostics[0].parameter == "c"

    def test_threshold_from_config(self):
        assert _codes("def f(x, a=1, b=2, c=3): ...", max_positional_details=3) == []

    def test_keyword_only_details_do_not_count(self):
        assert _codes("def f(x, *, a=1, b=2, c=3): ...") == []


class TestBooleanPositional:
    def test_positional_flag(self):
        result = _lint("def render(doc, pretty=False): ...")
        assert [d.code for d in result.diagnostics] == ["W203"]
        assert "pretty=False" in result.diagnostics[0].message

    def test_keyword_only_flag_is_fine(self):
        assert _codes("def render(doc, *, pretty=False): ...") == []


class TestExclusiveArguments:
    def test_enforced_pair_is_info(self):
        result = _lint("""
            def sample(x, *, n=None, prop=None):
                if n is not None and prop is not None:
                    raise TypeError("supply n or prop, not both")
                return x
        """)
        assert [d.code for d in result.diagnostics] == ["I301"]
        assert result.diagnostics[0].severity == Severity.INFO

    def test_one_of_pair_is_info(self):
        assert _codes("""
            def sample(x, *, n=None, prop=None):
                if n is None and prop is None:
                    raise TypeError("supply n or prop")
                return x
        """) == ["I301"]

    def test_infos_can_be_hidden(self):
        assert _codes("""
            def sample(x, *, n=None, prop=None):
                if n is not None and prop is not None:
                    raise TypeError
        """, include_infos=False) == []

    def test_unenforced_chain(self):
        result = _lint("""
            def read(*, path=None, buffer=None):
                if path is not None:
                    return path
                elif buffer is not None:
                    return buffer
        """)
        assert [d.code for d in result.diagnostics] == ["W302"]
        assert "check_exclusive(buffer=buffer, path=path)" in result.diagnostics[0].suggestion

    def test_suggested_check_exclusive_clears_warning(self):
        result = _lint("""
            from sigspine.args import check_exclusive

            def read(*, path=None, buffer=None):
                check_exclusive(path=path, buffer=buffer)
                if path is not None:
                    return path
                elif buffer is not None:
                    return buffer
        """)
        assert [d.code for d in result.diagnostics] == ["I301"]
        assert "'buffer' and 'path'" in result.diagnostics[0].message


class TestDependentFlags:
    def test_flags_checked_together(self):
        assert _codes("""
            def parse(text, *, strict=False, lenient=False):
                if strict and lenient:
                    raise ValueError("pick one")
                return text
        """) == ["W303"]

    def test_non_boolean_arguments_ignored(self):
        assert _codes("""
            def f(a, *, b=None, c=None):
                if b and c:
                    raise ValueError
        """) == []

    def test_annotated_bool_counts(self):
        assert _codes("""
            def f(a, *, b: bool = None, c: bool = None):
                if b and c:
                    raise ValueError
        """) == ["W303"]


class TestDefaults:
    @pytest.mark.parametrize("default", ["[]", "{}", "set()", "dict()", "[i for i in range(3)]"])
    def test_mutable_default(self, default):
        result = _lint(f"def f(x, *, items={default}): ...")
        assert [d.code for d in result.diagnostics] == ["E401"]
        assert result.passed is False

    def test_immutable_default(self):
        assert _codes("def f(x, *, items=(), name='a', n=0): ...") == []

    def test_complex_default(self):
        result = _lint("""
            import os

            def f(x, *, sep=os.environ.get("SEP", ",").strip() or ","):
                return x
        """)
        assert [d.code for d in result.diagnostics] == ["W402"]

    def test_complexity_threshold_from_config(self):
        source = "def f(x, *, limits=(1, 2, 3, 4, 5, 6, 7)): ..."
        assert _codes(source) == ["W402"]
        assert _codes(source, max_default_complexity=10) == []


class TestEnumerateOptions:
    def test_string_option_compared_with_literals(self):
        result = _lint("""
            def corr(x, *, method="pearson"):
                if method == "pearson":
                    return 1
                elif method == "spearman":
                    return 2
        """)
        assert [d.code for d in result.diagnostics] == ["I403"]
        assert "Literal['pearson', 'spearman']" in result.diagnostics[0].suggestion

    def test_literal_annotation_is_fine(self):
        assert _codes("""
            def corr(x, *, method: Literal["pearson", "spearman"] = "pearson"):
                if method == "pearson":
                    return 1
                elif method == "spearman":
                    return 2
        """) == []

    def test_single_comparison_is_fine(self):
        assert _codes("""
            def corr(x, *, method="pearson"):
                if method == "pearson":
                    return 1
        """) == []

    def test_default_does_not_count_as_compared_literal(self):
        assert _codes("""
            def run(x, *, mode="slow"):
                if mode == "fast":
                    return 1
        """) == []

    def test_membership_test_counts_each_literal(self):
        result = _lint("""
            def run(x, *, mode="slow"):
                if mode in ("fast", "turbo"):
                    return 1
        """)
        assert [d.code for d in result.diagnostics] == ["I403"]
        assert "Literal['slow', 'fast', 'turbo']" in result.diagnostics[0].suggestion


class TestTooManyArguments:
    def test_over_threshold(self):
        assert _codes("def f(a, b, c, d, e, g, h, i): ...") == ["W404"]

    def test_receiver_and_variadics_not_counted(self):
        assert _codes("""
            class A:
                def m(self, a, b, c, d, e, g, h, *args, **kwargs): ...
        """) == []

    def test_threshold_from_config(self):
        assert _codes("def f(a, b, c): ...", max_arguments=2) == ["W404"]


# ---------------------------------------------------------------------------
# Scope, suppressions, select / ignore
# ---------------------------------------------------------------------------

class TestScope:
    def test_private_functions_skipped_by_default(self):
        assert _codes("def _helper(x, items=[]): ...") == []

    def test_private_functions_with_include_private(self):
        assert _codes("def _helper(x, items=[]): ...", include_private=True) == ["E401"]

    def test_dunder_init_is_linted(self):
        assert _codes("""
            class A:
                def __init__(self, items=[]): ...
        """) == ["E401"]

    def test_other_dunders_are_skipped(self):
        assert _codes("""
            class A:
                def __eq__(self, other, strict=False): ...
        """) == []

    def test_overload_stubs_skipped(self):
        assert _codes("""
            from typing import overload

            @overload
            def f(x, flag=False): ...
        """) == []

    def test_functions_checked_count(self):
        result = _lint("def a(x): ...\ndef _b(x): ...\ndef c(x): ...\n")
        assert result.functions_checked == 2


class TestSuppressions:
    def test_specific_code(self):
        assert _codes("def f(x, flag=False, items=[]):  # sigspine: ignore[E401]\n    ...") == ["W203"]

    def test_all_codes(self):
        assert _codes("def f(x, flag=False, items=[]):  # sigspine: ignore\n    ...") == []


class TestSelectIgnore:
    SOURCE = "def f(x, flag=False, *, items=[]): ..."

    def test_all_by_default(self):
        assert _codes(self.SOURCE) == ["E401", "W203"]

    def test_select_prefix(self):
        assert _codes(self.SOURCE, select=["W"]) == ["W203"]

    def test_ignore_wins(self):
        assert _codes(self.SOURCE, select=["W", "E"], ignore=["W2"]) == ["E401"]


# ---------------------------------------------------------------------------
# Rule registry
# ---------------------------------------------------------------------------

class TestRuleRegistry:
    def test_built_in_rules_listed(self):
        rules = list_lint_rules()
        assert "required-with-default" in rules
        assert "too-many-arguments" in rules
        assert len(rules) == 13

    def test_describe_rules_cover_codes(self):
        codes = {info.code for info in describe_rules()}
        assert {"W101", "E401", "I403", "E001", "X001"} <= codes
        assert RULE_INFO["W302"].convention == "C-EXCL"

    def test_custom_rule_runs(self):
        def no_get_prefix(sig, config):
            if sig.name.startswith("get_"):
                return [LintDiagnostic(code="C001", severity=Severity.WARNING,
                                       message="Use a property.", function=sig.qualname)]
            return []

        register_lint_rule("no-get-prefix", no_get_prefix)
        assert "no-get-prefix" in list_lint_rules()
        assert _codes("def get_value(x): ...") == ["C001"]

    def test_duplicate_registration_rejected(self):
        register_lint_rule("house", lambda sig, config: [])
        with pytest.raises(RuleError, match="already registered"):
            register_lint_rule("house", lambda sig, config: [])

    def test_non_callable_rejected(self):
        with pytest.raises(RuleError):
            register_lint_rule("broken", "not a function")

    def test_clear_custom_rules(self):
        register_lint_rule("house", lambda sig, config: [])
        clear_custom_rules()
        assert "house" not in list_lint_rules()

    def test_crashing_rule_reports_x001(self):
        def explode(sig, config):
            raise RuntimeError("boom")

        register_lint_rule("explode", explode)
        result = _lint("def f(x): ...")
        assert [d.code for d in result.diagnostics] == ["X001"]
        assert "explode" in result.diagnostics[0].message

    def test_extra_rules(self):
        sig = SignatureWalker().walk_source("def f(x): ...")[0]
        extra = lambda s, c: [LintDiagnostic(code="C100", severity=Severity.INFO, message="hi")]  # noqa: E731
        result = lint_signature(sig, extra_rules=[extra])
        assert [d.code for d in result.diagnostics] == ["C100"]


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

class TestEntryPoints:
    def test_lint_source_records_filename(self):
        result = lint_source("def f(x, items=[]): ...", filename="pkg/mod.py")
        assert result.diagnostics[0].file == "pkg/mod.py"
        assert result.target == "pkg/mod.py"

    def test_lint_source_syntax_error(self):
        result = lint_source("def f(:\n", filename="bad.py")
        assert [d.code for d in result.diagnostics] == ["E001"]
        assert result.diagnostics[0].line == 1
        assert result.passed is False

    def test_lint_file(self, write_source):
        path = write_source("def f(x, flag=False): ...\n")
        result = lint_file(path)
        assert result.files_checked == 1
        assert result.diagnostics[0].file == str(path)

    def test_lint_file_syntax_error(self, write_source):
        result = lint_file(write_source("def f(:\n"))
        assert [d.code for d in result.diagnostics] == ["E001"]

    def test_lint_file_not_python(self, write_source):
        path = write_source("[metadata]\nname = demo\n", filename="setup.cfg")
        with pytest.raises(SourceParseError, match="Not a Python file"):
            lint_file(path)

    def test_lint_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            lint_file(tmp_path / "missing.py")

    def test_lint_paths_walks_directories(self, write_source, tmp_path):
        write_source("def a(x, items=[]): ...\n", filename="pkg/a.py")
        write_source("def b(x, flag=False): ...\n", filename="pkg/b.py")
        write_source("def c(x, items=[]): ...\n", filename="pkg/migrations/c.py")
        config = LinterConfig(exclude=["migrations"])
        result = lint_paths([tmp_path / "pkg"], config=config)
        assert result.files_checked == 2
        assert sorted(d.code for d in result.diagnostics) == ["E401", "W203"]

    def test_lint_paths_default_exclude_keeps_similar_names(self, write_source, tmp_path):
        write_source("def a(x, items=[]): ...\n", filename="builds/pkg/build_index.py")
        write_source("def b(x, items=[]): ...\n", filename="builds/pkg/redistribute.py")
        write_source("def c(x, items=[]): ...\n", filename="builds/pkg/build/c.py")
        result = lint_paths([tmp_path / "builds" / "pkg"])
        assert result.files_checked == 2
        assert result.passed is False

    def test_lint_paths_explicit_file_not_excluded(self, write_source):
        path = write_source("def c(x, items=[]): ...\n", filename="migrations/c.py")
        result = lint_paths([path], config=LinterConfig(exclude=["migrations"]))
        assert result.files_checked == 1

    def test_lint_paths_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            lint_paths([tmp_path / "missing.py"])

    def test_lint_callable(self):
        result = lint_callable(bad_default)
        assert [d.code for d in result.diagnostics] == ["E401"]

    def test_lint_callable_clean(self):
        assert lint_callable(clean_function).diagnostics == []
