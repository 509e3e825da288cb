"""
Tests for branch classification, ids and branch totals.
"""

import pytest

from kcovbranch.core.branch import BranchKind


class TestConditionals:
    """Tests for if statements."""

    def test_if_example(self, identify):
        """A single if/else is one Conditional worth two branches."""
        reporter, report = identify("int f(int x){ if (x) return 1; else return 0; }")

        assert len(reporter.records) == 1
        record = reporter.records[0]
        assert record.kind == BranchKind.CONDITIONAL
        assert record.tag == "If"
        assert record.id == 0
        assert record.weight == 2
        assert (record.line, record.column) == (1, 15)
        assert report.total == 2
        assert reporter.summaries == [(2, 1)]

    def test_ifs_in_source_order(self, identify):
        """N if statements give ids 0..N-1 and a total of 2N."""
        code = """int f(int a, int b, int c) {
    if (a) a++;
    if (b) b++;
    if (c) c++;
    return a + b + c;
}
"""
        reporter, report = identify(code)

        assert [r.id for r in reporter.records] == [0, 1, 2]
        assert [r.line for r in reporter.records] == [2, 3, 4]
        assert all(r.column == 5 for r in reporter.records)
        assert all(r.kind == BranchKind.CONDITIONAL for r in reporter.records)
        assert report.total == 6

    def test_else_if_chain(self, identify):
        """Every if in an else-if chain is its own branch point."""
        code = """int sign(int x) {
    if (x > 0) return 1;
    else if (x < 0) return -1;
    else return 0;
}
"""
        reporter, report = identify(code)

        assert reporter.tags == ["If", "If"]
        assert report.total == 4


class TestSwitches:
    """Tests for switch statements and their labels."""

    def test_switch_without_default(self, identify):
        """The switch itself counts as an implicit default edge."""
        reporter, report = identify("void g(int x){switch(x){case 1: break; case 2: break;}}")

        assert reporter.tags == ["ImpDef", "Case", "Case"]
        assert [r.kind for r in reporter.records] == [
            BranchKind.IMPLICIT_DEFAULT_SWITCH,
            BranchKind.CASE,
            BranchKind.CASE,
        ]
        assert [r.id for r in reporter.records] == [0, 1, 2]
        assert all(r.weight == 1 for r in reporter.records)
        assert report.total == 3

    def test_switch_with_default(self, identify):
        """An explicit default label silences the switch but not its labels."""
        reporter, report = identify("void g(int x){switch(x){case 1: break; default: break;}}")

        assert reporter.tags == ["Case", "Default"]
        assert reporter.records[1].kind == BranchKind.DEFAULT
        assert report.total == 2

    def test_default_before_cases(self, identify):
        """Label order does not matter for the default check."""
        reporter, report = identify("void g(int x){switch(x){default: break; case 1: break;}}")

        assert reporter.tags == ["Default", "Case"]
        assert report.total == 2

    def test_nested_switch_default_belongs_to_inner(self, identify):
        """A default in a nested switch does not make the outer one explicit."""
        code = """void h(int x, int y) {
    switch (x) {
    case 1:
        switch (y) {
        default:
            break;
        }
        break;
    }
}
"""
        reporter, report = identify(code)

        assert reporter.tags == ["ImpDef", "Case", "Default"]
        assert reporter.records[0].line == 2
        assert reporter.records[2].line == 5
        assert report.total == 3

    def test_labels_inside_nested_statements(self, identify):
        """Labels buried in a loop body still belong to the enclosing switch."""
        code = """void copy(char *to, char *from, int count) {
    int n = (count + 3) / 4;
    switch (count % 4) {
    case 0: do { *to++ = *from++;
    case 3:      *to++ = *from++;
    default:     *to++ = *from++;
            } while (--n > 0);
    }
}
"""
        reporter, report = identify(code)

        assert reporter.tags == ["Case", "Do", "Case", "Default"]
        assert report.total == 5

    def test_empty_switch(self, identify):
        """A switch without labels is still an implicit default."""
        reporter, report = identify("void g(int x){switch(x){}}")

        assert reporter.tags == ["ImpDef"]
        assert report.total == 1


class TestLoops:
    """Tests for loop statements."""

    def test_loop_kinds(self, identify):
        code = """void loops(int n) {
    for (int i = 0; i < n; i++) {}
    while (n > 0) n--;
    do { n++; } while (n < 3);
}
"""
        reporter, report = identify(code)

        assert reporter.tags == ["For", "While", "Do"]
        assert all(r.kind == BranchKind.LOOP for r in reporter.records)
        assert all(r.weight == 2 for r in reporter.records)
        assert [r.line for r in reporter.records] == [2, 3, 4]
        assert report.total == 6

    def test_for_without_condition(self, identify):
        """for (;;) still counts as a loop."""
        reporter, report = identify("void spin(void) { for (;;) {} }")

        assert reporter.tags == ["For"]
        assert report.total == 2


class TestTernaries:
    """Tests for conditional expressions."""

    def test_ternary(self, identify):
        reporter, report = identify("int t(int a) { return a > 0 ? 1 : -1; }")

        assert len(reporter.records) == 1
        assert reporter.records[0].kind == BranchKind.TERNARY
        assert reporter.records[0].tag == "?:"
        assert reporter.records[0].column == 23
        assert report.total == 2

    def test_ternary_inside_if_condition(self, identify):
        """Outer constructs are numbered before the ones nested in them."""
        reporter, report = identify("int f(int a, int b, int c) { if (a ? b : c) return 1; return 0; }")

        assert reporter.tags == ["If", "?:"]
        assert [r.id for r in reporter.records] == [0, 1]
        assert report.total == 4

    def test_ternary_outside_functions(self, identify):
        """Initializers at file scope are walked too."""
        reporter, report = identify("int limit = 4 > 3 ? 4 : 3;\n")

        assert reporter.tags == ["?:"]
        assert report.total == 2


class TestTraversal:
    """Tests for whole-file traversal properties."""

    MIXED = """int classify(int x, int y) {
    int r = 0;
    for (int i = 0; i < x; i++) {
        if (i % 2) r += y > 0 ? 1 : 2;
    }
    switch (y) {
    case 0: r++; break;
    case 1: r--; break;
    }
    while (r > 10) r /= 2;
    return r;
}
"""

    def test_mixed_sequence(self, identify):
        reporter, report = identify(self.MIXED)

        assert reporter.tags == ["For", "If", "?:", "ImpDef", "Case", "Case", "While"]
        assert [r.id for r in reporter.records] == list(range(7))
        assert report.total == 2 + 2 + 2 + 1 + 1 + 1 + 2
        assert report.branch_count == 7

    def test_total_is_prefix_sum(self, identify):
        reporter, report = identify(self.MIXED)

        running = 0
        for record in reporter.records:
            running += record.weight
            assert record.weight == record.kind.weight
        assert running == report.total

    def test_no_branches(self, identify):
        reporter, report = identify("int add(int a, int b) { return a + b; }")

        assert reporter.records == []
        assert report.total == 0
        assert reporter.summaries == [(0, 0)]

    def test_state_is_per_run(self, identify):
        """Ids and totals start over on every run."""
        first, _ = identify("int f(int x){ if (x) return 1; return 0; }")
        second, report = identify("int f(int x){ if (x) return 1; return 0; }")

        assert first.records[0].id == second.records[0].id == 0
        assert report.total == 2

    def test_function_listing(self, identify):
        code = """static int helper(int x) { return x; }
int *lookup(int k) { if (k) return 0; return 0; }
int proto(int);
"""
        reporter, _ = identify(code, report={"functions": True})

        assert reporter.functions == ["helper", "lookup"]

    def test_function_listing_disabled_by_default(self, identify):
        reporter, _ = identify("int f(void) { return 0; }")

        assert reporter.functions == []

    @pytest.mark.parametrize("code", [
        "int f( { if (x) }",
        "void g(void) { while (1 }",
    ])
    def test_syntax_error_is_fatal(self, identify, code):
        from kcovbranch.core.errors import FrontEndError

        with pytest.raises(FrontEndError):
            identify(code)

    def test_lenient_parse(self, identify):
        """With strict parsing off, the recoverable parts of a broken file are still walked."""
        reporter, _ = identify("void g(int x) { if (x) x++; } int f( {", parse={"strict": False})

        assert "If" in reporter.tags
