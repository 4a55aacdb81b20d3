"""
Directive context tests

Tests classification of preprocessor and template lines, the three handling
modes, and nesting-level scoping of open branches.
"""

import pytest

from outlinegrep.lib.directive import DirectiveContext
from outlinegrep.models import DirectiveMode
from outlinegrep.models.line import Action, DirectiveKind, Line, indentation_calculate


def lines_feed(context: DirectiveContext, texts):
    """Run texts through the provider, returning the pre_line actions"""
    actions = []
    for number, text in enumerate(texts, start=1):
        line = Line(number, text)
        indentation = indentation_calculate(text)
        action = context.pre_line(line, indentation)
        if action is Action.CONTINUE:
            context.post_line(line, indentation)
        actions.append(action)
    return actions


class TestClassification:
    """Test directive kind detection"""

    @pytest.mark.parametrize(
        "text, kind",
        [
            ("#if A", DirectiveKind.IF),
            ("#ifdef A", DirectiveKind.IF),
            ("#ifndef A", DirectiveKind.IF),
            ("#  if B", DirectiveKind.IF),
            ("{% if user %}", DirectiveKind.IF),
            ("{%- if user %}", DirectiveKind.IF),
            ("#else", DirectiveKind.ELSE),
            ("#elif B", DirectiveKind.ELSE),
            ("{% elsif x %}", DirectiveKind.ELSE),
            ("{% else %}", DirectiveKind.ELSE),
            ("#endif", DirectiveKind.ENDIF),
            ("{% endif %}", DirectiveKind.ENDIF),
            ("#include <stdio.h>", DirectiveKind.OTHER),
            ("#define X 1", DirectiveKind.OTHER),
            ("{% for x in y %}", DirectiveKind.OTHER),
            ("#ifx", DirectiveKind.OTHER),
        ],
    )
    def test_kinds(self, text, kind):
        assert DirectiveContext().kind_classify(text) is kind

    def test_not_a_directive(self):
        assert DirectiveContext().kind_classify("x = 1") is None
        assert DirectiveContext().kind_classify("{{ value }}") is None


class TestModes:
    """Test preserve, ignore and context handling"""

    def test_preserve_passes_everything(self):
        context = DirectiveContext(DirectiveMode.PRESERVE)
        actions = lines_feed(context, ["#if A", "x", "#endif"])
        assert actions == [Action.CONTINUE] * 3
        assert list(context.dump()) == []

    def test_ignore_skips_directives(self):
        context = DirectiveContext(DirectiveMode.IGNORE)
        actions = lines_feed(context, ["#if A", "x", "#include <a.h>", "#endif"])
        assert actions == [Action.SKIP, Action.CONTINUE, Action.SKIP, Action.SKIP]
        assert list(context.dump()) == []

    def test_context_skips_directives(self):
        context = DirectiveContext(DirectiveMode.CONTEXT)
        actions = lines_feed(context, ["#if A", "x", "#define Y", "#endif"])
        assert actions == [Action.SKIP, Action.CONTINUE, Action.SKIP, Action.SKIP]

    def test_indented_directive(self):
        context = DirectiveContext(DirectiveMode.CONTEXT)
        lines_feed(context, ["    {% if a %}"])
        assert [line.number for line in context.dump()] == [1]


class TestScopes:
    """Test nesting levels in context mode"""

    def test_open_branches_kept(self):
        context = DirectiveContext(DirectiveMode.CONTEXT)
        lines_feed(context, ["#ifdef A", "x", "#else"])
        assert [line.number for line in context.dump()] == [1, 3]
        assert context.level == 1

    def test_endif_closes_inner_scope(self):
        context = DirectiveContext(DirectiveMode.CONTEXT)
        lines_feed(context, ["#ifdef A", "#  if B", "#  else", "#  endif", "#else"])
        assert [line.number for line in context.dump()] == [1, 5]
        assert context.level == 1

    def test_levels_ascending(self):
        context = DirectiveContext(DirectiveMode.CONTEXT)
        lines_feed(context, ["#if A", "#if B", "#elif C", "#if D"])
        levels = [entry.level for entry in context.stack]
        assert levels == [1, 2, 2, 3]
        assert context.level == 3

    def test_balanced_returns_to_zero(self):
        context = DirectiveContext(DirectiveMode.CONTEXT)
        lines_feed(context, ["#if A", "#if B", "#endif", "#endif"])
        assert context.level == 0
        assert context.stack == []

    def test_unbalanced_endif_clamped(self):
        """A stray endif leaves the level at zero and drops open branches"""
        context = DirectiveContext(DirectiveMode.CONTEXT)
        lines_feed(context, ["#else", "#endif", "#endif"])
        assert context.level == 0
        assert context.stack == []

        lines_feed(context, ["#if A"])
        assert context.level == 1

    def test_clear_keeps_level(self):
        context = DirectiveContext(DirectiveMode.CONTEXT)
        lines_feed(context, ["#if A"])
        context.clear()
        assert context.stack == []
        assert context.level == 1


class TestDirectiveSearch:
    """Test directive handling through the full search"""

    def test_preserve_mode(self, scenario):
        """Preserved directives at column zero break the outline"""
        scenario(
            "bla",
            """
            - void f() {
            -   if (x) {
            + #ifdef A
            +     bla();
            """,
            directives=DirectiveMode.PRESERVE,
        )

    def test_ignore_mode(self, scenario):
        scenario(
            "bla",
            """
            + void f() {
            +   if (x) {
            - #ifdef A
            +     bla();
            """,
            directives=DirectiveMode.IGNORE,
        )

    def test_context_mode(self, scenario):
        scenario(
            "bla",
            """
            + void f() {
            +   if (x) {
            + #ifdef A
            +     bla();
            """,
            directives=DirectiveMode.CONTEXT,
        )

    def test_nested_conditionals(self, scenario):
        scenario(
            "bla",
            """
            + #ifdef A
            - #  if B
            -   foo
            - #  endif
            + #else
            +   bla
            """,
            directives=DirectiveMode.CONTEXT,
        )

    def test_template_branches(self, scenario):
        scenario(
            "bla",
            """
            + {% if user %}
            -   <p>a</p>
            + {% else %}
            +   <p>bla</p>
            - {% endif %}
            """,
            directives=DirectiveMode.CONTEXT,
        )

    def test_stray_endif(self, scenario):
        scenario(
            "bla",
            """
            - #endif
            + #if X
            + bla
            """,
            directives=DirectiveMode.CONTEXT,
        )

    def test_matching_directive_skipped(self, scenario):
        """Directive lines are never matched in context mode"""
        scenario(
            "bla",
            """
            - #define bla 1
            + bla
            """,
            directives=DirectiveMode.CONTEXT,
        )
