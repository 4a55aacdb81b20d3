"""
Window context tests

Tests leading and trailing line windows, forced trailing lines and their
interaction with the outline context.
"""

from outlinegrep.lib.window import WindowContext
from outlinegrep.models.line import Line


class TestWindowBuffer:
    """Test the provider directly"""

    def test_buffer_bounded_by_before(self):
        emitted = []
        context = WindowContext(emitted.append, before=2)
        for number in range(1, 6):
            line = Line(number, f"l{number}")
            context.pre_line(line, 0)
            context.post_line(line, 0)
        # Next line is 6: window holds 4 and 5 once pre_line runs
        context.pre_line(Line(6, "l6"), 0)
        assert [line.number for line in context.dump()] == [4, 5]
        assert emitted == []

    def test_zero_before_keeps_nothing_for_next_match(self):
        context = WindowContext(lambda line: None)
        line = Line(1, "a")
        context.pre_line(line, 0)
        context.post_line(line, 0)
        context.pre_line(Line(2, "b"), 0)
        assert list(context.dump()) == []

    def test_forced_lines_emitted_on_pop(self):
        emitted = []
        context = WindowContext(emitted.append, after=1)
        context.clear()
        for number in (2, 3):
            line = Line(number, "x")
            context.pre_line(line, 0)
            context.post_line(line, 0)
        assert [line.number for line in emitted] == [2]

    def test_forced_lines_emitted_at_end(self):
        emitted = []
        context = WindowContext(emitted.append, after=2)
        context.clear()
        line = Line(2, "x")
        context.pre_line(line, 0)
        context.post_line(line, 0)
        context.end()
        assert [line.number for line in emitted] == [2]

    def test_clear_empties_buffer(self):
        context = WindowContext(lambda line: None, before=3)
        line = Line(1, "a")
        context.pre_line(line, 0)
        context.post_line(line, 0)
        context.clear()
        assert list(context.dump()) == []


class TestWindowSearch:
    """Test windows through the full search"""

    def test_before_with_outline(self, scenario):
        scenario(
            "bla",
            """
            + foo
            -   bar
            +   baz
            +   bla
            """,
            before=1,
        )

    def test_after(self, scenario):
        scenario(
            "bla",
            """
            + foo
            +   bla
            +   qux
            -   quux
            """,
            after=1,
        )

    def test_after_until_end(self, scenario):
        scenario(
            "bla",
            """
            + bla
            + qux
            """,
            after=3,
        )

    def test_after_between_matches(self, scenario):
        scenario(
            "bla",
            """
            + bla
            + a
            + b
            - c
            + bla
            + d
            """,
            after=2,
        )

    def test_before_overlaps_ancestors(self, scenario):
        """Lines from window and outline are printed once"""
        scenario(
            "bla",
            """
            + foo
            +   bar
            +     bla
            """,
            before=2,
        )

    def test_blank_lines_take_slots(self, scenario):
        scenario(
            "bla",
            """
            - x
            +
            + bla
            """,
            before=1,
        )

    def test_trailing_line_matches(self, scenario):
        """A match inside the trailing window restarts it"""
        scenario(
            "bla",
            """
            + bla
            + bla
            + a
            - b
            """,
            after=1,
        )
