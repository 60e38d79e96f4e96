"""
Parser Tests

Tokenization and parallel grouping of command lines.
"""

import unittest

from minish.shell.parser import CommandParser, CommandGroup


class TestTokenizer(unittest.TestCase):
    """Test splitting a raw line into tokens."""

    def setUp(self):
        self.parser = CommandParser()

    def test_redirect_marker_without_spaces(self):
        """'>' adjacent to other text is still its own token."""
        self.assertEqual(
            self.parser.parse("ls  -la>out.txt"),
            ('ls', '-la', '>', 'out.txt')
        )

    def test_parallel_marker_without_spaces(self):
        """'&' adjacent to other text is still its own token."""
        self.assertEqual(
            self.parser.parse("a&b"),
            ('a', '&', 'b')
        )

    def test_spaced_and_unspaced_markers_agree(self):
        """`a>b` and `a > b` tokenize the same way."""
        self.assertEqual(self.parser.parse("a>b"), self.parser.parse("a > b"))

    def test_whitespace_runs_collapse(self):
        """Tabs and repeated spaces separate tokens like one space."""
        self.assertEqual(
            self.parser.parse("  echo \t hello   world\t"),
            ('echo', 'hello', 'world')
        )

    def test_all_whitespace_yields_no_tokens(self):
        """A blank line has no tokens."""
        self.assertEqual(self.parser.parse("  \t  "), ())

    def test_empty_line_yields_no_tokens(self):
        self.assertEqual(self.parser.parse(""), ())

    def test_repeated_markers(self):
        """Every marker character becomes a token of its own."""
        self.assertEqual(
            self.parser.parse("ls>>x&&y"),
            ('ls', '>', '>', 'x', '&', '&', 'y')
        )

    def test_tokens_are_never_empty(self):
        tokens = self.parser.parse(" & ls > out & ")
        self.assertTrue(all(tokens))
        self.assertEqual(tokens, ('&', 'ls', '>', 'out', '&'))


class TestParallelGrouper(unittest.TestCase):
    """Test splitting tokens into '&'-separated command groups."""

    def setUp(self):
        self.parser = CommandParser()

    def test_three_groups(self):
        """Offsets and lengths skip the '&' markers."""
        tokens = ["a", "&", "b", "c", "&", "d"]
        groups = self.parser.split_groups(tokens)

        self.assertEqual([g.start for g in groups], [0, 2, 5])
        self.assertEqual([g.length for g in groups], [1, 2, 1])
        self.assertEqual(
            [list(g.tokens(tokens)) for g in groups],
            [["a"], ["b", "c"], ["d"]]
        )

    def test_no_separator_is_one_group(self):
        """A serial line is a single group spanning every token."""
        tokens = ('echo', 'hi', '>', 'f')
        groups = self.parser.split_groups(tokens)

        self.assertEqual(groups, [CommandGroup(start=0, length=4)])

    def test_group_count_matches_marker_count(self):
        tokens = ('a', '&', 'b', '&', 'c', '&', 'd')
        self.assertEqual(self.parser.count_groups(tokens), 4)
        self.assertEqual(len(self.parser.split_groups(tokens)), 4)

    def test_trailing_separator_gives_empty_group(self):
        groups = self.parser.split_groups(('ls', '&'))

        self.assertEqual(groups, [CommandGroup(0, 1), CommandGroup(2, 0)])
        self.assertTrue(groups[1].is_empty())

    def test_leading_separator_gives_empty_group(self):
        groups = self.parser.split_groups(('&', 'ls'))

        self.assertEqual(groups, [CommandGroup(0, 0), CommandGroup(1, 1)])

    def test_group_slice_excludes_markers(self):
        tokens = self.parser.parse("sleep 1&sleep 2")
        slices = [tuple(g.tokens(tokens)) for g in self.parser.split_groups(tokens)]

        self.assertEqual(slices, [('sleep', '1'), ('sleep', '2')])


if __name__ == '__main__':
    unittest.main()
