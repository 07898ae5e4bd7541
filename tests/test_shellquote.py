import pytest

from dotstate.shellquote import maybe_shell_quote, shell_quote_args


@pytest.mark.parametrize(
    ("s", "expected"),
    [
        ("", "''"),
        ("'", "\\'"),
        ("''", "\\'\\'"),
        ("'a'", "\\''a'\\'"),
        ("\\", "'\\\\'"),
        ("\\a", "'\\\\a'"),
        ("$a", "'$a'"),
        ("a", "a"),
        ("a/b", "a/b"),
        ("a b", "'a b'"),
        ("--arg", "--arg"),
        ("--arg=value", "--arg=value"),
    ],
)
def test_maybe_shell_quote(s, expected):
    assert maybe_shell_quote(s) == expected


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        ([], ""),
        (["foo"], "foo"),
        (["foo", "bar baz"], "foo 'bar baz'"),
    ],
)
def test_shell_quote_args(args, expected):
    assert shell_quote_args(args) == expected