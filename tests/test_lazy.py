import pytest

from dotstate.lazy import LazyContents, LazyLinkname, sha256_sum


def test_sha256_sum_empty():
    assert sha256_sum(b"").hex() == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )
    assert sha256_sum(None) == sha256_sum(b"")


def test_sha256_sum_properties():
    assert len(sha256_sum(b"abc")) == 32
    assert sha256_sum(b"abc") == sha256_sum(b"abc")
    assert sha256_sum(b"abc") != sha256_sum(b"abd")


def test_lazy_contents_direct():
    lc = LazyContents(b"data")
    assert lc.contents() == b"data"
    assert lc.contents_sha256() == sha256_sum(b"data")


def test_lazy_contents_default_is_empty():
    lc = LazyContents()
    assert lc.contents() == b""
    assert lc.contents_sha256() == sha256_sum(b"")


def test_lazy_contents_func_called_once():
    calls = []

    def produce():
        calls.append(1)
        return b"computed"

    lc = LazyContents(func=produce)
    assert calls == []
    assert lc.contents() == b"computed"
    assert lc.contents() == b"computed"
    assert lc.contents_sha256() == sha256_sum(b"computed")
    assert len(calls) == 1


def test_lazy_contents_error_cached():
    calls = []

    def fail():
        calls.append(1)
        raise OSError("boom")

    lc = LazyContents(func=fail)
    with pytest.raises(OSError, match="boom"):
        lc.contents()
    with pytest.raises(OSError, match="boom"):
        lc.contents_sha256()
    assert len(calls) == 1


def test_lazy_linkname_direct():
    ll = LazyLinkname("target")
    assert ll.linkname() == "target"
    assert ll.linkname_sha256() == sha256_sum(b"target")


def test_lazy_linkname_func():
    calls = []

    def produce():
        calls.append(1)
        return ".dir/file"

    ll = LazyLinkname(func=produce)
    assert ll.linkname() == ".dir/file"
    assert ll.linkname_sha256() == sha256_sum(b".dir/file")
    assert len(calls) == 1


def test_lazy_linkname_error():
    def fail():
        raise ValueError("bad link")

    ll = LazyLinkname(func=fail)
    with pytest.raises(ValueError, match="bad link"):
        ll.linkname()
    with pytest.raises(ValueError, match="bad link"):
        ll.linkname_sha256()