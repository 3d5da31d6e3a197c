import hashlib

from site_search_index.core.digest import digest, serialize


def test_digest_is_hex_md5():
    assert digest("abc") == hashlib.md5(b"abc").hexdigest()
    assert len(digest("abc")) == 32


def test_digest_accepts_bytes_and_str_alike():
    assert digest("héllo") == digest("héllo".encode("utf-8"))


def test_serialize_is_stable():
    assert serialize(["a", "c"]) == '["a","c"]'
    assert digest(serialize(["a", "c"])) != digest(serialize(["c", "a"]))
