import pytest

from pubkeys import InvalidPubkeyError, parse_pubkey


@pytest.mark.parametrize("key", [
    "11111111111111111111111111111111",
    "So11111111111111111111111111111111111111112",
    "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",
])
def test_valid_keys_are_returned_unchanged(key):
    assert parse_pubkey(key) == key


@pytest.mark.parametrize("key", [
    "",
    "not-a-key",        # '-' is not base58
    "0OIl" * 8,         # excluded characters
    "abc",              # decodes to too few bytes
    "1" * 45,           # longer than any 32-byte key
    "1" * 32 + " ",     # trailing whitespace
    " " + "1" * 32,     # leading whitespace
    "1" * 32 + "\n",
])
def test_invalid_keys_are_rejected(key):
    with pytest.raises(InvalidPubkeyError):
        parse_pubkey(key)


def test_invalid_pubkey_is_a_value_error():
    assert issubclass(InvalidPubkeyError, ValueError)
