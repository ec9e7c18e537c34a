import base58

PUBKEY_BYTES = 32
# Longest base58 encoding of 32 bytes.
MAX_PUBKEY_CHARS = 44


class InvalidPubkeyError(ValueError):
    pass


def parse_pubkey(text: str) -> str:
    """
    Validates a base58 account address and returns it unchanged.
    Raises InvalidPubkeyError when it is too long, not base58, or not 32 bytes.
    """
    if not text or len(text) > MAX_PUBKEY_CHARS:
        raise InvalidPubkeyError(text)
    # b58decode strips surrounding whitespace; the address itself must not carry any.
    if any(ch.encode() not in base58.BITCOIN_ALPHABET for ch in text):
        raise InvalidPubkeyError(text)

    try:
        raw = base58.b58decode(text)
    except ValueError as exc:
        raise InvalidPubkeyError(text) from exc

    if len(raw) != PUBKEY_BYTES:
        raise InvalidPubkeyError(text)
    return text
