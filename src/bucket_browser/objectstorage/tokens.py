"""Token stack codec for stateless forward/back pagination.

A token stack records every continuation token used to reach the current
page, most recent last. Each token is URL-safe base64 encoded without
padding and the encoded tokens are joined with ``::``, which the encoding
never produces. The encoded stack can be round-tripped through query strings
or the command line without any server-side session state.
"""

import base64
import binascii

from bucket_browser.core.exceptions import ValidationError

TOKEN_DELIMITER = "::"


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def _encode_token(token: str) -> str:
    encoded = base64.urlsafe_b64encode(token.encode("utf-8")).decode("ascii")
    return encoded.rstrip("=")


def _decode_token(encoded: str) -> str:
    padded = encoded + "=" * (-len(encoded) % 4)
    try:
        decoded = base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)
        return decoded.decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise ValidationError(f"Invalid continuation token in stack: {encoded!r}") from e


def decode_token_stack(encoded_stack: str | None) -> list[str]:
    """Decode an encoded stack into its raw tokens, oldest first.

    Blank input decodes to an empty list.

    Raises:
        ValidationError: If a segment is not valid URL-safe base64 text
    """
    if not _has_text(encoded_stack):
        return []

    assert encoded_stack is not None
    return [
        _decode_token(segment.strip())
        for segment in encoded_stack.split(TOKEN_DELIMITER)
        if _has_text(segment)
    ]


def encode_token_stack(tokens: list[str] | tuple[str, ...]) -> str:
    """Encode raw tokens into a single transportable string.

    Blank tokens are skipped; an empty sequence encodes to ``""``.
    """
    return TOKEN_DELIMITER.join(_encode_token(token) for token in tokens if _has_text(token))


def append_to_stack(encoded_stack: str, token: str | None) -> str:
    """Return the stack with ``token`` pushed on top; blank tokens are a no-op."""
    if not _has_text(token):
        return encoded_stack

    assert token is not None
    encoded_token = _encode_token(token)
    if not _has_text(encoded_stack):
        return encoded_token
    return f"{encoded_stack}{TOKEN_DELIMITER}{encoded_token}"


def drop_last_from_stack(encoded_stack: str | None) -> str:
    """Return the stack without its most recent token.

    A stack holding a single token (or nothing) drops back to ``""``, the
    first page.
    """
    if not _has_text(encoded_stack):
        return ""

    assert encoded_stack is not None
    last_delimiter = encoded_stack.rfind(TOKEN_DELIMITER)
    if last_delimiter < 0:
        return ""
    return encoded_stack[:last_delimiter]
