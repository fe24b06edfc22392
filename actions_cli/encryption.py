"""Encryption of secret values for the GitHub secrets API."""

from base64 import b64encode

from nacl import encoding, public


def seal_secret(public_key: str, value: str) -> str:
    """Encrypt ``value`` with a libsodium sealed box for a base64 public key.

    Returns:
        The base64 encoded ciphertext expected as ``encrypted_value``

    """
    key = public.PublicKey(public_key.encode("utf-8"), encoding.Base64Encoder)
    sealed = public.SealedBox(key).encrypt(value.encode("utf-8"))
    return b64encode(sealed).decode("utf-8")
