"""Identity keypair bootstrap for the model-serving runtime."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

logger = logging.getLogger(__name__)

PRIVATE_KEY_NAME = "id_ed25519"
PUBLIC_KEY_NAME = "id_ed25519.pub"


def initialize_keypair(directory: str | Path) -> bytes | None:
    """Create an Ed25519 keypair in *directory* unless one already exists.

    The private key is written in OpenSSH PEM form (mode ``0600``) and the
    public key in ``authorized_keys`` form (mode ``0644``).

    Returns
    -------
    bytes | None
        The new public key line, or ``None`` when a private key was
        already present.
    """
    directory = Path(directory).expanduser()
    private_path = directory / PRIVATE_KEY_NAME
    public_path = directory / PUBLIC_KEY_NAME

    if private_path.exists():
        logger.debug("Found existing runtime key at %s", private_path)
        return None

    logger.info("Couldn't find '%s'. Generating new private key.", private_path)
    private_key = Ed25519PrivateKey.generate()

    private_bytes = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.OpenSSH,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_bytes = (
        private_key.public_key().public_bytes(
            encoding=serialization.Encoding.OpenSSH,
            format=serialization.PublicFormat.OpenSSH,
        )
        + b"\n"
    )

    directory.mkdir(mode=0o755, parents=True, exist_ok=True)
    _write(private_path, private_bytes, 0o600)
    _write(public_path, public_bytes, 0o644)

    logger.info("Your new public key is: %s", public_bytes.decode().strip())
    return public_bytes


def _write(path: Path, data: bytes, mode: int) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "wb") as fh:
        fh.write(data)
    os.chmod(path, mode)
