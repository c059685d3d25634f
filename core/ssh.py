"""
SSH key installation for Kart repository access.

Kart clones over SSH, so the private key supplied (base64-encoded) through
SSH_PRIVATE_KEY has to be written into ~/.ssh before the first sync.
"""

import base64
import binascii
import logging
import subprocess
from pathlib import Path
from typing import Optional

from core.config import settings
from core.exceptions import SshSetupError

logger = logging.getLogger(__name__)


def detect_key_filename(key_content: str) -> str:
    """Pick the ~/.ssh file name matching the decoded key's type."""
    if "BEGIN OPENSSH PRIVATE KEY" in key_content:
        # OpenSSH container: ed25519 keys are short, RSA keys are not
        if "ssh-ed25519" in key_content or len(key_content) < 800:
            return "id_ed25519"
        return "id_rsa"
    if "BEGIN RSA PRIVATE KEY" in key_content:
        return "id_rsa"
    if "BEGIN EC PRIVATE KEY" in key_content:
        return "id_ecdsa"
    return "id_ed25519"


def decode_private_key(encoded: str) -> str:
    """Decode the base64 key material and check it looks like a key."""
    try:
        private_key = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise SshSetupError("Failed to decode SSH_PRIVATE_KEY from base64", original_exception=e)

    if "PRIVATE KEY" not in private_key:
        raise SshSetupError(
            "SSH_PRIVATE_KEY does not appear to be a valid private key. "
            "Make sure you base64-encoded the entire key file including headers."
        )

    if not private_key.endswith("\n"):
        private_key += "\n"
    return private_key


def setup_ssh_key(
    encoded_key: Optional[str] = None,
    ssh_dir: Optional[Path] = None,
    known_host: Optional[str] = None,
) -> Optional[Path]:
    """
    Install the SSH private key and trust the Kart host.

    Args:
        encoded_key: Base64 key material (defaults to settings.SSH_PRIVATE_KEY)
        ssh_dir: Target directory (defaults to ~/.ssh)
        known_host: Host to add to known_hosts (defaults to settings.KART_HOST)

    Returns:
        Path of the written key file, or None when no key is configured

    Raises:
        SshSetupError: If the key cannot be decoded or written
    """
    encoded_key = encoded_key if encoded_key is not None else settings.SSH_PRIVATE_KEY
    if not encoded_key:
        logger.warning("SSH_PRIVATE_KEY not set, skipping SSH setup (only public repositories will sync)")
        return None

    ssh_dir = ssh_dir or Path.home() / ".ssh"
    known_host = known_host or settings.KART_HOST

    logger.info("Setting up SSH authentication")
    ssh_dir.mkdir(mode=0o700, parents=True, exist_ok=True)

    private_key = decode_private_key(encoded_key)
    key_path = ssh_dir / detect_key_filename(private_key)
    logger.debug(f"Detected key type, writing {key_path.name}")

    try:
        key_path.write_text(private_key, encoding="utf-8")
        key_path.chmod(0o600)
    except OSError as e:
        raise SshSetupError(f"Failed to write SSH key: {e}", original_exception=e)

    try:
        result = subprocess.run(
            ["ssh-keyscan", "-t", "ed25519,rsa", known_host],
            capture_output=True,
            text=True,
            timeout=30,
        )
        if result.stdout.strip():
            with open(ssh_dir / "known_hosts", "a", encoding="utf-8") as f:
                f.write(result.stdout)
            logger.debug(f"Added {known_host} to known_hosts")
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning(f"Could not fetch host key for {known_host}, continuing anyway: {e}")

    logger.info("SSH authentication configured")
    return key_path
