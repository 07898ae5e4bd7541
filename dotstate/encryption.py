"""Encryption back ends."""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import IO, Any

_log = logging.getLogger(__name__)


class NoEncryptionError(RuntimeError):
    """Raised when encryption is used but none is configured."""

    def __init__(self) -> None:
        super().__init__("no encryption")


class Encryption(ABC):
    """Encrypts and decrypts data."""

    @abstractmethod
    def decrypt(self, ciphertext: bytes) -> bytes:
        """Return the plaintext of ciphertext."""

    @abstractmethod
    def decrypt_to_file(self, filename: str, ciphertext: bytes) -> None:
        """Decrypt ciphertext into filename."""

    @abstractmethod
    def encrypt(self, plaintext: bytes) -> bytes:
        """Return the ciphertext of plaintext."""

    @abstractmethod
    def encrypt_file(self, filename: str) -> bytes:
        """Return the ciphertext of the contents of filename."""

    @abstractmethod
    def encrypted_suffix(self) -> str:
        """Return the suffix added to encrypted file names."""


class NoEncryption(Encryption):
    """Raises NoEncryptionError from every operation."""

    def decrypt(self, ciphertext: bytes) -> bytes:
        raise NoEncryptionError()

    def decrypt_to_file(self, filename: str, ciphertext: bytes) -> None:
        raise NoEncryptionError()

    def encrypt(self, plaintext: bytes) -> bytes:
        raise NoEncryptionError()

    def encrypt_file(self, filename: str) -> bytes:
        raise NoEncryptionError()

    def encrypted_suffix(self) -> str:
        return ""


@dataclass
class GPGEncryption(Encryption):
    """Encryption that runs gpg."""

    command: str
    args: list[str] = field(default_factory=list)
    recipient: str = ""
    symmetric: bool = False
    suffix: str = ""

    def _run(self, args: list[str], **stdin: Any) -> bytes:
        cmd = [self.command, *args]
        result = subprocess.run(cmd, stdout=subprocess.PIPE, check=False, **stdin)
        _log.debug("ran %s: exit status %d", cmd, result.returncode)
        if result.returncode != 0:
            raise subprocess.CalledProcessError(result.returncode, cmd, output=result.stdout)
        return result.stdout

    def decrypt(self, ciphertext: bytes) -> bytes:
        return self._run(["--decrypt", *self.args], input=ciphertext)

    def decrypt_to_file(self, filename: str, ciphertext: bytes) -> None:
        self._run(
            ["--decrypt", "--output", str(filename), "--yes", *self.args],
            input=ciphertext,
        )

    def encrypt(self, plaintext: bytes) -> bytes:
        return self._run([*self.encrypt_args(), *self.args], input=plaintext)

    def encrypt_file(self, filename: str) -> bytes:
        with open(filename, "rb") as f:
            return self._encrypt_stream(f)

    def _encrypt_stream(self, stream: IO[bytes]) -> bytes:
        return self._run([*self.encrypt_args(), *self.args], stdin=stream)

    def encrypted_suffix(self) -> str:
        return self.suffix

    def encrypt_args(self) -> list[str]:
        """Return the gpg arguments that select the kind of encryption."""
        args = ["--armor"]
        if self.symmetric:
            args.append("--symmetric")
        else:
            args.append("--encrypt")
            if self.recipient:
                args += ["--recipient", self.recipient]
        return args