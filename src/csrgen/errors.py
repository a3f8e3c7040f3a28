"""Error kinds raised by the generation engine.

Every failure is recoverable by the caller:
  - InvalidInput: malformed country code, empty mandatory field, empty command
  - IoFailure: file create/write/read/delete, archive write
  - ProcessLaunchFailure: external binary missing or not executable
  - CryptoFailure: key generation, DN/CSR building, signing, PEM export
"""


class CsrGenError(Exception):
    """Base class for all engine errors."""


class InvalidInput(CsrGenError, ValueError):
    pass


class InvalidCountry(InvalidInput):
    pass


class EmptyCommand(InvalidInput):
    pass


class IoFailure(CsrGenError):
    pass


class ProcessLaunchFailure(CsrGenError):
    pass


class CryptoFailure(CsrGenError):
    pass


class KeyGenerationFailed(CryptoFailure):
    pass


class SigningFailed(CryptoFailure):
    pass


__all__ = [
    "CsrGenError",
    "InvalidInput",
    "InvalidCountry",
    "EmptyCommand",
    "IoFailure",
    "ProcessLaunchFailure",
    "CryptoFailure",
    "KeyGenerationFailed",
    "SigningFailed",
]
