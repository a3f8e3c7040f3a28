"""Subject description and generated artifacts."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import DEFAULT_HASH, DEFAULT_KEY_SIZE, KEY_SIZES
from ..errors import InvalidInput

WILDCARD_PREFIX = "*."


def file_stem(common_name: str) -> str:
    """Filename stem for artifacts derived from a common name.

    A leading ``*.`` becomes ``wildcard.`` so wildcard requests still yield
    valid filenames.
    """
    if common_name.startswith(WILDCARD_PREFIX):
        return "wildcard." + common_name[len(WILDCARD_PREFIX):]
    return common_name


def cn_first_sans(common_name: str, sans) -> Tuple[str, ...]:
    """SAN list with the common name as entry 0, as the request form keeps it."""
    result = [s for s in sans if s]
    if common_name.strip() and (not result or result[0] != common_name):
        result.insert(0, common_name)
    return tuple(result)


def check_file_stem(stem: str, allow_whitespace: bool = False) -> str:
    """Return ``stem`` if it names a single file in a directory.

    Path separators, ``.``/``..`` and NUL would let the name escape the
    directory it is joined to. Whitespace is rejected unless allowed, since
    the openssl command line is split on it.
    """
    if stem in ("", ".", "..") or any(c in stem for c in ("/", "\\", "\0")):
        raise InvalidInput("Common Name cannot be used as a file name")
    if not allow_whitespace and any(c.isspace() for c in stem):
        raise InvalidInput("Common Name must not contain whitespace")
    return stem


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


@dataclass(frozen=True)
class SubjectDescriptor:
    country: str
    state: str
    locality: str
    organization: str
    common_name: str
    organizational_unit: Optional[str] = None
    email: Optional[str] = None
    street_address: Optional[str] = None
    postal_code: Optional[str] = None
    subject_alternative_names: Tuple[str, ...] = ()
    key_size: str = DEFAULT_KEY_SIZE
    hash_algorithm: str = DEFAULT_HASH

    def __post_init__(self):
        # blank optionals are absent, not empty
        for name in ("organizational_unit", "email", "street_address", "postal_code"):
            object.__setattr__(self, name, _optional(getattr(self, name)))
        object.__setattr__(self, "subject_alternative_names", tuple(self.subject_alternative_names))
        object.__setattr__(self, "key_size", str(self.key_size))

    @property
    def file_stem(self) -> str:
        return file_stem(self.common_name)

    def generate_config(self) -> str:
        from ..openssl.config import generate_config

        return generate_config(self)

    def validate(self) -> "SubjectDescriptor":
        """Raise InvalidInput for the first violated rule; return self otherwise."""
        # length in UTF-8 bytes, so non-ASCII letters never pass as a code
        if len(self.country.encode("utf-8")) != 2:
            raise InvalidInput("Country code must be exactly 2 letters")
        if not (self.country.isascii() and self.country.isalpha()):
            raise InvalidInput("Country code must contain only letters")
        required = (
            (self.common_name, "Common Name"),
            (self.organization, "Organization"),
            (self.locality, "Locality (city)"),
            (self.state, "State/Province"),
        )
        for value, label in required:
            if not value.strip():
                raise InvalidInput(f"{label} is required")
        check_file_stem(self.file_stem)
        if self.key_size not in KEY_SIZES:
            raise InvalidInput(f"Key size must be one of {', '.join(KEY_SIZES)}")
        return self


@dataclass(frozen=True)
class GeneratedCert:
    key_pem: str
    csr_pem: str


@dataclass(frozen=True)
class GeneratedArtifact:
    config_text: str
    key_pem: str
    csr_pem: str


__all__ = [
    "SubjectDescriptor",
    "GeneratedCert",
    "GeneratedArtifact",
    "file_stem",
    "check_file_stem",
    "cn_first_sans",
]
