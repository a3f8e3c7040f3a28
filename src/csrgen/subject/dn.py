"""Distinguished Name layout and SAN classification.

Both CSR paths (the OpenSSL config text and the native ``cryptography``
builder) read the subject through this module so field order, sanitization
and IP/DNS classification cannot drift apart.

DN order: C, ST, L, street?, postalCode?, O, OU?, CN, emailAddress?

Only ST, L, street, O and OU are passed through ``sanitize_for_cert_field``;
C, postalCode, CN and emailAddress are used verbatim.
"""
from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import List, Optional, Tuple

from cryptography.x509.oid import NameOID, ObjectIdentifier

from .model import SubjectDescriptor
from .sanitize import sanitize_for_cert_field

SAN_IP = "IP"
SAN_DNS = "DNS"


@dataclass(frozen=True)
class DNEntry:
    key: str  # OpenSSL config short name
    oid: ObjectIdentifier
    value: str


# (config key, oid, descriptor attribute, sanitized, optional)
_DN_LAYOUT = (
    ("C", NameOID.COUNTRY_NAME, "country", False, False),
    ("ST", NameOID.STATE_OR_PROVINCE_NAME, "state", True, False),
    ("L", NameOID.LOCALITY_NAME, "locality", True, False),
    ("street", NameOID.STREET_ADDRESS, "street_address", True, True),
    ("postalCode", NameOID.POSTAL_CODE, "postal_code", False, True),
    ("O", NameOID.ORGANIZATION_NAME, "organization", True, False),
    ("OU", NameOID.ORGANIZATIONAL_UNIT_NAME, "organizational_unit", True, True),
    ("CN", NameOID.COMMON_NAME, "common_name", False, False),
    ("emailAddress", NameOID.EMAIL_ADDRESS, "email", False, True),
)


def dn_entries(subject: SubjectDescriptor) -> List[DNEntry]:
    entries: List[DNEntry] = []
    for key, oid, attr, sanitized, optional in _DN_LAYOUT:
        value: Optional[str] = getattr(subject, attr)
        if optional and (value is None or not value.strip()):
            continue
        if sanitized:
            value = sanitize_for_cert_field(value)
        entries.append(DNEntry(key=key, oid=oid, value=value))
    return entries


def classify_san(value: str) -> str:
    """Return ``"IP"`` if value parses as an IP literal, else ``"DNS"``."""
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return SAN_DNS
    return SAN_IP


def san_entries(subject: SubjectDescriptor) -> List[Tuple[str, str]]:
    """(kind, value) pairs in the original SAN order."""
    return [(classify_san(v), v) for v in subject.subject_alternative_names]


__all__ = ["DNEntry", "dn_entries", "classify_san", "san_entries", "SAN_IP", "SAN_DNS"]
