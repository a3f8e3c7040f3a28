"""OpenSSL ``req`` configuration synthesis.

The output is parsed by the external ``openssl`` binary, so it is emitted
byte-for-byte in a fixed layout:

  [req]                    -> bits, digest, keyfile, optional req_extensions
  [req_distinguished_name] -> DN in the shared order (see subject.dn)
  [v3_req] / [alt_names]   -> only when SANs are present
"""
from __future__ import annotations

from typing import List

from ..errors import InvalidCountry
from ..subject.dn import dn_entries, san_entries
from ..subject.model import SubjectDescriptor

BANNER_BEGIN = "------------------- Openssl config begin ----------------------\n"
BANNER_END = "------------------- Openssl config end ----------------------\n"


def generate_config(subject: SubjectDescriptor) -> str:
    # callers validate already; re-check the one field openssl chokes on,
    # counting UTF-8 bytes
    if len(subject.country.encode("utf-8")) != 2:
        raise InvalidCountry("Country code must be exactly 2 letters")

    sans = san_entries(subject)
    lines: List[str] = [
        "[req]",
        "distinguished_name = req_distinguished_name",
        f"default_bits = {subject.key_size}",
        "prompt = no",
        f"default_md = {subject.hash_algorithm}",
        "encrypt_key = no",
        f"default_keyfile = {subject.file_stem}.key",
    ]
    if sans:
        lines.append("req_extensions = v3_req")

    lines.append("")
    lines.append("[req_distinguished_name]")
    for entry in dn_entries(subject):
        lines.append(f"{entry.key} = {entry.value}")

    if sans:
        lines.append("[v3_req]")
        lines.append("subjectAltName = @alt_names")
        lines.append("")
        lines.append("[alt_names]")
        # one counter shared by IP and DNS entries
        for i, (kind, value) in enumerate(sans, start=1):
            lines.append(f"{kind}.{i} = {value}")

    return "\n".join(lines) + "\n"


def frame_config(config_text: str) -> str:
    """Wrap config text in the begin/end banners shown to operators."""
    return BANNER_BEGIN + config_text + BANNER_END


__all__ = ["generate_config", "frame_config"]
