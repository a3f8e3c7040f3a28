"""In-process RSA key and CSR generation.

Mirrors what ``openssl req`` produces from the synthesized config, without
touching the filesystem or spawning a process. DN layout and SAN
classification come from subject.dn, shared with the config path.
"""
from __future__ import annotations

import ipaddress

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from ..config import KEY_SIZES
from ..errors import CryptoFailure, KeyGenerationFailed, SigningFailed
from ..openssl.config import generate_config
from ..subject.dn import SAN_IP, dn_entries, san_entries
from ..subject.model import GeneratedArtifact, GeneratedCert, SubjectDescriptor

PUBLIC_EXPONENT = 65537


def _get_hash_algorithm(name: str) -> hashes.HashAlgorithm:
    hash_algorithms = {
        "sha256": hashes.SHA256(),
        "sha384": hashes.SHA384(),
        "sha512": hashes.SHA512(),
    }
    # unknown names fall back to sha256 rather than failing
    return hash_algorithms.get(name, hashes.SHA256())


def _generate_private_key(key_size: str) -> rsa.RSAPrivateKey:
    if key_size not in KEY_SIZES:
        raise KeyGenerationFailed(f"Invalid key size: {key_size!r}")
    try:
        return rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=int(key_size))
    except Exception as e:
        raise KeyGenerationFailed(f"RSA generation failed: {e}") from e


def _build_subject_name(subject: SubjectDescriptor) -> x509.Name:
    try:
        return x509.Name([x509.NameAttribute(e.oid, e.value) for e in dn_entries(subject)])
    except Exception as e:
        raise CryptoFailure(f"Name builder failed: {e}") from e


def _build_san(subject: SubjectDescriptor) -> x509.SubjectAlternativeName:
    names = []
    try:
        for kind, value in san_entries(subject):
            if kind == SAN_IP:
                names.append(x509.IPAddress(ipaddress.ip_address(value)))
            else:
                names.append(x509.DNSName(value))
        return x509.SubjectAlternativeName(names)
    except Exception as e:
        raise CryptoFailure(f"SAN extension failed: {e}") from e


def generate_cert_request(subject: SubjectDescriptor) -> GeneratedCert:
    """Generate an RSA key and a signed CSR for ``subject``.

    Raises KeyGenerationFailed, SigningFailed or CryptoFailure.
    """
    private_key = _generate_private_key(subject.key_size)

    builder = x509.CertificateSigningRequestBuilder().subject_name(_build_subject_name(subject))
    if subject.subject_alternative_names:
        builder = builder.add_extension(_build_san(subject), critical=False)

    try:
        csr = builder.sign(private_key, _get_hash_algorithm(subject.hash_algorithm))
    except Exception as e:
        raise SigningFailed(f"Signing failed: {e}") from e

    try:
        key_pem = private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
        csr_pem = csr.public_bytes(serialization.Encoding.PEM)
    except Exception as e:
        raise CryptoFailure(f"PEM export failed: {e}") from e

    return GeneratedCert(key_pem=key_pem.decode(), csr_pem=csr_pem.decode())


def build_artifact(subject: SubjectDescriptor) -> GeneratedArtifact:
    config_text = generate_config(subject)
    cert = generate_cert_request(subject)
    return GeneratedArtifact(config_text=config_text, key_pem=cert.key_pem, csr_pem=cert.csr_pem)


__all__ = ["generate_cert_request", "build_artifact"]
