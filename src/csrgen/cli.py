from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import DEFAULT_HASH, DEFAULT_KEY_SIZE, HASH_ALGORITHMS, KEY_SIZES
from .crypto.csr import build_artifact
from .errors import CsrGenError, InvalidInput
from .export.bundler import package, resolve_download_dir
from .openssl.config import frame_config, generate_config
from .openssl.runner import generate_with_openssl
from .subject.model import SubjectDescriptor, cn_first_sans
from .subject.sanitize import sanitize, sanitize_for_cert_field


def _subject_from_args(args: argparse.Namespace) -> SubjectDescriptor:
    sans = tuple(args.san or ()) if args.no_cn_san else cn_first_sans(args.cn, args.san or ())
    return SubjectDescriptor(
        country=args.country,
        state=args.state,
        locality=args.locality,
        organization=args.org,
        common_name=args.cn,
        organizational_unit=args.ou,
        email=args.email,
        street_address=args.street,
        postal_code=args.postal,
        subject_alternative_names=sans,
        key_size=args.key_size,
        hash_algorithm=args.hash,
    ).validate()


def _destination(args: argparse.Namespace):
    return Path(args.dest) if args.dest else resolve_download_dir()


def cmd_config(args: argparse.Namespace) -> int:
    text = generate_config(_subject_from_args(args))
    if args.out:
        Path(args.out).write_text(text, encoding="utf-8")
        print(f"wrote {args.out}")
    else:
        print(frame_config(text), end="")
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    subject = _subject_from_args(args)
    artifact = build_artifact(subject)
    if args.print:
        print(artifact.key_pem, end="")
        print(artifact.csr_pem, end="")
        return 0
    path = package(artifact.config_text, subject.common_name, artifact.key_pem, artifact.csr_pem, _destination(args))
    if path is None:
        print("no download directory found; use --dest or --print", file=sys.stderr)
        return 1
    print(f"wrote {path}")
    return 0


def cmd_openssl(args: argparse.Namespace) -> int:
    subject = _subject_from_args(args)
    run = generate_with_openssl(subject, destination_dir=_destination(args), openssl_bin=args.openssl)
    print(run.output, end="")
    return 0 if run.artifact is not None else 1


def cmd_sanitize(args: argparse.Namespace) -> int:
    fn = sanitize_for_cert_field if args.cert_field else sanitize
    print(fn(args.text))
    return 0


def _add_subject_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--country", required=True, help="2-letter country code")
    p.add_argument("--state", required=True)
    p.add_argument("--locality", required=True)
    p.add_argument("--org", required=True)
    p.add_argument("--cn", required=True, help="common name")
    p.add_argument("--ou")
    p.add_argument("--email")
    p.add_argument("--street")
    p.add_argument("--postal")
    p.add_argument("--san", action="append", help="subject alternative name (repeatable)")
    p.add_argument("--no-cn-san", dest="no_cn_san", action="store_true", help="do not add the CN as first SAN")
    p.add_argument("--key-size", dest="key_size", choices=KEY_SIZES, default=DEFAULT_KEY_SIZE)
    p.add_argument("--hash", choices=HASH_ALGORITHMS, default=DEFAULT_HASH)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser("csrgen")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_cfg = sub.add_parser("config", help="print the OpenSSL request config")
    _add_subject_args(p_cfg)
    p_cfg.add_argument("--out")
    p_cfg.set_defaults(func=cmd_config)

    p_gen = sub.add_parser("generate", help="generate key and CSR in-process")
    _add_subject_args(p_gen)
    p_gen.add_argument("--dest", help="directory for the zip (default: downloads)")
    p_gen.add_argument("--print", action="store_true", help="print PEMs instead of writing a zip")
    p_gen.set_defaults(func=cmd_generate)

    p_ssl = sub.add_parser("openssl", help="generate key and CSR with the openssl binary")
    _add_subject_args(p_ssl)
    p_ssl.add_argument("--dest", help="directory for the zip (default: downloads)")
    p_ssl.add_argument("--openssl", help="openssl program (default: CSRGEN_OPENSSL_BIN or openssl)")
    p_ssl.set_defaults(func=cmd_openssl)

    p_san = sub.add_parser("sanitize", help="show sanitized text")
    p_san.add_argument("text")
    p_san.add_argument("--cert-field", dest="cert_field", action="store_true")
    p_san.set_defaults(func=cmd_sanitize)

    args = p.parse_args(argv)
    try:
        return args.func(args)
    except InvalidInput as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except CsrGenError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
