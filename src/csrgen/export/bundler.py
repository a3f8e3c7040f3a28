import io
import os
import zipfile
from pathlib import Path
from typing import Optional

from ..config import DOWNLOAD_DIR
from ..errors import InvalidInput, IoFailure
from ..subject.model import check_file_stem, file_stem
from ..utils.logging import get_logger

log = get_logger("export")

RECREATE_COMMAND_FILE = "recreate_command.txt"
# fixed entry timestamp so identical inputs give identical archives
_ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


def recreate_command(name: str) -> str:
    return f"openssl req -new -out {name}.csr -config {name}.cnf"


def archive_filename(name: str) -> str:
    return f"{name}_certificate_files.zip"


def resolve_download_dir() -> Optional[Path]:
    """Destination for archives: env override, else ~/Downloads if it exists."""
    override = os.getenv("CSRGEN_DOWNLOAD_DIR", DOWNLOAD_DIR)
    if override:
        return Path(override)
    downloads = Path.home() / "Downloads"
    if downloads.is_dir():
        return downloads
    return None


def _entry(name: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name, date_time=_ZIP_EPOCH)
    info.compress_type = zipfile.ZIP_STORED
    info.external_attr = 0o644 << 16
    return info


def build_archive(config_text: str, name: str, key_pem: str, csr_pem: str) -> bytes:
    """Stored (uncompressed) zip with the config, key, CSR and recreate hint."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_STORED) as zf:
        zf.writestr(_entry(f"{name}.cnf"), config_text.encode())
        zf.writestr(_entry(f"{name}.key"), key_pem.encode())
        zf.writestr(_entry(f"{name}.csr"), csr_pem.encode())
        zf.writestr(_entry(RECREATE_COMMAND_FILE), recreate_command(name).encode())
    return buf.getvalue()


def package(
    config_text: str,
    subject_name: str,
    key_pem: str,
    csr_pem: str,
    destination_dir: Optional[Path],
) -> Optional[Path]:
    """Write ``<name>_certificate_files.zip`` into ``destination_dir``.

    - subject_name: common name; a leading ``*.`` is rewritten to ``wildcard.``
    - destination_dir: None means no destination could be resolved; nothing
      is written and None is returned.
    Returns the written path. Raises InvalidInput when the name is not a plain
    file name and IoFailure when the write fails.
    """
    name = check_file_stem(file_stem(subject_name), allow_whitespace=True)
    data = build_archive(config_text, name, key_pem, csr_pem)
    if destination_dir is None:
        log.info("no download directory available; archive for %s not saved", name)
        return None
    target = Path(destination_dir) / archive_filename(name)
    if target.resolve().parent != Path(destination_dir).resolve():
        raise InvalidInput(f"Archive name escapes {destination_dir}")
    try:
        target.write_bytes(data)
    except OSError as e:
        raise IoFailure(f"Failed to write {target}: {e}") from e
    log.info("saved %s (%d bytes)", target, len(data))
    return target


__all__ = [
    "build_archive",
    "package",
    "resolve_download_dir",
    "recreate_command",
    "archive_filename",
    "RECREATE_COMMAND_FILE",
]
