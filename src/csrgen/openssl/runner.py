"""Key/CSR generation by driving the external ``openssl`` binary.

Each run gets its own temporary working directory, so concurrent runs never
share the config or output files. The sequence is best effort: every failure
is appended to the run output and logged, and cleanup always runs once
anything may exist on disk. A common name that cannot be a plain file name
raises InvalidInput up front.
"""
from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..config import AUTO_SAVE, OPENSSL_BIN, WORK_DIR
from ..errors import CsrGenError
from ..export.bundler import package, recreate_command, resolve_download_dir
from ..subject.model import GeneratedArtifact, SubjectDescriptor, check_file_stem, file_stem
from ..utils.logging import get_logger
from .config import generate_config
from .executor import execute

log = get_logger("openssl")

CONFIG_FILENAME = "request.cnf"
_UNSET = object()


@dataclass
class OpenSSLRun:
    command: str
    lines: List[str] = field(default_factory=list)
    key_pem: Optional[str] = None
    csr_pem: Optional[str] = None
    artifact: Optional[GeneratedArtifact] = None
    archive_path: Optional[Path] = None

    @property
    def output(self) -> str:
        return "".join(self.lines)

    @property
    def failed(self) -> bool:
        # same heuristic the operator output panel used
        return "error" in self.output.lower()

    def note(self, text: str) -> None:
        self.lines.append(text if text.endswith("\n") else text + "\n")

    def fail(self, text: str) -> None:
        log.error(text)
        self.note(text)


def _inside(directory: Path, path: Path) -> bool:
    return path.resolve().parent == directory.resolve()


def _remove(run: OpenSSLRun, path: Path, label: str) -> None:
    try:
        path.unlink()
    except OSError as e:
        run.fail(f"Failed to delete {label}: {e}")


def _read(run: OpenSSLRun, path: Path, label: str) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        run.fail(f"Error reading {label} file: {e}")
        return None


def run_openssl_req(
    config_text: str,
    common_name: str,
    openssl_bin: Optional[str] = None,
    work_dir: Optional[str] = None,
) -> OpenSSLRun:
    # raises before anything touches the disk
    stem = check_file_stem(file_stem(common_name))
    program = openssl_bin or os.getenv("CSRGEN_OPENSSL_BIN", OPENSSL_BIN)
    command = f"{program} req -new -out {stem}.csr -config {CONFIG_FILENAME}"
    run = OpenSSLRun(command=command)

    try:
        workdir = Path(tempfile.mkdtemp(prefix="csrgen-", dir=work_dir or WORK_DIR or None))
    except OSError as e:
        run.fail(f"Failed to create working directory: {e}")
        return run

    cnf_path = workdir / CONFIG_FILENAME
    key_path = workdir / f"{stem}.key"
    csr_path = workdir / f"{stem}.csr"
    if not all(_inside(workdir, p) for p in (cnf_path, key_path, csr_path)):
        run.fail(f"Refusing to use output files outside {workdir.name}")
        shutil.rmtree(workdir, ignore_errors=True)
        return run
    run.note(f"Creating temp file: {cnf_path.name}")

    try:
        cnf_path.write_text(config_text, encoding="utf-8")
    except OSError as e:
        run.fail(f"Failed to write into temp file: {e}")
    else:
        log.info("Executing: %s", command)
        try:
            stdout, stderr = execute(command, cwd=str(workdir))
        except CsrGenError as e:
            run.fail(f"Failed execute openssl: {e}")
        else:
            for stream in (stdout, stderr):
                if stream:
                    run.note(stream)
            run.key_pem = _read(run, key_path, "key")
            run.csr_pem = _read(run, csr_path, "CSR")

    for path, label in ((key_path, "key file"), (csr_path, "csr file"), (cnf_path, "temp file")):
        if path.exists():
            _remove(run, path, label)
    try:
        shutil.rmtree(workdir)
    except OSError as e:
        run.fail(f"Failed to delete working directory: {e}")

    if run.key_pem and run.csr_pem:
        run.artifact = GeneratedArtifact(config_text=config_text, key_pem=run.key_pem, csr_pem=run.csr_pem)
    return run


def generate_with_openssl(
    subject: SubjectDescriptor,
    destination_dir=_UNSET,
    auto_save: Optional[bool] = None,
    openssl_bin: Optional[str] = None,
) -> OpenSSLRun:
    """Synthesize the config, run openssl on it and auto-save the archive.

    Config validation errors raise before anything touches the disk; every
    later failure is recorded in the returned run's output.
    """
    config_text = generate_config(subject)
    run = run_openssl_req(config_text, subject.common_name, openssl_bin=openssl_bin)
    if run.artifact is None:
        return run

    if not (AUTO_SAVE if auto_save is None else auto_save):
        return run
    dest = resolve_download_dir() if destination_dir is _UNSET else destination_dir
    try:
        run.archive_path = package(config_text, subject.common_name, run.key_pem, run.csr_pem, dest)
    except CsrGenError as e:
        run.fail(f"Failed to auto save generated zip: {e}")
        return run
    if run.archive_path is not None:
        run.note("Auto saved zip to downloads folder")
        run.note(f"Use this command to recreate the csr: {recreate_command(subject.file_stem)}")
    return run


__all__ = ["OpenSSLRun", "run_openssl_req", "generate_with_openssl"]
