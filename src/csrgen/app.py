import time

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import JSONResponse, Response

from .crypto.csr import build_artifact
from .errors import CsrGenError, InvalidInput
from .export.bundler import archive_filename, build_archive
from .obs.prom import BUNDLES, observe_generation, prometheus_latest
from .openssl.config import generate_config
from .openssl.runner import run_openssl_req
from .subject.model import check_file_stem, file_stem
from .subject.models import BundleRequest, SubjectRequest
from .subject.sanitize import sanitize
from .utils.logging import get_logger

load_dotenv()

app = FastAPI(title="csrgen certificate request generator")
log = get_logger()


def _error(e: CsrGenError) -> JSONResponse:
    status = 400 if isinstance(e, InvalidInput) else 500
    if status == 500:
        log.error("generation failed: %s", e)
    return JSONResponse({"error": str(e)}, status_code=status)


@app.get("/__health")
async def health():
    return {"status": "ok"}


@app.post("/config")
async def config(body: SubjectRequest):
    start = time.time()
    try:
        text = generate_config(body.to_subject().validate())
    except CsrGenError as e:
        observe_generation(path="config", result="error", seconds=time.time() - start)
        return _error(e)
    observe_generation(path="config", result="ok", seconds=time.time() - start)
    return JSONResponse({"config": text})


@app.post("/csr")
def csr(body: SubjectRequest):
    # sync handler: key generation is CPU bound and runs in the threadpool
    start = time.time()
    try:
        artifact = build_artifact(body.to_subject().validate())
    except CsrGenError as e:
        observe_generation(path="native", result="error", seconds=time.time() - start)
        return _error(e)
    observe_generation(path="native", result="ok", seconds=time.time() - start)
    return JSONResponse({
        "config": artifact.config_text,
        "key_pem": artifact.key_pem,
        "csr_pem": artifact.csr_pem,
    })


@app.post("/openssl")
def openssl(body: SubjectRequest):
    start = time.time()
    subject = body.to_subject()
    try:
        config_text = generate_config(subject.validate())
    except CsrGenError as e:
        observe_generation(path="openssl", result="error", seconds=time.time() - start)
        return _error(e)
    run = run_openssl_req(config_text, subject.common_name)
    result = "ok" if run.artifact is not None else "error"
    observe_generation(path="openssl", result=result, seconds=time.time() - start)
    return JSONResponse({
        "command": run.command,
        "output": run.output,
        "failed": run.failed,
        "config": config_text,
        "key_pem": run.key_pem,
        "csr_pem": run.csr_pem,
    })


@app.post("/bundle")
async def bundle(body: BundleRequest):
    try:
        name = check_file_stem(file_stem(body.name), allow_whitespace=True)
    except CsrGenError as e:
        BUNDLES.labels(result="error").inc()
        return _error(e)
    data = build_archive(body.config, name, body.key_pem, body.csr_pem)
    BUNDLES.labels(result="ok").inc()
    download_name = archive_filename(sanitize(name) or "request")
    return Response(
        content=data,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{download_name}"'},
    )


@app.get("/metrics", include_in_schema=False)
async def metrics():
    payload, content_type = prometheus_latest()
    return Response(content=payload, media_type=content_type)
