import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from blockseal import BlockSealError, Verifier, hash_block, summarize
from .config import ENV, HOST, PORT, SECRET_KEY, SCAN_WORKERS, STRICT_SCAN, LOG_LEVEL, LOG_JSON, LOG_FILE, is_debug, validate_config
from .logging_config import audit_log, configure_logging, set_request_id
from .models import CreateRequest, CreateResponse, InformationResponse, TamperRequest
from .store import get_store

logger = logging.getLogger(__name__)

app = FastAPI(title="BlockSeal Host")

VERIFIER = None

def get_verifier() -> Verifier:
    global VERIFIER
    if VERIFIER is None:
        VERIFIER = Verifier(SECRET_KEY)
    return VERIFIER

def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})

@app.on_event("startup")
def _startup():
    configure_logging(level="DEBUG" if is_debug() else LOG_LEVEL, json_format=LOG_JSON, log_file=LOG_FILE)
    failed = [name for name, ok in validate_config().items() if not ok]
    if failed:
        audit_log.security_event("CONFIG_INVALID", severity="critical", checks=failed)
        raise RuntimeError(f"Invalid configuration: {', '.join(failed)}")
    get_verifier()
    logger.info("BlockSeal host started (env=%s)", ENV)

@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    rid = set_request_id(request.headers.get("X-Request-ID"))
    response = await call_next(request)
    response.headers["X-Request-ID"] = rid
    return response

@app.get("/health")
def health():
    return {"status": "ok", "env": ENV}

@app.post("/api/create", response_model=CreateResponse)
def create_block(req: CreateRequest):
    store = get_store()
    try:
        block = get_verifier().create_block(req.data)
    except BlockSealError as e:
        return error_response(400, str(e))
    index = store.append(block)
    audit_log.block_created(index, hash_block(block))
    return {"success": True, "block": block.to_dict()}

@app.get("/api/information", response_model=InformationResponse)
def information():
    store = get_store()
    chain = store.snapshot()
    if not chain:
        return error_response(404, "No blocks found")

    try:
        state = get_verifier().information(chain, strict=STRICT_SCAN, max_workers=SCAN_WORKERS)
    except BlockSealError as e:
        audit_log.security_event("MALFORMED_CHAIN", severity="high", error=str(e))
        return error_response(400, str(e))

    summary = summarize(state)
    audit_log.chain_classified(summary.total, summary.recovered, summary.valid, summary.tampered)

    # Scan output is newest-first; present it in chain order
    state.reverse()

    info = [{"data": item.block.data, "status": item.status.value} for item in state]
    return {"success": True, "information": info, "summary": summary.to_dict()}

@app.post("/api/tamper")
def tamper(req: TamperRequest):
    store = get_store()
    try:
        store.tamper(req.index, req.newData)
    except IndexError:
        return error_response(400, "Invalid block index")
    audit_log.block_tampered(req.index)
    return {"success": True}

@app.get("/api/blocks/{index}/hash")
def block_hash(index: int):
    try:
        block = get_store().get(index)
    except IndexError:
        return error_response(404, "NOT_FOUND")
    try:
        digest = hash_block(block)
    except BlockSealError as e:
        return error_response(400, str(e))
    return {"success": True, "index": index, "hash": digest}

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=HOST,
        port=PORT,
        log_level=LOG_LEVEL.lower(),
    )
