import os
import time
import uuid
from dotenv import load_dotenv

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Path, Query, Request, Response
from fastapi.responses import PlainTextResponse

load_dotenv()

# Custom modules
import counters
import logging_utils
import metrics
from pubkeys import InvalidPubkeyError, parse_pubkey
from rpc_client import AccountNotFoundError, RpcClient, RpcError
from schema import AccountInfo, Info

app = FastAPI(title="Counter Demo API")
api = APIRouter(prefix="/api")

# Configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))

U32_MAX = 2 ** 32 - 1

# One client (and one HTTP connection pool) for the whole process, built at import
_rpc_client = RpcClient()

def get_rpc_client() -> RpcClient:
    return _rpc_client


# --- MIDDLEWARE: request id, metrics, structured log line ---
@app.middleware("http")
async def log_middleware(request: Request, call_next):
    request_id = str(uuid.uuid4())
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time

    metrics.inc("http_requests_total", {
        "path": request.url.path,
        "status": str(response.status_code)
    })
    logging_utils.log_request(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        latency=process_time
    )
    response.headers["X-Request-ID"] = request_id
    return response


@api.get("/", response_class=PlainTextResponse)
async def hello():
    return "Hello, World!"


@api.post("/echo", response_class=PlainTextResponse)
async def echo(request: Request):
    body = await request.body()
    return Response(content=body, media_type="text/plain")


@api.get("/users/{user_id}/{friend}", response_class=PlainTextResponse)
def greet_user(friend: str, user_id: int = Path(ge=0, le=U32_MAX)):
    counters.increment_global()
    return f"Welcome {friend}, user_id {user_id}!"


@api.get("/search", response_class=PlainTextResponse)
async def search(query: str = Query(...)):
    return f"Searching for: {query}"


@api.post("/submit")
async def submit(info: Info):
    return info


# /count and /add are plain `def` handlers: they run on the worker threadpool,
# and each worker thread owns one local counter.
@api.get("/count", response_class=PlainTextResponse)
def show_count():
    ctx = counters.current_context()
    return counters.render(counters.read_global(), counters.read_local(ctx))


@api.get("/add", response_class=PlainTextResponse)
def add_one():
    ctx = counters.current_context()
    global_count = counters.increment_global()
    local_count = counters.increment_local(ctx)
    return counters.render(global_count, local_count)


def _validated_pubkey(pubkey: str):
    try:
        return parse_pubkey(pubkey)
    except InvalidPubkeyError:
        raise HTTPException(status_code=400, detail="Invalid public key")


@api.get("/accountinfo/{pubkey}", response_model=AccountInfo)
def account_info(pubkey: str, client: RpcClient = Depends(get_rpc_client)):
    pubkey = _validated_pubkey(pubkey)
    try:
        return client.get_account(pubkey)
    except AccountNotFoundError:
        raise HTTPException(status_code=404, detail="Account not found")
    except RpcError:
        raise HTTPException(status_code=500, detail="Failed to get account info")


@api.get("/accountbalance/{pubkey}", response_class=PlainTextResponse)
def account_balance(pubkey: str, client: RpcClient = Depends(get_rpc_client)):
    pubkey = _validated_pubkey(pubkey)
    try:
        balance = client.get_balance(pubkey)
    except RpcError:
        raise HTTPException(status_code=500, detail="Failed to get balance")
    return f"Balance for {pubkey}: {balance}"


app.include_router(api)


@app.get("/manual", response_class=PlainTextResponse)
async def manual_hello():
    return "Hey there!"


@app.get("/health/live")
def health_live():
    return {"status": "alive"}


@app.get("/health/ready")
def health_ready(response: Response, client: RpcClient = Depends(get_rpc_client)):
    if client.get_health():
        return {"status": "ready"}
    response.status_code = 503
    return {"status": "not ready", "rpc": "down"}


@app.get("/metrics")
def get_metrics():
    return PlainTextResponse(metrics.generate_text())


if __name__ == "__main__":
    import uvicorn

    logging_utils.log_event("INFO", "startup", host=HOST, port=PORT)
    uvicorn.run(app, host=HOST, port=PORT)
