# ============================================================
# Vibe Engine FastAPI App
# ------------------------------------------------------------
# Thin transport over the flows:
#   - POST /<flowName> with {latestMessage, history?}
#   - 200 {"result": ...} on success, 502/422 on flow failure
#   - Model backend (Echo, Ollama, OpenAI) picked from settings
# ============================================================

import logging
from dataclasses import asdict
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from vibe_engine import __version__
from vibe_engine.settings import settings
from vibe_engine.flows import FlowInput, build_flows
from vibe_engine.generate.clients import build_model_client
from vibe_engine.prompts import default_prompt_store

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ------------------------------------------------------------
# 🔧 Ports + flows, built once per process
# ------------------------------------------------------------
model_client = build_model_client(settings)
prompt_store = default_prompt_store(settings.PROMPTS_PATH)
flows = build_flows(model_client, prompt_store)
logger.info("Loaded %d flows: %s", len(flows), ", ".join(sorted(flows)))

FAILURE_STATUS = {
    "generation": 502,
    "structured_output_invalid": 422,
}

# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title=f"{settings.app_name} API", version=__version__)

# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
# requests are validated as FlowInput directly ({latestMessage, history?})
class FlowResponse(BaseModel):
    result: Any

# ------------------------------------------------------------
# 🧭 Health checks + discovery
# ------------------------------------------------------------
@app.get("/healthz")
def healthz():
    return {
        "ok": True,
        "env": settings.ENV,
        "debug": settings.DEBUG,
        "app": settings.app_name,
    }

@app.get("/health")
def health():
    return {"status": "ok", "env": settings.ENV}

@app.get("/")
def hello():
    return {"message": f"{settings.app_name} running."}

@app.get("/flows")
def list_flows() -> Dict[str, List[str]]:
    return {"flows": sorted(flows)}

# ------------------------------------------------------------
# 💬 Flow endpoints
# ------------------------------------------------------------
@app.post("/{flow_name}", response_model=FlowResponse)
def run_flow(flow_name: str, req: FlowInput):
    flow = flows.get(flow_name)
    if flow is None:
        raise HTTPException(status_code=404, detail=f"Unknown flow: {flow_name}")

    outcome = flow.run(req)
    if not outcome.ok:
        status = FAILURE_STATUS.get(outcome.failure.kind, 500)
        raise HTTPException(status_code=status, detail=asdict(outcome.failure))
    return FlowResponse(result=jsonable_encoder(outcome.value))
