import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from futuresafe.api.deps import get_engine
from futuresafe.api.llm import router as llm_router
from futuresafe.core.config import get_settings
from futuresafe.core.engine import RiskEngine
from futuresafe.core.logs import configure_logging
from futuresafe.models.schemas import ScanRequest, ScanReport

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title="FutureSafe Risk API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health")
def health():
    return {"status": "ok"}

@app.post("/scan", response_model=ScanReport)
async def scan(req: ScanRequest, engine: RiskEngine = Depends(get_engine)):
    return await engine.scan(req.url, req.page_text)

app.include_router(llm_router)

if __name__ == "__main__":
    uvicorn.run("futuresafe.main:app", host="0.0.0.0", port=8000, reload=True)
