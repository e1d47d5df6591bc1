"""
Consensus API Server

Thin FastAPI host around the consensus kernel. The kernel holds no state,
so the app has no startup or shutdown resources to manage.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import config, get_logger
from server.middleware.logging import log_requests
from server.routes import consensus

logger = get_logger(__name__)

app = FastAPI(title="consensus kernel API", description="Vote consensus and opinion grouping")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)


@app.middleware("http")
async def log_requests_middleware(request, call_next):
    return await log_requests(request, call_next)


app.include_router(consensus.router)


@app.get("/health")
async def health():
    return {"status": "healthy"}


def main():
    """Entry point for the consensus-server console script"""
    import uvicorn

    logger.info("starting consensus API", **config.summary())
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    main()
