"""Consensus API - vote analysis over HTTP

The request body is the raw vote payload. Malformed payloads are not client
errors: like the kernel itself, the endpoint answers with an empty result.
"""

import json
from typing import Literal

from fastapi import APIRouter, HTTPException, Request, Response, status
from starlette.concurrency import run_in_threadpool

from config import config, get_logger
from consensus import analyze_votes, parse_votes

logger = get_logger(__name__).bind(component="consensus_api")

router = APIRouter(prefix="/api/v1/consensus", tags=["consensus"])


def _analyze_payload(body: bytes, case: str) -> str:
    result = analyze_votes(parse_votes(body))
    if case == "camel":
        return json.dumps(result.to_client_dict(), separators=(",", ":"))
    return result.model_dump_json()


def _payload_too_large(size: int) -> HTTPException:
    logger.warning("vote payload too large", size=size, limit=config.MAX_PAYLOAD_BYTES)
    return HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail=f"Vote payload exceeds {config.MAX_PAYLOAD_BYTES} bytes",
    )


async def _read_limited_body(request: Request) -> bytes:
    """Read the request body, stopping as soon as it passes MAX_PAYLOAD_BYTES."""
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > config.MAX_PAYLOAD_BYTES:
        raise _payload_too_large(int(declared))

    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > config.MAX_PAYLOAD_BYTES:
            raise _payload_too_large(size)
        chunks.append(chunk)

    return b"".join(chunks)


@router.post("/analyze")
async def analyze(
    request: Request,
    case: Literal["snake", "camel"] = "snake",
):
    """Analyze a JSON array of {user_id, statement_id, value} votes.

    Returns per-statement tallies (agree/disagree/pass, agreement ratio,
    divisiveness) and the two opinion groups.
    """
    body = await _read_limited_body(request)

    # CPU-bound; keep it off the event loop
    content = await run_in_threadpool(_analyze_payload, body, case)
    return Response(content=content, media_type="application/json")
