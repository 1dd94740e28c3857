import logging
from contextlib import asynccontextmanager
from urllib.parse import quote

import httpx
from fastapi import Depends, FastAPI, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
import regions

# --- APP INITIALIZATION ---
upstream_client: httpx.AsyncClient | None = None
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    global upstream_client
    logger.info("FastAPI starting up...")

    if not config.RIOT_API_TOKEN:
        logger.error("FATAL: RIOT_API_TOKEN environment variable is not set")
        raise RuntimeError("RIOT_API_TOKEN environment variable is not set")

    upstream_client = httpx.AsyncClient(
        headers={"X-Riot-Token": config.RIOT_API_TOKEN},
        timeout=config.REQUEST_TIMEOUT_SECONDS,
    )

    yield  # Application runs here

    logger.info("FastAPI shutting down.")
    await upstream_client.aclose()
    upstream_client = None


app = FastAPI(lifespan=lifespan)


# --- DEPENDENCY ---
def get_upstream_client() -> httpx.AsyncClient:
    """Dependency to provide the authenticated Riot API client to routes."""
    if upstream_client is None:
        raise HTTPException(status_code=503, detail="Upstream client not available")
    return upstream_client


# --- MIDDLEWARE ---
origins = ["http://localhost", "http://localhost:3000", "http://localhost:5173"]
app.add_middleware(CORSMiddleware, allow_origins=origins, allow_credentials=True, allow_methods=["*"], allow_headers=["*"])


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status.HTTP_400_BAD_REQUEST)


def build_upstream_request(
    endpoint: str,
    base_url: str,
    game_name: str | None,
    tag_line: str | None,
    puuid: str | None,
    match_id: str | None,
    queue: str | None,
) -> tuple[str, dict] | JSONResponse:
    """Returns (url, query params) for the Riot API, or a 400 response if the call is invalid."""
    if endpoint == "account":
        if not game_name or not tag_line:
            return _bad_request("Game name and tag line are required")
        url = f"{base_url}/riot/account/v1/accounts/by-riot-id/{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
        return url, {}

    if endpoint == "matches":
        if not puuid:
            return _bad_request("PUUID is required")
        params = {"start": 0, "count": config.MATCH_PAGE_SIZE}
        if queue:
            params["queue"] = queue
        return f"{base_url}/lol/match/v5/matches/by-puuid/{quote(puuid, safe='')}/ids", params

    if endpoint == "match":
        if not match_id:
            return _bad_request("Match ID is required")
        return f"{base_url}/lol/match/v5/matches/{quote(match_id, safe='')}", {}

    return _bad_request("Invalid endpoint")


# --- ENDPOINTS ---
@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check(client: httpx.AsyncClient = Depends(get_upstream_client)):
    return {"status": "ok"}


@app.get(config.PROXY_PATH)
async def riot_proxy(
    endpoint: str | None = None,
    game_name: str | None = Query(None, alias="gameName"),
    tag_line: str | None = Query(None, alias="tagLine"),
    puuid: str | None = None,
    match_id: str | None = Query(None, alias="matchId"),
    region: str | None = None,
    queue: str | None = None,
    client: httpx.AsyncClient = Depends(get_upstream_client),
):
    """
    Forwards a lookup to the regional Riot API so the browser never sees the token.
    - 400 for a missing endpoint, a missing parameter or an unknown endpoint.
    - Upstream errors are returned with their original body and status.
    - 500 for anything unexpected.
    """
    if not endpoint:
        return _bad_request("Endpoint is required")

    base_url = regions.get_region_base_url(region)
    upstream = build_upstream_request(endpoint, base_url, game_name, tag_line, puuid, match_id, queue)
    if isinstance(upstream, JSONResponse):
        return upstream
    url, params = upstream

    try:
        response = await client.get(url, params=params)
        data = response.json()
    except Exception:
        logger.exception(f"Error in Riot API proxy for endpoint '{endpoint}'")
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    if not response.is_success:
        return JSONResponse(data, status_code=response.status_code)
    return data


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
