"""FastAPI application and endpoints."""
import logging
from fastapi import FastAPI, Depends, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from domainscope.config import settings
from domainscope.api.schemas import (
    BaseDomainResponse,
    ErrorResponse,
    HealthResponse,
    LookupRequest,
    LookupResponse,
    PublicSuffixResponse,
    MAX_ADDITIONAL_PARTS,
)
from domainscope.rules.base_domain import compute_base_domain
from domainscope.rules.loader import RulesetLoadError, get_ruleset
from domainscope.rules.ruleset import RuleSet
from domainscope.utils.domain import public_suffix

from domainscope.utils.logging import setup_logging

# Configure logging
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

RULESET_ERRORS = {503: {"model": ErrorResponse, "description": "Suffix ruleset unavailable"}}

# Create FastAPI app
app = FastAPI(
    title="Public Suffix Lookup Service",
    description="Public suffix and registrable domain (eTLD+1) lookups",
    version="1.0.0"
)


def get_rules() -> RuleSet:
    """Ruleset dependency; runs in the threadpool since a first load may fetch over HTTP."""
    return get_ruleset()


def lookup_base_domain(rules: RuleSet, host: str, additional_parts: int) -> BaseDomainResponse:
    suffix = public_suffix(host, rules)
    return BaseDomainResponse(
        host=host,
        additional_parts=additional_parts,
        public_suffix=suffix,
        base_domain=compute_base_domain(host, suffix, additional_parts),
        matched=suffix is not None
    )


@app.on_event("startup")
async def startup_event():
    """Load the ruleset eagerly so the first request does not pay for it."""
    logger.info("Starting public suffix lookup service")
    try:
        await run_in_threadpool(get_ruleset)
    except RulesetLoadError:
        logger.warning("Starting without a suffix ruleset, lookups will return 503")


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """
    Health check endpoint with ruleset state.
    
    Plain def so a ruleset fetch runs in the threadpool, not on the event loop.
    """
    try:
        rules = get_ruleset()
    except RulesetLoadError as e:
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "error": str(e)}
        )
    
    return HealthResponse(status="healthy", rules=len(rules))


@app.get("/v1/public-suffix", response_model=PublicSuffixResponse, responses=RULESET_ERRORS)
async def get_public_suffix(host: str = Query(..., description="Hostname"), rules: RuleSet = Depends(get_rules)):
    """
    Look up the public suffix of a host.
    
    Returns:
        public_suffix is null when no rule matches the host
    """
    suffix = public_suffix(host, rules)
    return PublicSuffixResponse(host=host, public_suffix=suffix, matched=suffix is not None)


@app.get("/v1/base-domain", response_model=BaseDomainResponse, responses=RULESET_ERRORS)
async def get_base_domain(
    host: str = Query(..., description="Hostname"),
    additional_parts: int = Query(1, ge=0, le=MAX_ADDITIONAL_PARTS, description="Labels to add to the public suffix"),
    rules: RuleSet = Depends(get_rules)
):
    """
    Look up the base domain of a host.
    
    Returns:
        base_domain is null when no rule matches the host
    """
    return lookup_base_domain(rules, host, additional_parts)


@app.post("/v1/lookups", response_model=LookupResponse, responses=RULESET_ERRORS)
async def batch_lookup(request: LookupRequest, rules: RuleSet = Depends(get_rules)):
    """Look up base domains for several hosts, results in request order."""
    results = [lookup_base_domain(rules, host, request.additional_parts) for host in request.hosts]
    return LookupResponse(results=results)


@app.exception_handler(RulesetLoadError)
async def ruleset_error_handler(request, exc):
    """Lookups cannot be answered without a ruleset."""
    logger.warning(f"Lookup rejected, suffix ruleset unavailable: {exc}")
    return JSONResponse(
        status_code=503,
        content=ErrorResponse(error="Suffix ruleset unavailable", detail=str(exc)).model_dump()
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Internal server error", detail=str(exc)).model_dump()
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "domainscope.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False
    )
