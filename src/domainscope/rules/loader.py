"""Ruleset sources and the process-wide ruleset."""
import logging
import threading
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import httpx

from domainscope.config import BUNDLED_RULESET_PATH, settings
from domainscope.rules.ruleset import RuleSet

logger = logging.getLogger(__name__)

_ruleset: Optional[RuleSet] = None
_ruleset_lock = threading.Lock()


class RulesetLoadError(Exception):
    """Ruleset text could not be read or fetched."""
    pass


def read_ruleset_text(path: str) -> str:
    """
    Read ruleset text from a UTF-8 file.
    
    Raises:
        RulesetLoadError: If the file cannot be read
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RulesetLoadError(f"Cannot read ruleset file {path}: {e}") from e


def fetch_ruleset_text(
    url: str,
    timeout: float = 10.0,
    transport: Optional[httpx.BaseTransport] = None
) -> str:
    """
    Download ruleset text over HTTP(S).
    
    Raises:
        RulesetLoadError: If the URL is not http(s) or the request fails
    """
    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise RulesetLoadError(f"Ruleset URL must be an http or https URL: {url}")
    
    try:
        with httpx.Client(timeout=timeout, transport=transport, follow_redirects=True) as client:
            response = client.get(url)
            response.raise_for_status()
            return response.text
    except httpx.HTTPError as e:
        raise RulesetLoadError(f"Cannot fetch ruleset from {url}: {e}") from e


def load_ruleset(path: Optional[str] = None, url: Optional[str] = None) -> RuleSet:
    """
    Build a RuleSet from the configured source.
    
    A URL takes precedence over a path; with neither, the bundled
    effective_tld_names.dat is used.
    """
    if url:
        logger.info(f"Fetching suffix ruleset from {url}")
        text = fetch_ruleset_text(url, timeout=settings.ruleset_fetch_timeout_seconds)
        source = url
    else:
        source = path or str(BUNDLED_RULESET_PATH)
        text = read_ruleset_text(source)
    
    rules = RuleSet.parse(text)
    logger.info(f"Loaded {len(rules)} suffix rules from {source}")
    if not rules:
        logger.warning(f"Suffix ruleset from {source} is empty, every lookup will be unmatched")
    return rules


def get_ruleset() -> RuleSet:
    """
    Return the process-wide ruleset, building it on first use.
    
    Concurrent first callers wait on one build. A failed build is not
    cached and raises RulesetLoadError again on the next call.
    """
    global _ruleset
    
    rules = _ruleset
    if rules is not None:
        return rules
    
    with _ruleset_lock:
        if _ruleset is None:
            try:
                _ruleset = load_ruleset(path=settings.ruleset_path, url=settings.ruleset_url)
            except RulesetLoadError as e:
                logger.error(f"Suffix ruleset unavailable: {e}")
                raise
        return _ruleset


def reset_ruleset() -> None:
    """Drop the cached ruleset so the next get_ruleset() rebuilds it."""
    global _ruleset
    with _ruleset_lock:
        _ruleset = None
