"""Public suffix and base domain (eTLD+1) lookups."""
from urllib.parse import urlparse
from typing import Optional
import logging

from domainscope.rules.base_domain import compute_base_domain
from domainscope.rules.loader import get_ruleset
from domainscope.rules.matcher import match_public_suffix
from domainscope.rules.ruleset import RuleSet

logger = logging.getLogger(__name__)


def public_suffix(host: str, rules: Optional[RuleSet] = None) -> Optional[str]:
    """
    Public suffix of a host.

    Examples:
        - www.bbc.co.uk -> co.uk
        - foo.ck -> foo.ck

    Args:
        host: Hostname, lower-case ASCII
        rules: Ruleset to match against (process-wide ruleset if omitted)

    Returns:
        The suffix, "" for an empty host, None if no rule matches
    """
    if rules is None:
        rules = get_ruleset()

    suffix = match_public_suffix(rules, host)
    if suffix is None:
        logger.debug(f"No public suffix rule matches {host}")
    return suffix


def base_domain(host: str, additional_parts: int, rules: Optional[RuleSet] = None) -> Optional[str]:
    """
    Public suffix of a host plus ``additional_parts`` more labels.

    Examples:
        - (www.bbc.co.uk, 0) -> co.uk
        - (www.bbc.co.uk, 1) -> bbc.co.uk
        - (www.bbc.co.uk, 2) -> www.bbc.co.uk

    Raises:
        ValueError: If additional_parts is negative
    """
    return compute_base_domain(host, public_suffix(host, rules), additional_parts)


def registrable_domain(host: str, rules: Optional[RuleSet] = None) -> Optional[str]:
    """Registrable domain (eTLD+1) of a host, e.g. www.bbc.co.uk -> bbc.co.uk."""
    return base_domain(host, 1, rules)


def extract_hostname(url: str) -> Optional[str]:
    """Hostname of a URL, lower-cased by urllib; None if the URL has none."""
    try:
        return urlparse(url).hostname
    except ValueError as e:
        logger.debug(f"Cannot parse URL {url}: {e}")
        return None


def url_public_suffix(url: str, rules: Optional[RuleSet] = None) -> Optional[str]:
    """Public suffix of a URL's host."""
    hostname = extract_hostname(url)
    if hostname is None:
        return None
    return public_suffix(hostname, rules)


def url_base_domain(url: str, rules: Optional[RuleSet] = None) -> Optional[str]:
    """
    Base domain of a URL's host.

    Examples:
        - https://a.example.co.uk/path -> example.co.uk
        - https://www.bbc.co.uk/news -> bbc.co.uk
    """
    hostname = extract_hostname(url)
    if hostname is None:
        return None
    return registrable_domain(hostname, rules)
