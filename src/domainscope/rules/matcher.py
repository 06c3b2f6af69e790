"""Public suffix matching against a RuleSet."""
from typing import Optional

from domainscope.rules.ruleset import RuleKind, RuleSet


def match_public_suffix(rules: RuleSet, host: str) -> Optional[str]:
    """
    Find the public suffix of a host.

    The host is checked from the full name down to its last label and the
    first rule hit wins, so the most specific rule takes precedence:

        - a wildcard hit on ``ck`` makes the level above it (``foo.ck``)
          the suffix
        - a normal hit, or any hit on the last label, makes the current
          level the suffix
        - an exception hit on ``www.ck`` makes the remainder (``ck``) the
          suffix

    Examples (rules: uk, co.uk, *.ck, !www.ck):
        - www.bbc.co.uk -> co.uk
        - foo.ck -> foo.ck
        - www.ck -> ck
        - example.com -> None

    Args:
        rules: Parsed ruleset
        host: Hostname, already lower-cased and in ASCII form

    Returns:
        The suffix, "" for an empty host or one ending in ".", or None when
        no rule matches at any level
    """
    labels = host.split(".")
    if labels[-1] == "":
        return ""

    previous_domain: Optional[str] = None
    current_domain = host

    for offset in range(len(labels)):
        next_domain = ".".join(labels[offset + 1:]) if offset + 1 < len(labels) else None

        entry = rules.get(current_domain)
        if entry is not None:
            if entry.kind is RuleKind.WILDCARD and previous_domain is not None:
                return previous_domain
            if entry.kind is RuleKind.NORMAL or next_domain is None:
                return current_domain
            if entry.kind is RuleKind.EXCEPTION:
                return next_domain

        previous_domain = current_domain
        if next_domain is None:
            break
        current_domain = next_domain

    # No fallback to the last label
    return None
