"""Base domain (public suffix + N labels) calculation."""
from typing import Optional


def compute_base_domain(host: str, suffix: Optional[str], additional_parts: int) -> Optional[str]:
    """
    Prepend up to ``additional_parts`` labels of ``host`` to its suffix.

    Examples:
        - (www.bbc.co.uk, co.uk, 1) -> bbc.co.uk
        - (www.bbc.co.uk, co.uk, 5) -> www.bbc.co.uk
        - (co.uk, co.uk, 1) -> co.uk

    The suffix is taken out of the host by removing its first occurrence,
    which is not anchored to the end of the host.

    Raises:
        ValueError: If additional_parts is negative. This is the one input
            that does not produce an optional result; it is checked before
            the suffix, so it raises even when the suffix is None.
    """
    if additional_parts < 0:
        raise ValueError(f"additional_parts must be >= 0, got {additional_parts}")

    if suffix is None:
        return None
    if additional_parts == 0:
        return suffix

    suffixless_host = host.replace(suffix, "", 1)
    suffixless_tokens = [token for token in suffixless_host.split(".") if token]

    start = max(0, len(suffixless_tokens) - additional_parts)
    parts_string = ".".join(suffixless_tokens[start:])

    if not parts_string:
        return suffix
    return f"{parts_string}.{suffix}"
