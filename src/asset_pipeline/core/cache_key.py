"""Cache key generation for concatenated artifacts.

A key is built from the option tokens followed by the requested asset
names, for example ``min.20240101.jquery+my-plugin.js``. The key is used
verbatim as the artifact's file name.
"""

from collections.abc import Sequence

from .paths import strip_extensions

OPTION_DELIMITER = "."
ASSET_DELIMITER = "+"


def compute_key(options: Sequence[str], asset_names: Sequence[str]) -> str:
    """Compute the cache key for a request.

    Options are joined by ``.`` and followed by a trailing ``.``. Asset
    names lose their extension, except the last one, and are joined by
    ``+``. Delimiters inside names are not escaped, so a name that
    contains ``+`` can collide with a two-name request.

    Args:
        options: Option tokens in request order (may be empty)
        asset_names: Asset names in request order

    Returns:
        The cache key

    Raises:
        ValueError: If no asset names are given
    """
    if not asset_names:
        raise ValueError("Cannot compute a cache key without asset names")

    prefix = OPTION_DELIMITER.join(options) + OPTION_DELIMITER if options else ""
    return prefix + ASSET_DELIMITER.join(strip_extensions(asset_names, keep_last=True))
