"""Shareable pantry links.

Two link schemes exist and are not interoperable:

- Scheme A (current, `?pantry=<token>`): the selected item ids, deduplicated
  and sorted, as a JSON array compressed with lz-string into its URI-safe
  alphabet (the same tokens the web widget produces).
- Scheme B (legacy, `?share=<payload>`): the whole {item: bool} map as
  percent-encoded JSON. Still accepted so that old links keep working.

decode_token_or_url() is the single entry point for reading either scheme.
Decoding never raises; anything unreadable is an empty selection.
"""

import json
from typing import Iterable, Mapping, Optional, Union
from urllib.parse import parse_qs, quote, unquote, urlsplit

from lzstring import LZString

from src.utils.config import config
from src.utils.logger import logger
from src.utils.safe import safe_execute_sync


Selection = Union[Iterable[str], Mapping[str, bool]]


def selected_ids(selection: Selection) -> list[str]:
    """Deduplicated, sorted ids. A boolean map contributes its true keys."""
    if isinstance(selection, Mapping):
        ids = [str(item) for item, available in selection.items() if available]
    else:
        ids = [str(item) for item in selection]
    return sorted(set(ids))


def _share_base(origin: Optional[str]) -> str:
    return (origin or config.BASE_URL or "").rstrip("/")


# ============================================================================
# Scheme A: compressed id list
# ============================================================================


def encode_selection(selection: Selection) -> str:
    """Compact URL-safe token for a pantry selection."""
    payload = json.dumps(selected_ids(selection), separators=(",", ":"), ensure_ascii=False)
    return LZString().compressToEncodedURIComponent(payload)


def _decode_selection(token: str) -> list[str]:
    raw = LZString().decompressFromEncodedURIComponent(token)
    if not raw:
        raise ValueError("token does not decompress")
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"expected a list of ids, got {type(data).__name__}")
    return [item for item in data if isinstance(item, str)]


def decode_selection(token: Optional[str]) -> list[str]:
    """Ids carried by a scheme A token, [] if the token is unreadable."""
    if not token or not token.strip():
        return []
    return safe_execute_sync(
        lambda: _decode_selection(token.strip()),
        "Decode share token",
        log_level="debug",
        default_return=[],
    )


def build_share_url(selection: Selection, origin: Optional[str] = None) -> str:
    """Link to the app that imports `selection` when opened.

    Args:
        selection: Ids or a {id: bool} map.
        origin: Origin of the running app. Falls back to config.BASE_URL.
    """
    token = encode_selection(selection)
    # The token alphabet is URI-safe, so it goes into the link as is
    return f"{_share_base(origin)}/?{config.SHARE_PARAM}={token}"


# ============================================================================
# Scheme B: raw boolean map (legacy)
# ============================================================================


def encode_pantry_map(pantry: Mapping[str, bool]) -> str:
    """Percent-encoded JSON of the full pantry map."""
    return quote(json.dumps(dict(pantry or {}), ensure_ascii=False), safe="")


def _decode_pantry_map(payload: str) -> dict[str, bool]:
    text = payload.strip()
    if not text.startswith("{"):
        text = unquote(text)
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    return {str(item): bool(available) for item, available in data.items()}


def decode_pantry_map(payload: Optional[str]) -> dict[str, bool]:
    """Pantry map carried by a scheme B payload, {} if unreadable."""
    if not payload or not payload.strip():
        return {}
    return safe_execute_sync(
        lambda: _decode_pantry_map(payload),
        "Decode legacy share payload",
        log_level="debug",
        default_return={},
    )


def build_legacy_share_url(pantry: Mapping[str, bool], origin: Optional[str] = None) -> str:
    return f"{_share_base(origin)}/?{config.LEGACY_SHARE_PARAM}={encode_pantry_map(pantry)}"


# ============================================================================
# Unified entry point
# ============================================================================


def _query_params(text: str) -> Optional[dict[str, list[str]]]:
    """Query parameters when `text` looks like a URL, else None."""
    parts = urlsplit(text)
    if (parts.scheme and parts.netloc) or text.startswith(("/?", "?")):
        return parse_qs(parts.query)
    return None


def decode_share_map(value: Optional[str]) -> dict[str, bool]:
    """Pantry map from a token, a legacy payload, or a URL carrying either.

    Scheme A yields {id: True} for each id. Scheme B keeps the map as sent,
    false entries included. Tries scheme A first, then scheme B.
    """
    if not value or not value.strip():
        return {}
    text = value.strip()

    params = _query_params(text)
    if params is not None:
        if params.get(config.SHARE_PARAM):
            # parse_qs turns a literal "+" of the token alphabet into a space
            token = params[config.SHARE_PARAM][0].replace(" ", "+")
            return {item: True for item in decode_selection(token)}
        if params.get(config.LEGACY_SHARE_PARAM):
            # parse_qs already unquoted the value once
            return decode_pantry_map(params[config.LEGACY_SHARE_PARAM][0])
        logger.debug("Share URL carries neither share parameter")
        return {}

    ids = decode_selection(text)
    if ids:
        return {item: True for item in ids}
    return decode_pantry_map(text)


def decode_token_or_url(value: Optional[str]) -> list[str]:
    """Sorted selected ids from any share input. Never raises."""
    return selected_ids(decode_share_map(value))
