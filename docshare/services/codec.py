"""
docshare/services/codec.py
Payload <-> URL token.

token = percent-encode(base64(utf-8(compact JSON)))

Tokens are unsigned and unversioned: they carry a payload from the sharing
app to the viewer within one release, nothing more.
"""
import base64
import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote, unquote

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> None:
    # NaN / Infinity are not JSON on the web side either
    raise ValueError(f"Unsupported JSON constant {name}")


def encode(payload: Dict[str, Any]) -> str:
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    b64 = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return quote(b64, safe="")


def decode(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Returns the payload dict, or None for anything that is not a well-formed
    token (empty, bad escapes, bad base64, non UTF-8, non-JSON, non-object).
    Never raises.
    """
    if not token or not isinstance(token, str):
        return None
    try:
        b64 = unquote(token, errors="strict")
        raw = base64.b64decode(b64.encode("ascii"), validate=True)
        data = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except (ValueError, TypeError, RecursionError) as e:
        logger.debug("Rejected share token (%d chars): %s", len(token), e)
        return None
    if not isinstance(data, dict):
        logger.debug("Rejected share token: payload is %s, not an object", type(data).__name__)
        return None
    return data
