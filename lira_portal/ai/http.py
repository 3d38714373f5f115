"""
Outbound HTTP shared by the AI clients.
"""
from typing import Any, Dict, Optional

import requests


def post(
    session: Optional[requests.Session],
    url: str,
    payload: Dict[str, Any],
    headers: Dict[str, str],
    timeout: float,
) -> requests.Response:
    """POST JSON through an injected session, or as a one-shot request.

    requests.post opens a session for the single call and closes it, so
    clients built per request hold no pooled connections afterwards.
    """
    if session is not None:
        return session.post(url, json=payload, headers=headers, timeout=timeout)
    return requests.post(url, json=payload, headers=headers, timeout=timeout)
