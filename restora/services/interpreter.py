import json
from typing import Any, Dict

from restora.models import Outcome
from restora.utils.exceptions import EmptyResultAnomaly, RemoteApplicationError, TransportError

FALLBACK_FAILURE_MESSAGE = "Restoration failed. Please try again."


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _describe_error(error: Any) -> str:
    """Turn a nested error (string or structured) into display text."""
    if isinstance(error, str):
        return error
    if isinstance(error, dict):
        for key in ("message", "detail", "error", "msg"):
            value = error.get(key)
            if isinstance(value, str) and value:
                return value
    try:
        return json.dumps(error, sort_keys=True, default=str)
    except (TypeError, ValueError):
        return str(error)


def _has_error(error: Any) -> bool:
    return error is not None and error != "" and error != {} and error is not False


def _first_artifact_url(payload: Dict[str, Any]) -> str:
    module_outputs = _as_dict(payload.get("module_outputs"))
    artifact_files = module_outputs.get("artifact_files")
    if not isinstance(artifact_files, list) or not artifact_files:
        return ""

    first = _as_dict(artifact_files[0])
    url = first.get("file_url")
    return url if isinstance(url, str) else ""


def interpret_response(payload: Any) -> Outcome:
    """
    Interpret the raw agent response

    Order:
    1. envelope failure -> TransportError (provided text or generic fallback)
    2. nested result error -> RemoteApplicationError (prefixed)
    3. extract analysis/status/first artifact url
    4. no artifact url -> EmptyResultAnomaly
    5. otherwise the normalized Outcome

    Raises:
        TransportError, RemoteApplicationError, EmptyResultAnomaly
    """
    payload = _as_dict(payload)

    if not payload.get("success"):
        error = payload.get("error")
        message = error if isinstance(error, str) and error else FALLBACK_FAILURE_MESSAGE
        raise TransportError(message)

    result = _as_dict(_as_dict(payload.get("response")).get("result"))

    nested_error = result.get("error")
    if _has_error(nested_error):
        raise RemoteApplicationError(_describe_error(nested_error))

    analysis = result.get("restoration_analysis")
    status = result.get("status")
    restored_url = _first_artifact_url(payload)

    if not restored_url:
        raise EmptyResultAnomaly()

    return Outcome(
        restored_url=restored_url,
        analysis_text=analysis if isinstance(analysis, str) else "",
        status=status if isinstance(status, str) and status else "completed",
    )
