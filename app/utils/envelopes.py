from typing import Any, Dict, Optional

from fastapi import status
from fastapi.responses import JSONResponse

from app.services.limit_service import DecisionReason, LimitDecision


def api_success(data: Any) -> Dict[str, Any]:
	return {"success": True, "data": data, "error": None}


def api_error(code: str, message: str, details: Optional[Any] = None) -> Dict[str, Any]:
	error: Dict[str, Any] = {"code": code, "message": message}
	if details is not None:
		error["details"] = details
	return {"success": False, "data": None, "error": error}


def api_limit_reached(decision: LimitDecision) -> Dict[str, Any]:
	# Not wrapped in the success/error envelope: clients read these keys at the top level
	return {
		"error": f"{decision.resource.label} limit reached",
		"message": decision.message,
		"limit": decision.limit,
		"current": decision.current,
		"upgradeRequired": True,
	}


def limit_denied_response(decision: LimitDecision) -> JSONResponse:
	"""Response for a create request the limit gate refused."""
	if decision.reason is DecisionReason.LOOKUP_ERROR:
		# The plan could not be checked; this is not an upgrade prompt
		return JSONResponse(
			status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
			content=api_error("LIMIT_CHECK_UNAVAILABLE", decision.message),
		)
	return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content=api_limit_reached(decision))
