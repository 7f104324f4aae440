"""JSON envelopes shared by the controllers.

Mobile clients branch on ``success`` and show ``error`` verbatim.
"""
from __future__ import annotations

from flask import jsonify

from ..core.enums import RejectReason

REASON_STATUS = {
    RejectReason.NOT_FOUND: 404,
    RejectReason.RESOLUTION_FAILED: 404,
    RejectReason.SESSION_ENDED: 409,
    RejectReason.ALREADY_ENDED: 409,
    RejectReason.INVALID_CODE: 400,
    RejectReason.LOCATION_REQUIRED: 400,
    RejectReason.OUT_OF_RANGE: 403,
    RejectReason.NETWORK_MISMATCH: 403,
}


def success_response(status_code: int = 200, **payload):
    return jsonify({"success": True, **payload}), status_code


def error_response(message: str, status_code: int = 400, **extra):
    return jsonify({"success": False, "error": message, **extra}), status_code


def rejection_response(reason: RejectReason, message: str | None, **extra):
    return error_response(
        message or reason.value.replace("_", " ").capitalize(),
        REASON_STATUS.get(reason, 400),
        reason=reason.value,
        **extra,
    )
