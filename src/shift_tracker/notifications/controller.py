from __future__ import annotations

from flask import Flask

from ..common.http import current_employee_id, current_role, fail, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.shift_service

    @app.route("/api/email/shift-complete", methods=["POST"], endpoint="email_shift_complete")
    @login_required
    def email_shift_complete():
        body = json_body()
        outcome = service.resend_completion_notice(
            body.get("shiftId"),
            requester_id=current_employee_id(),
            current_role=current_role(),
        )
        if not outcome.delivered:
            return fail("Failed to send email notification", 500)
        return ok(message="Email notification sent successfully")
