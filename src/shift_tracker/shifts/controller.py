from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import now_utc
from ..common.http import current_employee_id, current_role, json_body, login_required, ok
from ..container import Container
from .serialization import admin_row_to_dict, shift_to_dict, statistics_to_dict


def register(app: Flask, container: Container) -> None:
    service = container.shift_service

    @app.route("/api/shifts/start", methods=["POST"], endpoint="start_shift")
    @login_required
    def start_shift():
        body = json_body()
        shift = service.start_shift(
            current_employee_id(),
            longitude=body.get("longitude"),
            latitude=body.get("latitude"),
        )
        return ok(shift_to_dict(shift), status=201)

    @app.route("/api/shifts/end", methods=["PUT"], endpoint="end_shift")
    @login_required
    def end_shift():
        body = json_body()
        completion = service.end_shift(
            current_employee_id(),
            longitude=body.get("longitude"),
            latitude=body.get("latitude"),
        )
        return ok(shift_to_dict(completion.shift), notification=completion.notification.status.value)

    @app.route("/api/shifts/break/start", methods=["PUT"], endpoint="start_break")
    @login_required
    def start_break():
        body = json_body()
        shift = service.start_break(
            current_employee_id(),
            body.get("breakType"),
            longitude=body.get("longitude"),
            latitude=body.get("latitude"),
        )
        return ok(shift_to_dict(shift))

    @app.route("/api/shifts/break/end", methods=["PUT"], endpoint="end_break")
    @login_required
    def end_break():
        body = json_body()
        shift = service.end_break(
            current_employee_id(),
            longitude=body.get("longitude"),
            latitude=body.get("latitude"),
        )
        return ok(shift_to_dict(shift))

    @app.route("/api/shifts/current", methods=["GET"], endpoint="current_shift")
    @login_required
    def current_shift():
        return ok(shift_to_dict(service.get_current_shift(current_employee_id())))

    @app.route("/api/shifts", methods=["GET"], endpoint="list_shifts")
    @login_required
    def list_shifts():
        shifts = service.list_shifts(current_employee_id())
        return ok([shift_to_dict(s) for s in shifts], count=len(shifts))

    @app.route("/api/shifts/all", methods=["GET"], endpoint="list_all_shifts")
    @login_required
    def list_all_shifts():
        rows = service.list_all_shifts(current_role=current_role())
        return ok([admin_row_to_dict(r) for r in rows], count=len(rows))

    @app.route("/api/shifts/stats", methods=["GET"], endpoint="shift_stats")
    @login_required
    def shift_stats():
        stats = service.get_statistics(current_employee_id(), now=now_utc())
        return ok(statistics_to_dict(stats))
