# courtbook/routes/admin.py
from flask import Blueprint, g, jsonify, request

from courtbook.routes import context
from courtbook.routes.context import require_operation
from courtbook.routes.requests import serialize
from courtbook.schemas.auth_schemas import CreateGuardInput
from courtbook.schemas.dto import CourtRequestDTO, PublicUserDTO
from courtbook.schemas.request_schemas import RequestFilters, UpdateRequestStatusInput
from courtbook.services.authorization import Operation

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')


@admin_bp.route('/requests', methods=['GET'])
@require_operation(Operation.LIST_ALL_REQUESTS)
def list_requests():
    """All requests, optional ?status=&dateFrom=&dateTo= filters."""
    filters = RequestFilters.model_validate(request.args.to_dict())
    requests = context.request_query_service().list_all(
        status=filters.status,
        date_from=filters.dateFrom,
        date_to=filters.dateTo,
    )
    return jsonify(serialize(requests))


@admin_bp.route('/requests/<request_id>/status', methods=['PATCH'])
@require_operation(Operation.TRANSITION_STATUS)
def update_request_status(request_id):
    data = UpdateRequestStatusInput.model_validate(request.get_json(silent=True) or {})
    court_request, notification = context.court_request_service().transition_status(
        request_id,
        data.status,
        data.adminObservation,
        operator_id=g.identity.id,
    )
    body = {"request": CourtRequestDTO.from_orm_model(court_request).model_dump(mode="json")}
    body.update(notification.to_dict())
    return jsonify(body)


@admin_bp.route('/guards', methods=['POST'])
@require_operation(Operation.CREATE_GUARD)
def create_guard():
    data = CreateGuardInput.model_validate(request.get_json(silent=True) or {})
    guard = context.guard_service().create_guard(data, operator_id=g.identity.id)
    return jsonify(PublicUserDTO.from_orm_model(guard).model_dump(mode="json")), 201
