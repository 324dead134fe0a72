# courtbook/routes/requests.py
from flask import Blueprint, g, jsonify, request

from courtbook.routes import context
from courtbook.routes.context import require_operation
from courtbook.schemas.dto import CourtRequestDTO
from courtbook.schemas.request_schemas import CreateRequestInput
from courtbook.services.authorization import Operation

requests_bp = Blueprint('requests', __name__, url_prefix='/requests')


def serialize(requests):
    return [CourtRequestDTO.from_orm_model(r).model_dump(mode="json") for r in requests]


@requests_bp.route('', methods=['POST'])
@require_operation(Operation.CREATE_REQUEST)
def create_request():
    data = CreateRequestInput.model_validate(request.get_json(silent=True) or {})
    court_request = context.court_request_service().create_request(
        owner_id=g.identity.id,
        request_date=data.date,
        start_time=data.startTime,
        end_time=data.endTime,
    )
    return jsonify(CourtRequestDTO.from_orm_model(court_request).model_dump(mode="json")), 201


@requests_bp.route('/my', methods=['GET'])
@require_operation(Operation.LIST_OWN_REQUESTS)
def my_requests():
    return jsonify(serialize(context.request_query_service().list_own(g.identity.id)))
