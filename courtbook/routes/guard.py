# courtbook/routes/guard.py
from flask import Blueprint, jsonify, request

from courtbook.errors import ValidationError
from courtbook.routes import context
from courtbook.routes.context import require_operation
from courtbook.routes.requests import serialize
from courtbook.schemas.request_schemas import AgendaQuery
from courtbook.services.authorization import Operation

guard_bp = Blueprint('guard', __name__, url_prefix='/guard')


@guard_bp.route('/agenda', methods=['GET'])
@require_operation(Operation.LIST_APPROVED_FOR_DATE)
def agenda():
    """Approved requests for ?date=YYYY-MM-DD, by start time."""
    if not request.args.get('date'):
        raise ValidationError('Parâmetro "date" é obrigatório (formato: YYYY-MM-DD)')
    query = AgendaQuery.model_validate({"date": request.args["date"]})
    return jsonify(serialize(context.request_query_service().list_approved_for_date(query.date)))
