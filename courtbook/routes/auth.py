# courtbook/routes/auth.py
from flask import Blueprint, jsonify, request

from courtbook.routes import context
from courtbook.schemas.auth_schemas import (
    CreateAdminInput,
    LoginInput,
    RegisterStudentInput,
    VerifyEmailInput,
)

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


@auth_bp.route('/register', methods=['POST'])
def register():
    """Student self-registration; sends the verification code."""
    data = RegisterStudentInput.model_validate(request.get_json(silent=True) or {})
    result = context.auth_service().register_student(data)
    return jsonify(result), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = LoginInput.model_validate(request.get_json(silent=True) or {})
    return jsonify(context.auth_service().login(data))


@auth_bp.route('/verify-email', methods=['POST'])
def verify_email():
    data = VerifyEmailInput.model_validate(request.get_json(silent=True) or {})
    return jsonify(context.auth_service().verify_email(str(data.email), data.code))


@auth_bp.route('/create-admin', methods=['POST'])
def create_admin():
    """Admin bootstrap, protected by SETUP_KEY."""
    data = CreateAdminInput.model_validate(request.get_json(silent=True) or {})
    return jsonify(context.auth_service().create_admin(data)), 201
