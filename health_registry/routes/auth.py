from flask import Blueprint, current_app, request, jsonify
from flask_jwt_extended import create_access_token, jwt_required, get_jwt_identity
from ..extensions import db
from ..models import User
from ..registry import registry
import bcrypt
from ..schemas import LoginSchema
from ..schemas import ChangePasswordSchema

change_pw_schema = ChangePasswordSchema()

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')
login_schema = LoginSchema()


def _current_user():
    return User.query.filter_by(account=get_jwt_identity()).first_or_404()


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    errs = login_schema.validate(data)
    if errs: return jsonify(errs),400
    u = User.query.filter_by(email=data['email']).first()
    if u and bcrypt.checkpw(data['password'].encode(), u.password_hash.encode()):
        # The account is the caller identity checked by the registry
        return jsonify({"access_token": create_access_token(identity=u.account)}),200
    return jsonify({"msg":"Invalid credentials"}),401

@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def me():
    u = _current_user()
    return jsonify({"id":u.id,"username":u.username,"account":u.account,
                    "is_authority":registry.is_authority(u.account)}),200



@auth_bp.route('/change-password', methods=['POST'])
@jwt_required()
def change_password():
    data = request.get_json(silent=True) or {}
    errs = change_pw_schema.validate(data)
    if errs:
        return jsonify(errs), 400

    user = _current_user()

    if not bcrypt.checkpw(data['old_password'].encode(), user.password_hash.encode()):
        return jsonify({"msg": "Old password is incorrect"}), 403

    user.password_hash = hash_password(data['new_password'])
    db.session.commit()

    return jsonify({"msg": "Password changed successfully"}), 200


def hash_password(password):
    rounds = current_app.config.get("BCRYPT_ROUNDS", 12)
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds)).decode()
