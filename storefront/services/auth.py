from flask_jwt_extended import create_access_token, get_jwt_identity
from sqlalchemy import select

import const
from storefront.errors.exceptions import ConflictError
from storefront.extensions import db
from storefront.models.user import User


class AuthService:

    @staticmethod
    def find_by_email(email):
        return db.session.execute(
            select(User).where(User.email == email.strip().lower())
        ).scalar_one_or_none()

    @staticmethod
    def create_user(email, password, name="", role=const.ROLE_CUSTOMER):
        if AuthService.find_by_email(email):
            raise ConflictError("Email already exists")
        user = User(email=email.strip().lower(), name=name, role=role)
        user.set_password(password)
        user.save()
        return user

    @staticmethod
    def login(email, password):
        user = AuthService.find_by_email(email)
        if not user or not user.check_password(password):
            return None
        return user

    @staticmethod
    def generate_token(user):
        access_token = create_access_token(
            identity=str(user.id), additional_claims={"role": user.role}
        )
        return {"accessToken": access_token}

    @staticmethod
    def get_current_identity():
        subject = get_jwt_identity()
        if subject is None:
            return None
        try:
            user_id = int(subject)
        except (TypeError, ValueError):
            return None
        return db.session.get(User, user_id)
