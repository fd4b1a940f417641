# coding: utf8
from flask_restx import Namespace, Resource

from storefront.decorators import parameters
from storefront.errors.exceptions import Unauthorized
from storefront.lib.logger import logger
from storefront.lib.response import Response
from storefront.services.auth import AuthService

ns = Namespace(name="auth", description="Auth API")


@ns.route("/login")
class APILogin(Resource):

    @parameters(
        type="object",
        properties={
            "email": {"type": "string"},
            "password": {"type": "string"},
        },
        required=["email", "password"],
    )
    def post(self, args):
        email = args.get("email", "")
        password = args.get("password", "")

        user = AuthService.login(email, password)
        if not user:
            logger.info(f"Failed login for {email}")
            raise Unauthorized("Invalid email or password")

        tokens = AuthService.generate_token(user)
        tokens["user"] = user.to_dict()
        return Response(data=tokens, message="Login successful").to_dict()
