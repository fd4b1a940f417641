# coding: utf8
from functools import wraps

from flask import request
from flask_jwt_extended import verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jsonschema import Draft7Validator, FormatChecker
from jwt.exceptions import PyJWTError

from storefront.errors.exceptions import Forbidden, Unauthorized, ValidationError
from storefront.services.auth import AuthService


def get_json_body():
    body = request.get_json(force=True, silent=True)
    if body is None:
        raise ValidationError(
            "Invalid JSON body",
            errors=[{"field": "body", "message": "Request body must be valid JSON."}],
        )
    return body


def required_admin(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            verify_jwt_in_request()
        except (JWTExtendedException, PyJWTError):
            raise Unauthorized(message="Unauthorized")

        current_user = AuthService.get_current_identity()
        if not current_user:
            raise Unauthorized(message="Unauthorized")
        if not current_user.is_admin:
            raise Forbidden(message="Admin access required")
        return fn(*args, **kwargs)

    return wrapper


def _error_field(error):
    if error.validator == "required":
        # "'code' is a required property"
        return error.message.split("'")[1]
    if error.path:
        return ".".join(str(part) for part in error.path)
    return "body"


def parameters(**schema):
    """Validate query string + JSON body against a JSON schema.

    The validated arguments are passed to the view as an extra positional
    argument, restricted to the keys declared in ``properties``.
    """
    validator = Draft7Validator(schema, format_checker=FormatChecker())

    def decorated(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            req_args = request.args.to_dict()
            if request.method in ("POST", "PUT", "PATCH", "DELETE"):
                body = get_json_body() if request.data else {}
                if not isinstance(body, dict):
                    raise ValidationError(
                        "Request body must be a JSON object.",
                        errors=[
                            {
                                "field": "body",
                                "message": "Request body must be a JSON object.",
                            }
                        ],
                    )
                req_args.update(body)

            req_args = {
                k: v for k, v in req_args.items() if k in schema["properties"].keys()
            }

            errors = []
            for field in schema.get("required", []):
                value = req_args.get(field)
                if value is None or (isinstance(value, str) and not value.strip()):
                    errors.append(
                        {"field": field, "message": "{} is required".format(field)}
                    )

            missing = {error["field"] for error in errors}
            for error in sorted(validator.iter_errors(req_args), key=str):
                field = _error_field(error)
                if field in missing:
                    continue
                errors.append(
                    {"field": field, "message": f"Field '{field}' is not valid: {error.message}"}
                )

            if errors:
                raise ValidationError("Request parameters are invalid.", errors=errors)

            new_args = args + (req_args,)
            return func(*new_args, **kwargs)

        return wrapper

    return decorated
