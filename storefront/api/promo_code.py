# coding: utf8
import math

from dateutil import parser as date_parser
from flask_restx import Namespace, Resource
import pytz

import const

from storefront.decorators import get_json_body, parameters, required_admin
from storefront.enums.order import PromoType, enum_values
from storefront.errors.exceptions import PromoCodeRejected, ValidationError
from storefront.lib.response import Response
from storefront.models.base import money, to_decimal
from storefront.services.promo_code import PromoCodeService

ns = Namespace(name="promo-codes", description="Promo code API")

PROMO_PROPERTIES = {
    "code": {"type": "string", "minLength": 1, "maxLength": const.MAX_PROMO_CODE_LENGTH},
    "type": {"type": "string", "enum": enum_values(PromoType)},
    "value": {"type": "number", "exclusiveMinimum": 0},
    "minOrderAmount": {"type": "number", "minimum": 0},
    "maxUses": {"type": ["integer", "null"], "minimum": 1},
    "expiresAt": {"type": ["string", "null"]},
    "isActive": {"type": "boolean"},
}

FIELD_COLUMNS = {
    "code": "code",
    "type": "type",
    "value": "value",
    "minOrderAmount": "min_order_amount",
    "maxUses": "max_uses",
    "expiresAt": "expires_at",
    "isActive": "is_active",
}


def _parse_expires_at(value):
    if value is None or value == "":
        return None
    try:
        parsed = date_parser.isoparse(value)
    except ValueError:
        raise ValidationError(
            "Request parameters are invalid.",
            errors=[{"field": "expiresAt", "message": "expiresAt must be an ISO 8601 date."}],
        )
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(pytz.utc).replace(tzinfo=None)
    return parsed


def _is_number(value):
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _promo_columns(args):
    columns = {}
    errors = []
    for field, column in FIELD_COLUMNS.items():
        if field not in args:
            continue
        value = args[field]
        if field == "expiresAt":
            value = _parse_expires_at(value)
        elif field in ("value", "minOrderAmount"):
            if not _is_number(value):
                errors.append(
                    {"field": field, "message": f"{field} must be a finite number."}
                )
                continue
            value = to_decimal(value)
        columns[column] = value
    if errors:
        raise ValidationError("Request parameters are invalid.", errors=errors)
    return columns


def _check_percentage(promo_type, value):
    if promo_type == PromoType.PERCENTAGE.value and value is not None and value > 100:
        raise ValidationError(
            "Request parameters are invalid.",
            errors=[{"field": "value", "message": "Percentage value cannot exceed 100."}],
        )


@ns.route("/validate")
class APIValidatePromoCode(Resource):

    def post(self):
        body = get_json_body()
        if not isinstance(body, dict):
            body = {}

        code = body.get("code")
        subtotal = body.get("subtotal")
        errors = []
        if not isinstance(code, str) or not code.strip():
            errors.append({"field": "code", "message": "code is required"})
        if not _is_number(subtotal):
            errors.append({"field": "subtotal", "message": "subtotal must be a number"})
        if errors:
            raise ValidationError("Request parameters are invalid.", errors=errors)

        try:
            promo = PromoCodeService.evaluate(code, to_decimal(subtotal))
        except PromoCodeRejected as e:
            return Response(
                message=e.message,
                data={"valid": False, "reason": e.message, "reasonCode": e.reason_code},
            ).to_dict()

        return Response(
            message="Promo code applied",
            data={
                "valid": True,
                "code": promo.code,
                "type": promo.type,
                "value": money(promo.value),
                "discountAmount": money(promo.discount),
            },
        ).to_dict()


@ns.route("")
class APIPromoCodes(Resource):

    @required_admin
    def get(self):
        promos = PromoCodeService.get_promo_codes()
        return Response(
            data=[promo.to_dict() for promo in promos], message="OK"
        ).to_dict()

    @required_admin
    @parameters(
        type="object",
        properties=PROMO_PROPERTIES,
        required=["code", "type", "value"],
    )
    def post(self, args):
        columns = _promo_columns(args)
        _check_percentage(columns["type"], columns["value"])

        promo = PromoCodeService.create_promo_code(**columns)
        return Response(
            code=201,
            status=201,
            data=promo.to_dict(),
            message="Promo code created",
        ).to_dict()


@ns.route("/<int:promo_id>")
class APIPromoCodeDetail(Resource):

    @required_admin
    @parameters(
        type="object",
        properties=PROMO_PROPERTIES,
    )
    def patch(self, args, promo_id):
        columns = _promo_columns(args)
        promo = PromoCodeService.find(promo_id)
        if promo:
            _check_percentage(
                columns.get("type", promo.type), columns.get("value", promo.value)
            )

        promo = PromoCodeService.update_promo_code(promo_id, **columns)
        return Response(data=promo.to_dict(), message="Promo code updated").to_dict()

    @required_admin
    def delete(self, promo_id):
        PromoCodeService.delete_promo_code(promo_id)
        return Response(message="Promo code deleted").to_dict()
