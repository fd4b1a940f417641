# coding: utf8
from flask import request
from flask_restx import Namespace, Resource

import const
from storefront.decorators import get_json_body, parameters, required_admin
from storefront.enums.order import OrderStatus, PaymentStatus, enum_values
from storefront.lib.response import Response
from storefront.models.base import money
from storefront.services.notification import NotificationServices
from storefront.services.order import OrderService
from storefront.services.validator import validate_order_request

ns = Namespace(name="orders", description="Order API")


def _int_arg(name, default, minimum=1, maximum=None):
    try:
        value = int(request.args.get(name, default))
    except (TypeError, ValueError):
        value = default
    value = max(value, minimum)
    if maximum is not None:
        value = min(value, maximum)
    return value


@ns.route("")
class APIOrders(Resource):

    def post(self):
        order_request = validate_order_request(get_json_body())
        order = OrderService.place_order(order_request)

        NotificationServices.notify_order_placed(order)

        return Response(
            code=201,
            status=201,
            message="Order placed successfully",
            data={"orderNumber": order.order_number, "total": money(order.total)},
        ).to_dict()

    @required_admin
    def get(self):
        page = _int_arg("page", const.DEFAULT_PAGE)
        limit = _int_arg("limit", const.DEFAULT_PER_PAGE, maximum=const.MAX_PER_PAGE)
        status = request.args.get("status", "").upper()
        if status not in enum_values(OrderStatus):
            status = None
        search = request.args.get("search", "").strip()

        pagination = OrderService.get_orders(
            page=page, limit=limit, status=status, search=search
        )
        return Response(
            data={
                "orders": [order.to_dict() for order in pagination.items],
                "total": pagination.total,
                "page": page,
                "limit": limit,
            },
            message="OK",
        ).to_dict()


@ns.route("/<int:order_id>")
class APIOrderDetail(Resource):

    @required_admin
    def get(self, order_id):
        order = OrderService.find_order(order_id)
        return Response(data=order.to_dict(), message="OK").to_dict()

    @required_admin
    @parameters(
        type="object",
        properties={
            "orderStatus": {"type": "string", "enum": enum_values(OrderStatus)},
            "paymentStatus": {"type": "string", "enum": enum_values(PaymentStatus)},
            "notes": {"type": ["string", "null"]},
        },
    )
    def patch(self, args, order_id):
        changes = {}
        if "orderStatus" in args:
            changes["order_status"] = args["orderStatus"]
        if "paymentStatus" in args:
            changes["payment_status"] = args["paymentStatus"]
        if "notes" in args:
            changes["notes"] = args["notes"]

        order, previous_status = OrderService.update_order(order_id, **changes)
        NotificationServices.notify_status_change(order, previous_status)

        return Response(data=order.to_dict(), message="Order updated").to_dict()
