# coding: utf8
from flask import Blueprint
from flask_restx import Api

from storefront.api.auth import ns as auth_ns
from storefront.api.order import ns as order_ns
from storefront.api.promo_code import ns as promo_code_ns
from storefront.errors.exceptions import BaseError
from storefront.errors.handler import api_error_handler

bp = Blueprint("api", __name__, url_prefix="/api/v1")

api = Api(
    bp,
    version="1.0",
    title="Storefront API",
    description="Guest checkout and back-office API",
    doc="/docs/",
)


api.add_namespace(ns=auth_ns)
api.add_namespace(ns=order_ns)
api.add_namespace(ns=promo_code_ns)


@api.errorhandler(BaseError)
def handle_base_error(error):
    return api_error_handler(error)


@api.errorhandler(Exception)
def handle_exception(error):
    return api_error_handler(error)
