# coding: utf8
from flask_bcrypt import Bcrypt
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()

bcrypt = Bcrypt()
jwt = JWTManager()
