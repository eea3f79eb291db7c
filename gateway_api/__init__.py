# -*- coding: utf-8 -*-
from flask import Flask
from flask_restful import Api
from flask_cors import CORS
from gateway_api import config
from gateway_api.gateway_logging import getLogger
log = getLogger(__name__)

app = Flask(__name__, instance_relative_config=True)

CORS(app)
app.config.from_object(config)

api = Api(app)
