# gatewayservice

# -*- coding: utf-8 -*-
"""
    Gateway Registry API
    ~~~~~~~~~~~~~~~~~~~~
"""

from flask import request
from sqlalchemy.exc import OperationalError

from gateway_api import app, api, config
from gateway_api.gateway_logging import getLogger
from gateway_api.registry_api import db
from gateway_api.registry_api import Error
from gateway_api.registry_api import resources as res

LOG = getLogger(__name__)


@app.teardown_appcontext
def shutdown_session(exception=None):
    db.session.close()


@app.after_request
def log_request(response):
    LOG.info(f"{request.method} {request.path} {response.status_code}")
    return response


@app.cli.command('initdb')
def initdb_command():
    """Creates the database tables."""
    db.create_all()
    print('Initialized the database.')


@app.route('/health')
def health():
    return {"status": "ok"}


def connect_db():
    """
    Check that the database is reachable. Failures go to the database error
    log and the server starts anyway.
    """
    with app.app_context():
        try:
            with db.engine.connect():
                LOG.info('Connected to database')
            return True
        except OperationalError as e:
            # the handle_error listener has already logged it
            LOG.error(f"Could not connect to database: {e.orig}")
            return False


# Gateways
api.add_resource(res.GatewayListAPI, '/gateways')
api.add_resource(res.GatewayAPI, '/gateways/<string:gateway_id>')

# Devices
api.add_resource(res.DeviceListAPI, '/devices',
    resource_class_kwargs={'max_devices_count': config.MAX_DEVICES_COUNT})
api.add_resource(res.DeviceAPI, '/devices/<string:device_id>')

if __name__ == '__main__':
    connect_db()
    LOG.info(f'Server is running on port {config.PORT}')
    app.run(host='0.0.0.0', port=config.PORT)
