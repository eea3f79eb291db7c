import os, sys
from gateway_api.gateway_logging import getLogger
log = getLogger(__name__)

# Server
try:
    PORT = int(os.environ['PORT'])
except KeyError:
    PORT = 3700

# Registry limits
try:
    MAX_DEVICES_COUNT = int(os.environ['MAX_DEVICES_COUNT'])
except KeyError:
    MAX_DEVICES_COUNT = 10
except ValueError as e:
    log.error("MAX_DEVICES_COUNT must be an integer: {0}".format(e))
    sys.exit(1)
log.info(f'Gateways accept at most {MAX_DEVICES_COUNT} devices')

# Database
if 'DATABASE_URI' in os.environ:
    SQLALCHEMY_DATABASE_URI = os.environ['DATABASE_URI']
else:
    try:
        DB_NAME = os.environ['DB_NAME']
        DB_USERNAME = os.environ['DB_USERNAME']
        DB_PASSWORD = os.environ['DB_PASSWORD']
        DB_HOST = os.environ['DB_HOST']
        DB_PORT = int(os.environ['DB_PORT'])
    except Exception as e:
        log.error("DB enviroment variables not found: {0}".format(e))
        sys.exit(1)

    SQLALCHEMY_DATABASE_URI = 'postgresql+psycopg2://{user}:{pw}@{url}:{port}/{db}'.format(
        user=DB_USERNAME, pw=DB_PASSWORD, url=DB_HOST, port=DB_PORT, db=DB_NAME)

SQLALCHEMY_TRACK_MODIFICATIONS = False
SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}

DB_ERROR_LOG = 'dbErrLog.log'

PROPAGATE_EXCEPTIONS = True
