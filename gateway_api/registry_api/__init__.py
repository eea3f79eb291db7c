# -*- coding: utf-8 -*-
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event, exc
from gateway_api import app, config
from gateway_api.gateway_logging import getLogger, log_event

log = getLogger(__name__)

db = SQLAlchemy(app)


def describe_connection_error(error, hostname=None):
    """
    Collect the connection metadata of a database error: error number, code,
    failing system call and host. Missing pieces are left as None.
    """
    orig = getattr(error, 'orig', None) or error
    errno = getattr(orig, 'errno', None)
    if errno is None and orig.args and isinstance(orig.args[0], int):
        errno = orig.args[0]
    return {
        'no': errno,
        'code': getattr(orig, 'pgcode', None) or getattr(error, 'code', None),
        'syscall': getattr(orig, 'syscall', None),
        'hostname': getattr(orig, 'hostname', None) or hostname,
    }


def log_db_error(error, hostname=None):
    """Write a connection error to the dedicated database error log."""
    info = describe_connection_error(error, hostname)
    log.error(f"Database error: {error}")
    log_event(
        f"{info['no']}: {info['code']}\t{info['syscall']}\t{info['hostname']}",
        config.DB_ERROR_LOG)


def receive_handle_error(context):
    "listen for the 'handle_error' event"
    if context.is_disconnect or isinstance(context.sqlalchemy_exception, exc.OperationalError):
        engine = context.engine
        log_db_error(
            context.sqlalchemy_exception or context.original_exception,
            engine.url.host if engine is not None else None)


with app.app_context():
    event.listen(db.engine, 'handle_error', receive_handle_error)
