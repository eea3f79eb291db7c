import traceback
from gateway_api import app
from gateway_api.registry_api import db
from gateway_api.registry_api.Utils import validation_message
import werkzeug
import marshmallow
from gateway_api.gateway_logging import getLogger
log = getLogger(__name__)

# Definition of exception types. Every registry failure is answered with a
# 400 and a message, not found included.

# call as Error.Conflict('Duplicate device')
class BadRequest(Exception):
    html_code = 400
    error_msg = "Bad request"

class Conflict(Exception):
    html_code = 400
    error_msg = "Conflict"

class NotFound(Exception):
    html_code = 400
    error_msg = "Not found"

class MethodNotAllowed(Exception):
    html_code = 405
    error_msg = "Method not allowed"


def _respond(error):
    message = str(error) or error.error_msg
    return {"message" : message}, error.html_code

# Error handlers: these functions are called when an exception is raised.
# They respond with the message of the error and its HTML code.

@app.errorhandler(BadRequest)
def handle_400(error):
    log.warning(str(error))
    return _respond(error)

@app.errorhandler(Conflict)
def handle_conflict(error):
    log.warning(str(error))
    return _respond(error)

@app.errorhandler(NotFound)
def handle_not_found(error):
    log.warning(str(error))
    return _respond(error)

@app.errorhandler(MethodNotAllowed)
def handle_405(error):
    log.warning(str(error))
    return _respond(error)


# In this handler we catch all the exceptions that not were handled by the other
# handler, i.e the exceptions raised by Flask and the internal errors.
@app.errorhandler(Exception)
def handle_error(error):
    # Just in case, a rollback is triggered in the database for any error
    db.session.rollback()
    # Re-route the error according to its type
    if isinstance(error, marshmallow.ValidationError):
        return handle_400(BadRequest(validation_message(error)))
    elif isinstance(error, werkzeug.exceptions.BadRequest):
        return handle_400(BadRequest(error.description))
    elif isinstance(error, werkzeug.exceptions.NotFound):
        # Unknown routes keep their 404, only registry lookups answer 400
        log.warning(str(error))
        return {"message" : NotFound.error_msg}, 404
    elif isinstance(error, werkzeug.exceptions.MethodNotAllowed):
        return handle_405(MethodNotAllowed(error.description))
    elif isinstance(error, werkzeug.exceptions.HTTPException):
        log.warning(str(error))
        return {"message" : error.description}, error.code
    else:
        # For not typified exceptions, the server respond with a html code 500
        # and save the message and traceback in the log.
        log.error(f"{str(error)}\n {traceback.format_exc()}")
        return {"message" : "Internal error"}, 500
