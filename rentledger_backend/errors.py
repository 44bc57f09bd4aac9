# rentledger_backend/errors.py
from flask import jsonify


class LedgerError(Exception):
    """Base class for errors raised by the tenant accounting core."""

    status_code = 500
    error = "server_error"

    def __init__(self, message=None):
        super().__init__(message or self.error)
        self.message = message or self.error


class NotFound(LedgerError):
    status_code = 404
    error = "not_found"


class InvalidState(LedgerError):
    status_code = 400
    error = "invalid_state"


class PersistenceFailure(LedgerError):
    status_code = 500
    error = "persistence_failure"


class ConcurrentUpdate(PersistenceFailure):
    """Another transaction updated the same tenant first."""

    status_code = 409
    error = "concurrent_update"


def register_error_handlers(app):
    @app.errorhandler(LedgerError)
    def ledger_error(e):
        if e.status_code >= 500:
            app.logger.error("%s: %s", e.error, e.message)
        return jsonify(error=e.error, message=e.message), e.status_code

    @app.errorhandler(400)
    def bad_request(e):
        msg = getattr(e, "description", "Bad Request")
        return jsonify(error="bad_request", message=msg), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify(error="not_found", message=getattr(e, "description", "Not Found")), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify(error="method_not_allowed"), 405

    @app.errorhandler(500)
    def server_error(e):
        app.logger.exception("Unhandled exception: %s", e)
        return jsonify(error="server_error"), 500
