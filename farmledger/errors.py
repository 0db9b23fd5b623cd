# farmledger/errors.py
from flask import jsonify


class OperationFailed(Exception):
    """Any failure of the data store, blob storage or auth layer.

    The taxonomy is deliberately flat: views only need a message to show,
    a status code, and whether retrying the same request can help.
    """

    status_code = 503
    error = "operation_failed"
    retryable = True

    def __init__(self, message, status_code=None, retryable=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if retryable is not None:
            self.retryable = retryable

    def to_dict(self):
        return {"error": self.error, "message": self.message, "retryable": self.retryable}


class ValidationFailed(OperationFailed):
    status_code = 400
    error = "validation_error"
    retryable = False


class NotFound(OperationFailed):
    status_code = 404
    error = "not_found"
    retryable = False


class ConfirmationRequired(OperationFailed):
    status_code = 409
    error = "confirmation_required"
    retryable = False


def register_error_handlers(app):
    @app.errorhandler(OperationFailed)
    def operation_failed(e):
        level = app.logger.warning if e.status_code >= 500 else app.logger.info
        level("%s: %s", e.error, e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(400)
    def bad_request(e):
        msg = getattr(e, "description", "Bad Request")
        return jsonify(error="bad_request", message=msg), 400

    @app.errorhandler(401)
    def unauthorized(e): return jsonify(error="unauthorized"), 401

    @app.errorhandler(403)
    def forbidden(e): return jsonify(error="forbidden"), 403

    @app.errorhandler(404)
    def not_found(e): return jsonify(error="not_found"), 404

    @app.errorhandler(405)
    def method_not_allowed(e): return jsonify(error="method_not_allowed"), 405

    @app.errorhandler(413)
    def too_large(e): return jsonify(error="file_too_large"), 413

    @app.errorhandler(500)
    def server_error(e):
        app.logger.exception("Unhandled exception: %s", e)
        return jsonify(error="server_error"), 500
