from flask import jsonify


def success(data=None, message: str = "Operation successful", status: int = 200):
    return jsonify({"success": True, "message": message, "data": data}), status


def error(message: str = "Operation failed", status: int = 500, **extra):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status
