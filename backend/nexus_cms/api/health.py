from flask import jsonify

from . import api_bp


@api_bp.route("/health", methods=["GET"])
def health_check():
    return jsonify({
        "status": "ok",
        "service": "nexus-cms",
    })


@api_bp.route("/", methods=["GET"])
def index():
    return jsonify({
        "success": True,
        "message": "Nexus Engineering API",
        "data": {"health": "/api/health", "docs": "/swagger"},
    })
