from flask import jsonify


def _ok(data, status=200):
    return jsonify({"code": 0, "data": data}), status


def _err(msg, status=400):
    return jsonify({"code": 1, "error": str(msg)}), status


__all__ = ["_ok", "_err"]
