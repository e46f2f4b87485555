from flask import jsonify


def success_response(data=None, message=None, status_code=200, **extra):
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)

    response = jsonify(body)
    response.status_code = status_code
    return response
