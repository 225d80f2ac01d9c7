# services/openapi.py
# Served by app.py at /openapi.json and /docs

from safeway import __version__

_JSON = "application/json"


def _op(summary, status="200", body=None):
    op = {"summary": summary, "responses": {status: {"description": "OK"}}}
    if body:
        op["requestBody"] = {"content": {_JSON: {"schema": {"type": "object", "properties": body}}}}
    return op


_coord = {"type": "object", "properties": {"lat": {"type": "number"}, "lng": {"type": "number"}}}
_path = {"type": "array", "items": _coord, "minItems": 2}
_str = {"type": "string"}

OPENAPI = {
    "openapi": "3.0.0",
    "info": {
        "title": "SafeWay API",
        "version": __version__,
        "description": "Safe walking routes, danger reports, emergency contacts and return history."
    },
    "paths": {
        "/api/auth/register": {"post": _op("Create an account", "201", {"email": _str, "password": _str, "name": _str})},
        "/api/auth/login": {"post": _op("Log in; 401 on wrong credentials", body={"email": _str, "password": _str})},
        "/api/auth/social": {"post": _op("Sync a provider sign-in", body={"uid": _str, "email": _str, "name": _str})},
        "/api/contacts": {
            "post": _op("Register an emergency contact", "201", {"uid": _str, "name": _str, "phone": _str, "relation": _str}),
            "delete": _op("Delete an emergency contact", body={"uid": _str, "contactId": _str}),
        },
        "/api/contacts/delete": {"post": _op("Delete an emergency contact", body={"uid": _str, "contactId": _str})},
        "/api/contacts/{uid}": {"get": _op("List emergency contacts")},
        "/api/reports": {
            "get": _op("List reports, newest first (?uid= for one author)"),
            "post": _op("Create a report", "201", {"uid": _str, "title": _str, "type": _str, "content": _str, "location": _str}),
        },
        "/api/reports/{id}": {"get": _op("Get a report"), "put": _op("Edit own report"), "delete": _op("Delete own report")},
        "/api/reports/{id}/like": {"post": _op("Like a report")},
        "/api/reports/{id}/comments": {"get": _op("List comments"), "post": _op("Add a comment", "201", {"uid": _str, "content": _str})},
        "/api/users/{uid}": {"get": _op("Get a profile"), "put": _op("Update own profile")},
        "/api/history": {
            "post": _op("Append a history entry", "201", {"uid": _str, "start": _str, "end": _str}),
            "delete": _op("Delete all history entries of uid", body={"uid": _str}),
        },
        "/api/history/{uid}": {"get": _op("List history entries")},
        "/api/route/safety": {"post": _op("Score a path", body={"pathPoints": _path})},
        "/api/route/compare": {"post": _op("Score a path and derive the three route variants", body={"pathPoints": _path})},
        "/api/route/search": {"post": _op("Geocode start/end, score and compare", body={"start": _str, "end": _str})},
        "/api/route/address": {"get": _op("Address label for ?lat=&lng=")},
    }
}

SWAGGER_HTML = """
<!DOCTYPE html>
<html>
<head><meta charset="utf-8" /><title>Swagger UI - SafeWay API</title>
<link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist/swagger-ui.css"></head>
<body><div id="swagger-ui"></div><script src="https://unpkg.com/swagger-ui-dist/swagger-ui-bundle.js"></script>
<script>window.onload=function(){SwaggerUIBundle({url:"/openapi.json",dom_id:'#swagger-ui',deepLinking:true,presets:[SwaggerUIBundle.presets.apis],layout:"BaseLayout"});}</script></body></html>
"""
