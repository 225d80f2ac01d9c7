from flask import Flask, Response, jsonify
from flask_cors import CORS

from safeway.config import PORT
from safeway.services.cctv_client import fetch_cctv_locations
from safeway.services.firestore_store import FirestoreStore
from safeway.services.openapi import OPENAPI, SWAGGER_HTML
from safeway.services.scoring_service import ProximityPolicy
from safeway.utils.geocode import geocode, reverse_geocode
from safeway.utils.logging import setup_logging


def create_app(store=None, cctv_source=None, geocoder=None, scoring_policy=None, reverse_geocoder=None):
    app = Flask(__name__)
    CORS(app, supports_credentials=True,
         allow_headers=["Content-Type", "Authorization", "ngrok-skip-browser-warning"])

    # collaborators; tests swap these for in-memory doubles
    app.extensions["safeway"] = {
        "store": store or FirestoreStore(),
        "cctv_source": cctv_source or fetch_cctv_locations,
        "geocoder": geocoder or geocode,
        "reverse_geocoder": reverse_geocoder or reverse_geocode,
        "scoring_policy": scoring_policy or ProximityPolicy(),
    }

    # Register blueprints (routes)
    from safeway.routes.auth_routes import auth_bp
    from safeway.routes.contact_routes import contacts_bp
    from safeway.routes.history_routes import history_bp
    from safeway.routes.report_routes import reports_bp
    from safeway.routes.route_routes import route_bp
    from safeway.routes.user_routes import users_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(contacts_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(history_bp)
    app.register_blueprint(route_bp)

    @app.route("/openapi.json")
    def openapi_json():
        return jsonify(OPENAPI)

    @app.route("/docs")
    def docs_ui():
        return Response(SWAGGER_HTML, mimetype="text/html")

    @app.route("/")
    def home():
        return "✅ SafeWay API is running! See /docs for the endpoints."

    return app


def main():
    setup_logging()
    create_app().run(host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    main()
