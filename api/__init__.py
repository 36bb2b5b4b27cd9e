from flask import Flask, request
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from .formatters import format_response
from models import storage  # DBStorage singleton (scoped_session)
from utils.auth_service import AuthSettings
from utils.security import CredentialHasher

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "API Basics",
        "version": "1.0.0",
        "description": "Educational REST API: account registration, OAuth2-style password login, "
                       "token refresh/revocation, a user profile and a todo list.",
    },
    "basePath": "/",
    "schemes": ["http", "https"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}

ENDPOINTS = {
    "authentication": [
        {"method": "POST", "path": "/register", "description": "Create a new account"},
        {"method": "POST", "path": "/token", "description": "Login and get tokens (OAuth2 password grant)"},
        {"method": "POST", "path": "/refresh", "description": "Get new access token using refresh token"},
        {"method": "POST", "path": "/revoke", "description": "Logout by revoking refresh token"},
    ],
    "profile": [
        {"method": "GET", "path": "/profile", "description": "Get your profile", "requiresAuth": True},
        {"method": "PUT", "path": "/profile", "description": "Update your profile", "requiresAuth": True},
    ],
    "todos": [
        {"method": "GET", "path": "/todos", "description": "List all your todos", "requiresAuth": True},
        {"method": "POST", "path": "/todos", "description": "Create a new todo", "requiresAuth": True},
        {"method": "GET", "path": "/todos/:id", "description": "Get a specific todo", "requiresAuth": True},
        {"method": "PUT", "path": "/todos/:id", "description": "Update a todo", "requiresAuth": True},
        {"method": "DELETE", "path": "/todos/:id", "description": "Delete a todo", "requiresAuth": True},
    ],
}


def _usage_text(base_url: str, access_ttl: int, refresh_ttl: int) -> str:
    lines = ["API Basics - Educational REST API", "=" * 34, "", "Available Endpoints:"]
    for section, endpoints in ENDPOINTS.items():
        suffix = " (requires authentication)" if section != "authentication" else ""
        lines.append("")
        lines.append(f"{section.capitalize()}{suffix}:")
        for ep in endpoints:
            lines.append(f"  {ep['method']:<7}{ep['path']:<19}{ep['description']}")
    lines += [
        "",
        "Authentication:",
        "  All protected endpoints require an access token in the Authorization header:",
        "  Authorization: Bearer <access_token>",
        "",
        "Token Expiry:",
        f"  - Access tokens expire in {access_ttl} seconds",
        f"  - Refresh tokens expire in {refresh_ttl} seconds",
        "",
        "Content Types:",
        "  - curl: Returns plain text",
        "  - Browser: Returns HTML",
        "  - Other clients: Returns JSON",
        "",
        "Example Usage:",
        "  # Register",
        f"  curl -X POST {base_url}/register \\",
        "    -H \"Content-Type: application/json\" \\",
        "    -d '{\"email\":\"user@example.com\",\"password\":\"password123\",\"name\":\"John Doe\"}'",
        "",
        "  # Login",
        f"  curl -X POST {base_url}/token \\",
        "    -H \"Content-Type: application/json\" \\",
        "    -d '{\"email\":\"user@example.com\",\"password\":\"password123\"}'",
        "",
        "  # Get profile (with token)",
        f"  curl {base_url}/profile \\",
        "    -H \"Authorization: Bearer <your_access_token>\"",
        "",
    ]
    return "\n".join(lines)


def create_app(config_name: str | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    The auth core gets its settings and password hasher from app.extensions,
    built once here; it never reads the environment itself.
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    if app.config["APP_ENV"] in ("prod", "production") and app.config["JWT_SECRET"] == "dev-secret-change-me":
        app.logger.warning("JWT_SECRET is the development default; set a strong secret in production")

    app.extensions["auth_settings"] = AuthSettings.from_config(app.config)
    app.extensions["credential_hasher"] = CredentialHasher(
        time_cost=app.config["PASSWORD_HASH_TIME_COST"],
        memory_cost=app.config["PASSWORD_HASH_MEMORY_COST"],
        parallelism=app.config["PASSWORD_HASH_PARALLELISM"],
    )

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)

    from .health import bp as health_bp
    from .auth import bp as auth_bp
    from .profile import bp as profile_bp
    from .todos import bp as todos_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(todos_bp)

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.route("/")
    def root():
        """
        API documentation: JSON catalogue for API clients, usage text otherwise
        ---
        tags:
          - Docs
        responses:
          200:
            description: Endpoint overview
        """
        settings = app.extensions["auth_settings"]
        base_url = request.host_url.rstrip("/")
        if "application/json" in request.headers.get("Accept", ""):
            return {
                "name": "API Basics - Educational REST API",
                "version": app.config["API_VERSION"],
                "description": "A complete REST API for teaching HTTP fundamentals, "
                               "OAuth2 authentication, and API design",
                "baseUrl": base_url,
                "endpoints": ENDPOINTS,
                "authentication": {
                    "type": "Bearer",
                    "header": "Authorization: Bearer <access_token>",
                    "tokenExpiry": {
                        "accessToken": f"{settings.access_ttl_seconds} seconds",
                        "refreshToken": f"{settings.refresh_ttl_seconds} seconds",
                    },
                },
                "contentNegotiation": {
                    "curl": "Returns plain text",
                    "browser": "Returns HTML",
                    "api-clients": "Returns JSON",
                },
                "docs": "/apidocs/",
            }, 200
        return format_response(
            _usage_text(base_url, settings.access_ttl_seconds, settings.refresh_ttl_seconds), 200
        )

    return app
