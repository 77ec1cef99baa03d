"""Default settings; override with CALC_* environment variables or create_app(overrides)."""

DEFAULTS = {
    "CORS_ORIGINS": [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ],
    "LOG_LEVEL": "INFO",
    "SPARKLINE_WIDTH": 200,
}
