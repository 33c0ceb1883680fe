import os

from vfire.app import create_app

app = create_app({"CREATE_TABLES": True, "LOG_JSON": False})

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.logger.info(f"Starting V-FIRE Inspect on port {port}")
    app.run(host="0.0.0.0", port=port, debug=True, use_reloader=False)
