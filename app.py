import logging

from flask import Flask
from config import Config


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    app.json.sort_keys = False
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # import and register blueprints
    from routes import main_bp
    from routes.debug import debug_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(debug_bp)

    return app


app = create_app()

if __name__ == "__main__":
    logging.basicConfig(level=Config.LOG_LEVEL)
    # the diagram frontend expects the API on :5001
    app.run(debug=True, port=5001)
