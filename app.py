import os
import logging
from dotenv import load_dotenv
load_dotenv()
from flask import Flask, jsonify
from flask_cors import CORS
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from config import config_dict, ProdConfig
from models import db
from routes.authentication import auth_bp
from routes.quizzes import quiz_bp
from routes.results import result_bp

logger = logging.getLogger(__name__)


def create_app(env=None):
    env = (env or os.environ.get("FLASK_ENV", "production")).lower()

    app = Flask(__name__)
    app.config.from_object(config_dict.get(env, ProdConfig))

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}}, supports_credentials=True)

    db.init_app(app)
    with app.app_context():
        db.create_all()

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(quiz_bp, url_prefix='/api/quizzes')
    app.register_blueprint(result_bp, url_prefix='/api/results')

    @app.route('/api/health')
    def health():
        try:
            db.session.execute(text("SELECT 1"))
            database = "Connected"
        except SQLAlchemyError:
            database = "Disconnected"
        return jsonify({
            "status": "OK",
            "message": "QuizMaster API is running",
            "database": database
        })

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Route not found"}), 404

    @app.errorhandler(500)
    def server_error(error):
        logger.error("Unhandled error: %s", getattr(error, "original_exception", error))
        return jsonify({"error": "Something went wrong!"}), 500

    logger.info("QuizMaster started (%s)", env)
    return app


app = create_app()

if __name__ == '__main__':
    app.run(debug=app.config['DEBUG'])
