import logging

from waitress import serve

from config import settings
from florisifrunze import create_app, db
from florisifrunze.seed import ensure_admin_user, seed_demo_data

logger = logging.getLogger(__name__)

app = create_app()


def prepare_database():
    with app.app_context():
        db.create_all()
        ensure_admin_user()
        seed_demo_data()


if __name__ == "__main__":
    prepare_database()
    logger.info(f"Starting Waitress server on http://{settings.APP_HOST}:{settings.APP_PORT}")
    serve(app, host=settings.APP_HOST, port=settings.APP_PORT, threads=settings.APP_THREADS)
