from flask import Flask, flash, g, jsonify, redirect, render_template, request, url_for
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
import logging
import time

# Extensions are created outside create_app and bound to each application
db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()

logger = logging.getLogger(__name__)

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com https://cdn.jsdelivr.net; "
    "font-src 'self' https://fonts.gstatic.com; "
    "img-src 'self' data: https: blob:; "
    "media-src 'self' https: data: blob:; "
    "connect-src 'self' https:; "
    "frame-ancestors 'self';"
)


def wants_json():
    return request.path.startswith('/api/')


def json_error(message, status, **extra):
    body = {'success': False, 'message': message}
    body.update(extra)
    return jsonify(body), status


def create_app(overrides=None):
    app = Flask(__name__)

    # Configuration from config.py, then explicit overrides (tests, scripts)
    app.config.from_object('config.Config')
    if overrides:
        app.config.update(overrides)
    app.json.sort_keys = False
    # Browser caches are keyed on this; every deploy starts with fresh ones
    app.config.setdefault('CACHE_VERSION', f"ff-{int(time.time())}")

    logging.basicConfig(level=app.config.get('LOG_LEVEL', 'INFO'),
                        format='%(asctime)s %(levelname)s [%(name)s] %(message)s')

    try:
        db.init_app(app)
        migrate.init_app(app, db)
        login_manager.init_app(app)
        login_manager.login_view = 'auth.login'
        login_manager.login_message = "Autentifica-te pentru a accesa panoul de administrare."
        login_manager.login_message_category = "warning"
    except Exception as e:
        logger.error(f"Error initialising extensions: {e}")
        raise

    # Session users for the HTML back office
    @login_manager.user_loader
    def load_user(user_id):
        from florisifrunze.models.users import User
        return db.session.get(User, int(user_id))

    # Bearer tokens for the JSON API and the blog publisher
    @login_manager.request_loader
    def load_user_from_request(req):
        from florisifrunze.tokens import read_token, token_from_header
        from florisifrunze.models.users import User
        token = token_from_header(req.headers.get('Authorization'))
        if not token:
            return None
        payload = read_token(token)
        if not payload:
            return None
        return db.session.get(User, int(payload['userId']))

    @login_manager.unauthorized_handler
    def unauthorized():
        if wants_json():
            return json_error('Authentication required', 401)
        flash(login_manager.login_message, login_manager.login_message_category)
        return redirect(url_for('auth.login', next=request.full_path))

    # Blueprints
    from florisifrunze.routes.home import bp as home_bp
    app.register_blueprint(home_bp)  # Storefront pages and the service worker
    from florisifrunze.routes.auth import bp as auth_bp
    app.register_blueprint(auth_bp, url_prefix='/auth')  # HTML login
    from florisifrunze.routes.admin import bp as admin_bp
    app.register_blueprint(admin_bp, url_prefix='/admin')  # HTML back office
    from florisifrunze.routes.api import bp as api_bp
    app.register_blueprint(api_bp, url_prefix='/api')  # Public JSON API
    from florisifrunze.routes.admin_api import bp as admin_api_bp
    app.register_blueprint(admin_api_bp, url_prefix='/api/admin')  # Admin JSON API

    from florisifrunze.commands import register_commands
    register_commands(app)

    register_error_handlers(app)
    register_request_hooks(app)

    # Import models inside the application context so metadata is complete
    with app.app_context():
        try:
            from florisifrunze.models.users import User
            from florisifrunze.models.settings import AdminRegisterSetting
            from florisifrunze.models.services import Service
            from florisifrunze.models.subscriptions import Subscription
            from florisifrunze.models.appointments import Appointment
            from florisifrunze.models.inquiries import Inquiry
            from florisifrunze.models.blog_posts import BlogPost
            from florisifrunze.models.portfolio import PortfolioItem
            from florisifrunze.models.testimonials import Testimonial
            from florisifrunze.models.carousel_images import CarouselImage
            from florisifrunze.models.feature_cards import FeatureCard
        except Exception as e:
            logger.error(f"Error loading models: {e}")
            raise

    return app


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def validation_error(error):
        errors = [
            {'field': '.'.join(str(part) for part in item['loc']), 'message': item['msg']}
            for item in error.errors()
        ]
        return json_error('Validation error', 400, errors=errors)

    @app.errorhandler(SQLAlchemyError)
    def database_error(error):
        db.session.rollback()
        logger.error(f"Database error on {request.method} {request.path}: {error}")
        if wants_json():
            return json_error('Database error', 500)
        return render_template('error.html', code=500, message="A aparut o eroare. Incearca din nou mai tarziu."), 500

    @app.errorhandler(404)
    def not_found(error):
        if wants_json():
            return json_error('Not found', 404)
        return render_template('error.html', code=404, message="Pagina nu a fost gasita."), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        if wants_json():
            return json_error('Method not allowed', 405)
        return render_template('error.html', code=405, message="Metoda nu este permisa."), 405


def register_request_hooks(app):
    @app.before_request
    def redirect_www():
        host = request.host
        if host and host.startswith('www.'):
            scheme = request.headers.get('X-Forwarded-Proto', request.scheme)
            return redirect(f"{scheme}://{host[4:]}{request.full_path.rstrip('?')}", code=301)
        g.started_at = time.perf_counter()

    @app.after_request
    def add_headers(response):
        response.headers['Content-Security-Policy'] = CONTENT_SECURITY_POLICY
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers['Permissions-Policy'] = 'camera=(), microphone=(), geolocation=(), interest-cohort=()'

        if request.path.startswith('/api/'):
            response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
            response.headers['Pragma'] = 'no-cache'
            response.headers['Expires'] = '0'
            response.headers['Access-Control-Allow-Origin'] = '*'
            response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, PATCH, DELETE, OPTIONS, HEAD'
            response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization, Range, Content-Range'

            started = g.get('started_at')
            if started is not None:
                elapsed = (time.perf_counter() - started) * 1000
                logger.info(f"{request.method} {request.path} {response.status_code} in {elapsed:.0f}ms")
        return response
