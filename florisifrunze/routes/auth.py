from flask import Blueprint, render_template, redirect, url_for, request, flash
from flask_login import login_user, logout_user, login_required, current_user
from pydantic import ValidationError
from werkzeug.security import generate_password_hash, check_password_hash
import logging

from florisifrunze.forms import validation_messages
from florisifrunze.schemas import RegisterIn
from florisifrunze.storage import storage

bp = Blueprint('auth', __name__)

logger = logging.getLogger(__name__)


def safe_next(target):
    # Only follow local paths
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


@bp.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated and current_user.is_admin:
        return redirect(url_for('admin.admin_dashboard'))

    if request.method == 'POST':
        identifier = request.form.get('identifier', '').strip()
        password = request.form.get('password', '')

        user = storage.get_user_by_email(identifier) or storage.get_user_by_username(identifier)

        if user and check_password_hash(user.password_hash, password):
            login_user(user, remember='remember' in request.form)
            flash("Autentificare reusita!", "success")
            logger.info(f"Login: {user.username}")
            return redirect(safe_next(request.args.get('next')) or url_for('admin.admin_dashboard'))
        flash("Date de autentificare incorecte.", "danger")

    return render_template("auth/login.html")


@bp.route('/logout')
@login_required
def logout():
    logout_user()
    flash("Te-ai deconectat.", "info")
    return redirect(url_for('home.index'))


@bp.route('/register', methods=['GET', 'POST'])
def register():
    if not storage.get_admin_register_status():
        flash("Inregistrarea administratorilor este dezactivata.", "warning")
        return redirect(url_for('auth.login'))

    if request.method == 'POST':
        if request.form.get('password') != request.form.get('confirm_password'):
            flash("Parolele nu coincid.", "danger")
            return render_template("auth/register.html", form=request.form)
        try:
            registration = RegisterIn.model_validate(request.form.to_dict())
        except ValidationError as e:
            for message in validation_messages(e):
                flash(message, "danger")
            return render_template("auth/register.html", form=request.form)

        if storage.get_user_by_email(registration.email):
            flash("Acest email este deja inregistrat.", "warning")
            return render_template("auth/register.html", form=request.form)
        if storage.get_user_by_username(registration.username):
            flash("Acest nume de utilizator este deja folosit.", "warning")
            return render_template("auth/register.html", form=request.form)

        storage.create_user({
            'name': registration.name,
            'email': registration.email,
            'username': registration.username,
            'password_hash': generate_password_hash(registration.password),
            'role': 'admin',
        })
        flash("Cont de administrator creat. Te poti autentifica.", "success")
        return redirect(url_for('auth.login'))

    return render_template("auth/register.html", form={})
