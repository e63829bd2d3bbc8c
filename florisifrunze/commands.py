import json
import logging
import sys

import click
from flask import current_app
from flask.cli import AppGroup, with_appcontext
from werkzeug.security import generate_password_hash

from florisifrunze import db
from florisifrunze.schemas import password_problem, valid_email

logger = logging.getLogger(__name__)

media_cli = AppGroup('media', help='Cloudinary upload helpers.')
blog_cli = AppGroup('blog', help='Publish blog posts to a running site.')


def register_commands(app):
    app.cli.add_command(init_db)
    app.cli.add_command(create_admin)
    app.cli.add_command(create_sample_subscriptions_command)
    app.cli.add_command(cleanup_subscription_features_command)
    app.cli.add_command(check_db)
    app.cli.add_command(set_admin_register)
    app.cli.add_command(media_cli)
    app.cli.add_command(blog_cli)


@click.command('init-db')
@with_appcontext
@click.option('--no-demo', is_flag=True, help='Only create tables and the bootstrap admin.')
def init_db(no_demo):
    """Create tables, the bootstrap admin and demo content."""
    from florisifrunze.seed import ensure_admin_user, seed_demo_data
    db.create_all()
    user = ensure_admin_user()
    if user:
        click.echo(f"Admin user created: {user.username}")
    if not no_demo:
        seeded = seed_demo_data()
        click.echo(f"Seeded: {', '.join(seeded)}" if seeded else "Demo data already present.")
    click.echo("Database initialised.")


@click.command('create-admin')
@with_appcontext
@click.option('--name', prompt='Name')
@click.option('--email', prompt='Email')
@click.option('--username', prompt='Username')
@click.option('--password', prompt='Password', hide_input=True, confirmation_prompt=True)
def create_admin(name, email, username, password):
    """Create an admin account."""
    from florisifrunze.storage import storage

    if not valid_email(email):
        raise click.ClickException("Invalid email format")
    problem = password_problem(password)
    if problem:
        raise click.ClickException(problem)
    if storage.get_user_by_email(email):
        raise click.ClickException(f"A user with email {email} already exists")
    if storage.get_user_by_username(username):
        raise click.ClickException(f"A user with username {username} already exists")

    user = storage.create_user({
        'name': name,
        'email': email,
        'username': username,
        'password_hash': generate_password_hash(password),
        'role': 'admin',
    })
    click.echo(f"Admin user created: {user.username} ({user.email})")


@click.command('create-sample-subscriptions')
@with_appcontext
def create_sample_subscriptions_command():
    """Insert the three sample subscription plans when none exist."""
    from florisifrunze.seed import create_sample_subscriptions
    created = create_sample_subscriptions()
    if created:
        click.echo(f"Created {created} sample subscriptions.")
    else:
        click.echo("Subscriptions already exist, nothing created.")


@click.command('cleanup-subscription-features')
@with_appcontext
def cleanup_subscription_features_command():
    """Normalise every subscription feature to {name, value: "Inclus"}."""
    from florisifrunze.maintenance import cleanup_subscription_features
    updated = cleanup_subscription_features()
    click.echo(f"Cleanup completed! Updated {updated} subscriptions.")


@click.command('check-db')
@with_appcontext
def check_db():
    """Check the database connection and list tables."""
    from florisifrunze.maintenance import database_report
    click.echo(f"Connecting to {db.engine.url.render_as_string(hide_password=True)}")
    try:
        report = database_report()
    except Exception as e:
        logger.error(f"Database check failed: {e}")
        click.echo(f"Connection failed: {e}", err=True)
        sys.exit(1)
    click.echo("Connection successful.")
    for table, count in sorted(report.items()):
        click.echo(f"  {table}: {count}")


@click.command('set-admin-register')
@with_appcontext
@click.argument('state', type=click.Choice(['on', 'off']))
def set_admin_register(state):
    """Open or close admin self registration."""
    from florisifrunze.storage import storage
    storage.set_admin_register_status(state == 'on')
    click.echo(f"Admin registration is now {state}.")


@media_cli.command('upload-video')
@click.argument('path', required=False)
def upload_video_command(path):
    """Upload the background video (static/media/gardencut.mp4 by default)."""
    from florisifrunze import media
    try:
        result = media.upload_video(path)
    except (media.MediaConfigError, media.CloudinaryError, FileNotFoundError) as e:
        raise click.ClickException(str(e))
    click.echo(f"Video URL: {result['url']}")
    click.echo(f"Public ID: {result['publicId']}")
    click.echo(f"Optimized URL: {result['optimizedUrl']}")


@media_cli.command('upload-image')
@click.argument('path')
@click.option('--public-id', default=None)
def upload_image_command(path, public_id):
    """Upload a site image."""
    from florisifrunze import media
    try:
        result = media.upload_image(path, public_id=public_id)
    except (media.MediaConfigError, media.CloudinaryError, FileNotFoundError) as e:
        raise click.ClickException(str(e))
    click.echo(f"Image URL: {result['url']}")
    click.echo(f"Optimized URL: {result['optimizedUrl']}")


@media_cli.command('video-url')
def video_url_command():
    """Print the optimised background video URL."""
    from florisifrunze import media
    try:
        click.echo(media.video_url())
    except media.MediaConfigError as e:
        raise click.ClickException(str(e))


def _publisher(base_url, email, password):
    from florisifrunze.publisher import BlogPublisher
    return BlogPublisher(base_url or current_app.config.get('SITE_URL', 'http://localhost:8001'),
                         email, password)


publisher_options = [
    click.option('--base-url', default=None, help='Site URL (defaults to SITE_URL).'),
    click.option('--email', envvar='BLOG_PUBLISHER_EMAIL', prompt='Admin email'),
    click.option('--password', envvar='BLOG_PUBLISHER_PASSWORD', prompt='Password', hide_input=True),
]


def with_publisher_options(f):
    for option in reversed(publisher_options):
        f = option(f)
    return f


@blog_cli.command('create')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@with_publisher_options
def blog_create(path, base_url, email, password):
    """Publish the post stored in a JSON file."""
    from florisifrunze.publisher import BlogPublisher, PublisherError
    try:
        post = BlogPublisher.load_blog_from_file(path)
        created = _publisher(base_url, email, password).create_blog_post(post)
    except PublisherError as e:
        raise click.ClickException(str(e))
    click.echo(f"Created blog post {created['id']}: {created['title']}")


@blog_cli.command('update')
@click.argument('id', type=int)
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@with_publisher_options
def blog_update(id, path, base_url, email, password):
    """Update a post with the fields stored in a JSON file."""
    from florisifrunze.publisher import BlogPublisher, PublisherError
    try:
        changes = BlogPublisher.load_blog_from_file(path)
        updated = _publisher(base_url, email, password).update_blog_post(id, changes)
    except PublisherError as e:
        raise click.ClickException(str(e))
    click.echo(f"Updated blog post {updated['id']}: {updated['title']}")


@blog_cli.command('delete')
@click.argument('id', type=int)
@with_publisher_options
def blog_delete(id, base_url, email, password):
    """Delete a post."""
    from florisifrunze.publisher import PublisherError
    try:
        _publisher(base_url, email, password).delete_blog_post(id)
    except PublisherError as e:
        raise click.ClickException(str(e))
    click.echo(f"Deleted blog post {id}")


@blog_cli.command('template')
@click.argument('path', required=False)
def blog_template(path):
    """Write a starter post (or print it when no path is given)."""
    from florisifrunze.publisher import BlogPublisher, template_post
    post = template_post()
    if path:
        BlogPublisher.save_blog_to_file(post, path)
        click.echo(f"Template written to {path}")
    else:
        click.echo(json.dumps(post, indent=2, ensure_ascii=False))
