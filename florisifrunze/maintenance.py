import logging

from sqlalchemy import func, inspect, select, table

from florisifrunze import db
from florisifrunze.storage import storage

logger = logging.getLogger(__name__)

INCLUDED_SUFFIX = ': Included'
INCLUDED_VALUE = 'Inclus'


def clean_feature_name(name):
    if INCLUDED_SUFFIX in name:
        return name.split(INCLUDED_SUFFIX)[0].strip()
    return name


def clean_subscription_features(features):
    """
    Normalise a subscription feature list.

    Every feature becomes ``{"name": ..., "value": "Inclus"}``; English
    ``": Included"`` suffixes left by older imports are removed from names and
    plain string features are turned into objects. Returns the cleaned list and
    whether anything changed.
    """
    cleaned = []
    changed = False
    for feature in features or []:
        if isinstance(feature, dict) and feature.get('name'):
            name = clean_feature_name(feature['name'])
            if name != feature['name'] or feature.get('value') != INCLUDED_VALUE:
                changed = True
            cleaned.append({'name': name, 'value': INCLUDED_VALUE})
        elif isinstance(feature, str):
            changed = True
            cleaned.append({'name': clean_feature_name(feature), 'value': INCLUDED_VALUE})
        else:
            cleaned.append(feature)
    return cleaned, changed


def cleanup_subscription_features():
    """Rewrite stored subscription features. Returns the number of updated subscriptions."""
    subscriptions = storage.get_subscriptions()
    logger.info(f"Found {len(subscriptions)} subscriptions to process")

    updated = 0
    for subscription in subscriptions:
        features, changed = clean_subscription_features(subscription.features)
        if not changed:
            continue
        # JSON columns are replaced, not mutated, so the change is tracked
        subscription.features = features
        updated += 1
        logger.info(f"Updated subscription: {subscription.name}")

    db.session.commit()
    return updated


def database_report():
    """Connectivity smoke test: returns the table names with their row counts."""
    storage.check_connection()
    inspector = inspect(db.engine)
    report = {}
    for name in inspector.get_table_names():
        report[name] = db.session.execute(select(func.count()).select_from(table(name))).scalar()
    return report
