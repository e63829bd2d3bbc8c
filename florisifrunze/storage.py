"""
Document storage for the site.

``Storage`` is the interface the routes and commands talk to;
``DatabaseStorage`` keeps every collection in a table through Flask-SQLAlchemy,
with nested parts (features, FAQs, blog sections, galleries) in JSON columns.
Create and update calls take the ``to_record()`` output of a validated schema.
"""

from abc import ABC, abstractmethod
import logging

from sqlalchemy import text

from florisifrunze import db
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

logger = logging.getLogger(__name__)


class Storage(ABC):
    # Users
    @abstractmethod
    def get_user(self, id): ...
    @abstractmethod
    def get_user_by_username(self, username): ...
    @abstractmethod
    def get_user_by_email(self, email): ...
    @abstractmethod
    def get_users(self): ...
    @abstractmethod
    def create_user(self, data): ...
    @abstractmethod
    def update_user(self, id, data): ...
    @abstractmethod
    def delete_user(self, id): ...

    # Admin registration flag
    @abstractmethod
    def get_admin_register_status(self): ...
    @abstractmethod
    def set_admin_register_status(self, status): ...

    # Services
    @abstractmethod
    def get_service(self, id): ...
    @abstractmethod
    def get_services(self): ...
    @abstractmethod
    def get_featured_services(self): ...
    @abstractmethod
    def create_service(self, data): ...
    @abstractmethod
    def update_service(self, id, data): ...
    @abstractmethod
    def delete_service(self, id): ...

    # Subscriptions
    @abstractmethod
    def get_subscription(self, id): ...
    @abstractmethod
    def get_subscriptions(self): ...
    @abstractmethod
    def create_subscription(self, data): ...
    @abstractmethod
    def update_subscription(self, id, data): ...
    @abstractmethod
    def delete_subscription(self, id): ...

    # Appointments
    @abstractmethod
    def get_appointment(self, id): ...
    @abstractmethod
    def get_appointments(self): ...
    @abstractmethod
    def create_appointment(self, data): ...
    @abstractmethod
    def update_appointment(self, id, data): ...
    @abstractmethod
    def delete_appointment(self, id): ...

    # Inquiries
    @abstractmethod
    def get_inquiry(self, id): ...
    @abstractmethod
    def get_inquiries(self): ...
    @abstractmethod
    def create_inquiry(self, data): ...
    @abstractmethod
    def update_inquiry(self, id, data): ...
    @abstractmethod
    def delete_inquiry(self, id): ...

    # Blog
    @abstractmethod
    def get_blog_post(self, id): ...
    @abstractmethod
    def get_blog_posts(self): ...
    @abstractmethod
    def create_blog_post(self, data): ...
    @abstractmethod
    def update_blog_post(self, id, data): ...
    @abstractmethod
    def delete_blog_post(self, id): ...

    # Portfolio
    @abstractmethod
    def get_portfolio_item(self, id): ...
    @abstractmethod
    def get_portfolio_items(self): ...
    @abstractmethod
    def get_published_portfolio_items(self): ...
    @abstractmethod
    def get_portfolio_items_by_service(self, service_id): ...
    @abstractmethod
    def increment_portfolio_view_count(self, id): ...
    @abstractmethod
    def create_portfolio_item(self, data): ...
    @abstractmethod
    def update_portfolio_item(self, id, data): ...
    @abstractmethod
    def delete_portfolio_item(self, id): ...

    # Testimonials
    @abstractmethod
    def get_testimonial(self, id): ...
    @abstractmethod
    def get_testimonials(self): ...
    @abstractmethod
    def create_testimonial(self, data): ...
    @abstractmethod
    def update_testimonial(self, id, data): ...
    @abstractmethod
    def delete_testimonial(self, id): ...

    # Carousel images
    @abstractmethod
    def get_carousel_image(self, id): ...
    @abstractmethod
    def get_carousel_images(self): ...
    @abstractmethod
    def create_carousel_image(self, data): ...
    @abstractmethod
    def update_carousel_image(self, id, data): ...
    @abstractmethod
    def delete_carousel_image(self, id): ...
    @abstractmethod
    def reorder_carousel_image(self, id, direction): ...

    # Feature cards
    @abstractmethod
    def get_feature_card(self, id): ...
    @abstractmethod
    def get_feature_cards(self): ...
    @abstractmethod
    def create_feature_card(self, data): ...
    @abstractmethod
    def update_feature_card(self, id, data): ...
    @abstractmethod
    def delete_feature_card(self, id): ...
    @abstractmethod
    def reorder_feature_card(self, id, direction): ...

    @abstractmethod
    def check_connection(self): ...


class DatabaseStorage(Storage):

    # Generic document operations

    def _get(self, model, id):
        return db.session.get(model, id)

    def _all(self, model, *order_by):
        query = model.query
        if order_by:
            query = query.order_by(*order_by)
        return query.all()

    def _create(self, model, data):
        record = model(**data)
        db.session.add(record)
        db.session.commit()
        logger.debug(f"Created {model.__name__} id={record.id}")
        return record

    def _update(self, model, id, data):
        record = db.session.get(model, id)
        if record is None:
            return None
        for field, value in data.items():
            setattr(record, field, value)
        db.session.commit()
        logger.debug(f"Updated {model.__name__} id={id}")
        return record

    def _delete(self, model, id):
        record = db.session.get(model, id)
        if record is None:
            return False
        db.session.delete(record)
        db.session.commit()
        logger.debug(f"Deleted {model.__name__} id={id}")
        return True

    def _reorder(self, model, id, direction):
        """Swap display order with the neighbour above or below."""
        if direction not in ('up', 'down'):
            return False
        records = self._all(model, model.display_order, model.id)
        index = next((i for i, record in enumerate(records) if record.id == id), None)
        if index is None:
            return False
        new_index = index - 1 if direction == 'up' else index + 1
        if new_index < 0 or new_index >= len(records):
            return False

        records[index], records[new_index] = records[new_index], records[index]
        # Renumber so ties left over from seeding or manual edits disappear
        for position, record in enumerate(records, start=1):
            record.display_order = position
        db.session.commit()
        return True

    # Users

    def get_user(self, id):
        return self._get(User, id)

    def get_user_by_username(self, username):
        return User.query.filter_by(username=username).first()

    def get_user_by_email(self, email):
        return User.query.filter(db.func.lower(User.email) == (email or '').lower()).first()

    def get_users(self):
        return self._all(User, User.id)

    def create_user(self, data):
        return self._create(User, data)

    def update_user(self, id, data):
        return self._update(User, id, data)

    def delete_user(self, id):
        return self._delete(User, id)

    def get_admin_register_status(self):
        setting = AdminRegisterSetting.query.first()
        return bool(setting and setting.adminregister)

    def set_admin_register_status(self, status):
        setting = AdminRegisterSetting.query.first()
        if setting is None:
            setting = AdminRegisterSetting(adminregister=bool(status))
            db.session.add(setting)
        else:
            setting.adminregister = bool(status)
        db.session.commit()
        logger.info(f"Admin registration {'enabled' if status else 'disabled'}")

    # Services

    def get_service(self, id):
        return self._get(Service, id)

    def get_services(self):
        return self._all(Service, Service.id)

    def get_featured_services(self):
        return Service.query.filter_by(is_featured=True).order_by(Service.id).all()

    def create_service(self, data):
        return self._create(Service, data)

    def update_service(self, id, data):
        return self._update(Service, id, data)

    def delete_service(self, id):
        return self._delete(Service, id)

    # Subscriptions

    def get_subscription(self, id):
        return self._get(Subscription, id)

    def get_subscriptions(self):
        return self._all(Subscription, Subscription.display_order, Subscription.id)

    def create_subscription(self, data):
        return self._create(Subscription, data)

    def update_subscription(self, id, data):
        return self._update(Subscription, id, data)

    def delete_subscription(self, id):
        return self._delete(Subscription, id)

    # Appointments

    def get_appointment(self, id):
        return self._get(Appointment, id)

    def get_appointments(self):
        return self._all(Appointment, Appointment.date.desc(), Appointment.id.desc())

    def create_appointment(self, data):
        return self._create(Appointment, data)

    def update_appointment(self, id, data):
        return self._update(Appointment, id, data)

    def delete_appointment(self, id):
        return self._delete(Appointment, id)

    # Inquiries

    def get_inquiry(self, id):
        return self._get(Inquiry, id)

    def get_inquiries(self):
        return self._all(Inquiry, Inquiry.created_at.desc(), Inquiry.id.desc())

    def create_inquiry(self, data):
        return self._create(Inquiry, data)

    def update_inquiry(self, id, data):
        return self._update(Inquiry, id, data)

    def delete_inquiry(self, id):
        return self._delete(Inquiry, id)

    # Blog

    def get_blog_post(self, id):
        return self._get(BlogPost, id)

    def get_blog_posts(self):
        return self._all(BlogPost, BlogPost.published_at.desc(), BlogPost.id.desc())

    def create_blog_post(self, data):
        return self._create(BlogPost, data)

    def update_blog_post(self, id, data):
        return self._update(BlogPost, id, data)

    def delete_blog_post(self, id):
        return self._delete(BlogPost, id)

    # Portfolio

    def get_portfolio_item(self, id):
        return self._get(PortfolioItem, id)

    def get_portfolio_items(self):
        return self._all(PortfolioItem, PortfolioItem.id)

    def get_published_portfolio_items(self):
        return (PortfolioItem.query.filter_by(status='Published')
                .order_by(PortfolioItem.featured.desc(), PortfolioItem.id).all())

    def get_portfolio_items_by_service(self, service_id):
        return (PortfolioItem.query.filter_by(service_id=service_id, status='Published')
                .order_by(PortfolioItem.id).all())

    def increment_portfolio_view_count(self, id):
        item = self._get(PortfolioItem, id)
        if item is None:
            return None
        item.view_count = (item.view_count or 0) + 1
        db.session.commit()
        return item

    def create_portfolio_item(self, data):
        return self._create(PortfolioItem, data)

    def update_portfolio_item(self, id, data):
        return self._update(PortfolioItem, id, data)

    def delete_portfolio_item(self, id):
        return self._delete(PortfolioItem, id)

    # Testimonials

    def get_testimonial(self, id):
        return self._get(Testimonial, id)

    def get_testimonials(self):
        return self._all(Testimonial, Testimonial.display_order, Testimonial.id)

    def create_testimonial(self, data):
        return self._create(Testimonial, data)

    def update_testimonial(self, id, data):
        return self._update(Testimonial, id, data)

    def delete_testimonial(self, id):
        return self._delete(Testimonial, id)

    # Carousel images

    def get_carousel_image(self, id):
        return self._get(CarouselImage, id)

    def get_carousel_images(self):
        return self._all(CarouselImage, CarouselImage.display_order, CarouselImage.id)

    def create_carousel_image(self, data):
        return self._create(CarouselImage, data)

    def update_carousel_image(self, id, data):
        return self._update(CarouselImage, id, data)

    def delete_carousel_image(self, id):
        return self._delete(CarouselImage, id)

    def reorder_carousel_image(self, id, direction):
        return self._reorder(CarouselImage, id, direction)

    # Feature cards

    def get_feature_card(self, id):
        return self._get(FeatureCard, id)

    def get_feature_cards(self):
        return self._all(FeatureCard, FeatureCard.display_order, FeatureCard.id)

    def create_feature_card(self, data):
        return self._create(FeatureCard, data)

    def update_feature_card(self, id, data):
        return self._update(FeatureCard, id, data)

    def delete_feature_card(self, id):
        return self._delete(FeatureCard, id)

    def reorder_feature_card(self, id, direction):
        return self._reorder(FeatureCard, id, direction)

    def check_connection(self):
        db.session.execute(text('SELECT 1'))
        return True


storage = DatabaseStorage()
