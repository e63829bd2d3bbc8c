"""
Validation schemas for every document the site writes.

Payloads arrive in camelCase (the JSON API and the admin forms share the same
field names); ``Document.to_record`` turns a validated payload into the
snake_case column values expected by the models, with nested parts kept in
their camelCase wire shape inside JSON columns.
"""

import re
from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from florisifrunze.models.appointments import APPOINTMENT_PRIORITIES, APPOINTMENT_STATUSES
from florisifrunze.models.inquiries import INQUIRY_STATUSES
from florisifrunze.models.portfolio import DIFFICULTY_LEVELS, PORTFOLIO_STATUSES

HEX_COLOR = re.compile(r'^#[0-9A-Fa-f]{6}$')
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

AppointmentStatus = Literal[APPOINTMENT_STATUSES]
AppointmentPriority = Literal[APPOINTMENT_PRIORITIES]
InquiryStatus = Literal[INQUIRY_STATUSES]
PortfolioStatus = Literal[PORTFOLIO_STATUSES]
DifficultyLevel = Literal[DIFFICULTY_LEVELS]

NonEmptyStr = Annotated[str, Field(min_length=1)]


class Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    def to_record(self):
        record = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, BaseModel):
                value = value.model_dump(by_alias=True, mode='json')
            elif isinstance(value, list):
                value = [item.model_dump(by_alias=True, mode='json') if isinstance(item, BaseModel) else item
                         for item in value]
            record[name] = value
        return record


class Part(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _local_naive(value):
    # Columns store naive local time
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


# Services

class Faq(Part):
    question: NonEmptyStr
    answer: NonEmptyStr


class ServiceIn(Document):
    name: NonEmptyStr
    description: NonEmptyStr
    short_desc: NonEmptyStr
    price: NonEmptyStr
    image_url: Optional[str] = None
    is_featured: bool = Field(False, alias='featured')
    duration: Optional[str] = None
    coverage: Optional[str] = None
    benefits: List[str] = []
    includes: List[str] = []
    faqs: List[Faq] = []
    recommended_frequency: Optional[str] = None
    seasonal_availability: List[str] = []
    gallery_images: List[str] = []

    blank_to_none = field_validator('image_url', 'duration', 'coverage', 'recommended_frequency',
                                  mode='before')(_blank_to_none)


# Subscriptions

class Feature(Part):
    name: NonEmptyStr
    value: NonEmptyStr


class SubscriptionIn(Document):
    name: NonEmptyStr
    description: str = ''
    color: str = '#FFFFFF'
    price: NonEmptyStr
    features: List[Feature] = []
    is_popular: bool = False
    display_order: int = Field(0, ge=0)
    image_url: Optional[str] = None

    blank_to_none = field_validator('image_url', mode='before')(_blank_to_none)

    @field_validator('description', mode='before')
    @classmethod
    def none_description(cls, value):
        return value or ''

    @field_validator('color')
    @classmethod
    def hex_color(cls, value):
        if not HEX_COLOR.match(value):
            raise ValueError('color must be a hex value like #4CAF50')
        return value.upper()


# Appointments and inquiries

class AppointmentIn(Document):
    name: NonEmptyStr
    email: EmailStr
    phone: NonEmptyStr
    building_name: Optional[str] = None
    street_name: NonEmptyStr
    house_number: NonEmptyStr
    city: NonEmptyStr
    county: NonEmptyStr
    postal_code: NonEmptyStr
    service_id: int
    date: datetime
    priority: AppointmentPriority = 'Normal'
    notes: Optional[str] = None
    status: AppointmentStatus = 'Scheduled'

    blank_to_none = field_validator('building_name', 'notes', mode='before')(_blank_to_none)
    local_naive = field_validator('date')(_local_naive)


class InquiryIn(Document):
    name: NonEmptyStr
    email: EmailStr
    phone: Optional[str] = None
    message: NonEmptyStr
    service_id: Optional[int] = None
    status: InquiryStatus = 'new'

    blank_to_none = field_validator('phone', 'service_id', mode='before')(_blank_to_none)


# Blog

class Section(Part):
    type: Literal['text', 'image', 'quote', 'heading', 'list']
    content: Optional[str] = None
    image_url: Optional[str] = None
    caption: Optional[str] = None
    level: Optional[int] = Field(None, ge=2, le=4)
    items: List[str] = []
    alignment: Literal['left', 'center', 'right'] = 'left'

    @model_validator(mode='after')
    def required_by_type(self):
        if self.type in ('text', 'quote', 'heading') and not self.content:
            raise ValueError(f'{self.type} sections need content')
        if self.type == 'image' and not self.image_url:
            raise ValueError('image sections need an imageUrl')
        if self.type == 'list' and not self.items:
            raise ValueError('list sections need at least one item')
        if self.type == 'heading' and self.level is None:
            self.level = 2
        return self


def combined_content(sections):
    """Join the text and heading sections into the plain ``content`` body."""
    parts = []
    for section in sections:
        section_type = section['type'] if isinstance(section, dict) else section.type
        content = section.get('content') if isinstance(section, dict) else section.content
        if section_type in ('text', 'heading') and content:
            parts.append(content)
    return '\n\n'.join(parts).strip()


class BlogPostIn(Document):
    title: NonEmptyStr
    excerpt: NonEmptyStr
    content: str = ''
    image_url: Optional[str] = None
    sections: List[Section] = []
    tags: List[str] = []
    published_at: datetime = Field(default_factory=datetime.now)

    blank_to_none = field_validator('image_url', mode='before')(_blank_to_none)

    @field_validator('content', mode='before')
    @classmethod
    def none_content(cls, value):
        return value or ''

    @field_validator('published_at', mode='before')
    @classmethod
    def default_published_at(cls, value):
        return value or datetime.now()

    local_naive = field_validator('published_at')(_local_naive)

    @field_validator('tags')
    @classmethod
    def clean_tags(cls, value):
        return [tag.strip() for tag in value if tag and tag.strip()]

    @model_validator(mode='after')
    def derive_content(self):
        if not self.content:
            self.content = combined_content(self.sections)
        if not self.content:
            raise ValueError('content is required when no text sections are given')
        return self


# Portfolio

class BeforeAfterImage(Part):
    before: NonEmptyStr
    after: NonEmptyStr
    caption: Optional[str] = None
    rich_description: Optional[str] = None
    order: int = 0


class ClientTestimonial(Part):
    client_name: Optional[str] = None
    comment: Optional[str] = None
    display_permission: bool = False


class Seo(Part):
    meta_title: str = ''
    meta_description: str = ''
    tags: List[str] = []


class PortfolioItemIn(Document):
    title: NonEmptyStr
    description: NonEmptyStr
    service_id: Optional[int] = None
    image_url: Optional[str] = None
    images: List[BeforeAfterImage] = []
    location: Optional[str] = None
    completion_date: Optional[datetime] = None
    project_duration: Optional[str] = None
    difficulty_level: Optional[DifficultyLevel] = None
    client_testimonial: Optional[ClientTestimonial] = None
    featured: bool = False
    seo: Seo = Seo()
    status: PortfolioStatus = 'Draft'
    view_count: int = Field(0, ge=0)

    blank_to_none = field_validator('service_id', 'image_url', 'location', 'completion_date',
                              'project_duration', 'difficulty_level', mode='before')(_blank_to_none)
    local_naive = field_validator('completion_date')(_local_naive)

    @field_validator('seo', mode='before')
    @classmethod
    def none_seo(cls, value):
        return value or {}


# Testimonials and home page blocks

class TestimonialIn(Document):
    name: NonEmptyStr
    role: Optional[str] = None
    content: NonEmptyStr
    rating: Optional[int] = Field(None, ge=1, le=5)
    image_url: Optional[str] = None
    display_order: int = 0

    blank_to_none = field_validator('role', 'rating', 'image_url', mode='before')(_blank_to_none)


class CarouselImageIn(Document):
    image_url: NonEmptyStr
    alt_text: str = ''
    display_order: int = 0


class FeatureCardIn(Document):
    image_url: NonEmptyStr
    title: NonEmptyStr
    description: str = ''
    display_order: int = 0


# Authentication

def password_problem(password):
    """Return the first rule a password breaks, or None when it is strong enough."""
    if len(password) < 8:
        return 'Password must be at least 8 characters long'
    if not re.search(r'[a-z]', password):
        return 'Password must contain at least one lowercase letter'
    if not re.search(r'[A-Z]', password):
        return 'Password must contain at least one uppercase letter'
    if not re.search(r'\d', password):
        return 'Password must contain at least one number'
    return None


def valid_email(email):
    return bool(EMAIL_PATTERN.match(email or ''))


class LoginIn(BaseModel):
    # Passwords are compared exactly as typed, only identifiers are trimmed
    username: Optional[str] = None
    email: Optional[str] = None
    password: NonEmptyStr

    strip = field_validator('username', 'email', mode='before')(_strip)

    @model_validator(mode='after')
    def identifier_required(self):
        if not (self.username or self.email):
            raise ValueError('username or email is required')
        return self

    @property
    def identifier(self):
        return self.email or self.username


class RegisterIn(BaseModel):
    name: NonEmptyStr
    email: EmailStr
    username: str = Field(..., min_length=3)
    password: str

    strip = field_validator('name', 'email', 'username', mode='before')(_strip)

    @field_validator('password')
    @classmethod
    def strong_password(cls, value):
        problem = password_problem(value)
        if problem:
            raise ValueError(problem)
        return value


class RegisterStatusIn(BaseModel):
    adminregister: bool


def _field_for(schema, key):
    for name, field in schema.model_fields.items():
        if key in (name, field.alias):
            return field
    return None


def validate_update(schema, current, changes):
    """
    Merge a partial payload over the stored document and validate the result.

    A None in the payload clears the field: optional fields become None and
    fields with a default (lists, display order, SEO block) go back to it.
    """
    merged = dict(current)
    for key, value in (changes or {}).items():
        field = _field_for(schema, key)
        if value is None and field is not None and not field.is_required():
            value = field.get_default(call_default_factory=True)
        merged[key] = value
    return schema.model_validate(merged)
