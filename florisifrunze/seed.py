"""Bootstrap admin account and demo content for empty databases."""

import logging
from datetime import datetime

from flask import current_app
from werkzeug.security import generate_password_hash

from florisifrunze.schemas import (BlogPostIn, CarouselImageIn, FeatureCardIn, PortfolioItemIn,
                                   ServiceIn, SubscriptionIn, TestimonialIn)
from florisifrunze.storage import storage

logger = logging.getLogger(__name__)

DEMO_SERVICES = [
    {
        'name': 'Intretinere gradina',
        'description': 'Plivit, taieri de formare, ingrijirea gazonului si curatenie generala, '
                       'ca gradina sa arate bine in fiecare anotimp.',
        'shortDesc': 'Intretinere regulata pentru o gradina sanatoasa',
        'price': 'De la 450 RON/luna',
        'imageUrl': '/images/services/maintenance.jpg',
        'featured': True,
        'duration': '2-4 ore pe vizita',
        'benefits': ['Gradina ingrijita tot anul', 'Plante sanatoase'],
        'includes': ['Tuns gazon', 'Plivit', 'Taieri de intretinere'],
        'faqs': [{'question': 'Cat de des veniti?', 'answer': 'Saptamanal sau bilunar, dupa abonament.'}],
        'recommendedFrequency': 'Saptamanal',
        'seasonalAvailability': ['Primavara', 'Vara', 'Toamna'],
    },
    {
        'name': 'Design peisagistic',
        'description': 'Proiectam spatii exterioare frumoase si functionale, adaptate '
                       'preferintelor tale si conditiilor terenului.',
        'shortDesc': 'Proiecte personalizate pentru spatiul tau exterior',
        'price': 'De la 1500 RON',
        'imageUrl': '/images/services/design.jpg',
        'featured': True,
        'includes': ['Consultanta la fata locului', 'Plan 2D', 'Lista de plante'],
    },
    {
        'name': 'Plantari',
        'description': 'Alegem, amplasam si plantam arbori, arbusti, perene si flori de sezon.',
        'shortDesc': 'Selectie si plantare de catre specialisti',
        'price': 'De la 800 RON',
        'imageUrl': '/images/services/planting.jpg',
        'featured': True,
    },
]

DEMO_TESTIMONIALS = [
    {
        'name': 'Ana Popescu',
        'role': 'Proprietar',
        'content': 'Echipa ne-a transformat curtea intr-un spatiu in care chiar ne petrecem timpul. '
                   'Profesionisti, punctuali si foarte placuti.',
        'rating': 5,
        'imageUrl': '/images/testimonials/person1.jpg',
        'displayOrder': 1,
    },
    {
        'name': 'Mihai Ionescu',
        'role': 'Administrator cladire de birouri',
        'content': 'Se ocupa de spatiile verzi ale cladirii noastre si clientii observa mereu intrarea.',
        'rating': 5,
        'imageUrl': '/images/testimonials/person2.jpg',
        'displayOrder': 2,
    },
]

DEMO_BLOG_POSTS = [
    {
        'title': 'Cele mai bune plante pentru gradinile umbroase',
        'excerpt': 'Plante care cresc frumos si fara soare direct.',
        'imageUrl': '/images/blog/shade-plants.jpg',
        'sections': [
            {'type': 'text', 'content': 'Hostele si ferigile sunt punctul de plecare pentru orice colt umbros.'},
            {'type': 'list', 'items': ['Hosta', 'Ferigi', 'Astilbe', 'Brunnera']},
        ],
        'tags': ['plante', 'umbra'],
        'publishedAt': datetime(2024, 4, 12),
    },
    {
        'title': 'Cum creezi o gradina prietenoasa cu polenizatorii',
        'excerpt': 'Sprijina albinele si fluturii alegand plantele potrivite.',
        'imageUrl': '/images/blog/pollinators.jpg',
        'sections': [
            {'type': 'heading', 'content': 'De ce conteaza', 'level': 2},
            {'type': 'text', 'content': 'Florile native infloresc esalonat si hranesc polenizatorii tot sezonul.'},
        ],
        'tags': ['biodiversitate'],
        'publishedAt': datetime(2024, 5, 18),
    },
]

DEMO_FEATURE_CARDS = [
    {'imageUrl': '/images/feature-cards/card1.jpg', 'title': 'Amenajari peisagistice',
     'description': 'Transformam spatiul exterior cu amenajari realizate de specialisti.', 'displayOrder': 1},
    {'imageUrl': '/images/feature-cards/card2.jpg', 'title': 'Design de gradina',
     'description': 'Gradina pe care ti-o doresti, proiectata de profesionisti.', 'displayOrder': 2},
    {'imageUrl': '/images/feature-cards/card3.jpg', 'title': 'Ingrijire gazon',
     'description': 'Gazon verde si sanatos cu programele noastre de ingrijire.', 'displayOrder': 3},
    {'imageUrl': '/images/feature-cards/card4.jpg', 'title': 'Servicii de intretinere',
     'description': 'O gradina frumoasa tot anul.', 'displayOrder': 4},
]

DEMO_CAROUSEL_IMAGES = [
    {'imageUrl': '/images/carousel/garden1.jpg', 'altText': 'Gradina cu gazon proaspat tuns', 'displayOrder': 1},
    {'imageUrl': '/images/carousel/garden2.jpg', 'altText': 'Straturi de flori perene', 'displayOrder': 2},
    {'imageUrl': '/images/carousel/garden3.jpg', 'altText': 'Terasa cu plante in ghivece', 'displayOrder': 3},
]

SAMPLE_SUBSCRIPTIONS = [
    {
        'name': 'Abonament Basic',
        'description': 'Pentru gradini mici si spatii cu necesitati simple',
        'color': '#4CAF50',
        'price': '199 RON / luna',
        'features': [
            {'name': 'Tunderea gazonului', 'value': 'De 2 ori pe luna'},
            {'name': 'Ingrijirea plantelor', 'value': 'De baza'},
            {'name': 'Curatenie gradina', 'value': 'Da'},
            {'name': 'Fertilizare', 'value': 'Trimestriala'},
            {'name': 'Consultanta', 'value': 'Email'},
        ],
        'isPopular': False,
        'displayOrder': 1,
    },
    {
        'name': 'Abonament Standard',
        'description': 'Pentru gradini medii cu nevoi moderate de intretinere',
        'color': '#2196F3',
        'price': '349 RON / luna',
        'features': [
            {'name': 'Tunderea gazonului', 'value': 'Saptamanal'},
            {'name': 'Ingrijirea plantelor', 'value': 'Completa'},
            {'name': 'Curatenie gradina', 'value': 'Da'},
            {'name': 'Fertilizare', 'value': 'Lunara'},
            {'name': 'Consultanta', 'value': 'Telefon & Email'},
            {'name': 'Tratament preventiv', 'value': 'Da'},
        ],
        'isPopular': True,
        'displayOrder': 2,
    },
    {
        'name': 'Abonament Premium',
        'description': 'Pentru gradini extinse si peisagistica profesionala',
        'color': '#FF9800',
        'price': '599 RON / luna',
        'features': [
            {'name': 'Tunderea gazonului', 'value': 'Saptamanal'},
            {'name': 'Ingrijirea plantelor', 'value': 'Premium'},
            {'name': 'Curatenie gradina', 'value': 'Da'},
            {'name': 'Fertilizare', 'value': 'Saptamanala'},
            {'name': 'Consultanta', 'value': '24/7'},
            {'name': 'Tratament preventiv', 'value': 'Da'},
            {'name': 'Design peisagistic', 'value': 'Inclus'},
            {'name': 'Vizite urgente', 'value': 'Prioritar'},
        ],
        'isPopular': False,
        'displayOrder': 3,
    },
]


def ensure_admin_user():
    """Create the configured admin account when the users table is empty."""
    if storage.get_users():
        return None
    admin = current_app.config['DEFAULT_ADMIN']
    user = storage.create_user({
        'name': admin['name'],
        'email': admin['email'],
        'username': admin['username'],
        'password_hash': generate_password_hash(admin['password']),
        'role': 'admin',
    })
    logger.info(f"Created bootstrap admin '{user.username}'")
    return user


def create_sample_subscriptions():
    """Insert the three sample plans. Returns how many were created."""
    if storage.get_subscriptions():
        logger.info("Subscriptions already exist, skipping sample data")
        return 0
    for data in SAMPLE_SUBSCRIPTIONS:
        storage.create_subscription(SubscriptionIn.model_validate(data).to_record())
    logger.info(f"Created {len(SAMPLE_SUBSCRIPTIONS)} sample subscriptions")
    return len(SAMPLE_SUBSCRIPTIONS)


def seed_demo_data():
    """Fill every empty collection with demo content. Safe to run repeatedly."""
    seeded = []

    services = storage.get_services()
    if not services:
        services = [storage.create_service(ServiceIn.model_validate(data).to_record())
                    for data in DEMO_SERVICES]
        seeded.append('services')

    if not storage.get_portfolio_items() and len(services) >= 2:
        portfolio = [
            {
                'title': 'Transformarea unei curti din spate',
                'description': 'Reamenajarea completa a unei curti neglijate intr-un spatiu modern, '
                               'cu plante native si elemente sustenabile.',
                'serviceId': services[1].id,
                'imageUrl': '/images/portfolio/backyard1.jpg',
                'completionDate': datetime(2024, 5, 15),
                'featured': True,
                'status': 'Published',
                'location': 'Cluj-Napoca',
                'projectDuration': '4 saptamani',
                'difficultyLevel': 'Moderate',
            },
            {
                'title': 'Gradina de fatada rezistenta la seceta',
                'description': 'Un gazon care consuma multa apa a devenit o gradina xerofita '
                               'usor de intretinut.',
                'serviceId': services[-1].id,
                'imageUrl': '/images/portfolio/frontyard1.jpg',
                'completionDate': datetime(2024, 7, 22),
                'status': 'Published',
                'location': 'Brasov',
                'projectDuration': '2 saptamani',
                'difficultyLevel': 'Easy',
            },
        ]
        for data in portfolio:
            storage.create_portfolio_item(PortfolioItemIn.model_validate(data).to_record())
        seeded.append('portfolio')

    if not storage.get_testimonials():
        for data in DEMO_TESTIMONIALS:
            storage.create_testimonial(TestimonialIn.model_validate(data).to_record())
        seeded.append('testimonials')

    if not storage.get_blog_posts():
        for data in DEMO_BLOG_POSTS:
            storage.create_blog_post(BlogPostIn.model_validate(data).to_record())
        seeded.append('blog')

    if not storage.get_carousel_images():
        for data in DEMO_CAROUSEL_IMAGES:
            storage.create_carousel_image(CarouselImageIn.model_validate(data).to_record())
        seeded.append('carousel images')

    if not storage.get_feature_cards():
        for data in DEMO_FEATURE_CARDS:
            storage.create_feature_card(FeatureCardIn.model_validate(data).to_record())
        seeded.append('feature cards')

    if create_sample_subscriptions():
        seeded.append('subscriptions')

    if seeded:
        logger.info(f"Seeded demo data: {', '.join(seeded)}")
    else:
        logger.info("Database already contains data, skipping seed")
    return seeded
