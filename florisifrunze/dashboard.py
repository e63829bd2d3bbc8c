from datetime import datetime, timedelta

from florisifrunze.models.appointments import APPOINTMENT_STATUSES
from florisifrunze.models.inquiries import INQUIRY_STATUSES
from florisifrunze.storage import storage


def dashboard_stats(recent=5):
    """Counts and recent activity for the admin dashboard."""
    appointments = storage.get_appointments()
    inquiries = storage.get_inquiries()

    now = datetime.now()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    start_week = today - timedelta(days=today.weekday())  # Monday
    end_week = start_week + timedelta(days=7)

    return {
        'counts': {
            'services': len(storage.get_services()),
            'subscriptions': len(storage.get_subscriptions()),
            'appointments': len(appointments),
            'inquiries': len(inquiries),
            'blogPosts': len(storage.get_blog_posts()),
            'portfolioItems': len(storage.get_portfolio_items()),
            'testimonials': len(storage.get_testimonials()),
        },
        'appointmentsByStatus': {
            status: sum(1 for a in appointments if a.status == status) for status in APPOINTMENT_STATUSES
        },
        'inquiriesByStatus': {
            status: sum(1 for i in inquiries if i.status == status) for status in INQUIRY_STATUSES
        },
        'appointmentsThisWeek': sum(1 for a in appointments if a.date and start_week <= a.date < end_week),
        'upcomingAppointments': [
            a.to_dict() for a in sorted(
                (a for a in appointments if a.date and a.date >= today and a.status == 'Scheduled'),
                key=lambda a: a.date)[:recent]
        ],
        'recentInquiries': [i.to_dict() for i in inquiries[:recent]],
    }
