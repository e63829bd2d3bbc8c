from sqlalchemy import Enum
from florisifrunze import db
from florisifrunze.models import isoformat

APPOINTMENT_STATUSES = ('Scheduled', 'Completed', 'Cancelled', 'Rescheduled')
APPOINTMENT_PRIORITIES = ('Normal', 'Urgent')

class Appointment(db.Model):
    __tablename__ = 'appointments'
    id = db.Column(db.Integer, primary_key=True)

    # Customer
    name = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(30), nullable=False)

    # Address
    building_name = db.Column(db.String(150))
    street_name = db.Column(db.String(150), nullable=False)
    house_number = db.Column(db.String(20), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    county = db.Column(db.String(100), nullable=False)
    postal_code = db.Column(db.String(20), nullable=False)

    service_id = db.Column(db.Integer, db.ForeignKey('services.id'), nullable=False)
    date = db.Column(db.DateTime, nullable=False)
    priority = db.Column(Enum(*APPOINTMENT_PRIORITIES, name='priority_enum'), default='Normal')

    notes = db.Column(db.Text)
    status = db.Column(Enum(*APPOINTMENT_STATUSES, name='appointment_status_enum'), default='Scheduled')

    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, default=db.func.current_timestamp(), onupdate=db.func.current_timestamp())

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'buildingName': self.building_name,
            'streetName': self.street_name,
            'houseNumber': self.house_number,
            'city': self.city,
            'county': self.county,
            'postalCode': self.postal_code,
            'serviceId': self.service_id,
            'date': isoformat(self.date),
            'priority': self.priority,
            'notes': self.notes,
            'status': self.status,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
