import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from reviewdesk import create_app
from reviewdesk.extensions import db
from reviewdesk.models import User, Job, Applicant, Review, Notification


@pytest.fixture
def app():
    app = create_app('config.TestingConfig')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(email, role, name=None, active=True):
    u = User(email=email, name=name or email.split('@')[0], role=role, is_active=active)
    u.set_password('password123')
    db.session.add(u)
    db.session.flush()
    return u.id


@pytest.fixture
def seed(app):
    """Staff roster, one job and one fresh applicant. Returns ids."""
    with app.app_context():
        ids = {
            'r1': make_user('r1@example.com', 'reviewer', 'Reviewer One'),
            'r2': make_user('r2@example.com', 'reviewer', 'Reviewer Two'),
            'admin': make_user('admin@example.com', 'admin', 'Ada Admin'),
            'super': make_user('super@example.com', 'superadmin', 'Sam Super'),
            'inactive': make_user('gone@example.com', 'reviewer', 'Inactive', active=False),
        }
        job = Job(title='Backend Engineer', created_by=ids['admin'])
        db.session.add(job)
        db.session.flush()
        applicant = Applicant(name='Alice Applicant', email='alice@example.com', status='new', job_id=job.id)
        db.session.add(applicant)
        db.session.commit()
        ids['job'] = job.id
        ids['applicant'] = applicant.id
    return ids


def login(client, user_id):
    with client.session_transaction() as sess:
        sess['_user_id'] = str(user_id)
        sess['_fresh'] = True


def add_applicant(app, status='new', job_id=None, name='Bob Applicant'):
    with app.app_context():
        a = Applicant(name=name, status=status, job_id=job_id)
        db.session.add(a)
        db.session.commit()
        return a.id


def applicant_status(app, applicant_id):
    with app.app_context():
        return Applicant.query.filter_by(id=applicant_id).first().status


def review_count(app, **filters):
    with app.app_context():
        return Review.query.filter_by(**filters).count()


def notification_count(app, **filters):
    with app.app_context():
        return Notification.query.filter_by(**filters).count()


def submit(client, applicant_id, **fields):
    payload = {'applicantId': applicant_id, 'rating': 4, 'decision': 'recommended'}
    payload.update(fields)
    return client.post('/api/reviews/submit', json=payload)
