from conftest import login, submit, add_applicant, applicant_status, review_count, notification_count

from reviewdesk.models import Review, AuditLog, Notification


def test_requires_authentication(client, seed):
    resp = submit(client, seed['applicant'])
    assert resp.status_code == 401
    assert resp.get_json()['success'] is False


def test_reviewer_first_submission_then_resubmission(app, client, seed):
    login(client, seed['r1'])
    resp = submit(client, seed['applicant'], jobId=seed['job'], rating=5, decision='strong_hire')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['message'] == 'Review submitted successfully'
    review_id = body['review']['id']
    assert body['review']['rating'] == 5
    assert applicant_status(app, seed['applicant']) == 'evaluated'
    # r2, admin, superadmin; not the submitter, not the inactive reviewer
    assert notification_count(app, related_id=seed['applicant']) == 3
    assert notification_count(app, recipient_id=seed['r1']) == 0
    assert notification_count(app, recipient_id=seed['inactive']) == 0

    resp = submit(client, seed['applicant'], rating=4, decision='strong_hire')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['message'] == 'Review updated successfully'
    assert body['review']['id'] == review_id
    assert body['review']['rating'] == 4
    assert applicant_status(app, seed['applicant']) == 'evaluated'
    assert notification_count(app) == 3
    assert review_count(app, applicant_id=seed['applicant'], reviewer_id=seed['r1']) == 1


def test_notification_content(app, client, seed):
    login(client, seed['r1'])
    submit(client, seed['applicant'], rating=5, decision='strong_hire')
    with app.app_context():
        n = Notification.query.filter_by(recipient_id=seed['admin']).one()
        assert n.type == 'review_completed'
        assert n.priority == 'high'
        assert n.title == 'New Review Submitted'
        assert n.message == 'Reviewer One has evaluated Alice Applicant for Backend Engineer. Rating: 5/5'
        assert n.action_url == f"/dashboard/applicants?open={seed['applicant']}&tab=reviews"
        assert n.is_read is False


def test_admin_review_leaves_status_alone(app, client, seed):
    login(client, seed['admin'])
    resp = submit(client, seed['applicant'], rating=2, decision='not_recommended')
    assert resp.status_code == 200
    assert review_count(app, applicant_id=seed['applicant']) == 1
    assert applicant_status(app, seed['applicant']) == 'new'


def test_superadmin_review_leaves_status_alone(app, client, seed):
    login(client, seed['super'])
    assert submit(client, seed['applicant'], rating=5, decision='strong_hire').status_code == 200
    assert applicant_status(app, seed['applicant']) == 'new'


def test_reviewer_cannot_downgrade_advanced_applicants(app, client, seed):
    login(client, seed['r1'])
    for status in ('interviewing', 'hired', 'rejected'):
        aid = add_applicant(app, status=status, job_id=seed['job'])
        assert submit(client, aid).status_code == 200
        assert applicant_status(app, aid) == status


def test_job_id_recovered_from_applicant(app, client, seed):
    login(client, seed['r1'])
    resp = submit(client, seed['applicant'])
    assert resp.status_code == 200
    with app.app_context():
        review = Review.query.filter_by(id=resp.get_json()['review']['id']).one()
        assert review.job_id == seed['job']


def test_unrecoverable_job_id_is_validation_error(app, client, seed):
    aid = add_applicant(app, job_id=None)
    login(client, seed['r1'])
    resp = submit(client, aid)
    assert resp.status_code == 400
    assert 'jobId' in resp.get_json()['details']
    assert review_count(app) == 0


def test_unknown_applicant_is_404(app, client, seed):
    login(client, seed['r1'])
    resp = submit(client, 9999)
    assert resp.status_code == 404
    assert resp.get_json()['error'] == 'Applicant not found'


def test_validation_errors_list_fields_and_write_nothing(app, client, seed):
    login(client, seed['r1'])
    resp = submit(client, seed['applicant'], rating=7, decision='maybe', pros='not a list',
                  skillRatings={'Python': 9})
    assert resp.status_code == 400
    details = resp.get_json()['details']
    assert {'rating', 'decision', 'pros', 'skillRatings'} <= set(details)
    assert review_count(app) == 0
    assert applicant_status(app, seed['applicant']) == 'new'


def test_missing_and_fractional_rating_rejected(client, seed):
    login(client, seed['r1'])
    resp = client.post('/api/reviews/submit', json={'applicantId': seed['applicant'], 'decision': 'neutral'})
    assert resp.status_code == 400
    assert 'rating' in resp.get_json()['details']

    resp = submit(client, seed['applicant'], rating=4.5)
    assert resp.status_code == 400
    assert 'rating' in resp.get_json()['details']


def test_full_payload_is_persisted(app, client, seed):
    login(client, seed['r1'])
    resp = submit(client, seed['applicant'], rating=3, decision='neutral',
                  pros=['clear communicator', 'solid SQL'], cons=['little async experience'],
                  privateNotes='  ask about notice period ', summary='Decent fit',
                  skillRatings={'Python': 4, 'Communication': 5})
    assert resp.status_code == 200
    with app.app_context():
        r = Review.query.one()
        assert r.pros == ['clear communicator', 'solid SQL']
        assert r.cons == ['little async experience']
        assert r.private_notes == 'ask about notice period'
        assert r.summary == 'Decent fit'
        assert r.skill_ratings == {'Python': 4, 'Communication': 5}


def test_duplicate_key_race_maps_to_409(app, client, seed, monkeypatch):
    login(client, seed['r1'])
    assert submit(client, seed['applicant']).status_code == 200

    # the existence check misses the row a concurrent request just wrote
    monkeypatch.setattr('reviewdesk.services.review_store._find_review', lambda *a: None)
    resp = submit(client, seed['applicant'], rating=2)
    assert resp.status_code == 409
    assert resp.get_json()['error'] == 'You have already reviewed this applicant'
    assert review_count(app, applicant_id=seed['applicant']) == 1


def test_failing_notification_store_does_not_fail_submission(app, client, seed, monkeypatch):
    def boom(rows):
        raise RuntimeError('notification store down')

    monkeypatch.setattr('reviewdesk.services.fanout.bulk_insert_notifications', boom)
    login(client, seed['r1'])
    resp = submit(client, seed['applicant'], rating=5, decision='strong_hire')
    assert resp.status_code == 200
    assert review_count(app, applicant_id=seed['applicant']) == 1
    assert applicant_status(app, seed['applicant']) == 'evaluated'
    assert notification_count(app) == 0
    with app.app_context():
        assert AuditLog.query.filter_by(action='review.submitted').count() == 1


def test_failing_audit_does_not_fail_submission(app, client, seed, monkeypatch):
    def broken_audit(**kwargs):
        raise RuntimeError('audit store down')

    monkeypatch.setattr('reviewdesk.services.audit.AuditLog', broken_audit)
    login(client, seed['r1'])
    assert submit(client, seed['applicant']).status_code == 200
    assert review_count(app) == 1


def test_submission_is_audited(app, client, seed):
    login(client, seed['r1'])
    rid = submit(client, seed['applicant'], rating=5, decision='strong_hire').get_json()['review']['id']
    submit(client, seed['applicant'], rating=4, decision='recommended')
    with app.app_context():
        entries = AuditLog.query.filter_by(action='review.submitted').order_by(AuditLog.id).all()
        assert [e.details['isNewReview'] for e in entries] == [True, False]
        assert entries[0].resource_id == str(rid)
        assert entries[0].user_role == 'reviewer'
        assert entries[1].description.startswith('Updated review')


def test_second_reviewer_first_submission_is_idempotent_on_status(app, client, seed):
    login(client, seed['r1'])
    submit(client, seed['applicant'])
    login(client, seed['r2'])
    resp = submit(client, seed['applicant'], rating=2, decision='not_recommended')
    assert resp.status_code == 200
    assert applicant_status(app, seed['applicant']) == 'evaluated'
    # each first review broadcasts to everyone but its author
    assert notification_count(app) == 6
    assert review_count(app, applicant_id=seed['applicant']) == 2


def test_my_review(client, seed):
    login(client, seed['r1'])
    assert client.get(f"/api/reviews/my-review/{seed['applicant']}").get_json()['review'] is None
    submit(client, seed['applicant'], privateNotes='mine')
    review = client.get(f"/api/reviews/my-review/{seed['applicant']}").get_json()['review']
    assert review['rating'] == 4
    assert review['privateNotes'] == 'mine'


def test_average_and_histogram(client, seed):
    login(client, seed['r1'])
    empty = client.get(f"/api/reviews/average/{seed['applicant']}").get_json()
    assert empty['averageRating'] == 0
    assert empty['totalReviews'] == 0
    assert set(empty['decisionHistogram'].values()) == {0}

    submit(client, seed['applicant'], rating=5, decision='strong_hire')
    login(client, seed['r2'])
    submit(client, seed['applicant'], rating=4, decision='strong_hire')
    login(client, seed['admin'])
    submit(client, seed['applicant'], rating=4, decision='neutral')

    body = client.get(f"/api/reviews/average/{seed['applicant']}").get_json()
    assert body['averageRating'] == 4.3
    assert body['totalReviews'] == 3
    assert body['decisionHistogram'] == {
        'strongHire': 2, 'recommended': 0, 'neutral': 1, 'notRecommended': 0, 'strongNo': 0,
    }


def test_batch_badges(app, client, seed):
    other = add_applicant(app, job_id=seed['job'])
    login(client, seed['r1'])
    submit(client, seed['applicant'], rating=5, decision='strong_hire')
    login(client, seed['admin'])
    submit(client, seed['applicant'], rating=3, decision='neutral')

    resp = client.post('/api/reviews/batch-badges', json={'applicantIds': [seed['applicant'], other]})
    assert resp.status_code == 200
    grouped = resp.get_json()['reviewsByApplicant']
    assert grouped[str(other)] == []
    badges = grouped[str(seed['applicant'])]
    assert [(b['reviewerId'], b['reviewerRole'], b['rating'], b['decision']) for b in badges] == [
        (seed['r1'], 'reviewer', 5, 'strong_hire'),
        (seed['admin'], 'admin', 3, 'neutral'),
    ]
    assert badges[0]['reviewerName'] == 'Reviewer One'


def test_batch_badges_input_limits(app, client, seed):
    login(client, seed['r1'])
    assert client.post('/api/reviews/batch-badges', json={'applicantIds': []}).status_code == 400
    assert client.post('/api/reviews/batch-badges', json={}).status_code == 400
    too_many = list(range(1, app.config['BATCH_BADGES_MAX_IDS'] + 2))
    assert client.post('/api/reviews/batch-badges', json={'applicantIds': too_many}).status_code == 400


def test_rating_distribution_self_and_admin(app, client, seed):
    other = add_applicant(app, job_id=seed['job'])
    login(client, seed['r1'])
    submit(client, seed['applicant'], rating=5, decision='strong_hire')
    submit(client, other, rating=5, decision='strong_hire')

    body = client.get('/api/reviews/rating-distribution').get_json()
    assert body['distribution'] == [
        {'rating': 5, 'count': 2}, {'rating': 4, 'count': 0}, {'rating': 3, 'count': 0},
        {'rating': 2, 'count': 0}, {'rating': 1, 'count': 0},
    ]
    assert body['total'] == 2

    login(client, seed['r2'])
    resp = client.get(f"/api/reviews/rating-distribution?reviewerId={seed['r1']}")
    assert resp.status_code == 403

    login(client, seed['admin'])
    resp = client.get(f"/api/reviews/rating-distribution?reviewerId={seed['r1']}")
    assert resp.status_code == 200
    assert resp.get_json()['total'] == 2


def test_update_by_id_is_author_only_and_has_no_side_effects(app, client, seed):
    login(client, seed['r1'])
    rid = submit(client, seed['applicant'], rating=5, decision='strong_hire').get_json()['review']['id']
    before = notification_count(app)

    login(client, seed['r2'])
    assert client.post(f'/api/reviews/update/{rid}', json={'rating': 1}).status_code == 403

    login(client, seed['r1'])
    assert client.post('/api/reviews/update/9999', json={'rating': 1}).status_code == 404
    assert client.post(f'/api/reviews/update/{rid}', json={'rating': 0}).status_code == 400

    resp = client.post(f'/api/reviews/update/{rid}', json={'rating': 2, 'summary': 'changed my mind'})
    assert resp.status_code == 200
    with app.app_context():
        r = Review.query.filter_by(id=rid).one()
        assert (r.rating, r.decision, r.summary) == (2, 'strong_hire', 'changed my mind')
        assert AuditLog.query.filter_by(action='review.updated').count() == 1
    assert notification_count(app) == before


def test_my_stats(app, client, seed):
    login(client, seed['r1'])
    for i in range(6):
        aid = add_applicant(app, job_id=seed['job'], name=f'Candidate {i}')
        submit(client, aid, rating=3)
    stats = client.get('/api/reviews/my-stats').get_json()['stats']
    assert stats['totalReviews'] == 6
    assert len(stats['recentReviews']) == 5
    assert stats['recentReviews'][0]['applicantName'] == 'Candidate 5'
