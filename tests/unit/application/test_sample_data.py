from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

from pashuvision.application.sample_data import SampleDataGenerator, generate_sample_registrations
from pashuvision.domain.breeds import breeds_for
from pashuvision.domain.locations import INDIAN_STATES_AND_DISTRICTS

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


def test_generates_sample_and_user_records():
    registrations = generate_sample_registrations(rng=random.Random(1), now=NOW)

    assert len(registrations) == 120
    user_ids = [r.id for r in registrations if "-user-" in r.id]
    assert len(user_ids) == 5
    assert all(r.is_sample and r.synced and r.status == "Completed" for r in registrations)
    assert len({r.id for r in registrations}) == 120


def test_timestamps_fall_within_last_week():
    registrations = generate_sample_registrations(rng=random.Random(2), now=NOW)

    assert all(NOW - timedelta(days=7) <= r.timestamp <= NOW for r in registrations)
    for r in registrations:
        assert r.id.startswith(f"reg-{int(r.timestamp.timestamp() * 1000)}-")


def test_owner_fields_are_plausible():
    generator = SampleDataGenerator(rng=random.Random(3), now=NOW)

    for _ in range(50):
        owner = generator.owner()
        assert owner.mobile.startswith("9") and len(owner.mobile) == 10
        assert len(owner.id_number) == 12
        assert len(owner.pincode) == 6
        assert owner.id_type == "Aadhaar"
        assert owner.district in INDIAN_STATES_AND_DISTRICTS[owner.state]
        assert 1960 <= int(owner.dob[:4]) <= 1999
        assert owner.bank_account == ""


def test_animals_per_registration_and_breeds_match_species():
    registrations = generate_sample_registrations(rng=random.Random(4), now=NOW)

    for r in registrations:
        expected = {1} if "-user-" in r.id else {1, 2}
        assert len(r.animals) in expected
        for animal in r.animals:
            assert animal.photos == []
            if animal.ai_result.succeeded:
                assert animal.ai_result.breed_name in breeds_for(animal.species)
            if animal.age_unit == "Years":
                assert 1 <= int(animal.age_value) <= 8
            else:
                assert 6 <= int(animal.age_value) <= 11


def test_ai_outcome_shapes():
    generator = SampleDataGenerator(rng=random.Random(5), now=NOW)
    results = [generator.ai_result("Cattle", "Gir") for _ in range(500)]

    failed = [r for r in results if r.error]
    low = [r for r in results if not r.error and r.top_candidates]
    confident = [r for r in results if not r.error and not r.top_candidates]

    assert failed and low and confident
    assert all(r.breed_name == "Unknown" and r.confidence == 0 for r in failed)
    assert all(75 <= r.confidence <= 99 and r.breed_name == "Gir" for r in confident)
    for r in low:
        assert 50 <= r.confidence <= 73
        assert r.is_user_verified is True
        assert len(r.top_candidates) == 3
        assert sum(c.confidence_percentage for c in r.top_candidates) == 100
        assert r.breed_name in {c.breed_name for c in r.top_candidates}


def test_same_seed_is_reproducible():
    first = generate_sample_registrations(rng=random.Random(9), now=NOW)
    second = generate_sample_registrations(rng=random.Random(9), now=NOW)

    assert [r.to_dict() for r in first] == [r.to_dict() for r in second]
