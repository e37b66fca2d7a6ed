"""Fixtures for profiles and vendors."""

import uuid

import pytest

from umshado.models.profile import Profile
from umshado.models.vendor import Vendor


@pytest.fixture(scope="function")
def setup_couple(db, faker):
    """A couple's profile; its id is the couple's auth user id."""
    profile = Profile(
        id=uuid.uuid4(),
        full_name=faker.name(),
        email=faker.email(),
        role="couple",
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


@pytest.fixture(scope="function")
def setup_vendor(db, faker):
    """A vendor whose id is also the vendor owner's auth user id."""
    vendor_id = uuid.uuid4()
    vendor = Vendor(
        id=vendor_id,
        user_id=vendor_id,
        business_name=f"{faker.last_name()} Photography",
        is_published=False,
    )
    db.add(vendor)
    db.commit()
    db.refresh(vendor)
    return vendor


@pytest.fixture(scope="function")
def setup_stranger(db, faker):
    profile = Profile(id=uuid.uuid4(), full_name=faker.name(), role="couple")
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile
