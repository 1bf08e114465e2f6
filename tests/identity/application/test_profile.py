"""Application tests for profile updates."""

from identity.user.profile import UpdateProfile
from identity.user.user import User
from protean import current_domain


def _user():
    user = User.register(name="Jane", email="jane@example.com", password_hash="x")
    current_domain.repository_for(User).add(user)
    return user


def test_update_profile_persists_changes():
    user = _user()
    current_domain.process(
        UpdateProfile(user_id=user.id, name="Jane Smith", phone="+1-555-0199"),
        asynchronous=False,
    )

    refreshed = current_domain.repository_for(User).get(user.id)
    assert refreshed.name == "Jane Smith"
    assert refreshed.phone.number == "+1-555-0199"


def test_partial_update_keeps_other_fields():
    user = _user()
    current_domain.process(UpdateProfile(user_id=user.id, phone="+1-555-0100"), asynchronous=False)

    refreshed = current_domain.repository_for(User).get(user.id)
    assert refreshed.name == "Jane"
    assert refreshed.phone.number == "+1-555-0100"
