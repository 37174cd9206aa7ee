import pytest

from pyevchargefinder.drafts import Draft
from pyevchargefinder.exceptions import ValidationError
from pyevchargefinder.models import DEFAULT_FILTER_SETTINGS, DEFAULT_VEHICLE, FilterSettings


def test_confirm_commits_draft() -> None:
    draft = Draft(DEFAULT_FILTER_SETTINGS)
    draft.begin()
    draft.update(distance=30)
    draft.update(networks={"EVgo"})
    assert draft.committed is DEFAULT_FILTER_SETTINGS
    committed = draft.confirm()
    assert committed == FilterSettings(distance=30, networks=frozenset({"EVgo"}))
    assert draft.committed == committed
    assert not draft.editing


def test_cancel_discards_draft() -> None:
    draft = Draft(DEFAULT_VEHICLE)
    draft.begin()
    draft.update(connector_types=frozenset({"CCS2"}))
    assert draft.cancel() is DEFAULT_VEHICLE
    assert draft.draft is None


def test_update_requires_begin() -> None:
    draft = Draft(DEFAULT_FILTER_SETTINGS)
    with pytest.raises(ValidationError):
        draft.update(distance=5)
    with pytest.raises(ValidationError):
        draft.confirm()


def test_begin_restarts_from_committed() -> None:
    draft = Draft(DEFAULT_FILTER_SETTINGS)
    draft.begin()
    draft.update(distance=50)
    assert draft.begin() is DEFAULT_FILTER_SETTINGS
