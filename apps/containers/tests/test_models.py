import pytest
from apps.containers.models import (
    ALLOWED_TRANSITIONS,
    Container,
    ContainerStatus,
    statuses_leading_to,
)


# =============================================================================
# Status transitions
# =============================================================================

class TestTransitionTable:

    def test_every_status_has_an_entry(self):
        assert set(ALLOWED_TRANSITIONS) == set(ContainerStatus)

    def test_returned_is_terminal(self):
        assert ALLOWED_TRANSITIONS[ContainerStatus.RETURNED] == set()

    def test_statuses_leading_to_returned(self):
        assert set(statuses_leading_to(ContainerStatus.RETURNED)) == {
            ContainerStatus.ACTIVE,
            ContainerStatus.LOST,
            ContainerStatus.DAMAGED,
        }

    @pytest.mark.parametrize('target', ['lost', 'damaged'])
    def test_only_active_leads_to_reports(self, target):
        assert statuses_leading_to(target) == [ContainerStatus.ACTIVE]

    def test_nothing_leads_back_to_available(self):
        assert statuses_leading_to(ContainerStatus.AVAILABLE) == []

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            statuses_leading_to('stolen')


class TestCanTransitionTo:

    @pytest.mark.parametrize('current, new_status, allowed', [
        ('available', 'active', True),
        ('available', 'returned', False),
        ('active', 'returned', True),
        ('active', 'lost', True),
        ('active', 'damaged', True),
        ('active', 'available', False),
        ('lost', 'returned', True),
        ('lost', 'damaged', False),
        ('damaged', 'returned', True),
        ('damaged', 'active', False),
        ('returned', 'active', False),
        ('returned', 'returned', False),
    ])
    def test_transitions(self, current, new_status, allowed):
        container = Container(status=current)

        assert container.can_transition_to(new_status) is allowed


# =============================================================================
# Usage helpers
# =============================================================================

@pytest.mark.django_db
class TestUsageHelpers:

    def test_fresh_container(self, container):
        assert not container.is_registered
        assert container.remaining_uses == 3
        assert not container.has_reached_max_uses

    def test_registered_container(self, registered_container):
        assert registered_container.is_registered

    def test_at_max_uses(self, registered_container):
        registered_container.uses_count = 3

        assert registered_container.remaining_uses == 0
        assert registered_container.has_reached_max_uses

    def test_remaining_uses_never_negative(self, registered_container):
        registered_container.uses_count = 5

        assert registered_container.remaining_uses == 0
