"""
Unit tests for SampleRegistrationStore (no backend configured).
"""

from src.adapters.repository.sample import SAMPLE_TICKET_NUMBER, SampleRegistrationStore


class TestSampleStore:
    def test_every_email_is_found(self) -> None:
        registration = SampleRegistrationStore().find_by_email("anyone@example.com")

        assert registration is not None
        assert registration.email == "anyone@example.com"
        assert registration.ticket_number == SAMPLE_TICKET_NUMBER == 1234

    def test_ids_are_fresh_each_call(self) -> None:
        store = SampleRegistrationStore()

        ids = {store.find_by_email("same@example.com").id for _ in range(5)}

        assert len(ids) == 5

    def test_custom_ticket_number(self) -> None:
        assert SampleRegistrationStore(ticket_number=99).find_by_email("a@example.com").ticket_number == 99

    def test_create_returns_placeholder(self) -> None:
        result = SampleRegistrationStore().create_with_sequence("a@example.com")

        assert result.created is True
        assert result.registration.ticket_number == SAMPLE_TICKET_NUMBER

    def test_created_at_is_epoch_millis(self) -> None:
        registration = SampleRegistrationStore().find_by_email("a@example.com")
        # After 2020-01-01 in milliseconds
        assert registration.created_at > 1_577_836_800_000

    def test_ping_is_noop(self) -> None:
        assert SampleRegistrationStore().ping() is None
        assert SampleRegistrationStore.backend == "sample"
