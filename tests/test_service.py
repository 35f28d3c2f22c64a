"""Tests for service layer."""

from datetime import datetime, timezone

import pytest

from shortage.errors import NotFoundError, UnprocessableInputError
from shortage.models import Caller

ALICE = Caller(owner=1)
BOB = Caller(owner=2)


class TestShortenerService:
    """Test the service between handlers and registry."""

    def test_register_generates_name(self, service, sample_urls):
        """Registering without a name assigns a random one."""
        name = service.register(ALICE, sample_urls[0])

        assert len(name) == 8
        assert service.resolve(name) == sample_urls[0]

    def test_register_blank_name_generates_one(self, service, sample_urls):
        """Blank form fields count as absent."""
        name = service.register(ALICE, sample_urls[0], name="   ", expiration="", max_uses="")

        assert len(name) == 8
        [(listed, record)] = service.list_links(ALICE)
        assert listed == name
        assert record.expiration is None
        assert record.max_uses is None

    def test_register_with_explicit_name(self, service, sample_urls):
        name = service.register(ALICE, sample_urls[2], name="abc")

        assert name == "abc"
        assert service.resolve("abc") == sample_urls[2]

    def test_register_explicit_name_overwrites(self, service, sample_urls):
        service.register(ALICE, sample_urls[0], name="abc")
        service.register(BOB, sample_urls[1], name="abc")

        assert service.resolve("abc") == sample_urls[1]
        assert service.list_links(ALICE) == []

    def test_register_records_owner_and_limits(self, service, sample_urls):
        service.register(
            ALICE,
            sample_urls[0],
            name="limited",
            expiration="2030-01-02T03:04",
            max_uses="7",
        )

        [(_, record)] = service.list_links(ALICE)
        assert record.owner == 1
        assert record.uses == 0
        assert record.max_uses == 7
        assert record.expiration == datetime(2030, 1, 2, 3, 4, tzinfo=timezone.utc)

    def test_register_accepts_datetime_and_int(self, service, sample_urls):
        expiration = datetime(2030, 1, 1, 12, 0)

        service.register(ALICE, sample_urls[0], name="typed", expiration=expiration, max_uses=3)

        [(_, record)] = service.list_links(ALICE)
        assert record.expiration == datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert record.max_uses == 3

    @pytest.mark.parametrize("target", ["not-a-url", "ftp://example.com/file", ""])
    def test_register_invalid_target(self, service, target):
        with pytest.raises(UnprocessableInputError, match="Invalid URL"):
            service.register(ALICE, target)

    @pytest.mark.parametrize("name", ["has space", "a/b", "list", "LOGIN", "x" * 65])
    def test_register_invalid_name(self, service, sample_urls, name):
        with pytest.raises(UnprocessableInputError, match="Invalid short name"):
            service.register(ALICE, sample_urls[0], name=name)

    def test_register_bad_expiration(self, service, sample_urls):
        with pytest.raises(UnprocessableInputError, match="Could not parse expiration"):
            service.register(ALICE, sample_urls[0], expiration="next tuesday")

    @pytest.mark.parametrize("max_uses", ["-1", "1.5", "lots", -3, "\u00b2", "\u0663", "9" * 5000])
    def test_register_bad_max_uses(self, service, sample_urls, max_uses):
        with pytest.raises(UnprocessableInputError, match="max_uses"):
            service.register(ALICE, sample_urls[0], max_uses=max_uses)

    def test_invalid_input_registers_nothing(self, service, sample_urls):
        with pytest.raises(UnprocessableInputError):
            service.register(ALICE, sample_urls[0], name="abc", max_uses="x")

        assert service.health() == {"links": 0}

    def test_edit_requires_name(self, service, sample_urls):
        with pytest.raises(UnprocessableInputError, match="field `name` is required"):
            service.edit(ALICE, None, sample_urls[0])

        with pytest.raises(UnprocessableInputError, match="field `name` is required"):
            service.edit(ALICE, "", sample_urls[0])

    def test_edit_preserves_uses(self, service, sample_urls):
        service.register(ALICE, sample_urls[0], name="abc", max_uses="10")
        service.resolve("abc")

        record = service.edit(ALICE, "abc", sample_urls[1], max_uses="")

        assert record.target == sample_urls[1]
        assert record.uses == 1
        assert record.max_uses is None

    def test_edit_not_owned(self, service, sample_urls):
        service.register(ALICE, sample_urls[0], name="abc")

        with pytest.raises(NotFoundError):
            service.edit(BOB, "abc", sample_urls[1])

    def test_remove(self, service, sample_urls):
        service.register(ALICE, sample_urls[0], name="abc")

        with pytest.raises(NotFoundError):
            service.remove(BOB, "abc")

        service.remove(ALICE, "abc")
        with pytest.raises(NotFoundError):
            service.resolve("abc")

    def test_health(self, service, sample_urls):
        assert service.health() == {"links": 0}

        service.register(ALICE, sample_urls[0])
        service.register(BOB, sample_urls[1])

        assert service.health() == {"links": 2}
