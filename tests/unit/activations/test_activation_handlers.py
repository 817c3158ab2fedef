"""
Unit tests for the Activation Manager handlers.
"""

import uuid

import pytest

from activations.application.commands.add_activation import AddActivationCommand
from activations.application.commands.remove_activation import RemoveActivationCommand
from activations.application.handlers.activation_handlers import (
    AddActivationHandler,
    ListActivationsHandler,
    RemoveActivationHandler,
)
from activations.application.queries.list_activations import ListActivationsQuery
from activations.domain.activation import Activation
from activations.domain.events import ActivationRemoved, LicenseActivated
from core.domain.exceptions import (
    ActivationNotFoundError,
    LicenseNotFoundError,
    QuotaExceededError,
    ValidationError,
)


class RecordingEventHandler:
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


@pytest.fixture
def published(event_bus):
    recorder = RecordingEventHandler()
    event_bus.subscribe(LicenseActivated, recorder)
    event_bus.subscribe(ActivationRemoved, recorder)
    return recorder.events


@pytest.fixture
def add_handler(memory_activation_repository, event_bus):
    return AddActivationHandler(memory_activation_repository, event_bus)


@pytest.fixture
def remove_handler(memory_license_repository, memory_activation_repository, event_bus):
    return RemoveActivationHandler(
        memory_license_repository, memory_activation_repository, event_bus
    )


@pytest.fixture
def stored_license(memory_license_repository, sample_license):
    memory_license_repository.licenses[sample_license.id] = sample_license
    return sample_license


class TestActivationEntity:
    """Tests for Activation domain entity."""

    def test_domain_is_normalized(self):
        activation = Activation.create(uuid.uuid4(), "  Shop.Example.COM ")
        assert str(activation.domain) == "shop.example.com"
        assert activation.ip_address is None

    def test_bad_domain_rejected(self):
        with pytest.raises(ValueError):
            Activation.create(uuid.uuid4(), "not a domain")


class TestAddActivationHandler:
    """Tests for AddActivationHandler."""

    @pytest.mark.asyncio
    async def test_add_activation(self, add_handler, stored_license, published,
                                  memory_license_repository):
        dto = await add_handler.handle(
            AddActivationCommand(
                license_id=stored_license.id, domain="shop.example.com", ip_address="10.0.0.1"
            )
        )

        assert dto.domain == "shop.example.com"
        assert dto.ip_address == "10.0.0.1"
        assert isinstance(published[0], LicenseActivated)
        assert published[0].domain == "shop.example.com"
        license = await memory_license_repository.find_by_id(stored_license.id)
        assert license.activated_on is not None

    @pytest.mark.asyncio
    async def test_quota_reached(self, add_handler, stored_license, memory_activation_repository):
        for domain in ("one.example.com", "two.example.com"):
            await add_handler.handle(AddActivationCommand(stored_license.id, domain))

        with pytest.raises(QuotaExceededError):
            await add_handler.handle(AddActivationCommand(stored_license.id, "three.example.com"))
        assert await memory_activation_repository.count_by_license(stored_license.id) == 2

    @pytest.mark.asyncio
    async def test_same_domain_twice(self, add_handler, stored_license):
        await add_handler.handle(AddActivationCommand(stored_license.id, "shop.example.com"))
        with pytest.raises(ValidationError, match="already activated"):
            await add_handler.handle(AddActivationCommand(stored_license.id, "shop.example.com"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("domain", [None, "", "   ", "no_tld"])
    async def test_bad_domain(self, add_handler, stored_license, domain):
        with pytest.raises(ValidationError):
            await add_handler.handle(AddActivationCommand(stored_license.id, domain))

    @pytest.mark.asyncio
    async def test_bad_ip_address(self, add_handler, stored_license):
        with pytest.raises(ValidationError, match="Invalid IP address"):
            await add_handler.handle(
                AddActivationCommand(stored_license.id, "shop.example.com", ip_address="nope")
            )

    @pytest.mark.asyncio
    async def test_unknown_license(self, add_handler):
        with pytest.raises(LicenseNotFoundError):
            await add_handler.handle(AddActivationCommand(uuid.uuid4(), "shop.example.com"))

    @pytest.mark.asyncio
    async def test_other_customers_license(self, add_handler, stored_license):
        with pytest.raises(LicenseNotFoundError):
            await add_handler.handle(
                AddActivationCommand(
                    stored_license.id, "shop.example.com", customer_id=uuid.uuid4()
                )
            )


class TestRemoveActivationHandler:
    """Tests for RemoveActivationHandler."""

    @pytest.mark.asyncio
    async def test_remove_frees_a_slot(self, add_handler, remove_handler, stored_license, published):
        first = await add_handler.handle(AddActivationCommand(stored_license.id, "a.example.com"))
        await add_handler.handle(AddActivationCommand(stored_license.id, "b.example.com"))

        await remove_handler.handle(RemoveActivationCommand(stored_license.id, first.id))
        added = await add_handler.handle(AddActivationCommand(stored_license.id, "c.example.com"))

        assert added.domain == "c.example.com"
        assert any(isinstance(event, ActivationRemoved) for event in published)

    @pytest.mark.asyncio
    async def test_remove_unknown_activation(self, remove_handler, stored_license):
        with pytest.raises(ActivationNotFoundError):
            await remove_handler.handle(RemoveActivationCommand(stored_license.id, uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_remove_from_unknown_license(self, remove_handler):
        with pytest.raises(LicenseNotFoundError):
            await remove_handler.handle(RemoveActivationCommand(uuid.uuid4(), uuid.uuid4()))


class TestListActivationsHandler:
    """Tests for ListActivationsHandler."""

    @pytest.mark.asyncio
    async def test_list(self, add_handler, stored_license, memory_license_repository,
                        memory_activation_repository):
        await add_handler.handle(AddActivationCommand(stored_license.id, "a.example.com"))
        handler = ListActivationsHandler(memory_license_repository, memory_activation_repository)

        result = await handler.handle(ListActivationsQuery(license_id=stored_license.id))

        assert result.max_activations == 2
        assert [a.domain for a in result.activations] == ["a.example.com"]
