"""Unit tests for GroupRepository with a mocked session."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from directory.domain.aggregates import Group
from directory.domain.records import GroupRecord, MergeSummary
from directory.domain.value_objects import IntegrationId
from directory.infrastructure.group_repository import GroupRepository
from directory.infrastructure.models import GroupModel
from directory.ports.repositories import IGroupRepository


@pytest.fixture
def mock_session():
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_probe():
    return MagicMock()


@pytest.fixture
def repository(mock_session, mock_probe):
    return GroupRepository(session=mock_session, probe=mock_probe)


class TestGroupRepository:
    def test_implements_protocol(self, repository):
        assert isinstance(repository, IGroupRepository)

    @pytest.mark.asyncio
    async def test_add(self, repository, mock_session, mock_probe):
        group = Group.create_manual(name="Engineering")

        await repository.add(group)

        model = mock_session.add.call_args.args[0]
        assert isinstance(model, GroupModel)
        assert model.name == "Engineering"
        mock_probe.group_saved.assert_called_once_with(group.id.value)

    @pytest.mark.asyncio
    async def test_upsert_empty_batch(self, repository, mock_session):
        summary = await repository.upsert_from_integration(IntegrationId.generate(), [])

        assert summary == MergeSummary()
        mock_session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_upsert_counts(self, repository, mock_session, mock_probe):
        result = MagicMock()
        result.scalars.return_value.all.return_value = [False]
        mock_session.execute.return_value = result
        integration_id = IntegrationId.generate()

        summary = await repository.upsert_from_integration(
            integration_id, [GroupRecord(external_id="g1", name="A")]
        )

        assert summary.updated == 1
        mock_probe.groups_upserted.assert_called_once_with(integration_id.value, 0, 1)
