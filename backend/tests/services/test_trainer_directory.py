"""Trainer Directory — listed by name, unique emails, missing ids are 404s."""

import pytest

from app.core.errors import InvalidInputError, ResourceNotFoundError
from app.services.trainer_directory import TrainerDirectory


async def test_create_and_list_by_name(stores):
    directory = TrainerDirectory(stores)
    await directory.create("Grace", "grace@example.com", "Containers")
    alan = await directory.create("Alan", "alan@example.com")

    trainers = await directory.list_all()

    assert [t.name for t in trainers] == ["Alan", "Grace"]
    assert trainers[0].id == alan.id
    assert trainers[0].is_active is True
    assert trainers[1].expertise == "Containers"


async def test_create_rejects_duplicate_email(stores):
    directory = TrainerDirectory(stores)
    await directory.create("Grace", "grace@example.com")

    with pytest.raises(InvalidInputError):
        await directory.create("Grace H.", "grace@example.com")
    assert len(await directory.list_all()) == 1


async def test_get_missing_trainer_is_not_found(stores):
    directory = TrainerDirectory(stores)
    created = await directory.create("Grace", "grace@example.com")

    assert (await directory.get(created.id)).email == "grace@example.com"
    with pytest.raises(ResourceNotFoundError):
        await directory.get(999)
