from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from app.core.enums import UserStatusEnum
from app.modules.profile_fields.schemas import ProfileFieldUpdate
from app.modules.profile_fields.service import ProfileFieldsService
from app.modules.troves.schemas import TroveCreate, TroveUpdate
from app.modules.troves.service import TrovesService
from app.modules.users.schemas import UserCreate, UserUpdate
from app.modules.users.service import UsersService
from app.modules.weapons.schemas import WeaponCreate, WeaponUpdate
from app.modules.weapons.service import WeaponsService
from app.shared.exceptions import ConflictException, NotFoundException
from app.shared.pagination import PageRequest


@dataclass
class FakeUser:
    id: int
    username: str
    email: str
    nickname: str
    avatar: str
    status: int = UserStatusEnum.ACTIVE
    deleted_at: datetime | None = None


@dataclass
class FakeWeapon:
    id: int
    name: str
    level: int = 1
    content: str = ""
    type: int = 1
    story: str = ""
    deleted_at: datetime | None = None


@dataclass
class FakeTrove:
    id: int
    title: str
    description: str = ""
    deleted_at: datetime | None = None


@dataclass
class FakeProfileField:
    id: int
    user_id: int
    field_key: str
    field_name: str
    is_public: bool = False
    description: str = ""


class FakeUsersRepository:
    def __init__(self) -> None:
        self.users: dict[int, FakeUser] = {}

    async def create_user(self, username: str, email: str, nickname: str, avatar: str) -> FakeUser:
        user = FakeUser(
            id=len(self.users) + 1,
            username=username,
            email=email,
            nickname=nickname,
            avatar=avatar,
        )
        self.users[user.id] = user
        return user

    async def get_user_by_id(self, user_id: int) -> FakeUser | None:
        user = self.users.get(user_id)
        if user is None or user.deleted_at is not None:
            return None
        return user

    async def find_by_username_or_email(self, username: str, email: str) -> FakeUser | None:
        for user in self.users.values():
            if user.username == username or user.email == email:
                return user
        return None

    async def list_users(self, page_request: PageRequest) -> tuple[list[FakeUser], int]:
        live = [user for user in self.users.values() if user.deleted_at is None]
        return live[page_request.offset : page_request.offset + page_request.limit], len(live)

    async def update_user(self, user: FakeUser, **changes) -> FakeUser:
        for key, value in changes.items():
            setattr(user, key, value)
        return user

    async def soft_delete_user(self, user: FakeUser) -> None:
        user.deleted_at = datetime.now(UTC)


class FakeWeaponsRepository:
    def __init__(self) -> None:
        self.weapons: dict[int, FakeWeapon] = {}

    async def create_weapon(self, **values) -> FakeWeapon:
        weapon = FakeWeapon(id=len(self.weapons) + 1, **values)
        self.weapons[weapon.id] = weapon
        return weapon

    async def get_weapon_by_id(self, weapon_id: int) -> FakeWeapon | None:
        weapon = self.weapons.get(weapon_id)
        if weapon is None or weapon.deleted_at is not None:
            return None
        return weapon

    async def get_weapon_by_name(self, name: str) -> FakeWeapon | None:
        return next((weapon for weapon in self.weapons.values() if weapon.name == name), None)

    async def update_weapon(self, weapon: FakeWeapon, **changes) -> FakeWeapon:
        for key, value in changes.items():
            setattr(weapon, key, value)
        return weapon

    async def soft_delete_weapon(self, weapon: FakeWeapon) -> None:
        weapon.deleted_at = datetime.now(UTC)


class FakeTrovesRepository:
    def __init__(self) -> None:
        self.troves: dict[int, FakeTrove] = {}

    async def create_trove(self, title: str, description: str) -> FakeTrove:
        trove = FakeTrove(id=len(self.troves) + 1, title=title, description=description)
        self.troves[trove.id] = trove
        return trove

    async def get_trove_by_id(self, trove_id: int) -> FakeTrove | None:
        trove = self.troves.get(trove_id)
        if trove is None or trove.deleted_at is not None:
            return None
        return trove

    async def update_trove(self, trove: FakeTrove, **changes) -> FakeTrove:
        for key, value in changes.items():
            setattr(trove, key, value)
        return trove

    async def soft_delete_trove(self, trove: FakeTrove) -> None:
        trove.deleted_at = datetime.now(UTC)


@dataclass
class FakeProfileFieldsRepository:
    fields: dict[int, FakeProfileField] = field(default_factory=dict)
    deleted: list[int] = field(default_factory=list)

    async def get_field_by_id(self, field_id: int) -> FakeProfileField | None:
        return self.fields.get(field_id)

    async def list_user_fields(
        self,
        user_id: int,
        page_request: PageRequest,
    ) -> tuple[list[FakeProfileField], int]:
        owned = [item for item in self.fields.values() if item.user_id == user_id]
        return owned, len(owned)

    async def update_field(self, profile_field: FakeProfileField, **changes) -> FakeProfileField:
        for key, value in changes.items():
            setattr(profile_field, key, value)
        return profile_field

    async def delete_field(self, profile_field: FakeProfileField) -> None:
        self.deleted.append(profile_field.id)
        self.fields.pop(profile_field.id)


@pytest.mark.asyncio
async def test_create_user_rejects_taken_username_or_email() -> None:
    service = UsersService(FakeUsersRepository())
    await service.create_user(UserCreate(username="alice", email="alice@example.com"))

    with pytest.raises(ConflictException):
        await service.create_user(UserCreate(username="alice", email="other@example.com"))
    with pytest.raises(ConflictException):
        await service.create_user(UserCreate(username="other", email="alice@example.com"))


@pytest.mark.asyncio
async def test_update_user_keeps_unset_fields() -> None:
    service = UsersService(FakeUsersRepository())
    user = await service.create_user(
        UserCreate(username="alice", email="alice@example.com", nickname="Al", avatar="a.png"),
    )

    updated = await service.update_user(user.id, UserUpdate(status=UserStatusEnum.DISABLED))

    assert updated.status == UserStatusEnum.DISABLED
    assert updated.nickname == "Al"
    assert updated.avatar == "a.png"


@pytest.mark.asyncio
async def test_deleted_user_is_not_found_and_not_listed() -> None:
    repository = FakeUsersRepository()
    service = UsersService(repository)
    user = await service.create_user(UserCreate(username="alice", email="alice@example.com"))
    await service.create_user(UserCreate(username="bob", email="bob@example.com"))

    await service.delete_user(user.id)

    with pytest.raises(NotFoundException):
        await service.get_user(user.id)
    items, total = await service.list_users(PageRequest())
    assert total == 1
    assert [item.username for item in items] == ["bob"]


@pytest.mark.asyncio
async def test_weapon_names_are_unique_on_create_and_rename() -> None:
    service = WeaponsService(FakeWeaponsRepository())
    await service.create_weapon(WeaponCreate(name="Excalibur"))
    spear = await service.create_weapon(WeaponCreate(name="Gungnir", level=3))

    with pytest.raises(ConflictException):
        await service.create_weapon(WeaponCreate(name="Excalibur"))
    with pytest.raises(ConflictException):
        await service.update_weapon(spear.id, WeaponUpdate(name="Excalibur"))

    renamed = await service.update_weapon(spear.id, WeaponUpdate(name="Gungnir", story="Odin's spear"))
    assert renamed.level == 3
    assert renamed.story == "Odin's spear"


@pytest.mark.asyncio
async def test_missing_weapon_raises_not_found() -> None:
    service = WeaponsService(FakeWeaponsRepository())

    with pytest.raises(NotFoundException):
        await service.delete_weapon(1)


@pytest.mark.asyncio
async def test_trove_update_and_delete() -> None:
    service = TrovesService(FakeTrovesRepository())
    trove = await service.create_trove(TroveCreate(title="Dragon hoard", description="Gold"))

    updated = await service.update_trove(trove.id, TroveUpdate(description="Gold and gems"))
    assert updated.title == "Dragon hoard"
    assert updated.description == "Gold and gems"

    await service.delete_trove(trove.id)
    with pytest.raises(NotFoundException):
        await service.get_trove(trove.id)


@pytest.mark.asyncio
async def test_profile_fields_listing_requires_existing_user() -> None:
    users = FakeUsersRepository()
    user = await users.create_user("alice", "alice@example.com", "", "")
    fields = FakeProfileFieldsRepository(
        fields={1: FakeProfileField(id=1, user_id=user.id, field_key="hobbies", field_name="Hobbies")},
    )
    service = ProfileFieldsService(fields, users)

    items, total = await service.list_user_fields(user.id, PageRequest())
    assert total == 1
    assert items[0].field_key == "hobbies"

    with pytest.raises(NotFoundException):
        await service.list_user_fields(999, PageRequest())


@pytest.mark.asyncio
async def test_profile_field_update_and_hard_delete() -> None:
    fields = FakeProfileFieldsRepository(
        fields={5: FakeProfileField(id=5, user_id=1, field_key="hobbies", field_name="Hobbies")},
    )
    service = ProfileFieldsService(fields, FakeUsersRepository())

    updated = await service.update_field(5, ProfileFieldUpdate(is_public=True))
    assert updated.is_public is True
    assert updated.field_name == "Hobbies"

    await service.delete_field(5)
    assert fields.deleted == [5]
    with pytest.raises(NotFoundException):
        await service.get_field(5)
