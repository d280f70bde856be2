"""Seed idempotent demo data for local/non-production environments."""

from __future__ import annotations

import argparse
import asyncio
import json
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import SessionLocal, close_engine
from app.core.enums import FieldTypeEnum
from app.modules.field_templates.models import ProfileFieldTemplate
from app.modules.field_templates.repository import FieldTemplatesRepository
from app.modules.field_templates.schemas import FieldTemplateCreate
from app.modules.field_templates.service import FieldTemplatesService
from app.modules.profile_fields.repository import ProfileFieldsRepository
from app.modules.users.models import User
from app.modules.users.repository import UsersRepository

DEMO_USERS = (
    ("demo-alice", "alice@fieldkit.dev", "Alice"),
    ("demo-bob", "bob@fieldkit.dev", "Bob"),
)

DEMO_TEMPLATES = (
    FieldTemplateCreate(
        field_key="education",
        field_name="Education",
        field_type=FieldTypeEnum.SINGLE_CHOICE,
        is_searchable=True,
        options=json.dumps(
            {"options": [{"key": "bachelor", "label": "Bachelor"}, {"key": "master", "label": "Master"}]},
        ),
        display_order=10,
        description="Highest degree",
        default_unlock_rules=json.dumps({"unlock_type": "CHAT", "conditions": {"message_count": 50}}),
        category="background",
    ),
    FieldTemplateCreate(
        field_key="hometown",
        field_name="Hometown",
        field_type=FieldTypeEnum.SINGLE_LINE_TEXT,
        is_public=True,
        display_order=20,
        category="background",
    ),
    FieldTemplateCreate(
        field_key="hobbies",
        field_name="Hobbies",
        field_type=FieldTypeEnum.TAG,
        is_public=True,
        is_searchable=True,
        display_order=10,
        category="interests",
    ),
)


@dataclass(slots=True)
class SeedStats:
    users_created: int = 0
    templates_created: int = 0
    fields_applied: int = 0


async def _ensure_user(session: AsyncSession, *, username: str, email: str, nickname: str) -> tuple[User, bool]:
    user = await session.scalar(select(User).where(User.username == username))
    if user is not None:
        if user.deleted_at is not None:
            user.deleted_at = None
            await session.flush()
        return user, False

    user = await UsersRepository(session).create_user(
        username=username,
        email=email,
        nickname=nickname,
        avatar="",
    )
    return user, True


async def _ensure_templates(service: FieldTemplatesService, session: AsyncSession) -> tuple[list[int], int]:
    template_ids: list[int] = []
    created = 0
    for payload in DEMO_TEMPLATES:
        existing = await session.scalar(
            select(ProfileFieldTemplate).where(ProfileFieldTemplate.field_key == payload.field_key),
        )
        if existing is None:
            existing = await service.create_template(payload)
            created += 1
        template_ids.append(existing.id)
    return template_ids, created


async def _run_seed(*, allow_production: bool) -> SeedStats:
    settings = get_settings()
    app_env = settings.app_env.strip().lower()
    if app_env in {"production", "prod"} and not allow_production:
        raise RuntimeError(
            "Refusing to seed demo data in production. "
            "Re-run with --allow-production only if you are absolutely sure.",
        )

    stats = SeedStats()

    async with SessionLocal() as session:
        try:
            service = FieldTemplatesService(
                FieldTemplatesRepository(session),
                ProfileFieldsRepository(session),
                UsersRepository(session),
            )

            users: list[User] = []
            for username, email, nickname in DEMO_USERS:
                user, created = await _ensure_user(session, username=username, email=email, nickname=nickname)
                users.append(user)
                stats.users_created += int(created)

            template_ids, stats.templates_created = await _ensure_templates(service, session)

            # Re-running is safe: already applied templates come back as failed items.
            for user in users:
                result = await service.apply_templates_to_user(template_ids, user.id)
                stats.fields_applied += result.success_count

            await session.commit()
        except Exception:
            await session.rollback()
            raise

    return stats


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Seed idempotent demo data (users, field templates, applied profile fields).",
    )
    parser.add_argument(
        "--allow-production",
        action="store_true",
        help="Allow seeding even when APP_ENV is production/prod.",
    )
    return parser


def _print_summary(stats: SeedStats) -> None:
    print("Demo seed completed.")
    print(f"- Users created: {stats.users_created}")
    print(f"- Field templates created: {stats.templates_created}")
    print(f"- Profile fields applied: {stats.fields_applied}")


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    try:
        stats = asyncio.run(_run_seed(allow_production=args.allow_production))
    except Exception as exc:
        print(f"Demo seed failed: {exc}")
        return 1
    finally:
        asyncio.run(close_engine())

    _print_summary(stats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
