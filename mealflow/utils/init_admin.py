import logging

from fastapi import FastAPI
from sqlalchemy import select

from mealflow.core import settings
from mealflow.core.settings.app import AppSettings
from mealflow.models.user import RoleEnum, User

logger = logging.getLogger(__name__)


async def init_admin(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Create the configured admin account, or promote it if it already exists."""
    app_settings = app_settings or settings
    if not app_settings.admin_email or app_settings.admin_password is None:
        logger.info("No admin account configured, skipping")
        return

    async with app.state.pool() as session:
        result = await session.execute(select(User).filter_by(email=app_settings.admin_email))
        user = result.scalars().first()

        if user is None:
            user = User(
                name=app_settings.admin_name,
                email=app_settings.admin_email,
                role=RoleEnum.ADMIN,
            )
            user.change_password(app_settings.admin_password.get_secret_value())
            session.add(user)
            logger.info(f"Admin account {app_settings.admin_email} created")
        elif user.role != RoleEnum.ADMIN:
            user.role = RoleEnum.ADMIN
            logger.info(f"User {app_settings.admin_email} promoted to admin")

        await session.commit()
