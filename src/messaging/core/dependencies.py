from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from messaging.config import Settings
from messaging.database.session import get_async_session
from messaging.repositories import EntityMapping, MessagingDriver, get_driver


def get_app_settings(request: Request) -> Settings:
    # create_app() stores the Settings it was built with on app.state
    return request.app.state.settings


def get_entity_mapping(request: Request) -> EntityMapping:
    return request.app.state.entity_mapping


async def get_messaging_driver(
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_app_settings),
    mapping: EntityMapping = Depends(get_entity_mapping),
) -> MessagingDriver:
    return get_driver(db, backend=settings.MESSAGING_DRIVER, mapping=mapping)
