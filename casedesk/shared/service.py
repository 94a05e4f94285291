import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from casedesk.exceptions import StoreError

logger = logging.getLogger(__name__)


class BaseService:
    """Holds the request session and turns driver failures into StoreError."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _execute(self, statement, operation: str):
        try:
            return await self.db.execute(statement)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Database statement failed during {operation}")
            raise StoreError(operation) from e

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Commit failed during {operation}")
            raise StoreError(operation) from e
